"""
Testes do WebSocket do canvas

Rodar:
    python manage.py test apps.conexoes.tests.test_consumers
"""

from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from apps.conexoes.routing import websocket_urlpatterns
from apps.core.models import Imovel, Lead, LeadImovel, Usuario


class CanvasConsumerTest(TestCase):

    def setUp(self):
        self.corretor = Usuario.objects.create_user('corretor', password='senha123')
        self.lead = Lead.objects.create(nome='Ana Souza', telefone='1', responsavel=self.corretor)
        self.imovel = Imovel.objects.create(titulo='Casa', localizacao='Centro', preco=1, criado_por=self.corretor)

    def communicator(self, usuario):
        communicator = WebsocketCommunicator(URLRouter(websocket_urlpatterns), '/ws/conexoes/')
        communicator.scope['user'] = usuario
        return communicator

    async def test_anonimo_e_rejeitado(self):
        conectado, _ = await self.communicator(AnonymousUser()).connect()

        self.assertFalse(conectado)

    async def test_conectar_lead_e_imovel(self):
        communicator = self.communicator(self.corretor)
        conectado, _ = await communicator.connect()
        self.assertTrue(conectado)

        inicial = await communicator.receive_json_from()
        self.assertEqual(
            sorted(no['id'] for no in inicial['nos']),
            sorted([f'lead-{self.lead.id}', f'imovel-{self.imovel.id}']),
        )

        await communicator.send_json_to({
            'type': 'conectar', 'origem': f'imovel-{self.imovel.id}', 'destino': f'lead-{self.lead.id}',
        })

        estado = await communicator.receive_json_from()
        self.assertEqual(estado['arestas'][0]['id'], f'edge-{self.lead.id}-{self.imovel.id}')

        notificacao = await communicator.receive_json_from()
        self.assertEqual(notificacao['descricao'], 'Conexão criada com sucesso')

        await communicator.disconnect()

    async def test_mensagens_malformadas_nao_derrubam_a_sessao(self):
        conexao = await LeadImovel.objects.acreate(lead=self.lead, imovel=self.imovel)
        communicator = self.communicator(self.corretor)
        await communicator.connect()
        await communicator.receive_json_from()

        await communicator.send_json_to([1, 2])
        await communicator.send_json_to({
            'type': 'remover_arestas', 'arestas': f'edge-{self.lead.id}-{self.imovel.id}',
        })
        await communicator.send_json_to({'type': 'ping'})

        resposta = await communicator.receive_json_from()
        self.assertEqual(resposta['type'], 'pong')
        self.assertTrue(await LeadImovel.objects.filter(pk=conexao.pk).aexists())
        await communicator.disconnect()
