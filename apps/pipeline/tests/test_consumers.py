"""
Testes do WebSocket dos quadros

Rodar:
    python manage.py test apps.pipeline.tests.test_consumers
"""

from unittest.mock import patch

from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from apps.core.models import Lead, Usuario
from apps.pipeline.routing import websocket_urlpatterns


class QuadroConsumerTest(TestCase):

    def setUp(self):
        self.corretor = Usuario.objects.create_user('corretor', password='senha123')
        self.lead = Lead.objects.create(nome='Ana', telefone='1', responsavel=self.corretor)

    def communicator(self, caminho, usuario):
        communicator = WebsocketCommunicator(URLRouter(websocket_urlpatterns), caminho)
        communicator.scope['user'] = usuario
        return communicator

    async def test_anonimo_e_rejeitado(self):
        communicator = self.communicator('/ws/pipeline/leads/', AnonymousUser())

        conectado, _ = await communicator.connect()

        self.assertFalse(conectado)

    async def test_quadro_de_acoes_sem_campanha_e_rejeitado(self):
        communicator = self.communicator('/ws/pipeline/acoes/', self.corretor)

        conectado, _ = await communicator.connect()

        self.assertFalse(conectado)

    async def test_estado_inicial_e_movimento(self):
        communicator = self.communicator('/ws/pipeline/leads/', self.corretor)
        conectado, _ = await communicator.connect()
        self.assertTrue(conectado)

        inicial = await communicator.receive_json_from()
        self.assertEqual(inicial['type'], 'estado')
        self.assertEqual([item['id'] for item in inicial['colunas'][0]['itens']], [self.lead.id])

        await communicator.send_json_to({
            'type': 'mover_item', 'item_id': self.lead.id, 'destino': 'visita', 'deslocamento': 50,
        })

        otimista = await communicator.receive_json_from()
        self.assertEqual(otimista['type'], 'estado')
        visita = next(col for col in otimista['colunas'] if col['id'] == 'visita')
        self.assertEqual([item['id'] for item in visita['itens']], [self.lead.id])

        notificacao = await communicator.receive_json_from()
        self.assertEqual(notificacao['type'], 'notificacao')
        self.assertEqual(notificacao['titulo'], 'Lead movido com sucesso!')

        await communicator.disconnect()

    async def test_ping(self):
        communicator = self.communicator('/ws/pipeline/captacoes/', self.corretor)
        await communicator.connect()
        await communicator.receive_json_from()

        await communicator.send_json_to({'type': 'ping'})

        resposta = await communicator.receive_json_from()
        self.assertEqual(resposta['type'], 'pong')
        await communicator.disconnect()

    async def test_mensagem_que_nao_e_objeto_e_ignorada(self):
        communicator = self.communicator('/ws/pipeline/leads/', self.corretor)
        await communicator.connect()
        await communicator.receive_json_from()

        await communicator.send_json_to([1, 2])
        await communicator.send_json_to('mover_item')
        await communicator.send_json_to({'type': 'ping'})

        resposta = await communicator.receive_json_from()
        self.assertEqual(resposta['type'], 'pong')
        await communicator.disconnect()

    async def test_acesso_ao_banco_recicla_conexoes(self):
        communicator = self.communicator('/ws/pipeline/leads/', self.corretor)

        with patch('channels.db.close_old_connections') as fechar_conexoes:
            await communicator.connect()
            await communicator.receive_json_from()

        self.assertTrue(fechar_conexoes.called)
        await communicator.disconnect()
