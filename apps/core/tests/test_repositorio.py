"""
Testes do repositório sobre o ORM

Escopo por usuário, upsert idempotente e tradução de erros em ErroRemoto.

Rodar:
    python manage.py test apps.core.tests.test_repositorio
"""

from decimal import Decimal

from asgiref.sync import async_to_sync
from django.test import TestCase

from apps.core.models import Imovel, Lead, LeadImovel, PosicaoCanvas, Usuario
from apps.core.repositorio import ErroRemoto, RepositorioDjango


class RepositorioTestCase(TestCase):

    def setUp(self):
        self.corretor = Usuario.objects.create_user('corretor', password='senha123', tipo='corretor')
        self.outro = Usuario.objects.create_user('outro', password='senha123', tipo='corretor')
        self.gerente = Usuario.objects.create_user('gerente', password='senha123', tipo='gerente')

        self.lead = Lead.objects.create(nome='Ana', email='ana@example.com', responsavel=self.corretor)
        self.lead_outro = Lead.objects.create(nome='Bia', telefone='1199999', responsavel=self.outro)

    def executar(self, usuario, operacao, *args, **kwargs):
        repositorio = RepositorioDjango(usuario)
        return async_to_sync(getattr(repositorio, operacao))(*args, **kwargs)


class BuscarTest(RepositorioTestCase):

    def test_corretor_ve_apenas_os_proprios(self):
        linhas = self.executar(self.corretor, 'buscar', 'leads')

        self.assertEqual([linha['id'] for linha in linhas], [self.lead.id])
        self.assertEqual(linhas[0]['responsavel_id'], self.corretor.id)

    def test_gerente_ve_todos(self):
        linhas = self.executar(self.gerente, 'buscar', 'leads', ordenar_por='id')

        self.assertEqual([linha['id'] for linha in linhas], [self.lead.id, self.lead_outro.id])

    def test_filtros(self):
        linhas = self.executar(self.gerente, 'buscar', 'leads', {'nome': 'Bia'})

        self.assertEqual(len(linhas), 1)

    def test_tabela_desconhecida(self):
        with self.assertRaises(ErroRemoto) as ctx:
            self.executar(self.gerente, 'buscar', 'usuarios')
        self.assertEqual(ctx.exception.codigo, 'tabela')


class AtualizarTest(RepositorioTestCase):

    def test_atualiza_etapa(self):
        linha = self.executar(self.corretor, 'atualizar', 'leads', self.lead.id, {'status': 'visita'})

        self.assertEqual(linha['status'], 'visita')
        self.lead.refresh_from_db()
        self.assertEqual(self.lead.status, 'visita')

    def test_etapa_fora_do_conjunto_e_recusada(self):
        with self.assertRaises(ErroRemoto) as ctx:
            self.executar(self.corretor, 'atualizar', 'leads', self.lead.id, {'status': 'perdido'})

        self.assertEqual(ctx.exception.codigo, 'validacao')
        self.lead.refresh_from_db()
        self.assertEqual(self.lead.status, 'novo')

    def test_registro_de_outro_corretor(self):
        with self.assertRaises(ErroRemoto) as ctx:
            self.executar(self.corretor, 'atualizar', 'leads', self.lead_outro.id, {'status': 'visita'})

        self.assertEqual(ctx.exception.mensagem, 'Registro não encontrado ou sem permissão')

    def test_id_invalido(self):
        with self.assertRaises(ErroRemoto):
            self.executar(self.corretor, 'atualizar', 'leads', 'lead-abc', {'status': 'visita'})


class InserirTest(RepositorioTestCase):

    def test_dono_e_preenchido(self):
        linha = self.executar(self.corretor, 'inserir', 'imoveis', {
            'titulo': 'Casa', 'localizacao': 'Centro', 'preco': Decimal('100000'),
        })

        self.assertEqual(linha['criado_por_id'], self.corretor.id)

    def test_conexao_com_lead_de_outro_corretor(self):
        imovel = Imovel.objects.create(titulo='Casa', localizacao='Centro', preco=1, criado_por=self.corretor)

        with self.assertRaises(ErroRemoto) as ctx:
            self.executar(self.corretor, 'inserir', 'lead_imoveis', {
                'lead_id': self.lead_outro.id, 'imovel_id': imovel.id,
            })

        self.assertEqual(ctx.exception.codigo, 'permissao')
        self.assertFalse(LeadImovel.objects.exists())

    def test_conexao_duplicada(self):
        imovel = Imovel.objects.create(titulo='Casa', localizacao='Centro', preco=1, criado_por=self.corretor)
        LeadImovel.objects.create(lead=self.lead, imovel=imovel)

        with self.assertRaises(ErroRemoto):
            self.executar(self.corretor, 'inserir', 'lead_imoveis', {
                'lead_id': self.lead.id, 'imovel_id': imovel.id,
            })

        self.assertEqual(LeadImovel.objects.count(), 1)


class UpsertTest(RepositorioTestCase):

    def test_upsert_repetido_mantem_uma_linha_com_a_ultima_posicao(self):
        chave = {'usuario_id': self.corretor.id, 'tipo_no': 'lead', 'id_no': str(self.lead.id)}

        self.executar(self.corretor, 'upsert', 'posicoes_canvas', chave, {'posicao_x': 10.0, 'posicao_y': 20.0})
        self.executar(self.corretor, 'upsert', 'posicoes_canvas', chave, {'posicao_x': 30.0, 'posicao_y': 40.0})

        posicoes = PosicaoCanvas.objects.filter(usuario=self.corretor)
        self.assertEqual(posicoes.count(), 1)
        self.assertEqual((posicoes[0].posicao_x, posicoes[0].posicao_y), (30.0, 40.0))

    def test_posicao_de_outro_usuario_e_recusada_mesmo_para_gerente(self):
        chave = {'usuario_id': self.corretor.id, 'tipo_no': 'lead', 'id_no': '1'}

        with self.assertRaises(ErroRemoto) as ctx:
            self.executar(self.gerente, 'upsert', 'posicoes_canvas', chave, {'posicao_x': 1.0, 'posicao_y': 1.0})

        self.assertEqual(ctx.exception.codigo, 'permissao')
        self.assertFalse(PosicaoCanvas.objects.exists())

    def test_gerente_nao_ve_posicoes_alheias(self):
        PosicaoCanvas.objects.create(usuario=self.corretor, tipo_no='lead', id_no='1')

        self.assertEqual(self.executar(self.gerente, 'buscar', 'posicoes_canvas', ordenar_por=None), [])


class RemoverTest(RepositorioTestCase):

    def test_remove_conexao(self):
        imovel = Imovel.objects.create(titulo='Casa', localizacao='Centro', preco=1, criado_por=self.corretor)
        LeadImovel.objects.create(lead=self.lead, imovel=imovel)

        removidos = self.executar(self.corretor, 'remover', 'lead_imoveis', {
            'lead_id': self.lead.id, 'imovel_id': imovel.id,
        })

        self.assertEqual(removidos, 1)
        self.assertFalse(LeadImovel.objects.exists())

    def test_nao_remove_de_outro_corretor(self):
        removidos = self.executar(self.corretor, 'remover', 'leads', {'pk': self.lead_outro.id})

        self.assertEqual(removidos, 0)
        self.assertTrue(Lead.objects.filter(pk=self.lead_outro.id).exists())

    def test_remocao_sem_filtro(self):
        with self.assertRaises(ErroRemoto) as ctx:
            self.executar(self.gerente, 'remover', 'leads', {})
        self.assertEqual(ctx.exception.codigo, 'filtro')
