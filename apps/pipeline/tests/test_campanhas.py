"""
Testes da criação de campanhas e da conclusão de ações

Rodar:
    python manage.py test apps.pipeline.tests.test_campanhas
"""

from unittest.mock import AsyncMock

from django.test import SimpleTestCase

from apps.core.notificacoes import VARIANTE_ERRO, NotificadorMemoria
from apps.core.repositorio import ErroRemoto, RepositorioRemoto
from apps.pipeline.campanhas import alternar_conclusao, anexar_material, criar_campanha


class CriarCampanhaTest(SimpleTestCase):

    async def test_falha_em_uma_acao_nao_desfaz_a_campanha(self):
        repositorio = AsyncMock(spec=RepositorioRemoto)
        chamadas = []

        async def inserir(tabela, valores):
            chamadas.append(tabela)
            if tabela == 'campanhas':
                return {'id': 4, **valores}
            if valores['titulo'] == 'Tour Virtual':
                raise ErroRemoto('falhou')
            return valores

        repositorio.inserir.side_effect = inserir
        notificador = NotificadorMemoria()

        with self.assertLogs('apps.pipeline.campanhas', level='ERROR'):
            campanha = await criar_campanha(repositorio, notificador, {'titulo': 'C'}, 9)

        self.assertEqual(campanha['id'], 4)
        self.assertEqual(chamadas.count('acoes_campanha'), 15)
        self.assertEqual(notificador.notificacoes[0].titulo, 'Campanha criada com sucesso!')

    async def test_falha_na_campanha(self):
        repositorio = AsyncMock(spec=RepositorioRemoto)
        repositorio.inserir.side_effect = ErroRemoto('titulo: obrigatório')
        notificador = NotificadorMemoria()

        self.assertIsNone(await criar_campanha(repositorio, notificador, {}, 9))
        self.assertEqual(repositorio.inserir.await_count, 1)
        self.assertEqual(notificador.notificacoes[0].variante, VARIANTE_ERRO)


class AlternarConclusaoTest(SimpleTestCase):

    async def test_concluir_grava_data(self):
        repositorio = AsyncMock(spec=RepositorioRemoto)
        repositorio.atualizar.return_value = {'id': 1, 'titulo': 'Post Instagram', 'campanha_id': 2}
        notificador = NotificadorMemoria()

        await alternar_conclusao(repositorio, notificador, 1, True)

        _, _, valores = repositorio.atualizar.await_args.args
        self.assertTrue(valores['concluida'])
        self.assertIsNotNone(valores['data_conclusao'])
        self.assertEqual(notificador.notificacoes[0].titulo, 'Ação concluída!')
        self.assertEqual(notificador.notificacoes[0].descricao, 'Post Instagram')

    async def test_falha_notifica_erro(self):
        repositorio = AsyncMock(spec=RepositorioRemoto)
        repositorio.atualizar.side_effect = ErroRemoto('Registro não encontrado ou sem permissão')
        notificador = NotificadorMemoria()

        self.assertIsNone(await alternar_conclusao(repositorio, notificador, 1, False))
        self.assertEqual(notificador.notificacoes[0].titulo, 'Erro ao atualizar ação')


class AnexarMaterialTest(SimpleTestCase):

    async def test_grava_link_e_observacoes(self):
        repositorio = AsyncMock(spec=RepositorioRemoto)
        repositorio.atualizar.return_value = {'id': 3, 'titulo': 'Fotos profissionais', 'campanha_id': 2}
        notificador = NotificadorMemoria()
        valores = {'arquivo_url': None, 'link_externo': 'https://drive.example.com/fotos', 'observacoes': 'Sessão ok'}

        acao = await anexar_material(repositorio, notificador, 3, valores)

        repositorio.atualizar.assert_awaited_once_with('acoes_campanha', 3, valores)
        self.assertEqual(acao['id'], 3)
        self.assertEqual(notificador.notificacoes[0].titulo, 'Material salvo com sucesso!')

    async def test_falha_notifica_erro(self):
        repositorio = AsyncMock(spec=RepositorioRemoto)
        repositorio.atualizar.side_effect = ErroRemoto('link_externo: Informe uma URL válida.')
        notificador = NotificadorMemoria()

        self.assertIsNone(await anexar_material(repositorio, notificador, 3, {'link_externo': 'x'}))
        self.assertEqual(notificador.notificacoes[0].variante, VARIANTE_ERRO)
