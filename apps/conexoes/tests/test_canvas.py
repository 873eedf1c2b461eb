"""
Testes do canvas de conexões (sem banco)

Rodar:
    python manage.py test apps.conexoes.tests.test_canvas
"""

from unittest.mock import AsyncMock

from django.test import SimpleTestCase

from apps.conexoes.canvas import (
    Aresta, GrafoCanvas, LayoutCanvas, id_aresta, separar_id_no
)
from apps.core.notificacoes import NotificadorMemoria
from apps.core.repositorio import ErroRemoto, RepositorioRemoto


def repositorio_falso(leads=(), imoveis=(), posicoes=(), conexoes=()):
    tabelas = {
        'leads': list(leads),
        'imoveis': list(imoveis),
        'posicoes_canvas': list(posicoes),
        'lead_imoveis': list(conexoes),
    }

    async def buscar(tabela, filtros=None, ordenar_por='-criado_em'):
        return [dict(linha) for linha in tabelas[tabela]]

    repositorio = AsyncMock(spec=RepositorioRemoto)
    repositorio.buscar.side_effect = buscar
    return repositorio


LEADS = [{'id': 1, 'nome': 'Ana Souza'}, {'id': 2, 'nome': 'Bruno Lima'}]
IMOVEIS = [{'id': 10, 'titulo': 'Apto Centro', 'preco': 350000}]


class CarregarCanvasTest(SimpleTestCase):

    async def test_sem_posicoes_gravadas_usa_layout_padrao(self):
        grafo = GrafoCanvas(repositorio_falso(LEADS, IMOVEIS), NotificadorMemoria(), 7, LayoutCanvas())

        await grafo.carregar()

        posicoes = {no_id: (no.x, no.y) for no_id, no in grafo.nos.items()}
        self.assertEqual(posicoes, {
            'lead-1': (100, 100),
            'lead-2': (100, 220),
            'imovel-10': (400, 100),
        })

    async def test_posicao_gravada_prevalece(self):
        posicoes = [{'tipo_no': 'lead', 'id_no': '2', 'posicao_x': 15.5, 'posicao_y': 30.0}]
        grafo = GrafoCanvas(repositorio_falso(LEADS, IMOVEIS, posicoes), NotificadorMemoria(), 7, LayoutCanvas())

        await grafo.carregar()

        self.assertEqual((grafo.nos['lead-2'].x, grafo.nos['lead-2'].y), (15.5, 30.0))
        self.assertEqual((grafo.nos['lead-1'].x, grafo.nos['lead-1'].y), (100, 100))

    async def test_dados_de_exibicao_dos_nos(self):
        grafo = GrafoCanvas(repositorio_falso(LEADS, IMOVEIS), NotificadorMemoria(), 7, LayoutCanvas())

        await grafo.carregar()

        self.assertEqual(grafo.nos['lead-1'].dados['iniciais'], 'AS')
        self.assertTrue(grafo.nos['lead-1'].dados['cor'].startswith('#'))
        self.assertEqual(grafo.nos['imovel-10'].dados['preco_formatado'], 'R$ 350.000,00')

    async def test_conexao_com_ponta_fora_do_canvas_e_ignorada(self):
        conexoes = [{'lead_id': 1, 'imovel_id': 10}, {'lead_id': 99, 'imovel_id': 10}]
        grafo = GrafoCanvas(repositorio_falso(LEADS, IMOVEIS, conexoes=conexoes), NotificadorMemoria(), 7)

        estado = await grafo.carregar()

        self.assertEqual(
            estado['arestas'],
            [{'id': 'edge-1-10', 'origem': 'lead-1', 'destino': 'imovel-10'}],
        )

    async def test_falha_ao_carregar_notifica(self):
        repositorio = repositorio_falso()
        repositorio.buscar.side_effect = ErroRemoto('timeout')
        notificador = NotificadorMemoria()
        grafo = GrafoCanvas(repositorio, notificador, 7)

        estado = await grafo.carregar()

        self.assertEqual(estado['nos'], [])
        self.assertEqual(notificador.notificacoes[0].descricao, 'Erro ao carregar dados do canvas')

    async def test_erro_inesperado_ao_carregar_esvazia_e_notifica(self):
        repositorio = repositorio_falso(leads=LEADS)
        repositorio.buscar.side_effect = RuntimeError('conexão perdida')
        notificador = NotificadorMemoria()
        grafo = GrafoCanvas(repositorio, notificador, 7)

        with self.assertLogs('apps.conexoes.canvas', level='ERROR'):
            estado = await grafo.carregar()

        self.assertEqual(estado['nos'], [])
        self.assertEqual(estado['arestas'], [])
        self.assertEqual(notificador.notificacoes[0].variante, 'destructive')


class AutoLayoutTest(SimpleTestCase):

    async def test_reposiciona_sem_chamadas_remotas(self):
        posicoes = [
            {'tipo_no': 'lead', 'id_no': '1', 'posicao_x': 900, 'posicao_y': 900},
            {'tipo_no': 'imovel', 'id_no': '10', 'posicao_x': 5, 'posicao_y': 5},
        ]
        repositorio = repositorio_falso(LEADS, IMOVEIS, posicoes)
        grafo = GrafoCanvas(repositorio, NotificadorMemoria(), 7, LayoutCanvas())
        await grafo.carregar()
        repositorio.reset_mock()

        estado = await grafo.auto_layout()

        posicoes = {no['id']: (no['x'], no['y']) for no in estado['nos']}
        self.assertEqual(posicoes, {
            'lead-1': (100, 100),
            'lead-2': (100, 220),
            'imovel-10': (400, 100),
        })
        self.assertEqual(repositorio.method_calls, [])


class PosicaoTest(SimpleTestCase):

    async def test_fim_do_arraste_grava_por_usuario_tipo_e_id(self):
        repositorio = repositorio_falso(LEADS, IMOVEIS)
        grafo = GrafoCanvas(repositorio, NotificadorMemoria(), 7)
        await grafo.carregar()

        salvo = await grafo.salvar_posicao('imovel-10', 320, 48.5)

        self.assertTrue(salvo)
        repositorio.upsert.assert_awaited_once_with(
            'posicoes_canvas',
            {'usuario_id': 7, 'tipo_no': 'imovel', 'id_no': '10'},
            {'posicao_x': 320.0, 'posicao_y': 48.5},
        )
        self.assertEqual((grafo.nos['imovel-10'].x, grafo.nos['imovel-10'].y), (320.0, 48.5))

    async def test_falha_ao_gravar_notifica(self):
        repositorio = repositorio_falso()
        repositorio.upsert.side_effect = ErroRemoto('falhou')
        notificador = NotificadorMemoria()
        grafo = GrafoCanvas(repositorio, notificador, 7)

        self.assertFalse(await grafo.salvar_posicao('lead-1', 1, 2))
        self.assertEqual(notificador.notificacoes[0].descricao, 'Erro ao salvar posição do card')

    async def test_no_invalido(self):
        grafo = GrafoCanvas(repositorio_falso(), NotificadorMemoria(), 7)

        with self.assertRaises(ValueError):
            await grafo.salvar_posicao('cliente-1', 1, 2)


class ConectarTest(SimpleTestCase):

    async def montar(self, conexoes=()):
        self.repositorio = repositorio_falso(LEADS, IMOVEIS, conexoes=conexoes)
        self.notificador = NotificadorMemoria()
        self.grafo = GrafoCanvas(self.repositorio, self.notificador, 7)
        await self.grafo.carregar()

    async def test_conexao_nova(self):
        await self.montar()

        aresta = await self.grafo.conectar('lead-1', 'imovel-10')

        self.assertEqual(aresta, Aresta('1', '10'))
        self.repositorio.inserir.assert_awaited_once_with('lead_imoveis', {'lead_id': '1', 'imovel_id': '10'})
        self.assertIn('edge-1-10', self.grafo.arestas)
        self.assertEqual(self.notificador.notificacoes[-1].descricao, 'Conexão criada com sucesso')

    async def test_direcao_inversa_e_duplicata(self):
        await self.montar()

        primeira = await self.grafo.conectar('lead-1', 'imovel-10')
        segunda = await self.grafo.conectar('imovel-10', 'lead-1')

        self.assertIsNotNone(primeira)
        self.assertIsNone(segunda)
        self.assertEqual(self.repositorio.inserir.await_count, 1)
        self.assertEqual(self.notificador.notificacoes[-1].descricao, 'Esta conexão já existe')

    async def test_conexao_ja_carregada_e_duplicata(self):
        await self.montar(conexoes=[{'lead_id': 2, 'imovel_id': 10}])

        self.assertIsNone(await self.grafo.conectar('imovel-10', 'lead-2'))
        self.repositorio.inserir.assert_not_awaited()

    async def test_lead_com_lead_e_recusado(self):
        await self.montar()

        self.assertIsNone(await self.grafo.conectar('lead-1', 'lead-2'))
        self.repositorio.inserir.assert_not_awaited()

    async def test_falha_remota_nao_cria_aresta(self):
        await self.montar()
        self.repositorio.inserir.side_effect = ErroRemoto('duplicado')

        self.assertIsNone(await self.grafo.conectar('lead-1', 'imovel-10'))
        self.assertEqual(self.grafo.arestas, {})
        self.assertEqual(self.notificador.notificacoes[-1].descricao, 'Erro ao criar conexão')


class RemoverArestasTest(SimpleTestCase):

    async def test_falha_isolada_devolve_so_a_aresta_que_falhou(self):
        conexoes = [{'lead_id': 1, 'imovel_id': 10}, {'lead_id': 2, 'imovel_id': 10}]
        repositorio = repositorio_falso(LEADS, IMOVEIS, conexoes=conexoes)
        notificador = NotificadorMemoria()
        grafo = GrafoCanvas(repositorio, notificador, 7)
        await grafo.carregar()

        async def remover(tabela, filtros):
            if filtros['lead_id'] == '1':
                raise ErroRemoto('sem permissão')
            return 1

        repositorio.remover.side_effect = remover

        removidas = await grafo.remover_arestas(['edge-1-10', 'edge-2-10', 'edge-9-9'])

        self.assertEqual(removidas, ['edge-2-10'])
        self.assertEqual(list(grafo.arestas), ['edge-1-10'])
        self.assertEqual(repositorio.remover.await_count, 2)
        self.assertEqual(len(notificador.notificacoes), 1)
        self.assertEqual(notificador.notificacoes[0].descricao, 'Erro ao deletar conexão')

    async def test_nada_a_remover(self):
        repositorio = repositorio_falso()
        grafo = GrafoCanvas(repositorio, NotificadorMemoria(), 7)

        self.assertEqual(await grafo.remover_arestas(['edge-1-1']), [])
        repositorio.remover.assert_not_awaited()


class IdsTest(SimpleTestCase):

    def test_separar_id_no(self):
        self.assertEqual(separar_id_no('lead-12'), ('lead', '12'))
        self.assertEqual(separar_id_no('imovel-3'), ('imovel', '3'))
        for invalido in ('lead-', 'imovel', 'edge-1-2', ''):
            with self.subTest(no=invalido):
                with self.assertRaises(ValueError):
                    separar_id_no(invalido)

    def test_id_aresta_canonico(self):
        self.assertEqual(id_aresta(4, 8), 'edge-4-8')
        self.assertEqual(Aresta('4', '8').id, 'edge-4-8')
