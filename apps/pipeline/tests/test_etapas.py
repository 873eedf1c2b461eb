"""
Testes das funções puras de etapas

Rodar:
    python manage.py test apps.pipeline.tests.test_etapas
"""

from django.test import SimpleTestCase

from apps.core.models import AcaoCampanha, Captacao, Lead
from apps.pipeline.etapas import (
    ACOES_PADRAO, QUADRO_ACOES, QUADRO_CAPTACOES, QUADRO_LEADS, QUADROS,
    aplicar_etapa, particionar
)


class ParticionarTest(SimpleTestCase):

    def test_colunas_seguem_a_ordem_das_etapas(self):
        itens = [{'id': 1, 'status': 'fechado'}, {'id': 2, 'status': 'novo'}]

        colunas = particionar(itens, QUADRO_LEADS)

        self.assertEqual([etapa.id for etapa, _ in colunas], QUADRO_LEADS.ids_etapas)
        self.assertEqual(colunas[0][1], [{'id': 2, 'status': 'novo'}])
        self.assertEqual(colunas[-1][1], [{'id': 1, 'status': 'fechado'}])

    def test_etapa_desconhecida_nao_aparece_em_coluna(self):
        itens = [{'id': 1, 'status': 'arquivado'}, {'id': 2}, {'id': 3, 'status': 'novo'}]

        colunas = particionar(itens, QUADRO_LEADS)

        distribuidos = [item['id'] for _, col in colunas for item in col]
        self.assertEqual(distribuidos, [3])

    def test_ordem_dentro_da_coluna_e_preservada(self):
        itens = [{'id': i, 'status': 'visita'} for i in (5, 3, 9)]

        colunas = dict((etapa.id, col) for etapa, col in particionar(itens, QUADRO_LEADS))

        self.assertEqual([item['id'] for item in colunas['visita']], [5, 3, 9])


class AplicarEtapaTest(SimpleTestCase):

    def test_nao_altera_a_tupla_original(self):
        itens = ({'id': 1, 'etapa': 'captacao'}, {'id': 2, 'etapa': 'atracao'})

        novos = aplicar_etapa(itens, '1', 'etapa', 'conversao')

        self.assertEqual(itens[0]['etapa'], 'captacao')
        self.assertEqual(novos[0]['etapa'], 'conversao')
        self.assertIs(novos[1], itens[1])


class ConfiguracaoQuadroTest(SimpleTestCase):

    def test_etapas_batem_com_as_choices_dos_models(self):
        pares = [
            (QUADRO_LEADS, Lead.STATUS_CHOICES),
            (QUADRO_CAPTACOES, Captacao.STATUS_CHOICES),
            (QUADRO_ACOES, AcaoCampanha.ETAPA_CHOICES),
        ]
        for config, choices in pares:
            with self.subTest(quadro=config.nome):
                self.assertEqual(config.ids_etapas, [valor for valor, _ in choices])

    def test_mensagens_no_feminino(self):
        self.assertEqual(QUADRO_CAPTACOES.titulo_sucesso_mover(), 'Captação movida com sucesso!')
        self.assertEqual(QUADRO_ACOES.titulo_erro_mover(), 'Erro ao mover ação')

    def test_titulo_de_etapa_desconhecida_e_o_proprio_id(self):
        self.assertEqual(QUADRO_LEADS.titulo_etapa('visita'), 'Visita Agendada')
        self.assertEqual(QUADRO_LEADS.titulo_etapa('xyz'), 'xyz')

    def test_quadros_registrados(self):
        self.assertEqual(set(QUADROS), {'leads', 'captacoes', 'acoes'})

    def test_acoes_padrao_cobrem_todas_as_etapas(self):
        self.assertEqual(len(ACOES_PADRAO), 15)
        self.assertEqual({etapa for etapa, *_ in ACOES_PADRAO}, set(QUADRO_ACOES.ids_etapas))
