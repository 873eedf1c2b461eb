# apps/pipeline/etapas.py

"""
Configuração dos quadros de etapas

Um único quadro genérico (QuadroEtapas) é configurado três vezes:
funil de leads, funil de captações e ações de campanha.
As funções deste módulo são puras e não tocam no banco.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple


@dataclass(frozen=True)
class Etapa:
    id: str
    titulo: str
    descricao: str = ''


def contar_itens(itens):
    return str(len(itens))


def contar_concluidas(itens):
    concluidas = sum(1 for item in itens if item.get('concluida'))
    return f"{concluidas}/{len(itens)}"


@dataclass(frozen=True)
class ConfiguracaoQuadro:
    """Parâmetros de um quadro: tabela, campo de etapa, etapas e mensagens"""

    nome: str
    tabela: str
    campo: str
    etapas: Tuple[Etapa, ...]
    entidade: str
    entidade_plural: str
    feminino: bool = False
    ordenar_por: str = '-criado_em'
    resumir: Callable = contar_itens

    @property
    def ids_etapas(self):
        return [etapa.id for etapa in self.etapas]

    def etapa(self, etapa_id) -> Optional[Etapa]:
        for etapa in self.etapas:
            if etapa.id == etapa_id:
                return etapa
        return None

    def titulo_etapa(self, etapa_id):
        etapa = self.etapa(etapa_id)
        return etapa.titulo if etapa else etapa_id

    # === MENSAGENS ===

    def _flexao(self, masculino, feminino):
        return feminino if self.feminino else masculino

    def titulo_sucesso_mover(self):
        return f"{self.entidade} {self._flexao('movido', 'movida')} com sucesso!"

    def descricao_sucesso_mover(self, etapa_id):
        return f"{self.entidade} {self._flexao('movido', 'movida')} para {self.titulo_etapa(etapa_id)}"

    def titulo_erro_mover(self):
        return f"Erro ao mover {self.entidade.lower()}"

    def descricao_inesperado_mover(self):
        return f"Não foi possível mover {self._flexao('o', 'a')} {self.entidade.lower()}."

    def titulo_erro_carregar(self):
        return f"Erro ao carregar {self.entidade_plural}"

    def descricao_inesperado_carregar(self):
        return f"Não foi possível carregar {self._flexao('os', 'as')} {self.entidade_plural}."

    def titulo_sucesso_criar(self):
        return f"{self.entidade} {self._flexao('criado', 'criada')} com sucesso!"

    def titulo_erro_criar(self):
        return f"Erro ao criar {self.entidade.lower()}"

    def titulo_sucesso_editar(self):
        return f"{self.entidade} {self._flexao('atualizado', 'atualizada')} com sucesso!"

    def titulo_erro_editar(self):
        return f"Erro ao atualizar {self.entidade.lower()}"

    def titulo_sucesso_excluir(self):
        return f"{self.entidade} {self._flexao('excluído', 'excluída')} com sucesso!"

    def titulo_erro_excluir(self):
        return f"Erro ao excluir {self.entidade.lower()}"


QUADRO_LEADS = ConfiguracaoQuadro(
    nome='leads',
    tabela='leads',
    campo='status',
    etapas=(
        Etapa('novo', 'Novo Lead'),
        Etapa('qualificado', 'Qualificado'),
        Etapa('visita', 'Visita Agendada'),
        Etapa('proposta', 'Proposta Enviada'),
        Etapa('fechado', 'Fechado'),
    ),
    entidade='Lead',
    entidade_plural='leads',
)

QUADRO_CAPTACOES = ConfiguracaoQuadro(
    nome='captacoes',
    tabela='captacoes',
    campo='status',
    etapas=(
        Etapa('prospeccao', 'Prospecção / Leads Frios'),
        Etapa('contato_inicial', 'Contato Inicial'),
        Etapa('interesse_confirmado', 'Interesse Confirmado'),
        Etapa('documentacao_analise', 'Documentação em Análise'),
        Etapa('vistoria_avaliacao', 'Vistoria / Avaliação'),
        Etapa('proposta_enviada', 'Proposta Comercial Enviada'),
        Etapa('aguardando_assinatura', 'Aguardando Assinatura'),
        Etapa('captado', 'Imóvel Captado (Em Estoque)'),
        Etapa('rejeitado', 'Rejeitado / Sem Interesse'),
    ),
    entidade='Captação',
    entidade_plural='captações',
    feminino=True,
)

QUADRO_ACOES = ConfiguracaoQuadro(
    nome='acoes',
    tabela='acoes_campanha',
    campo='etapa',
    etapas=(
        Etapa('captacao', 'Captação', 'Preparação e documentação do imóvel'),
        Etapa('atracao', 'Atração', 'Criação de conteúdo e anúncios'),
        Etapa('engajamento', 'Engajamento', 'Interação com leads interessados'),
        Etapa('conversao', 'Conversão', 'Transformação de leads em clientes'),
        Etapa('pos_venda', 'Pós-venda', 'Finalização e fidelização'),
    ),
    entidade='Ação',
    entidade_plural='ações',
    feminino=True,
    ordenar_por='criado_em',
    resumir=contar_concluidas,
)

QUADROS = {config.nome: config for config in (QUADRO_LEADS, QUADRO_CAPTACOES, QUADRO_ACOES)}


def particionar(itens, config):
    """
    Distribui os itens nas colunas do quadro, na ordem das etapas

    Itens cuja etapa não pertence ao quadro não aparecem em coluna nenhuma.
    """
    colunas = {etapa.id: [] for etapa in config.etapas}
    for item in itens:
        coluna = colunas.get(item.get(config.campo))
        if coluna is not None:
            coluna.append(item)
    return [(etapa, colunas[etapa.id]) for etapa in config.etapas]


def aplicar_etapa(itens, item_id, campo, etapa_id):
    """Devolve uma nova tupla de itens com a etapa do item substituída"""
    return tuple(
        {**item, campo: etapa_id} if str(item.get('id')) == str(item_id) else item
        for item in itens
    )


# Ações criadas junto com cada campanha nova: (etapa, título, descrição, ícone)
ACOES_PADRAO = (
    ('captacao', 'Fotos Profissionais', 'Contratar fotógrafo profissional para o imóvel', 'camera'),
    ('captacao', 'Tour Virtual', 'Criar tour virtual 360° do imóvel', 'video'),
    ('captacao', 'Planta Baixa', 'Criar ou digitalizar planta baixa do imóvel', 'map'),
    ('atracao', 'Post Instagram', 'Criar post atrativo para Instagram', 'instagram'),
    ('atracao', 'Anúncio Facebook', 'Configurar anúncio pago no Facebook', 'facebook'),
    ('atracao', 'Portal Imobiliário', 'Publicar em portais como ZAP, Viva Real', 'globe'),
    ('engajamento', 'Stories Interativos', 'Criar stories com enquetes e perguntas', 'message-circle'),
    ('engajamento', 'WhatsApp Business', 'Configurar mensagens automáticas', 'phone'),
    ('engajamento', 'E-mail Marketing', 'Enviar newsletter para leads interessados', 'mail'),
    ('conversao', 'Agendamento de Visitas', 'Facilitar agendamento online de visitas', 'calendar'),
    ('conversao', 'Proposta Comercial', 'Preparar proposta personalizada', 'file-text'),
    ('conversao', 'Negociação', 'Conduzir processo de negociação', 'handshake'),
    ('pos_venda', 'Documentação', 'Organizar documentação para fechamento', 'folder'),
    ('pos_venda', 'Testemunho', 'Coletar depoimento do cliente satisfeito', 'star'),
    ('pos_venda', 'Indicações', 'Solicitar indicações de novos clientes', 'users'),
)
