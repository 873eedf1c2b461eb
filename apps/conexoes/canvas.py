# apps/conexoes/canvas.py

"""
Canvas de conexões entre leads e imóveis

Cada nó é um lead ou um imóvel do usuário; cada aresta liga um lead a um
imóvel. Posições arrastadas são gravadas por usuário (upsert); sem posição
gravada vale o layout padrão em duas colunas.
"""

import asyncio
import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Optional

from django.conf import settings

from apps.core.repositorio import ErroRemoto
from apps.core.utils import formatar_moeda, gerar_cor

logger = logging.getLogger(__name__)

TIPO_LEAD = 'lead'
TIPO_IMOVEL = 'imovel'


@dataclass(frozen=True)
class LayoutCanvas:
    x_lead: float = 100
    x_imovel: float = 400
    y_topo: float = 100
    passo_y: float = 120

    @classmethod
    def de_settings(cls):
        return cls(**getattr(settings, 'CRM_CANVAS_LAYOUT', {}))

    def posicao(self, tipo, indice):
        x = self.x_lead if tipo == TIPO_LEAD else self.x_imovel
        return x, self.y_topo + indice * self.passo_y


def id_no(tipo, entidade_id):
    return f'{tipo}-{entidade_id}'


def separar_id_no(no_id):
    """'lead-12' -> ('lead', '12'); levanta ValueError para ids estranhos"""
    tipo, _, entidade_id = str(no_id).partition('-')
    if tipo not in (TIPO_LEAD, TIPO_IMOVEL) or not entidade_id:
        raise ValueError(f'Nó inválido: {no_id}')
    return tipo, entidade_id


def id_aresta(lead_id, imovel_id):
    """Id canônico, independente da direção em que a conexão foi desenhada"""
    return f'edge-{lead_id}-{imovel_id}'


@dataclass
class No:
    id: str
    tipo: str
    entidade_id: str
    x: float
    y: float
    dados: Dict = field(default_factory=dict)

    def como_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Aresta:
    lead_id: str
    imovel_id: str

    @property
    def id(self):
        return id_aresta(self.lead_id, self.imovel_id)

    def como_dict(self):
        return {
            'id': self.id,
            'origem': id_no(TIPO_LEAD, self.lead_id),
            'destino': id_no(TIPO_IMOVEL, self.imovel_id),
        }


def dados_lead(lead):
    return {**lead, 'iniciais': ''.join(p[0] for p in lead['nome'].split()).upper(), 'cor': gerar_cor(lead['nome'])}


def dados_imovel(imovel):
    return {**imovel, 'preco_formatado': formatar_moeda(imovel.get('preco'))}


class GrafoCanvas:
    """
    Controlador do canvas de um usuário

    nos e arestas ficam em dicts ordenados por id; toda mudança local
    incrementa a versão e avisa os ouvintes com o snapshot.
    """

    def __init__(self, repositorio, notificador, usuario_id, layout: Optional[LayoutCanvas] = None):
        self.repositorio = repositorio
        self.notificador = notificador
        self.usuario_id = usuario_id
        self.layout = layout or LayoutCanvas.de_settings()

        self.nos = {}
        self.arestas = {}
        self.versao = 0
        self._ouvintes = []

    # === ESTADO ===

    def adicionar_ouvinte(self, ouvinte):
        self._ouvintes.append(ouvinte)

    async def _publicar(self):
        self.versao += 1
        estado = self.estado()
        for ouvinte in list(self._ouvintes):
            await ouvinte(estado)

    def estado(self):
        return {
            'versao': self.versao,
            'nos': [no.como_dict() for no in self.nos.values()],
            'arestas': [aresta.como_dict() for aresta in self.arestas.values()],
        }

    # === CARGA ===

    async def carregar(self):
        try:
            leads, imoveis, posicoes, conexoes = await asyncio.gather(
                self.repositorio.buscar('leads', {'responsavel_id': self.usuario_id}, ordenar_por='criado_em'),
                self.repositorio.buscar('imoveis', {'criado_por_id': self.usuario_id}, ordenar_por='criado_em'),
                self.repositorio.buscar('posicoes_canvas', {'usuario_id': self.usuario_id}, ordenar_por=None),
                self.repositorio.buscar('lead_imoveis', ordenar_por=None),
            )
        except ErroRemoto as e:
            logger.error(f"❌ Erro ao carregar canvas do usuário {self.usuario_id}: {e.mensagem}")
            return await self._carga_falhou()
        except Exception:
            logger.exception(f"❌ Erro inesperado ao carregar canvas do usuário {self.usuario_id}")
            return await self._carga_falhou()

        gravadas = {
            (posicao['tipo_no'], str(posicao['id_no'])): (posicao['posicao_x'], posicao['posicao_y'])
            for posicao in posicoes
        }

        nos = {}
        for tipo, linhas, montar_dados in ((TIPO_LEAD, leads, dados_lead), (TIPO_IMOVEL, imoveis, dados_imovel)):
            for indice, linha in enumerate(linhas):
                entidade_id = str(linha['id'])
                x, y = gravadas.get((tipo, entidade_id), self.layout.posicao(tipo, indice))
                no = No(id_no(tipo, entidade_id), tipo, entidade_id, float(x), float(y), montar_dados(linha))
                nos[no.id] = no

        arestas = {}
        for conexao in conexoes:
            aresta = Aresta(str(conexao['lead_id']), str(conexao['imovel_id']))
            # Só desenha arestas com as duas pontas no canvas
            if id_no(TIPO_LEAD, aresta.lead_id) in nos and id_no(TIPO_IMOVEL, aresta.imovel_id) in nos:
                arestas[aresta.id] = aresta

        self.nos, self.arestas = nos, arestas
        logger.debug(f"🗺️ Canvas do usuário {self.usuario_id}: {len(nos)} nós, {len(arestas)} arestas")
        await self._publicar()
        return self.estado()

    async def _carga_falhou(self):
        self.nos, self.arestas = {}, {}
        await self.notificador.erro('Erro', 'Erro ao carregar dados do canvas')
        await self._publicar()
        return self.estado()

    # === POSIÇÕES ===

    async def salvar_posicao(self, no_id, x, y):
        """Fim do arraste de um nó: grava (usuário, tipo, entidade) -> (x, y)"""
        tipo, entidade_id = separar_id_no(no_id)

        no = self.nos.get(no_id)
        if no is not None:
            no.x, no.y = float(x), float(y)

        try:
            await self.repositorio.upsert(
                'posicoes_canvas',
                {'usuario_id': self.usuario_id, 'tipo_no': tipo, 'id_no': entidade_id},
                {'posicao_x': float(x), 'posicao_y': float(y)},
            )
        except ErroRemoto as e:
            logger.error(f"❌ Erro ao salvar posição de {no_id}: {e.mensagem}")
            await self.notificador.erro('Erro', 'Erro ao salvar posição do card')
            return False
        return True

    async def auto_layout(self):
        """Reposiciona todos os nós no layout padrão, sem gravar nada"""
        indices = {TIPO_LEAD: 0, TIPO_IMOVEL: 0}
        for no in self.nos.values():
            no.x, no.y = self.layout.posicao(no.tipo, indices[no.tipo])
            indices[no.tipo] += 1
        await self._publicar()
        return self.estado()

    # === CONEXÕES ===

    async def conectar(self, origem, destino):
        """
        Cria a conexão lead ↔ imóvel desenhada entre dois nós
        Retorna a aresta criada ou None
        """
        try:
            tipo_origem, id_origem = separar_id_no(origem)
            tipo_destino, id_destino = separar_id_no(destino)
        except ValueError:
            return None

        if {tipo_origem, tipo_destino} != {TIPO_LEAD, TIPO_IMOVEL}:
            await self.notificador.erro('Aviso', 'Conexões ligam um lead a um imóvel')
            return None

        if tipo_origem == TIPO_LEAD:
            aresta = Aresta(id_origem, id_destino)
        else:
            aresta = Aresta(id_destino, id_origem)

        if aresta.id in self.arestas:
            await self.notificador.erro('Aviso', 'Esta conexão já existe')
            return None

        try:
            await self.repositorio.inserir(
                'lead_imoveis',
                {'lead_id': aresta.lead_id, 'imovel_id': aresta.imovel_id},
            )
        except ErroRemoto as e:
            logger.error(f"❌ Erro ao criar conexão {aresta.id}: {e.mensagem}")
            await self.notificador.erro('Erro', 'Erro ao criar conexão')
            return None

        self.arestas[aresta.id] = aresta
        await self._publicar()
        await self.notificador.notificar('Sucesso', 'Conexão criada com sucesso')
        return aresta

    async def remover_arestas(self, ids_arestas):
        """
        Remove várias arestas, cada uma com sua própria chamada remota

        As remoções rodam em paralelo e uma falha não impede as demais;
        a aresta que falhou volta para o canvas. Retorna os ids removidos.
        """
        alvos = [self.arestas.pop(aresta_id) for aresta_id in ids_arestas if aresta_id in self.arestas]
        if not alvos:
            return []

        resultados = await asyncio.gather(*(self._remover_aresta(aresta) for aresta in alvos))

        await self._publicar()
        return [aresta.id for aresta, removida in zip(alvos, resultados) if removida]

    async def _remover_aresta(self, aresta):
        try:
            await self.repositorio.remover(
                'lead_imoveis',
                {'lead_id': aresta.lead_id, 'imovel_id': aresta.imovel_id},
            )
        except ErroRemoto as e:
            logger.error(f"❌ Erro ao deletar conexão {aresta.id}: {e.mensagem}")
            self.arestas[aresta.id] = aresta
            await self.notificador.erro('Erro', 'Erro ao deletar conexão')
            return False
        return True
