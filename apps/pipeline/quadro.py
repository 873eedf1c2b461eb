# apps/pipeline/quadro.py

"""
Quadro de etapas com movimentação otimista

Fluxo de um arraste:
1. A nova etapa é aplicada no estado local imediatamente (MovimentoPendente)
2. Uma única atualização remota grava a etapa
3. Sucesso: o movimento pendente é descartado e o usuário é notificado
4. Falha: a etapa anterior é restaurada e o erro é notificado

Sem nova tentativa: a falha encerra aquele gesto.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from apps.core.repositorio import ErroRemoto
from apps.pipeline.etapas import aplicar_etapa, particionar

logger = logging.getLogger(__name__)

DISTANCIA_ATIVACAO = 8


@dataclass(frozen=True)
class EventoArraste:
    """Fim de um arraste: item arrastado, alvo do drop e distância percorrida"""

    item_id: str
    destino: Optional[str]
    deslocamento: Optional[float] = None

    @classmethod
    def de_dict(cls, dados):
        deslocamento = dados.get('deslocamento')
        destino = dados.get('destino')
        return cls(
            item_id=str(dados.get('item_id', '')),
            destino=str(destino) if destino not in (None, '') else None,
            deslocamento=float(deslocamento) if deslocamento is not None else None,
        )

    def reconhecido(self, distancia_minima):
        """Abaixo da distância mínima o gesto é um clique"""
        return self.deslocamento is None or self.deslocamento > distancia_minima


@dataclass(frozen=True)
class MovimentoPendente:
    item_id: str
    etapa_anterior: str
    etapa_nova: str


class QuadroEtapas:
    """
    Controlador de um quadro (leads, captações ou ações de campanha)

    O estado é uma tupla imutável de linhas mais um número de versão;
    cada mudança substitui a tupla e avisa os ouvintes com o snapshot novo.
    """

    def __init__(self, config, repositorio, notificador, filtros=None, distancia_ativacao=None):
        self.config = config
        self.repositorio = repositorio
        self.notificador = notificador
        self.filtros = filtros or {}
        if distancia_ativacao is None:
            distancia_ativacao = getattr(settings, 'CRM_DISTANCIA_ATIVACAO', DISTANCIA_ATIVACAO)
        self.distancia_ativacao = distancia_ativacao

        self.itens = ()
        self.versao = 0
        self._ouvintes = []

    # === ESTADO ===

    def adicionar_ouvinte(self, ouvinte):
        """ouvinte: corrotina chamada com o snapshot a cada mudança"""
        self._ouvintes.append(ouvinte)

    def _substituir(self, itens):
        self.itens = tuple(itens)
        self.versao += 1

    async def _publicar(self):
        estado = self.estado()
        for ouvinte in list(self._ouvintes):
            await ouvinte(estado)

    def colunas(self):
        return [
            {
                'id': etapa.id,
                'titulo': etapa.titulo,
                'descricao': etapa.descricao,
                'resumo': self.config.resumir(itens),
                'itens': list(itens),
            }
            for etapa, itens in particionar(self.itens, self.config)
        ]

    def estado(self):
        return {
            'quadro': self.config.nome,
            'versao': self.versao,
            'colunas': self.colunas(),
        }

    def localizar(self, item_id):
        for item in self.itens:
            if str(item.get('id')) == str(item_id):
                return item
        return None

    def etapa_do_item(self, item_id):
        item = self.localizar(item_id)
        return item.get(self.config.campo) if item else None

    # === CARGA ===

    async def carregar(self):
        try:
            itens = await self.repositorio.buscar(
                self.config.tabela,
                filtros=self.filtros,
                ordenar_por=self.config.ordenar_por,
            )
        except ErroRemoto as e:
            self._substituir(())
            await self.notificador.erro(self.config.titulo_erro_carregar(), e.mensagem)
        except Exception:
            logger.exception(f"❌ Erro inesperado ao carregar {self.config.nome}")
            self._substituir(())
            await self.notificador.erro('Erro inesperado', self.config.descricao_inesperado_carregar())
        else:
            self._substituir(itens)
            logger.debug(f"📋 Quadro {self.config.nome} carregado com {len(self.itens)} itens")

        await self._publicar()
        return self.estado()

    # === MOVIMENTAÇÃO EM DUAS FASES ===

    def resolver_destino(self, destino):
        """
        Converte o alvo do drop numa etapa

        O alvo pode ser a própria coluna ou outro card, caso em que vale
        a etapa do card. Qualquer outro alvo não resolve.
        """
        if destino is None:
            return None
        if self.config.etapa(destino):
            return destino
        etapa_do_card = self.etapa_do_item(destino)
        if etapa_do_card and self.config.etapa(etapa_do_card):
            return etapa_do_card
        return None

    def aplicar_movimento(self, item_id, etapa_nova) -> Optional[MovimentoPendente]:
        """Fase 1: aplica a etapa localmente e devolve o movimento pendente"""
        etapa_anterior = self.etapa_do_item(item_id)
        if etapa_anterior is None or etapa_anterior == etapa_nova:
            return None

        item = self.localizar(item_id)
        movimento = MovimentoPendente(str(item.get('id')), etapa_anterior, etapa_nova)
        self._substituir(aplicar_etapa(self.itens, item_id, self.config.campo, etapa_nova))
        return movimento

    def confirmar(self, movimento):
        """Fase 2 (sucesso): o estado local já é o definitivo"""
        logger.info(
            f"✅ {self.config.entidade} {movimento.item_id}: "
            f"{movimento.etapa_anterior} → {movimento.etapa_nova}"
        )

    def desfazer(self, movimento):
        """
        Fase 2 (falha): restaura a etapa anterior

        Só reverte se o item ainda mostra a etapa aplicada por este movimento;
        um arraste mais novo do mesmo item prevalece.
        """
        if self.etapa_do_item(movimento.item_id) != movimento.etapa_nova:
            logger.info(f"↩️ Reversão de {movimento.item_id} ignorada: item já foi movido de novo")
            return False

        self._substituir(
            aplicar_etapa(self.itens, movimento.item_id, self.config.campo, movimento.etapa_anterior)
        )
        return True

    async def mover(self, evento):
        """
        Processa o fim de um arraste

        Retorna True somente quando a etapa foi gravada remotamente.
        """
        if evento.destino is None or not evento.reconhecido(self.distancia_ativacao):
            return False

        etapa_nova = self.resolver_destino(evento.destino)
        if etapa_nova is None:
            return False

        movimento = self.aplicar_movimento(evento.item_id, etapa_nova)
        if movimento is None:
            return False

        await self._publicar()

        try:
            await self.repositorio.atualizar(
                self.config.tabela,
                movimento.item_id,
                {self.config.campo: movimento.etapa_nova},
            )
        except ErroRemoto as e:
            await self._reverter(movimento)
            await self.notificador.erro(self.config.titulo_erro_mover(), e.mensagem)
            return False
        except Exception:
            logger.exception(f"❌ Erro inesperado ao mover {self.config.entidade} {movimento.item_id}")
            await self._reverter(movimento)
            await self.notificador.erro('Erro inesperado', self.config.descricao_inesperado_mover())
            return False

        self.confirmar(movimento)
        await self.notificador.notificar(
            self.config.titulo_sucesso_mover(),
            self.config.descricao_sucesso_mover(movimento.etapa_nova),
        )
        return True

    async def _reverter(self, movimento):
        if self.desfazer(movimento):
            await self._publicar()

    # === CRIAÇÃO E EXCLUSÃO ===

    async def criar(self, valores):
        """Insere um item e o coloca no quadro; devolve a linha ou None"""
        try:
            item = await self.repositorio.inserir(self.config.tabela, valores)
        except ErroRemoto as e:
            await self.notificador.erro(self.config.titulo_erro_criar(), e.mensagem)
            return None

        if self.config.ordenar_por.startswith('-'):
            self._substituir((item,) + self.itens)
        else:
            self._substituir(self.itens + (item,))

        await self.notificador.notificar(self.config.titulo_sucesso_criar())
        await self._publicar()
        return item

    async def editar(self, item_id, valores):
        """Grava os campos editados de um item; devolve a linha ou None"""
        try:
            item = await self.repositorio.atualizar(self.config.tabela, item_id, valores)
        except ErroRemoto as e:
            await self.notificador.erro(self.config.titulo_erro_editar(), e.mensagem)
            return None

        self._substituir(item if str(atual.get('id')) == str(item_id) else atual for atual in self.itens)
        await self.notificador.notificar(self.config.titulo_sucesso_editar())
        await self._publicar()
        return item

    async def excluir(self, item_id):
        """Exclui um item já confirmado pelo usuário"""
        try:
            removidos = await self.repositorio.remover(self.config.tabela, {'pk': item_id})
        except ErroRemoto as e:
            await self.notificador.erro(self.config.titulo_erro_excluir(), e.mensagem)
            return False

        if not removidos:
            await self.notificador.erro(self.config.titulo_erro_excluir(), 'Registro não encontrado')
            return False

        self._substituir(item for item in self.itens if str(item.get('id')) != str(item_id))
        await self.notificador.notificar(self.config.titulo_sucesso_excluir())
        await self._publicar()
        return True
