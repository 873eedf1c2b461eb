# apps/core/notificacoes.py

import logging
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)

VARIANTE_PADRAO = 'default'
VARIANTE_ERRO = 'destructive'


@dataclass(frozen=True)
class Notificacao:
    titulo: str
    descricao: str = ''
    variante: str = VARIANTE_PADRAO

    def como_dict(self):
        return asdict(self)


class Notificador:
    """
    Colaborador de notificações (toasts) exibidas ao usuário

    Fire-and-forget: quem notifica não espera nenhuma resposta.
    """

    async def notificar(self, titulo, descricao='', variante=VARIANTE_PADRAO):
        notificacao = Notificacao(titulo, descricao, variante)
        if variante == VARIANTE_ERRO:
            logger.warning(f"🔔 {titulo}: {descricao}")
        else:
            logger.debug(f"🔔 {titulo}: {descricao}")
        await self.entregar(notificacao)

    async def erro(self, titulo, descricao=''):
        await self.notificar(titulo, descricao, VARIANTE_ERRO)

    async def entregar(self, notificacao):
        raise NotImplementedError


class NotificadorMemoria(Notificador):
    """Acumula as notificações para devolvê-las numa resposta HTTP"""

    def __init__(self):
        self.notificacoes = []

    async def entregar(self, notificacao):
        self.notificacoes.append(notificacao)

    def como_lista(self):
        return [n.como_dict() for n in self.notificacoes]


class NotificadorCanal(Notificador):
    """Envia cada notificação pelo WebSocket da sessão"""

    def __init__(self, enviar):
        # enviar: corrotina que recebe o payload (dict) e o envia ao cliente
        self._enviar = enviar

    async def entregar(self, notificacao):
        await self._enviar({'type': 'notificacao', **notificacao.como_dict()})
