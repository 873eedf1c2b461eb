# apps/conexoes/consumers.py

import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

from apps.core.notificacoes import NotificadorCanal
from apps.core.repositorio import RepositorioDjango
from .canvas import GrafoCanvas

logger = logging.getLogger(__name__)


class CanvasConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket do canvas de conexões

    Mensagens do cliente:
    - ping, recarregar, auto_layout
    - no_movido: {"no", "x", "y"}
    - conectar: {"origem", "destino"}
    - remover_arestas: {"arestas": [...]}
    """

    async def connect(self):
        self.user = self.scope['user']

        if not self.user.is_authenticated:
            logger.warning("❌ Conexão WebSocket rejeitada - usuário não autenticado")
            await self.close()
            return

        self.grafo = GrafoCanvas(
            RepositorioDjango(self.user, database_sync_to_async),
            NotificadorCanal(self.enviar_json),
            self.user.pk,
        )
        self.grafo.adicionar_ouvinte(self.enviar_estado)

        await self.accept()
        logger.info(f"✅ Canvas conectado - {self.user.username}")
        await self.grafo.carregar()

    async def disconnect(self, close_code):
        if hasattr(self, 'grafo'):
            logger.info(f"🔌 Canvas desconectado - {self.user.username}")

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data)
        except (TypeError, json.JSONDecodeError):
            logger.error(f"❌ JSON inválido recebido via WebSocket de {self.user.username}")
            return

        if not isinstance(data, dict):
            logger.warning(f"⚠️ Mensagem WebSocket que não é objeto JSON de {self.user.username}")
            return

        message_type = data.get('type')

        try:
            if message_type == 'ping':
                await self.enviar_json({'type': 'pong', 'timestamp': timezone.now().isoformat()})

            elif message_type == 'no_movido':
                await self.grafo.salvar_posicao(data['no'], float(data['x']), float(data['y']))

            elif message_type == 'conectar':
                await self.grafo.conectar(data.get('origem'), data.get('destino'))

            elif message_type == 'remover_arestas':
                arestas = data.get('arestas')
                if not isinstance(arestas, list):
                    raise TypeError('arestas deve ser uma lista')
                await self.grafo.remover_arestas(arestas)

            elif message_type == 'auto_layout':
                await self.grafo.auto_layout()

            elif message_type == 'recarregar':
                await self.grafo.carregar()

        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"⚠️ Mensagem '{message_type}' inválida de {self.user.username}: {e}")

    # === Métodos auxiliares ===

    async def enviar_json(self, payload):
        await self.send(text_data=json.dumps(payload, cls=DjangoJSONEncoder))

    async def enviar_estado(self, estado):
        await self.enviar_json({'type': 'estado', **estado})
