# apps/pipeline/consumers.py

import json
import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from django.core.serializers.json import DjangoJSONEncoder
from django.utils import timezone

from apps.core.notificacoes import NotificadorCanal
from apps.core.repositorio import RepositorioDjango
from .etapas import QUADROS
from .quadro import EventoArraste, QuadroEtapas
from .views import nome_grupo

logger = logging.getLogger(__name__)


class QuadroConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket de um quadro de etapas

    Cada conexão tem o seu próprio QuadroEtapas. Mensagens do cliente:
    - ping
    - mover_item: {"item_id", "destino", "deslocamento"?}
    - recarregar

    Mensagens do servidor: estado, notificacao, pong
    """

    async def connect(self):
        """
        Conecta a sessão ao grupo do quadro
        Rejeita usuários anônimos e quadro de ações sem campanha
        """
        self.user = self.scope['user']
        self.quadro_nome = self.scope['url_route']['kwargs']['quadro']

        if not self.user.is_authenticated:
            logger.warning("❌ Conexão WebSocket rejeitada - usuário não autenticado")
            await self.close()
            return

        query = parse_qs(self.scope.get('query_string', b'').decode())
        self.campanha = (query.get('campanha') or [None])[0]
        if self.quadro_nome == 'acoes' and not self.campanha:
            logger.warning(f"❌ Conexão WebSocket rejeitada - quadro de ações sem campanha ({self.user.username})")
            await self.close()
            return

        self.grupo = nome_grupo(self.quadro_nome, self.campanha)
        filtros = {'campanha_id': self.campanha} if self.campanha else None
        self.quadro = QuadroEtapas(
            QUADROS[self.quadro_nome],
            RepositorioDjango(self.user, database_sync_to_async),
            NotificadorCanal(self.enviar_json),
            filtros=filtros,
        )
        self.quadro.adicionar_ouvinte(self.enviar_estado)

        await self.channel_layer.group_add(self.grupo, self.channel_name)
        await self.accept()

        logger.info(f"✅ WebSocket conectado - {self.user.username} no quadro {self.grupo}")
        await self.quadro.carregar()

    async def disconnect(self, close_code):
        if hasattr(self, 'grupo'):
            await self.channel_layer.group_discard(self.grupo, self.channel_name)
            logger.info(f"🔌 WebSocket desconectado - {self.user.username} do quadro {self.grupo}")

    async def receive(self, text_data=None, bytes_data=None):
        """
        Recebe mensagens do cliente WebSocket
        """
        try:
            data = json.loads(text_data)
        except (TypeError, json.JSONDecodeError):
            logger.error(f"❌ JSON inválido recebido via WebSocket de {self.user.username}")
            return

        if not isinstance(data, dict):
            logger.warning(f"⚠️ Mensagem WebSocket que não é objeto JSON de {self.user.username}")
            return

        message_type = data.get('type')

        # Heartbeat/Ping
        if message_type == 'ping':
            await self.enviar_json({'type': 'pong', 'timestamp': timezone.now().isoformat()})

        elif message_type == 'mover_item':
            try:
                evento = EventoArraste.de_dict(data)
            except (TypeError, ValueError):
                logger.warning(f"⚠️ Evento de arraste inválido de {self.user.username}: {data}")
                return

            if await self.quadro.mover(evento):
                await self.channel_layer.group_send(
                    self.grupo,
                    {
                        'type': 'quadro_atualizado',
                        'origem': self.channel_name,
                        'usuario': self.user.get_full_name() or self.user.username,
                    }
                )

        elif message_type == 'recarregar':
            await self.quadro.carregar()

    # === Handlers de eventos do grupo ===

    async def quadro_atualizado(self, event):
        """
        Outra sessão alterou o quadro: recarrega o estado
        """
        if event.get('origem') != self.channel_name:
            await self.quadro.carregar()

    # === Métodos auxiliares ===

    async def enviar_json(self, payload):
        await self.send(text_data=json.dumps(payload, cls=DjangoJSONEncoder))

    async def enviar_estado(self, estado):
        await self.enviar_json({'type': 'estado', **estado})
