# apps/pipeline/routing.py

from django.urls import re_path
from . import consumers

# Rotas WebSocket dos quadros - leads, captacoes ou acoes (?campanha=<id>)
websocket_urlpatterns = [
    re_path(r'ws/pipeline/(?P<quadro>leads|captacoes|acoes)/$', consumers.QuadroConsumer.as_asgi()),
]
