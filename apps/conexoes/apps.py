# apps/conexoes/apps.py

from django.apps import AppConfig


class ConexoesConfig(AppConfig):
    """Configuração da app Conexões"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.conexoes'
    verbose_name = 'Conexões - Canvas'
