# apps/pipeline/apps.py

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class PipelineConfig(AppConfig):
    """Configuração da app Pipeline"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.pipeline'
    verbose_name = 'Pipeline - Quadros'

    def ready(self):
        logger.debug("🔌 Pipeline App inicializada - WebSockets habilitados")
