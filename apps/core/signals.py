# apps/core/signals.py

import logging

from django.db.models.signals import pre_save
from django.dispatch import receiver
from django.utils import timezone

from .models import AcaoCampanha, Lead

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Lead)
def registrar_fechamento(sender, instance, **kwargs):
    """
    Registra no log quando um lead chega em "Fechado"
    """
    if not instance.pk or instance.status != 'fechado':
        return

    status_anterior = sender.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
    if status_anterior and status_anterior != 'fechado':
        logger.info(f"🏆 Lead '{instance.nome}' fechado (responsável: {instance.responsavel_id})")


@receiver(pre_save, sender=AcaoCampanha)
def sincronizar_data_conclusao(sender, instance, **kwargs):
    """
    Mantém data_conclusao coerente com o flag concluida
    """
    if instance.concluida and instance.data_conclusao is None:
        instance.data_conclusao = timezone.now()
    elif not instance.concluida:
        instance.data_conclusao = None
