# apps/pipeline/campanhas.py

import logging

from django.utils import timezone

from apps.core.repositorio import ErroRemoto
from apps.pipeline.etapas import ACOES_PADRAO

logger = logging.getLogger(__name__)


async def criar_campanha(repositorio, notificador, valores, usuario_id):
    """
    Cria a campanha e as ações padrão de cada etapa

    Falha nas ações não desfaz a campanha: ela fica criada e o erro é logado.
    """
    try:
        campanha = await repositorio.inserir('campanhas', valores)
    except ErroRemoto as e:
        await notificador.erro('Erro ao criar campanha', e.mensagem)
        return None

    falhas = 0
    for etapa, titulo, descricao, icone in ACOES_PADRAO:
        try:
            await repositorio.inserir('acoes_campanha', {
                'campanha_id': campanha['id'],
                'etapa': etapa,
                'titulo': titulo,
                'descricao': descricao,
                'icone': icone,
                'usuario_id': usuario_id,
            })
        except ErroRemoto as e:
            falhas += 1
            logger.error(f"❌ Ação padrão '{titulo}' não criada na campanha {campanha['id']}: {e.mensagem}")

    if falhas:
        logger.warning(f"⚠️ Campanha {campanha['id']} criada com {falhas} ação(ões) padrão faltando")

    await notificador.notificar('Campanha criada com sucesso!', 'Sua campanha foi criada com ações padrão.')
    return campanha


async def alternar_conclusao(repositorio, notificador, acao_id, concluida):
    """Marca uma ação como concluída (com data) ou de volta como pendente"""
    valores = {
        'concluida': concluida,
        'data_conclusao': timezone.now() if concluida else None,
    }

    try:
        acao = await repositorio.atualizar('acoes_campanha', acao_id, valores)
    except ErroRemoto as e:
        await notificador.erro('Erro ao atualizar ação', e.mensagem)
        return None

    await notificador.notificar(
        'Ação concluída!' if concluida else 'Ação marcada como pendente',
        acao['titulo'],
    )
    return acao


async def anexar_material(repositorio, notificador, acao_id, valores):
    """Grava arquivo, link externo e observações de uma ação"""
    try:
        acao = await repositorio.atualizar('acoes_campanha', acao_id, valores)
    except ErroRemoto as e:
        await notificador.erro('Erro ao salvar material', e.mensagem)
        return None

    logger.info(f"📎 Material anexado à ação {acao_id}: {sorted(campo for campo, valor in valores.items() if valor)}")
    await notificador.notificar('Material salvo com sucesso!', acao['titulo'])
    return acao
