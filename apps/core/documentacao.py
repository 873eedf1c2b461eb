# apps/core/documentacao.py

"""
Dossiê de documentação de uma captação

Tipos de documento do imóvel e do proprietário, checklist manual e
cálculo de completude. Um tipo obrigatório conta como entregue quando há
arquivo enviado ou quando foi marcado no checklist.
"""

import logging
from dataclasses import dataclass

from django.utils import timezone

from .repositorio import ErroRemoto

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TipoDocumento:
    chave: str
    rotulo: str
    obrigatorio: bool = True
    multiplo: bool = False


DOCUMENTOS_IMOVEL = (
    TipoDocumento('matricula', 'Matrícula Atualizada do Imóvel'),
    TipoDocumento('iptu_negativa', 'Certidão Negativa de Débitos de IPTU'),
    TipoDocumento('iptu_dados', 'Certidão de Dados Cadastrais - IPTU'),
    TipoDocumento('condominio_negativa', 'Certidão Negativa de Débitos do Condomínio', obrigatorio=False),
)

DOCUMENTOS_PROPRIETARIO = (
    TipoDocumento('identidade', 'Documento de Identidade (RG ou CNH)'),
    TipoDocumento('cpf', 'CPF'),
    TipoDocumento('certidao_civil', 'Certidão de Nascimento ou Casamento'),
    TipoDocumento('certidao_interdicao', 'Certidão de Interdição e Tutela'),
    TipoDocumento('certidoes_judiciais', 'Certidões Judiciais (Municipal, Estadual, Federal)', multiplo=True),
)

TIPOS_DOCUMENTO = {tipo.chave: tipo for tipo in DOCUMENTOS_IMOVEL + DOCUMENTOS_PROPRIETARIO}


def status_documentacao(percentual):
    if percentual >= 100:
        return 'completo'
    if percentual > 0:
        return 'parcial'
    return 'pendente'


def resumo_documentacao(documentos, checklist):
    """
    Monta o resumo do dossiê a partir das linhas de documentos e checklist

    Retorna os grupos com arquivos e marcação por tipo, os obrigatórios
    faltantes e o percentual de completude.
    """
    arquivos = {}
    for documento in documentos:
        arquivos.setdefault(documento['tipo_documento'], []).append(documento)

    marcados = {item['tipo_documento'] for item in checklist if item.get('marcado')}

    def descrever(tipo):
        enviados = arquivos.get(tipo.chave, [])
        return {
            'chave': tipo.chave,
            'rotulo': tipo.rotulo,
            'obrigatorio': tipo.obrigatorio,
            'multiplo': tipo.multiplo,
            'arquivos': enviados,
            'marcado': tipo.chave in marcados,
            'entregue': bool(enviados) or tipo.chave in marcados,
        }

    grupos = {
        'imovel': [descrever(tipo) for tipo in DOCUMENTOS_IMOVEL],
        'proprietario': [descrever(tipo) for tipo in DOCUMENTOS_PROPRIETARIO],
    }

    obrigatorios = [item for grupo in grupos.values() for item in grupo if item['obrigatorio']]
    faltantes = [item['chave'] for item in obrigatorios if not item['entregue']]
    entregues = len(obrigatorios) - len(faltantes)
    percentual = round(entregues / len(obrigatorios) * 100) if obrigatorios else 100

    return {
        'grupos': grupos,
        'faltantes': faltantes,
        'percentual': percentual,
        'status': status_documentacao(percentual),
    }


async def carregar_documentacao(repositorio, captacao_id):
    """Busca documentos e checklist de uma captação e devolve o resumo"""
    filtros = {'captacao_id': captacao_id}
    documentos = await repositorio.buscar('documentos_imovel', filtros, ordenar_por='-data_upload')
    checklist = await repositorio.buscar('checklist_documentos', filtros, ordenar_por='tipo_documento')
    return resumo_documentacao(documentos, checklist)


async def atualizar_status(repositorio, notificador, captacao_id):
    """
    Recalcula o resumo e grava o status_documentacao da captação

    Chamada depois que documento ou checklist já foi gravado: uma falha aqui
    não desfaz essa gravação, só avisa que o status ficou desatualizado.
    Retorna o resumo, ou None se nem o resumo pôde ser lido.
    """
    try:
        resumo = await carregar_documentacao(repositorio, captacao_id)
    except ErroRemoto as e:
        logger.warning(f"⚠️ Resumo da captação {captacao_id} não recalculado: {e.mensagem}")
        await notificador.erro('Status da documentação não atualizado', e.mensagem)
        return None

    try:
        await repositorio.atualizar('captacoes', captacao_id, {'status_documentacao': resumo['status']})
    except ErroRemoto as e:
        logger.warning(f"⚠️ Status da captação {captacao_id} não gravado: {e.mensagem}")
        await notificador.erro('Status da documentação não atualizado', e.mensagem)

    return resumo


async def marcar_checklist(repositorio, notificador, captacao_id, tipo_documento, marcado, usuario_id):
    """
    Marca ou desmarca um tipo no checklist e atualiza o status da captação
    Retorna o resumo atualizado, ou None em caso de erro
    """
    tipo = TIPOS_DOCUMENTO.get(tipo_documento)
    if tipo is None:
        await notificador.erro('Tipo de documento inválido', tipo_documento)
        return None

    try:
        await repositorio.upsert(
            'checklist_documentos',
            {'captacao_id': captacao_id, 'tipo_documento': tipo.chave},
            {
                'marcado': marcado,
                'data_marcado': timezone.now() if marcado else None,
                'usuario_id': usuario_id,
            }
        )
    except ErroRemoto as e:
        await notificador.erro('Erro ao atualizar checklist', e.mensagem)
        return None

    logger.info(f"📄 Checklist da captação {captacao_id}: {tipo.chave} = {marcado}")
    await notificador.notificar(
        'Documento conferido!' if marcado else 'Documento desmarcado',
        tipo.rotulo,
    )
    return await atualizar_status(repositorio, notificador, captacao_id)


async def registrar_documento(repositorio, notificador, captacao_id, valores, usuario_id):
    """
    Registra um arquivo já enviado ao storage no dossiê da captação

    valores: tipo_documento, url (caminho no storage) e nome_arquivo.
    Retorna o resumo atualizado, ou None em caso de erro.
    """
    if valores.get('tipo_documento') not in TIPOS_DOCUMENTO:
        await notificador.erro('Tipo de documento inválido', valores.get('tipo_documento') or '')
        return None

    try:
        documento = await repositorio.inserir('documentos_imovel', {
            **valores,
            'captacao_id': captacao_id,
            'usuario_id': usuario_id,
        })
    except ErroRemoto as e:
        logger.error(f"❌ Documento não registrado na captação {captacao_id}: {e.mensagem}")
        await notificador.erro('Erro', 'Erro ao enviar documento')
        return None

    logger.info(f"📎 Documento {documento['id']} ({documento['tipo_documento']}) na captação {captacao_id}")
    await notificador.notificar('Sucesso', 'Documento enviado com sucesso')
    return await atualizar_status(repositorio, notificador, captacao_id)


async def remover_documento(repositorio, notificador, captacao_id, documento_id):
    """
    Remove o registro de um documento do dossiê
    O arquivo no storage é apagado por quem chama
    """
    try:
        removidos = await repositorio.remover(
            'documentos_imovel',
            {'pk': documento_id, 'captacao_id': captacao_id},
        )
    except ErroRemoto as e:
        logger.error(f"❌ Erro ao excluir documento {documento_id}: {e.mensagem}")
        await notificador.erro('Erro', 'Erro ao excluir documento')
        return None

    if not removidos:
        await notificador.erro('Erro', 'Documento não encontrado')
        return None

    logger.info(f"🗑️ Documento {documento_id} removido da captação {captacao_id}")
    await notificador.notificar('Sucesso', 'Documento excluído com sucesso')
    return await atualizar_status(repositorio, notificador, captacao_id)
