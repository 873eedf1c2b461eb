# apps/core/views.py

import logging

from asgiref.sync import async_to_sync
from django.contrib.auth import login, logout
from django.contrib.auth.forms import AuthenticationForm
from django.core.cache import cache
from django.db import DatabaseError
from django.http import Http404, JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from .documentacao import carregar_documentacao, marcar_checklist, registrar_documento, remover_documento
from .forms import DocumentoImovelForm, ImovelForm
from .models import Usuario
from .notificacoes import NotificadorMemoria
from .permissions import ajax_requer_login
from .repositorio import ErroRemoto, RepositorioDjango
from .utils import CorpoInvalido, calcular_estatisticas_painel, ler_json

logger = logging.getLogger(__name__)

VERSAO = '0.1.0'


# === AUTENTICAÇÃO ===

@require_POST
def login_view(request):
    """
    Login por sessão
    Corpo (form): username, password
    """
    form = AuthenticationForm(request, data=request.POST)
    if not form.is_valid():
        logger.warning(f"🔒 Falha de login para '{request.POST.get('username', '')}'")
        return JsonResponse({'success': False, 'errors': form.errors.get_json_data()}, status=400)

    usuario = form.get_user()
    login(request, usuario)
    logger.info(f"🔓 Login de {usuario.username} ({usuario.tipo})")

    return JsonResponse({
        'success': True,
        'usuario': {
            'id': usuario.id,
            'username': usuario.username,
            'nome': usuario.get_full_name() or usuario.username,
            'tipo': usuario.tipo,
        }
    })


@require_POST
def logout_view(request):
    if request.user.is_authenticated:
        logger.info(f"👋 Logout de {request.user.username}")
    logout(request)
    return JsonResponse({'success': True})


# === PAINEL ===

@ajax_requer_login
@require_GET
def api_estatisticas_painel(request):
    """
    Estatísticas do painel: totais de leads por fase e os mais recentes
    """
    stats = calcular_estatisticas_painel(request.user)

    return JsonResponse({
        'success': True,
        'stats': stats,
        'timestamp': timezone.now().isoformat()
    })


@ajax_requer_login
@require_POST
def criar_imovel(request):
    """Cadastro de imóvel via formulário"""
    form = ImovelForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors.get_json_data()}, status=400)

    try:
        imovel = async_to_sync(RepositorioDjango(request.user).inserir)('imoveis', dict(form.cleaned_data))
    except ErroRemoto as e:
        return JsonResponse({'success': False, 'error': e.mensagem})

    return JsonResponse({'success': True, 'imovel': imovel})


# === DOCUMENTAÇÃO ===

def _captacao_visivel(repositorio, captacao_id):
    encontradas = async_to_sync(repositorio.buscar)('captacoes', {'pk': captacao_id})
    if not encontradas:
        raise Http404('Captação não encontrada')
    return encontradas[0]


@ajax_requer_login
@require_GET
def documentacao_view(request, captacao_id):
    """
    Dossiê de documentos de uma captação com percentual de completude
    """
    repositorio = RepositorioDjango(request.user)
    captacao = _captacao_visivel(repositorio, captacao_id)

    try:
        resumo = async_to_sync(carregar_documentacao)(repositorio, captacao_id)
    except ErroRemoto as e:
        return JsonResponse({'success': False, 'error': e.mensagem})

    return JsonResponse({'success': True, 'captacao': captacao, 'documentacao': resumo})


@ajax_requer_login
@require_POST
def marcar_checklist_view(request, captacao_id):
    """
    Marca/desmarca um documento no checklist
    Corpo: {"tipo_documento": "matricula", "marcado": true}
    """
    try:
        dados = ler_json(request)
    except CorpoInvalido as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    tipo_documento = dados.get('tipo_documento')
    if not tipo_documento:
        return JsonResponse({'success': False, 'error': 'Informe o tipo de documento'}, status=400)

    repositorio = RepositorioDjango(request.user)
    _captacao_visivel(repositorio, captacao_id)

    notificador = NotificadorMemoria()
    resumo = async_to_sync(marcar_checklist)(
        repositorio,
        notificador,
        captacao_id,
        tipo_documento,
        bool(dados.get('marcado', True)),
        request.user.pk,
    )

    return JsonResponse({
        'success': resumo is not None,
        'documentacao': resumo,
        'notificacoes': notificador.como_lista(),
    })


@ajax_requer_login
@require_POST
def registrar_documento_view(request, captacao_id):
    """
    Registra no dossiê um arquivo já enviado ao storage
    Corpo (form): tipo_documento, url, nome_arquivo
    """
    repositorio = RepositorioDjango(request.user)
    _captacao_visivel(repositorio, captacao_id)

    form = DocumentoImovelForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors.get_json_data()}, status=400)

    notificador = NotificadorMemoria()
    resumo = async_to_sync(registrar_documento)(
        repositorio, notificador, captacao_id, dict(form.cleaned_data), request.user.pk
    )

    return JsonResponse({
        'success': resumo is not None,
        'documentacao': resumo,
        'notificacoes': notificador.como_lista(),
    })


@ajax_requer_login
@require_POST
def remover_documento_view(request, captacao_id, documento_id):
    """Exclui o registro de um documento do dossiê"""
    repositorio = RepositorioDjango(request.user)
    _captacao_visivel(repositorio, captacao_id)

    notificador = NotificadorMemoria()
    resumo = async_to_sync(remover_documento)(repositorio, notificador, captacao_id, documento_id)

    return JsonResponse({
        'success': resumo is not None,
        'documentacao': resumo,
        'notificacoes': notificador.como_lista(),
    })


# === MONITORAMENTO ===

@require_GET
def health_check(request):
    """
    Health check para monitoramento
    """
    try:
        # Verificar conexão com banco
        Usuario.objects.exists()

        # Verificar cache (Redis em produção)
        cache.set('health_check', 'ok', 60)
        cache.get('health_check')

        status = {
            'status': 'healthy',
            'database': 'ok',
            'cache': 'ok',
            'timestamp': timezone.now().isoformat(),
            'version': VERSAO
        }

        return JsonResponse(status)

    except (DatabaseError, ConnectionError) as e:
        logger.error(f"❌ Health check falhou: {e}")
        status = {
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
            'version': VERSAO
        }

        return JsonResponse(status, status=500)
