# apps/pipeline/views.py

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.http import Http404, JsonResponse
from django.views.decorators.http import require_GET, require_POST

from apps.core.forms import FORMULARIOS, CampanhaForm, MaterialAcaoForm
from apps.core.notificacoes import NotificadorMemoria
from apps.core.permissions import ajax_requer_login
from apps.core.repositorio import RepositorioDjango
from apps.core.utils import CorpoInvalido, ler_json
from .campanhas import alternar_conclusao, anexar_material, criar_campanha
from .etapas import QUADROS
from .quadro import EventoArraste, QuadroEtapas

logger = logging.getLogger(__name__)


def nome_grupo(quadro, campanha=None):
    """Grupo de canal compartilhado pelas sessões abertas no mesmo quadro"""
    return f'pipeline_{quadro}_{campanha}' if campanha else f'pipeline_{quadro}'


def montar_quadro(request, nome, campanha=None):
    """
    Instancia o controlador do quadro para esta requisição
    O quadro de ações é sempre filtrado por campanha
    """
    config = QUADROS.get(nome)
    if config is None:
        raise Http404(f'Quadro desconhecido: {nome}')

    filtros = {'campanha_id': campanha} if campanha else None
    notificador = NotificadorMemoria()
    quadro = QuadroEtapas(config, RepositorioDjango(request.user), notificador, filtros=filtros)
    return quadro, notificador


def resposta(sucesso, notificador, status=200, **extra):
    return JsonResponse(
        {'success': sucesso, 'notificacoes': notificador.como_lista(), **extra},
        status=status
    )


def avisar_grupo(quadro, campanha, usuario):
    """Pede às outras sessões do quadro que recarreguem"""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    logger.debug(f"📡 Quadro {nome_grupo(quadro, campanha)} alterado por {usuario.username}")
    async_to_sync(channel_layer.group_send)(
        nome_grupo(quadro, campanha),
        {
            'type': 'quadro_atualizado',
            'origem': None,
            'usuario': usuario.get_full_name() or usuario.username,
        }
    )


@ajax_requer_login
@require_GET
def quadro_view(request, quadro):
    """
    Carrega o quadro e devolve as colunas
    GET /pipeline/<quadro>/[?campanha=<id>]
    """
    campanha = request.GET.get('campanha')
    if quadro == 'acoes' and not campanha:
        return JsonResponse({'success': False, 'error': 'Informe a campanha'}, status=400)

    controlador, notificador = montar_quadro(request, quadro, campanha)
    estado = async_to_sync(controlador.carregar)()

    return resposta(True, notificador, estado=estado)


@ajax_requer_login
@require_POST
def mover_item(request, quadro):
    """
    Fim de um arraste no quadro
    Corpo: {"item_id", "destino", "deslocamento"?, "campanha"?}
    """
    try:
        dados = ler_json(request)
    except CorpoInvalido as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    campanha = dados.get('campanha')
    if quadro == 'acoes' and not campanha:
        return JsonResponse({'success': False, 'error': 'Informe a campanha'}, status=400)

    try:
        evento = EventoArraste.de_dict(dados)
    except (TypeError, ValueError):
        return JsonResponse({'success': False, 'error': 'Parâmetros inválidos'}, status=400)

    controlador, notificador = montar_quadro(request, quadro, campanha)

    async def executar():
        await controlador.carregar()
        return await controlador.mover(evento)

    movido = async_to_sync(executar)()

    if movido:
        avisar_grupo(quadro, campanha, request.user)

    return resposta(movido, notificador, estado=controlador.estado())


@ajax_requer_login
@require_POST
def criar_item(request, quadro):
    """Cria um item do quadro a partir do formulário"""
    form_class = FORMULARIOS.get(quadro)
    if form_class is None or quadro not in QUADROS:
        raise Http404(f'Quadro desconhecido: {quadro}')

    campanha = request.POST.get('campanha')
    if quadro == 'acoes' and not campanha:
        return JsonResponse({'success': False, 'error': 'Informe a campanha'}, status=400)

    form = form_class(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors.get_json_data()}, status=400)

    valores = dict(form.cleaned_data)
    if quadro == 'acoes':
        valores.update({'campanha_id': campanha, 'usuario_id': request.user.pk})

    controlador, notificador = montar_quadro(request, quadro, campanha)
    item = async_to_sync(controlador.criar)(valores)

    if item is None:
        return resposta(False, notificador)

    avisar_grupo(quadro, campanha, request.user)
    return resposta(True, notificador, item=item)


@ajax_requer_login
@require_POST
def editar_item(request, quadro, item_id):
    """
    Edição de um card pelo formulário completo
    O card pode mudar de coluna se o formulário trouxer outra etapa
    """
    form_class = FORMULARIOS.get(quadro)
    if form_class is None or quadro not in QUADROS:
        raise Http404(f'Quadro desconhecido: {quadro}')

    form = form_class(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors.get_json_data()}, status=400)

    controlador, notificador = montar_quadro(request, quadro)
    item = async_to_sync(controlador.editar)(item_id, dict(form.cleaned_data))

    if item is None:
        return resposta(False, notificador)

    avisar_grupo(quadro, item.get('campanha_id'), request.user)
    return resposta(True, notificador, item=item)


@ajax_requer_login
@require_POST
def excluir_item(request, quadro, item_id):
    """Exclui um item (a confirmação acontece no cliente)"""
    campanha = request.POST.get('campanha')
    controlador, notificador = montar_quadro(request, quadro, campanha)

    excluido = async_to_sync(controlador.excluir)(item_id)

    if excluido:
        avisar_grupo(quadro, campanha, request.user)
    return resposta(excluido, notificador)


@ajax_requer_login
@require_POST
def criar_campanha_view(request):
    """Cria campanha com as ações padrão"""
    form = CampanhaForm(request.POST, usuario=request.user)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors.get_json_data()}, status=400)

    notificador = NotificadorMemoria()
    campanha = async_to_sync(criar_campanha)(
        RepositorioDjango(request.user),
        notificador,
        dict(form.cleaned_data),
        request.user.pk,
    )

    if campanha is None:
        return resposta(False, notificador)
    return resposta(True, notificador, campanha=campanha)


@ajax_requer_login
@require_POST
def concluir_acao(request, acao_id):
    """
    Marca/desmarca uma ação de campanha como concluída
    Corpo: {"concluida": true|false}
    """
    try:
        dados = ler_json(request)
    except CorpoInvalido as e:
        return JsonResponse({'success': False, 'error': str(e)}, status=400)

    concluida = bool(dados.get('concluida', True))
    notificador = NotificadorMemoria()
    acao = async_to_sync(alternar_conclusao)(
        RepositorioDjango(request.user), notificador, acao_id, concluida
    )

    if acao is None:
        return resposta(False, notificador)

    avisar_grupo('acoes', acao['campanha_id'], request.user)
    return resposta(True, notificador, acao=acao)


@ajax_requer_login
@require_POST
def material_acao(request, acao_id):
    """
    Anexa arquivo, link externo e observações a uma ação
    Corpo (form): arquivo_url, link_externo, observacoes
    """
    form = MaterialAcaoForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form.errors.get_json_data()}, status=400)

    notificador = NotificadorMemoria()
    acao = async_to_sync(anexar_material)(
        RepositorioDjango(request.user), notificador, acao_id, dict(form.cleaned_data)
    )

    if acao is None:
        return resposta(False, notificador)

    avisar_grupo('acoes', acao['campanha_id'], request.user)
    return resposta(True, notificador, acao=acao)
