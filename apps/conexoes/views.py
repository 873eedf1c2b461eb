# apps/conexoes/views.py

from asgiref.sync import async_to_sync
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from apps.core.notificacoes import NotificadorMemoria
from apps.core.permissions import ajax_requer_login
from apps.core.repositorio import RepositorioDjango
from apps.core.utils import CorpoInvalido, ler_json
from .canvas import GrafoCanvas


def montar_grafo(request):
    notificador = NotificadorMemoria()
    grafo = GrafoCanvas(RepositorioDjango(request.user), notificador, request.user.pk)
    return grafo, notificador


def resposta(sucesso, notificador, status=200, **extra):
    return JsonResponse(
        {'success': sucesso, 'notificacoes': notificador.como_lista(), **extra},
        status=status
    )


def erro_corpo(mensagem):
    return JsonResponse({'success': False, 'error': mensagem}, status=400)


@ajax_requer_login
@require_GET
def grafo_view(request):
    """Nós e arestas do canvas do usuário"""
    grafo, notificador = montar_grafo(request)
    estado = async_to_sync(grafo.carregar)()
    return resposta(True, notificador, estado=estado)


@ajax_requer_login
@require_POST
def salvar_posicao(request):
    """
    Fim do arraste de um nó
    Corpo: {"no": "lead-12", "x": 10.5, "y": 200}
    """
    try:
        dados = ler_json(request)
        no_id = dados['no']
        x, y = float(dados['x']), float(dados['y'])
    except CorpoInvalido as e:
        return erro_corpo(str(e))
    except (KeyError, TypeError, ValueError):
        return erro_corpo('Parâmetros inválidos')

    grafo, notificador = montar_grafo(request)
    try:
        salvo = async_to_sync(grafo.salvar_posicao)(no_id, x, y)
    except ValueError as e:
        return erro_corpo(str(e))

    return resposta(salvo, notificador)


@ajax_requer_login
@require_POST
def conectar(request):
    """
    Nova conexão desenhada no canvas
    Corpo: {"origem": "lead-1", "destino": "imovel-3"} (em qualquer ordem)
    """
    try:
        dados = ler_json(request)
    except CorpoInvalido as e:
        return erro_corpo(str(e))

    origem, destino = dados.get('origem'), dados.get('destino')
    if not origem or not destino:
        return erro_corpo('Parâmetros inválidos')

    grafo, notificador = montar_grafo(request)

    async def executar():
        await grafo.carregar()
        return await grafo.conectar(origem, destino)

    aresta = async_to_sync(executar)()

    if aresta is None:
        return resposta(False, notificador)
    return resposta(True, notificador, aresta=aresta.como_dict())


@ajax_requer_login
@require_POST
def remover_conexoes(request):
    """
    Remove várias conexões de uma vez
    Corpo: {"arestas": ["edge-1-3", "edge-2-3"]}
    """
    try:
        dados = ler_json(request)
    except CorpoInvalido as e:
        return erro_corpo(str(e))

    ids = dados.get('arestas')
    if not isinstance(ids, list):
        return erro_corpo('Parâmetros inválidos')

    grafo, notificador = montar_grafo(request)

    async def executar():
        await grafo.carregar()
        return await grafo.remover_arestas(ids)

    removidas = async_to_sync(executar)()

    return resposta(len(removidas) == len(ids), notificador, removidas=removidas, estado=grafo.estado())


@ajax_requer_login
@require_POST
def auto_layout(request):
    """Layout automático: devolve as novas posições sem gravá-las"""
    grafo, notificador = montar_grafo(request)

    async def executar():
        await grafo.carregar()
        return await grafo.auto_layout()

    estado = async_to_sync(executar)()
    return resposta(True, notificador, estado=estado)
