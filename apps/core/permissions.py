# apps/core/permissions.py

from functools import wraps

from django.http import JsonResponse


class PermissoesCRM:
    """
    Permissões do CRM baseadas no tipo de usuário: gerente ou corretor

    Gerentes enxergam os registros de todos os corretores; corretores
    apenas os próprios. Posições do canvas são sempre pessoais.
    """

    @staticmethod
    def is_gerente(user):
        """Verifica se é gerente (ou superusuário)"""
        return user.is_authenticated and user.is_gerente

    @staticmethod
    def ve_todos_registros(user, sempre_do_usuario=False):
        """Verifica se a consulta dispensa o filtro por dono"""
        return not sempre_do_usuario and PermissoesCRM.is_gerente(user)


# Decoradores para views

def ajax_requer_login(view_func):
    """
    Decorador para views JSON
    Retorna 401 ao invés de redirecionar para o login
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'success': False, 'error': 'Autenticação necessária'}, status=401)
        return view_func(request, *args, **kwargs)

    return wrapped_view
