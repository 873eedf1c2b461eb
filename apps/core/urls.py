# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    # === AUTENTICAÇÃO ===
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),

    # === IMÓVEIS ===
    path('imoveis/criar/', views.criar_imovel, name='criar_imovel'),

    # === DOCUMENTAÇÃO DE CAPTAÇÕES ===
    path('documentacao/<int:captacao_id>/', views.documentacao_view, name='documentacao'),
    path('documentacao/<int:captacao_id>/checklist/', views.marcar_checklist_view, name='marcar_checklist'),
    path('documentacao/<int:captacao_id>/documentos/', views.registrar_documento_view, name='registrar_documento'),
    path(
        'documentacao/<int:captacao_id>/documentos/<int:documento_id>/excluir/',
        views.remover_documento_view,
        name='remover_documento'
    ),

    # === MONITORAMENTO ===
    path('health/', views.health_check, name='health'),

    # === APIs AJAX ===
    path('api/painel/stats/', views.api_estatisticas_painel, name='api_stats_painel'),
]
