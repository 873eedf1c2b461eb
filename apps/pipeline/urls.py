# apps/pipeline/urls.py

from django.urls import path
from . import views

app_name = 'pipeline'

urlpatterns = [
    # Campanhas
    path('campanhas/criar/', views.criar_campanha_view, name='criar_campanha'),
    path('acoes/<int:acao_id>/concluir/', views.concluir_acao, name='concluir_acao'),
    path('acoes/<int:acao_id>/material/', views.material_acao, name='material_acao'),

    # Quadros: leads, captacoes, acoes
    path('<str:quadro>/', views.quadro_view, name='quadro'),
    path('<str:quadro>/mover/', views.mover_item, name='mover_item'),
    path('<str:quadro>/criar/', views.criar_item, name='criar_item'),
    path('<str:quadro>/<int:item_id>/editar/', views.editar_item, name='editar_item'),
    path('<str:quadro>/<int:item_id>/excluir/', views.excluir_item, name='excluir_item'),
]
