# apps/conexoes/urls.py

from django.urls import path
from . import views

app_name = 'conexoes'

urlpatterns = [
    path('grafo/', views.grafo_view, name='grafo'),
    path('posicao/', views.salvar_posicao, name='salvar_posicao'),
    path('conectar/', views.conectar, name='conectar'),
    path('remover/', views.remover_conexoes, name='remover'),
    path('auto-layout/', views.auto_layout, name='auto_layout'),
]
