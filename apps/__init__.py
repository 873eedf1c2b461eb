# apps/__init__.py

"""
Flow Imob CRM - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Models, repositório, autenticação e permissões
- pipeline: Quadros de etapas (leads, captações, ações de campanha)
- conexoes: Canvas de conexões entre leads e imóveis
"""

__version__ = '0.1.0'
__author__ = 'Equipe Flow Imob'
