# apps/core/__init__.py

"""
Core - Aplicação principal do Flow Imob CRM

Contém:
- Models (Usuario, Lead, Imovel, Captacao, Campanha, ...)
- Repositório remoto com escopo por usuário
- Notificações, permissões e dossiê de documentação
- Comando de seed para desenvolvimento
"""
