# apps/pipeline/__init__.py

"""
Pipeline - Quadros de etapas do CRM

Funcionalidades:
- Funil de leads, funil de captações e ações de campanha
- Movimentação otimista com reversão em caso de falha
- WebSockets para atualizações em tempo real
"""
