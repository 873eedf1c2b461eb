# apps/conexoes/__init__.py

"""
Conexões - Canvas de leads e imóveis

Funcionalidades:
- Posições dos cards gravadas por usuário
- Conexões lead ↔ imóvel desenhadas no canvas
- Layout automático em duas colunas
"""
