# apps/core/utils.py

import hashlib
import json
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional

from django.db.models import Count, Q


class CorpoInvalido(Exception):
    """Corpo de requisição que não é um objeto JSON"""


def ler_json(request) -> Dict:
    """
    Lê o corpo JSON de uma requisição AJAX
    Levanta CorpoInvalido para JSON malformado ou que não seja objeto
    """
    try:
        dados = json.loads(request.body or b'{}')
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise CorpoInvalido('JSON inválido')

    if not isinstance(dados, dict):
        raise CorpoInvalido('O corpo deve ser um objeto JSON')
    return dados


def gerar_cor(texto: str) -> str:
    """
    Gera uma cor consistente baseada num texto
    Útil para avatares de leads e usuários sem foto
    """
    hash_hex = hashlib.md5(texto.encode()).hexdigest()
    return f"#{hash_hex[:6]}"


def formatar_moeda(valor) -> Optional[str]:
    """
    Formata valor em reais no padrão brasileiro
    Ex: 1234567.8 -> "R$ 1.234.567,80"
    """
    if valor in (None, ''):
        return None
    try:
        valor = Decimal(str(valor))
    except InvalidOperation:
        return None

    inteiro, centavos = f"{valor:,.2f}".split('.')
    return f"R$ {inteiro.replace(',', '.')},{centavos}"


def calcular_estatisticas_painel(usuario) -> Dict:
    """
    Estatísticas do painel inicial
    Gerentes veem todos os leads, corretores apenas os próprios
    """
    from .models import Lead

    leads = Lead.objects.all()
    if not usuario.is_gerente:
        leads = leads.filter(responsavel=usuario)

    totais = leads.aggregate(
        total=Count('id'),
        novos=Count('id', filter=Q(status='novo')),
        em_andamento=Count('id', filter=Q(status__in=['qualificado', 'visita', 'proposta'])),
        convertidos=Count('id', filter=Q(status='fechado')),
    )

    recentes = [
        {
            'id': lead.id,
            'nome': lead.nome,
            'email': lead.email,
            'status': lead.status,
            'status_display': lead.get_status_display(),
            'valor': lead.valor,
            'iniciais': lead.get_iniciais(),
            'cor': gerar_cor(lead.nome),
            'criado_em': lead.criado_em,
        }
        for lead in leads.order_by('-criado_em')[:5]
    ]

    return {**totais, 'leads_recentes': recentes}
