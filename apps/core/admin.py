# apps/core/admin.py

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import (
    Usuario, Lead, Imovel, Captacao, Campanha, AcaoCampanha,
    PosicaoCanvas, LeadImovel, DocumentoImovel, ChecklistDocumento
)
from .utils import formatar_moeda


def badge(cor, texto):
    return format_html(
        '<span style="background-color: {}; color: white; '
        'padding: 3px 8px; border-radius: 4px; font-size: 11px;">{}</span>',
        cor, texto
    )


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """Admin customizado para o modelo Usuario"""

    list_display = [
        'username', 'email', 'get_full_name', 'tipo_badge',
        'is_active', 'date_joined'
    ]
    list_filter = ['tipo', 'is_staff', 'is_active', 'date_joined']
    search_fields = ['username', 'first_name', 'last_name', 'email']
    ordering = ['-date_joined']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Informações Adicionais', {
            'fields': ('tipo', 'telefone', 'foto')
        }),
    )

    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Informações Adicionais', {
            'fields': ('tipo', 'telefone')
        }),
    )

    def tipo_badge(self, obj):
        """Exibe o tipo de usuário com badge colorido"""
        cores = {
            'gerente': '#F59E0B',  # amarelo
            'corretor': '#3B82F6'  # azul
        }
        return badge(cores.get(obj.tipo, '#6B7280'), obj.get_tipo_display())

    tipo_badge.short_description = 'Tipo'


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    """Admin do funil de leads"""

    list_display = ['nome', 'email', 'telefone', 'status_badge', 'valor_formatado', 'responsavel', 'criado_em']
    list_filter = ['status', 'origem', 'responsavel', 'criado_em']
    search_fields = ['nome', 'email', 'telefone', 'observacoes']
    readonly_fields = ['criado_em', 'atualizado_em']

    fieldsets = (
        ('Contato', {
            'fields': ('nome', 'email', 'telefone', 'origem')
        }),
        ('Funil', {
            'fields': ('status', 'valor', 'responsavel', 'observacoes')
        }),
        ('Datas', {
            'fields': ('criado_em', 'atualizado_em'),
            'classes': ('collapse',)
        })
    )

    def status_badge(self, obj):
        cores = {
            'novo': '#3B82F6',
            'qualificado': '#8B5CF6',
            'visita': '#F59E0B',
            'proposta': '#F97316',
            'fechado': '#10B981'
        }
        return badge(cores.get(obj.status, '#6B7280'), obj.get_status_display())

    status_badge.short_description = 'Status'

    def valor_formatado(self, obj):
        return formatar_moeda(obj.valor) or '-'

    valor_formatado.short_description = 'Valor'


@admin.register(Imovel)
class ImovelAdmin(admin.ModelAdmin):
    """Admin de imóveis"""

    list_display = ['titulo', 'localizacao', 'preco_formatado', 'quartos', 'conexoes_count', 'criado_por']
    list_filter = ['quartos', 'criado_por']
    search_fields = ['titulo', 'localizacao', 'descricao']
    readonly_fields = ['criado_em', 'atualizado_em']

    def preco_formatado(self, obj):
        return formatar_moeda(obj.preco)

    preco_formatado.short_description = 'Preço'

    def conexoes_count(self, obj):
        """Leads interessados"""
        return obj.conexoes.count()

    conexoes_count.short_description = 'Leads'


@admin.register(Captacao)
class CaptacaoAdmin(admin.ModelAdmin):
    """Admin do funil de captações"""

    list_display = [
        'nome_proprietario', 'endereco', 'tipo_imovel', 'status',
        'documentacao_badge', 'responsavel', 'criado_em'
    ]
    list_filter = ['status', 'status_documentacao', 'tipo_imovel', 'responsavel']
    search_fields = ['nome_proprietario', 'endereco', 'contato']
    readonly_fields = ['criado_em', 'atualizado_em']

    def documentacao_badge(self, obj):
        cores = {
            'pendente': '#EF4444',
            'parcial': '#F59E0B',
            'completo': '#10B981'
        }
        return badge(cores.get(obj.status_documentacao, '#6B7280'), obj.get_status_documentacao_display())

    documentacao_badge.short_description = 'Documentação'


class AcaoCampanhaInline(admin.TabularInline):
    model = AcaoCampanha
    extra = 0
    fields = ['etapa', 'titulo', 'icone', 'concluida', 'data_conclusao']
    readonly_fields = ['data_conclusao']


@admin.register(Campanha)
class CampanhaAdmin(admin.ModelAdmin):
    """Admin de campanhas com as ações inline"""

    list_display = ['titulo', 'imovel', 'status_badge', 'progresso_display', 'criado_por', 'criado_em']
    list_filter = ['status', 'criado_por']
    search_fields = ['titulo', 'descricao']
    readonly_fields = ['criado_em', 'atualizado_em']
    inlines = [AcaoCampanhaInline]

    def status_badge(self, obj):
        cores = {
            'active': '#10B981',
            'paused': '#F59E0B',
            'completed': '#6B7280'
        }
        return badge(cores.get(obj.status, '#6B7280'), obj.get_status_display())

    status_badge.short_description = 'Status'

    def progresso_display(self, obj):
        return f"{obj.progresso()}%"

    progresso_display.short_description = 'Progresso'


@admin.register(AcaoCampanha)
class AcaoCampanhaAdmin(admin.ModelAdmin):
    """Admin das ações de campanha"""

    list_display = ['titulo', 'campanha', 'etapa', 'concluida_badge', 'data_conclusao']
    list_filter = ['etapa', 'concluida', 'campanha']
    search_fields = ['titulo', 'descricao', 'campanha__titulo']

    def concluida_badge(self, obj):
        if obj.concluida:
            return badge('#10B981', 'Concluída')
        return badge('#6B7280', 'Pendente')

    concluida_badge.short_description = 'Situação'


@admin.register(PosicaoCanvas)
class PosicaoCanvasAdmin(admin.ModelAdmin):
    list_display = ['usuario', 'tipo_no', 'id_no', 'posicao_x', 'posicao_y', 'atualizado_em']
    list_filter = ['tipo_no', 'usuario']


@admin.register(LeadImovel)
class LeadImovelAdmin(admin.ModelAdmin):
    list_display = ['lead', 'imovel', 'criado_em']
    search_fields = ['lead__nome', 'imovel__titulo']


@admin.register(DocumentoImovel)
class DocumentoImovelAdmin(admin.ModelAdmin):
    list_display = ['nome_arquivo', 'tipo_documento', 'captacao', 'usuario', 'data_upload']
    list_filter = ['tipo_documento']
    search_fields = ['nome_arquivo', 'captacao__nome_proprietario']


@admin.register(ChecklistDocumento)
class ChecklistDocumentoAdmin(admin.ModelAdmin):
    list_display = ['captacao', 'tipo_documento', 'marcado', 'data_marcado', 'usuario']
    list_filter = ['tipo_documento', 'marcado']
