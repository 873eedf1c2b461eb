# apps/core/forms.py

from django import forms
from django.core.exceptions import ValidationError

from .documentacao import TIPOS_DOCUMENTO
from .models import AcaoCampanha, Campanha, Captacao, DocumentoImovel, Imovel, Lead

INPUT = 'form-input w-full px-4 py-2 border rounded-lg'
TEXTAREA = 'form-textarea w-full px-4 py-2 border rounded-lg'
SELECT = 'form-select w-full px-4 py-2 border rounded-lg'


class LeadForm(forms.ModelForm):
    """Formulário de cadastro de lead"""

    class Meta:
        model = Lead
        fields = ['nome', 'email', 'telefone', 'status', 'valor', 'origem', 'observacoes']
        widgets = {
            'nome': forms.TextInput(attrs={'class': INPUT, 'placeholder': 'Nome completo'}),
            'email': forms.EmailInput(attrs={'class': INPUT, 'placeholder': 'email@exemplo.com'}),
            'telefone': forms.TextInput(attrs={'class': INPUT, 'placeholder': '(11) 99999-9999'}),
            'status': forms.Select(attrs={'class': SELECT}),
            'valor': forms.NumberInput(attrs={'class': INPUT, 'step': '0.01'}),
            'origem': forms.TextInput(attrs={'class': INPUT, 'placeholder': 'Ex: Instagram, indicação'}),
            'observacoes': forms.Textarea(attrs={'class': TEXTAREA, 'rows': 3}),
        }

    def clean(self):
        """Lead precisa de pelo menos um meio de contato"""
        cleaned_data = super().clean()
        if not cleaned_data.get('email') and not cleaned_data.get('telefone'):
            raise ValidationError('Informe email ou telefone do lead')
        return cleaned_data


class ImovelForm(forms.ModelForm):
    """Formulário de cadastro de imóvel"""

    class Meta:
        model = Imovel
        fields = ['titulo', 'localizacao', 'preco', 'area', 'quartos', 'banheiros', 'descricao']
        widgets = {
            'titulo': forms.TextInput(attrs={'class': INPUT, 'placeholder': 'Ex: Apartamento 3 quartos'}),
            'localizacao': forms.TextInput(attrs={'class': INPUT, 'placeholder': 'Bairro, cidade'}),
            'preco': forms.NumberInput(attrs={'class': INPUT, 'step': '0.01'}),
            'area': forms.NumberInput(attrs={'class': INPUT, 'step': '0.01'}),
            'quartos': forms.NumberInput(attrs={'class': INPUT}),
            'banheiros': forms.NumberInput(attrs={'class': INPUT}),
            'descricao': forms.Textarea(attrs={'class': TEXTAREA, 'rows': 4}),
        }


class CaptacaoForm(forms.ModelForm):
    """Formulário de nova captação de imóvel"""

    tags = forms.CharField(
        required=False,
        help_text='Separadas por vírgula',
        widget=forms.TextInput(attrs={'class': INPUT, 'placeholder': 'urgente, exclusividade'})
    )

    class Meta:
        model = Captacao
        fields = [
            'nome_proprietario', 'contato', 'endereco', 'tipo_imovel',
            'valor_estimado', 'status', 'observacoes', 'tags',
        ]
        widgets = {
            'nome_proprietario': forms.TextInput(attrs={'class': INPUT}),
            'contato': forms.TextInput(attrs={'class': INPUT, 'placeholder': 'Telefone ou email'}),
            'endereco': forms.TextInput(attrs={'class': INPUT}),
            'tipo_imovel': forms.TextInput(attrs={'class': INPUT, 'placeholder': 'Casa, apartamento...'}),
            'valor_estimado': forms.NumberInput(attrs={'class': INPUT, 'step': '0.01'}),
            'status': forms.Select(attrs={'class': SELECT}),
            'observacoes': forms.Textarea(attrs={'class': TEXTAREA, 'rows': 3}),
        }

    def clean_tags(self):
        tags = self.cleaned_data.get('tags') or ''
        return [tag.strip() for tag in tags.split(',') if tag.strip()]


class CampanhaForm(forms.ModelForm):
    """Formulário de nova campanha de marketing"""

    class Meta:
        model = Campanha
        fields = ['titulo', 'descricao', 'imovel', 'status']
        widgets = {
            'titulo': forms.TextInput(attrs={'class': INPUT, 'placeholder': 'Ex: Campanha Apartamento Centro'}),
            'descricao': forms.Textarea(attrs={'class': TEXTAREA, 'rows': 3}),
            'imovel': forms.Select(attrs={'class': SELECT}),
            'status': forms.Select(attrs={'class': SELECT}),
        }

    def __init__(self, *args, **kwargs):
        usuario = kwargs.pop('usuario', None)
        super().__init__(*args, **kwargs)

        # Corretores só vinculam imóveis que cadastraram
        if usuario is not None and not usuario.is_gerente:
            self.fields['imovel'].queryset = Imovel.objects.filter(criado_por=usuario)


class AcaoCampanhaForm(forms.ModelForm):
    """Formulário de ação avulsa numa campanha"""

    class Meta:
        model = AcaoCampanha
        fields = ['etapa', 'titulo', 'descricao', 'link_externo']
        widgets = {
            'etapa': forms.Select(attrs={'class': SELECT}),
            'titulo': forms.TextInput(attrs={'class': INPUT}),
            'descricao': forms.Textarea(attrs={'class': TEXTAREA, 'rows': 3}),
            'link_externo': forms.URLInput(attrs={'class': INPUT, 'placeholder': 'https://'}),
        }


class MaterialAcaoForm(forms.ModelForm):
    """Arquivo, link e observações anexados a uma ação de campanha"""

    class Meta:
        model = AcaoCampanha
        fields = ['arquivo_url', 'link_externo', 'observacoes']
        widgets = {
            'arquivo_url': forms.URLInput(attrs={'class': INPUT}),
            'link_externo': forms.URLInput(attrs={'class': INPUT, 'placeholder': 'https://'}),
            'observacoes': forms.Textarea(attrs={'class': TEXTAREA, 'rows': 3}),
        }

    def clean(self):
        cleaned_data = super().clean()
        if not any(cleaned_data.get(campo) for campo in self.Meta.fields):
            raise ValidationError('Informe um arquivo, link ou observação')
        return cleaned_data


class DocumentoImovelForm(forms.ModelForm):
    """Registro de um documento já enviado ao storage"""

    tipo_documento = forms.ChoiceField(
        choices=[(tipo.chave, tipo.rotulo) for tipo in TIPOS_DOCUMENTO.values()],
        widget=forms.Select(attrs={'class': SELECT})
    )

    class Meta:
        model = DocumentoImovel
        fields = ['tipo_documento', 'url', 'nome_arquivo']
        widgets = {
            'url': forms.TextInput(attrs={'class': INPUT}),
            'nome_arquivo': forms.TextInput(attrs={'class': INPUT}),
        }


FORMULARIOS = {
    'leads': LeadForm,
    'captacoes': CaptacaoForm,
    'acoes': AcaoCampanhaForm,
    'imoveis': ImovelForm,
}
