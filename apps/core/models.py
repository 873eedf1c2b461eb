# apps/core/models.py

from django.contrib.auth.models import AbstractUser
from django.core.validators import MinValueValidator
from django.db import models
from PIL import Image


class Usuario(AbstractUser):
    """
    Modelo de usuário customizado do CRM

    Gerentes enxergam todos os registros da imobiliária, corretores
    apenas os registros pelos quais são responsáveis.
    """

    TIPO_CHOICES = [
        ('gerente', 'Gerente'),
        ('corretor', 'Corretor'),
    ]

    # === INFORMAÇÕES PESSOAIS ===
    telefone = models.CharField(max_length=20, blank=True)
    foto = models.ImageField(upload_to='usuarios/', blank=True, null=True)
    tipo = models.CharField(max_length=20, choices=TIPO_CHOICES, default='corretor')

    # === METADADOS ===
    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'usuario'

    def save(self, *args, **kwargs):
        """
        Override do save para redimensionar foto automaticamente
        """
        super().save(*args, **kwargs)

        if self.foto:
            try:
                img = Image.open(self.foto.path)
            except (OSError, ValueError):
                return
            if img.height > 300 or img.width > 300:
                img.thumbnail((300, 300))
                img.save(self.foto.path)

    @property
    def is_gerente(self):
        return self.tipo == 'gerente' or self.is_superuser

    def __str__(self):
        nome_completo = self.get_full_name()
        if nome_completo:
            return f"{nome_completo} ({self.get_tipo_display()})"
        return self.username


class Lead(models.Model):
    """Lead comercial - percorre o funil de vendas"""

    STATUS_CHOICES = [
        ('novo', 'Novo Lead'),
        ('qualificado', 'Qualificado'),
        ('visita', 'Visita Agendada'),
        ('proposta', 'Proposta Enviada'),
        ('fechado', 'Fechado'),
    ]

    nome = models.CharField(max_length=200)
    email = models.EmailField(blank=True, null=True)
    telefone = models.CharField(max_length=20, blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='novo', db_index=True)
    valor = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)]
    )
    origem = models.CharField(max_length=100, blank=True, null=True)
    observacoes = models.TextField(blank=True, null=True)
    responsavel = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='leads'
    )

    # Posição legada no canvas (antes da tabela de posições por usuário)
    posicao_x = models.FloatField(null=True, blank=True)
    posicao_y = models.FloatField(null=True, blank=True)

    criado_em = models.DateTimeField(auto_now_add=True, db_index=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'lead'
        ordering = ['-criado_em']
        indexes = [
            models.Index(fields=['responsavel', 'status'], name='lead_resp_status_idx'),
        ]

    def __str__(self):
        return f"{self.nome} - {self.get_status_display()}"

    def get_iniciais(self):
        """Iniciais para o avatar do card: 'Maria Souza' -> 'MS'"""
        return ''.join(parte[0] for parte in self.nome.split()).upper()


class Imovel(models.Model):
    """Imóvel disponível para venda/locação"""

    titulo = models.CharField(max_length=200)
    localizacao = models.CharField(max_length=255)
    preco = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    area = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    quartos = models.PositiveIntegerField(null=True, blank=True)
    banheiros = models.PositiveIntegerField(null=True, blank=True)
    descricao = models.TextField(blank=True, null=True)
    fotos = models.JSONField(default=list, blank=True)
    criado_por = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='imoveis'
    )

    posicao_x = models.FloatField(null=True, blank=True)
    posicao_y = models.FloatField(null=True, blank=True)

    criado_em = models.DateTimeField(auto_now_add=True, db_index=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'imovel'
        ordering = ['-criado_em']
        verbose_name = 'Imóvel'
        verbose_name_plural = 'Imóveis'

    def __str__(self):
        return f"{self.titulo} ({self.localizacao})"


class Captacao(models.Model):
    """Captação de imóvel junto ao proprietário"""

    STATUS_CHOICES = [
        ('prospeccao', 'Prospecção / Leads Frios'),
        ('contato_inicial', 'Contato Inicial'),
        ('interesse_confirmado', 'Interesse Confirmado'),
        ('documentacao_analise', 'Documentação em Análise'),
        ('vistoria_avaliacao', 'Vistoria / Avaliação'),
        ('proposta_enviada', 'Proposta Comercial Enviada'),
        ('aguardando_assinatura', 'Aguardando Assinatura'),
        ('captado', 'Imóvel Captado (Em Estoque)'),
        ('rejeitado', 'Rejeitado / Sem Interesse'),
    ]

    DOCUMENTACAO_CHOICES = [
        ('pendente', 'Pendente'),
        ('parcial', 'Parcial'),
        ('completo', 'Completo'),
    ]

    nome_proprietario = models.CharField(max_length=200)
    contato = models.CharField(max_length=100, blank=True, null=True)
    endereco = models.CharField(max_length=255)
    tipo_imovel = models.CharField(max_length=50)
    valor_estimado = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    status_documentacao = models.CharField(
        max_length=20,
        choices=DOCUMENTACAO_CHOICES,
        default='pendente'
    )
    ultima_interacao = models.DateTimeField(null=True, blank=True)
    observacoes = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=30, choices=STATUS_CHOICES, default='prospeccao', db_index=True)
    tags = models.JSONField(default=list, blank=True)
    responsavel = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='captacoes'
    )

    criado_em = models.DateTimeField(auto_now_add=True, db_index=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'captacao'
        ordering = ['-criado_em']
        verbose_name = 'Captação'
        verbose_name_plural = 'Captações'

    def __str__(self):
        return f"{self.nome_proprietario} - {self.endereco}"


class Campanha(models.Model):
    """Campanha de marketing de um imóvel"""

    STATUS_CHOICES = [
        ('active', 'Ativa'),
        ('paused', 'Pausada'),
        ('completed', 'Concluída'),
    ]

    titulo = models.CharField(max_length=200)
    descricao = models.TextField(blank=True, null=True)
    imovel = models.ForeignKey(
        Imovel,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='campanhas'
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    criado_por = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='campanhas'
    )

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'campanha'
        ordering = ['-criado_em']

    def __str__(self):
        return self.titulo

    def progresso(self):
        """Percentual de ações concluídas"""
        total = self.acoes.count()
        if total == 0:
            return 0
        return round(self.acoes.filter(concluida=True).count() / total * 100)


class AcaoCampanha(models.Model):
    """Ação de uma campanha - card do quadro de campanha"""

    ETAPA_CHOICES = [
        ('captacao', 'Captação'),
        ('atracao', 'Atração'),
        ('engajamento', 'Engajamento'),
        ('conversao', 'Conversão'),
        ('pos_venda', 'Pós-venda'),
    ]

    campanha = models.ForeignKey(
        Campanha,
        on_delete=models.CASCADE,
        related_name='acoes'
    )
    etapa = models.CharField(max_length=20, choices=ETAPA_CHOICES, default='captacao', db_index=True)
    titulo = models.CharField(max_length=200)
    descricao = models.TextField(blank=True, null=True)
    icone = models.CharField(max_length=50, default='check-circle')
    concluida = models.BooleanField(default=False)
    data_conclusao = models.DateTimeField(null=True, blank=True)
    observacoes = models.TextField(blank=True, null=True)
    arquivo_url = models.URLField(blank=True, null=True)
    link_externo = models.URLField(blank=True, null=True)
    usuario = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='acoes_campanha'
    )

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'acao_campanha'
        ordering = ['criado_em']
        verbose_name = 'Ação de campanha'
        verbose_name_plural = 'Ações de campanha'

    def __str__(self):
        return f"{self.titulo} ({self.get_etapa_display()})"


class PosicaoCanvas(models.Model):
    """Posição de um card no canvas de conexões, por usuário"""

    TIPO_NO_CHOICES = [
        ('lead', 'Lead'),
        ('imovel', 'Imóvel'),
    ]

    usuario = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='posicoes_canvas'
    )
    tipo_no = models.CharField(max_length=10, choices=TIPO_NO_CHOICES)
    id_no = models.CharField(max_length=64)
    posicao_x = models.FloatField(default=0)
    posicao_y = models.FloatField(default=0)

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'posicao_canvas'
        unique_together = ['usuario', 'tipo_no', 'id_no']

    def __str__(self):
        return f"{self.tipo_no}-{self.id_no} ({self.posicao_x}, {self.posicao_y})"


class LeadImovel(models.Model):
    """Conexão entre um lead e um imóvel de interesse"""

    lead = models.ForeignKey(
        Lead,
        on_delete=models.CASCADE,
        related_name='conexoes'
    )
    imovel = models.ForeignKey(
        Imovel,
        on_delete=models.CASCADE,
        related_name='conexoes'
    )
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'lead_imovel'
        unique_together = ['lead', 'imovel']
        verbose_name = 'Conexão lead/imóvel'
        verbose_name_plural = 'Conexões lead/imóvel'

    def __str__(self):
        return f"{self.lead.nome} ↔ {self.imovel.titulo}"


class DocumentoImovel(models.Model):
    """Documento enviado para o dossiê de uma captação"""

    captacao = models.ForeignKey(
        Captacao,
        on_delete=models.CASCADE,
        related_name='documentos'
    )
    tipo_documento = models.CharField(max_length=50, db_index=True)
    url = models.CharField(max_length=500)
    nome_arquivo = models.CharField(max_length=255)
    data_upload = models.DateTimeField(auto_now_add=True)
    usuario = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='documentos_imovel'
    )

    class Meta:
        db_table = 'documento_imovel'
        ordering = ['-data_upload']

    def __str__(self):
        return f"{self.tipo_documento} - {self.nome_arquivo}"


class ChecklistDocumento(models.Model):
    """Marcação manual de documento conferido"""

    captacao = models.ForeignKey(
        Captacao,
        on_delete=models.CASCADE,
        related_name='checklist'
    )
    tipo_documento = models.CharField(max_length=50)
    marcado = models.BooleanField(default=False)
    data_marcado = models.DateTimeField(null=True, blank=True)
    usuario = models.ForeignKey(
        Usuario,
        on_delete=models.CASCADE,
        related_name='checklist_documentos'
    )

    criado_em = models.DateTimeField(auto_now_add=True)
    atualizado_em = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'checklist_documento'
        unique_together = ['captacao', 'tipo_documento']

    def __str__(self):
        return f"{self.tipo_documento}: {'✔' if self.marcado else '✘'}"
