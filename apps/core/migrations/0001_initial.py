import django.contrib.auth.models
import django.contrib.auth.validators
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='Usuario',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('telefone', models.CharField(blank=True, max_length=20)),
                ('foto', models.ImageField(blank=True, null=True, upload_to='usuarios/')),
                ('tipo', models.CharField(choices=[('gerente', 'Gerente'), ('corretor', 'Corretor')], default='corretor', max_length=20)),
                ('criado_em', models.DateTimeField(auto_now_add=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'db_table': 'usuario',
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Imovel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('titulo', models.CharField(max_length=200)),
                ('localizacao', models.CharField(max_length=255)),
                ('preco', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(0)])),
                ('area', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('quartos', models.PositiveIntegerField(blank=True, null=True)),
                ('banheiros', models.PositiveIntegerField(blank=True, null=True)),
                ('descricao', models.TextField(blank=True, null=True)),
                ('fotos', models.JSONField(blank=True, default=list)),
                ('posicao_x', models.FloatField(blank=True, null=True)),
                ('posicao_y', models.FloatField(blank=True, null=True)),
                ('criado_em', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
                ('criado_por', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='imoveis', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Imóvel',
                'verbose_name_plural': 'Imóveis',
                'db_table': 'imovel',
                'ordering': ['-criado_em'],
            },
        ),
        migrations.CreateModel(
            name='Lead',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome', models.CharField(max_length=200)),
                ('email', models.EmailField(blank=True, max_length=254, null=True)),
                ('telefone', models.CharField(blank=True, max_length=20, null=True)),
                ('status', models.CharField(choices=[('novo', 'Novo Lead'), ('qualificado', 'Qualificado'), ('visita', 'Visita Agendada'), ('proposta', 'Proposta Enviada'), ('fechado', 'Fechado')], db_index=True, default='novo', max_length=20)),
                ('valor', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('origem', models.CharField(blank=True, max_length=100, null=True)),
                ('observacoes', models.TextField(blank=True, null=True)),
                ('posicao_x', models.FloatField(blank=True, null=True)),
                ('posicao_y', models.FloatField(blank=True, null=True)),
                ('criado_em', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
                ('responsavel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='leads', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'lead',
                'ordering': ['-criado_em'],
                'indexes': [models.Index(fields=['responsavel', 'status'], name='lead_resp_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='Captacao',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome_proprietario', models.CharField(max_length=200)),
                ('contato', models.CharField(blank=True, max_length=100, null=True)),
                ('endereco', models.CharField(max_length=255)),
                ('tipo_imovel', models.CharField(max_length=50)),
                ('valor_estimado', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('status_documentacao', models.CharField(choices=[('pendente', 'Pendente'), ('parcial', 'Parcial'), ('completo', 'Completo')], default='pendente', max_length=20)),
                ('ultima_interacao', models.DateTimeField(blank=True, null=True)),
                ('observacoes', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('prospeccao', 'Prospecção / Leads Frios'), ('contato_inicial', 'Contato Inicial'), ('interesse_confirmado', 'Interesse Confirmado'), ('documentacao_analise', 'Documentação em Análise'), ('vistoria_avaliacao', 'Vistoria / Avaliação'), ('proposta_enviada', 'Proposta Comercial Enviada'), ('aguardando_assinatura', 'Aguardando Assinatura'), ('captado', 'Imóvel Captado (Em Estoque)'), ('rejeitado', 'Rejeitado / Sem Interesse')], db_index=True, default='prospeccao', max_length=30)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('criado_em', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
                ('responsavel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='captacoes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Captação',
                'verbose_name_plural': 'Captações',
                'db_table': 'captacao',
                'ordering': ['-criado_em'],
            },
        ),
        migrations.CreateModel(
            name='Campanha',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('titulo', models.CharField(max_length=200)),
                ('descricao', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('active', 'Ativa'), ('paused', 'Pausada'), ('completed', 'Concluída')], default='active', max_length=20)),
                ('criado_em', models.DateTimeField(auto_now_add=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
                ('criado_por', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='campanhas', to=settings.AUTH_USER_MODEL)),
                ('imovel', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='campanhas', to='core.imovel')),
            ],
            options={
                'db_table': 'campanha',
                'ordering': ['-criado_em'],
            },
        ),
        migrations.CreateModel(
            name='AcaoCampanha',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('etapa', models.CharField(choices=[('captacao', 'Captação'), ('atracao', 'Atração'), ('engajamento', 'Engajamento'), ('conversao', 'Conversão'), ('pos_venda', 'Pós-venda')], db_index=True, default='captacao', max_length=20)),
                ('titulo', models.CharField(max_length=200)),
                ('descricao', models.TextField(blank=True, null=True)),
                ('icone', models.CharField(default='check-circle', max_length=50)),
                ('concluida', models.BooleanField(default=False)),
                ('data_conclusao', models.DateTimeField(blank=True, null=True)),
                ('observacoes', models.TextField(blank=True, null=True)),
                ('arquivo_url', models.URLField(blank=True, null=True)),
                ('link_externo', models.URLField(blank=True, null=True)),
                ('criado_em', models.DateTimeField(auto_now_add=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
                ('campanha', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='acoes', to='core.campanha')),
                ('usuario', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='acoes_campanha', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Ação de campanha',
                'verbose_name_plural': 'Ações de campanha',
                'db_table': 'acao_campanha',
                'ordering': ['criado_em'],
            },
        ),
        migrations.CreateModel(
            name='PosicaoCanvas',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tipo_no', models.CharField(choices=[('lead', 'Lead'), ('imovel', 'Imóvel')], max_length=10)),
                ('id_no', models.CharField(max_length=64)),
                ('posicao_x', models.FloatField(default=0)),
                ('posicao_y', models.FloatField(default=0)),
                ('criado_em', models.DateTimeField(auto_now_add=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
                ('usuario', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='posicoes_canvas', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'posicao_canvas',
                'unique_together': {('usuario', 'tipo_no', 'id_no')},
            },
        ),
        migrations.CreateModel(
            name='LeadImovel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('criado_em', models.DateTimeField(auto_now_add=True)),
                ('imovel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='conexoes', to='core.imovel')),
                ('lead', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='conexoes', to='core.lead')),
            ],
            options={
                'verbose_name': 'Conexão lead/imóvel',
                'verbose_name_plural': 'Conexões lead/imóvel',
                'db_table': 'lead_imovel',
                'unique_together': {('lead', 'imovel')},
            },
        ),
        migrations.CreateModel(
            name='DocumentoImovel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tipo_documento', models.CharField(db_index=True, max_length=50)),
                ('url', models.CharField(max_length=500)),
                ('nome_arquivo', models.CharField(max_length=255)),
                ('data_upload', models.DateTimeField(auto_now_add=True)),
                ('captacao', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documentos', to='core.captacao')),
                ('usuario', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='documentos_imovel', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'documento_imovel',
                'ordering': ['-data_upload'],
            },
        ),
        migrations.CreateModel(
            name='ChecklistDocumento',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tipo_documento', models.CharField(max_length=50)),
                ('marcado', models.BooleanField(default=False)),
                ('data_marcado', models.DateTimeField(blank=True, null=True)),
                ('criado_em', models.DateTimeField(auto_now_add=True)),
                ('atualizado_em', models.DateTimeField(auto_now=True)),
                ('captacao', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='checklist', to='core.captacao')),
                ('usuario', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='checklist_documentos', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'checklist_documento',
                'unique_together': {('captacao', 'tipo_documento')},
            },
        ),
    ]
