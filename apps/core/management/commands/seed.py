# apps/core/management/commands/seed.py

from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from apps.core.models import (
    Usuario, Lead, Imovel, Captacao, Campanha, AcaoCampanha, LeadImovel
)
from apps.pipeline.etapas import ACOES_PADRAO

LEADS_DEMO = [
    ('Ana Souza', 'ana@example.com', '11 98888-0001', 'novo', '450000', 'Site'),
    ('Bruno Lima', 'bruno@example.com', '11 98888-0002', 'qualificado', '720000', 'Indicação'),
    ('Carla Mendes', None, '11 98888-0003', 'visita', '380000', 'Portal'),
    ('Diego Alves', 'diego@example.com', None, 'proposta', '1250000', 'Instagram'),
    ('Elisa Prado', 'elisa@example.com', '11 98888-0005', 'fechado', '610000', 'Site'),
]

IMOVEIS_DEMO = [
    ('Apartamento Vila Mariana', 'São Paulo - SP', '690000', 2, 2),
    ('Casa Alphaville', 'Barueri - SP', '1800000', 4, 5),
    ('Studio Pinheiros', 'São Paulo - SP', '420000', 1, 1),
]

CAPTACOES_DEMO = [
    ('Roberto Dias', 'Rua das Flores, 120', 'Apartamento', 'prospeccao'),
    ('Marta Nunes', 'Av. Paulista, 900', 'Sala comercial', 'documentacao_analise'),
    ('José Ramos', 'Rua Augusta, 45', 'Casa', 'captado'),
]


class Command(BaseCommand):
    help = 'Popula o banco com um gerente e dados de demonstração do CRM'

    def add_arguments(self, parser):
        parser.add_argument('--username', default='gerente', help='Usuário demo (padrão: gerente)')
        parser.add_argument('--password', default='flowimob123', help='Senha do usuário demo')

    def handle(self, *args, **options):
        """
        Cria um gerente com leads em todas as fases, imóveis, captações,
        uma campanha com as ações padrão e uma conexão lead-imóvel.
        Não faz nada se o usuário demo já tiver leads.
        """
        username = options['username']

        self.stdout.write('🌱 Populando dados de demonstração...')

        usuario, criado = Usuario.objects.get_or_create(
            username=username,
            defaults={'tipo': 'gerente', 'email': f'{username}@flowimob.com.br', 'first_name': 'Gerente'},
        )
        if criado:
            usuario.set_password(options['password'])
            usuario.save()
            self.stdout.write(f'  👤 Usuário criado: {username}')
        elif usuario.leads.exists():
            raise CommandError(f'Usuário {username} já possui dados. Nada foi criado.')

        with transaction.atomic():
            leads = self._criar_leads(usuario)
            imoveis = self._criar_imoveis(usuario)
            self._criar_captacoes(usuario)
            self._criar_campanha(usuario, imoveis[0])

            LeadImovel.objects.create(lead=leads[1], imovel=imoveis[0])
            self.stdout.write('  🔗 Conexão criada entre lead e imóvel')

        self.stdout.write(
            self.style.SUCCESS(
                '\n✅ DADOS DEMO CRIADOS!\n'
                f'  🔑 Acesse com: {username}/{options["password"]}\n'
            )
        )

    def _criar_leads(self, usuario):
        leads = [
            Lead.objects.create(
                nome=nome, email=email, telefone=telefone, status=status,
                valor=Decimal(valor), origem=origem, responsavel=usuario,
            )
            for nome, email, telefone, status, valor, origem in LEADS_DEMO
        ]
        self.stdout.write(f'  📋 {len(leads)} leads')
        return leads

    def _criar_imoveis(self, usuario):
        imoveis = [
            Imovel.objects.create(
                titulo=titulo, localizacao=localizacao, preco=Decimal(preco),
                quartos=quartos, banheiros=banheiros, criado_por=usuario,
            )
            for titulo, localizacao, preco, quartos, banheiros in IMOVEIS_DEMO
        ]
        self.stdout.write(f'  🏠 {len(imoveis)} imóveis')
        return imoveis

    def _criar_captacoes(self, usuario):
        for nome, endereco, tipo, status in CAPTACOES_DEMO:
            Captacao.objects.create(
                nome_proprietario=nome, endereco=endereco, tipo_imovel=tipo,
                status=status, responsavel=usuario, tags=['demo'],
            )
        self.stdout.write(f'  📑 {len(CAPTACOES_DEMO)} captações')

    def _criar_campanha(self, usuario, imovel):
        campanha = Campanha.objects.create(
            titulo=f'Lançamento {imovel.titulo}',
            descricao='Campanha de demonstração',
            imovel=imovel,
            criado_por=usuario,
        )
        AcaoCampanha.objects.bulk_create([
            AcaoCampanha(
                campanha=campanha, etapa=etapa, titulo=titulo,
                descricao=descricao, icone=icone, usuario=usuario,
            )
            for etapa, titulo, descricao, icone in ACOES_PADRAO
        ])
        self.stdout.write(f'  📣 Campanha com {len(ACOES_PADRAO)} ações padrão')
