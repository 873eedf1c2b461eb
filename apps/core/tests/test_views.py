"""
Testes de autenticação, painel, cadastro de imóvel e health check

Rodar:
    python manage.py test apps.core.tests.test_views
"""

from django.test import TestCase
from django.urls import reverse

from apps.core.models import Imovel, Lead, Usuario


class LoginViewTest(TestCase):

    def setUp(self):
        self.usuario = Usuario.objects.create_user('maria', password='senha123', tipo='gerente')

    def test_login_valido(self):
        response = self.client.post(reverse('core:login'), {'username': 'maria', 'password': 'senha123'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['usuario']['tipo'], 'gerente')
        self.assertEqual(int(self.client.session['_auth_user_id']), self.usuario.id)

    def test_senha_errada(self):
        response = self.client.post(reverse('core:login'), {'username': 'maria', 'password': 'errada'})

        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['success'])

    def test_logout(self):
        self.client.force_login(self.usuario)

        response = self.client.post(reverse('core:logout'))

        self.assertTrue(response.json()['success'])
        self.assertNotIn('_auth_user_id', self.client.session)


class PainelViewTest(TestCase):

    def setUp(self):
        self.corretor = Usuario.objects.create_user('corretor', password='senha123')
        self.gerente = Usuario.objects.create_user('gerente', password='senha123', tipo='gerente')
        for status in ('novo', 'novo', 'visita', 'fechado'):
            Lead.objects.create(nome=f'Lead {status}', telefone='1', status=status, responsavel=self.corretor)
        Lead.objects.create(nome='Do gerente', telefone='1', status='proposta', responsavel=self.gerente)

    def test_exige_login(self):
        response = self.client.get(reverse('core:api_stats_painel'))

        self.assertEqual(response.status_code, 401)

    def test_corretor_conta_os_proprios(self):
        self.client.force_login(self.corretor)

        stats = self.client.get(reverse('core:api_stats_painel')).json()['stats']

        self.assertEqual(
            (stats['total'], stats['novos'], stats['em_andamento'], stats['convertidos']),
            (4, 2, 1, 1),
        )
        self.assertEqual(len(stats['leads_recentes']), 4)

    def test_gerente_conta_todos(self):
        self.client.force_login(self.gerente)

        stats = self.client.get(reverse('core:api_stats_painel')).json()['stats']

        self.assertEqual(stats['total'], 5)
        self.assertEqual(stats['em_andamento'], 2)
        self.assertEqual(len(stats['leads_recentes']), 5)


class CriarImovelViewTest(TestCase):

    def setUp(self):
        self.corretor = Usuario.objects.create_user('corretor', password='senha123')
        self.client.force_login(self.corretor)

    def test_cria_imovel_do_usuario(self):
        response = self.client.post(reverse('core:criar_imovel'), {
            'titulo': 'Cobertura', 'localizacao': 'Centro', 'preco': '990000.00', 'quartos': 3,
        })

        self.assertTrue(response.json()['success'])
        imovel = Imovel.objects.get()
        self.assertEqual(imovel.criado_por, self.corretor)

    def test_preco_obrigatorio(self):
        response = self.client.post(reverse('core:criar_imovel'), {'titulo': 'X', 'localizacao': 'Y'})

        self.assertEqual(response.status_code, 400)
        self.assertIn('preco', response.json()['errors'])


class HealthCheckTest(TestCase):

    def test_saudavel_sem_login(self):
        response = self.client.get(reverse('core:health'))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'healthy')
