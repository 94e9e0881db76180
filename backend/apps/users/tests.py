"""
Tests for the user endpoints.

Run: python manage.py test apps.users
"""
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from .models import User


class CurrentUserTest(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            username='ada', password='secret-pass-123',
            name='Ada Lovelace', image='https://example.com/ada.png'
        )

    def test_requires_auth(self):
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn('error', response.data)

    def test_returns_summary(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.data['user'], {
            'id': self.user.pk,
            'name': 'Ada Lovelace',
            'username': 'ada',
            'image': 'https://example.com/ada.png',
        })

    def test_token_login(self):
        response = self.client.post(
            '/api/auth/login/',
            {'username': 'ada', 'password': 'secret-pass-123'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = self.client.get('/api/auth/me/')
        self.assertEqual(me.data['user']['username'], 'ada')


class HealthCheckTest(TestCase):

    def test_health(self):
        response = self.client.get('/api/health/')
        self.assertEqual(response.json(), {'status': 'healthy', 'service': 'forge-api'})
