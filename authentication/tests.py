from datetime import timedelta
from io import StringIO

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from users.models import MacAddress
from .tokens import generate_token, decode_token

User = get_user_model()


class SignupAPITestCase(APITestCase):
    """
    Test cases for public account creation
    """

    def test_signup_creates_user(self):
        response = self.client.post('/api/auth/signup/', {
            'name': 'Jane Doe',
            'email': 'Jane@Example.com',
            'password': 'secret-pass-42',
            'number': '+15550100',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['email'], 'jane@example.com')
        self.assertEqual(response.data['role'], 'USER')
        self.assertNotIn('password', response.data)

        user = User.objects.get(email='jane@example.com')
        self.assertTrue(user.check_password('secret-pass-42'))

    def test_signup_ignores_requested_role(self):
        response = self.client.post('/api/auth/signup/', {
            'name': 'Sneaky',
            'email': 'sneaky@example.com',
            'password': 'secret-pass-42',
            'role': 'ADMIN',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(User.objects.get(email='sneaky@example.com').role, User.Role.USER)

    def test_signup_duplicate_email(self):
        User.objects.create_user(email='taken@example.com', password='secret-pass-42', name='Taken')

        response = self.client.post('/api/auth/signup/', {
            'name': 'Again',
            'email': 'TAKEN@example.com',
            'password': 'secret-pass-42',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data['details'])

    def test_signup_missing_fields(self):
        response = self.client.post('/api/auth/signup/', {'email': 'x@example.com'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)
        self.assertIn('password', response.data['details'])


class LoginAPITestCase(APITestCase):
    """
    Test cases for email/password login
    """

    def setUp(self):
        self.user = User.objects.create_user(
            email='student@test.com',
            password='testpass123',
            name='Test Student'
        )

    def test_login_returns_token_and_user(self):
        response = self.client.post('/api/auth/login/', {
            'email': 'student@test.com',
            'password': 'testpass123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['user']['id'], self.user.id)

        payload = decode_token(response.data['token'])
        self.assertEqual(payload['id'], self.user.id)
        self.assertEqual(payload['role'], 'USER')

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_login_unknown_email(self):
        response = self.client.post('/api/auth/login/', {
            'email': 'nobody@test.com',
            'password': 'testpass123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'User not found')

    def test_login_wrong_password(self):
        response = self.client.post('/api/auth/login/', {
            'email': 'student@test.com',
            'password': 'wrong',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error'], 'Invalid credentials')


class JWTAuthenticationTestCase(APITestCase):
    """
    Test cases for bearer token handling on protected endpoints
    """

    def setUp(self):
        self.user = User.objects.create_user(
            email='student@test.com',
            password='testpass123',
            name='Test Student'
        )

    def test_valid_token(self):
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {generate_token(self.user)}')
        response = self.client.get('/api/onboarding/status/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'is_onboarded': False})

    def test_missing_token(self):
        response = self.client.get('/api/onboarding/status/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'error': 'Unauthorized access'})

    def test_malformed_token(self):
        self.client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
        response = self.client.get('/api/onboarding/status/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'error': 'Invalid or expired token'})

    def test_expired_token(self):
        issued = timezone.now() - timedelta(days=2)
        token = jwt.encode(
            {'id': self.user.id, 'role': self.user.role, 'iat': issued, 'exp': issued + timedelta(hours=1)},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = self.client.get('/api/onboarding/status/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data, {'error': 'Invalid or expired token'})

    def test_token_for_deleted_user(self):
        token = generate_token(self.user)
        self.user.delete()
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = self.client.get('/api/onboarding/status/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_token_signed_with_other_secret(self):
        token = jwt.encode(
            {'id': self.user.id, 'exp': timezone.now() + timedelta(hours=1)},
            'some-other-secret',
            algorithm='HS256',
        )
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
        response = self.client.get('/api/onboarding/status/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class MacAddressAPITestCase(APITestCase):
    """
    Test cases for device MAC address registration
    """

    def setUp(self):
        self.user = User.objects.create_user(
            email='student@test.com',
            password='testpass123',
            name='Test Student'
        )
        self.client.force_authenticate(user=self.user)

    def test_register_addresses(self):
        response = self.client.post('/api/auth/mac-address/', {
            'mac_addresses': ['aa:bb:cc:dd:ee:ff', '11-22-33-44-55-66'],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'MAC addresses added successfully!')
        self.assertEqual(
            set(self.user.mac_addresses.values_list('address', flat=True)),
            {'AA:BB:CC:DD:EE:FF', '11:22:33:44:55:66'}
        )

    def test_existing_address_rejects_whole_request(self):
        MacAddress.objects.create(user=self.user, address='AA:BB:CC:DD:EE:FF')

        response = self.client.post('/api/auth/mac-address/', {
            'mac_addresses': ['11:22:33:44:55:66', 'AA:BB:CC:DD:EE:FF'],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('AA:BB:CC:DD:EE:FF', response.data['error'])
        self.assertEqual(self.user.mac_addresses.count(), 1)

    def test_invalid_address(self):
        response = self.client.post('/api/auth/mac-address/', {
            'mac_addresses': ['not-a-mac'],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(self.user.mac_addresses.count(), 0)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.post('/api/auth/mac-address/', {
            'mac_addresses': ['AA:BB:CC:DD:EE:FF'],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class CreateAdminCommandTestCase(TestCase):

    def test_creates_admin(self):
        call_command('create_admin', email='boss@test.com', password='testpass123', stdout=StringIO())

        admin = User.objects.get(email='boss@test.com')
        self.assertEqual(admin.role, User.Role.ADMIN)
        self.assertFalse(admin.is_superuser)

    def test_promotes_existing_user(self):
        User.objects.create_user(email='user@test.com', password='testpass123', name='User')

        call_command('create_admin', email='user@test.com', password='ignored', stdout=StringIO())

        self.assertEqual(User.objects.get(email='user@test.com').role, User.Role.ADMIN)
