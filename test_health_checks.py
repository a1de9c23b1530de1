from unittest import mock

from django.db import OperationalError
from django.test import TestCase

from courses.models import Course


class HealthCheckTestCase(TestCase):

    def test_health(self):
        response = self.client.get('/health/')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'status': 'ok'})

    def test_health_is_mounted_at_site_root(self):
        self.assertEqual(self.client.get('/api/health/').status_code, 404)
        self.assertEqual(self.client.get('/health/db/').status_code, 200)

    def test_database_health(self):
        Course.objects.create(name='Web Development')

        response = self.client.get('/health/db/')

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body['status'], 'healthy')
        self.assertEqual(body['counts'], {'courses': 1, 'enrollments': 0, 'submissions': 0})

    @mock.patch('health_checks.Course.objects.count', side_effect=OperationalError('database is locked'))
    def test_database_unreachable(self, _count):
        response = self.client.get('/health/db/')

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()['status'], 'unhealthy')

    def test_root(self):
        response = self.client.get('/')
        self.assertEqual(response.json()['status'], 'running')
