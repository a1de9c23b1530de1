from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from courses.models import Course
from student.models import Enrollment
from .models import MacAddress

User = get_user_model()


class OnboardingAPITestCase(APITestCase):

    def setUp(self):
        self.user = User.objects.create_user(email='new@test.com', password='testpass123', name='New User')
        self.client.force_authenticate(user=self.user)

    def test_status_before_and_after_completion(self):
        response = self.client.get('/api/onboarding/status/')
        self.assertEqual(response.data, {'is_onboarded': False})

        response = self.client.post('/api/onboarding/complete/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.get('/api/onboarding/status/')
        self.assertEqual(response.data, {'is_onboarded': True})

    def test_onboarding_page_closed_once_onboarded(self):
        response = self.client.get('/api/onboarding/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.user.is_onboarded = True
        self.user.save()

        response = self.client.get('/api/onboarding/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data['error'], 'Onboarding already completed')


class UserAdminAPITestCase(APITestCase):
    """
    Test cases for the admin user directory
    """

    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@test.com', password='testpass123', name='Admin', role=User.Role.ADMIN
        )
        self.student = User.objects.create_user(email='student@test.com', password='testpass123', name='Student')
        self.course = Course.objects.create(name='Python 101', description='Intro', created_by=self.admin)
        Enrollment.objects.create(user=self.student, course=self.course)
        MacAddress.objects.create(user=self.student, address='AA:BB:CC:DD:EE:FF')

    def test_list_users_with_enrollments(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get('/api/users/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 2)

        student_data = next(u for u in response.data if u['id'] == self.student.id)
        self.assertEqual(len(student_data['enrollments']), 1)
        self.assertEqual(student_data['enrollments'][0]['course']['name'], 'Python 101')
        self.assertNotIn('password', student_data)

    def test_list_users_filtered_by_role(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get('/api/users/?role=admin')

        self.assertEqual([u['id'] for u in response.data], [self.admin.id])

    def test_list_users_non_admin(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get('/api/users/')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data, {'error': 'Access denied. Admins only.'})

    def test_profile(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f'/api/users/profile/{self.student.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'student@test.com')
        self.assertEqual(response.data['mac_addresses'][0]['address'], 'AA:BB:CC:DD:EE:FF')
        self.assertEqual(len(response.data['enrollments']), 1)

    def test_profile_unknown_user(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get('/api/users/profile/999999/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_promote_user(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(f'/api/users/{self.student.id}/role/', {'role': 'ADMIN'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.student.refresh_from_db()
        self.assertTrue(self.student.is_admin)

    def test_admin_cannot_demote_self(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(f'/api/users/{self.admin.id}/role/', {'role': 'USER'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.admin.refresh_from_db()
        self.assertTrue(self.admin.is_admin)

    def test_invalid_role(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.patch(f'/api/users/{self.student.id}/role/', {'role': 'teacher'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
