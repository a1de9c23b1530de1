from datetime import datetime, timedelta, timezone as dt_timezone

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from student.models import Enrollment
from .models import Course, Schedule, Project

User = get_user_model()


class CourseAPITestCase(APITestCase):
    """
    Test cases for course listing, creation and the role-dependent detail view
    """

    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@test.com', password='testpass123', name='Admin', role=User.Role.ADMIN
        )
        self.student = User.objects.create_user(email='student@test.com', password='testpass123', name='Student')
        self.outsider = User.objects.create_user(email='outsider@test.com', password='testpass123', name='Outsider')

        self.course = Course.objects.create(
            name='Web Development',
            description='Build and deploy web apps',
            image_url='https://example.com/web.png',
            created_by=self.admin
        )
        self.schedule = Schedule.objects.create(
            course=self.course,
            date=datetime(2024, 5, 6, 10, 0, tzinfo=dt_timezone.utc),
            topic='HTML basics'
        )
        self.project = Project.objects.create(
            course=self.course,
            name='Portfolio site',
            due_date=datetime(2024, 5, 20, tzinfo=dt_timezone.utc) + timedelta(hours=12)
        )
        Enrollment.objects.create(user=self.student, course=self.course)

    def test_list_courses(self):
        Course.objects.create(name='Data Science')
        self.client.force_authenticate(user=self.outsider)
        response = self.client.get('/api/courses/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c['name'] for c in response.data], ['Web Development', 'Data Science'])
        self.assertEqual(
            set(response.data[0].keys()),
            {'id', 'name', 'description', 'image_url', 'created_at'}
        )

    def test_list_courses_unauthenticated(self):
        response = self.client.get('/api/courses/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_course(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post('/api/courses/', {
            'name': 'Mobile Apps',
            'description': 'Flutter from scratch',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Course created successfully')
        self.assertEqual(response.data['course']['created_by'], self.admin.id)
        self.assertTrue(Course.objects.filter(name='Mobile Apps', created_by=self.admin).exists())

    def test_create_course_non_admin(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/courses/', {'name': 'Nope'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Course.objects.filter(name='Nope').exists())

    def test_create_course_missing_name(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post('/api/courses/', {'description': 'No name'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data['details'])

    def test_detail_as_admin(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f'/api/courses/{self.course.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['schedules']), 1)
        self.assertEqual(len(response.data['projects']), 1)
        self.assertEqual(response.data['enrollments'][0]['user_id'], self.student.id)

    def test_detail_as_enrolled_user(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(f'/api/courses/{self.course.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['schedules'][0]['topic'], 'HTML basics')
        self.assertEqual(response.data['projects'][0]['name'], 'Portfolio site')
        self.assertNotIn('enrollments', response.data)

    def test_detail_as_outsider(self):
        self.client.force_authenticate(user=self.outsider)
        response = self.client.get(f'/api/courses/{self.course.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Web Development')
        self.assertNotIn('schedules', response.data)
        self.assertNotIn('projects', response.data)

    def test_detail_unknown_course(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get('/api/courses/999999/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data['error'], 'Course not found')
