from datetime import datetime, timezone as dt_timezone
from io import StringIO

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from courses.models import Course, Schedule, Project
from .admin import EnrollmentAdmin
from .models import Enrollment

User = get_user_model()


class EnrollmentAPITestCase(APITestCase):
    """
    Test cases for self-enrollment, admin assignment and the user's course list
    """

    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@test.com', password='testpass123', name='Admin', role=User.Role.ADMIN
        )
        self.student = User.objects.create_user(email='student@test.com', password='testpass123', name='Student')
        self.course = Course.objects.create(name='Web Development', created_by=self.admin)
        self.other_course = Course.objects.create(name='Data Science', created_by=self.admin)

    def test_enroll(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/course/enroll/', {'course_id': self.course.id}, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['enrollment']['user_id'], self.student.id)
        self.assertIsNone(response.data['enrollment']['enrolled_by_id'])
        self.assertTrue(Enrollment.objects.filter(user=self.student, course=self.course).exists())

    def test_enroll_twice(self):
        Enrollment.objects.create(user=self.student, course=self.course)

        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/course/enroll/', {'course_id': self.course.id}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Already enrolled in this course')
        self.assertEqual(Enrollment.objects.filter(user=self.student, course=self.course).count(), 1)

    def test_enroll_unknown_course(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/course/enroll/', {'course_id': 999999}, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_enroll_unauthenticated(self):
        response = self.client.post('/api/course/enroll/', {'course_id': self.course.id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_assign(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post('/api/course/assign/', {
            'user_id': self.student.id,
            'course_id': self.course.id,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        enrollment = Enrollment.objects.get(user=self.student, course=self.course)
        self.assertEqual(enrollment.enrolled_by, self.admin)
        self.assertFalse(enrollment.is_self_enrollment)

    def test_self_enrollment_flag(self):
        self.client.force_authenticate(user=self.student)
        self.client.post('/api/course/enroll/', {'course_id': self.course.id}, format='json')
        enrolled = Enrollment.objects.get(user=self.student, course=self.course)
        assigned = Enrollment.objects.create(user=self.student, course=self.other_course, enrolled_by=self.admin)

        self.assertTrue(enrolled.is_self_enrollment)
        self.assertFalse(assigned.is_self_enrollment)

        model_admin = EnrollmentAdmin(Enrollment, admin.site)
        self.assertIn('self_enrolled', model_admin.list_display)
        self.assertTrue(model_admin.self_enrolled(enrolled))
        self.assertFalse(model_admin.self_enrolled(assigned))

    def test_assign_duplicate(self):
        Enrollment.objects.create(user=self.student, course=self.course)

        self.client.force_authenticate(user=self.admin)
        response = self.client.post('/api/course/assign/', {
            'user_id': self.student.id,
            'course_id': self.course.id,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'User is already enrolled in this course')

    def test_assign_unknown_user_or_course(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post('/api/course/assign/', {'user_id': 999999, 'course_id': self.course.id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.post('/api/course/assign/', {'user_id': self.student.id, 'course_id': 999999}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_assign_non_admin(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/course/assign/', {
            'user_id': self.student.id,
            'course_id': self.course.id,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_my_courses(self):
        Enrollment.objects.create(user=self.student, course=self.course)
        Schedule.objects.create(
            course=self.course, date=datetime(2024, 5, 6, 9, 0, tzinfo=dt_timezone.utc), topic='Kickoff'
        )
        Project.objects.create(course=self.course, name='Todo app')

        self.client.force_authenticate(user=self.student)
        response = self.client.get('/api/course/my-courses/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['name'], 'Web Development')
        self.assertEqual(response.data[0]['schedules'][0]['topic'], 'Kickoff')
        self.assertEqual(response.data[0]['projects'][0]['name'], 'Todo app')


class EnrollStudentsCommandTestCase(TestCase):

    def setUp(self):
        self.course = Course.objects.create(name='Web Development')
        self.alice = User.objects.create_user(email='alice@test.com', password='testpass123', name='Alice')
        self.bob = User.objects.create_user(email='bob@test.com', password='testpass123', name='Bob')
        User.objects.create_user(email='admin@test.com', password='testpass123', name='Admin', role=User.Role.ADMIN)

    def test_enrolls_every_regular_user(self):
        Enrollment.objects.create(user=self.alice, course=self.course)

        call_command('enroll_students', course_id=self.course.id, stdout=StringIO())

        self.assertEqual(
            set(self.course.enrollments.values_list('user__email', flat=True)),
            {'alice@test.com', 'bob@test.com'}
        )

    def test_dry_run(self):
        call_command('enroll_students', course_id=self.course.id, dry_run=True, stdout=StringIO())
        self.assertEqual(self.course.enrollments.count(), 0)

    def test_selected_emails(self):
        call_command('enroll_students', course_id=self.course.id, emails=['BOB@test.com'], stdout=StringIO())
        self.assertEqual(list(self.course.enrollments.values_list('user', flat=True)), [self.bob.id])
