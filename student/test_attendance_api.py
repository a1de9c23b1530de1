from datetime import datetime, timezone as dt_timezone

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from courses.models import Course, Schedule
from .models import Enrollment, Attendance

User = get_user_model()


class AttendanceAPITestCase(APITestCase):
    """
    Test cases for recording and reading session attendance
    """

    def setUp(self):
        self.admin = User.objects.create_user(
            email='admin@test.com', password='testpass123', name='Admin', role=User.Role.ADMIN
        )
        self.student = User.objects.create_user(email='student@test.com', password='testpass123', name='Student')
        self.classmate = User.objects.create_user(email='classmate@test.com', password='testpass123', name='Classmate')

        self.course = Course.objects.create(name='Web Development', created_by=self.admin)
        self.other_course = Course.objects.create(name='Data Science', created_by=self.admin)
        self.session = Schedule.objects.create(
            course=self.course, date=datetime(2024, 5, 6, 9, 0, tzinfo=dt_timezone.utc), topic='Kickoff'
        )
        self.other_session = Schedule.objects.create(
            course=self.other_course, date=datetime(2024, 5, 6, 9, 0, tzinfo=dt_timezone.utc), topic='Pandas'
        )

        Enrollment.objects.create(user=self.student, course=self.course)
        Enrollment.objects.create(user=self.classmate, course=self.course)

    def test_mark_creates_then_accumulates(self):
        self.client.force_authenticate(user=self.student)

        response = self.client.post('/api/attendance/mark/', {
            'schedule_id': self.session.id,
            'time_worked': 30,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['attendance']['time_worked'], 30)

        response = self.client.post('/api/attendance/mark/', {
            'schedule_id': self.session.id,
            'time_worked': 15,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['attendance']['time_worked'], 45)

        self.assertEqual(Attendance.objects.filter(user=self.student, schedule=self.session).count(), 1)

    def test_mark_negative_time(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/attendance/mark/', {
            'schedule_id': self.session.id,
            'time_worked': -5,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_mark_not_enrolled(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/attendance/mark/', {
            'schedule_id': self.other_session.id,
            'time_worked': 30,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Attendance.objects.exists())

    def test_mark_for_someone_else_as_user(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/attendance/mark/', {
            'schedule_id': self.session.id,
            'time_worked': 30,
            'user_id': self.classmate.id,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_marks_for_user(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.post('/api/attendance/mark/', {
            'schedule_id': self.session.id,
            'time_worked': 60,
            'user_id': self.classmate.id,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Attendance.objects.get(user=self.classmate, schedule=self.session).time_worked, 60)

    def test_mark_unknown_schedule(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post('/api/attendance/mark/', {
            'schedule_id': 999999,
            'time_worked': 30,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_user_attendance(self):
        Attendance.objects.create(user=self.student, schedule=self.session, time_worked=40)
        Attendance.objects.create(user=self.classmate, schedule=self.session, time_worked=10)

        self.client.force_authenticate(user=self.student)
        response = self.client.get(f'/api/attendance/user/{self.student.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['time_worked'], 40)
        self.assertEqual(response.data[0]['schedule']['topic'], 'Kickoff')

    def test_user_attendance_of_someone_else(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(f'/api/attendance/user/{self.classmate.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f'/api/attendance/user/{self.classmate.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_schedule_attendance(self):
        Attendance.objects.create(user=self.student, schedule=self.session, time_worked=40)
        Attendance.objects.create(user=self.classmate, schedule=self.session, time_worked=10)

        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f'/api/attendance/schedule/{self.session.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            {row['user']['email']: row['time_worked'] for row in response.data},
            {'student@test.com': 40, 'classmate@test.com': 10}
        )

    def test_schedule_attendance_non_admin(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(f'/api/attendance/schedule/{self.session.id}/')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
