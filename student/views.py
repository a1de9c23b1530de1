from django.contrib.auth import get_user_model
from django.db import IntegrityError
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
import logging

from authentication.permissions import IsAdminRole
from courses.models import Course, Schedule
from courses.serializers import EnrolledCourseSerializer
from .models import Enrollment, Attendance
from .serializers import (
    EnrollmentSerializer, SelfEnrollSerializer, AssignEnrollmentSerializer,
    AttendanceSerializer, UserAttendanceSerializer, ScheduleAttendanceSerializer,
    MarkAttendanceSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def invalid_input(serializer):
    return Response(
        {'error': 'Invalid input', 'details': serializer.errors},
        status=status.HTTP_400_BAD_REQUEST
    )


# ===== ENROLLMENT ENDPOINTS =====

class EnrollView(APIView):
    """
    Enroll the current user in a course
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = SelfEnrollSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer)

        try:
            course = Course.objects.get(id=serializer.validated_data['course_id'])
        except Course.DoesNotExist:
            return Response({'error': 'Course not found'}, status=status.HTTP_404_NOT_FOUND)

        already_enrolled = Response(
            {'error': 'Already enrolled in this course'},
            status=status.HTTP_400_BAD_REQUEST
        )
        if Enrollment.objects.filter(user=request.user, course=course).exists():
            return already_enrolled

        try:
            enrollment = Enrollment.objects.create(user=request.user, course=course)
        except IntegrityError:
            return already_enrolled

        logger.info(f"{request.user.email} enrolled in course {course.id}")
        return Response(
            {'message': 'Enrolled successfully', 'enrollment': EnrollmentSerializer(enrollment).data},
            status=status.HTTP_201_CREATED
        )


class AssignCourseView(APIView):
    """
    Enroll another user in a course (admin only)
    """
    permission_classes = [IsAdminRole]

    def post(self, request):
        serializer = AssignEnrollmentSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer)

        data = serializer.validated_data
        try:
            course = Course.objects.get(id=data['course_id'])
        except Course.DoesNotExist:
            return Response({'error': 'Course not found'}, status=status.HTTP_404_NOT_FOUND)

        try:
            user = User.objects.get(id=data['user_id'])
        except User.DoesNotExist:
            return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)

        already_enrolled = Response(
            {'error': 'User is already enrolled in this course'},
            status=status.HTTP_400_BAD_REQUEST
        )
        if Enrollment.objects.filter(user=user, course=course).exists():
            return already_enrolled

        try:
            enrollment = Enrollment.objects.create(user=user, course=course, enrolled_by=request.user)
        except IntegrityError:
            return already_enrolled

        logger.info(f"{request.user.email} assigned {user.email} to course {course.id}")
        return Response(
            {'message': 'User assigned to course successfully', 'enrollment': EnrollmentSerializer(enrollment).data},
            status=status.HTTP_201_CREATED
        )


class MyCoursesView(APIView):
    """
    Courses the current user is enrolled in, with schedules and projects
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        courses = (
            Course.objects
            .filter(enrollments__user=request.user)
            .prefetch_related('schedules', 'projects')
            .order_by('id')
        )
        return Response(EnrolledCourseSerializer(courses, many=True).data)


# ===== ATTENDANCE ENDPOINTS =====

class MarkAttendanceView(APIView):
    """
    Record minutes worked in a session. Repeated calls for the same
    user and schedule add up.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = MarkAttendanceSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer)

        data = serializer.validated_data
        caller = request.user
        user_id = data.get('user_id', caller.id)

        if user_id != caller.id and not caller.is_admin:
            logger.warning(f"{caller.email} tried to mark attendance for user {user_id}")
            return Response(
                {'error': 'You can only mark your own attendance'},
                status=status.HTTP_403_FORBIDDEN
            )

        try:
            schedule = Schedule.objects.get(id=data['schedule_id'])
        except Schedule.DoesNotExist:
            return Response({'error': 'Schedule not found'}, status=status.HTTP_404_NOT_FOUND)

        if user_id == caller.id:
            user = caller
        else:
            try:
                user = User.objects.get(id=user_id)
            except User.DoesNotExist:
                return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)

        if not caller.is_admin and not Enrollment.objects.filter(user=user, course_id=schedule.course_id).exists():
            return Response(
                {'error': 'You are not enrolled in this course'},
                status=status.HTTP_403_FORBIDDEN
            )

        attendance, created = Attendance.mark(user, schedule, data['time_worked'])
        logger.info(
            f"Attendance for {user.email} on schedule {schedule.id}: "
            f"+{data['time_worked']} min (total {attendance.time_worked})"
        )
        return Response(
            {
                'message': 'Attendance recorded' if created else 'Attendance updated',
                'attendance': AttendanceSerializer(attendance).data,
            },
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )


class UserAttendanceView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, user_id):
        if user_id != request.user.id and not request.user.is_admin:
            return Response(
                {'error': 'Access denied. Admins only.'},
                status=status.HTTP_403_FORBIDDEN
            )

        records = (
            Attendance.objects
            .filter(user_id=user_id)
            .select_related('schedule')
            .order_by('schedule__date', 'id')
        )
        return Response(UserAttendanceSerializer(records, many=True).data)


class ScheduleAttendanceView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, schedule_id):
        if not Schedule.objects.filter(id=schedule_id).exists():
            return Response({'error': 'Schedule not found'}, status=status.HTTP_404_NOT_FOUND)

        records = (
            Attendance.objects
            .filter(schedule_id=schedule_id)
            .select_related('user')
            .order_by('user__name', 'id')
        )
        return Response(ScheduleAttendanceSerializer(records, many=True).data)
