from datetime import datetime, time as dt_time, timedelta, timezone as dt_timezone
import logging
import time

from django.conf import settings
from django.db import IntegrityError
from django.db.models import Prefetch
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import IsAdminRole
from bunny_cdn import BunnyCDNService, BunnyCDNError, review_video_file_name
from student.models import Enrollment
from .models import Course, Schedule, Project, ProjectSubmission
from .serializers import (
    CourseListSerializer, CourseCreateSerializer, CourseSerializer,
    CourseDetailSerializer, EnrolledCourseSerializer, CoursePreviewSerializer,
    ScheduleSerializer, ScheduleCreateSerializer, ScheduleUpdateSerializer,
    ProjectSerializer, ProjectWithStatusSerializer, ProjectCreateSerializer,
    ProjectSubmissionSerializer, ProjectSubmitSerializer, CourseSubmissionSerializer,
    ProjectReviewSerializer, SubmissionListSerializer, AdminProjectSerializer,
    UserProjectStatusSerializer,
)

logger = logging.getLogger(__name__)


def invalid_input(serializer):
    return Response(
        {'error': 'Invalid input', 'details': serializer.errors},
        status=status.HTTP_400_BAD_REQUEST
    )


# ===== COURSE ENDPOINTS =====

class CourseListCreateView(APIView):
    """
    GET: List all courses (any authenticated user)
    POST: Create a course (admin only)
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAdminRole()]
        return [IsAuthenticated()]

    def get(self, request):
        courses = Course.objects.all()
        serializer = CourseListSerializer(courses, many=True)
        return Response(serializer.data)

    def post(self, request):
        serializer = CourseCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer)

        try:
            course = serializer.save(created_by=request.user)
        except Exception as e:
            logger.error(f"Error creating course: {e}")
            return Response(
                {'error': 'Failed to create course'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        logger.info(f"Course {course.id} '{course.name}' created by {request.user.email}")
        return Response(
            {'message': 'Course created successfully', 'course': CourseSerializer(course).data},
            status=status.HTTP_201_CREATED
        )


class CourseDetailView(APIView):
    """
    Course detail. What is returned depends on who is asking:
    admins get everything, enrolled users get schedules and projects,
    everyone else gets a preview.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, course_id):
        try:
            course = Course.objects.get(id=course_id)
        except Course.DoesNotExist:
            return Response({'error': 'Course not found'}, status=status.HTTP_404_NOT_FOUND)

        if request.user.is_admin:
            serializer = CourseDetailSerializer(course)
        elif course.is_enrolled(request.user):
            serializer = EnrolledCourseSerializer(course)
        else:
            serializer = CoursePreviewSerializer(course)

        return Response(serializer.data)


# ===== SCHEDULE ENDPOINTS =====

def _parse_bound(value, end_of_day=False):
    """
    Parse a date or datetime query parameter into an aware datetime.
    A plain date means the start of that day, or its last instant when
    end_of_day is set. Returns None when the value cannot be parsed.
    """
    try:
        # Plain dates first: parse_datetime also accepts them, as midnight
        day = parse_date(value)
        if day is not None:
            parsed = datetime.combine(day, dt_time.max if end_of_day else dt_time.min)
        else:
            parsed = parse_datetime(value)
            if parsed is None:
                return None
    except ValueError:
        return None

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def current_week_bounds(now=None):
    """Monday 00:00 to Sunday 23:59:59.999999 of the week containing now"""
    now = now or timezone.now()
    monday = (now - timedelta(days=now.weekday())).date()
    start = timezone.make_aware(datetime.combine(monday, dt_time.min), dt_timezone.utc)
    end = timezone.make_aware(datetime.combine(monday + timedelta(days=6), dt_time.max), dt_timezone.utc)
    return start, end


class DailyScheduleView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, course_id):
        value = request.query_params.get('date')
        if not value:
            return Response({'error': 'date query parameter is required'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            day = parse_date(value)
        except ValueError:
            day = None
        if day is None:
            return Response(
                {'error': 'Invalid date format. Use YYYY-MM-DD'},
                status=status.HTTP_400_BAD_REQUEST
            )

        schedules = Schedule.objects.filter(course_id=course_id, date__date=day).order_by('date', 'id')
        return Response(ScheduleSerializer(schedules, many=True).data)


class WeeklyScheduleView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, course_id):
        start_value = request.query_params.get('start_date')
        end_value = request.query_params.get('end_date')

        if start_value and end_value:
            start = _parse_bound(start_value)
            end = _parse_bound(end_value, end_of_day=True)
            if start is None or end is None:
                return Response(
                    {'error': 'Invalid date format for start_date or end_date'},
                    status=status.HTTP_400_BAD_REQUEST
                )
        else:
            start, end = current_week_bounds()

        schedules = Schedule.objects.filter(
            course_id=course_id,
            date__gte=start,
            date__lte=end,
        ).order_by('date', 'id')

        return Response(ScheduleSerializer(schedules, many=True).data)


class ScheduleCreateView(APIView):
    permission_classes = [IsAdminRole]

    def post(self, request):
        serializer = ScheduleCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer)

        data = serializer.validated_data
        try:
            course = Course.objects.get(id=data.pop('course_id'))
        except Course.DoesNotExist:
            return Response({'error': 'Course not found'}, status=status.HTTP_404_NOT_FOUND)

        schedule = Schedule.objects.create(course=course, **data)
        logger.info(f"Schedule {schedule.id} added to course {course.id}")
        return Response(
            {'message': 'Schedule added successfully', 'schedule': ScheduleSerializer(schedule).data},
            status=status.HTTP_201_CREATED
        )


class ScheduleDetailView(APIView):
    """
    PUT/PATCH: Update a schedule entry
    DELETE: Remove a schedule entry
    """
    permission_classes = [IsAdminRole]

    def _get_schedule(self, schedule_id):
        try:
            return Schedule.objects.get(id=schedule_id)
        except Schedule.DoesNotExist:
            return None

    def put(self, request, schedule_id):
        schedule = self._get_schedule(schedule_id)
        if schedule is None:
            return Response({'error': 'Schedule not found'}, status=status.HTTP_404_NOT_FOUND)

        serializer = ScheduleUpdateSerializer(schedule, data=request.data, partial=True)
        if not serializer.is_valid():
            return invalid_input(serializer)

        schedule = serializer.save()
        logger.info(f"Schedule {schedule.id} updated by {request.user.email}")
        return Response(
            {'message': 'Schedule updated successfully', 'schedule': ScheduleSerializer(schedule).data}
        )

    patch = put

    def delete(self, request, schedule_id):
        schedule = self._get_schedule(schedule_id)
        if schedule is None:
            return Response({'error': 'Schedule not found'}, status=status.HTTP_404_NOT_FOUND)

        schedule.delete()
        logger.info(f"Schedule {schedule_id} deleted by {request.user.email}")
        return Response({'message': 'Schedule deleted successfully'})


# ===== PROJECT ENDPOINTS =====

class CourseProjectsView(APIView):
    """
    Projects of a course with the caller's submission status for each.
    Only users enrolled in the course may look.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, course_id):
        if not Enrollment.objects.filter(user=request.user, course_id=course_id).exists():
            logger.warning(f"{request.user.email} tried to view projects of course {course_id} without enrollment")
            return Response(
                {'error': 'You are not enrolled in this course'},
                status=status.HTTP_403_FORBIDDEN
            )

        projects = Project.objects.filter(course_id=course_id).order_by('id')
        submissions_by_project = {
            submission.project_id: submission
            for submission in ProjectSubmission.objects.filter(user=request.user, project__in=projects)
        }

        serializer = ProjectWithStatusSerializer(
            projects,
            many=True,
            context={'request': request, 'submissions_by_project': submissions_by_project}
        )
        return Response(serializer.data)


class AdminProjectsView(APIView):
    """
    Every project across all courses with submission statistics
    """
    permission_classes = [IsAdminRole]

    def get(self, request):
        projects = (
            Project.objects
            .select_related('course')
            .prefetch_related(
                Prefetch('submissions', queryset=ProjectSubmission.objects.select_related('user'))
            )
            .order_by('course_id', 'id')
        )
        return Response(AdminProjectSerializer(projects, many=True).data)


class ProjectCreateView(APIView):
    permission_classes = [IsAdminRole]

    def post(self, request):
        serializer = ProjectCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer)

        data = serializer.validated_data
        try:
            course = Course.objects.get(id=data.pop('course_id'))
        except Course.DoesNotExist:
            return Response({'error': 'Course not found'}, status=status.HTTP_404_NOT_FOUND)

        project = Project.objects.create(course=course, **data)
        logger.info(f"Project {project.id} '{project.name}' created in course {course.id}")
        return Response(
            {'message': 'Project created successfully', 'project': ProjectSerializer(project).data},
            status=status.HTTP_201_CREATED
        )


class ProjectSubmitView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ProjectSubmitSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer)

        data = serializer.validated_data
        try:
            project = Project.objects.select_related('course').get(id=data['project_id'])
        except Project.DoesNotExist:
            return Response({'error': 'Project not found'}, status=status.HTTP_404_NOT_FOUND)

        if not project.course.is_enrolled(request.user):
            logger.warning(f"{request.user.email} tried to submit project {project.id} without enrollment")
            return Response(
                {'error': 'You are not enrolled in this course'},
                status=status.HTTP_403_FORBIDDEN
            )

        already_submitted = Response(
            {'error': 'You have already submitted this project'},
            status=status.HTTP_400_BAD_REQUEST
        )
        if ProjectSubmission.objects.filter(project=project, user=request.user).exists():
            return already_submitted

        try:
            submission = ProjectSubmission.objects.create(
                project=project,
                user=request.user,
                github_url=data['github_url'],
                deploy_url=data.get('deploy_url', ''),
                ws_url=data.get('ws_url', ''),
            )
        except IntegrityError:
            # Lost a race against a concurrent submission
            return already_submitted

        logger.info(f"{request.user.email} submitted project {project.id}")
        return Response(
            {'message': 'Project submitted successfully', 'submission': ProjectSubmissionSerializer(submission).data},
            status=status.HTTP_201_CREATED
        )


class CourseSubmissionsView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request, course_id):
        submissions = (
            ProjectSubmission.objects
            .filter(project__course_id=course_id)
            .select_related('user', 'project')
            .order_by('project_id', '-submitted_at')
        )
        return Response(CourseSubmissionSerializer(submissions, many=True).data)


class ProjectReviewView(APIView):
    """
    Record written review notes (and optionally a video link) for a submission
    """
    permission_classes = [IsAdminRole]

    def post(self, request):
        serializer = ProjectReviewSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer)

        data = serializer.validated_data
        try:
            submission = ProjectSubmission.objects.get(id=data['submission_id'])
        except ProjectSubmission.DoesNotExist:
            return Response({'error': 'Submission not found'}, status=status.HTTP_404_NOT_FOUND)

        submission.mark_reviewed(
            request.user,
            review_notes=data['review_notes'],
            review_video_url=data.get('review_video_url'),
        )
        return Response({
            'message': 'Submission reviewed successfully',
            'submission': ProjectSubmissionSerializer(submission).data,
        })


class ReviewVideoUploadView(APIView):
    """
    Upload an admin review video for a submission to Bunny CDN
    and mark the submission reviewed.
    """
    permission_classes = [IsAdminRole]

    def post(self, request, submission_id):
        video = request.FILES.get('video')
        if video is None:
            return Response({'error': 'No video file provided'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            submission = ProjectSubmission.objects.get(id=submission_id)
        except ProjectSubmission.DoesNotExist:
            return Response({'error': 'Submission not found'}, status=status.HTTP_404_NOT_FOUND)

        max_size = settings.REVIEW_VIDEO_MAX_SIZE_MB * 1024 * 1024
        if video.size > max_size:
            return Response(
                {'error': f'Video file too large. Maximum size is {settings.REVIEW_VIDEO_MAX_SIZE_MB}MB'},
                status=status.HTTP_400_BAD_REQUEST
            )

        file_name = review_video_file_name(submission.id, int(time.time() * 1000))
        try:
            video_url = BunnyCDNService().upload(video, file_name)
        except BunnyCDNError as e:
            logger.error(f"Review video upload failed for submission {submission.id}: {e}")
            return Response(
                {'error': 'Failed to upload video', 'details': str(e)},
                status=status.HTTP_502_BAD_GATEWAY
            )

        submission.mark_reviewed(request.user, review_video_url=video_url)
        return Response({
            'message': 'Video uploaded successfully',
            'video_url': video_url,
            'submission': ProjectSubmissionSerializer(submission).data,
        })


class SubmissionListView(APIView):
    """
    Every submission, flattened for the admin review queue
    """
    permission_classes = [IsAdminRole]

    def get(self, request):
        submissions = (
            ProjectSubmission.objects
            .select_related('project__course', 'user')
            .order_by('project__course_id', 'project_id', '-submitted_at')
        )
        return Response(SubmissionListSerializer(submissions, many=True).data)


class UserProjectStatusesView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        submissions = (
            ProjectSubmission.objects
            .filter(user=request.user)
            .select_related('project')
            .order_by('-submitted_at')
        )
        return Response(UserProjectStatusSerializer(submissions, many=True).data)
