from rest_framework import serializers
from django.core.validators import URLValidator
from users.serializers import UserSummarySerializer
from student.serializers import EnrollmentSerializer
from .models import Course, Schedule, Project, ProjectSubmission

# Accept plain dates as well as full ISO-8601 datetimes
DATE_INPUT_FORMATS = ['iso-8601', '%Y-%m-%d']


# ===== FIELDS =====

class StrictIntegerField(serializers.IntegerField):
    """
    Integer field that only accepts JSON integers, not numeric strings,
    floats or booleans
    """
    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            self.fail('invalid')
        return super().to_internal_value(data)


# ===== COURSE SERIALIZERS =====

class CourseListSerializer(serializers.ModelSerializer):
    """
    Serializer for course listings
    """
    class Meta:
        model = Course
        fields = ['id', 'name', 'description', 'image_url', 'created_at']
        read_only_fields = fields


class CourseCreateSerializer(serializers.ModelSerializer):
    """
    Serializer for creating courses
    """
    class Meta:
        model = Course
        fields = ['name', 'description', 'image_url']
        extra_kwargs = {
            'description': {'required': False},
            'image_url': {'required': False},
        }


class CourseSerializer(serializers.ModelSerializer):
    created_by = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta:
        model = Course
        fields = ['id', 'name', 'description', 'image_url', 'created_by', 'created_at', 'updated_at']
        read_only_fields = fields


# ===== SCHEDULE SERIALIZERS =====

class ScheduleSerializer(serializers.ModelSerializer):
    course_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Schedule
        fields = ['id', 'course_id', 'date', 'topic', 'description', 'created_at', 'updated_at']
        read_only_fields = fields


class ScheduleCreateSerializer(serializers.ModelSerializer):
    """
    Serializer for adding a schedule entry to a course. The course itself is
    looked up by the view so a missing course answers 404.
    """
    course_id = serializers.IntegerField()

    class Meta:
        model = Schedule
        fields = ['course_id', 'date', 'topic', 'description']
        extra_kwargs = {
            'date': {'input_formats': DATE_INPUT_FORMATS},
            'description': {'required': False},
        }


class ScheduleUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Schedule
        fields = ['date', 'topic', 'description']
        extra_kwargs = {
            'date': {'input_formats': DATE_INPUT_FORMATS},
        }


# ===== PROJECT SERIALIZERS =====

class ProjectSerializer(serializers.ModelSerializer):
    course_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Project
        fields = ['id', 'course_id', 'name', 'description', 'due_date', 'created_at']
        read_only_fields = fields


class ProjectWithStatusSerializer(ProjectSerializer):
    """
    Project as seen by an enrolled user, with that user's submission state
    """
    status = serializers.SerializerMethodField()

    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ['status']
        read_only_fields = fields

    def get_status(self, obj):
        submissions_by_project = self.context.get('submissions_by_project')
        if submissions_by_project is not None:
            return ProjectSubmission.status_label(submissions_by_project.get(obj.id))
        return obj.status_for(self.context['request'].user)


class ProjectCreateSerializer(serializers.ModelSerializer):
    """
    Serializer for creating projects
    """
    course_id = serializers.IntegerField()

    class Meta:
        model = Project
        fields = ['course_id', 'name', 'description', 'due_date']
        extra_kwargs = {
            'description': {'required': False},
            'due_date': {'required': True, 'input_formats': DATE_INPUT_FORMATS},
        }


class CourseDetailSerializer(CourseSerializer):
    """
    Full course view for admins: schedules, projects and enrollments
    """
    schedules = ScheduleSerializer(many=True, read_only=True)
    projects = ProjectSerializer(many=True, read_only=True)
    enrollments = EnrollmentSerializer(many=True, read_only=True)

    class Meta(CourseSerializer.Meta):
        fields = CourseSerializer.Meta.fields + ['schedules', 'projects', 'enrollments']
        read_only_fields = fields


class EnrolledCourseSerializer(serializers.ModelSerializer):
    """
    Course view for enrolled users: schedules and projects
    """
    schedules = ScheduleSerializer(many=True, read_only=True)
    projects = ProjectSerializer(many=True, read_only=True)

    class Meta:
        model = Course
        fields = ['id', 'name', 'description', 'image_url', 'schedules', 'projects']
        read_only_fields = fields


class CoursePreviewSerializer(serializers.ModelSerializer):
    """
    Course view for users who are not enrolled
    """
    class Meta:
        model = Course
        fields = ['id', 'name', 'description', 'image_url']
        read_only_fields = fields


# ===== SUBMISSION SERIALIZERS =====

class ProjectSubmissionSerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    reviewer_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = ProjectSubmission
        fields = [
            'id', 'project_id', 'user_id', 'github_url', 'deploy_url', 'ws_url',
            'submitted_at', 'is_reviewed', 'review_notes', 'review_video_url',
            'reviewed_at', 'reviewer_id'
        ]
        read_only_fields = fields


class ProjectSubmitSerializer(serializers.Serializer):
    """
    Serializer for a user's project submission
    """
    project_id = serializers.IntegerField()
    github_url = serializers.URLField(max_length=500)
    deploy_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    ws_url = serializers.CharField(
        max_length=500,
        required=False,
        allow_blank=True,
        default='',
        validators=[URLValidator(schemes=['ws', 'wss', 'http', 'https'])],
    )


class ProjectSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ['id', 'name', 'description']
        read_only_fields = fields


class CourseSubmissionSerializer(ProjectSubmissionSerializer):
    """
    Submission with its author and project, for admin course views
    """
    user = UserSummarySerializer(read_only=True)
    project = ProjectSummarySerializer(read_only=True)

    class Meta(ProjectSubmissionSerializer.Meta):
        fields = ProjectSubmissionSerializer.Meta.fields + ['user', 'project']
        read_only_fields = fields


class ProjectReviewSerializer(serializers.Serializer):
    """
    Serializer for reviewing a submission
    """
    submission_id = StrictIntegerField()
    review_notes = serializers.CharField(min_length=1, max_length=1000)
    review_video_url = serializers.URLField(max_length=500, required=False)


class SubmissionListSerializer(serializers.ModelSerializer):
    """
    Flattened submission row for the admin review queue
    """
    project_id = serializers.IntegerField(read_only=True)
    project_name = serializers.CharField(source='project.name', read_only=True)
    project_description = serializers.CharField(source='project.description', read_only=True)
    project_due_date = serializers.DateTimeField(source='project.due_date', read_only=True)
    course_id = serializers.IntegerField(source='project.course_id', read_only=True)
    course_name = serializers.CharField(source='project.course.name', read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    user_name = serializers.CharField(source='user.name', read_only=True)
    user_email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = ProjectSubmission
        fields = [
            'id', 'project_id', 'project_name', 'project_description', 'project_due_date',
            'course_id', 'course_name', 'user_id', 'user_name', 'user_email',
            'github_url', 'deploy_url', 'ws_url', 'submitted_at',
            'is_reviewed', 'review_notes', 'review_video_url'
        ]
        read_only_fields = fields


class AdminProjectSubmissionSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    user_name = serializers.CharField(source='user.name', read_only=True)
    user_email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = ProjectSubmission
        fields = ['id', 'user_id', 'user_name', 'user_email', 'submitted_at', 'is_reviewed']
        read_only_fields = fields


class AdminProjectSerializer(serializers.ModelSerializer):
    """
    Project with its course and submission statistics, for the admin overview
    """
    course_id = serializers.IntegerField(read_only=True)
    course_name = serializers.CharField(source='course.name', read_only=True)
    course_description = serializers.CharField(source='course.description', read_only=True)
    total_submissions = serializers.SerializerMethodField()
    reviewed_submissions = serializers.SerializerMethodField()
    submissions = AdminProjectSubmissionSerializer(many=True, read_only=True)

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'description', 'due_date', 'course_id', 'course_name',
            'course_description', 'total_submissions', 'reviewed_submissions', 'submissions'
        ]
        read_only_fields = fields

    def get_total_submissions(self, obj):
        return len(obj.submissions.all())

    def get_reviewed_submissions(self, obj):
        return sum(1 for submission in obj.submissions.all() if submission.is_reviewed)


class UserProjectStatusSerializer(serializers.ModelSerializer):
    """
    A user's own submission with its review outcome
    """
    STATUS_REVIEWED = 'REVIEWED'
    STATUS_PENDING_REVIEW = 'PENDING_REVIEW'

    project_id = serializers.IntegerField(read_only=True)
    project_name = serializers.CharField(source='project.name', read_only=True)
    project_description = serializers.CharField(source='project.description', read_only=True)
    due_date = serializers.DateTimeField(source='project.due_date', read_only=True)
    status = serializers.SerializerMethodField()

    class Meta:
        model = ProjectSubmission
        fields = [
            'id', 'project_id', 'project_name', 'project_description', 'due_date',
            'submitted_at', 'status', 'review_notes', 'review_video_url'
        ]
        read_only_fields = fields

    def get_status(self, obj):
        return self.STATUS_REVIEWED if obj.is_reviewed else self.STATUS_PENDING_REVIEW
