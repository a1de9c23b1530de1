from django.db import models
from django.contrib.auth import get_user_model
from django.core.validators import MaxLengthValidator
from django.utils import timezone
import logging

User = get_user_model()
logger = logging.getLogger(__name__)


class Course(models.Model):
    """
    Course model - the unit students enroll in
    """
    name = models.CharField(max_length=200, help_text="Course name")
    description = models.TextField(blank=True, help_text="Course description")
    image_url = models.URLField(max_length=500, blank=True, help_text="Cover image URL")

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_courses',
        help_text="Admin who created the course"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.name

    @property
    def enrolled_students_count(self):
        return self.enrollments.count()

    def is_enrolled(self, user):
        """Check whether a user holds an enrollment in this course"""
        if not user or not user.is_authenticated:
            return False
        return self.enrollments.filter(user=user).exists()


class Schedule(models.Model):
    """
    A dated session of a course
    """
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name='schedules')
    date = models.DateTimeField(help_text="When the session takes place")
    topic = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['date', 'id']
        indexes = [
            models.Index(fields=['course', 'date'], name='schedule_course_date_idx'),
        ]

    def __str__(self):
        return f"{self.course} · {self.topic} ({self.date:%Y-%m-%d})"


class Project(models.Model):
    """
    Project students of a course submit work for
    """
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="projects")
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    due_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['course', 'id']

    def __str__(self):
        return f"{self.course} · {self.name}"

    def status_for(self, user):
        """
        Submission state of this project for one user:
        not_submitted, pending (awaiting review) or completed (reviewed).
        """
        submission = self.submissions.filter(user=user).only('is_reviewed').first()
        return ProjectSubmission.status_label(submission)


class ProjectSubmission(models.Model):
    STATUS_NOT_SUBMITTED = 'not_submitted'
    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="submissions")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="project_submissions")

    github_url = models.URLField(max_length=500)
    deploy_url = models.URLField(max_length=500, blank=True)
    ws_url = models.CharField(max_length=500, blank=True, help_text="WebSocket endpoint of the deployed project")

    submitted_at = models.DateTimeField(default=timezone.now)

    is_reviewed = models.BooleanField(default=False)
    review_notes = models.TextField(
        blank=True,
        validators=[MaxLengthValidator(1000)],
    )
    review_video_url = models.URLField(max_length=500, blank=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reviewer = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name="reviewed_submissions"
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-submitted_at']
        constraints = [
            models.UniqueConstraint(fields=['project', 'user'], name='unique_project_submission'),
        ]

    def __str__(self):
        return f"{self.user} - {self.project.name} ({'reviewed' if self.is_reviewed else 'pending'})"

    @classmethod
    def status_label(cls, submission):
        if submission is None:
            return cls.STATUS_NOT_SUBMITTED
        return cls.STATUS_COMPLETED if submission.is_reviewed else cls.STATUS_PENDING

    def mark_reviewed(self, reviewer, review_notes=None, review_video_url=None):
        """
        Record a review. Notes and video URL are only overwritten when given,
        so a video upload does not erase earlier written notes.
        """
        self.is_reviewed = True
        self.reviewer = reviewer
        self.reviewed_at = timezone.now()
        if review_notes is not None:
            self.review_notes = review_notes
        if review_video_url is not None:
            self.review_video_url = review_video_url
        self.save()
        logger.info(f"Submission {self.id} reviewed by {reviewer.email}")
