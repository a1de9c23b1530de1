from django.db import models, transaction
from django.db.models import F
from django.contrib.auth import get_user_model
from django.utils import timezone

User = get_user_model()


class Enrollment(models.Model):
    """
    Links a user to a course they take part in
    """
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='enrollments'
    )
    course = models.ForeignKey(
        'courses.Course',
        on_delete=models.CASCADE,
        related_name='enrollments'
    )
    enrolled_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_enrollments',
        help_text="Admin who assigned the user, empty for self-enrollment"
    )
    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'enrollments'
        ordering = ['enrolled_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['user', 'course'], name='unique_user_course_enrollment'),
        ]

    def __str__(self):
        return f"{self.user.email} - {self.course.name}"

    @property
    def is_self_enrollment(self):
        return self.enrolled_by_id is None or self.enrolled_by_id == self.user_id


class Attendance(models.Model):
    """
    Minutes a user worked during one scheduled session
    """
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='attendance_records'
    )
    schedule = models.ForeignKey(
        'courses.Schedule',
        on_delete=models.CASCADE,
        related_name='attendance_records'
    )
    time_worked = models.PositiveIntegerField(default=0, help_text="Minutes worked in this session")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'attendance'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'schedule'], name='unique_user_schedule_attendance'),
        ]

    def __str__(self):
        return f"{self.user.email} - {self.schedule.topic} ({self.time_worked} min)"

    @classmethod
    def mark(cls, user, schedule, time_worked):
        """
        Create the (user, schedule) record or add time_worked to the existing one.

        Returns:
            tuple: (attendance, created)
        """
        with transaction.atomic():
            attendance, created = cls.objects.select_for_update().get_or_create(
                user=user,
                schedule=schedule,
                defaults={'time_worked': time_worked},
            )
            if not created:
                cls.objects.filter(pk=attendance.pk).update(
                    time_worked=F('time_worked') + time_worked,
                    updated_at=timezone.now(),
                )
                attendance.refresh_from_db()
        return attendance, created
