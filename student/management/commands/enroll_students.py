from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from django.db import transaction
from courses.models import Course
from student.models import Enrollment

User = get_user_model()


class Command(BaseCommand):
    help = 'Enroll users in a course, either by email or every non-admin user'

    def add_arguments(self, parser):
        parser.add_argument('--course-id', type=int, required=True, help='ID of the course to enroll users in')
        parser.add_argument(
            '--emails',
            nargs='+',
            help='Emails of the users to enroll (default: every user with the USER role)'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be enrolled without actually creating enrollments'
        )

    def handle(self, *args, **options):
        course_id = options['course_id']
        emails = options['emails']
        dry_run = options['dry_run']

        try:
            course = Course.objects.get(id=course_id)
        except Course.DoesNotExist:
            raise CommandError(f'Course {course_id} not found')

        self.stdout.write(self.style.SUCCESS(f'Enrolling users in "{course.name}" (ID: {course.id})'))

        users = User.objects.all()
        if emails:
            users = users.filter(email__in=[email.lower() for email in emails])
            missing = set(email.lower() for email in emails) - set(users.values_list('email', flat=True))
            for email in sorted(missing):
                self.stdout.write(self.style.WARNING(f'   No user with email {email}'))
        else:
            users = users.filter(role=User.Role.USER)

        already_enrolled_ids = Enrollment.objects.filter(course=course).values_list('user_id', flat=True)
        available_users = users.exclude(id__in=already_enrolled_ids).order_by('id')

        if not available_users.exists():
            self.stdout.write(self.style.WARNING('Nothing to do: all selected users are already enrolled'))
            return

        if dry_run:
            self.stdout.write(self.style.WARNING('DRY RUN - No actual enrollments will be created'))
            for user in available_users:
                self.stdout.write(f'   - {user.name} ({user.email})')
            return

        with transaction.atomic():
            created = Enrollment.objects.bulk_create([
                Enrollment(user=user, course=course) for user in available_users
            ])

        for enrollment in created:
            self.stdout.write(f'   Enrolled: {enrollment.user.email}')

        self.stdout.write(self.style.SUCCESS(f'Successfully enrolled {len(created)} users'))
        self.stdout.write(f'   Total enrolled now: {course.enrollments.count()}')
