from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from django.db import transaction

User = get_user_model()


class Command(BaseCommand):
    help = 'Create an ADMIN account (public signup only creates regular users)'

    def add_arguments(self, parser):
        parser.add_argument('--email', type=str, required=True, help='Admin email')
        parser.add_argument('--password', type=str, required=True, help='Admin password')
        parser.add_argument('--name', type=str, default='Admin', help='Admin display name')
        parser.add_argument(
            '--superuser',
            action='store_true',
            help='Also grant Django admin site (staff/superuser) access',
        )

    def handle(self, *args, **options):
        email = options['email']
        password = options['password']
        name = options['name']

        with transaction.atomic():
            existing = User.objects.filter(email__iexact=email).first()
            if existing:
                if existing.role == User.Role.ADMIN:
                    self.stdout.write(
                        self.style.WARNING(f'User "{email}" is already an admin')
                    )
                    return
                existing.role = User.Role.ADMIN
                existing.save(update_fields=['role'])
                self.stdout.write(
                    self.style.SUCCESS(f'Promoted existing user to admin: {email}')
                )
                return

            try:
                if options['superuser']:
                    User.objects.create_superuser(email=email, password=password, name=name)
                else:
                    User.objects.create_user(
                        email=email,
                        password=password,
                        name=name,
                        role=User.Role.ADMIN,
                    )
            except ValueError as e:
                raise CommandError(str(e))

        self.stdout.write(
            self.style.SUCCESS(f'Successfully created admin: {email}')
        )
