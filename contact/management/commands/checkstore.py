"""
Management command to verify the contact store before serving traffic.

Usage:
    python manage.py checkstore
    python manage.py checkstore --migrate  # Apply migrations first
"""

from django.core.management.base import BaseCommand, CommandError
from contact.store import StoreUnavailable, ensure_store_ready


class Command(BaseCommand):
    help = 'Check that the database is reachable and the contact table exists'

    def add_arguments(self, parser):
        parser.add_argument(
            '--migrate',
            action='store_true',
            help='Apply pending migrations before checking',
        )
        parser.add_argument(
            '--database',
            default='default',
            help='Database alias to check',
        )

    def handle(self, *args, **options):
        try:
            ensure_store_ready(using=options['database'], migrate=options['migrate'])
        except StoreUnavailable as exc:
            raise CommandError(str(exc))

        self.stdout.write(self.style.SUCCESS('Contact store is ready'))
