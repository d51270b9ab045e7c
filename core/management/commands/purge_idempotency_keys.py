"""
Django management command to purge expired idempotency keys.

This command should be run periodically (e.g., via cron or Celery beat).
"""

import logging

from django.core.management.base import BaseCommand
from django.utils import timezone

from core.infrastructure import idempotency
from core.infrastructure.models import IdempotencyKey

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to delete expired idempotency keys."""

    help = "Delete expired idempotency keys"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - only count expired keys",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        if options["dry_run"]:
            # pylint: disable=no-member
            count = IdempotencyKey.objects.filter(expires_at__lt=timezone.now()).count()
            self.stdout.write(self.style.WARNING(f"DRY RUN - {count} expired key(s) would be deleted"))
            return

        deleted = idempotency.purge_expired()
        logger.info("Purged idempotency keys", extra={"deleted": deleted})
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} expired key(s)"))
