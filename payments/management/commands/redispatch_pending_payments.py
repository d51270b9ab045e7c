"""
Django management command to re-enqueue payment processing.

Picks up pending transactions whose payment message was lost.
"""

import logging
from datetime import timedelta

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand
from django.utils import timezone

from payments.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from payments.tasks import process_payment_task

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to re-enqueue payment tasks for stale pending transactions."""

    help = "Re-enqueue payment processing for pending transactions"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - list transactions without enqueueing",
        )
        parser.add_argument(
            "--older-than-minutes",
            type=int,
            default=10,
            help="Only pick transactions pending for at least this long",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        cutoff = timezone.now() - timedelta(minutes=options["older_than_minutes"])
        repository = DjangoTransactionRepository()
        transaction_ids = async_to_sync(repository.pending_ids)(cutoff)

        self.stdout.write(f"Found {len(transaction_ids)} pending transaction(s)")

        if options["dry_run"]:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No tasks will be enqueued"))
            for transaction_id in transaction_ids[:10]:
                self.stdout.write(f"  - Transaction {transaction_id}")
            return

        for transaction_id in transaction_ids:
            process_payment_task.delay(str(transaction_id))
            logger.info("Re-enqueued payment", extra={"transaction_id": str(transaction_id)})

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Enqueued {len(transaction_ids)} payment task(s)"))
