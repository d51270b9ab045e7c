"""
Django management command to re-enqueue authorization chain issuance.

Picks up products whose issuance message was lost, i.e. products
without an active chain.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from authorizations.infrastructure.repositories.django_authorization_chain_repository import (
    DjangoAuthorizationChainRepository,
)
from authorizations.tasks import issue_authorization_chain_task

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to re-enqueue chain issuance for products without one."""

    help = "Re-enqueue authorization chain issuance for products without an active chain"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - list products without enqueueing",
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=0,
            help="Maximum number of products to process (0 = all)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        repository = DjangoAuthorizationChainRepository()
        product_ids = async_to_sync(repository.product_ids_without_active_chain)()
        if options["limit"]:
            product_ids = product_ids[: options["limit"]]

        self.stdout.write(f"Found {len(product_ids)} product(s) without an active chain")

        if options["dry_run"]:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No tasks will be enqueued"))
            for product_id in product_ids[:10]:
                self.stdout.write(f"  - Product {product_id}")
            return

        for product_id in product_ids:
            issue_authorization_chain_task.delay(str(product_id))
            logger.info("Re-enqueued chain issuance", extra={"product_id": str(product_id)})

        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Enqueued {len(product_ids)} issuance task(s)"))
