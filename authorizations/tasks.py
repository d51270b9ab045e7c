"""
Celery tasks for authorization chains.
"""
import logging
import uuid
from typing import Optional

from asgiref.sync import async_to_sync

from IPMarketplace.celery import app

from authorizations.application.commands.issue_chain import IssueChainCommand
from authorizations.application.handlers.issue_chain_handler import IssueChainHandler
from authorizations.infrastructure.ledger import ContentHashLedger
from authorizations.infrastructure.repositories.django_authorization_chain_repository import (
    DjangoAuthorizationChainRepository,
)
from core.domain.exceptions import NotFoundError
from licenses.infrastructure.repositories.django_license_application_repository import (
    DjangoLicenseApplicationRepository,
)
from products.infrastructure.repositories.django_product_repository import DjangoProductRepository

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def issue_authorization_chain_task(self, product_id: str, parent_chain_id: Optional[str] = None):
    """
    Issue the authorization chain of a newly created product.

    Args:
        product_id: Product UUID
        parent_chain_id: Optional parent chain UUID for derivative chains

    Returns:
        Chain UUID string, or None when the product is gone
    """
    handler = IssueChainHandler(
        chain_repository=DjangoAuthorizationChainRepository(),
        product_repository=DjangoProductRepository(),
        application_repository=DjangoLicenseApplicationRepository(),
        ledger=ContentHashLedger(),
    )
    command = IssueChainCommand(
        product_id=uuid.UUID(product_id),
        parent_chain_id=uuid.UUID(parent_chain_id) if parent_chain_id else None,
    )
    try:
        chain = async_to_sync(handler.handle)(command)
    except NotFoundError as exc:
        logger.warning("Skipping chain issuance: %s", exc.message, extra={"product_id": product_id})
        return None
    except Exception as exc:
        logger.error(f"Chain issuance failed: {exc}", exc_info=True)
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)
    return str(chain.id)
