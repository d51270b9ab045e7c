"""
Event handlers for domain events.

Handlers hand every side effect to a Celery task so publishers never
wait on audit writes, notifications, ledger calls or the payment gateway.
"""

import logging

from asgiref.sync import sync_to_async

from assets.domain.events import (
    AssetModerated,
    AssetRegistered,
    LicenseTermsPublished,
    LicenseTermsUpdated,
)
from authorizations.domain.events import AuthorizationChainIssued, AuthorizationChainRevoked
from core.domain.events import DomainEvent, EventHandler
from core.infrastructure.events import InMemoryEventBus, event_bus
from licenses.domain.events import LicenseApplied, LicenseApproved, LicenseRejected, LicenseRevoked
from payments.domain.events import (
    PaymentCompleted,
    PaymentFailed,
    ProductPurchased,
    TransactionRefunded,
)
from products.domain.events import ProductCreated, ProductDeleted, ProductStatusChanged

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (
    AssetRegistered,
    AssetModerated,
    LicenseTermsPublished,
    LicenseTermsUpdated,
    LicenseApplied,
    LicenseApproved,
    LicenseRejected,
    LicenseRevoked,
    ProductCreated,
    ProductStatusChanged,
    ProductDeleted,
    AuthorizationChainIssued,
    AuthorizationChainRevoked,
    ProductPurchased,
    PaymentCompleted,
    PaymentFailed,
    TransactionRefunded,
)

NOTIFICATIONS = {
    LicenseApplied: "application_submitted",
    LicenseApproved: "application_approved",
    LicenseRejected: "application_rejected",
    LicenseRevoked: "license_revoked",
    ProductPurchased: "product_purchased",
    PaymentCompleted: "product_sold",
}


class AuditLogEventHandler(EventHandler):
    """Writes every domain event to the audit log."""

    async def handle(self, event: DomainEvent) -> None:
        from core.tasks import record_audit_event_task

        await sync_to_async(record_audit_event_task.delay)(event.to_dict())


class NotificationEventHandler(EventHandler):
    """Sends the notification mapped to the event type."""

    async def handle(self, event: DomainEvent) -> None:
        from core.tasks import send_notification_task

        notification = NOTIFICATIONS.get(type(event))
        if notification is None:
            return
        await sync_to_async(send_notification_task.delay)(
            notification, event.to_dict(), event.idempotency_key
        )


class AssetLedgerRegistrationHandler(EventHandler):
    """Records newly registered assets on the ledger."""

    async def handle(self, event: AssetRegistered) -> None:
        from assets.tasks import record_asset_registration_task

        await sync_to_async(record_asset_registration_task.delay)(
            str(event.asset_id), str(event.creator_id)
        )


class ChainIssuanceHandler(EventHandler):
    """Issues the authorization chain for a new product."""

    async def handle(self, event: ProductCreated) -> None:
        from authorizations.tasks import issue_authorization_chain_task

        await sync_to_async(issue_authorization_chain_task.delay)(str(event.product_id))


class PaymentDispatchHandler(EventHandler):
    """Starts payment confirmation for an accepted purchase."""

    async def handle(self, event: ProductPurchased) -> None:
        from payments.tasks import process_payment_task

        await sync_to_async(process_payment_task.delay)(str(event.transaction_id))


def register_event_handlers(bus: InMemoryEventBus = event_bus) -> InMemoryEventBus:
    """Register all event handlers with the event bus."""
    audit_handler = AuditLogEventHandler()
    notification_handler = NotificationEventHandler()

    for event_type in AUDITED_EVENTS:
        bus.subscribe(event_type, audit_handler)
    for event_type in NOTIFICATIONS:
        bus.subscribe(event_type, notification_handler)

    bus.subscribe(AssetRegistered, AssetLedgerRegistrationHandler())
    bus.subscribe(ProductCreated, ChainIssuanceHandler())
    bus.subscribe(ProductPurchased, PaymentDispatchHandler())

    logger.info("Event handlers registered")
    return bus
