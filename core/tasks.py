"""
Celery tasks for background processing.

Tasks for audit logging and outbound notifications.
"""
import logging
import uuid

from asgiref.sync import async_to_sync
from django.utils.dateparse import parse_datetime

from IPMarketplace.celery import app

from core.infrastructure import idempotency
from core.infrastructure.models import AuditLog
from core.infrastructure.notifiers import get_notifier
from core.metrics import notifications_total

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def record_audit_event_task(self, event_data: dict):
    """
    Write a domain event to the audit log.

    Entries are unique by event id, so redelivery is harmless.

    Args:
        event_data: Serialized event from DomainEvent.to_dict()
    """
    try:
        _, created = AuditLog.objects.get_or_create(
            event_id=uuid.UUID(event_data["event_id"]),
            defaults={
                "event_type": event_data["event_type"],
                "aggregate_id": event_data["aggregate_id"],
                "payload": event_data.get("data", {}),
                "occurred_at": parse_datetime(event_data["occurred_at"]),
            },
        )
    except Exception as exc:
        logger.error(f"Audit log write failed: {exc}", exc_info=True)
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)
    return created


@app.task(bind=True, max_retries=3)
def send_notification_task(self, notification: str, payload: dict, idempotency_key: str):
    """
    Deliver a notification at most once per idempotency key.

    Args:
        notification: Notification event name
        payload: JSON-serializable event data
        idempotency_key: Key naming this notification
    """
    if not idempotency.claim(idempotency_key):
        notifications_total.labels(event=notification, outcome="duplicate").inc()
        return False

    try:
        async_to_sync(get_notifier().notify)(
            notification, {**payload, "idempotency_key": idempotency_key}
        )
    except Exception as exc:
        idempotency.release(idempotency_key)
        if self.request.retries >= self.max_retries:
            notifications_total.labels(event=notification, outcome="failed").inc()
            logger.error(
                "Notification dropped after retries",
                extra={"notification_event": notification, "idempotency_key": idempotency_key},
            )
            return False
        logger.warning(f"Notification delivery failed, retrying: {exc}")
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)

    notifications_total.labels(event=notification, outcome="sent").inc()
    return True


@app.task
def purge_idempotency_keys_task():
    """Delete expired idempotency keys."""
    deleted = idempotency.purge_expired()
    logger.info("Purged expired idempotency keys", extra={"deleted": deleted})
    return deleted
