"""
Idempotency guard for at-least-once background work.
"""
import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.infrastructure.models import IdempotencyKey

logger = logging.getLogger(__name__)


def claim(key: str) -> bool:
    """
    Claim an idempotency key.

    Args:
        key: Key naming the side effect, e.g. "<event_type>:<aggregate_id>"

    Returns:
        True if the caller should perform the side effect, False if it
        was already performed
    """
    try:
        with transaction.atomic():
            existing = IdempotencyKey.objects.select_for_update().filter(key=key).first()
            if existing is None:
                IdempotencyKey.objects.create(key=key)
                return True
            if existing.is_expired:
                existing.delete()
                IdempotencyKey.objects.create(key=key)
                return True
    except IntegrityError:
        pass
    logger.info("Skipping duplicate side effect %s", key)
    return False


def release(key: str) -> None:
    """Release a claimed key so a failed side effect can be retried."""
    IdempotencyKey.objects.filter(key=key).delete()


def purge_expired() -> int:
    """Delete expired keys and return how many were removed."""
    deleted, _ = IdempotencyKey.objects.filter(expires_at__lt=timezone.now()).delete()
    return deleted
