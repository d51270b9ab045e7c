"""
Notifier adapters.

LoggingNotifier is the default; WebhookNotifier posts signed JSON to a
single configured endpoint.
"""
import hashlib
import hmac
import json
import logging
from typing import Any, Dict, Optional

import requests
from asgiref.sync import sync_to_async
from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string

from core.ports.notifier import Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Writes notifications to the structured log."""

    async def notify(self, event: str, payload: Dict[str, Any]) -> None:
        logger.info("Notification: %s", event, extra={"notification_event": event, "payload": payload})


class WebhookNotifier(Notifier):
    """Delivers notifications as HMAC-signed JSON POST requests."""

    def __init__(self, url: str, secret: str, timeout_seconds: int = 5):
        """
        Initialize webhook notifier.

        Args:
            url: Endpoint receiving notifications
            secret: Shared secret used to sign payloads
            timeout_seconds: Request timeout
        """
        if not url:
            raise ValueError("Webhook URL is required")
        self.url = url
        self.secret = secret
        self.timeout_seconds = timeout_seconds

    @staticmethod
    def generate_signature(payload: str, secret: str) -> str:
        """
        Generate HMAC signature for a webhook payload.

        Args:
            payload: JSON string payload
            secret: Webhook secret

        Returns:
            HMAC SHA-256 signature (hex)
        """
        return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()

    @staticmethod
    def verify_signature(payload: str, signature: str, secret: str) -> bool:
        """Verify a webhook signature in constant time."""
        expected = WebhookNotifier.generate_signature(payload, secret)
        return hmac.compare_digest(expected, signature)

    async def notify(self, event: str, payload: Dict[str, Any]) -> None:
        """
        Post the notification.

        Raises:
            requests.exceptions.RequestException: If delivery fails; the
                calling task decides whether to retry
        """
        body = json.dumps(
            {"event_type": event, "timestamp": timezone.now().isoformat(), "data": payload},
            sort_keys=True,
        )
        headers = {
            "Content-Type": "application/json",
            "X-Signature": self.generate_signature(body, self.secret),
            "X-Idempotency-Key": payload.get("idempotency_key", ""),
            "X-Event-Type": event,
            "User-Agent": "IP-Marketplace-Notifier/1.0",
        }
        response = await sync_to_async(requests.post, thread_sensitive=False)(
            self.url, data=body, headers=headers, timeout=self.timeout_seconds
        )
        response.raise_for_status()
        logger.info("Webhook notification delivered: %s", event)


def get_notifier(config: Optional[Dict[str, Any]] = None) -> Notifier:
    """
    Build the notifier selected by the NOTIFIER setting.

    Args:
        config: MARKETPLACE settings dict (defaults to django settings)

    Returns:
        Notifier instance
    """
    config = config if config is not None else settings.MARKETPLACE
    notifier_class = import_string(config["NOTIFIER"])
    if notifier_class is WebhookNotifier:
        return WebhookNotifier(
            url=config.get("NOTIFICATION_WEBHOOK_URL", ""),
            secret=config.get("NOTIFICATION_WEBHOOK_SECRET", ""),
            timeout_seconds=config.get("NOTIFICATION_TIMEOUT_SECONDS", 5),
        )
    return notifier_class()
