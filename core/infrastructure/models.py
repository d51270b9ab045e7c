"""
AuditLog and IdempotencyKey models.
"""
import uuid
from datetime import timedelta

from django.db import models
from django.utils import timezone


class AuditLog(models.Model):
    """
    Immutable audit trail of domain events.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(unique=True)
    event_type = models.CharField(max_length=100)
    aggregate_id = models.CharField(max_length=64)
    payload = models.JSONField(default=dict, help_text="Event data")
    occurred_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-occurred_at"]
        indexes = [
            models.Index(fields=["aggregate_id", "occurred_at"]),
            models.Index(fields=["event_type"]),
        ]

    def __str__(self):
        return f"{self.event_type} - {self.aggregate_id}"


class IdempotencyKey(models.Model):
    """
    Records side effects that already ran, so redelivered tasks are skipped.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=255, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField()

    class Meta:
        db_table = "idempotency_keys"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["expires_at"]),
        ]

    def __str__(self):
        return self.key

    def save(self, *args, **kwargs):
        """Set default expiration if not provided."""
        if not self.expires_at:
            self.expires_at = timezone.now() + timedelta(days=7)
        super().save(*args, **kwargs)

    @property
    def is_expired(self) -> bool:
        """
        Check if idempotency key is expired.

        Returns:
            True if expired, False otherwise
        """
        return timezone.now() > self.expires_at
