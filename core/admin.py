"""
Django admin configuration for audit and idempotency records.
"""
from django.contrib import admin

from core.infrastructure.models import AuditLog, IdempotencyKey


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    """Read-only admin for the audit trail."""

    list_display = ["event_type", "aggregate_id", "occurred_at"]
    list_filter = ["event_type"]
    search_fields = ["aggregate_id", "event_id"]
    readonly_fields = ["id", "event_id", "event_type", "aggregate_id", "payload", "occurred_at", "created_at"]
    date_hierarchy = "occurred_at"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False


@admin.register(IdempotencyKey)
class IdempotencyKeyAdmin(admin.ModelAdmin):
    """Admin interface for idempotency keys."""

    list_display = ["key", "created_at", "expires_at"]
    search_fields = ["key"]
    readonly_fields = ["id", "created_at"]
