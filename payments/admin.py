"""
Django admin configuration for payments app.
"""
from django.contrib import admin

from payments.infrastructure.models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Read-only admin interface for Transaction model."""

    list_display = ["id", "transaction_type", "buyer", "seller", "amount", "status", "created_at"]
    list_filter = ["status", "transaction_type", "created_at"]
    search_fields = ["payment_reference", "buyer__username", "seller__username"]
    readonly_fields = ["id", "amount", "platform_fee", "revenue_shares", "created_at", "updated_at"]

    def has_change_permission(self, request, obj=None):
        """Status changes go through settlement and refund."""
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("buyer", "seller", "product")
