"""
Django admin configuration for authorizations app.
"""
from django.contrib import admin

from authorizations.infrastructure.models import AuthorizationChain, LedgerEntry


@admin.register(AuthorizationChain)
class AuthorizationChainAdmin(admin.ModelAdmin):
    """Admin interface for AuthorizationChain model."""

    list_display = ["verification_code", "product", "license", "is_active", "created_at"]
    list_filter = ["is_active", "created_at"]
    search_fields = ["verification_code", "product__title"]
    readonly_fields = ["id", "verification_code", "ledger_hash", "created_at"]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("product", "license")


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    """Read-only admin interface for the content-hash ledger."""

    list_display = ["sequence", "entry_type", "subject_id", "entry_hash", "recorded_at"]
    list_filter = ["entry_type"]
    search_fields = ["entry_hash", "subject_id"]

    def has_add_permission(self, request):
        """Ledger entries are append-only."""
        return False

    def has_change_permission(self, request, obj=None):
        """Ledger entries are append-only."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Ledger entries are append-only."""
        return False
