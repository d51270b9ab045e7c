"""
Django admin configuration for assets app.
"""
from django.contrib import admin

from assets.infrastructure.models import IPAsset, LicenseTerms


class LicenseTermsInline(admin.TabularInline):
    """Inline terms on the asset page."""

    model = LicenseTerms
    extra = 0
    fields = ["license_type", "revenue_share_percent", "base_fee", "auto_approve", "max_licenses", "is_active"]
    readonly_fields = fields
    can_delete = False


@admin.register(IPAsset)
class IPAssetAdmin(admin.ModelAdmin):
    """Admin interface for IPAsset model."""

    list_display = ["title", "creator", "category", "verification_status", "status", "created_at"]
    list_filter = ["verification_status", "status", "category"]
    search_fields = ["title", "creator__username"]
    # Verification goes through the moderation endpoint
    readonly_fields = ["id", "verification_status", "ledger_hash", "created_at", "updated_at"]
    inlines = [LicenseTermsInline]

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("creator")


@admin.register(LicenseTerms)
class LicenseTermsAdmin(admin.ModelAdmin):
    """Admin interface for LicenseTerms model."""

    list_display = ["ip_asset", "license_type", "revenue_share_percent", "max_licenses", "is_active"]
    list_filter = ["license_type", "is_active", "auto_approve"]
    search_fields = ["ip_asset__title"]
    readonly_fields = ["id", "created_at", "updated_at"]
