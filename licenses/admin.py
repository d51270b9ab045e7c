"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import LicenseApplication


@admin.register(LicenseApplication)
class LicenseApplicationAdmin(admin.ModelAdmin):
    """Admin interface for LicenseApplication model."""

    list_display = [
        "ip_asset",
        "applicant",
        "license_terms",
        "status_display",
        "expires_at",
        "created_at",
    ]
    list_filter = ["status", "is_active", "created_at"]
    search_fields = ["ip_asset__title", "applicant__username", "applicant__email"]
    readonly_fields = [
        "id",
        "status",
        "approved_at",
        "approved_by",
        "revoked_at",
        "revoked_by",
        "created_at",
        "updated_at",
    ]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "ip_asset", "applicant", "license_terms", "application_data"),
            },
        ),
        (
            "Workflow",
            {
                "fields": (
                    "status",
                    "approved_at",
                    "approved_by",
                    "rejection_reason",
                    "revoked_at",
                    "revoked_by",
                    "revocation_reason",
                    "expires_at",
                    "is_active",
                ),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "pending": "orange",
            "approved": "green",
            "rejected": "gray",
            "revoked": "red",
        }
        color = colors.get(obj.status, "black")
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def has_change_permission(self, request, obj=None):
        """Transitions go through the workflow handlers."""
        return False

    def get_queryset(self, request):
        """Optimize queryset."""
        return (
            super()
            .get_queryset(request)
            .select_related("ip_asset", "applicant", "license_terms")
        )
