"""
Django admin configuration for products app.
"""

from django.contrib import admin

from products.infrastructure.models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for Product model."""

    list_display = ["title", "creator", "price", "inventory_count", "status", "sales_count", "created_at"]
    list_filter = ["status", "category", "created_at"]
    search_fields = ["title", "creator__username"]
    readonly_fields = ["id", "sales_count", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "creator", "license", "title", "description", "category"),
            },
        ),
        (
            "Sales",
            {
                "fields": ("price", "inventory_count", "status", "sales_count"),
            },
        ),
        (
            "Details",
            {
                "fields": ("images", "specifications", "tags"),
                "classes": ("collapse",),
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

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("creator", "license")
