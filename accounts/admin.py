"""
Django admin configuration for accounts app.
"""

from django.contrib import admin

from accounts.infrastructure.models import Account


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Admin interface for Account model."""

    list_display = ["username", "email", "role", "status", "created_at"]
    list_filter = ["role", "status"]
    search_fields = ["username", "email"]
    readonly_fields = ["id", "created_at", "updated_at"]
