"""
IPAsset and LicenseTerms models.
"""
import uuid

from django.db import models
from django.db.models import Q


class IPAsset(models.Model):
    """
    A registered creative work eligible for licensing.
    """

    VERIFICATION_CHOICES = [
        ("pending", "Pending"),
        ("approved", "Approved"),
        ("rejected", "Rejected"),
    ]

    STATUS_CHOICES = [
        ("active", "Active"),
        ("suspended", "Suspended"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    creator = models.ForeignKey(
        "accounts.Account", on_delete=models.PROTECT, related_name="ip_assets"
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=100, db_index=True)
    content_type = models.CharField(max_length=100, blank=True, default="")
    file_urls = models.JSONField(default=list, blank=True, help_text="Opaque storage references")
    tags = models.JSONField(default=list, blank=True)
    metadata = models.JSONField(default=dict, blank=True, help_text="Versioned AssetMetadata")
    verification_status = models.CharField(
        max_length=20, choices=VERIFICATION_CHOICES, default="pending", db_index=True
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="active")
    ledger_hash = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "ip_assets"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["creator", "verification_status"]),
        ]

    def __str__(self):
        return self.title


class LicenseTerms(models.Model):
    """
    Conditions under which an IP asset may be licensed.

    The row doubles as the per-terms lock for capacity checks.
    """

    LICENSE_TYPE_CHOICES = [
        ("standard", "Standard"),
        ("premium", "Premium"),
        ("exclusive", "Exclusive"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ip_asset = models.ForeignKey(IPAsset, on_delete=models.CASCADE, related_name="license_terms")
    license_type = models.CharField(max_length=20, choices=LICENSE_TYPE_CHOICES, default="standard")
    revenue_share_percent = models.DecimalField(max_digits=5, decimal_places=2)
    base_fee = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    territory = models.CharField(max_length=100, default="global")
    duration = models.CharField(max_length=50, default="perpetual")
    requirements = models.TextField(blank=True, default="")
    restrictions = models.TextField(blank=True, default="")
    auto_approve = models.BooleanField(default=False)
    max_licenses = models.PositiveIntegerField(default=0, help_text="0 means unlimited")
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "license_terms"
        verbose_name_plural = "license terms"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["ip_asset", "is_active"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(revenue_share_percent__gte=5) & Q(revenue_share_percent__lte=50),
                name="license_terms_revenue_share_range",
            ),
            models.CheckConstraint(condition=Q(base_fee__gte=0), name="license_terms_base_fee_non_negative"),
        ]

    def __str__(self):
        return f"{self.ip_asset.title} - {self.license_type} ({self.revenue_share_percent}%)"
