"""
LicenseApplication model.
"""
import uuid

from django.db import models
from django.db.models import Q

OPEN_STATUSES = ("pending", "approved")


class LicenseApplication(models.Model):
    """
    A request to license an IP asset under published terms.

    An approved application is the license products are sold under.
    """

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("approved", "Approved"),
        ("rejected", "Rejected"),
        ("revoked", "Revoked"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ip_asset = models.ForeignKey(
        "assets.IPAsset", on_delete=models.PROTECT, related_name="license_applications"
    )
    applicant = models.ForeignKey(
        "accounts.Account", on_delete=models.PROTECT, related_name="license_applications"
    )
    license_terms = models.ForeignKey(
        "assets.LicenseTerms", on_delete=models.PROTECT, related_name="applications"
    )
    application_data = models.JSONField(default=dict, blank=True, help_text="Versioned ApplicationData")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending", db_index=True)
    approved_at = models.DateTimeField(null=True, blank=True)
    approved_by = models.ForeignKey(
        "accounts.Account", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    rejection_reason = models.TextField(blank=True, default="")
    revoked_at = models.DateTimeField(null=True, blank=True)
    revoked_by = models.ForeignKey(
        "accounts.Account", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    revocation_reason = models.TextField(blank=True, default="")
    expires_at = models.DateTimeField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "license_applications"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["license_terms", "status"]),
            models.Index(fields=["applicant", "status"]),
            models.Index(fields=["ip_asset", "status"]),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["ip_asset", "applicant"],
                condition=Q(status__in=OPEN_STATUSES),
                name="unique_open_application_per_applicant",
            ),
        ]

    def __str__(self):
        return f"{self.applicant_id} -> {self.ip_asset_id} ({self.status})"
