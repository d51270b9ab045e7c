"""
AuthorizationChain and LedgerEntry models.
"""
import uuid

from django.db import models


class AuthorizationChain(models.Model):
    """
    Provenance record of a product, looked up publicly by verification code.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(
        "products.Product", on_delete=models.CASCADE, related_name="authorization_chains"
    )
    ip_asset = models.ForeignKey(
        "assets.IPAsset", on_delete=models.PROTECT, related_name="authorization_chains"
    )
    license = models.ForeignKey(
        "licenses.LicenseApplication", on_delete=models.PROTECT, related_name="authorization_chains"
    )
    parent_chain = models.ForeignKey(
        "self", on_delete=models.SET_NULL, null=True, blank=True, related_name="derived_chains"
    )
    verification_code = models.CharField(max_length=32, unique=True)
    ledger_hash = models.CharField(max_length=64, null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    revoked_at = models.DateTimeField(null=True, blank=True)
    revocation_reason = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "authorization_chains"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["product", "is_active"]),
        ]

    def __str__(self):
        return f"{self.verification_code} ({'active' if self.is_active else 'revoked'})"


class LedgerEntry(models.Model):
    """
    Append-only entry of the content-hash ledger.

    Each entry hashes its own content together with the previous
    entry's hash, so rewriting any entry breaks every later one.
    """

    ENTRY_TYPE_CHOICES = [
        ("asset_registration", "Asset registration"),
        ("product_issuance", "Product issuance"),
    ]

    sequence = models.PositiveBigIntegerField(unique=True)
    entry_type = models.CharField(max_length=32, choices=ENTRY_TYPE_CHOICES)
    subject_id = models.UUIDField(db_index=True)
    payload = models.JSONField(default=dict)
    previous_hash = models.CharField(max_length=64, blank=True, default="")
    entry_hash = models.CharField(max_length=64, unique=True)
    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "ledger_entries"
        ordering = ["sequence"]
        verbose_name_plural = "ledger entries"

    def __str__(self):
        return f"#{self.sequence} {self.entry_type} {self.entry_hash[:12]}"
