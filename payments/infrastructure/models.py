"""
Transaction model.
"""
import uuid

from django.db import models
from django.db.models import Q


class Transaction(models.Model):
    """
    A sale and its revenue split.
    """

    TYPE_CHOICES = [
        ("product_sale", "Product sale"),
        ("license_fee", "License fee"),
        ("revenue_share", "Revenue share"),
    ]

    STATUS_CHOICES = [
        ("pending", "Pending"),
        ("completed", "Completed"),
        ("failed", "Failed"),
        ("refunded", "Refunded"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    transaction_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default="product_sale")
    buyer = models.ForeignKey("accounts.Account", on_delete=models.PROTECT, related_name="purchases")
    seller = models.ForeignKey("accounts.Account", on_delete=models.PROTECT, related_name="sales")
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )
    quantity = models.PositiveIntegerField(default=1)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    platform_fee = models.DecimalField(max_digits=12, decimal_places=2)
    revenue_shares = models.JSONField(default=dict, help_text="Versioned RevenueShares")
    purchase_details = models.JSONField(default=dict, blank=True, help_text="Versioned PurchaseDetails")
    payment_method = models.CharField(max_length=50, blank=True, default="")
    payment_reference = models.CharField(max_length=255, blank=True, default="")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="pending", db_index=True)
    failure_reason = models.TextField(blank=True, default="")
    processed_at = models.DateTimeField(null=True, blank=True)
    refunded_at = models.DateTimeField(null=True, blank=True)
    refund_reason = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "transactions"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["buyer", "status"]),
            models.Index(fields=["seller", "status"]),
            models.Index(fields=["status", "created_at"]),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(amount__gte=0), name="transaction_amount_non_negative"),
            models.CheckConstraint(
                condition=Q(platform_fee__gte=0), name="transaction_platform_fee_non_negative"
            ),
            models.CheckConstraint(condition=Q(quantity__gte=1), name="transaction_quantity_positive"),
        ]

    def __str__(self):
        return f"{self.transaction_type} {self.amount} ({self.status})"
