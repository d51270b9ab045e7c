"""
Product model.
"""
import uuid

from django.db import models
from django.db.models import Q


class Product(models.Model):
    """
    A good a licensee sells under an approved license.

    The row doubles as the inventory lock for purchases.
    """

    STATUS_CHOICES = [
        ("draft", "Draft"),
        ("active", "Active"),
        ("sold_out", "Sold out"),
        ("suspended", "Suspended"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    creator = models.ForeignKey(
        "accounts.Account", on_delete=models.PROTECT, related_name="products"
    )
    license = models.ForeignKey(
        "licenses.LicenseApplication", on_delete=models.PROTECT, related_name="products"
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    category = models.CharField(max_length=100, blank=True, default="")
    price = models.DecimalField(max_digits=12, decimal_places=2)
    inventory_count = models.PositiveIntegerField(default=0)
    images = models.JSONField(default=list, blank=True)
    specifications = models.JSONField(default=dict, blank=True)
    tags = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="draft", db_index=True)
    sales_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "products"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["license", "status"]),
            models.Index(fields=["creator", "status"]),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(price__gt=0), name="product_price_positive"),
            models.CheckConstraint(
                condition=Q(inventory_count__gte=0), name="product_inventory_non_negative"
            ),
        ]

    def __str__(self):
        return self.title
