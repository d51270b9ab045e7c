"""
Serializers for marketplace endpoints.

Money is rendered as strings with two decimal places.
"""

from rest_framework import serializers

from core.domain.value_objects import ProductStatus


class CreateProductRequestSerializer(serializers.Serializer):
    """Serializer for product creation."""

    license_id = serializers.UUIDField()
    title = serializers.CharField(max_length=200)
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    inventory_count = serializers.IntegerField(required=False, default=0)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    category = serializers.CharField(required=False, allow_blank=True, default="", max_length=50)
    images = serializers.ListField(child=serializers.URLField(), required=False, default=list)
    specifications = serializers.DictField(required=False, default=dict)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False, default=list)


class UpdateProductRequestSerializer(serializers.Serializer):
    """Serializer for partial product updates; only supplied fields change."""

    title = serializers.CharField(max_length=200, required=False)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    inventory_count = serializers.IntegerField(required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True, max_length=50)
    images = serializers.ListField(child=serializers.URLField(), required=False)
    specifications = serializers.DictField(required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)


class ChangeProductStatusRequestSerializer(serializers.Serializer):
    """Serializer for a manual status change."""

    status = serializers.ChoiceField(choices=[choice.value for choice in ProductStatus])


class ProductSerializer(serializers.Serializer):
    """Serializer for Product."""

    id = serializers.UUIDField()
    creator_id = serializers.UUIDField()
    license_id = serializers.UUIDField()
    title = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    inventory_count = serializers.IntegerField()
    status = serializers.CharField()
    sales_count = serializers.IntegerField()
    images = serializers.ListField(child=serializers.CharField())
    specifications = serializers.DictField()
    tags = serializers.ListField(child=serializers.CharField())
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class PurchaseRequestSerializer(serializers.Serializer):
    """Serializer for a purchase."""

    quantity = serializers.IntegerField(required=False, default=1)
    payment_method = serializers.CharField(required=False, default="card", max_length=50)
    shipping_address = serializers.DictField(required=False, default=dict)
    notes = serializers.CharField(required=False, allow_blank=True, default="", max_length=1000)


class RefundRequestSerializer(serializers.Serializer):
    """Serializer for a refund."""

    reason = serializers.CharField(max_length=1000)


class RevenueSharesSerializer(serializers.Serializer):
    """Serializer for the revenue split of a sale."""

    net_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    ip_creator_share = serializers.DecimalField(max_digits=12, decimal_places=2)
    secondary_creator_share = serializers.DecimalField(max_digits=12, decimal_places=2)
    ip_creator_id = serializers.UUIDField(allow_null=True)
    secondary_creator_id = serializers.UUIDField(allow_null=True)
    revenue_share_percent = serializers.DecimalField(max_digits=5, decimal_places=2)
    platform_fee_percent = serializers.DecimalField(max_digits=5, decimal_places=2)
    version = serializers.IntegerField()


class TransactionSerializer(serializers.Serializer):
    """Serializer for Transaction."""

    id = serializers.UUIDField()
    transaction_type = serializers.CharField()
    buyer_id = serializers.UUIDField()
    seller_id = serializers.UUIDField()
    product_id = serializers.UUIDField(allow_null=True)
    quantity = serializers.IntegerField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    platform_fee = serializers.DecimalField(max_digits=12, decimal_places=2)
    revenue_shares = RevenueSharesSerializer()
    payment_method = serializers.CharField()
    payment_reference = serializers.CharField()
    status = serializers.CharField()
    failure_reason = serializers.CharField()
    processed_at = serializers.DateTimeField(allow_null=True)
    refunded_at = serializers.DateTimeField(allow_null=True)
    refund_reason = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
