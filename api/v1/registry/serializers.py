"""
Serializers for registry endpoints.
"""

from rest_framework import serializers

from core.domain.value_objects import LicenseType, VerificationStatus


class AssetMetadataSerializer(serializers.Serializer):
    """Serializer for versioned asset metadata."""

    medium = serializers.CharField(required=False, allow_blank=True, default="")
    year_created = serializers.IntegerField(required=False, allow_null=True, default=None)
    dimensions = serializers.CharField(required=False, allow_blank=True, default="")
    extra = serializers.DictField(required=False, default=dict)
    version = serializers.IntegerField(read_only=True)


class RegisterAssetRequestSerializer(serializers.Serializer):
    """Serializer for asset registration."""

    title = serializers.CharField(max_length=200)
    category = serializers.CharField(max_length=50)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    content_type = serializers.CharField(required=False, allow_blank=True, default="")
    file_urls = serializers.ListField(child=serializers.URLField(), required=False, default=list)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False, default=list)
    metadata = AssetMetadataSerializer(required=False)


class ModerateAssetRequestSerializer(serializers.Serializer):
    """Serializer for a moderation decision."""

    decision = serializers.ChoiceField(
        choices=[VerificationStatus.APPROVED.value, VerificationStatus.REJECTED.value]
    )
    note = serializers.CharField(required=False, allow_blank=True, default="", max_length=1000)
    force = serializers.BooleanField(required=False, default=False)


class IPAssetSerializer(serializers.Serializer):
    """Serializer for IPAsset."""

    id = serializers.UUIDField()
    creator_id = serializers.UUIDField()
    title = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField()
    content_type = serializers.CharField()
    file_urls = serializers.ListField(child=serializers.CharField())
    tags = serializers.ListField(child=serializers.CharField())
    metadata = AssetMetadataSerializer()
    verification_status = serializers.CharField()
    status = serializers.CharField()
    ledger_hash = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class PublishTermsRequestSerializer(serializers.Serializer):
    """Serializer for publishing license terms."""

    revenue_share_percent = serializers.DecimalField(max_digits=5, decimal_places=2)
    base_fee = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, default="0")
    license_type = serializers.ChoiceField(
        choices=[choice.value for choice in LicenseType], required=False, default=LicenseType.STANDARD.value
    )
    territory = serializers.CharField(required=False, default="global", max_length=100)
    duration = serializers.CharField(required=False, default="perpetual", max_length=50)
    requirements = serializers.CharField(required=False, allow_blank=True, default="")
    restrictions = serializers.CharField(required=False, allow_blank=True, default="")
    auto_approve = serializers.BooleanField(required=False, default=False)
    max_licenses = serializers.IntegerField(required=False, default=0)


class UpdateTermsRequestSerializer(serializers.Serializer):
    """Serializer for partial terms updates; only supplied fields change."""

    revenue_share_percent = serializers.DecimalField(max_digits=5, decimal_places=2, required=False)
    base_fee = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    license_type = serializers.ChoiceField(choices=[choice.value for choice in LicenseType], required=False)
    territory = serializers.CharField(required=False, max_length=100)
    duration = serializers.CharField(required=False, max_length=50)
    requirements = serializers.CharField(required=False, allow_blank=True)
    restrictions = serializers.CharField(required=False, allow_blank=True)
    auto_approve = serializers.BooleanField(required=False)
    max_licenses = serializers.IntegerField(required=False)
    is_active = serializers.BooleanField(required=False)


class LicenseTermsSerializer(serializers.Serializer):
    """Serializer for LicenseTerms."""

    id = serializers.UUIDField()
    ip_asset_id = serializers.UUIDField()
    license_type = serializers.CharField()
    revenue_share_percent = serializers.DecimalField(max_digits=5, decimal_places=2)
    base_fee = serializers.DecimalField(max_digits=12, decimal_places=2)
    territory = serializers.CharField()
    duration = serializers.CharField()
    requirements = serializers.CharField()
    restrictions = serializers.CharField()
    auto_approve = serializers.BooleanField()
    max_licenses = serializers.IntegerField()
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()
