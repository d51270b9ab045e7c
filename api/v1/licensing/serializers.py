"""
Serializers for licensing endpoints.
"""

from rest_framework import serializers


class ApplicationDataSerializer(serializers.Serializer):
    """Serializer for versioned application data."""

    message = serializers.CharField(required=False, allow_blank=True, default="")
    intended_use = serializers.CharField(required=False, allow_blank=True, default="")
    estimated_volume = serializers.IntegerField(required=False, allow_null=True, default=None, min_value=0)
    extra = serializers.DictField(required=False, default=dict)
    version = serializers.IntegerField(read_only=True)


class ApplyLicenseRequestSerializer(serializers.Serializer):
    """Serializer for a license application."""

    ip_asset_id = serializers.UUIDField()
    license_terms_id = serializers.UUIDField()
    application_data = ApplicationDataSerializer(required=False)


class ReasonRequestSerializer(serializers.Serializer):
    """Serializer for decisions that must state a reason."""

    reason = serializers.CharField(max_length=1000)


class LicenseApplicationSerializer(serializers.Serializer):
    """Serializer for LicenseApplication."""

    id = serializers.UUIDField()
    ip_asset_id = serializers.UUIDField()
    applicant_id = serializers.UUIDField()
    license_terms_id = serializers.UUIDField()
    application_data = ApplicationDataSerializer()
    status = serializers.CharField()
    approved_at = serializers.DateTimeField(allow_null=True)
    approved_by = serializers.UUIDField(allow_null=True)
    rejection_reason = serializers.CharField()
    revoked_at = serializers.DateTimeField(allow_null=True)
    revoked_by = serializers.UUIDField(allow_null=True)
    revocation_reason = serializers.CharField()
    expires_at = serializers.DateTimeField(allow_null=True)
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class LicenseVerificationSerializer(serializers.Serializer):
    """Serializer for LicenseVerificationDTO."""

    is_valid = serializers.BooleanField()
    reason = serializers.CharField()
    application = LicenseApplicationSerializer()
