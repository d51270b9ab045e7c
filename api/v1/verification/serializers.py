"""
Serializers for authorization chain endpoints.
"""

from rest_framework import serializers


class AuthorizationChainSerializer(serializers.Serializer):
    """Serializer for AuthorizationChain."""

    id = serializers.UUIDField()
    product_id = serializers.UUIDField()
    ip_asset_id = serializers.UUIDField()
    license_id = serializers.UUIDField()
    parent_chain_id = serializers.UUIDField(allow_null=True)
    verification_code = serializers.CharField()
    ledger_hash = serializers.CharField(allow_null=True)
    is_active = serializers.BooleanField()
    revoked_at = serializers.DateTimeField(allow_null=True)
    revocation_reason = serializers.CharField()
    created_at = serializers.DateTimeField()


class VerifiedProductSerializer(serializers.Serializer):
    """Public product summary shown to verifiers."""

    id = serializers.UUIDField()
    title = serializers.CharField()
    status = serializers.CharField()


class VerifiedAssetSerializer(serializers.Serializer):
    """Public asset summary shown to verifiers."""

    id = serializers.UUIDField()
    title = serializers.CharField()
    creator_id = serializers.UUIDField()
    verification_status = serializers.CharField()


class VerifiedLicenseSerializer(serializers.Serializer):
    """Public license summary shown to verifiers."""

    id = serializers.UUIDField()
    applicant_id = serializers.UUIDField()
    status = serializers.CharField()
    expires_at = serializers.DateTimeField(allow_null=True)


class ChainVerificationSerializer(serializers.Serializer):
    """Serializer for ChainVerification."""

    is_valid = serializers.BooleanField()
    reason = serializers.CharField()
    ledger_verified = serializers.BooleanField()
    verification_code = serializers.CharField(source="chain.verification_code")
    issued_at = serializers.DateTimeField(source="chain.created_at")
    product = VerifiedProductSerializer(allow_null=True)
    ip_asset = VerifiedAssetSerializer(allow_null=True)
    license = VerifiedLicenseSerializer(allow_null=True)


class RevokeChainRequestSerializer(serializers.Serializer):
    """Serializer for revoking a chain."""

    reason = serializers.CharField(max_length=1000)
