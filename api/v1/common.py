"""
Shared wiring for v1 views.
"""

import uuid

from rest_framework.exceptions import NotAuthenticated, ValidationError
from rest_framework.request import Request

from accounts.domain.services import EligibilityGuard
from accounts.infrastructure.identity import DjangoIdentityProvider
from core.instrumentation import Status, StatusCode

_identity_provider = DjangoIdentityProvider()


def build_guard() -> EligibilityGuard:
    """Eligibility guard backed by the account table."""
    return EligibilityGuard(_identity_provider)


def caller_id(request: Request) -> uuid.UUID:
    """Account id resolved by AccountContextMiddleware."""
    account_id = getattr(request, "account_id", None)
    if account_id is None:
        raise NotAuthenticated("Missing X-Account-ID header")
    return account_id


def validated(serializer_class, data, span) -> dict:
    """
    Validate request data, marking the span on failure.

    Raises:
        ValidationError: Rendered as VALIDATION_ERROR by the exception handler
    """
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        span.set_attribute("error", "validation_failed")
        span.set_status(Status(StatusCode.ERROR, "Validation failed"))
        raise ValidationError(serializer.errors)
    return serializer.validated_data
