"""
Rights registry domain events.
"""
import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class AssetRegistered(DomainEvent):
    """Event raised when a creator registers an IP asset."""

    asset_id: uuid.UUID
    creator_id: uuid.UUID
    title: str

    @property
    def aggregate_id(self) -> str:
        return str(self.asset_id)


@dataclass(frozen=True, kw_only=True)
class AssetModerated(DomainEvent):
    """Event raised when moderation decides an asset's verification status."""

    asset_id: uuid.UUID
    creator_id: uuid.UUID
    moderator_id: uuid.UUID
    verification_status: str
    note: str = ""

    @property
    def aggregate_id(self) -> str:
        return str(self.asset_id)

    @property
    def idempotency_key(self) -> str:
        # An asset can be moderated again with force, so the decision is part of the key
        return f"{self.event_type}:{self.aggregate_id}:{self.verification_status}"


@dataclass(frozen=True, kw_only=True)
class LicenseTermsPublished(DomainEvent):
    """Event raised when terms are published for an asset."""

    terms_id: uuid.UUID
    asset_id: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.terms_id)


@dataclass(frozen=True, kw_only=True)
class LicenseTermsUpdated(DomainEvent):
    """Event raised when published terms change."""

    terms_id: uuid.UUID
    asset_id: uuid.UUID
    changed_fields: tuple

    @property
    def aggregate_id(self) -> str:
        return str(self.terms_id)

    @property
    def idempotency_key(self) -> str:
        return f"{self.event_type}:{self.aggregate_id}:{self.event_id}"
