"""
License workflow domain events.

Every state transition publishes one event after its transaction commits.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseApplied(DomainEvent):
    """Event raised when an application is submitted."""

    application_id: uuid.UUID
    ip_asset_id: uuid.UUID
    applicant_id: uuid.UUID
    asset_owner_id: uuid.UUID
    license_terms_id: uuid.UUID
    auto_approved: bool = False

    @property
    def aggregate_id(self) -> str:
        return str(self.application_id)


@dataclass(frozen=True, kw_only=True)
class LicenseApproved(DomainEvent):
    """Event raised when an application is approved."""

    application_id: uuid.UUID
    ip_asset_id: uuid.UUID
    applicant_id: uuid.UUID
    approved_by: uuid.UUID
    expires_at: Optional[datetime] = None
    auto_approved: bool = False

    @property
    def aggregate_id(self) -> str:
        return str(self.application_id)


@dataclass(frozen=True, kw_only=True)
class LicenseRejected(DomainEvent):
    """Event raised when an application is rejected."""

    application_id: uuid.UUID
    applicant_id: uuid.UUID
    rejected_by: uuid.UUID
    reason: str

    @property
    def aggregate_id(self) -> str:
        return str(self.application_id)


@dataclass(frozen=True, kw_only=True)
class LicenseRevoked(DomainEvent):
    """Event raised when an approved license is revoked."""

    application_id: uuid.UUID
    applicant_id: uuid.UUID
    revoked_by: uuid.UUID
    reason: str

    @property
    def aggregate_id(self) -> str:
        return str(self.application_id)
