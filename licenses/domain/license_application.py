"""
LicenseApplication domain entity.

One application is the unit of the workflow state machine:

    pending -> approved -> revoked
    pending -> rejected

rejected and revoked are terminal.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from assets.domain.license_terms import LicenseTerms
from core.domain.exceptions import (
    InvalidStatusTransitionError,
    LicenseExpiredError,
    LicenseNotValidError,
)
from core.domain.value_objects import ApplicationStatus

APPLICATION_DATA_VERSION = 1

OPEN_STATUSES = frozenset({ApplicationStatus.PENDING, ApplicationStatus.APPROVED})


@dataclass(frozen=True)
class ApplicationData:
    """What the applicant tells the rights holder; unknown keys go into ``extra``."""

    message: str = ""
    intended_use: str = ""
    estimated_volume: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    version: int = APPLICATION_DATA_VERSION

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ApplicationData":
        data = dict(data or {})
        extra = dict(data.pop("extra", {}) or {})
        known = {
            name: data.pop(name)
            for name in ("message", "intended_use", "estimated_volume", "version")
            if name in data
        }
        extra.update(data)
        return cls(extra=extra, **known)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "message": self.message,
            "intended_use": self.intended_use,
            "estimated_volume": self.estimated_volume,
            "extra": dict(self.extra),
        }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LicenseApplication:
    """
    LicenseApplication domain entity.

    An approved application is the license a licensee sells under.
    """

    id: uuid.UUID
    ip_asset_id: uuid.UUID
    applicant_id: uuid.UUID
    license_terms_id: uuid.UUID
    application_data: ApplicationData
    status: ApplicationStatus
    approved_at: Optional[datetime]
    approved_by: Optional[uuid.UUID]
    rejection_reason: str
    revoked_at: Optional[datetime]
    revoked_by: Optional[uuid.UUID]
    revocation_reason: str
    expires_at: Optional[datetime]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate application entity."""
        if not self.ip_asset_id:
            raise ValueError("IP asset ID is required")
        if not self.applicant_id:
            raise ValueError("Applicant ID is required")
        if not self.license_terms_id:
            raise ValueError("License terms ID is required")

    @classmethod
    def create(
        cls,
        ip_asset_id: uuid.UUID,
        applicant_id: uuid.UUID,
        license_terms_id: uuid.UUID,
        application_data: Optional[ApplicationData] = None,
        application_id: Optional[uuid.UUID] = None,
    ) -> "LicenseApplication":
        """
        Create a new pending application.

        Returns:
            LicenseApplication entity instance
        """
        now = _utcnow()
        return cls(
            id=application_id or uuid.uuid4(),
            ip_asset_id=ip_asset_id,
            applicant_id=applicant_id,
            license_terms_id=license_terms_id,
            application_data=application_data or ApplicationData(),
            status=ApplicationStatus.PENDING,
            approved_at=None,
            approved_by=None,
            rejection_reason="",
            revoked_at=None,
            revoked_by=None,
            revocation_reason="",
            expires_at=None,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_open(self) -> bool:
        """Pending or approved; at most one per (asset, applicant)."""
        return self.status in OPEN_STATUSES

    def _require_status(self, expected: ApplicationStatus, action: str) -> None:
        if self.status != expected:
            raise InvalidStatusTransitionError(
                f"Cannot {action} application {self.id} in status {self.status.value}"
            )

    def approve(
        self, approver_id: uuid.UUID, terms: LicenseTerms, now: Optional[datetime] = None
    ) -> "LicenseApplication":
        """
        Approve a pending application.

        Args:
            approver_id: Account approving (owner, admin, or owner on auto-approval)
            terms: Terms the application was made against, for expiry
            now: Approval time (defaults to now)

        Returns:
            New LicenseApplication instance with approved status

        Raises:
            InvalidStatusTransitionError: If not pending
        """
        self._require_status(ApplicationStatus.PENDING, "approve")
        approved_at = now or _utcnow()
        return replace(
            self,
            status=ApplicationStatus.APPROVED,
            approved_at=approved_at,
            approved_by=approver_id,
            expires_at=terms.expiry_for(approved_at),
            updated_at=approved_at,
        )

    def reject(
        self, rejecter_id: uuid.UUID, reason: str, now: Optional[datetime] = None
    ) -> "LicenseApplication":
        """
        Reject a pending application.

        Raises:
            ValueError: If the reason is blank
            InvalidStatusTransitionError: If not pending
        """
        if not reason or not reason.strip():
            raise ValueError("A rejection reason is required")
        self._require_status(ApplicationStatus.PENDING, "reject")
        return replace(
            self,
            status=ApplicationStatus.REJECTED,
            rejection_reason=reason.strip(),
            is_active=False,
            updated_at=now or _utcnow(),
        )

    def revoke(
        self, revoker_id: uuid.UUID, reason: str, now: Optional[datetime] = None
    ) -> "LicenseApplication":
        """
        Revoke an approved license.

        Raises:
            ValueError: If the reason is blank
            InvalidStatusTransitionError: If not approved
        """
        if not reason or not reason.strip():
            raise ValueError("A revocation reason is required")
        self._require_status(ApplicationStatus.APPROVED, "revoke")
        revoked_at = now or _utcnow()
        return replace(
            self,
            status=ApplicationStatus.REVOKED,
            revoked_at=revoked_at,
            revoked_by=revoker_id,
            revocation_reason=reason.strip(),
            is_active=False,
            updated_at=revoked_at,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.expires_at is not None and self.expires_at <= (now or _utcnow())

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """
        Check if the license can currently be sold under.

        Expiry is evaluated lazily; the stored status is never changed by it.
        """
        return (
            self.status == ApplicationStatus.APPROVED
            and self.is_active
            and not self.is_expired(now)
        )

    def ensure_valid(self, now: Optional[datetime] = None) -> None:
        """
        Raise unless the license is valid.

        Raises:
            LicenseNotValidError: If not approved and active
            LicenseExpiredError: If approved but past expires_at
        """
        if self.status != ApplicationStatus.APPROVED or not self.is_active:
            raise LicenseNotValidError(f"License {self.id} is {self.status.value}")
        if self.is_expired(now):
            raise LicenseExpiredError(f"License {self.id} expired at {self.expires_at.isoformat()}")
