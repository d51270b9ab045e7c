"""
LicenseTerms domain entity.

Published conditions under which an IP asset may be licensed.
"""
import re
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import LicenseType, to_money

PERPETUAL = "perpetual"
MIN_REVENUE_SHARE = Decimal("5")
MAX_REVENUE_SHARE = Decimal("50")

_DURATION_RE = re.compile(r"^\s*(\d+)\s*(day|days|month|months|year|years)\s*$", re.IGNORECASE)
_UNIT_DAYS = {"day": 1, "month": 30, "year": 365}

# Fields an owner may change after publication
MUTABLE_FIELDS = frozenset(
    {
        "license_type",
        "revenue_share_percent",
        "base_fee",
        "territory",
        "duration",
        "requirements",
        "restrictions",
        "auto_approve",
        "max_licenses",
        "is_active",
    }
)


def parse_duration(value: str) -> Optional[timedelta]:
    """
    Parse a license duration.

    Accepts "perpetual" or "<n> <unit>" with unit day(s), month(s) or
    year(s). Months count as 30 days and years as 365 days.

    Args:
        value: Duration text

    Returns:
        timedelta, or None for a perpetual license

    Raises:
        ValueError: If the text is not a valid duration
    """
    if value is None or value.strip().lower() == PERPETUAL:
        return None
    match = _DURATION_RE.match(value)
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    count = int(match.group(1))
    if count < 1:
        raise ValueError("Duration must be at least 1")
    unit = match.group(2).lower().rstrip("s")
    return timedelta(days=count * _UNIT_DAYS[unit])


@dataclass(frozen=True)
class LicenseTerms:
    """
    LicenseTerms domain entity.

    max_licenses of 0 means unlimited approvals.
    """

    id: uuid.UUID
    ip_asset_id: uuid.UUID
    license_type: LicenseType
    revenue_share_percent: Decimal
    base_fee: Decimal
    territory: str
    duration: str
    requirements: str
    restrictions: str
    auto_approve: bool
    max_licenses: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate terms."""
        if not self.ip_asset_id:
            raise ValueError("IP asset ID is required")
        if isinstance(self.revenue_share_percent, float):
            raise ValueError("Revenue share must not be a float")
        share = Decimal(self.revenue_share_percent)
        if share < MIN_REVENUE_SHARE or share > MAX_REVENUE_SHARE:
            raise ValueError(
                f"Revenue share must be between {MIN_REVENUE_SHARE} and {MAX_REVENUE_SHARE} percent"
            )
        object.__setattr__(self, "revenue_share_percent", share)
        fee = to_money(self.base_fee)
        if fee < 0:
            raise ValueError("Base fee cannot be negative")
        object.__setattr__(self, "base_fee", fee)
        if self.max_licenses is None or self.max_licenses < 0:
            raise ValueError("max_licenses cannot be negative")
        if not self.territory:
            raise ValueError("Territory is required")
        parse_duration(self.duration)

    @classmethod
    def create(
        cls,
        ip_asset_id: uuid.UUID,
        revenue_share_percent: Decimal,
        base_fee: Decimal = Decimal("0"),
        license_type: LicenseType = LicenseType.STANDARD,
        territory: str = "global",
        duration: str = PERPETUAL,
        requirements: str = "",
        restrictions: str = "",
        auto_approve: bool = False,
        max_licenses: int = 0,
        terms_id: Optional[uuid.UUID] = None,
    ) -> "LicenseTerms":
        """
        Create new, active license terms.

        Returns:
            LicenseTerms entity instance

        Raises:
            ValueError: If any field is out of range
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=terms_id or uuid.uuid4(),
            ip_asset_id=ip_asset_id,
            license_type=license_type,
            revenue_share_percent=revenue_share_percent,
            base_fee=base_fee,
            territory=territory,
            duration=duration,
            requirements=requirements,
            restrictions=restrictions,
            auto_approve=auto_approve,
            max_licenses=max_licenses,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_unlimited(self) -> bool:
        return self.max_licenses == 0

    def has_capacity(self, approved_count: int) -> bool:
        """Whether one more approval fits under max_licenses."""
        return self.is_unlimited or approved_count < self.max_licenses

    def belongs_to(self, ip_asset_id: uuid.UUID) -> bool:
        return self.ip_asset_id == ip_asset_id

    def expiry_for(self, approved_at: datetime) -> Optional[datetime]:
        """Expiry of a license approved at ``approved_at``, or None if perpetual."""
        length = parse_duration(self.duration)
        return approved_at + length if length else None

    def update(self, **changes) -> "LicenseTerms":
        """
        Return terms with the given fields changed.

        Raises:
            ValueError: If a field is unknown, immutable or out of range
        """
        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if "license_type" in changes:
            changes["license_type"] = LicenseType(changes["license_type"])
        return replace(self, updated_at=datetime.now(timezone.utc), **changes)
