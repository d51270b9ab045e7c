"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Union

CENT = Decimal("0.01")


def to_money(value: Union[Decimal, str, int]) -> Decimal:
    """
    Convert a value to a Decimal quantized to the smallest currency unit.

    Floats are rejected so binary rounding never reaches a ledger amount.

    Args:
        value: Decimal, numeric string or int

    Returns:
        Decimal quantized to two places with half-up rounding
    """
    if isinstance(value, float):
        raise ValueError("Monetary values must not be floats")
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Invalid monetary value: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid monetary value: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class Percentage(ValueObject):
    """Percentage value object bounded to [0, 100]."""

    value: Decimal

    def __post_init__(self):
        """Validate percentage range."""
        if isinstance(self.value, float):
            raise ValueError("Percentages must not be floats")
        value = Decimal(self.value)
        if value < 0 or value > 100:
            raise ValueError(f"Percentage out of range: {self.value}")
        object.__setattr__(self, "value", value)

    def of(self, amount: Decimal) -> Decimal:
        """Apply the percentage to an amount, rounded to the cent."""
        return (amount * self.value / Decimal(100)).quantize(CENT, rounding=ROUND_HALF_UP)

    def __str__(self) -> str:
        """Return percentage as string."""
        return f"{self.value}%"


class AccountRole(str, Enum):
    """Account role enumeration."""

    CREATOR = "creator"
    SECONDARY_CREATOR = "secondary_creator"
    BUYER = "buyer"
    ADMIN = "admin"

    def __str__(self) -> str:
        """Return role value."""
        return self.value


class AccountStatus(str, Enum):
    """Account status enumeration."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"

    def __str__(self) -> str:
        """Return status value."""
        return self.value


class VerificationStatus(str, Enum):
    """Moderation outcome of an IP asset."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def __str__(self) -> str:
        """Return status value."""
        return self.value


class AssetStatus(str, Enum):
    """Lifecycle status of an IP asset."""

    ACTIVE = "active"
    SUSPENDED = "suspended"

    def __str__(self) -> str:
        """Return status value."""
        return self.value


class LicenseType(str, Enum):
    """License terms tier."""

    STANDARD = "standard"
    PREMIUM = "premium"
    EXCLUSIVE = "exclusive"

    def __str__(self) -> str:
        """Return type value."""
        return self.value


class ApplicationStatus(str, Enum):
    """License application status enumeration."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVOKED = "revoked"

    def __str__(self) -> str:
        """Return status value."""
        return self.value


class ProductStatus(str, Enum):
    """Product status enumeration."""

    DRAFT = "draft"
    ACTIVE = "active"
    SOLD_OUT = "sold_out"
    SUSPENDED = "suspended"

    def __str__(self) -> str:
        """Return status value."""
        return self.value


class TransactionStatus(str, Enum):
    """Transaction status enumeration."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"

    def __str__(self) -> str:
        """Return status value."""
        return self.value


class TransactionType(str, Enum):
    """Transaction type enumeration."""

    PRODUCT_SALE = "product_sale"
    LICENSE_FEE = "license_fee"
    REVENUE_SHARE = "revenue_share"

    def __str__(self) -> str:
        """Return type value."""
        return self.value
