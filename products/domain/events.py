"""
Product domain events.
"""
import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ProductCreated(DomainEvent):
    """Event raised when a product is created; triggers chain issuance."""

    product_id: uuid.UUID
    license_id: uuid.UUID
    creator_id: uuid.UUID
    title: str

    @property
    def aggregate_id(self) -> str:
        return str(self.product_id)


@dataclass(frozen=True, kw_only=True)
class ProductStatusChanged(DomainEvent):
    """Event raised when a product changes status by hand."""

    product_id: uuid.UUID
    old_status: str
    new_status: str

    @property
    def aggregate_id(self) -> str:
        return str(self.product_id)

    @property
    def idempotency_key(self) -> str:
        return f"{self.event_type}:{self.aggregate_id}:{self.event_id}"


@dataclass(frozen=True, kw_only=True)
class ProductDeleted(DomainEvent):
    """Event raised when a product is deleted."""

    product_id: uuid.UUID
    deleted_by: uuid.UUID

    @property
    def aggregate_id(self) -> str:
        return str(self.product_id)
