"""
Authorization chain domain events.
"""
import uuid
from dataclasses import dataclass

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class AuthorizationChainIssued(DomainEvent):
    """Event raised when a product receives its authorization chain."""

    chain_id: uuid.UUID
    product_id: uuid.UUID
    license_id: uuid.UUID
    ledger_recorded: bool

    @property
    def aggregate_id(self) -> str:
        return str(self.chain_id)


@dataclass(frozen=True, kw_only=True)
class AuthorizationChainRevoked(DomainEvent):
    """Event raised when a chain is revoked by hand."""

    chain_id: uuid.UUID
    product_id: uuid.UUID
    revoked_by: uuid.UUID
    reason: str

    @property
    def aggregate_id(self) -> str:
        return str(self.chain_id)
