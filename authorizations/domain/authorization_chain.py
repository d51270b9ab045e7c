"""
AuthorizationChain domain entity.

The chain record is written once at issuance. Its validity is not a
stored fact: it is re-derived on every verification from the live
status of the license and asset it points at.
"""
import secrets
import string
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

VERIFICATION_CODE_LENGTH = 32
VERIFICATION_CODE_ALPHABET = string.ascii_letters + string.digits


def generate_verification_code(length: int = VERIFICATION_CODE_LENGTH) -> str:
    """Cryptographically random public code; uniqueness is enforced by the store."""
    return "".join(secrets.choice(VERIFICATION_CODE_ALPHABET) for _ in range(length))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AuthorizationChain:
    """
    AuthorizationChain domain entity.

    Links product -> license -> asset; parent_chain_id links a
    derivative chain to the chain it was re-licensed from.
    """

    id: uuid.UUID
    product_id: uuid.UUID
    ip_asset_id: uuid.UUID
    license_id: uuid.UUID
    verification_code: str
    is_active: bool
    created_at: datetime
    parent_chain_id: Optional[uuid.UUID] = None
    ledger_hash: Optional[str] = None
    revoked_at: Optional[datetime] = None
    revocation_reason: str = ""

    def __post_init__(self):
        """Validate chain entity."""
        if not self.product_id or not self.license_id or not self.ip_asset_id:
            raise ValueError("Product, license and IP asset IDs are required")
        if len(self.verification_code or "") != VERIFICATION_CODE_LENGTH:
            raise ValueError(
                f"Verification code must be {VERIFICATION_CODE_LENGTH} characters"
            )

    @classmethod
    def issue(
        cls,
        product_id: uuid.UUID,
        ip_asset_id: uuid.UUID,
        license_id: uuid.UUID,
        ledger_hash: Optional[str] = None,
        parent_chain_id: Optional[uuid.UUID] = None,
        verification_code: Optional[str] = None,
    ) -> "AuthorizationChain":
        """
        Create a new active chain with a fresh verification code.

        Returns:
            AuthorizationChain entity instance
        """
        return cls(
            id=uuid.uuid4(),
            product_id=product_id,
            ip_asset_id=ip_asset_id,
            license_id=license_id,
            verification_code=verification_code or generate_verification_code(),
            is_active=True,
            created_at=_utcnow(),
            parent_chain_id=parent_chain_id,
            ledger_hash=ledger_hash,
        )

    def with_new_code(self) -> "AuthorizationChain":
        """Same chain with a regenerated code, used after a collision."""
        return replace(self, verification_code=generate_verification_code())

    def revoke(self, reason: str, now: Optional[datetime] = None) -> "AuthorizationChain":
        """
        Deactivate the chain.

        Raises:
            ValueError: If the reason is blank or the chain is already revoked
        """
        if not reason or not reason.strip():
            raise ValueError("A revocation reason is required")
        if not self.is_active:
            raise ValueError(f"Authorization chain {self.id} is already revoked")
        return replace(
            self,
            is_active=False,
            revoked_at=now or _utcnow(),
            revocation_reason=reason.strip(),
        )
