"""
Account domain entity.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import AccountRole, AccountStatus


@dataclass(frozen=True)
class Account:
    """
    Marketplace account as the licensing core sees it.

    Credentials live with the identity provider; only role and status
    matter here.
    """

    id: uuid.UUID
    username: str
    email: str
    role: AccountRole
    status: AccountStatus
    created_at: datetime

    def __post_init__(self):
        """Validate account entity."""
        if not self.username:
            raise ValueError("Username is required")
        if not self.email or "@" not in self.email:
            raise ValueError("A valid email is required")

    @classmethod
    def create(
        cls,
        username: str,
        email: str,
        role: AccountRole = AccountRole.BUYER,
        account_id: Optional[uuid.UUID] = None,
    ) -> "Account":
        """Create a new active account."""
        return cls(
            id=account_id or uuid.uuid4(),
            username=username,
            email=email.lower(),
            role=role,
            status=AccountStatus.ACTIVE,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN
