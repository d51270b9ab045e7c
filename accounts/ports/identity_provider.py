"""
Identity provider port (interface).

The eligibility/identity collaborator. Implementations are in the
infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from accounts.domain.account import Account
from core.domain.value_objects import AccountRole


class IdentityProvider(ABC):
    """Abstract identity collaborator."""

    @abstractmethod
    async def find_by_id(self, account_id: uuid.UUID) -> Optional[Account]:
        """
        Find an account by ID.

        Args:
            account_id: Account UUID

        Returns:
            Account entity or None if not found
        """
        pass

    @abstractmethod
    async def is_active_account(self, account_id: uuid.UUID) -> bool:
        """
        Check whether an account exists and is active.

        Args:
            account_id: Account UUID

        Returns:
            True if the account is active
        """
        pass

    @abstractmethod
    async def role(self, account_id: uuid.UUID) -> Optional[AccountRole]:
        """
        Get the role of an account.

        Args:
            account_id: Account UUID

        Returns:
            AccountRole or None if the account does not exist
        """
        pass

    @abstractmethod
    async def is_admin(self, account_id: uuid.UUID) -> bool:
        """
        Check whether an account is a platform admin.

        Args:
            account_id: Account UUID

        Returns:
            True if the account has the admin role
        """
        pass
