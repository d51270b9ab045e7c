"""
Eligibility and ownership guard.

Cross-cutting authorization checks used by the registry, the license
workflow, products and settlement.
"""
import uuid
from typing import Iterable

from accounts.domain.account import Account
from accounts.ports.identity_provider import IdentityProvider
from core.domain.exceptions import (
    AccountInactiveError,
    AccountNotFoundError,
    NotOwnerError,
    RoleNotPermittedError,
)
from core.domain.value_objects import AccountRole


class EligibilityGuard:
    """Domain service wrapping the identity collaborator."""

    def __init__(self, identity_provider: IdentityProvider):
        """Initialize guard with an identity provider."""
        self.identity_provider = identity_provider

    async def require_active(self, account_id: uuid.UUID) -> Account:
        """
        Require an existing, active account.

        Args:
            account_id: Account UUID

        Returns:
            Account entity

        Raises:
            AccountNotFoundError: If the account is unknown
            AccountInactiveError: If the account is suspended or banned
        """
        account = await self.identity_provider.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")
        if not account.is_active:
            raise AccountInactiveError(f"Account {account_id} is {account.status.value}")
        return account

    async def require_role(
        self, account_id: uuid.UUID, roles: Iterable[AccountRole]
    ) -> Account:
        """
        Require an active account holding one of the given roles.

        Raises:
            RoleNotPermittedError: If the role is not in ``roles``
        """
        account = await self.require_active(account_id)
        allowed = set(roles)
        if account.role not in allowed:
            names = ", ".join(sorted(role.value for role in allowed))
            raise RoleNotPermittedError(
                f"Role {account.role.value} is not permitted; requires one of: {names}"
            )
        return account

    async def require_owner_or_admin(
        self, actor_id: uuid.UUID, owner_id: uuid.UUID
    ) -> Account:
        """
        Require that the actor owns the resource or is an admin.

        Raises:
            NotOwnerError: If the actor is neither owner nor admin
        """
        account = await self.require_active(actor_id)
        if account.id != owner_id and not account.is_admin:
            raise NotOwnerError()
        return account

    async def is_admin(self, account_id: uuid.UUID) -> bool:
        return await self.identity_provider.is_admin(account_id)
