"""
Unit tests for EligibilityGuard.
"""
import uuid

import pytest

from accounts.domain.services import EligibilityGuard
from core.domain.exceptions import (
    AccountInactiveError,
    AccountNotFoundError,
    NotOwnerError,
    RoleNotPermittedError,
)
from core.domain.value_objects import AccountRole, AccountStatus


@pytest.fixture
def guard(identity_provider):
    return EligibilityGuard(identity_provider)


@pytest.mark.asyncio
class TestEligibilityGuard:
    """Tests for EligibilityGuard."""

    async def test_active_account_passes(self, guard, identity_provider):
        account = identity_provider.add(AccountRole.BUYER)

        assert await guard.require_active(account.id) == account

    async def test_unknown_account(self, guard):
        with pytest.raises(AccountNotFoundError):
            await guard.require_active(uuid.uuid4())

    @pytest.mark.parametrize("status", [AccountStatus.SUSPENDED, AccountStatus.BANNED])
    async def test_inactive_account(self, guard, identity_provider, status):
        account = identity_provider.add(AccountRole.CREATOR, status)

        with pytest.raises(AccountInactiveError):
            await guard.require_active(account.id)

    async def test_role_mismatch(self, guard, identity_provider):
        buyer = identity_provider.add(AccountRole.BUYER)

        with pytest.raises(RoleNotPermittedError) as exc_info:
            await guard.require_role(buyer.id, {AccountRole.CREATOR, AccountRole.SECONDARY_CREATOR})

        assert "buyer" in exc_info.value.message

    async def test_role_checked_after_status(self, guard, identity_provider):
        creator = identity_provider.add(AccountRole.CREATOR, AccountStatus.SUSPENDED)

        with pytest.raises(AccountInactiveError):
            await guard.require_role(creator.id, {AccountRole.CREATOR})

    async def test_owner_allowed(self, guard, identity_provider):
        owner = identity_provider.add(AccountRole.CREATOR)

        assert await guard.require_owner_or_admin(owner.id, owner.id) == owner

    async def test_admin_overrides_ownership(self, guard, identity_provider):
        owner = identity_provider.add(AccountRole.CREATOR)
        admin = identity_provider.add(AccountRole.ADMIN)

        assert await guard.require_owner_or_admin(admin.id, owner.id) == admin
        assert await guard.is_admin(admin.id) is True

    async def test_stranger_rejected(self, guard, identity_provider):
        owner = identity_provider.add(AccountRole.CREATOR)
        stranger = identity_provider.add(AccountRole.CREATOR)

        with pytest.raises(NotOwnerError):
            await guard.require_owner_or_admin(stranger.id, owner.id)
