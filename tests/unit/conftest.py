"""
Fixtures for unit tests.

Unit tests run without a database, so event bus subscriptions are
detached for the duration of each test.
"""

import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

import pytest

from accounts.domain.account import Account
from accounts.ports.identity_provider import IdentityProvider
from core.domain.value_objects import AccountRole, AccountStatus
from core.infrastructure.events import event_bus


@pytest.fixture(autouse=True)
def isolated_event_bus():
    """Detach registered handlers and restore them afterwards."""
    saved = {event_type: event_bus.handlers_for(event_type) for event_type in list(event_bus._handlers)}
    event_bus.clear()
    yield event_bus
    event_bus.clear()
    for event_type, handlers in saved.items():
        for handler in handlers:
            event_bus.subscribe(event_type, handler)


class InMemoryIdentityProvider(IdentityProvider):
    """Identity provider over a dict of accounts."""

    def __init__(self):
        self.accounts: Dict[uuid.UUID, Account] = {}

    def add(self, role: AccountRole = AccountRole.CREATOR, status: AccountStatus = AccountStatus.ACTIVE) -> Account:
        unique_id = uuid.uuid4().hex[:8]
        account = Account(
            id=uuid.uuid4(),
            username=f"{role.value}_{unique_id}",
            email=f"{role.value}_{unique_id}@example.com",
            role=role,
            status=status,
            created_at=datetime.now(timezone.utc),
        )
        self.accounts[account.id] = account
        return account

    async def find_by_id(self, account_id: uuid.UUID) -> Optional[Account]:
        return self.accounts.get(account_id)

    async def is_active_account(self, account_id: uuid.UUID) -> bool:
        account = self.accounts.get(account_id)
        return account is not None and account.is_active

    async def role(self, account_id: uuid.UUID) -> Optional[AccountRole]:
        account = self.accounts.get(account_id)
        return account.role if account else None

    async def is_admin(self, account_id: uuid.UUID) -> bool:
        account = self.accounts.get(account_id)
        return account is not None and account.is_admin


@pytest.fixture
def identity_provider():
    """Fixture for an in-memory identity provider."""
    return InMemoryIdentityProvider()
