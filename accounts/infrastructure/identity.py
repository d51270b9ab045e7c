"""
Django implementation of the IdentityProvider port.
"""
import uuid
from typing import Optional

from asgiref.sync import sync_to_async

from accounts.domain.account import Account
from accounts.infrastructure.models import Account as AccountModel
from accounts.ports.identity_provider import IdentityProvider
from core.domain.value_objects import AccountRole, AccountStatus


class DjangoIdentityProvider(IdentityProvider):
    """Identity provider backed by the accounts table."""

    def _to_domain(self, model: AccountModel) -> Account:
        return Account(
            id=model.id,
            username=model.username,
            email=model.email,
            role=AccountRole(model.role),
            status=AccountStatus(model.status),
            created_at=model.created_at,
        )

    @sync_to_async
    def save(self, account: Account) -> Account:
        """
        Save an account entity.

        Args:
            account: Account entity to save

        Returns:
            Saved account entity
        """
        model, _ = AccountModel.objects.update_or_create(
            id=account.id,
            defaults={
                "username": account.username,
                "email": account.email,
                "role": account.role.value,
                "status": account.status.value,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, account_id: uuid.UUID) -> Optional[Account]:
        try:
            return self._to_domain(AccountModel.objects.get(id=account_id))
        except AccountModel.DoesNotExist:
            return None

    @sync_to_async
    def is_active_account(self, account_id: uuid.UUID) -> bool:
        return AccountModel.objects.filter(id=account_id, status="active").exists()

    @sync_to_async
    def role(self, account_id: uuid.UUID) -> Optional[AccountRole]:
        role = AccountModel.objects.filter(id=account_id).values_list("role", flat=True).first()
        return AccountRole(role) if role else None

    @sync_to_async
    def is_admin(self, account_id: uuid.UUID) -> bool:
        return AccountModel.objects.filter(id=account_id, role="admin").exists()
