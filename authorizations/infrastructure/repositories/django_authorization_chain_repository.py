"""
Django implementation of AuthorizationChainRepository port.
"""
import logging
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from authorizations.domain.authorization_chain import AuthorizationChain
from authorizations.infrastructure.models import AuthorizationChain as AuthorizationChainModel
from authorizations.ports.authorization_chain_repository import AuthorizationChainRepository
from products.infrastructure.models import Product as ProductModel

logger = logging.getLogger(__name__)

CODE_ATTEMPTS = 5


def chain_to_domain(model: AuthorizationChainModel) -> AuthorizationChain:
    """Convert Django model to domain entity."""
    return AuthorizationChain(
        id=model.id,
        product_id=model.product_id,
        ip_asset_id=model.ip_asset_id,
        license_id=model.license_id,
        verification_code=model.verification_code,
        is_active=model.is_active,
        created_at=model.created_at,
        parent_chain_id=model.parent_chain_id,
        ledger_hash=model.ledger_hash,
        revoked_at=model.revoked_at,
        revocation_reason=model.revocation_reason,
    )


class DjangoAuthorizationChainRepository(AuthorizationChainRepository):
    """Django ORM implementation of AuthorizationChainRepository."""

    @sync_to_async
    def find_by_id(self, chain_id: uuid.UUID) -> Optional[AuthorizationChain]:
        model = AuthorizationChainModel.objects.filter(id=chain_id).first()
        return chain_to_domain(model) if model else None

    @sync_to_async
    def find_by_code(self, verification_code: str) -> Optional[AuthorizationChain]:
        model = AuthorizationChainModel.objects.filter(verification_code=verification_code).first()
        return chain_to_domain(model) if model else None

    @sync_to_async
    def find_active_for_product(self, product_id: uuid.UUID) -> Optional[AuthorizationChain]:
        model = (
            AuthorizationChainModel.objects.filter(product_id=product_id, is_active=True)
            .order_by("-created_at")
            .first()
        )
        return chain_to_domain(model) if model else None

    @sync_to_async
    def history(self, product_id: uuid.UUID) -> List[AuthorizationChain]:
        return [
            chain_to_domain(model)
            for model in AuthorizationChainModel.objects.filter(product_id=product_id).order_by(
                "-created_at"
            )
        ]

    @sync_to_async
    def create(self, chain: AuthorizationChain) -> AuthorizationChain:
        """
        Insert a chain under the product row lock.

        Concurrent issuers for the same product serialize on the lock,
        so the second one sees the first one's chain.
        """
        for attempt in range(1, CODE_ATTEMPTS + 1):
            try:
                with transaction.atomic():
                    ProductModel.objects.select_for_update().filter(id=chain.product_id).first()
                    existing = AuthorizationChainModel.objects.filter(
                        product_id=chain.product_id, is_active=True
                    ).first()
                    if existing:
                        return chain_to_domain(existing)
                    model = AuthorizationChainModel.objects.create(
                        id=chain.id,
                        product_id=chain.product_id,
                        ip_asset_id=chain.ip_asset_id,
                        license_id=chain.license_id,
                        parent_chain_id=chain.parent_chain_id,
                        verification_code=chain.verification_code,
                        ledger_hash=chain.ledger_hash,
                        is_active=chain.is_active,
                    )
                    return chain_to_domain(model)
            except IntegrityError:
                logger.warning(
                    "Verification code collision, regenerating",
                    extra={"product_id": str(chain.product_id), "attempt": attempt},
                )
                chain = chain.with_new_code()
        raise IntegrityError(f"Could not allocate a unique verification code for {chain.product_id}")

    @sync_to_async
    def set_ledger_hash(self, chain_id: uuid.UUID, ledger_hash: str) -> None:
        AuthorizationChainModel.objects.filter(id=chain_id).update(ledger_hash=ledger_hash)

    @sync_to_async
    def save(self, chain: AuthorizationChain) -> AuthorizationChain:
        AuthorizationChainModel.objects.filter(id=chain.id).update(
            is_active=chain.is_active,
            revoked_at=chain.revoked_at,
            revocation_reason=chain.revocation_reason,
            ledger_hash=chain.ledger_hash,
        )
        return chain

    @sync_to_async
    def product_ids_without_active_chain(self) -> List[uuid.UUID]:
        return list(
            ProductModel.objects.exclude(authorization_chains__is_active=True)
            .order_by("created_at")
            .values_list("id", flat=True)
        )
