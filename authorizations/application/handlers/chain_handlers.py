"""
Authorization chain verification, revocation and history handlers.
"""
import logging
from typing import List

from accounts.domain.services import EligibilityGuard
from assets.ports.asset_repository import IPAssetRepository
from authorizations.application.commands.issue_chain import RevokeChainCommand
from authorizations.application.queries.verify_chain import ChainHistoryQuery, VerifyByCodeQuery
from authorizations.domain.authorization_chain import AuthorizationChain
from authorizations.domain.events import AuthorizationChainRevoked
from authorizations.domain.verification import ChainVerification, evaluate_chain
from authorizations.ports.authorization_chain_repository import AuthorizationChainRepository
from authorizations.ports.ledger import Ledger, LedgerError
from core.domain.exceptions import (
    AuthorizationChainNotFoundError,
    InvalidInputError,
    InvalidStatusTransitionError,
    NotOwnerError,
    ProductNotFoundError,
)
from core.infrastructure.events import event_bus
from core.metrics import chain_verifications_total
from licenses.ports.license_application_repository import LicenseApplicationRepository
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class VerifyByCodeHandler:
    """Handler for VerifyByCodeQuery."""

    def __init__(
        self,
        chain_repository: AuthorizationChainRepository,
        product_repository: ProductRepository,
        application_repository: LicenseApplicationRepository,
        asset_repository: IPAssetRepository,
        ledger: Ledger,
    ):
        self.chain_repository = chain_repository
        self.product_repository = product_repository
        self.application_repository = application_repository
        self.asset_repository = asset_repository
        self.ledger = ledger

    async def handle(self, query: VerifyByCodeQuery) -> ChainVerification:
        """
        Verify a product by its public code.

        License and asset status are read fresh on every call, so a
        chain issued under a since-revoked license reports invalid
        although the chain row itself was never changed.

        Raises:
            AuthorizationChainNotFoundError: If the code is unknown
        """
        chain = await self.chain_repository.find_by_code(query.verification_code)
        if not chain:
            raise AuthorizationChainNotFoundError("Unknown verification code")

        product = await self.product_repository.find_by_id(chain.product_id)
        license = await self.application_repository.find_by_id(chain.license_id)
        ip_asset = await self.asset_repository.find_by_id(chain.ip_asset_id)

        try:
            ledger_verified = await self.ledger.verify_ledger_entry(chain.id)
        except LedgerError:
            logger.warning("Ledger verification failed", extra={"chain_id": str(chain.id)}, exc_info=True)
            ledger_verified = False

        is_valid, reason = evaluate_chain(chain, license, ip_asset, ledger_verified)
        chain_verifications_total.labels(result="valid" if is_valid else "invalid").inc()
        return ChainVerification(
            chain=chain,
            product=product,
            license=license,
            ip_asset=ip_asset,
            is_valid=is_valid,
            reason=reason,
            ledger_verified=ledger_verified,
        )


class RevokeChainHandler:
    """Handler for RevokeChainCommand."""

    def __init__(
        self,
        chain_repository: AuthorizationChainRepository,
        product_repository: ProductRepository,
        asset_repository: IPAssetRepository,
        guard: EligibilityGuard,
    ):
        self.chain_repository = chain_repository
        self.product_repository = product_repository
        self.asset_repository = asset_repository
        self.guard = guard

    async def handle(self, command: RevokeChainCommand) -> AuthorizationChain:
        """
        Revoke a chain independently of its license.

        Raises:
            AuthorizationChainNotFoundError: If the chain does not exist
            NotOwnerError: If the actor is not the asset owner, product
                creator or an admin
            InvalidStatusTransitionError: If already revoked
            InvalidInputError: If the reason is blank
        """
        actor = await self.guard.require_active(command.actor_id)
        chain = await self.chain_repository.find_by_id(command.chain_id)
        if not chain:
            raise AuthorizationChainNotFoundError(f"Authorization chain {command.chain_id} not found")

        product = await self.product_repository.find_by_id(chain.product_id)
        asset = await self.asset_repository.find_by_id(chain.ip_asset_id)
        allowed = set()
        if product:
            allowed.add(product.creator_id)
        if asset:
            allowed.add(asset.creator_id)
        if actor.id not in allowed and not actor.is_admin:
            raise NotOwnerError("Only the asset owner, product creator or an admin may revoke")
        if not chain.is_active:
            raise InvalidStatusTransitionError(f"Authorization chain {chain.id} is already revoked")

        try:
            revoked = chain.revoke(command.reason)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc
        saved = await self.chain_repository.save(revoked)

        logger.info("Authorization chain revoked", extra={"chain_id": str(saved.id)})
        await event_bus.publish(
            AuthorizationChainRevoked(
                chain_id=saved.id,
                product_id=saved.product_id,
                revoked_by=actor.id,
                reason=saved.revocation_reason,
            )
        )
        return saved


class ChainHistoryHandler:
    """Handler for ChainHistoryQuery."""

    def __init__(
        self,
        chain_repository: AuthorizationChainRepository,
        product_repository: ProductRepository,
    ):
        self.chain_repository = chain_repository
        self.product_repository = product_repository

    async def handle(self, query: ChainHistoryQuery) -> List[AuthorizationChain]:
        """
        Raises:
            ProductNotFoundError: If the product does not exist
        """
        product = await self.product_repository.find_by_id(query.product_id)
        if not product:
            raise ProductNotFoundError(f"Product {query.product_id} not found")
        return await self.chain_repository.history(product.id)
