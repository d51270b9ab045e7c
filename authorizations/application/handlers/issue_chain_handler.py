"""
IssueChainHandler.

Issues the authorization chain of a product. Runs in a background task
after product creation and may be re-run safely.
"""
import logging

from authorizations.application.commands.issue_chain import IssueChainCommand
from authorizations.domain.authorization_chain import AuthorizationChain
from authorizations.domain.events import AuthorizationChainIssued
from authorizations.ports.authorization_chain_repository import AuthorizationChainRepository
from authorizations.ports.ledger import Ledger, LedgerError
from core.domain.exceptions import LicenseNotFoundError, ProductNotFoundError
from core.infrastructure.events import event_bus
from core.metrics import chain_issuance_total
from licenses.ports.license_application_repository import LicenseApplicationRepository
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class IssueChainHandler:
    """Handler for IssueChainCommand."""

    def __init__(
        self,
        chain_repository: AuthorizationChainRepository,
        product_repository: ProductRepository,
        application_repository: LicenseApplicationRepository,
        ledger: Ledger,
    ):
        """Initialize handler with repositories and the ledger."""
        self.chain_repository = chain_repository
        self.product_repository = product_repository
        self.application_repository = application_repository
        self.ledger = ledger

    async def _record(self, product_id, license_id):
        try:
            return await self.ledger.record_product_issuance(product_id, license_id)
        except LedgerError:
            logger.warning(
                "Ledger issuance failed, chain stored without hash",
                extra={"product_id": str(product_id)},
                exc_info=True,
            )
            return None

    async def handle(self, command: IssueChainCommand) -> AuthorizationChain:
        """
        Handle issue chain command.

        Idempotent: an existing active chain is returned, after filling
        in its ledger hash if an earlier attempt could not record one.

        Raises:
            ProductNotFoundError: If the product does not exist
            LicenseNotFoundError: If the product's license does not exist
        """
        existing = await self.chain_repository.find_active_for_product(command.product_id)
        if existing and existing.ledger_hash:
            chain_issuance_total.labels(outcome="existing").inc()
            return existing

        product = await self.product_repository.find_by_id(command.product_id)
        if not product:
            raise ProductNotFoundError(f"Product {command.product_id} not found")
        license = await self.application_repository.find_by_id(product.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {product.license_id} not found")

        if existing:
            ledger_hash = await self._record(product.id, license.id)
            if ledger_hash:
                await self.chain_repository.set_ledger_hash(existing.id, ledger_hash)
                existing = await self.chain_repository.find_by_id(existing.id)
            chain_issuance_total.labels(outcome="existing").inc()
            return existing

        ledger_hash = await self._record(product.id, license.id)
        chain = AuthorizationChain.issue(
            product_id=product.id,
            ip_asset_id=license.ip_asset_id,
            license_id=license.id,
            ledger_hash=ledger_hash,
            parent_chain_id=command.parent_chain_id,
        )
        saved = await self.chain_repository.create(chain)
        if saved.id != chain.id:
            # A concurrent issuer won
            chain_issuance_total.labels(outcome="existing").inc()
            return saved

        chain_issuance_total.labels(outcome="issued" if ledger_hash else "issued_unrecorded").inc()
        logger.info(
            "Authorization chain issued",
            extra={"chain_id": str(saved.id), "product_id": str(product.id)},
        )
        await event_bus.publish(
            AuthorizationChainIssued(
                chain_id=saved.id,
                product_id=product.id,
                license_id=license.id,
                ledger_recorded=ledger_hash is not None,
            )
        )
        return saved
