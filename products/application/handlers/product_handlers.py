"""
Product maintenance handlers.

Handlers for updating, changing status, deleting and reading products.
"""
import logging

from accounts.domain.services import EligibilityGuard
from core.domain.exceptions import InvalidInputError, NotOwnerError, ProductNotFoundError
from core.domain.value_objects import ProductStatus
from core.infrastructure.events import event_bus
from products.application.commands.update_product import (
    ChangeProductStatusCommand,
    DeleteProductCommand,
    UpdateProductCommand,
)
from products.application.queries.get_product import GetProductQuery
from products.domain.events import ProductDeleted, ProductStatusChanged
from products.domain.product import Product
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


async def _load(product_repository: ProductRepository, product_id) -> Product:
    product = await product_repository.find_by_id(product_id)
    if not product:
        raise ProductNotFoundError(f"Product {product_id} not found")
    return product


class UpdateProductHandler:
    """Handler for UpdateProductCommand."""

    def __init__(self, product_repository: ProductRepository, guard: EligibilityGuard):
        """Initialize handler with repository and guard."""
        self.product_repository = product_repository
        self.guard = guard

    async def handle(self, command: UpdateProductCommand) -> Product:
        """
        Handle update product command.

        Raises:
            ProductNotFoundError: If the product does not exist
            LicenseNotValidError: If a restock would reactivate under an invalid license
            NotOwnerError: If the actor does not own the product
            InvalidInputError: If a change is invalid
        """
        actor = await self.guard.require_active(command.actor_id)
        product = await _load(self.product_repository, command.product_id)
        if not product.is_owned_by(actor.id):
            raise NotOwnerError("Only the product owner may update it")

        try:
            return await self.product_repository.update(product.id, dict(command.changes))
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(str(exc)) from exc


class ChangeProductStatusHandler:
    """Handler for ChangeProductStatusCommand."""

    def __init__(self, product_repository: ProductRepository, guard: EligibilityGuard):
        """Initialize handler with repository and guard."""
        self.product_repository = product_repository
        self.guard = guard

    async def handle(self, command: ChangeProductStatusCommand) -> Product:
        """
        Handle change status command.

        Raises:
            InvalidInputError: If the status is unknown
            ProductNotFoundError: If the product does not exist
            NotOwnerError: If the actor does not own the product
            InvalidStatusTransitionError: If the transition is not allowed
            LicenseNotValidError: If activating under an invalid license
            LicenseExpiredError: If activating under a lapsed license
        """
        try:
            status = ProductStatus(command.status)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown product status {command.status!r}") from exc

        actor = await self.guard.require_active(command.actor_id)
        product = await _load(self.product_repository, command.product_id)
        if not product.is_owned_by(actor.id):
            raise NotOwnerError("Only the product owner may change its status")

        changed = await self.product_repository.change_status(product.id, status)
        logger.info(
            "Product status changed",
            extra={
                "product_id": str(changed.id),
                "old_status": product.status.value,
                "new_status": changed.status.value,
            },
        )
        await event_bus.publish(
            ProductStatusChanged(
                product_id=changed.id,
                old_status=product.status.value,
                new_status=changed.status.value,
            )
        )
        return changed


class DeleteProductHandler:
    """Handler for DeleteProductCommand."""

    def __init__(self, product_repository: ProductRepository, guard: EligibilityGuard):
        """Initialize handler with repository and guard."""
        self.product_repository = product_repository
        self.guard = guard

    async def handle(self, command: DeleteProductCommand) -> None:
        """
        Handle delete product command.

        Raises:
            ProductNotFoundError: If the product does not exist
            NotOwnerError: If the actor is neither owner nor admin
            ProductHasSalesError: If completed sales exist
        """
        product = await _load(self.product_repository, command.product_id)
        actor = await self.guard.require_owner_or_admin(command.actor_id, product.creator_id)

        await self.product_repository.delete(product.id)
        logger.info(
            "Product deleted",
            extra={"product_id": str(product.id), "deleted_by": str(actor.id)},
        )
        await event_bus.publish(ProductDeleted(product_id=product.id, deleted_by=actor.id))


class GetProductHandler:
    """Handler for GetProductQuery."""

    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def handle(self, query: GetProductQuery) -> Product:
        return await _load(self.product_repository, query.product_id)
