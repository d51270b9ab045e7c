"""
CreateProductHandler.

Handler for creating a product under an approved license.
"""
import logging

from accounts.domain.services import EligibilityGuard
from core.domain.exceptions import InvalidInputError, LicenseNotFoundError, NotOwnerError
from core.infrastructure.events import event_bus
from licenses.domain.services import APPLICANT_ROLES
from licenses.ports.license_application_repository import LicenseApplicationRepository
from products.application.commands.create_product import CreateProductCommand
from products.domain.events import ProductCreated
from products.domain.product import Product
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CreateProductHandler:
    """Handler for CreateProductCommand."""

    def __init__(
        self,
        product_repository: ProductRepository,
        application_repository: LicenseApplicationRepository,
        guard: EligibilityGuard,
    ):
        """Initialize handler with repositories and guard."""
        self.product_repository = product_repository
        self.application_repository = application_repository
        self.guard = guard

    async def handle(self, command: CreateProductCommand) -> Product:
        """
        Handle create product command.

        The authorization chain is issued asynchronously after commit.

        Args:
            command: CreateProductCommand

        Returns:
            Created Product in draft status

        Raises:
            RoleNotPermittedError: If the creator cannot hold licenses
            LicenseNotFoundError: If the license does not exist
            NotOwnerError: If the license belongs to someone else
            LicenseNotValidError: If the license is not approved
            LicenseExpiredError: If the license lapsed
            InvalidInputError: If product fields are malformed
        """
        creator = await self.guard.require_role(command.creator_id, APPLICANT_ROLES)

        license = await self.application_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")
        if license.applicant_id != creator.id:
            raise NotOwnerError("You can only create products under your own license")
        license.ensure_valid()

        try:
            product = Product.create(
                creator_id=creator.id,
                license_id=license.id,
                title=command.title,
                price=command.price,
                inventory_count=command.inventory_count,
                description=command.description,
                category=command.category,
                images=tuple(command.images),
                specifications=command.specifications,
                tags=tuple(command.tags),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(str(exc)) from exc

        saved = await self.product_repository.create(product)
        logger.info(
            "Product created",
            extra={"product_id": str(saved.id), "license_id": str(license.id)},
        )

        await event_bus.publish(
            ProductCreated(
                product_id=saved.id,
                license_id=saved.license_id,
                creator_id=saved.creator_id,
                title=saved.title,
            )
        )
        return saved
