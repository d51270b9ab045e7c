"""
RegisterAssetHandler.

Handler for registering an IP asset.
"""
import logging

from accounts.domain.services import EligibilityGuard
from assets.application.commands.register_asset import RegisterAssetCommand
from assets.domain.events import AssetRegistered
from assets.domain.ip_asset import AssetMetadata, IPAsset
from assets.ports.asset_repository import IPAssetRepository
from core.domain.exceptions import InvalidInputError
from core.domain.value_objects import AccountRole
from core.infrastructure.events import event_bus
from core.metrics import assets_registered_total

logger = logging.getLogger(__name__)

REGISTERING_ROLES = (AccountRole.CREATOR, AccountRole.ADMIN)


class RegisterAssetHandler:
    """Handler for RegisterAssetCommand."""

    def __init__(self, asset_repository: IPAssetRepository, guard: EligibilityGuard):
        """Initialize handler with repository and guard."""
        self.asset_repository = asset_repository
        self.guard = guard

    async def handle(self, command: RegisterAssetCommand) -> IPAsset:
        """
        Handle register asset command.

        Args:
            command: RegisterAssetCommand

        Returns:
            Registered IPAsset, pending verification

        Raises:
            AccountNotFoundError: If the creator does not exist
            ForbiddenError: If the creator is inactive or not a creator
            InvalidInputError: If asset fields are malformed
        """
        await self.guard.require_role(command.creator_id, REGISTERING_ROLES)

        try:
            asset = IPAsset.create(
                creator_id=command.creator_id,
                title=command.title,
                category=command.category,
                description=command.description,
                content_type=command.content_type,
                file_urls=tuple(command.file_urls),
                tags=tuple(command.tags),
                metadata=AssetMetadata.from_dict(command.metadata),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(str(exc)) from exc

        saved = await self.asset_repository.save(asset)
        assets_registered_total.labels(category=saved.category).inc()
        logger.info("IP asset registered", extra={"asset_id": str(saved.id)})

        await event_bus.publish(
            AssetRegistered(asset_id=saved.id, creator_id=saved.creator_id, title=saved.title)
        )
        return saved
