"""
ModerateAssetHandler.

Moves an asset's verification status to approved or rejected. A forced
rejection of an approved asset immediately invalidates every
authorization chain that references it.
"""
import logging

from accounts.domain.services import EligibilityGuard
from assets.application.commands.moderate_asset import ModerateAssetCommand
from assets.domain.events import AssetModerated
from assets.domain.ip_asset import IPAsset
from assets.ports.asset_repository import IPAssetRepository
from core.domain.exceptions import InvalidInputError, IPAssetNotFoundError
from core.domain.value_objects import AccountRole
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class ModerateAssetHandler:
    """Handler for ModerateAssetCommand."""

    def __init__(self, asset_repository: IPAssetRepository, guard: EligibilityGuard):
        """Initialize handler with repository and guard."""
        self.asset_repository = asset_repository
        self.guard = guard

    async def handle(self, command: ModerateAssetCommand) -> IPAsset:
        """
        Handle moderate asset command.

        Raises:
            ForbiddenError: If the moderator is not an active admin
            IPAssetNotFoundError: If the asset does not exist
            AssetAlreadyModeratedError: If already decided and not forced
        """
        await self.guard.require_role(command.moderator_id, (AccountRole.ADMIN,))

        asset = await self.asset_repository.find_by_id(command.asset_id)
        if not asset:
            raise IPAssetNotFoundError(f"IP asset {command.asset_id} not found")

        try:
            moderated = asset.moderate(command.decision, force=command.force)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        saved = await self.asset_repository.save(moderated)
        logger.info(
            "IP asset moderated",
            extra={"asset_id": str(saved.id), "verification_status": saved.verification_status.value},
        )

        await event_bus.publish(
            AssetModerated(
                asset_id=saved.id,
                creator_id=saved.creator_id,
                moderator_id=command.moderator_id,
                verification_status=saved.verification_status.value,
                note=command.note,
            )
        )
        return saved
