"""
License terms handlers.

Handlers for publishing, updating and listing license terms.
"""
import logging
from typing import List

from accounts.domain.services import EligibilityGuard
from assets.application.commands.publish_terms import PublishTermsCommand
from assets.application.commands.update_terms import UpdateTermsCommand
from assets.application.queries.get_asset import GetAssetQuery, ListTermsQuery
from assets.domain.events import LicenseTermsPublished, LicenseTermsUpdated
from assets.domain.ip_asset import IPAsset
from assets.domain.license_terms import LicenseTerms
from assets.ports.asset_repository import IPAssetRepository
from assets.ports.license_terms_repository import LicenseTermsRepository
from core.domain.exceptions import (
    AssetNotApprovedError,
    InvalidInputError,
    IPAssetNotFoundError,
    LicenseTermsNotFoundError,
    NotOwnerError,
)
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class PublishTermsHandler:
    """Handler for PublishTermsCommand."""

    def __init__(
        self,
        asset_repository: IPAssetRepository,
        terms_repository: LicenseTermsRepository,
        guard: EligibilityGuard,
    ):
        """Initialize handler with repositories and guard."""
        self.asset_repository = asset_repository
        self.terms_repository = terms_repository
        self.guard = guard

    async def handle(self, command: PublishTermsCommand) -> LicenseTerms:
        """
        Handle publish terms command.

        Args:
            command: PublishTermsCommand

        Returns:
            Published LicenseTerms

        Raises:
            IPAssetNotFoundError: If the asset does not exist
            NotOwnerError: If the caller does not own the asset
            AssetNotApprovedError: If the asset has not passed verification
            InvalidInputError: If a term is out of range
        """
        await self.guard.require_active(command.creator_id)

        asset = await self.asset_repository.find_by_id(command.asset_id)
        if not asset:
            raise IPAssetNotFoundError(f"IP asset {command.asset_id} not found")
        if not asset.is_owned_by(command.creator_id):
            raise NotOwnerError("Only the asset owner may publish terms")
        if not asset.is_approved:
            raise AssetNotApprovedError(
                f"IP asset {asset.id} is {asset.verification_status.value}"
            )

        try:
            terms = LicenseTerms.create(
                ip_asset_id=asset.id,
                revenue_share_percent=command.revenue_share_percent,
                base_fee=command.base_fee,
                license_type=command.license_type,
                territory=command.territory,
                duration=command.duration,
                requirements=command.requirements,
                restrictions=command.restrictions,
                auto_approve=command.auto_approve,
                max_licenses=command.max_licenses,
            )
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        saved = await self.terms_repository.save(terms)
        logger.info(
            "License terms published",
            extra={"terms_id": str(saved.id), "asset_id": str(asset.id)},
        )
        await event_bus.publish(LicenseTermsPublished(terms_id=saved.id, asset_id=asset.id))
        return saved


class UpdateTermsHandler:
    """Handler for UpdateTermsCommand."""

    def __init__(
        self,
        asset_repository: IPAssetRepository,
        terms_repository: LicenseTermsRepository,
        guard: EligibilityGuard,
    ):
        """Initialize handler with repositories and guard."""
        self.asset_repository = asset_repository
        self.terms_repository = terms_repository
        self.guard = guard

    async def handle(self, command: UpdateTermsCommand) -> LicenseTerms:
        """
        Handle update terms command.

        Raises:
            LicenseTermsNotFoundError: If the terms do not exist
            NotOwnerError: If the caller does not own the asset
            TermsLockedError: If pending applications reference the terms
            InvalidInputError: If a change is invalid
        """
        await self.guard.require_active(command.creator_id)

        terms = await self.terms_repository.find_by_id(command.terms_id)
        if not terms:
            raise LicenseTermsNotFoundError(f"License terms {command.terms_id} not found")
        asset = await self.asset_repository.find_by_id(terms.ip_asset_id)
        if not asset or not asset.is_owned_by(command.creator_id):
            raise NotOwnerError("Only the asset owner may update terms")

        try:
            # Validate before taking the lock
            terms.update(**dict(command.changes))
            updated = await self.terms_repository.update_if_unlocked(
                command.terms_id, dict(command.changes)
            )
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        await event_bus.publish(
            LicenseTermsUpdated(
                terms_id=updated.id,
                asset_id=updated.ip_asset_id,
                changed_fields=tuple(sorted(command.changes)),
            )
        )
        return updated


class GetAssetHandler:
    """Handler for GetAssetQuery."""

    def __init__(self, asset_repository: IPAssetRepository):
        self.asset_repository = asset_repository

    async def handle(self, query: GetAssetQuery) -> IPAsset:
        asset = await self.asset_repository.find_by_id(query.asset_id)
        if not asset:
            raise IPAssetNotFoundError(f"IP asset {query.asset_id} not found")
        return asset


class ListTermsHandler:
    """Handler for ListTermsQuery."""

    def __init__(self, asset_repository: IPAssetRepository, terms_repository: LicenseTermsRepository):
        self.asset_repository = asset_repository
        self.terms_repository = terms_repository

    async def handle(self, query: ListTermsQuery) -> List[LicenseTerms]:
        """
        Handle list terms query.

        Raises:
            IPAssetNotFoundError: If the asset does not exist
        """
        asset = await self.asset_repository.find_by_id(query.asset_id)
        if not asset:
            raise IPAssetNotFoundError(f"IP asset {query.asset_id} not found")
        return await self.terms_repository.find_by_asset(asset.id, active_only=query.active_only)
