"""
License query handlers.
"""
from typing import List

from accounts.domain.services import EligibilityGuard
from assets.ports.asset_repository import IPAssetRepository
from core.domain.exceptions import InvalidInputError, LicenseNotFoundError, NotOwnerError
from core.domain.value_objects import ApplicationStatus
from licenses.application.dto.license_dto import LicenseVerificationDTO
from licenses.application.queries.get_application import (
    GetApplicationQuery,
    ListApplicationsQuery,
    VerifyLicenseQuery,
)
from licenses.domain.license_application import LicenseApplication
from licenses.ports.license_application_repository import LicenseApplicationRepository

ROLE_FILTERS = ("applicant", "owner")


class GetApplicationHandler:
    """Handler for GetApplicationQuery."""

    def __init__(
        self,
        application_repository: LicenseApplicationRepository,
        asset_repository: IPAssetRepository,
        guard: EligibilityGuard,
    ):
        self.application_repository = application_repository
        self.asset_repository = asset_repository
        self.guard = guard

    async def handle(self, query: GetApplicationQuery) -> LicenseApplication:
        """
        Return an application visible to the applicant, asset owner or admins.

        Raises:
            LicenseNotFoundError: If the application does not exist
            NotOwnerError: If the actor may not see it
        """
        actor = await self.guard.require_active(query.actor_id)
        application = await self.application_repository.find_by_id(query.application_id)
        if not application:
            raise LicenseNotFoundError(f"License application {query.application_id} not found")

        if actor.is_admin or application.applicant_id == actor.id:
            return application
        asset = await self.asset_repository.find_by_id(application.ip_asset_id)
        if asset and asset.is_owned_by(actor.id):
            return application
        raise NotOwnerError("You cannot view this application")


class ListApplicationsHandler:
    """Handler for ListApplicationsQuery."""

    def __init__(self, application_repository: LicenseApplicationRepository, guard: EligibilityGuard):
        self.application_repository = application_repository
        self.guard = guard

    async def handle(self, query: ListApplicationsQuery) -> List[LicenseApplication]:
        if query.role_filter is not None and query.role_filter not in ROLE_FILTERS:
            raise InvalidInputError(f"role_filter must be one of: {', '.join(ROLE_FILTERS)}")
        try:
            status = ApplicationStatus(query.status) if query.status else None
        except ValueError as exc:
            raise InvalidInputError(f"Unknown application status {query.status!r}") from exc

        actor = await self.guard.require_active(query.actor_id)
        applications = []
        if query.role_filter in (None, "applicant"):
            applications.extend(
                await self.application_repository.find_by_applicant(actor.id, status)
            )
        if query.role_filter in (None, "owner"):
            applications.extend(
                await self.application_repository.find_by_asset_owner(actor.id, status)
            )
        return sorted(applications, key=lambda item: item.created_at, reverse=True)


class VerifyLicenseHandler:
    """Handler for VerifyLicenseQuery."""

    def __init__(self, application_repository: LicenseApplicationRepository):
        self.application_repository = application_repository

    async def handle(self, query: VerifyLicenseQuery) -> LicenseVerificationDTO:
        """
        Check a license without changing it.

        Expiry is evaluated against the current time only; an expired
        license keeps its stored approved status.

        Raises:
            LicenseNotFoundError: If the application does not exist
        """
        application = await self.application_repository.find_by_id(query.application_id)
        if not application:
            raise LicenseNotFoundError(f"License application {query.application_id} not found")

        if application.status != ApplicationStatus.APPROVED or not application.is_active:
            reason = f"License is {application.status.value}"
        elif application.is_expired():
            reason = f"License expired at {application.expires_at.isoformat()}"
        else:
            reason = "License is valid"
        return LicenseVerificationDTO(
            application=application,
            is_valid=application.is_valid(),
            reason=reason,
        )
