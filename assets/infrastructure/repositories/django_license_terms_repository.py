"""
Django implementation of LicenseTermsRepository port.
"""
import uuid
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import transaction

from assets.domain.license_terms import LicenseTerms
from assets.infrastructure.models import LicenseTerms as LicenseTermsModel
from assets.ports.license_terms_repository import LicenseTermsRepository
from core.domain.exceptions import LicenseTermsNotFoundError, TermsLockedError
from core.domain.value_objects import LicenseType

_WRITABLE_FIELDS = (
    "license_type",
    "revenue_share_percent",
    "base_fee",
    "territory",
    "duration",
    "requirements",
    "restrictions",
    "auto_approve",
    "max_licenses",
    "is_active",
)


def terms_to_domain(model: LicenseTermsModel) -> LicenseTerms:
    """
    Convert Django model to domain entity.

    Shared with the license and settlement repositories, which read
    terms inside their own atomic units.
    """
    return LicenseTerms(
        id=model.id,
        ip_asset_id=model.ip_asset_id,
        license_type=LicenseType(model.license_type),
        revenue_share_percent=model.revenue_share_percent,
        base_fee=model.base_fee,
        territory=model.territory,
        duration=model.duration,
        requirements=model.requirements,
        restrictions=model.restrictions,
        auto_approve=model.auto_approve,
        max_licenses=model.max_licenses,
        is_active=model.is_active,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _field_values(terms: LicenseTerms) -> Dict[str, Any]:
    values = {name: getattr(terms, name) for name in _WRITABLE_FIELDS}
    values["license_type"] = terms.license_type.value
    return values


class DjangoLicenseTermsRepository(LicenseTermsRepository):
    """Django ORM implementation of LicenseTermsRepository."""

    @sync_to_async
    def save(self, terms: LicenseTerms) -> LicenseTerms:
        """
        Save new license terms.

        Args:
            terms: LicenseTerms entity to save

        Returns:
            Saved LicenseTerms entity
        """
        model = LicenseTermsModel.objects.create(
            id=terms.id, ip_asset_id=terms.ip_asset_id, **_field_values(terms)
        )
        return terms_to_domain(model)

    @sync_to_async
    def find_by_id(self, terms_id: uuid.UUID) -> Optional[LicenseTerms]:
        try:
            return terms_to_domain(LicenseTermsModel.objects.get(id=terms_id))
        except LicenseTermsModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_asset(
        self, asset_id: uuid.UUID, active_only: bool = False
    ) -> List[LicenseTerms]:
        queryset = LicenseTermsModel.objects.filter(ip_asset_id=asset_id)
        if active_only:
            queryset = queryset.filter(is_active=True)
        return [terms_to_domain(model) for model in queryset.order_by("-created_at")]

    @sync_to_async
    def update_if_unlocked(
        self, terms_id: uuid.UUID, changes: Dict[str, Any]
    ) -> LicenseTerms:
        """
        Apply changes unless a pending application references the terms.

        Raises:
            LicenseTermsNotFoundError: If the terms do not exist
            TermsLockedError: If pending applications exist
            ValueError: If a change is invalid
        """
        with transaction.atomic():
            try:
                model = LicenseTermsModel.objects.select_for_update().get(id=terms_id)
            except LicenseTermsModel.DoesNotExist as exc:
                raise LicenseTermsNotFoundError(f"License terms {terms_id} not found") from exc

            pending = model.applications.filter(status="pending").count()
            if pending:
                raise TermsLockedError(
                    f"License terms {terms_id} have {pending} pending application(s)"
                )

            updated = terms_to_domain(model).update(**changes)
            for name, value in _field_values(updated).items():
                setattr(model, name, value)
            model.save()
            return terms_to_domain(model)
