"""
Django implementation of LicenseApplicationRepository port.

Lock order is terms row before application row everywhere, so
concurrent apply/approve/revoke calls cannot deadlock each other.
"""
import logging
import uuid
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.utils import timezone

from assets.infrastructure.models import IPAsset as IPAssetModel
from assets.infrastructure.models import LicenseTerms as LicenseTermsModel
from assets.infrastructure.repositories.django_license_terms_repository import terms_to_domain
from core.domain.exceptions import (
    ActiveProductsExistError,
    AssetNotApprovedError,
    DuplicateApplicationError,
    LicenseCapacityReachedError,
    LicenseNotFoundError,
    LicenseTermsNotFoundError,
    TermsInactiveError,
)
from core.domain.value_objects import ApplicationStatus
from core.metrics import license_capacity_conflicts_total
from licenses.domain.license_application import ApplicationData, LicenseApplication
from licenses.domain.services import LicenseCapacityPolicy
from licenses.infrastructure.models import OPEN_STATUSES
from licenses.infrastructure.models import LicenseApplication as LicenseApplicationModel
from licenses.ports.license_application_repository import LicenseApplicationRepository

logger = logging.getLogger(__name__)

LIVE_PRODUCT_STATUSES = ("active", "draft")


def application_to_domain(model: LicenseApplicationModel) -> LicenseApplication:
    """
    Convert Django model to domain entity.

    Args:
        model: Django LicenseApplication model

    Returns:
        LicenseApplication domain entity
    """
    return LicenseApplication(
        id=model.id,
        ip_asset_id=model.ip_asset_id,
        applicant_id=model.applicant_id,
        license_terms_id=model.license_terms_id,
        application_data=ApplicationData.from_dict(model.application_data),
        status=ApplicationStatus(model.status),
        approved_at=model.approved_at,
        approved_by=model.approved_by_id,
        rejection_reason=model.rejection_reason,
        revoked_at=model.revoked_at,
        revoked_by=model.revoked_by_id,
        revocation_reason=model.revocation_reason,
        expires_at=model.expires_at,
        is_active=model.is_active,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _apply_to_model(application: LicenseApplication, model: LicenseApplicationModel) -> None:
    model.application_data = application.application_data.to_dict()
    model.status = application.status.value
    model.approved_at = application.approved_at
    model.approved_by_id = application.approved_by
    model.rejection_reason = application.rejection_reason
    model.revoked_at = application.revoked_at
    model.revoked_by_id = application.revoked_by
    model.revocation_reason = application.revocation_reason
    model.expires_at = application.expires_at
    model.is_active = application.is_active


def _count_approved(license_terms_id: uuid.UUID) -> int:
    return LicenseApplicationModel.objects.filter(
        license_terms_id=license_terms_id, status="approved"
    ).count()


def _ensure_capacity(terms_model: LicenseTermsModel) -> None:
    terms = terms_to_domain(terms_model)
    try:
        LicenseCapacityPolicy.ensure_capacity(terms, _count_approved(terms.id))
    except LicenseCapacityReachedError:
        license_capacity_conflicts_total.inc()
        raise


def _lock_terms(license_terms_id: uuid.UUID) -> LicenseTermsModel:
    try:
        return LicenseTermsModel.objects.select_for_update().get(id=license_terms_id)
    except LicenseTermsModel.DoesNotExist as exc:
        raise LicenseTermsNotFoundError(f"License terms {license_terms_id} not found") from exc


def _lock_application(application_id: uuid.UUID) -> LicenseApplicationModel:
    try:
        return LicenseApplicationModel.objects.select_for_update().get(id=application_id)
    except LicenseApplicationModel.DoesNotExist as exc:
        raise LicenseNotFoundError(f"License application {application_id} not found") from exc


class DjangoLicenseApplicationRepository(LicenseApplicationRepository):
    """Django ORM implementation of LicenseApplicationRepository."""

    @sync_to_async
    def find_by_id(self, application_id: uuid.UUID) -> Optional[LicenseApplication]:
        try:
            return application_to_domain(LicenseApplicationModel.objects.get(id=application_id))
        except LicenseApplicationModel.DoesNotExist:
            return None

    @sync_to_async
    def find_open(
        self, ip_asset_id: uuid.UUID, applicant_id: uuid.UUID
    ) -> Optional[LicenseApplication]:
        model = LicenseApplicationModel.objects.filter(
            ip_asset_id=ip_asset_id, applicant_id=applicant_id, status__in=OPEN_STATUSES
        ).first()
        return application_to_domain(model) if model else None

    @sync_to_async
    def find_by_applicant(
        self, applicant_id: uuid.UUID, status: Optional[ApplicationStatus] = None
    ) -> List[LicenseApplication]:
        queryset = LicenseApplicationModel.objects.filter(applicant_id=applicant_id)
        if status:
            queryset = queryset.filter(status=status.value)
        return [application_to_domain(model) for model in queryset.order_by("-created_at")]

    @sync_to_async
    def find_by_asset_owner(
        self, owner_id: uuid.UUID, status: Optional[ApplicationStatus] = None
    ) -> List[LicenseApplication]:
        queryset = LicenseApplicationModel.objects.filter(ip_asset__creator_id=owner_id)
        if status:
            queryset = queryset.filter(status=status.value)
        return [application_to_domain(model) for model in queryset.order_by("-created_at")]

    @sync_to_async
    def count_approved(self, license_terms_id: uuid.UUID) -> int:
        return _count_approved(license_terms_id)

    @sync_to_async
    def create(
        self,
        application: LicenseApplication,
        auto_approver_id: Optional[uuid.UUID] = None,
    ) -> LicenseApplication:
        """
        Insert a new application under the terms row lock.

        Raises:
            LicenseTermsNotFoundError: If the terms disappeared
            TermsInactiveError: If the terms were deactivated
            DuplicateApplicationError: If an open application exists
            LicenseCapacityReachedError: If auto-approval finds no capacity
        """
        try:
            with transaction.atomic():
                terms_model = _lock_terms(application.license_terms_id)
                if not terms_model.is_active:
                    raise TermsInactiveError()

                existing = LicenseApplicationModel.objects.filter(
                    ip_asset_id=application.ip_asset_id,
                    applicant_id=application.applicant_id,
                    status__in=OPEN_STATUSES,
                ).first()
                if existing:
                    raise DuplicateApplicationError(
                        f"You already have a {existing.status} application for this IP asset"
                    )

                if auto_approver_id:
                    _ensure_capacity(terms_model)
                    application = application.approve(
                        auto_approver_id, terms_to_domain(terms_model), now=timezone.now()
                    )

                model = LicenseApplicationModel(
                    id=application.id,
                    ip_asset_id=application.ip_asset_id,
                    applicant_id=application.applicant_id,
                    license_terms_id=application.license_terms_id,
                )
                _apply_to_model(application, model)
                model.save(force_insert=True)
        except IntegrityError as exc:
            logger.info(
                "Open application constraint rejected insert",
                extra={"ip_asset_id": str(application.ip_asset_id)},
            )
            raise DuplicateApplicationError() from exc
        return application_to_domain(model)

    @sync_to_async
    def approve(
        self, application_id: uuid.UUID, approver_id: uuid.UUID
    ) -> LicenseApplication:
        """
        Approve a pending application within the capacity of its terms.

        Raises:
            LicenseNotFoundError: If the application does not exist
            InvalidStatusTransitionError: If no longer pending
            AssetNotApprovedError: If the asset is not approved
            LicenseCapacityReachedError: If the terms are at capacity
        """
        terms_id = (
            LicenseApplicationModel.objects.filter(id=application_id)
            .values_list("license_terms_id", flat=True)
            .first()
        )
        if terms_id is None:
            raise LicenseNotFoundError(f"License application {application_id} not found")

        with transaction.atomic():
            terms_model = _lock_terms(terms_id)
            model = _lock_application(application_id)
            application = application_to_domain(model)

            approved = application.approve(
                approver_id, terms_to_domain(terms_model), now=timezone.now()
            )

            verification = (
                IPAssetModel.objects.filter(id=model.ip_asset_id)
                .values_list("verification_status", flat=True)
                .first()
            )
            if verification != "approved":
                raise AssetNotApprovedError("IP asset is not approved for licensing")

            _ensure_capacity(terms_model)

            _apply_to_model(approved, model)
            model.save()
            return application_to_domain(model)

    @sync_to_async
    def reject(
        self, application_id: uuid.UUID, rejecter_id: uuid.UUID, reason: str
    ) -> LicenseApplication:
        with transaction.atomic():
            model = _lock_application(application_id)
            rejected = application_to_domain(model).reject(rejecter_id, reason, now=timezone.now())
            _apply_to_model(rejected, model)
            model.save()
            return application_to_domain(model)

    @sync_to_async
    def revoke(
        self, application_id: uuid.UUID, revoker_id: uuid.UUID, reason: str
    ) -> LicenseApplication:
        """
        Revoke an approved license that backs no active or draft products.

        Product creation locks the same application row, so no product
        can appear between the count and the write.
        """
        with transaction.atomic():
            model = _lock_application(application_id)
            revoked = application_to_domain(model).revoke(revoker_id, reason, now=timezone.now())

            live_products = model.products.filter(status__in=LIVE_PRODUCT_STATUSES).count()
            if live_products:
                raise ActiveProductsExistError(
                    f"License {application_id} still backs {live_products} active or draft product(s)"
                )

            _apply_to_model(revoked, model)
            model.save()
            return application_to_domain(model)
