"""
Integration tests for the license workflow.
"""
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from core.domain.exceptions import (
    ActiveProductsExistError,
    ConflictError,
    DuplicateApplicationError,
    ForbiddenError,
    InvalidInputError,
    InvalidStatusTransitionError,
    LicenseCapacityReachedError,
    NotOwnerError,
    RoleNotPermittedError,
)
from core.domain.value_objects import ApplicationStatus
from core.infrastructure.models import IdempotencyKey
from licenses.application.commands.apply_license import ApplyLicenseCommand
from licenses.application.commands.decide_application import (
    ApproveApplicationCommand,
    RejectApplicationCommand,
)
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.infrastructure.models import LicenseApplication as LicenseApplicationModel

pytestmark = [pytest.mark.django_db, pytest.mark.integration]


def _apply(handler, applicant, terms, data=None):
    return async_to_sync(handler.handle)(
        ApplyLicenseCommand(
            applicant_id=applicant.id,
            ip_asset_id=terms.ip_asset_id,
            license_terms_id=terms.id,
            application_data=data,
        )
    )


class TestApply:
    """Submitting applications."""

    def test_manual_terms_leave_application_pending(self, apply_handler, licensee, terms):
        application = _apply(apply_handler, licensee, terms, {"message": "Prints", "shop": "etsy"})

        assert application.status == ApplicationStatus.PENDING
        assert application.application_data.extra == {"shop": "etsy"}
        assert IdempotencyKey.objects.filter(key=f"LicenseApplied:{application.id}").exists()

    def test_auto_approve_never_stores_pending(self, apply_handler, application_repository, make_terms, licensee, creator):
        auto_terms = make_terms(auto_approve=True, duration="6 months")

        application = _apply(apply_handler, licensee, auto_terms)
        stored = async_to_sync(application_repository.find_by_id)(application.id)

        assert application.status == ApplicationStatus.APPROVED
        assert stored.status == ApplicationStatus.APPROVED
        assert stored.approved_by == creator.id
        assert stored.expires_at is not None

    def test_auto_approve_respects_capacity(self, apply_handler, make_terms, licensee, other_licensee):
        auto_terms = make_terms(auto_approve=True, max_licenses=1)
        _apply(apply_handler, licensee, auto_terms)

        with pytest.raises(LicenseCapacityReachedError):
            _apply(apply_handler, other_licensee, auto_terms)

        assert not LicenseApplicationModel.objects.filter(applicant=other_licensee).exists()

    def test_duplicate_open_application(self, apply_handler, licensee, terms):
        _apply(apply_handler, licensee, terms)

        with pytest.raises(DuplicateApplicationError):
            _apply(apply_handler, licensee, terms)

    def test_reapply_after_rejection(self, apply_handler, reject_handler, licensee, terms, creator):
        first = _apply(apply_handler, licensee, terms)
        async_to_sync(reject_handler.handle)(
            RejectApplicationCommand(application_id=first.id, rejecter_id=creator.id, reason="Too vague")
        )

        second = _apply(apply_handler, licensee, terms)

        assert second.id != first.id
        assert second.status == ApplicationStatus.PENDING

    def test_owner_cannot_apply(self, apply_handler, creator, terms):
        with pytest.raises(ForbiddenError):
            _apply(apply_handler, creator, terms)

    def test_buyer_cannot_apply(self, apply_handler, buyer, terms):
        with pytest.raises(RoleNotPermittedError):
            _apply(apply_handler, buyer, terms)


class TestDecisions:
    """Approving, rejecting and revoking."""

    def test_exclusive_terms_admit_one_approval(
        self, apply_handler, approve_handler, make_terms, licensee, other_licensee, creator
    ):
        exclusive = make_terms(max_licenses=1, license_type="exclusive", revenue_share_percent=Decimal("40"))
        first = _apply(apply_handler, licensee, exclusive)
        second = _apply(apply_handler, other_licensee, exclusive)

        approved = async_to_sync(approve_handler.handle)(
            ApproveApplicationCommand(application_id=first.id, approver_id=creator.id)
        )
        with pytest.raises(ConflictError) as exc_info:
            async_to_sync(approve_handler.handle)(
                ApproveApplicationCommand(application_id=second.id, approver_id=creator.id)
            )

        assert approved.status == ApplicationStatus.APPROVED
        assert exc_info.value.code == "LICENSE_CAPACITY_REACHED"
        assert LicenseApplicationModel.objects.get(id=second.id).status == "pending"

    def test_admin_may_approve(self, apply_handler, approve_handler, licensee, terms, admin_account):
        application = _apply(apply_handler, licensee, terms)

        approved = async_to_sync(approve_handler.handle)(
            ApproveApplicationCommand(application_id=application.id, approver_id=admin_account.id)
        )

        assert approved.approved_by == admin_account.id

    def test_stranger_cannot_approve(self, apply_handler, approve_handler, licensee, other_licensee, terms):
        application = _apply(apply_handler, licensee, terms)

        with pytest.raises(NotOwnerError):
            async_to_sync(approve_handler.handle)(
                ApproveApplicationCommand(application_id=application.id, approver_id=other_licensee.id)
            )

    def test_reject_requires_reason(self, apply_handler, reject_handler, licensee, terms, creator):
        application = _apply(apply_handler, licensee, terms)

        with pytest.raises(InvalidInputError):
            async_to_sync(reject_handler.handle)(
                RejectApplicationCommand(application_id=application.id, rejecter_id=creator.id, reason=" ")
            )

    def test_revoke_with_active_product_changes_nothing(self, revoke_handler, approved_license, active_product, creator):
        with pytest.raises(ActiveProductsExistError):
            async_to_sync(revoke_handler.handle)(
                RevokeLicenseCommand(application_id=approved_license.id, revoker_id=creator.id, reason="Breach")
            )

        approved_license.refresh_from_db()
        assert approved_license.status == "approved"
        assert approved_license.revocation_reason == ""

    def test_revoke_with_suspended_product(self, revoke_handler, approved_license, make_product, creator):
        make_product(status="suspended")

        revoked = async_to_sync(revoke_handler.handle)(
            RevokeLicenseCommand(application_id=approved_license.id, revoker_id=creator.id, reason="Breach")
        )

        assert revoked.status == ApplicationStatus.REVOKED
        assert revoked.is_active is False

    def test_revoke_pending_application(self, revoke_handler, make_license, licensee, creator):
        pending = make_license(licensee, status="pending")

        with pytest.raises(InvalidStatusTransitionError):
            async_to_sync(revoke_handler.handle)(
                RevokeLicenseCommand(application_id=pending.id, revoker_id=creator.id, reason="Breach")
            )
