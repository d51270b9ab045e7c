"""
Unit tests for the LicenseApplication entity and license workflow services.
"""
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from accounts.domain.account import Account
from assets.domain.ip_asset import IPAsset
from assets.domain.license_terms import LicenseTerms
from core.domain.exceptions import (
    AssetNotApprovedError,
    ForbiddenError,
    InvalidStatusTransitionError,
    LicenseCapacityReachedError,
    LicenseExpiredError,
    LicenseNotValidError,
    LicenseTermsNotFoundError,
    RoleNotPermittedError,
    TermsInactiveError,
)
from core.domain.value_objects import AccountRole, AccountStatus, ApplicationStatus, VerificationStatus
from licenses.domain.license_application import ApplicationData, LicenseApplication
from licenses.domain.services import ApplicationEligibility, LicenseCapacityPolicy, can_decide


def _account(role):
    return Account(
        id=uuid.uuid4(),
        username=role.value,
        email=f"{role.value}@example.com",
        role=role,
        status=AccountStatus.ACTIVE,
        created_at=datetime.now(timezone.utc),
    )


@pytest.fixture
def owner():
    return _account(AccountRole.CREATOR)


@pytest.fixture
def applicant():
    return _account(AccountRole.SECONDARY_CREATOR)


@pytest.fixture
def asset(owner):
    pending = IPAsset.create(creator_id=owner.id, title="Harbour at Dawn", category="illustration")
    return pending.moderate(VerificationStatus.APPROVED)


@pytest.fixture
def terms(asset):
    return LicenseTerms.create(
        ip_asset_id=asset.id, revenue_share_percent=Decimal("20"), duration="1 year"
    )


@pytest.fixture
def application(asset, applicant, terms):
    return LicenseApplication.create(
        ip_asset_id=asset.id, applicant_id=applicant.id, license_terms_id=terms.id
    )


class TestLicenseApplication:
    """Tests for LicenseApplication transitions."""

    def test_create_is_pending(self, application):
        assert application.status == ApplicationStatus.PENDING
        assert application.is_open is True
        assert application.is_valid() is False

    def test_approve_sets_expiry_from_terms(self, application, owner, terms):
        approved_at = datetime(2026, 3, 1, tzinfo=timezone.utc)

        approved = application.approve(owner.id, terms, now=approved_at)

        assert approved.status == ApplicationStatus.APPROVED
        assert approved.approved_by == owner.id
        assert approved.expires_at == approved_at + timedelta(days=365)
        assert approved.is_valid(now=approved_at) is True

    def test_approve_twice(self, application, owner, terms):
        approved = application.approve(owner.id, terms)

        with pytest.raises(InvalidStatusTransitionError):
            approved.approve(owner.id, terms)

    def test_reject_requires_reason(self, application, owner):
        with pytest.raises(ValueError):
            application.reject(owner.id, "  ")

    def test_reject_is_terminal(self, application, owner, terms):
        rejected = application.reject(owner.id, "Not a fit")

        assert rejected.rejection_reason == "Not a fit"
        assert rejected.is_open is False
        with pytest.raises(InvalidStatusTransitionError):
            rejected.approve(owner.id, terms)

    def test_revoke_only_approved(self, application, owner, terms):
        with pytest.raises(InvalidStatusTransitionError):
            application.revoke(owner.id, "Breach")

        revoked = application.approve(owner.id, terms).revoke(owner.id, "Breach")

        assert revoked.status == ApplicationStatus.REVOKED
        assert revoked.revocation_reason == "Breach"
        assert revoked.is_active is False
        with pytest.raises(LicenseNotValidError):
            revoked.ensure_valid()

    def test_expiry_is_lazy(self, application, owner, terms):
        approved = application.approve(owner.id, terms, now=datetime(2020, 1, 1, tzinfo=timezone.utc))

        assert approved.is_expired() is True
        assert approved.status == ApplicationStatus.APPROVED
        with pytest.raises(LicenseExpiredError):
            approved.ensure_valid()

    def test_application_data_extra(self):
        data = ApplicationData.from_dict({"message": "For prints", "channel": "etsy"})

        assert data.message == "For prints"
        assert data.extra == {"channel": "etsy"}


class TestApplicationEligibility:
    """Preconditions of applying."""

    def test_eligible(self, applicant, asset, terms):
        ApplicationEligibility.check(applicant, asset, terms)

    def test_buyer_cannot_apply(self, asset, terms):
        with pytest.raises(RoleNotPermittedError):
            ApplicationEligibility.check(_account(AccountRole.BUYER), asset, terms)

    def test_unapproved_asset(self, applicant, owner):
        pending = IPAsset.create(creator_id=owner.id, title="Sketch", category="illustration")
        terms = LicenseTerms.create(ip_asset_id=pending.id, revenue_share_percent=Decimal("20"))

        with pytest.raises(AssetNotApprovedError):
            ApplicationEligibility.check(applicant, pending, terms)

    def test_owner_cannot_apply(self, owner, asset, terms):
        with pytest.raises(ForbiddenError) as exc_info:
            ApplicationEligibility.check(owner, asset, terms)

        assert exc_info.value.code == "OWN_ASSET"

    def test_terms_of_other_asset(self, applicant, asset):
        foreign_terms = LicenseTerms.create(ip_asset_id=uuid.uuid4(), revenue_share_percent=Decimal("20"))

        with pytest.raises(LicenseTermsNotFoundError):
            ApplicationEligibility.check(applicant, asset, foreign_terms)

    def test_inactive_terms(self, applicant, asset, terms):
        with pytest.raises(TermsInactiveError):
            ApplicationEligibility.check(applicant, asset, terms.update(is_active=False))


class TestLicenseCapacityPolicy:
    """Tests for LicenseCapacityPolicy."""

    def test_exclusive_terms_allow_one(self, asset):
        exclusive = LicenseTerms.create(
            ip_asset_id=asset.id, revenue_share_percent=Decimal("40"), max_licenses=1
        )

        LicenseCapacityPolicy.ensure_capacity(exclusive, 0)
        with pytest.raises(LicenseCapacityReachedError):
            LicenseCapacityPolicy.ensure_capacity(exclusive, 1)

    def test_unlimited(self, terms):
        LicenseCapacityPolicy.ensure_capacity(terms, 10_000)

    def test_can_decide(self, owner, applicant):
        admin = _account(AccountRole.ADMIN)

        assert can_decide(owner, owner.id) is True
        assert can_decide(admin, owner.id) is True
        assert can_decide(applicant, owner.id) is False
