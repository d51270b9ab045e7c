"""
Integration tests for the rights registry.
"""
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from assets.application.commands.moderate_asset import ModerateAssetCommand
from assets.application.commands.publish_terms import PublishTermsCommand
from assets.application.commands.register_asset import RegisterAssetCommand
from assets.application.commands.update_terms import UpdateTermsCommand
from assets.infrastructure.models import IPAsset as IPAssetModel
from authorizations.infrastructure.models import LedgerEntry
from core.domain.exceptions import (
    AssetAlreadyModeratedError,
    AssetNotApprovedError,
    InvalidInputError,
    NotOwnerError,
    RoleNotPermittedError,
    TermsLockedError,
)
from core.domain.value_objects import VerificationStatus
from core.infrastructure.models import AuditLog

pytestmark = [pytest.mark.django_db, pytest.mark.integration]


def _register(handler, creator, title="Harbour at Dawn"):
    return async_to_sync(handler.handle)(
        RegisterAssetCommand(
            creator_id=creator.id,
            title=title,
            category="illustration",
            metadata={"medium": "ink", "paper": "cotton"},
        )
    )


class TestRegisterAsset:
    """Registering and moderating assets."""

    def test_registration_is_recorded_on_ledger(self, register_asset_handler, creator):
        asset = _register(register_asset_handler, creator)

        model = IPAssetModel.objects.get(id=asset.id)
        assert model.verification_status == "pending"
        assert model.ledger_hash
        assert LedgerEntry.objects.filter(subject_id=asset.id, entry_type="asset_registration").exists()
        assert AuditLog.objects.filter(event_type="AssetRegistered", aggregate_id=str(asset.id)).exists()

    def test_buyer_cannot_register(self, register_asset_handler, buyer):
        with pytest.raises(RoleNotPermittedError):
            _register(register_asset_handler, buyer)

    def test_blank_title(self, register_asset_handler, creator):
        with pytest.raises(InvalidInputError):
            _register(register_asset_handler, creator, title="  ")

    def test_moderation_by_admin(self, register_asset_handler, moderate_asset_handler, creator, admin_account):
        asset = _register(register_asset_handler, creator)

        moderated = async_to_sync(moderate_asset_handler.handle)(
            ModerateAssetCommand(
                asset_id=asset.id, moderator_id=admin_account.id, decision=VerificationStatus.APPROVED
            )
        )

        assert moderated.verification_status == VerificationStatus.APPROVED
        with pytest.raises(AssetAlreadyModeratedError):
            async_to_sync(moderate_asset_handler.handle)(
                ModerateAssetCommand(
                    asset_id=asset.id, moderator_id=admin_account.id, decision=VerificationStatus.REJECTED
                )
            )

    def test_creator_cannot_moderate(self, register_asset_handler, moderate_asset_handler, creator):
        asset = _register(register_asset_handler, creator)

        with pytest.raises(RoleNotPermittedError):
            async_to_sync(moderate_asset_handler.handle)(
                ModerateAssetCommand(
                    asset_id=asset.id, moderator_id=creator.id, decision=VerificationStatus.APPROVED
                )
            )


class TestPublishTerms:
    """Publishing and updating license terms."""

    def test_publish_on_approved_asset(self, publish_terms_handler, approved_asset, creator):
        terms = async_to_sync(publish_terms_handler.handle)(
            PublishTermsCommand(
                asset_id=approved_asset.id,
                creator_id=creator.id,
                revenue_share_percent=Decimal("15"),
                duration="1 year",
                max_licenses=3,
            )
        )

        assert terms.revenue_share_percent == Decimal("15")
        assert terms.max_licenses == 3
        assert terms.is_active is True

    def test_publish_on_pending_asset(self, register_asset_handler, publish_terms_handler, creator):
        asset = _register(register_asset_handler, creator)

        with pytest.raises(AssetNotApprovedError):
            async_to_sync(publish_terms_handler.handle)(
                PublishTermsCommand(
                    asset_id=asset.id, creator_id=creator.id, revenue_share_percent=Decimal("15")
                )
            )

    def test_publish_out_of_range_share(self, publish_terms_handler, approved_asset, creator):
        with pytest.raises(InvalidInputError):
            async_to_sync(publish_terms_handler.handle)(
                PublishTermsCommand(
                    asset_id=approved_asset.id, creator_id=creator.id, revenue_share_percent=Decimal("60")
                )
            )

    def test_only_owner_publishes(self, publish_terms_handler, approved_asset, licensee):
        with pytest.raises(NotOwnerError):
            async_to_sync(publish_terms_handler.handle)(
                PublishTermsCommand(
                    asset_id=approved_asset.id, creator_id=licensee.id, revenue_share_percent=Decimal("15")
                )
            )

    def test_update_unlocked_terms(self, update_terms_handler, terms, creator):
        updated = async_to_sync(update_terms_handler.handle)(
            UpdateTermsCommand(
                terms_id=terms.id, creator_id=creator.id, changes={"revenue_share_percent": Decimal("25")}
            )
        )

        assert updated.revenue_share_percent == Decimal("25")
        terms.refresh_from_db()
        assert terms.revenue_share_percent == Decimal("25.00")

    def test_pending_application_locks_terms(self, update_terms_handler, make_license, terms, creator, licensee):
        make_license(licensee, status="pending")

        with pytest.raises(TermsLockedError):
            async_to_sync(update_terms_handler.handle)(
                UpdateTermsCommand(
                    terms_id=terms.id, creator_id=creator.id, changes={"max_licenses": 1}
                )
            )

        terms.refresh_from_db()
        assert terms.max_licenses == 0
