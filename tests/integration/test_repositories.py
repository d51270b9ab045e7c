"""
Integration tests for the Django repositories and the ledger adapter.
"""
import uuid
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from authorizations.infrastructure.ledger import compute_entry_hash
from authorizations.infrastructure.models import AuthorizationChain as AuthorizationChainModel
from authorizations.infrastructure.models import LedgerEntry
from core.domain.exceptions import (
    DuplicateApplicationError,
    InvalidStatusTransitionError,
    LicenseTermsNotFoundError,
    ProductHasSalesError,
    TermsLockedError,
    TransactionNotFoundError,
)
from licenses.domain.license_application import LicenseApplication
from core.domain.value_objects import TransactionStatus
from payments.infrastructure.models import Transaction as TransactionModel
from products.infrastructure.models import Product as ProductModel

pytestmark = [pytest.mark.django_db, pytest.mark.integration]


class TestContentHashLedger:
    """Tests for ContentHashLedger."""

    def test_entries_are_chained(self, ledger, approved_asset, creator):
        first = async_to_sync(ledger.record_asset_registration)(approved_asset.id, creator.id)
        second = async_to_sync(ledger.record_asset_registration)(approved_asset.id, creator.id)

        entries = list(LedgerEntry.objects.order_by("sequence"))
        assert [e.entry_hash for e in entries[-2:]] == [first, second]
        assert entries[-1].sequence == entries[-2].sequence + 1
        assert entries[-1].previous_hash == first
        assert entries[-1].entry_hash == compute_entry_hash(
            entries[-1].sequence,
            "asset_registration",
            str(approved_asset.id),
            entries[-1].payload,
            first,
        )

    def test_verify_without_hash_is_false(self, ledger, active_product, approved_license):
        chain = AuthorizationChainModel.objects.create(
            product=active_product,
            ip_asset=approved_license.ip_asset,
            license=approved_license,
            verification_code=uuid.uuid4().hex,
        )

        assert async_to_sync(ledger.verify_ledger_entry)(chain.id) is False

    def test_verify_recorded_issuance(self, ledger, active_product, approved_license):
        entry_hash = async_to_sync(ledger.record_product_issuance)(
            active_product.id, approved_license.id
        )
        chain = AuthorizationChainModel.objects.create(
            product=active_product,
            ip_asset=approved_license.ip_asset,
            license=approved_license,
            verification_code=uuid.uuid4().hex,
            ledger_hash=entry_hash,
        )

        assert async_to_sync(ledger.verify_ledger_entry)(chain.id) is True

    def test_verify_unknown_chain_is_false(self, ledger):
        assert async_to_sync(ledger.verify_ledger_entry)(uuid.uuid4()) is False


class TestLicenseTermsRepository:
    """Tests for DjangoLicenseTermsRepository."""

    def test_update_when_unlocked(self, terms_repository, terms):
        updated = async_to_sync(terms_repository.update_if_unlocked)(
            terms.id, {"revenue_share_percent": Decimal("35.00")}
        )

        assert updated.revenue_share_percent == Decimal("35.00")
        terms.refresh_from_db()
        assert terms.revenue_share_percent == Decimal("35.00")

    def test_update_locked_by_pending_application(self, terms_repository, terms, make_license, licensee):
        make_license(licensee, status="pending")

        with pytest.raises(TermsLockedError):
            async_to_sync(terms_repository.update_if_unlocked)(
                terms.id, {"revenue_share_percent": Decimal("35.00")}
            )

    def test_update_missing_terms(self, terms_repository):
        with pytest.raises(LicenseTermsNotFoundError):
            async_to_sync(terms_repository.update_if_unlocked)(uuid.uuid4(), {})

    def test_find_by_asset_active_only(self, terms_repository, make_terms, approved_asset):
        make_terms()
        make_terms(is_active=False)

        found = async_to_sync(terms_repository.find_by_asset)(approved_asset.id, active_only=True)

        assert len(found) == 1
        assert found[0].is_active is True


class TestLicenseApplicationRepository:
    """Tests for DjangoLicenseApplicationRepository."""

    def test_create_pending(self, application_repository, terms, approved_asset, licensee):
        application = LicenseApplication.create(approved_asset.id, licensee.id, terms.id)

        saved = async_to_sync(application_repository.create)(application)

        assert saved.id == application.id
        assert saved.status.value == "pending"

    def test_create_duplicate_open_application(
        self, application_repository, terms, approved_asset, licensee, make_license
    ):
        make_license(licensee, status="pending")
        application = LicenseApplication.create(approved_asset.id, licensee.id, terms.id)

        with pytest.raises(DuplicateApplicationError):
            async_to_sync(application_repository.create)(application)

    def test_count_approved(self, application_repository, terms, make_license, licensee, other_licensee):
        make_license(licensee)
        make_license(other_licensee, status="rejected")

        assert async_to_sync(application_repository.count_approved)(terms.id) == 1


class TestProductRepository:
    """Tests for DjangoProductRepository."""

    def _sale(self, product, buyer, status):
        return TransactionModel.objects.create(
            buyer=buyer,
            seller=product.creator,
            product=product,
            amount=Decimal("10.00"),
            platform_fee=Decimal("0.50"),
            status=status,
        )

    def test_delete_blocked_by_completed_sale(self, product_repository, active_product, buyer):
        self._sale(active_product, buyer, "completed")

        with pytest.raises(ProductHasSalesError):
            async_to_sync(product_repository.delete)(active_product.id)

        assert ProductModel.objects.filter(id=active_product.id).exists()

    def test_delete_keeps_failed_sale(self, product_repository, active_product, buyer):
        sale = self._sale(active_product, buyer, "failed")

        async_to_sync(product_repository.delete)(active_product.id)

        assert not ProductModel.objects.filter(id=active_product.id).exists()
        sale.refresh_from_db()
        assert sale.product_id is None

    def test_find_by_license(self, product_repository, make_product, approved_license):
        make_product()
        make_product(status="draft")

        found = async_to_sync(product_repository.find_by_license)(approved_license.id)

        assert len(found) == 2


class TestTransactionRepository:
    """Tests for DjangoTransactionRepository."""

    @pytest.fixture
    def pending_sale(self, active_product, buyer):
        return TransactionModel.objects.create(
            buyer=buyer,
            seller=active_product.creator,
            product=active_product,
            amount=Decimal("10.00"),
            platform_fee=Decimal("0.50"),
        )

    def test_transition_persists(self, transaction_repository, pending_sale):
        completed = async_to_sync(transaction_repository.transition)(
            pending_sale.id, lambda sale: sale.complete("pi_test_ok")
        )

        assert completed.status == TransactionStatus.COMPLETED
        pending_sale.refresh_from_db()
        assert pending_sale.status == "completed"
        assert pending_sale.payment_reference == "pi_test_ok"
        assert pending_sale.processed_at is not None

    def test_illegal_transition_leaves_row(self, transaction_repository, pending_sale):
        with pytest.raises(InvalidStatusTransitionError):
            async_to_sync(transaction_repository.transition)(
                pending_sale.id, lambda sale: sale.refund("changed my mind")
            )

        pending_sale.refresh_from_db()
        assert pending_sale.status == "pending"

    def test_transition_missing(self, transaction_repository):
        with pytest.raises(TransactionNotFoundError):
            async_to_sync(transaction_repository.transition)(
                uuid.uuid4(), lambda sale: sale
            )

    def test_find_sale_of_deleted_product(self, transaction_repository, pending_sale, active_product):
        TransactionModel.objects.filter(id=pending_sale.id).update(status="failed")
        active_product.delete()

        found = async_to_sync(transaction_repository.find_by_id)(pending_sale.id)

        assert found.product_id is None
        assert found.status == TransactionStatus.FAILED
