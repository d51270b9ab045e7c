"""
Integration tests for the maintenance management commands.
"""
from datetime import timedelta
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from authorizations.tasks import issue_authorization_chain_task
from core.infrastructure.models import IdempotencyKey
from payments.infrastructure.models import Transaction as TransactionModel
from payments.tasks import process_payment_task

pytestmark = [pytest.mark.django_db, pytest.mark.integration]


@pytest.fixture
def enqueued(monkeypatch):
    """Capture task ids instead of dispatching them."""
    calls = []
    monkeypatch.setattr(process_payment_task, "delay", calls.append)
    monkeypatch.setattr(issue_authorization_chain_task, "delay", calls.append)
    return calls


class TestRedispatchPendingPayments:
    """Tests for redispatch_pending_payments."""

    @pytest.fixture
    def pending_sale(self, active_product, buyer):
        return TransactionModel.objects.create(
            buyer=buyer,
            seller=active_product.creator,
            product=active_product,
            amount=Decimal("10.00"),
            platform_fee=Decimal("0.50"),
        )

    def test_enqueues_stale_pending(self, pending_sale, enqueued):
        out = StringIO()

        call_command("redispatch_pending_payments", "--older-than-minutes=0", stdout=out)

        assert enqueued == [str(pending_sale.id)]
        assert "Enqueued 1 payment task(s)" in out.getvalue()

    def test_recent_pending_is_left_alone(self, pending_sale, enqueued):
        call_command("redispatch_pending_payments", stdout=StringIO())

        assert enqueued == []

    def test_dry_run(self, pending_sale, enqueued):
        out = StringIO()

        call_command(
            "redispatch_pending_payments", "--older-than-minutes=0", "--dry-run", stdout=out
        )

        assert enqueued == []
        assert str(pending_sale.id) in out.getvalue()


class TestReissueAuthorizationChains:
    """Tests for reissue_authorization_chains."""

    def test_enqueues_products_without_chain(self, active_product, enqueued):
        out = StringIO()

        call_command("reissue_authorization_chains", stdout=out)

        assert enqueued == [str(active_product.id)]
        assert "Enqueued 1 issuance task(s)" in out.getvalue()

    def test_dry_run(self, active_product, enqueued):
        out = StringIO()

        call_command("reissue_authorization_chains", "--dry-run", stdout=out)

        assert enqueued == []
        assert "DRY RUN" in out.getvalue()


class TestPurgeIdempotencyKeys:
    """Tests for purge_idempotency_keys."""

    def test_purges_only_expired(self):
        IdempotencyKey.objects.create(
            key="license_applied:old", expires_at=timezone.now() - timedelta(days=1)
        )
        IdempotencyKey.objects.create(key="license_applied:new")

        call_command("purge_idempotency_keys", stdout=StringIO())

        assert list(IdempotencyKey.objects.values_list("key", flat=True)) == ["license_applied:new"]
