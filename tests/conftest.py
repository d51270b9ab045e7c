"""
Pytest configuration and shared fixtures.
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from accounts.domain.services import EligibilityGuard
from accounts.infrastructure.identity import DjangoIdentityProvider
from accounts.infrastructure.models import Account as AccountModel
from assets.infrastructure.models import IPAsset as IPAssetModel
from assets.infrastructure.models import LicenseTerms as LicenseTermsModel
from assets.infrastructure.repositories.django_asset_repository import DjangoIPAssetRepository
from assets.infrastructure.repositories.django_license_terms_repository import (
    DjangoLicenseTermsRepository,
)
from authorizations.infrastructure.ledger import ContentHashLedger
from authorizations.infrastructure.repositories.django_authorization_chain_repository import (
    DjangoAuthorizationChainRepository,
)
from licenses.infrastructure.models import LicenseApplication as LicenseApplicationModel
from licenses.infrastructure.repositories.django_license_application_repository import (
    DjangoLicenseApplicationRepository,
)
from payments.domain.settlement import SettlementConfig
from payments.infrastructure.gateways import SimulatedPaymentGateway
from payments.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from products.infrastructure.models import Product as ProductModel
from products.infrastructure.repositories.django_product_repository import DjangoProductRepository


@pytest.fixture
def guard():
    """Fixture for an EligibilityGuard backed by the account table."""
    return EligibilityGuard(DjangoIdentityProvider())


@pytest.fixture
def asset_repository():
    """Fixture for IPAssetRepository."""
    return DjangoIPAssetRepository()


@pytest.fixture
def terms_repository():
    """Fixture for LicenseTermsRepository."""
    return DjangoLicenseTermsRepository()


@pytest.fixture
def application_repository():
    """Fixture for LicenseApplicationRepository."""
    return DjangoLicenseApplicationRepository()


@pytest.fixture
def product_repository():
    """Fixture for ProductRepository."""
    return DjangoProductRepository()


@pytest.fixture
def transaction_repository():
    """Fixture for TransactionRepository."""
    return DjangoTransactionRepository()


@pytest.fixture
def chain_repository():
    """Fixture for AuthorizationChainRepository."""
    return DjangoAuthorizationChainRepository()


@pytest.fixture
def ledger():
    """Fixture for the content-hash ledger."""
    return ContentHashLedger()


@pytest.fixture
def gateway():
    """Fixture for the sandbox payment gateway."""
    return SimulatedPaymentGateway()


@pytest.fixture
def settlement_config():
    """Fixture for a 5% platform fee in USD."""
    return SettlementConfig(platform_fee_percent=Decimal("5"), currency="usd")


@pytest.fixture
def make_account(db):
    """Factory for accounts saved in the database."""

    def _make(role="creator", status="active"):
        unique_id = uuid.uuid4().hex[:10]
        return AccountModel.objects.create(
            username=f"{role}_{unique_id}",
            email=f"{role}_{unique_id}@example.com",
            role=role,
            status=status,
        )

    return _make


@pytest.fixture
def creator(make_account):
    """Rights holder owning the test asset."""
    return make_account("creator")


@pytest.fixture
def licensee(make_account):
    """Secondary creator applying for licenses."""
    return make_account("secondary_creator")


@pytest.fixture
def other_licensee(make_account):
    """A second applicant competing for the same terms."""
    return make_account("secondary_creator")


@pytest.fixture
def buyer(make_account):
    """Buyer account."""
    return make_account("buyer")


@pytest.fixture
def admin_account(make_account):
    """Platform administrator."""
    return make_account("admin")


@pytest.fixture
def approved_asset(creator):
    """IP asset that passed moderation."""
    return IPAssetModel.objects.create(
        creator=creator,
        title="Harbour at Dawn",
        category="illustration",
        verification_status="approved",
    )


@pytest.fixture
def make_terms(approved_asset):
    """Factory for license terms on the approved asset."""

    def _make(**overrides):
        fields = {
            "revenue_share_percent": Decimal("20.00"),
            "base_fee": Decimal("0.00"),
            "max_licenses": 0,
            "auto_approve": False,
        }
        fields.update(overrides)
        return LicenseTermsModel.objects.create(ip_asset=approved_asset, **fields)

    return _make


@pytest.fixture
def terms(make_terms):
    """Unlimited, manually approved terms with a 20% revenue share."""
    return make_terms()


@pytest.fixture
def make_license(approved_asset, terms, creator):
    """Factory for license applications in a given state."""

    def _make(applicant, status="approved", expires_at=None, license_terms=None):
        approved = status == "approved"
        return LicenseApplicationModel.objects.create(
            ip_asset=approved_asset,
            applicant=applicant,
            license_terms=license_terms or terms,
            status=status,
            approved_at=timezone.now() if approved else None,
            approved_by=creator if approved else None,
            expires_at=expires_at,
        )

    return _make


@pytest.fixture
def approved_license(make_license, licensee):
    """Approved, perpetual license held by the licensee."""
    return make_license(licensee)


@pytest.fixture
def make_product(approved_license, licensee):
    """Factory for products sold under the approved license."""

    def _make(status="active", inventory_count=5, price=Decimal("10.00"), license=None):
        return ProductModel.objects.create(
            creator=licensee,
            license=license or approved_license,
            title="Harbour at Dawn Print",
            price=price,
            inventory_count=inventory_count,
            status=status,
        )

    return _make


@pytest.fixture
def active_product(make_product):
    """Active product with five units at 10.00."""
    return make_product()


@pytest.fixture
def expired_at():
    """A moment in the past."""
    return timezone.now() - timedelta(days=1)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
