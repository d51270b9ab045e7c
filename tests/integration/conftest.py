"""
Handler fixtures for integration tests.

Handlers run through async_to_sync so database work stays on the test
thread; Celery runs eagerly, so event side effects complete before a
handler returns.
"""

import pytest

from assets.application.handlers.moderate_asset_handler import ModerateAssetHandler
from assets.application.handlers.register_asset_handler import RegisterAssetHandler
from assets.application.handlers.terms_handlers import PublishTermsHandler, UpdateTermsHandler
from authorizations.application.handlers.chain_handlers import (
    ChainHistoryHandler,
    RevokeChainHandler,
    VerifyByCodeHandler,
)
from licenses.application.handlers.apply_license_handler import ApplyLicenseHandler
from licenses.application.handlers.license_decision_handlers import (
    ApproveApplicationHandler,
    RejectApplicationHandler,
    RevokeLicenseHandler,
)
from payments.application.handlers.payment_handlers import RefundTransactionHandler
from payments.application.handlers.purchase_handler import PurchaseProductHandler
from products.application.handlers.create_product_handler import CreateProductHandler
from products.application.handlers.product_handlers import DeleteProductHandler, UpdateProductHandler


@pytest.fixture
def register_asset_handler(asset_repository, guard):
    return RegisterAssetHandler(asset_repository=asset_repository, guard=guard)


@pytest.fixture
def moderate_asset_handler(asset_repository, guard):
    return ModerateAssetHandler(asset_repository=asset_repository, guard=guard)


@pytest.fixture
def publish_terms_handler(asset_repository, terms_repository, guard):
    return PublishTermsHandler(
        asset_repository=asset_repository, terms_repository=terms_repository, guard=guard
    )


@pytest.fixture
def update_terms_handler(asset_repository, terms_repository, guard):
    return UpdateTermsHandler(
        asset_repository=asset_repository, terms_repository=terms_repository, guard=guard
    )


@pytest.fixture
def apply_handler(application_repository, asset_repository, terms_repository, guard):
    return ApplyLicenseHandler(
        application_repository=application_repository,
        asset_repository=asset_repository,
        terms_repository=terms_repository,
        guard=guard,
    )


@pytest.fixture
def approve_handler(application_repository, asset_repository, guard):
    return ApproveApplicationHandler(
        application_repository=application_repository, asset_repository=asset_repository, guard=guard
    )


@pytest.fixture
def reject_handler(application_repository, asset_repository, guard):
    return RejectApplicationHandler(
        application_repository=application_repository, asset_repository=asset_repository, guard=guard
    )


@pytest.fixture
def revoke_handler(application_repository, asset_repository, guard):
    return RevokeLicenseHandler(
        application_repository=application_repository, asset_repository=asset_repository, guard=guard
    )


@pytest.fixture
def create_product_handler(product_repository, application_repository, guard):
    return CreateProductHandler(
        product_repository=product_repository,
        application_repository=application_repository,
        guard=guard,
    )


@pytest.fixture
def delete_product_handler(product_repository, guard):
    return DeleteProductHandler(product_repository=product_repository, guard=guard)


@pytest.fixture
def update_product_handler(product_repository, guard):
    return UpdateProductHandler(product_repository=product_repository, guard=guard)


@pytest.fixture
def purchase_handler(transaction_repository, product_repository, guard, settlement_config):
    return PurchaseProductHandler(
        transaction_repository=transaction_repository,
        product_repository=product_repository,
        guard=guard,
        settlement_config=settlement_config,
    )


@pytest.fixture
def refund_handler(transaction_repository, gateway, guard):
    return RefundTransactionHandler(
        transaction_repository=transaction_repository, gateway=gateway, guard=guard
    )


@pytest.fixture
def verify_handler(chain_repository, product_repository, application_repository, asset_repository, ledger):
    return VerifyByCodeHandler(
        chain_repository=chain_repository,
        product_repository=product_repository,
        application_repository=application_repository,
        asset_repository=asset_repository,
        ledger=ledger,
    )


@pytest.fixture
def revoke_chain_handler(chain_repository, product_repository, asset_repository, guard):
    return RevokeChainHandler(
        chain_repository=chain_repository,
        product_repository=product_repository,
        asset_repository=asset_repository,
        guard=guard,
    )


@pytest.fixture
def chain_history_handler(chain_repository, product_repository):
    return ChainHistoryHandler(chain_repository=chain_repository, product_repository=product_repository)
