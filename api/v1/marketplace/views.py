"""
Marketplace API views.

These endpoints are used by licensees to list products and by buyers
to purchase them and request refunds.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.common import build_guard, caller_id, validated
from api.v1.marketplace.serializers import (
    ChangeProductStatusRequestSerializer,
    CreateProductRequestSerializer,
    ProductSerializer,
    PurchaseRequestSerializer,
    RefundRequestSerializer,
    TransactionSerializer,
    UpdateProductRequestSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_application_repository import (
    DjangoLicenseApplicationRepository,
)
from payments.application.commands.purchase_product import (
    PurchaseProductCommand,
    RefundTransactionCommand,
)
from payments.application.handlers.payment_handlers import (
    GetTransactionHandler,
    RefundTransactionHandler,
)
from payments.application.handlers.purchase_handler import PurchaseProductHandler
from payments.application.queries.get_transaction import GetTransactionQuery
from payments.domain.settlement import SettlementConfig
from payments.infrastructure.gateways import get_payment_gateway
from payments.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from products.application.commands.create_product import CreateProductCommand
from products.application.commands.update_product import (
    ChangeProductStatusCommand,
    DeleteProductCommand,
    UpdateProductCommand,
)
from products.application.handlers.create_product_handler import CreateProductHandler
from products.application.handlers.product_handlers import (
    ChangeProductStatusHandler,
    DeleteProductHandler,
    GetProductHandler,
    UpdateProductHandler,
)
from products.application.queries.get_product import GetProductQuery
from products.infrastructure.repositories.django_product_repository import DjangoProductRepository

_product_repo = DjangoProductRepository()
_application_repo = DjangoLicenseApplicationRepository()
_transaction_repo = DjangoTransactionRepository()

tracer = get_tracer(__name__)


class ProductListView(APIView):
    """View for creating products."""

    @extend_schema(
        operation_id="create_product",
        summary="Create Product",
        description=(
            "Create a draft product under one of the caller's approved licenses. "
            "The authorization chain is issued in the background."
        ),
        tags=["Marketplace"],
        request=CreateProductRequestSerializer,
        responses={201: ProductSerializer},
    )
    def post(self, request: Request) -> Response:
        """Create a product."""
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_product") as span:
            creator_id = caller_id(request)
            data = validated(CreateProductRequestSerializer, request.data, span)
            span.set_attribute("license.id", str(data["license_id"]))

            handler = CreateProductHandler(
                product_repository=_product_repo,
                application_repository=_application_repo,
                guard=build_guard(),
            )
            product = await handler.handle(CreateProductCommand(creator_id=creator_id, **data))

            span.set_attribute("product.id", str(product.id))
            span.set_status(Status(StatusCode.OK))
            return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductDetailView(APIView):
    """View for reading, updating and deleting a product."""

    @extend_schema(
        operation_id="get_product",
        summary="Get Product",
        tags=["Marketplace"],
        responses={200: ProductSerializer},
    )
    def get(self, request: Request, product_id: uuid.UUID) -> Response:
        """Return a product."""
        product = async_to_sync(GetProductHandler(product_repository=_product_repo).handle)(
            GetProductQuery(product_id=product_id)
        )
        return Response(ProductSerializer(product).data)

    @extend_schema(
        operation_id="update_product",
        summary="Update Product",
        tags=["Marketplace"],
        request=UpdateProductRequestSerializer,
        responses={200: ProductSerializer},
    )
    def patch(self, request: Request, product_id: uuid.UUID) -> Response:
        """Update product fields."""
        return async_to_sync(self._handle_update)(request, product_id)

    async def _handle_update(self, request: Request, product_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_product") as span:
            span.set_attribute("product.id", str(product_id))
            changes = validated(UpdateProductRequestSerializer, request.data, span)
            handler = UpdateProductHandler(product_repository=_product_repo, guard=build_guard())
            product = await handler.handle(
                UpdateProductCommand(
                    product_id=product_id, actor_id=caller_id(request), changes=dict(changes)
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(ProductSerializer(product).data)

    @extend_schema(
        operation_id="delete_product",
        summary="Delete Product",
        description="Delete a product that has no completed or pending sales.",
        tags=["Marketplace"],
        responses={204: None},
    )
    def delete(self, request: Request, product_id: uuid.UUID) -> Response:
        """Delete a product."""
        with tracer.start_as_current_span("delete_product") as span:
            span.set_attribute("product.id", str(product_id))
            handler = DeleteProductHandler(product_repository=_product_repo, guard=build_guard())
            async_to_sync(handler.handle)(
                DeleteProductCommand(product_id=product_id, actor_id=caller_id(request))
            )
            span.set_status(Status(StatusCode.OK))
            return Response(status=status.HTTP_204_NO_CONTENT)


class ProductStatusView(APIView):
    """View for manual product status changes."""

    @extend_schema(
        operation_id="change_product_status",
        summary="Change Product Status",
        description="Publish, suspend or reactivate a product. Activation re-checks the license.",
        tags=["Marketplace"],
        request=ChangeProductStatusRequestSerializer,
        responses={200: ProductSerializer},
    )
    def post(self, request: Request, product_id: uuid.UUID) -> Response:
        """Change product status."""
        return async_to_sync(self._handle_change_status)(request, product_id)

    async def _handle_change_status(self, request: Request, product_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("change_product_status") as span:
            span.set_attribute("product.id", str(product_id))
            data = validated(ChangeProductStatusRequestSerializer, request.data, span)
            handler = ChangeProductStatusHandler(product_repository=_product_repo, guard=build_guard())
            product = await handler.handle(
                ChangeProductStatusCommand(
                    product_id=product_id,
                    actor_id=caller_id(request),
                    status=data["status"],
                )
            )
            span.set_attribute("product.status", product.status.value)
            span.set_status(Status(StatusCode.OK))
            return Response(ProductSerializer(product).data)


class PurchaseProductView(APIView):
    """View for purchasing products."""

    @extend_schema(
        operation_id="purchase_product",
        summary="Purchase Product",
        description=(
            "Reserve inventory and record a pending sale. Payment is confirmed "
            "in the background; poll the transaction for the outcome."
        ),
        tags=["Marketplace"],
        request=PurchaseRequestSerializer,
        responses={201: TransactionSerializer},
    )
    def post(self, request: Request, product_id: uuid.UUID) -> Response:
        """Purchase a product."""
        return async_to_sync(self._handle_purchase)(request, product_id)

    async def _handle_purchase(self, request: Request, product_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("purchase_product") as span:
            span.set_attribute("product.id", str(product_id))
            buyer_id = caller_id(request)
            data = validated(PurchaseRequestSerializer, request.data, span)
            span.set_attribute("quantity", data["quantity"])

            handler = PurchaseProductHandler(
                transaction_repository=_transaction_repo,
                product_repository=_product_repo,
                guard=build_guard(),
                settlement_config=SettlementConfig.from_settings(),
            )
            transaction = await handler.handle(
                PurchaseProductCommand(product_id=product_id, buyer_id=buyer_id, **data)
            )

            span.set_attribute("transaction.id", str(transaction.id))
            span.set_status(Status(StatusCode.OK))
            return Response(TransactionSerializer(transaction).data, status=status.HTTP_201_CREATED)


class TransactionDetailView(APIView):
    """View for reading a transaction."""

    @extend_schema(
        operation_id="get_transaction",
        summary="Get Transaction",
        description="Visible to the buyer, the seller and admins.",
        tags=["Marketplace"],
        responses={200: TransactionSerializer},
    )
    def get(self, request: Request, transaction_id: uuid.UUID) -> Response:
        """Return a transaction."""
        handler = GetTransactionHandler(transaction_repository=_transaction_repo, guard=build_guard())
        transaction = async_to_sync(handler.handle)(
            GetTransactionQuery(transaction_id=transaction_id, actor_id=caller_id(request))
        )
        return Response(TransactionSerializer(transaction).data)


class RefundTransactionView(APIView):
    """View for refunding completed sales."""

    @extend_schema(
        operation_id="refund_transaction",
        summary="Refund Transaction",
        description="Refund a completed sale through the payment gateway. Inventory is not restored.",
        tags=["Marketplace"],
        request=RefundRequestSerializer,
        responses={200: TransactionSerializer},
    )
    def post(self, request: Request, transaction_id: uuid.UUID) -> Response:
        """Refund a transaction."""
        return async_to_sync(self._handle_refund)(request, transaction_id)

    async def _handle_refund(self, request: Request, transaction_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("refund_transaction") as span:
            span.set_attribute("transaction.id", str(transaction_id))
            data = validated(RefundRequestSerializer, request.data, span)
            handler = RefundTransactionHandler(
                transaction_repository=_transaction_repo,
                gateway=get_payment_gateway(),
                guard=build_guard(),
            )
            transaction = await handler.handle(
                RefundTransactionCommand(
                    transaction_id=transaction_id,
                    actor_id=caller_id(request),
                    reason=data["reason"],
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(TransactionSerializer(transaction).data)
