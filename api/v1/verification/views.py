"""
Authorization chain API views.

Verification by code is public so buyers can check authenticity
without an account.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.common import build_guard, caller_id, validated
from api.v1.verification.serializers import (
    AuthorizationChainSerializer,
    ChainVerificationSerializer,
    RevokeChainRequestSerializer,
)
from assets.infrastructure.repositories.django_asset_repository import DjangoIPAssetRepository
from authorizations.application.commands.issue_chain import RevokeChainCommand
from authorizations.application.handlers.chain_handlers import (
    ChainHistoryHandler,
    RevokeChainHandler,
    VerifyByCodeHandler,
)
from authorizations.application.queries.verify_chain import ChainHistoryQuery, VerifyByCodeQuery
from authorizations.infrastructure.ledger import ContentHashLedger
from authorizations.infrastructure.repositories.django_authorization_chain_repository import (
    DjangoAuthorizationChainRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_application_repository import (
    DjangoLicenseApplicationRepository,
)
from products.infrastructure.repositories.django_product_repository import DjangoProductRepository

_chain_repo = DjangoAuthorizationChainRepository()
_product_repo = DjangoProductRepository()
_application_repo = DjangoLicenseApplicationRepository()
_asset_repo = DjangoIPAssetRepository()
_ledger = ContentHashLedger()

tracer = get_tracer(__name__)


class VerifyByCodeView(APIView):
    """Public authenticity check."""

    @extend_schema(
        operation_id="verify_by_code",
        summary="Verify Product Authenticity",
        description=(
            "Resolve a verification code to its product, license and asset. "
            "Validity is evaluated live on every call."
        ),
        tags=["Verification"],
        auth=[],
        responses={200: ChainVerificationSerializer},
    )
    def get(self, request: Request, code: str) -> Response:
        """Verify a product by code."""
        with tracer.start_as_current_span("verify_by_code") as span:
            handler = VerifyByCodeHandler(
                chain_repository=_chain_repo,
                product_repository=_product_repo,
                application_repository=_application_repo,
                asset_repository=_asset_repo,
                ledger=_ledger,
            )
            result = async_to_sync(handler.handle)(VerifyByCodeQuery(verification_code=code))
            span.set_attribute("chain.id", str(result.chain.id))
            span.set_attribute("verification.valid", result.is_valid)
            span.set_status(Status(StatusCode.OK))
            return Response(ChainVerificationSerializer(result).data)


class ChainHistoryView(APIView):
    """Authorization chain history of a product."""

    @extend_schema(
        operation_id="chain_history",
        summary="Authorization Chain History",
        tags=["Verification"],
        responses={200: AuthorizationChainSerializer(many=True)},
    )
    def get(self, request: Request, product_id: uuid.UUID) -> Response:
        """List chains issued for a product, newest first."""
        handler = ChainHistoryHandler(chain_repository=_chain_repo, product_repository=_product_repo)
        chains = async_to_sync(handler.handle)(ChainHistoryQuery(product_id=product_id))
        return Response(AuthorizationChainSerializer(chains, many=True).data)


class RevokeChainView(APIView):
    """Revoke an authorization chain."""

    @extend_schema(
        operation_id="revoke_chain",
        summary="Revoke Authorization Chain",
        tags=["Verification"],
        request=RevokeChainRequestSerializer,
        responses={200: AuthorizationChainSerializer},
    )
    def post(self, request: Request, chain_id: uuid.UUID) -> Response:
        """Revoke a chain."""
        return async_to_sync(self._handle_revoke)(request, chain_id)

    async def _handle_revoke(self, request: Request, chain_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("revoke_chain") as span:
            span.set_attribute("chain.id", str(chain_id))
            data = validated(RevokeChainRequestSerializer, request.data, span)
            handler = RevokeChainHandler(
                chain_repository=_chain_repo,
                product_repository=_product_repo,
                asset_repository=_asset_repo,
                guard=build_guard(),
            )
            chain = await handler.handle(
                RevokeChainCommand(chain_id=chain_id, actor_id=caller_id(request), reason=data["reason"])
            )
            span.set_status(Status(StatusCode.OK))
            return Response(AuthorizationChainSerializer(chain).data)
