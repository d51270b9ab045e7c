"""
Registry API views.

These endpoints are used by rights holders to:
- Register IP assets
- Publish and maintain license terms
and by administrators to moderate assets.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.common import build_guard, caller_id, validated
from api.v1.registry.serializers import (
    IPAssetSerializer,
    LicenseTermsSerializer,
    ModerateAssetRequestSerializer,
    PublishTermsRequestSerializer,
    RegisterAssetRequestSerializer,
    UpdateTermsRequestSerializer,
)
from assets.application.commands.moderate_asset import ModerateAssetCommand
from assets.application.commands.publish_terms import PublishTermsCommand
from assets.application.commands.register_asset import RegisterAssetCommand
from assets.application.commands.update_terms import UpdateTermsCommand
from assets.application.handlers.moderate_asset_handler import ModerateAssetHandler
from assets.application.handlers.register_asset_handler import RegisterAssetHandler
from assets.application.handlers.terms_handlers import (
    GetAssetHandler,
    ListTermsHandler,
    PublishTermsHandler,
    UpdateTermsHandler,
)
from assets.application.queries.get_asset import GetAssetQuery, ListTermsQuery
from assets.infrastructure.repositories.django_asset_repository import DjangoIPAssetRepository
from assets.infrastructure.repositories.django_license_terms_repository import (
    DjangoLicenseTermsRepository,
)
from core.domain.value_objects import LicenseType, VerificationStatus
from core.instrumentation import Status, StatusCode, get_tracer

_asset_repo = DjangoIPAssetRepository()
_terms_repo = DjangoLicenseTermsRepository()

tracer = get_tracer(__name__)


class AssetListView(APIView):
    """View for registering IP assets."""

    @extend_schema(
        operation_id="register_asset",
        summary="Register IP Asset",
        description="Register a creative work. Verification starts pending until moderated.",
        tags=["Registry"],
        request=RegisterAssetRequestSerializer,
        responses={201: IPAssetSerializer},
    )
    def post(self, request: Request) -> Response:
        """Register an IP asset."""
        return async_to_sync(self._handle_register)(request)

    async def _handle_register(self, request: Request) -> Response:
        with tracer.start_as_current_span("register_asset") as span:
            creator_id = caller_id(request)
            data = validated(RegisterAssetRequestSerializer, request.data, span)
            span.set_attribute("account.id", str(creator_id))

            handler = RegisterAssetHandler(asset_repository=_asset_repo, guard=build_guard())
            asset = await handler.handle(
                RegisterAssetCommand(
                    creator_id=creator_id,
                    title=data["title"],
                    category=data["category"],
                    description=data["description"],
                    content_type=data["content_type"],
                    file_urls=data["file_urls"],
                    tags=data["tags"],
                    metadata=data.get("metadata"),
                )
            )

            span.set_attribute("asset.id", str(asset.id))
            span.set_status(Status(StatusCode.OK))
            return Response(IPAssetSerializer(asset).data, status=status.HTTP_201_CREATED)


class AssetDetailView(APIView):
    """View for reading a single IP asset."""

    @extend_schema(
        operation_id="get_asset",
        summary="Get IP Asset",
        tags=["Registry"],
        responses={200: IPAssetSerializer},
    )
    def get(self, request: Request, asset_id: uuid.UUID) -> Response:
        """Return an IP asset."""
        asset = async_to_sync(GetAssetHandler(asset_repository=_asset_repo).handle)(
            GetAssetQuery(asset_id=asset_id)
        )
        return Response(IPAssetSerializer(asset).data)


class ModerateAssetView(APIView):
    """View for moderating IP assets."""

    @extend_schema(
        operation_id="moderate_asset",
        summary="Moderate IP Asset",
        description="Approve or reject a pending asset. Admin only; set force to reverse a decision.",
        tags=["Registry"],
        request=ModerateAssetRequestSerializer,
        responses={200: IPAssetSerializer},
    )
    def post(self, request: Request, asset_id: uuid.UUID) -> Response:
        """Record a moderation decision."""
        return async_to_sync(self._handle_moderate)(request, asset_id)

    async def _handle_moderate(self, request: Request, asset_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("moderate_asset") as span:
            span.set_attribute("asset.id", str(asset_id))
            moderator_id = caller_id(request)
            data = validated(ModerateAssetRequestSerializer, request.data, span)

            handler = ModerateAssetHandler(asset_repository=_asset_repo, guard=build_guard())
            asset = await handler.handle(
                ModerateAssetCommand(
                    asset_id=asset_id,
                    moderator_id=moderator_id,
                    decision=VerificationStatus(data["decision"]),
                    note=data["note"],
                    force=data["force"],
                )
            )

            span.set_attribute("verification_status", asset.verification_status.value)
            span.set_status(Status(StatusCode.OK))
            return Response(IPAssetSerializer(asset).data)


class AssetTermsView(APIView):
    """View for publishing and listing license terms of an asset."""

    @extend_schema(
        operation_id="list_terms",
        summary="List License Terms",
        tags=["Registry"],
        responses={200: LicenseTermsSerializer(many=True)},
    )
    def get(self, request: Request, asset_id: uuid.UUID) -> Response:
        """List active license terms for an asset."""
        handler = ListTermsHandler(asset_repository=_asset_repo, terms_repository=_terms_repo)
        terms = async_to_sync(handler.handle)(ListTermsQuery(asset_id=asset_id))
        return Response(LicenseTermsSerializer(terms, many=True).data)

    @extend_schema(
        operation_id="publish_terms",
        summary="Publish License Terms",
        description="Publish terms on an approved asset. Only the asset owner may publish.",
        tags=["Registry"],
        request=PublishTermsRequestSerializer,
        responses={201: LicenseTermsSerializer},
    )
    def post(self, request: Request, asset_id: uuid.UUID) -> Response:
        """Publish license terms."""
        return async_to_sync(self._handle_publish)(request, asset_id)

    async def _handle_publish(self, request: Request, asset_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("publish_terms") as span:
            span.set_attribute("asset.id", str(asset_id))
            creator_id = caller_id(request)
            data = validated(PublishTermsRequestSerializer, request.data, span)

            handler = PublishTermsHandler(
                asset_repository=_asset_repo,
                terms_repository=_terms_repo,
                guard=build_guard(),
            )
            terms = await handler.handle(
                PublishTermsCommand(
                    asset_id=asset_id,
                    creator_id=creator_id,
                    revenue_share_percent=data["revenue_share_percent"],
                    base_fee=data["base_fee"],
                    license_type=LicenseType(data["license_type"]),
                    territory=data["territory"],
                    duration=data["duration"],
                    requirements=data["requirements"],
                    restrictions=data["restrictions"],
                    auto_approve=data["auto_approve"],
                    max_licenses=data["max_licenses"],
                )
            )

            span.set_attribute("terms.id", str(terms.id))
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseTermsSerializer(terms).data, status=status.HTTP_201_CREATED)


class TermsDetailView(APIView):
    """View for updating license terms."""

    @extend_schema(
        operation_id="update_terms",
        summary="Update License Terms",
        description="Change terms while no application is pending against them.",
        tags=["Registry"],
        request=UpdateTermsRequestSerializer,
        responses={200: LicenseTermsSerializer},
    )
    def patch(self, request: Request, terms_id: uuid.UUID) -> Response:
        """Update license terms."""
        return async_to_sync(self._handle_update)(request, terms_id)

    async def _handle_update(self, request: Request, terms_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("update_terms") as span:
            span.set_attribute("terms.id", str(terms_id))
            creator_id = caller_id(request)
            changes = validated(UpdateTermsRequestSerializer, request.data, span)

            handler = UpdateTermsHandler(
                asset_repository=_asset_repo,
                terms_repository=_terms_repo,
                guard=build_guard(),
            )
            terms = await handler.handle(
                UpdateTermsCommand(terms_id=terms_id, creator_id=creator_id, changes=dict(changes))
            )

            span.set_status(Status(StatusCode.OK))
            return Response(LicenseTermsSerializer(terms).data)
