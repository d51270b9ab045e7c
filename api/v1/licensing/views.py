"""
Licensing API views.

These endpoints are used by licensees to apply for licenses and by
rights holders to approve, reject and revoke them.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.common import build_guard, caller_id, validated
from api.v1.licensing.serializers import (
    ApplyLicenseRequestSerializer,
    LicenseApplicationSerializer,
    LicenseVerificationSerializer,
    ReasonRequestSerializer,
)
from assets.infrastructure.repositories.django_asset_repository import DjangoIPAssetRepository
from assets.infrastructure.repositories.django_license_terms_repository import (
    DjangoLicenseTermsRepository,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.apply_license import ApplyLicenseCommand
from licenses.application.commands.decide_application import (
    ApproveApplicationCommand,
    RejectApplicationCommand,
)
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.application.handlers.apply_license_handler import ApplyLicenseHandler
from licenses.application.handlers.license_decision_handlers import (
    ApproveApplicationHandler,
    RejectApplicationHandler,
    RevokeLicenseHandler,
)
from licenses.application.handlers.license_query_handlers import (
    GetApplicationHandler,
    ListApplicationsHandler,
    VerifyLicenseHandler,
)
from licenses.application.queries.get_application import (
    GetApplicationQuery,
    ListApplicationsQuery,
    VerifyLicenseQuery,
)
from licenses.infrastructure.repositories.django_license_application_repository import (
    DjangoLicenseApplicationRepository,
)

_application_repo = DjangoLicenseApplicationRepository()
_asset_repo = DjangoIPAssetRepository()
_terms_repo = DjangoLicenseTermsRepository()

tracer = get_tracer(__name__)


class LicenseApplicationListView(APIView):
    """View for applying for licenses and listing applications."""

    @extend_schema(
        operation_id="list_applications",
        summary="List License Applications",
        description="Applications made by the caller, received on the caller's assets, or both.",
        tags=["Licensing"],
        parameters=[
            OpenApiParameter(name="role", type=str, enum=["applicant", "owner"], required=False),
            OpenApiParameter(name="status", type=str, required=False),
        ],
        responses={200: LicenseApplicationSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        """List applications visible to the caller."""
        handler = ListApplicationsHandler(application_repository=_application_repo, guard=build_guard())
        applications = async_to_sync(handler.handle)(
            ListApplicationsQuery(
                actor_id=caller_id(request),
                role_filter=request.query_params.get("role") or None,
                status=request.query_params.get("status") or None,
            )
        )
        return Response(LicenseApplicationSerializer(applications, many=True).data)

    @extend_schema(
        operation_id="apply_license",
        summary="Apply for License",
        description=(
            "Apply under published license terms. Terms with auto-approval "
            "return an approved application immediately."
        ),
        tags=["Licensing"],
        request=ApplyLicenseRequestSerializer,
        responses={201: LicenseApplicationSerializer},
    )
    def post(self, request: Request) -> Response:
        """Apply for a license."""
        return async_to_sync(self._handle_apply)(request)

    async def _handle_apply(self, request: Request) -> Response:
        with tracer.start_as_current_span("apply_license") as span:
            applicant_id = caller_id(request)
            data = validated(ApplyLicenseRequestSerializer, request.data, span)
            span.set_attribute("asset.id", str(data["ip_asset_id"]))
            span.set_attribute("terms.id", str(data["license_terms_id"]))

            handler = ApplyLicenseHandler(
                application_repository=_application_repo,
                asset_repository=_asset_repo,
                terms_repository=_terms_repo,
                guard=build_guard(),
            )
            application = await handler.handle(
                ApplyLicenseCommand(
                    applicant_id=applicant_id,
                    ip_asset_id=data["ip_asset_id"],
                    license_terms_id=data["license_terms_id"],
                    application_data=data.get("application_data"),
                )
            )

            span.set_attribute("application.id", str(application.id))
            span.set_attribute("application.status", application.status.value)
            span.set_status(Status(StatusCode.OK))
            return Response(
                LicenseApplicationSerializer(application).data, status=status.HTTP_201_CREATED
            )


class LicenseApplicationDetailView(APIView):
    """View for reading one application."""

    @extend_schema(
        operation_id="get_application",
        summary="Get License Application",
        tags=["Licensing"],
        responses={200: LicenseApplicationSerializer},
    )
    def get(self, request: Request, application_id: uuid.UUID) -> Response:
        """Return an application visible to the caller."""
        handler = GetApplicationHandler(
            application_repository=_application_repo,
            asset_repository=_asset_repo,
            guard=build_guard(),
        )
        application = async_to_sync(handler.handle)(
            GetApplicationQuery(application_id=application_id, actor_id=caller_id(request))
        )
        return Response(LicenseApplicationSerializer(application).data)


class ApproveApplicationView(APIView):
    """View for approving applications."""

    @extend_schema(
        operation_id="approve_application",
        summary="Approve License Application",
        description="Approve a pending application. Refused with 409 when the terms are at capacity.",
        tags=["Licensing"],
        request=None,
        responses={200: LicenseApplicationSerializer},
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Approve an application."""
        return async_to_sync(self._handle_approve)(request, application_id)

    async def _handle_approve(self, request: Request, application_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("approve_application") as span:
            span.set_attribute("application.id", str(application_id))
            handler = ApproveApplicationHandler(
                application_repository=_application_repo,
                asset_repository=_asset_repo,
                guard=build_guard(),
            )
            application = await handler.handle(
                ApproveApplicationCommand(application_id=application_id, approver_id=caller_id(request))
            )
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseApplicationSerializer(application).data)


class RejectApplicationView(APIView):
    """View for rejecting applications."""

    @extend_schema(
        operation_id="reject_application",
        summary="Reject License Application",
        tags=["Licensing"],
        request=ReasonRequestSerializer,
        responses={200: LicenseApplicationSerializer},
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Reject an application."""
        return async_to_sync(self._handle_reject)(request, application_id)

    async def _handle_reject(self, request: Request, application_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("reject_application") as span:
            span.set_attribute("application.id", str(application_id))
            data = validated(ReasonRequestSerializer, request.data, span)
            handler = RejectApplicationHandler(
                application_repository=_application_repo,
                asset_repository=_asset_repo,
                guard=build_guard(),
            )
            application = await handler.handle(
                RejectApplicationCommand(
                    application_id=application_id,
                    rejecter_id=caller_id(request),
                    reason=data["reason"],
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseApplicationSerializer(application).data)


class RevokeLicenseView(APIView):
    """View for revoking approved licenses."""

    @extend_schema(
        operation_id="revoke_license",
        summary="Revoke License",
        description="Revoke an approved license. Refused with 409 while live products use it.",
        tags=["Licensing"],
        request=ReasonRequestSerializer,
        responses={200: LicenseApplicationSerializer},
    )
    def post(self, request: Request, application_id: uuid.UUID) -> Response:
        """Revoke a license."""
        return async_to_sync(self._handle_revoke)(request, application_id)

    async def _handle_revoke(self, request: Request, application_id: uuid.UUID) -> Response:
        with tracer.start_as_current_span("revoke_license") as span:
            span.set_attribute("application.id", str(application_id))
            data = validated(ReasonRequestSerializer, request.data, span)
            handler = RevokeLicenseHandler(
                application_repository=_application_repo,
                asset_repository=_asset_repo,
                guard=build_guard(),
            )
            application = await handler.handle(
                RevokeLicenseCommand(
                    application_id=application_id,
                    revoker_id=caller_id(request),
                    reason=data["reason"],
                )
            )
            span.set_status(Status(StatusCode.OK))
            return Response(LicenseApplicationSerializer(application).data)


class VerifyLicenseView(APIView):
    """View for checking whether a license is currently valid."""

    @extend_schema(
        operation_id="verify_license",
        summary="Verify License",
        description="Report validity without changing stored status; expiry is checked lazily.",
        tags=["Licensing"],
        responses={200: LicenseVerificationSerializer},
    )
    def get(self, request: Request, application_id: uuid.UUID) -> Response:
        """Verify a license."""
        handler = VerifyLicenseHandler(application_repository=_application_repo)
        result = async_to_sync(handler.handle)(VerifyLicenseQuery(application_id=application_id))
        return Response(LicenseVerificationSerializer(result).data)
