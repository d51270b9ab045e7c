"""
Account context middleware.

Resolves the calling account from the X-Account-ID header. Identity
is established upstream; this layer only parses the header and leaves
active/role checks to the eligibility guard.
"""

import logging
import uuid
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

PUBLIC_PREFIXES = (
    "/admin/",
    "/health",
    "/metrics",
    "/api/schema/",
    "/api/docs/",
    "/api/redoc/",
    "/api/v1/verify/",
    "/static/",
)


class AccountContextMiddleware(MiddlewareMixin):
    """
    Middleware attaching ``request.account_id``.

    This middleware:
    1. Skips public paths (health, docs, metrics, public verification)
    2. Returns 401 when an API call carries no or a malformed header
    3. Sets request.account_id to the parsed UUID
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and resolve the calling account.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if the header is missing or malformed,
            None otherwise
        """
        request.account_id = None  # type: ignore
        if self._should_skip(request.path) or not request.path.startswith("/api/"):
            return None

        header = getattr(settings, "ACCOUNT_HEADER", "X-Account-ID")
        raw = request.headers.get(header)
        if not raw:
            return self._unauthorized(f"Missing {header} header")
        try:
            request.account_id = uuid.UUID(raw.strip())  # type: ignore
        except ValueError:
            logger.warning("Malformed account header", extra={"path": request.path})
            return self._unauthorized(f"Malformed {header} header")
        return None

    def _should_skip(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in PUBLIC_PREFIXES)

    def _unauthorized(self, message: str) -> JsonResponse:
        return JsonResponse(
            {"error": {"code": "UNAUTHORIZED", "message": message}},
            status=401,
        )
