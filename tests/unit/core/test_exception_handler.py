"""
Unit tests for the API exception handler.
"""
import pytest
from rest_framework.exceptions import ValidationError

from api.exceptions import custom_exception_handler
from core.domain.exceptions import (
    AccountInactiveError,
    ActiveProductsExistError,
    InsufficientInventoryError,
    InvalidInputError,
    LicenseCapacityReachedError,
    LicenseExpiredError,
    LicenseNotFoundError,
    TermsLockedError,
)


class TestCustomExceptionHandler:
    """Tests for custom_exception_handler."""

    @pytest.mark.parametrize(
        "exc, status_code, code",
        [
            (LicenseNotFoundError(), 404, "LICENSE_NOT_FOUND"),
            (AccountInactiveError(), 403, "ACCOUNT_INACTIVE"),
            (LicenseCapacityReachedError(), 409, "LICENSE_CAPACITY_REACHED"),
            (InsufficientInventoryError(), 409, "INSUFFICIENT_INVENTORY"),
            (ActiveProductsExistError(), 409, "ACTIVE_PRODUCTS_EXIST"),
            (TermsLockedError(), 409, "TERMS_LOCKED"),
            (LicenseExpiredError(), 410, "LICENSE_EXPIRED"),
            (InvalidInputError("bad price"), 400, "INVALID_INPUT"),
        ],
    )
    def test_domain_categories_map_to_status(self, exc, status_code, code):
        response = custom_exception_handler(exc, {})

        assert response.status_code == status_code
        assert response.data["error"]["code"] == code
        assert response.data["error"]["message"] == exc.message

    def test_validation_error_carries_details(self):
        response = custom_exception_handler(ValidationError({"price": ["Required"]}), {})

        assert response.status_code == 400
        assert response.data["error"]["code"] == "VALIDATION_ERROR"
        assert "price" in response.data["error"]["details"]

    def test_unexpected_error_is_hidden(self):
        response = custom_exception_handler(RuntimeError("database password leaked"), {})

        assert response.status_code == 500
        assert response.data["error"] == {
            "code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
        }
