"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Every concrete error
belongs to exactly one category (NotFound, Forbidden, Conflict,
Expired, InvalidInput); callers map categories, not classes.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class NotFoundError(DomainException):
    """Base exception for absent entities."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class ForbiddenError(DomainException):
    """Base exception for callers lacking ownership or role."""

    def __init__(self, message: str = "Operation not permitted", code: str = "FORBIDDEN"):
        super().__init__(message, code=code)


class ConflictError(DomainException):
    """Base exception for operations that clash with current state."""

    def __init__(self, message: str = "Operation conflicts with current state", code: str = "CONFLICT"):
        super().__init__(message, code=code)


class ExpiredError(DomainException):
    """Base exception for lapsed licenses or terms."""

    def __init__(self, message: str = "Resource has expired", code: str = "EXPIRED"):
        super().__init__(message, code=code)


class InvalidInputError(DomainException):
    """Raised when a request carries malformed values."""

    def __init__(self, message: str = "Invalid input", code: str = "INVALID_INPUT"):
        super().__init__(message, code=code)


# Accounts


class AccountNotFoundError(NotFoundError):
    """Raised when an account is not found."""

    def __init__(self, message: str = "Account not found"):
        super().__init__(message, code="ACCOUNT_NOT_FOUND")


class AccountInactiveError(ForbiddenError):
    """Raised when an account is suspended or banned."""

    def __init__(self, message: str = "Account is not active"):
        super().__init__(message, code="ACCOUNT_INACTIVE")


class RoleNotPermittedError(ForbiddenError):
    """Raised when the account role may not perform the operation."""

    def __init__(self, message: str = "Account role is not permitted"):
        super().__init__(message, code="ROLE_NOT_PERMITTED")


class NotOwnerError(ForbiddenError):
    """Raised when the caller neither owns the resource nor is an admin."""

    def __init__(self, message: str = "Only the owner or an admin may do this"):
        super().__init__(message, code="NOT_OWNER")


# Rights registry


class IPAssetNotFoundError(NotFoundError):
    """Raised when an IP asset is not found."""

    def __init__(self, message: str = "IP asset not found"):
        super().__init__(message, code="IP_ASSET_NOT_FOUND")


class LicenseTermsNotFoundError(NotFoundError):
    """Raised when license terms are not found."""

    def __init__(self, message: str = "License terms not found"):
        super().__init__(message, code="LICENSE_TERMS_NOT_FOUND")


class AssetNotApprovedError(ConflictError):
    """Raised when an IP asset has not passed verification."""

    def __init__(self, message: str = "IP asset is not approved"):
        super().__init__(message, code="ASSET_NOT_APPROVED")


class AssetAlreadyModeratedError(ConflictError):
    """Raised when moderating an asset that already has a decision."""

    def __init__(self, message: str = "IP asset has already been moderated"):
        super().__init__(message, code="ASSET_ALREADY_MODERATED")


class TermsInactiveError(ConflictError):
    """Raised when applying against deactivated terms."""

    def __init__(self, message: str = "License terms are not active"):
        super().__init__(message, code="TERMS_INACTIVE")


class TermsLockedError(ConflictError):
    """Raised when updating terms that have pending applications."""

    def __init__(self, message: str = "License terms have pending applications"):
        super().__init__(message, code="TERMS_LOCKED")


# License workflow


class LicenseNotFoundError(NotFoundError):
    """Raised when a license application is not found."""

    def __init__(self, message: str = "License application not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class DuplicateApplicationError(ConflictError):
    """Raised when an applicant already holds an open application for an asset."""

    def __init__(self, message: str = "An open application already exists for this asset"):
        super().__init__(message, code="DUPLICATE_APPLICATION")


class LicenseCapacityReachedError(ConflictError):
    """Raised when license terms have no remaining capacity."""

    def __init__(self, message: str = "Maximum number of licenses reached"):
        super().__init__(message, code="LICENSE_CAPACITY_REACHED")


class InvalidStatusTransitionError(ConflictError):
    """Raised when an operation is invalid for the current status."""

    def __init__(self, message: str = "Invalid status transition"):
        super().__init__(message, code="INVALID_STATUS_TRANSITION")


class ActiveProductsExistError(ConflictError):
    """Raised when revoking a license that still backs live products."""

    def __init__(self, message: str = "License has active or draft products"):
        super().__init__(message, code="ACTIVE_PRODUCTS_EXIST")


class LicenseNotValidError(ConflictError):
    """Raised when a license is not approved and active."""

    def __init__(self, message: str = "License is not valid"):
        super().__init__(message, code="LICENSE_NOT_VALID")


class LicenseExpiredError(ExpiredError):
    """Raised when a license has expired."""

    def __init__(self, message: str = "License has expired"):
        super().__init__(message, code="LICENSE_EXPIRED")


# Products and settlement


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message, code="PRODUCT_NOT_FOUND")


class ProductUnavailableError(ConflictError):
    """Raised when a product is not on sale."""

    def __init__(self, message: str = "Product is not available for purchase"):
        super().__init__(message, code="PRODUCT_UNAVAILABLE")


class InsufficientInventoryError(ConflictError):
    """Raised when a product cannot cover the requested quantity."""

    def __init__(self, message: str = "Insufficient inventory"):
        super().__init__(message, code="INSUFFICIENT_INVENTORY")


class ProductHasSalesError(ConflictError):
    """Raised when deleting a product with completed sales."""

    def __init__(self, message: str = "Product has completed sales"):
        super().__init__(message, code="PRODUCT_HAS_SALES")


class TransactionNotFoundError(NotFoundError):
    """Raised when a transaction is not found."""

    def __init__(self, message: str = "Transaction not found"):
        super().__init__(message, code="TRANSACTION_NOT_FOUND")


class PaymentGatewayError(DomainException):
    """Raised when the payment gateway cannot complete a call."""

    def __init__(self, message: str = "Payment gateway error"):
        super().__init__(message, code="PAYMENT_GATEWAY_ERROR")


# Authorization chains


class AuthorizationChainNotFoundError(NotFoundError):
    """Raised when an authorization chain is not found."""

    def __init__(self, message: str = "Authorization chain not found"):
        super().__init__(message, code="AUTHORIZATION_CHAIN_NOT_FOUND")
