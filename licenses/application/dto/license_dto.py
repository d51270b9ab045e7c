"""
License DTOs for API responses.
"""
from dataclasses import dataclass

from licenses.domain.license_application import LicenseApplication


@dataclass
class LicenseVerificationDTO:
    """Result of a live license check."""

    application: LicenseApplication
    is_valid: bool
    reason: str
