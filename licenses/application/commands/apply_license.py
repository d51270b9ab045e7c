"""
ApplyLicenseCommand.

Command to apply for a license on an IP asset.
"""
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ApplyLicenseCommand:
    """Command to apply for a license under published terms."""

    applicant_id: uuid.UUID
    ip_asset_id: uuid.UUID
    license_terms_id: uuid.UUID
    application_data: Optional[Dict[str, Any]] = None
