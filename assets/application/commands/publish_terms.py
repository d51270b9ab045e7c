"""
PublishTermsCommand.
"""
import uuid
from dataclasses import dataclass
from decimal import Decimal

from core.domain.value_objects import LicenseType


@dataclass
class PublishTermsCommand:
    """Command to publish license terms for an asset."""

    asset_id: uuid.UUID
    creator_id: uuid.UUID
    revenue_share_percent: Decimal
    base_fee: Decimal = Decimal("0")
    license_type: LicenseType = LicenseType.STANDARD
    territory: str = "global"
    duration: str = "perpetual"
    requirements: str = ""
    restrictions: str = ""
    auto_approve: bool = False
    max_licenses: int = 0
