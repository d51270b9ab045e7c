"""
ModerateAssetCommand.

Entry point through which moderation drives verification status.
"""
import uuid
from dataclasses import dataclass

from core.domain.value_objects import VerificationStatus


@dataclass
class ModerateAssetCommand:
    """Command to approve or reject an IP asset."""

    asset_id: uuid.UUID
    moderator_id: uuid.UUID
    decision: VerificationStatus
    note: str = ""
    force: bool = False
