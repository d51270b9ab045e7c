"""
RevokeLicenseCommand.

Command to revoke an approved license.
"""
import uuid
from dataclasses import dataclass


@dataclass
class RevokeLicenseCommand:
    """Command to revoke a license."""

    application_id: uuid.UUID
    revoker_id: uuid.UUID
    reason: str
