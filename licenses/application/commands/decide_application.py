"""
Decision commands for pending applications.
"""
import uuid
from dataclasses import dataclass


@dataclass
class ApproveApplicationCommand:
    """Command to approve a pending application."""

    application_id: uuid.UUID
    approver_id: uuid.UUID


@dataclass
class RejectApplicationCommand:
    """Command to reject a pending application."""

    application_id: uuid.UUID
    rejecter_id: uuid.UUID
    reason: str
