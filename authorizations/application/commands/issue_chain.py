"""
Authorization chain commands.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class IssueChainCommand:
    """Command to issue the authorization chain of a product."""

    product_id: uuid.UUID
    parent_chain_id: Optional[uuid.UUID] = None


@dataclass
class RevokeChainCommand:
    """Command to revoke an authorization chain."""

    chain_id: uuid.UUID
    actor_id: uuid.UUID
    reason: str
