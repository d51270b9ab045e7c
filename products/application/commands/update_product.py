"""
Product maintenance commands.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class UpdateProductCommand:
    """Command to change product fields."""

    product_id: uuid.UUID
    actor_id: uuid.UUID
    changes: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ChangeProductStatusCommand:
    """Command to move a product to another status."""

    product_id: uuid.UUID
    actor_id: uuid.UUID
    status: str


@dataclass
class DeleteProductCommand:
    """Command to delete a product."""

    product_id: uuid.UUID
    actor_id: uuid.UUID
