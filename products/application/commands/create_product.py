"""
CreateProductCommand.

Command to create a product under an approved license.
"""
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional


@dataclass
class CreateProductCommand:
    """Command to create a product."""

    creator_id: uuid.UUID
    license_id: uuid.UUID
    title: str
    price: Decimal
    inventory_count: int = 0
    description: str = ""
    category: str = ""
    images: List[str] = field(default_factory=list)
    specifications: Optional[Dict[str, Any]] = None
    tags: List[str] = field(default_factory=list)
