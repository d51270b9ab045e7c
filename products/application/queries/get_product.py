"""
GetProductQuery.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetProductQuery:
    """Query a product by ID."""

    product_id: uuid.UUID
