"""
Authorization chain queries.
"""
import uuid
from dataclasses import dataclass


@dataclass
class VerifyByCodeQuery:
    """Public lookup of a chain by verification code."""

    verification_code: str


@dataclass
class ChainHistoryQuery:
    """Query all chains of a product."""

    product_id: uuid.UUID
