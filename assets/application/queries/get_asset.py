"""
Registry queries.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetAssetQuery:
    """Query an IP asset by ID."""

    asset_id: uuid.UUID


@dataclass
class ListTermsQuery:
    """Query the terms published for an asset."""

    asset_id: uuid.UUID
    active_only: bool = True
