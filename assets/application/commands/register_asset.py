"""
RegisterAssetCommand.

Command to register a new IP asset.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RegisterAssetCommand:
    """Command to register an IP asset."""

    creator_id: uuid.UUID
    title: str
    category: str
    description: str = ""
    content_type: str = ""
    file_urls: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    metadata: Optional[Dict[str, Any]] = None
