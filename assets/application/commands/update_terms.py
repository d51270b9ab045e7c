"""
UpdateTermsCommand.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class UpdateTermsCommand:
    """Command to change published terms."""

    terms_id: uuid.UUID
    creator_id: uuid.UUID
    changes: Dict[str, Any] = field(default_factory=dict)
