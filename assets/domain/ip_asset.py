"""
IPAsset domain entity.

This is the core domain entity representing a registered creative work.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from core.domain.exceptions import AssetAlreadyModeratedError
from core.domain.value_objects import AssetStatus, VerificationStatus

ASSET_METADATA_VERSION = 1


@dataclass(frozen=True)
class AssetMetadata:
    """Typed asset metadata; attributes without a schema go into ``extra``."""

    medium: str = ""
    year_created: Optional[int] = None
    dimensions: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)
    version: int = ASSET_METADATA_VERSION

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AssetMetadata":
        """Build metadata from stored JSON, keeping unknown keys in ``extra``."""
        data = dict(data or {})
        extra = dict(data.pop("extra", {}) or {})
        known = {name: data.pop(name) for name in ("medium", "year_created", "dimensions", "version") if name in data}
        extra.update(data)
        return cls(extra=extra, **known)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "medium": self.medium,
            "year_created": self.year_created,
            "dimensions": self.dimensions,
            "extra": dict(self.extra),
        }


@dataclass(frozen=True)
class IPAsset:
    """
    IPAsset domain entity.

    verification_status is driven only by moderation; licensing reads it
    to gate applications, approvals and chain validity.
    """

    id: uuid.UUID
    creator_id: uuid.UUID
    title: str
    description: str
    category: str
    content_type: str
    file_urls: Tuple[str, ...]
    tags: Tuple[str, ...]
    metadata: AssetMetadata
    verification_status: VerificationStatus
    status: AssetStatus
    ledger_hash: Optional[str]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate asset entity."""
        if not self.creator_id:
            raise ValueError("Creator ID is required")
        if not self.title or len(self.title.strip()) == 0:
            raise ValueError("Asset title cannot be empty")
        if len(self.title) > 255:
            raise ValueError("Asset title too long")
        if not self.category:
            raise ValueError("Asset category is required")

    @classmethod
    def create(
        cls,
        creator_id: uuid.UUID,
        title: str,
        category: str,
        description: str = "",
        content_type: str = "",
        file_urls: Tuple[str, ...] = (),
        tags: Tuple[str, ...] = (),
        metadata: Optional[AssetMetadata] = None,
        asset_id: Optional[uuid.UUID] = None,
    ) -> "IPAsset":
        """
        Create a new IPAsset awaiting moderation.

        Args:
            creator_id: Account UUID of the rights holder
            title: Asset title
            category: Asset category
            description: Free-form description
            content_type: MIME-like content type of the primary file
            file_urls: Opaque storage references
            tags: Search tags
            metadata: Typed metadata
            asset_id: Optional UUID (generated if not provided)

        Returns:
            IPAsset entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=asset_id or uuid.uuid4(),
            creator_id=creator_id,
            title=title.strip(),
            description=description,
            category=category,
            content_type=content_type,
            file_urls=tuple(file_urls),
            tags=tuple(tags),
            metadata=metadata or AssetMetadata(),
            verification_status=VerificationStatus.PENDING,
            status=AssetStatus.ACTIVE,
            ledger_hash=None,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_approved(self) -> bool:
        return self.verification_status == VerificationStatus.APPROVED

    @property
    def is_licensable(self) -> bool:
        """Approved and not suspended."""
        return self.is_approved and self.status == AssetStatus.ACTIVE

    def is_owned_by(self, account_id: uuid.UUID) -> bool:
        return self.creator_id == account_id

    def moderate(self, decision: VerificationStatus, force: bool = False) -> "IPAsset":
        """
        Record a moderation decision.

        Args:
            decision: APPROVED or REJECTED
            force: Allow overriding an earlier decision

        Returns:
            New IPAsset instance with the decision applied

        Raises:
            ValueError: If the decision is not a final status
            AssetAlreadyModeratedError: If already decided and not forced
        """
        if decision == VerificationStatus.PENDING:
            raise ValueError("Moderation decision must be approved or rejected")
        if self.verification_status != VerificationStatus.PENDING and not force:
            raise AssetAlreadyModeratedError(
                f"IP asset {self.id} is already {self.verification_status.value}"
            )
        return replace(
            self, verification_status=decision, updated_at=datetime.now(timezone.utc)
        )

    def with_ledger_hash(self, ledger_hash: str) -> "IPAsset":
        return replace(self, ledger_hash=ledger_hash, updated_at=datetime.now(timezone.utc))
