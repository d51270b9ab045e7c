"""
Django implementation of IPAssetRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import Optional

from asgiref.sync import sync_to_async

from assets.domain.ip_asset import AssetMetadata, IPAsset
from assets.infrastructure.models import IPAsset as IPAssetModel
from assets.ports.asset_repository import IPAssetRepository
from core.domain.value_objects import AssetStatus, VerificationStatus


class DjangoIPAssetRepository(IPAssetRepository):
    """Django ORM implementation of IPAssetRepository."""

    def _to_domain(self, model: IPAssetModel) -> IPAsset:
        """
        Convert Django model to domain entity.

        Args:
            model: Django IPAsset model

        Returns:
            IPAsset domain entity
        """
        return IPAsset(
            id=model.id,
            creator_id=model.creator_id,
            title=model.title,
            description=model.description,
            category=model.category,
            content_type=model.content_type,
            file_urls=tuple(model.file_urls or ()),
            tags=tuple(model.tags or ()),
            metadata=AssetMetadata.from_dict(model.metadata),
            verification_status=VerificationStatus(model.verification_status),
            status=AssetStatus(model.status),
            ledger_hash=model.ledger_hash,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @sync_to_async
    def save(self, asset: IPAsset) -> IPAsset:
        """
        Save an IP asset entity.

        Args:
            asset: IPAsset entity to save

        Returns:
            Saved IPAsset entity
        """
        model, _ = IPAssetModel.objects.update_or_create(
            id=asset.id,
            defaults={
                "creator_id": asset.creator_id,
                "title": asset.title,
                "description": asset.description,
                "category": asset.category,
                "content_type": asset.content_type,
                "file_urls": list(asset.file_urls),
                "tags": list(asset.tags),
                "metadata": asset.metadata.to_dict(),
                "verification_status": asset.verification_status.value,
                "status": asset.status.value,
                "ledger_hash": asset.ledger_hash,
            },
        )
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, asset_id: uuid.UUID) -> Optional[IPAsset]:
        """
        Find an IP asset by ID.

        Args:
            asset_id: IPAsset UUID

        Returns:
            IPAsset entity or None if not found
        """
        try:
            return self._to_domain(IPAssetModel.objects.get(id=asset_id))
        except IPAssetModel.DoesNotExist:
            return None

    @sync_to_async
    def set_ledger_hash(self, asset_id: uuid.UUID, ledger_hash: str) -> bool:
        updated = IPAssetModel.objects.filter(id=asset_id, ledger_hash__isnull=True).update(
            ledger_hash=ledger_hash
        )
        return updated == 1
