"""
Celery tasks for the rights registry.
"""
import logging
import uuid

from asgiref.sync import async_to_sync

from IPMarketplace.celery import app

from assets.infrastructure.repositories.django_asset_repository import DjangoIPAssetRepository
from authorizations.infrastructure.ledger import ContentHashLedger

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def record_asset_registration_task(self, asset_id: str, owner_id: str):
    """
    Record an asset registration on the ledger and store the hash.

    Best-effort: the asset stays registered without a hash if every
    attempt fails.

    Args:
        asset_id: IPAsset UUID
        owner_id: Owning account UUID
    """
    repository = DjangoIPAssetRepository()
    asset = async_to_sync(repository.find_by_id)(uuid.UUID(asset_id))
    if asset is None:
        logger.warning("Asset vanished before ledger registration", extra={"asset_id": asset_id})
        return None
    if asset.ledger_hash:
        return asset.ledger_hash

    try:
        ledger_hash = async_to_sync(ContentHashLedger().record_asset_registration)(
            uuid.UUID(asset_id), uuid.UUID(owner_id)
        )
        async_to_sync(repository.set_ledger_hash)(asset.id, ledger_hash)
    except Exception as exc:
        logger.error(f"Ledger registration failed: {exc}", exc_info=True)
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)

    logger.info("Asset registration recorded", extra={"asset_id": asset_id})
    return ledger_hash
