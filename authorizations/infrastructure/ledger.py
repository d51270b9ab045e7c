"""
Content-hash ledger adapter.

Bundled implementation of the Ledger port: an append-only table of
SHA-256 hashes, each chained to its predecessor.
"""
import hashlib
import json
import logging
import uuid
from typing import Any, Dict

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from authorizations.infrastructure.models import AuthorizationChain as AuthorizationChainModel
from authorizations.infrastructure.models import LedgerEntry
from authorizations.ports.ledger import Ledger, LedgerError

logger = logging.getLogger(__name__)

APPEND_ATTEMPTS = 3


def compute_entry_hash(
    sequence: int, entry_type: str, subject_id: str, payload: Dict[str, Any], previous_hash: str
) -> str:
    """
    Hash an entry over its canonical JSON form and the previous hash.

    Args:
        sequence: Position in the ledger
        entry_type: Entry type name
        subject_id: UUID string of the recorded subject
        payload: Entry payload
        previous_hash: Hash of the preceding entry, empty for the first

    Returns:
        Hex-encoded SHA-256 digest
    """
    canonical = json.dumps(
        {
            "sequence": sequence,
            "entry_type": entry_type,
            "subject_id": subject_id,
            "payload": payload,
            "previous_hash": previous_hash,
        },
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


class ContentHashLedger(Ledger):
    """Ledger backed by the LedgerEntry table."""

    def _append(self, entry_type: str, subject_id: uuid.UUID, payload: Dict[str, Any]) -> str:
        for attempt in range(1, APPEND_ATTEMPTS + 1):
            try:
                with transaction.atomic():
                    last = LedgerEntry.objects.select_for_update().order_by("-sequence").first()
                    sequence = last.sequence + 1 if last else 1
                    previous_hash = last.entry_hash if last else ""
                    entry_hash = compute_entry_hash(
                        sequence, entry_type, str(subject_id), payload, previous_hash
                    )
                    LedgerEntry.objects.create(
                        sequence=sequence,
                        entry_type=entry_type,
                        subject_id=subject_id,
                        payload=payload,
                        previous_hash=previous_hash,
                        entry_hash=entry_hash,
                    )
                return entry_hash
            except IntegrityError:
                # Another writer took the same sequence number
                logger.warning(
                    "Ledger append collided, retrying",
                    extra={"entry_type": entry_type, "attempt": attempt},
                )
        raise LedgerError(f"Could not append {entry_type} entry for {subject_id}")

    @sync_to_async
    def record_asset_registration(self, asset_id: uuid.UUID, owner_id: uuid.UUID) -> str:
        return self._append(
            "asset_registration",
            asset_id,
            {"asset_id": str(asset_id), "owner_id": str(owner_id)},
        )

    @sync_to_async
    def record_product_issuance(self, product_id: uuid.UUID, license_id: uuid.UUID) -> str:
        return self._append(
            "product_issuance",
            product_id,
            {"product_id": str(product_id), "license_id": str(license_id)},
        )

    @sync_to_async
    def verify_ledger_entry(self, chain_id: uuid.UUID) -> bool:
        """
        Recompute the entry behind a chain and compare it with the chain.

        Returns:
            False when the chain has no hash, the entry is missing or
            altered, or it records a different product or license
        """
        chain = (
            AuthorizationChainModel.objects.filter(id=chain_id)
            .values("ledger_hash", "product_id", "license_id")
            .first()
        )
        if not chain or not chain["ledger_hash"]:
            return False

        entry = LedgerEntry.objects.filter(
            entry_hash=chain["ledger_hash"], entry_type="product_issuance"
        ).first()
        if entry is None:
            return False

        recomputed = compute_entry_hash(
            entry.sequence,
            entry.entry_type,
            str(entry.subject_id),
            entry.payload,
            entry.previous_hash,
        )
        if recomputed != entry.entry_hash:
            logger.warning("Ledger entry failed integrity check", extra={"sequence": entry.sequence})
            return False

        return entry.payload == {
            "product_id": str(chain["product_id"]),
            "license_id": str(chain["license_id"]),
        }
