"""
GetTransactionQuery.
"""
import uuid
from dataclasses import dataclass


@dataclass
class GetTransactionQuery:
    """Query a transaction as seen by an actor."""

    transaction_id: uuid.UUID
    actor_id: uuid.UUID
