"""
License application queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class GetApplicationQuery:
    """Query a single application as seen by an actor."""

    application_id: uuid.UUID
    actor_id: uuid.UUID


@dataclass
class ListApplicationsQuery:
    """
    Query applications visible to an actor.

    role_filter is "applicant" (made by the actor), "owner" (received
    on the actor's assets) or None for both.
    """

    actor_id: uuid.UUID
    role_filter: Optional[str] = None
    status: Optional[str] = None


@dataclass
class VerifyLicenseQuery:
    """Query whether a license can currently be sold under."""

    application_id: uuid.UUID
