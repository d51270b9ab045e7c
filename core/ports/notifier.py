"""
Notifier port (interface).

Outbound notifications are fire-and-forget: a notifier may fail, and the
caller logs the failure without undoing the primary effect.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict


class Notifier(ABC):
    """Abstract notifier for marketplace events."""

    @abstractmethod
    async def notify(self, event: str, payload: Dict[str, Any]) -> None:
        """
        Deliver a notification.

        Args:
            event: Notification event name, e.g. "license.approved"
            payload: JSON-serializable event data
        """
        pass
