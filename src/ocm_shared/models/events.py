"""Watch event models.

Events are ephemeral: produced by a watch subscription, consumed once by
the stream controller, never persisted.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class WatchEventType(str, Enum):
    """Kinds of change notification a watch delivers."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    ERROR = "ERROR"

    @property
    def is_change(self) -> bool:
        """True for kinds that carry a resource and trigger a re-list."""
        return self is not WatchEventType.ERROR


class WatchEvent(BaseModel):
    """A single notification from a watch subscription.

    Change events carry the raw resource as sent by the API server.
    ``ERROR`` events carry a diagnostic message instead.
    """

    type: WatchEventType
    object: dict[str, Any] | None = Field(default=None, description="Raw resource")
    message: str | None = Field(default=None, description="Diagnostic for ERROR events")

    @classmethod
    def error(cls, message: str | None) -> "WatchEvent":
        return cls(type=WatchEventType.ERROR, message=message)
