"""Event models for the in-process event system."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import UUID, uuid4

BUNDLE_INVALIDATED = "i18n.bundle.invalidated"


@dataclass(frozen=True)
class Event:
    """Immutable record of something that happened in the process.

    Attributes:
        event_type: Dot-separated type (e.g., "i18n.bundle.invalidated").
        timestamp: When the event occurred (UTC).
        correlation_id: Identifier shared by related events.
        metadata: Event-specific payload.
    """

    event_type: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    correlation_id: UUID = field(default_factory=uuid4)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["correlation_id"] = str(self.correlation_id)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Deserialize an event from its ``to_dict`` form.

        Raises:
            ValueError: If required fields are missing or invalid.
        """
        try:
            timestamp = data.get("timestamp")
            if isinstance(timestamp, str):
                timestamp = datetime.fromisoformat(timestamp)
            correlation_id = data.get("correlation_id")
            return cls(
                event_type=data["event_type"],
                timestamp=timestamp or datetime.now(timezone.utc),
                correlation_id=UUID(str(correlation_id)) if correlation_id else uuid4(),
                metadata=dict(data.get("metadata") or {}),
            )
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid event data: {e}") from e


def bundle_invalidated(cache_keys: List[str]) -> Event:
    """Build the event announcing invalidated translation bundles."""
    return Event(event_type=BUNDLE_INVALIDATED, metadata={"cache_keys": list(cache_keys)})
