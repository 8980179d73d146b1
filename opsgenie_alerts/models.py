"""Data models for OpsGenie Alerts."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Urgency(Enum):
    """Notification urgency, valued as the desktop notification daemon names it."""
    CRITICAL = "critical"
    NORMAL = "normal"
    LOW = "low"


@dataclass
class Alert:
    """A single OpsGenie alert as last retrieved from the API."""
    id: str
    tiny_id: str | None = None
    alias: str | None = None
    message: str | None = None
    status: str | None = None
    acknowledged: bool | None = None
    tags: frozenset[str] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    priority: str | None = None

    @property
    def is_open(self) -> bool:
        return self.status == "open"

    @property
    def needs_attention(self) -> bool:
        """Open and explicitly not acknowledged.

        An alert whose acknowledged flag is unknown does not qualify.
        """
        return self.acknowledged is False and self.is_open

    @property
    def display_id(self) -> str:
        """Short identifier for log lines."""
        return self.tiny_id or self.alias or self.id


@dataclass
class AlertPage:
    """One page of a paginated alert listing."""
    alerts: list[Alert] = field(default_factory=list)
    has_next: bool = False
    # Records the API returned, including ones dropped during conversion
    record_count: int | None = None

    def __post_init__(self):
        if self.record_count is None:
            self.record_count = len(self.alerts)

    def __len__(self) -> int:
        return len(self.alerts)
