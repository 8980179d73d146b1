"""In-memory alert store.

Holds the most recently retrieved version of every alert seen since the
process started. Entries are replaced wholesale on each retrieval and are
never removed.
"""

from collections.abc import Iterator

from .models import Alert


class AlertStore:
    """Mapping of alert id to the latest retrieved Alert."""

    def __init__(self):
        self._alerts: dict[str, Alert] = {}

    def upsert(self, alert: Alert) -> bool:
        """Insert or replace an alert.

        Returns:
            True if the id had no prior entry.
        """
        is_new = alert.id not in self._alerts
        self._alerts[alert.id] = alert
        return is_new

    def get(self, alert_id: str) -> Alert | None:
        return self._alerts.get(alert_id)

    def __contains__(self, alert_id: object) -> bool:
        return alert_id in self._alerts

    def __iter__(self) -> Iterator[Alert]:
        return iter(self._alerts.values())

    def __len__(self) -> int:
        return len(self._alerts)
