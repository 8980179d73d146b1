"""Watermark calculation for incremental alert queries."""

from datetime import datetime, timedelta, timezone

from .alert_store import AlertStore


def latest_update(store: AlertStore) -> datetime | None:
    """Return the latest updated_at across all stored alerts.

    None if the store is empty or no alert carries an update time.
    """
    timestamps = [alert.updated_at for alert in store if alert.updated_at is not None]
    return max(timestamps, default=None)


def query_watermark(
    store: AlertStore,
    history_days: int,
    now: datetime | None = None,
) -> datetime:
    """Return the time boundary for the next incremental query.

    Falls back to `history_days` before now when nothing is known yet.
    """
    latest = latest_update(store)
    if latest is not None:
        return latest
    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=history_days)


def build_query(watermark: datetime) -> str:
    """Build the OpsGenie search query for a watermark.

    Open alerts are always included so that long-lived alerts stay current;
    anything touched since the watermark is included so that closures are seen.
    """
    return f"status: open OR updatedAt >= {int(watermark.timestamp())}"
