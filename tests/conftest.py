"""Shared fixtures for OpsGenie Alerts tests."""

from datetime import datetime, timedelta, timezone

import pytest

from opsgenie_alerts.models import Alert, AlertPage


class FakeOpsGenieClient:
    """In-memory stand-in for OpsGenieClient.list_alerts."""

    def __init__(self, alerts: list[Alert] | None = None):
        self.alerts = list(alerts or [])
        self.calls: list[dict] = []

    def list_alerts(self, query, offset=0, limit=100, sort="createdAt", order="asc"):
        self.calls.append({
            "query": query,
            "offset": offset,
            "limit": limit,
            "sort": sort,
            "order": order,
        })
        page = self.alerts[offset:offset + limit]
        return AlertPage(alerts=page, has_next=offset + limit < len(self.alerts))


@pytest.fixture
def base_time():
    return datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_alert(base_time):
    """Factory for open, unacknowledged alerts."""

    def _make(alert_id: str, **overrides) -> Alert:
        fields = {
            "id": alert_id,
            "tiny_id": alert_id.lower(),
            "message": f"Alert {alert_id}",
            "status": "open",
            "acknowledged": False,
            "priority": "P3",
            "created_at": base_time,
            "updated_at": base_time,
        }
        fields.update(overrides)
        return Alert(**fields)

    return _make


@pytest.fixture
def fake_client():
    return FakeOpsGenieClient()


@pytest.fixture
def many_alerts(make_alert, base_time):
    """250 alerts with increasing update times."""
    return [
        make_alert(f"alert-{i:03d}", updated_at=base_time + timedelta(minutes=i))
        for i in range(250)
    ]
