"""Console channel for development and testing."""

from datetime import datetime

from .base import NotificationChannel
from ..models import Alert, Urgency


class ConsoleChannel(NotificationChannel):
    """Prints notifications to the console."""

    name = "console"

    def __init__(self):
        self.notifications: list[dict] = []

    def send(self, summary: str, urgency: Urgency, alert: Alert | None = None) -> None:
        """Print notification to console."""
        record = {
            "timestamp": datetime.now().isoformat(),
            "summary": summary,
            "urgency": urgency,
            "alert_id": alert.id if alert else None,
        }
        self.notifications.append(record)

        print("\n" + "=" * 70)
        print(f"OPSGENIE ALERT [{urgency.value.upper()}]")
        print("=" * 70)
        print(f"  Message:   {summary}")
        if alert:
            print(f"  Alert:     {alert.display_id}")
            print(f"  Priority:  {alert.priority or 'Unknown'}")
            if alert.tags:
                print(f"  Tags:      {', '.join(sorted(alert.tags))}")
        print("=" * 70 + "\n")

    def get_notification_count(self) -> int:
        return len(self.notifications)
