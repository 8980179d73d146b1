"""Base notification channel interface."""

from abc import ABC, abstractmethod

from ..models import Alert, Urgency


class NotificationChannel(ABC):
    """Abstract base class for notification sinks."""

    name: str = "base"

    @abstractmethod
    def send(self, summary: str, urgency: Urgency, alert: Alert | None = None) -> None:
        """
        Deliver a single notification.

        Args:
            summary: Text shown to the user
            urgency: Urgency mapped from the alert priority
            alert: The alert being notified, for channels that show details

        Raises:
            NotificationError: If the notification could not be delivered
        """
        pass

    def is_configured(self) -> bool:
        """Check if the channel can deliver notifications."""
        return True
