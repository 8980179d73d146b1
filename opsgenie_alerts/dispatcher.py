"""Notification dispatch for newly observed alerts.

Only open, unacknowledged alerts are notified. Urgency follows priority:
- P1, P2: critical
- P3, P4: normal
- anything else (P5, unknown, missing): low
"""

import logging

from .alert_store import AlertStore
from .channels.base import NotificationChannel
from .exceptions import MalformedAlertError, NotificationError
from .models import Alert, Urgency

logger = logging.getLogger(__name__)

PRIORITY_URGENCY = {
    "P1": Urgency.CRITICAL,
    "P2": Urgency.CRITICAL,
    "P3": Urgency.NORMAL,
    "P4": Urgency.NORMAL,
}


def urgency_for_priority(priority: str | None) -> Urgency:
    """Map an OpsGenie priority to a notification urgency."""
    if not isinstance(priority, str):
        return Urgency.LOW
    return PRIORITY_URGENCY.get(priority, Urgency.LOW)


class NotificationDispatcher:
    """Sends notifications for newly observed alerts."""

    def __init__(
        self,
        store: AlertStore,
        channel: NotificationChannel,
        dry_run: bool = False,
    ):
        self.store = store
        self.channel = channel
        self.dry_run = dry_run
        self.sent_count = 0
        self.failed_count = 0

    def should_notify(self, alert: Alert) -> bool:
        return alert.needs_attention

    def _summary_for(self, alert: Alert) -> str:
        if not alert.message:
            raise MalformedAlertError(alert.id, "message")
        return alert.message

    def dispatch(self, new_ids: list[str]) -> int:
        """Notify for each qualifying alert.

        A failure on one alert never stops the rest of the batch.

        Returns:
            Number of notifications delivered (or that would be, in dry run).
        """
        sent = 0
        for alert_id in new_ids:
            alert = self.store.get(alert_id)
            if alert is None:
                logger.warning(f"Alert {alert_id} not in store, skipping notification")
                continue

            if not self.should_notify(alert):
                continue

            try:
                summary = self._summary_for(alert)
            except MalformedAlertError as e:
                logger.warning(f"Skipping notification: {e}")
                continue

            urgency = urgency_for_priority(alert.priority)

            if self.dry_run:
                logger.info(f"[DRY RUN] Would notify ({urgency.value}): {summary} [{alert.display_id}]")
                sent += 1
                continue

            try:
                self.channel.send(summary, urgency, alert)
            except NotificationError as e:
                self.failed_count += 1
                logger.warning(f"Notification for alert {alert.display_id} failed: {e}")
                continue

            logger.info(f"Notified ({urgency.value}): {summary} [{alert.display_id}]")
            sent += 1

        self.sent_count += sent
        return sent
