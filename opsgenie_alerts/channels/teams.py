"""Microsoft Teams webhook channel (Workflows / Power Automate version).

Posts OpsGenie alerts to a Teams channel as Adaptive Cards.

Setup:
1. In Teams channel, click ... > Workflows
2. Search "Post to a channel when a webhook request is received"
3. Select team/channel and create
4. Copy the webhook URL into TEAMS_WEBHOOK_URL
"""

from datetime import datetime

import requests

from .base import NotificationChannel
from ..exceptions import NotificationError
from ..models import Alert, Urgency

# Adaptive Card text colours per urgency
URGENCY_COLORS = {
    Urgency.CRITICAL: "Attention",
    Urgency.NORMAL: "Warning",
    Urgency.LOW: "Default",
}


class TeamsChannel(NotificationChannel):
    """Send notifications to Microsoft Teams via Workflows webhook."""

    name = "teams"

    def __init__(self, webhook_url: str, timeout: int = 30):
        self.webhook_url = webhook_url
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.webhook_url)

    def _build_facts(self, alert: Alert | None) -> list[tuple[str, str]]:
        if alert is None:
            return []
        facts = [("Alert", alert.display_id)]
        if alert.priority:
            facts.append(("Priority", alert.priority))
        if alert.tags:
            facts.append(("Tags", ", ".join(sorted(alert.tags))))
        if alert.created_at:
            facts.append(("Created", alert.created_at.strftime("%Y-%m-%d %H:%M:%S UTC")))
        return facts

    def build_card(self, summary: str, urgency: Urgency, alert: Alert | None = None) -> dict:
        """Build an Adaptive Card payload for Teams Workflows."""
        body = [
            {
                "type": "TextBlock",
                "text": summary,
                "weight": "Bolder",
                "size": "Large",
                "color": URGENCY_COLORS[urgency],
                "wrap": True,
            },
            {
                "type": "TextBlock",
                "text": f"Urgency: {urgency.value.upper()}",
                "wrap": True,
            },
        ]

        facts = self._build_facts(alert)
        if facts:
            body.append({
                "type": "FactSet",
                "facts": [{"title": k, "value": v} for k, v in facts],
            })

        body.append({
            "type": "TextBlock",
            "text": f"Sent: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "size": "Small",
            "isSubtle": True,
            "wrap": True,
        })

        return {
            "type": "AdaptiveCard",
            "$schema": "http://adaptivecards.io/schemas/adaptive-card.json",
            "version": "1.4",
            "body": body,
        }

    def _build_wrapped_payload(self, card: dict) -> dict:
        """Wrap Adaptive Card in message/attachments format for Workflows."""
        return {
            "type": "message",
            "attachments": [
                {
                    "contentType": "application/vnd.microsoft.card.adaptive",
                    "contentUrl": None,
                    "content": card,
                }
            ],
        }

    def send(self, summary: str, urgency: Urgency, alert: Alert | None = None) -> None:
        """Post the notification to Teams."""
        if not self.webhook_url:
            raise NotificationError("No Teams webhook URL configured")

        payload = self._build_wrapped_payload(self.build_card(summary, urgency, alert))
        try:
            response = requests.post(self.webhook_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise NotificationError(f"Teams webhook request failed: {e}") from e

        if response.status_code not in (200, 202):
            raise NotificationError(
                f"Teams webhook returned {response.status_code}: {response.text[:200]}"
            )
