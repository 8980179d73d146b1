"""Notification channels for OpsGenie Alerts."""

import logging

from .base import NotificationChannel
from .console import ConsoleChannel
from .desktop import DesktopChannel
from .teams import TeamsChannel
from ..config import Config

logger = logging.getLogger(__name__)


def create_channel_from_config(config: Config) -> NotificationChannel:
    """
    Factory function to create the configured notification channel.

    Falls back to the console channel when the desktop notifier is not
    installed.
    """
    if config.notification_channel == "teams":
        return TeamsChannel(config.teams_webhook_url or "", timeout=config.request_timeout)

    if config.notification_channel == "console":
        return ConsoleChannel()

    desktop = DesktopChannel(app_name=config.app_name)
    if desktop.is_configured():
        return desktop

    logger.warning(f"{desktop.command} not found - using console channel only")
    return ConsoleChannel()


__all__ = [
    "NotificationChannel",
    "ConsoleChannel",
    "DesktopChannel",
    "TeamsChannel",
    "create_channel_from_config",
]
