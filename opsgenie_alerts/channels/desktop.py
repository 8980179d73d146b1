"""Desktop notification channel using notify-send (libnotify)."""

import logging
import shutil
import subprocess

from .base import NotificationChannel
from ..exceptions import NotificationError
from ..models import Alert, Urgency

logger = logging.getLogger(__name__)


class DesktopChannel(NotificationChannel):
    """Show a desktop popup through the freedesktop notification daemon."""

    name = "desktop"

    def __init__(
        self,
        app_name: str = "opsgenie-alerts",
        command: str = "notify-send",
        timeout: int = 10,
    ):
        self.app_name = app_name
        self.command = command
        self.timeout = timeout

    def is_configured(self) -> bool:
        """Check that notify-send is installed."""
        return shutil.which(self.command) is not None

    def build_command(self, summary: str, urgency: Urgency) -> list[str]:
        return [
            self.command,
            f"--urgency={urgency.value}",
            f"--app-name={self.app_name}",
            # Keep a leading dash in the message from being read as an option
            "--",
            summary,
        ]

    def send(self, summary: str, urgency: Urgency, alert: Alert | None = None) -> None:
        """Show a popup for the notification."""
        cmd = self.build_command(summary, urgency)
        try:
            subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise NotificationError(f"{self.command} is not installed") from e
        except subprocess.TimeoutExpired as e:
            raise NotificationError(f"{self.command} timed out after {self.timeout}s") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise NotificationError(
                f"{self.command} exited with {e.returncode}: {stderr[:200]}"
            ) from e
        except OSError as e:
            raise NotificationError(f"{self.command} could not be run: {e}") from e
        logger.debug(f"Desktop notification shown ({urgency.value}): {summary}")
