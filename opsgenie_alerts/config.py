"""Configuration for OpsGenie Alerts."""

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Find and load .env file
_env_candidates = [
    Path(__file__).parent.parent / ".env",
    Path(__file__).parent.parent / ".env.template",
]

for env_path in _env_candidates:
    if env_path.exists():
        load_dotenv(env_path)
        break


DEFAULT_BASE_PATH = "https://api.opsgenie.com"

# OpsGenie rejects list requests with limit > 100
MAX_REQUEST_LIMIT = 100

CHANNELS = ("desktop", "console", "teams")


@dataclass
class Config:
    """OpsGenie Alerts configuration."""

    # --- OpsGenie API ---
    api_key: str = ""
    base_path: str = DEFAULT_BASE_PATH
    request_limit: int = 100
    request_timeout: int = 30

    # --- Polling ---
    history_days: int = 7
    update_interval: int = 60

    # --- Notifications ---
    notification_channel: str = "desktop"
    teams_webhook_url: str | None = None
    app_name: str = "opsgenie-alerts"

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(
            api_key=os.getenv("OPSGENIE_API_KEY", ""),
            base_path=os.getenv("OPSGENIE_BASE_URL", DEFAULT_BASE_PATH),
            request_limit=_int_env("REQUEST_LIMIT", 100),
            request_timeout=_int_env("OPSGENIE_TIMEOUT", 30),
            history_days=_int_env("HISTORY_DAYS", 7),
            update_interval=_int_env("UPDATE_INTERVAL", 60),
            notification_channel=os.getenv("NOTIFICATION_CHANNEL", "desktop").lower(),
            teams_webhook_url=os.getenv("TEAMS_WEBHOOK_URL") or None,
            app_name=os.getenv("NOTIFY_APP_NAME", "opsgenie-alerts"),
        )

    def validate(self) -> None:
        """Check the configuration before the scheduler starts.

        Raises:
            ConfigurationError: If any setting is missing or out of range.
        """
        if not self.api_key:
            raise ConfigurationError(
                "OpsGenie API key is required (--api-key or OPSGENIE_API_KEY)"
            )

        parsed = urlparse(self.base_path)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Invalid OpsGenie base path: {self.base_path!r}")

        if not 1 <= self.history_days <= 255:
            raise ConfigurationError(
                f"history_days must be between 1 and 255, got {self.history_days}"
            )
        if self.update_interval < 1:
            raise ConfigurationError(
                f"update_interval must be at least 1 second, got {self.update_interval}"
            )
        if not 1 <= self.request_limit <= MAX_REQUEST_LIMIT:
            raise ConfigurationError(
                f"request_limit must be between 1 and {MAX_REQUEST_LIMIT}, "
                f"got {self.request_limit}"
            )

        if self.notification_channel not in CHANNELS:
            raise ConfigurationError(
                f"Unknown notification channel {self.notification_channel!r} "
                f"(expected one of {', '.join(CHANNELS)})"
            )
        if self.notification_channel == "teams" and not self.teams_webhook_url:
            raise ConfigurationError("Teams channel selected but TEAMS_WEBHOOK_URL is not set")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
