"""Error types raised by OpsGenie Alerts."""


class OpsGenieAlertsError(Exception):
    """Base class for all OpsGenie Alerts errors."""


class ConfigurationError(OpsGenieAlertsError):
    """Startup configuration is invalid."""


class FetchError(OpsGenieAlertsError):
    """The alerting API could not be reached or returned an HTTP failure."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotificationError(OpsGenieAlertsError):
    """A notification channel failed to deliver a single notification."""


class MalformedAlertError(OpsGenieAlertsError):
    """An alert lacks a field required to build its notification."""

    def __init__(self, alert_id: str, field_name: str):
        super().__init__(f"Alert {alert_id} has no {field_name}")
        self.alert_id = alert_id
        self.field_name = field_name
