"""OpsGenie Alerts - desktop notifications for new OpsGenie alerts.

Keeps an in-memory view of OpsGenie alerts in step with the API through
incremental, rate-limited queries and notifies on newly seen open alerts.
"""

from .models import Alert, AlertPage, Urgency
from .exceptions import (
    OpsGenieAlertsError,
    ConfigurationError,
    FetchError,
    NotificationError,
    MalformedAlertError,
)
from .alert_store import AlertStore
from .watermark import latest_update, query_watermark, build_query
from .opsgenie_client import OpsGenieClient
from .paginator import AlertPaginator
from .sync import SyncEngine
from .dispatcher import NotificationDispatcher, urgency_for_priority
from .scheduler import Scheduler, SchedulerState

__all__ = [
    # Models
    "Alert",
    "AlertPage",
    "Urgency",
    # Errors
    "OpsGenieAlertsError",
    "ConfigurationError",
    "FetchError",
    "NotificationError",
    "MalformedAlertError",
    # Sync
    "AlertStore",
    "latest_update",
    "query_watermark",
    "build_query",
    "OpsGenieClient",
    "AlertPaginator",
    "SyncEngine",
    # Dispatch
    "NotificationDispatcher",
    "urgency_for_priority",
    "Scheduler",
    "SchedulerState",
]
