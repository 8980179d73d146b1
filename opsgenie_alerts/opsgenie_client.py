"""OpsGenie REST client for alert listing.

Wraps the `GET /v2/alerts` list endpoint. Only the pieces the sync engine
needs are implemented: one bounded page request and conversion of the
JSON records into Alert models.
"""

import logging
from datetime import datetime, timezone
from urllib.parse import urljoin

import requests

from .config import Config
from .exceptions import FetchError
from .models import Alert, AlertPage

logger = logging.getLogger(__name__)


class OpsGenieClient:
    """Client for the OpsGenie Alert API (GenieKey auth)."""

    def __init__(
        self,
        api_key: str,
        base_path: str = "https://api.opsgenie.com",
        timeout: int = 30,
        session: requests.Session | None = None,
    ):
        self.base_path = base_path
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "Authorization": f"GenieKey {api_key}",
        })

    @classmethod
    def from_config(cls, config: Config) -> "OpsGenieClient":
        return cls(
            api_key=config.api_key,
            base_path=config.base_path,
            timeout=config.request_timeout,
        )

    def _get(self, endpoint: str, params: dict | None = None) -> dict | None:
        """GET an API endpoint and return the decoded body.

        Returns None if the body is not a JSON object.

        Raises:
            FetchError: On connection failure, timeout or non-2xx status.
        """
        url = urljoin(self.base_path.rstrip("/") + "/", endpoint.lstrip("/"))
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise FetchError(f"OpsGenie returned HTTP {status} for {url}", status) from e
        except requests.RequestException as e:
            raise FetchError(f"OpsGenie request to {url} failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            logger.warning(f"Non-JSON response from {url}, treating as empty")
            return None

        if not isinstance(body, dict):
            logger.warning(f"Unexpected response shape from {url}, treating as empty")
            return None
        return body

    def list_alerts(
        self,
        query: str,
        offset: int = 0,
        limit: int = 100,
        sort: str = "createdAt",
        order: str = "asc",
    ) -> AlertPage:
        """Fetch one page of alerts matching a query.

        Args:
            query: OpsGenie search query
            offset: Index of the first alert to return
            limit: Page size
            sort: Field to sort by
            order: "asc" or "desc"

        Returns:
            AlertPage with the parsed alerts and whether another page exists.
        """
        body = self._get("v2/alerts", {
            "query": query,
            "offset": offset,
            "limit": limit,
            "sort": sort,
            "order": order,
        })
        if body is None:
            return AlertPage()

        records = body.get("data") or []
        if not isinstance(records, list):
            records = []

        alerts = []
        for record in records:
            alert = self._record_to_alert(record)
            if alert:
                alerts.append(alert)

        paging = body.get("paging") or {}
        has_next = isinstance(paging, dict) and bool(paging.get("next"))

        return AlertPage(alerts=alerts, has_next=has_next, record_count=len(records))

    def _record_to_alert(self, record: dict) -> Alert | None:
        """Convert an API alert record to an Alert model."""
        if not isinstance(record, dict):
            return None

        alert_id = record.get("id")
        if not alert_id:
            logger.warning(f"Skipping alert record without id (tinyId={record.get('tinyId')})")
            return None

        tags = record.get("tags")
        acknowledged = record.get("acknowledged")

        return Alert(
            id=str(alert_id),
            tiny_id=_str_or_none(record.get("tinyId")),
            alias=_str_or_none(record.get("alias")),
            message=_str_or_none(record.get("message")),
            status=_str_or_none(record.get("status")),
            acknowledged=acknowledged if isinstance(acknowledged, bool) else None,
            tags=frozenset(t for t in tags if isinstance(t, str)) if isinstance(tags, list) else None,
            created_at=parse_timestamp(record.get("createdAt")),
            updated_at=parse_timestamp(record.get("updatedAt")),
            priority=_str_or_none(record.get("priority")),
        )


def _str_or_none(value) -> str | None:
    return value if isinstance(value, str) else None


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an OpsGenie ISO-8601 timestamp into an aware UTC datetime."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError, AttributeError):
        logger.debug(f"Could not parse timestamp {value!r}")
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
