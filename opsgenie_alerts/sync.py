"""Incremental alert synchronization.

Each call to `SyncEngine.sync()` queries OpsGenie for everything open or
touched since the watermark, merges the batch into the store, and reports
which ids were seen for the first time.
"""

import logging

from .alert_store import AlertStore
from .models import Alert
from .opsgenie_client import OpsGenieClient
from .paginator import AlertPaginator, RATE_LIMIT_DELAY
from .watermark import build_query, query_watermark

logger = logging.getLogger(__name__)


class SyncEngine:
    """Keeps an AlertStore in step with OpsGenie."""

    def __init__(
        self,
        client: OpsGenieClient,
        store: AlertStore,
        request_limit: int = 100,
        history_days: int = 7,
        rate_limit_delay: float = RATE_LIMIT_DELAY,
    ):
        self.store = store
        self.history_days = history_days
        self.paginator = AlertPaginator(
            client,
            request_limit=request_limit,
            rate_limit_delay=rate_limit_delay,
        )

    def build_query(self) -> str:
        """Build the incremental query from the current store contents."""
        watermark = query_watermark(self.store, self.history_days)
        return build_query(watermark)

    async def fetch(self) -> list[Alert]:
        """Fetch the batch of alerts for this cycle.

        Raises:
            FetchError: If any page request fails.
        """
        query = self.build_query()
        logger.debug(f'Retrieving alerts with query: "{query}"')
        return await self.paginator.fetch_all(query)

    def merge(self, alerts: list[Alert]) -> list[str]:
        """Merge a batch into the store.

        Returns:
            Ids that had no entry in the store before this merge.
        """
        new_ids = []
        for alert in alerts:
            if self.store.upsert(alert):
                new_ids.append(alert.id)
        return new_ids

    async def sync(self) -> list[str]:
        """Run one fetch and merge.

        Returns:
            Newly observed alert ids, in fetch order.
        """
        alerts = await self.fetch()
        new_ids = self.merge(alerts)
        logger.info(
            f"Sync complete: {len(alerts)} retrieved, {len(new_ids)} new, "
            f"{len(self.store)} known"
        )
        return new_ids
