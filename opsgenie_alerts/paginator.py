"""Rate-limited pagination over the OpsGenie alert listing."""

import asyncio
import logging
from functools import partial

from .models import Alert
from .opsgenie_client import OpsGenieClient

logger = logging.getLogger(__name__)

# Seconds to wait between page requests to stay under the API rate limit
RATE_LIMIT_DELAY = 1.0


class AlertPaginator:
    """Fetches every page of a query into one batch."""

    def __init__(
        self,
        client: OpsGenieClient,
        request_limit: int = 100,
        rate_limit_delay: float = RATE_LIMIT_DELAY,
    ):
        self.client = client
        self.request_limit = request_limit
        self.rate_limit_delay = rate_limit_delay

    async def fetch_all(self, query: str) -> list[Alert]:
        """Fetch all alerts matching a query, in creation order.

        Stops when a page reports no further pages or comes back empty.
        A FetchError from any page aborts the whole fetch.
        """
        batch: dict[str, Alert] = {}
        offset = 0
        pages = 0

        while True:
            page = await self._fetch_page(query, offset)
            pages += 1

            for alert in page.alerts:
                batch[alert.id] = alert

            if not page.has_next or page.record_count == 0:
                break

            offset += self.request_limit
            logger.debug(f"Sleeping for {self.rate_limit_delay}s between API calls...")
            await asyncio.sleep(self.rate_limit_delay)

        logger.debug(f"Retrieved {len(batch)} alerts in {pages} page(s)")
        return list(batch.values())

    async def _fetch_page(self, query: str, offset: int):
        # requests is blocking; keep it off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            partial(
                self.client.list_alerts,
                query,
                offset=offset,
                limit=self.request_limit,
                sort="createdAt",
                order="asc",
            ),
        )
