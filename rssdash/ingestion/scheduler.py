"""Batched concurrent fetching of all configured sources."""

import asyncio
from typing import List, Optional, Sequence

import httpx

from ..config import FetchSettings, SourceConfig
from .fetcher import Sleep, SourceFetcher, build_client
from .models import SourceResult
from .progress import ProgressReporter


def partition(sources: Sequence[SourceConfig], size: int) -> List[List[SourceConfig]]:
    """Split sources into contiguous groups of at most ``size``."""
    return [list(sources[i:i + size]) for i in range(0, len(sources), size)]


class BatchScheduler:
    """Fetch sources batch by batch.

    Every source in a batch is fetched concurrently; the next batch starts
    only after the whole current batch, retries included, has resolved and
    the inter-batch delay has elapsed. Results keep input order.
    """

    def __init__(
        self,
        settings: Optional[FetchSettings] = None,
        reporter: Optional[ProgressReporter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize batch scheduler."""
        self.settings = settings or FetchSettings()
        self.reporter = reporter or ProgressReporter()
        self.transport = transport
        self.sleep = sleep

    async def run_all(self, sources: Sequence[SourceConfig]) -> List[SourceResult]:
        """Fetch every source and return one result per source, in input order."""
        if not sources:
            return []

        batches = partition(sources, self.settings.concurrency)
        results: List[SourceResult] = []

        async with build_client(self.settings, self.transport) as client:
            fetcher = SourceFetcher(client, self.settings, self.reporter, self.sleep)

            for index, batch in enumerate(batches, start=1):
                self.reporter.batch_started(index, len(batches), batch)

                # gather returns in argument order, whatever the completion order
                batch_results = await asyncio.gather(*(fetcher.fetch(source) for source in batch))
                results.extend(batch_results)

                if index < len(batches):
                    await self.sleep(self.settings.batch_delay_ms / 1000)

        return results

    def run_all_sync(self, sources: Sequence[SourceConfig]) -> List[SourceResult]:
        """Synchronous wrapper for run_all."""
        return asyncio.run(self.run_all(sources))
