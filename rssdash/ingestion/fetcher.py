"""Single-source feed fetcher with retry and linear backoff."""

import asyncio
from typing import Awaitable, Callable, List, Optional

import httpx
from rich.console import Console

from ..config import FetchSettings, SourceConfig
from .errors import TransportError
from .models import RawArticle, SourceResult
from .normalizer import normalize
from .progress import FetchPhase, ProgressEvent, ProgressReporter
from .xml_tree import parse_xml

Sleep = Callable[[float], Awaitable[None]]

console = Console(stderr=True)


def build_client(settings: FetchSettings, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    """Create the HTTP client shared by all fetches of a run."""
    return httpx.AsyncClient(
        timeout=settings.timeout_seconds,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
        transport=transport,
    )


def _error_message(error: Exception) -> str:
    message = str(error)
    return message if message else type(error).__name__


class SourceFetcher:
    """Fetch, parse and normalize one feed source at a time."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Optional[FetchSettings] = None,
        reporter: Optional[ProgressReporter] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize source fetcher.

        Args:
            client: Shared HTTP client.
            settings: Timeout and retry parameters.
            reporter: Receives per-source progress events.
            sleep: Awaitable used for backoff delays, in seconds.
        """
        self.client = client
        self.settings = settings or FetchSettings()
        self.reporter = reporter or ProgressReporter()
        self.sleep = sleep

    def retry_delay_ms(self, retry: int) -> int:
        """Delay before the given retry (1-based)."""
        return retry * self.settings.retry_backoff_ms

    async def fetch(self, source: SourceConfig) -> SourceResult:
        """Fetch a source, retrying on any failure. Never raises."""
        max_attempts = self.settings.max_retries + 1
        last_error = ""

        self._emit(source, FetchPhase.STARTED, attempt=1)

        for attempt in range(1, max_attempts + 1):
            try:
                articles = await self._attempt(source)
            except Exception as e:
                last_error = _error_message(e)
                if attempt < max_attempts:
                    delay_ms = self.retry_delay_ms(attempt)
                    self._emit(
                        source,
                        FetchPhase.RETRYING,
                        attempt=attempt,
                        error_message=last_error,
                        retry_delay_ms=delay_ms,
                    )
                    await self.sleep(delay_ms / 1000)
                continue

            self._emit(source, FetchPhase.SUCCEEDED, attempt=attempt, article_count=len(articles))
            return SourceResult(source=source, articles=articles, error=None)

        self._emit(source, FetchPhase.FAILED, attempt=max_attempts, error_message=last_error)
        return SourceResult(source=source, articles=[], error=last_error)

    async def _attempt(self, source: SourceConfig) -> List[RawArticle]:
        """One fetch attempt bounded by the configured timeout."""
        try:
            body = await asyncio.wait_for(self._download(source.url), self.settings.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise TransportError(f"Timed out after {self.settings.timeout_ms}ms") from e

        return normalize(parse_xml(body))

    async def _download(self, url: str) -> str:
        try:
            response = await self.client.get(url)
        except httpx.TimeoutException as e:
            raise TransportError(f"Timed out after {self.settings.timeout_ms}ms") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{type(e).__name__}: {_error_message(e)}") from e

        if not response.is_success:
            raise TransportError(f"HTTP {response.status_code}")

        return response.text

    def _emit(self, source: SourceConfig, phase: FetchPhase, **fields) -> None:
        """Deliver a progress event; reporter failures never affect the fetch."""
        event = ProgressEvent(source_id=source.id, phase=phase, **fields)
        try:
            self.reporter.source_event(source, event)
        except Exception as e:
            console.print(f"Progress reporter failed on {phase.value} for {source.id}: {e!r}", markup=False)
