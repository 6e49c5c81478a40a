"""Per-source progress events and their terminal rendering."""

from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console
from rich.markup import escape

from ..config import SourceConfig


class FetchPhase(str, Enum):
    """Lifecycle phase of one source fetch."""

    STARTED = "started"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ProgressEvent(BaseModel):
    """Progress signal emitted by the fetcher for one source."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_id: str = Field(..., alias="sourceId")
    phase: FetchPhase
    attempt: int = Field(..., ge=1)
    article_count: Optional[int] = Field(None, alias="articleCount")
    error_message: Optional[str] = Field(None, alias="errorMessage")
    retry_delay_ms: Optional[int] = Field(None, alias="retryDelayMs")


class ProgressReporter:
    """Observer of fetch progress. The default implementation ignores everything."""

    def batch_started(self, index: int, total: int, sources: Sequence[SourceConfig]) -> None:
        pass

    def source_event(self, source: SourceConfig, event: ProgressEvent) -> None:
        pass


class RecordingReporter(ProgressReporter):
    """Keeps every event in memory, in emission order."""

    def __init__(self) -> None:
        self.events: List[ProgressEvent] = []
        self.batches: List[List[str]] = []

    def batch_started(self, index: int, total: int, sources: Sequence[SourceConfig]) -> None:
        self.batches.append([s.id for s in sources])

    def source_event(self, source: SourceConfig, event: ProgressEvent) -> None:
        self.events.append(event)


class ConsoleProgressReporter(ProgressReporter):
    """Prints batch headers and per-source outcomes with rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def batch_started(self, index: int, total: int, sources: Sequence[SourceConfig]) -> None:
        names = escape(", ".join(s.label for s in sources))
        self.console.print(f"[bold]── Batch {index}/{total} ({names}) ──[/bold]")

    def source_event(self, source: SourceConfig, event: ProgressEvent) -> None:
        label = escape(source.label)
        error = escape(event.error_message or "")
        if event.phase is FetchPhase.SUCCEEDED:
            self.console.print(
                f"   [green]✅ {label} ({escape(source.id)}): {event.article_count} articles[/green]"
            )
        elif event.phase is FetchPhase.RETRYING:
            delay = (event.retry_delay_ms or 0) / 1000
            self.console.print(
                f"   [yellow]⏳ {label}: retry {event.attempt} in {delay:g}s "
                f"({error})[/yellow]"
            )
        elif event.phase is FetchPhase.FAILED:
            self.console.print(f"   [red]❌ {label} ({escape(source.id)}): {error}[/red]")
