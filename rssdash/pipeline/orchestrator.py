"""Pipeline orchestrator that runs the fetch-normalize-aggregate pipeline."""

import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..aggregation import AggregateReport, aggregate, save_report
from ..config import FetchSettings, SourceConfig, load_sources
from ..ingestion import BatchScheduler, ConsoleProgressReporter, ProgressReporter, SourceResult

console = Console()


class PipelineStage:
    """One timed step of a pipeline run, with the stats it reports."""

    def __init__(self, name: str, description: str, details: str = ""):
        self.name = name
        self.description = description
        self.details_template = details
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict[str, Any] = {}

    def start(self) -> None:
        self.start_time = time.perf_counter()

    def complete(self, **stats: Any) -> None:
        """Mark the stage done and record its stats."""
        self.end_time = time.perf_counter()
        self.success = True
        self.stats.update(stats)

    def fail(self, error: str) -> None:
        self.end_time = time.perf_counter()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time

    @property
    def details(self) -> str:
        """Summary table cell: the formatted stats, the error, or ``Skipped``."""
        if self.success:
            return self.details_template.format(**self.stats)
        if self.error:
            return escape(self.error)
        return "Skipped"


class PipelineOrchestrator:
    """Load sources, fetch them in batches, aggregate and write the report."""

    def __init__(
        self,
        settings: FetchSettings,
        sources_path: Path,
        output_path: Path,
        scheduler: Optional[BatchScheduler] = None,
        reporter: Optional[ProgressReporter] = None,
    ):
        """Initialize pipeline orchestrator."""
        self.settings = settings
        self.sources_path = sources_path
        self.output_path = output_path
        self.scheduler = scheduler or BatchScheduler(
            settings, reporter or ConsoleProgressReporter(console)
        )
        self.stages = [
            PipelineStage("sources", "Loading sources", "{total_sources} sources"),
            PipelineStage("fetch", "Fetching feeds", "{successful_feeds}/{total_feeds} feeds"),
            PipelineStage("aggregate", "Aggregating articles", "{total_articles} articles"),
            PipelineStage("output", "Writing report", "{path}"),
        ]
        self.report: Optional[AggregateReport] = None
        self.total_start_time: Optional[float] = None

    def _print_summary(self):
        """Print pipeline execution summary."""
        total_duration = time.time() - self.total_start_time if self.total_start_time else 0

        table = Table(title="Pipeline Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        for stage in self.stages:
            status = "[green]✓[/green]" if stage.success else "[red]✗[/red]"
            duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"
            table.add_row(stage.description, status, duration, stage.details)

        console.print("\n")
        console.print(table)

        if self.report is None:
            failed_stages = [s.name for s in self.stages if not s.success]
            console.print(Panel(
                f"[red]❌ Pipeline failed![/red]\n\n"
                f"Failed stages: {', '.join(failed_stages)}\n"
                f"Duration: {total_duration:.1f} seconds",
                style="red",
            ))
            return

        lines = [
            f"📦 Output: {self.output_path}",
            f"   Succeeded: {self.report.success_count}/{self.report.feed_count} sources",
            f"   Total articles: {self.report.article_count}",
            f"   Duration: {total_duration:.1f} seconds",
        ]
        failed = self.report.failed_feeds
        if failed:
            lines.append(f"   ⚠️ Failed ({len(failed)}):")
            for f in failed:
                lines.append(f"      - {escape(f.name_zh or f.name)} ({escape(f.id)}): {escape(f.error or '')}")

        style = "green" if not failed else "yellow"
        console.print(Panel("\n".join(lines), style=style))

    def run(self) -> Optional[AggregateReport]:
        """
        Run the complete pipeline.

        Individual feed failures are recorded in the report and do not fail
        the run.

        Returns:
            The report, or None if a stage failed
        """
        self.total_start_time = time.time()

        console.print(Panel.fit(
            f"📡 RSS Dashboard Fetch\n"
            f"Sources: {self.sources_path} • Concurrency: {self.settings.concurrency}",
            style="bold blue",
        ))

        try:
            self._execute_pipeline()
        finally:
            self._print_summary()

        return self.report

    def _execute_pipeline(self) -> None:
        """Execute the pipeline stages."""
        sources: List[SourceConfig] = []
        results: List[SourceResult] = []

        # Stage 1: Load sources
        stage = self.stages[0]
        stage.start()
        try:
            sources = load_sources(self.sources_path)
            console.print(f"Loaded {len(sources)} sources\n")
            stage.complete(total_sources=len(sources))
        except (FileNotFoundError, ValueError) as e:
            stage.fail(str(e))
            return

        # Stage 2: Fetch feeds; per-source failures are captured in the results
        stage = self.stages[1]
        stage.start()
        results = self.scheduler.run_all_sync(sources)
        stage.complete(
            total_feeds=len(results),
            successful_feeds=sum(1 for r in results if r.success),
        )

        # Stage 3: Aggregate
        stage = self.stages[2]
        stage.start()
        report = aggregate(results)
        stage.complete(total_articles=report.article_count)

        # Stage 4: Write report
        stage = self.stages[3]
        stage.start()
        try:
            save_report(report, self.output_path)
            stage.complete(path=self.output_path)
        except OSError as e:
            stage.fail(str(e))
            return

        self.report = report
