"""Run command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import Config
from ..pipeline import PipelineOrchestrator

console = Console()


def run_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: $RSSDASH_CONFIG or ~/.config/rssdash/config.yaml)",
    ),
    sources: Optional[Path] = typer.Option(
        None,
        "--sources",
        "-s",
        help="Sources file (JSON array or YAML). Default: from config",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Report output file. Default: from config",
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency",
        help="Sources fetched at once per batch",
        min=1,
    ),
    timeout_ms: Optional[int] = typer.Option(
        None,
        "--timeout-ms",
        help="Per-request timeout in milliseconds",
        min=1,
    ),
    retries: Optional[int] = typer.Option(
        None,
        "--retries",
        help="Retries after a failed attempt",
        min=0,
    ),
) -> None:
    """Fetch every configured feed and write the aggregated JSON report."""
    try:
        config = Config(config_path)
        settings = config.get_fetch_settings(
            concurrency=concurrency,
            timeout_ms=timeout_ms,
            max_retries=retries,
        )
        orchestrator = PipelineOrchestrator(
            settings=settings,
            sources_path=sources or config.sources_path,
            output_path=output or config.output_path,
        )
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        report = orchestrator.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Fetch interrupted by user[/yellow]")
        raise typer.Exit(1)

    if report is None:
        raise typer.Exit(1)
