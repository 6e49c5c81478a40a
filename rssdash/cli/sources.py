"""Sources management commands."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import Config, SourceConfig, load_sources, save_sources
from ..ingestion import BatchScheduler, ConsoleProgressReporter

console = Console()
sources_app = typer.Typer(help="Manage feed sources")

SOURCES_OPTION = typer.Option(
    None,
    "--sources",
    "-s",
    help="Sources file. Default: from config",
)


def _config_error(e: Exception) -> typer.Exit:
    console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
    return typer.Exit(1)


def _resolve_path(sources: Optional[Path]) -> Path:
    if sources:
        return sources
    try:
        return Config().sources_path
    except (FileNotFoundError, ValueError) as e:
        raise _config_error(e)


def _load_or_exit(sources_path: Path, missing_ok: bool = False) -> List[SourceConfig]:
    try:
        return load_sources(sources_path)
    except FileNotFoundError:
        if missing_ok:
            return []
        console.print("[red]Sources file not found. Run 'rssdash init' first.[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


@sources_app.command("list")
def sources_list(sources: Optional[Path] = SOURCES_OPTION) -> None:
    """List all configured sources."""
    configured = _load_or_exit(_resolve_path(sources))

    if not configured:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Category", style="magenta")
    table.add_column("Lang", style="green")
    table.add_column("URL", style="blue")

    for source in configured:
        table.add_row(
            source.id,
            source.label,
            source.category,
            source.lang,
            source.url,
        )

    console.print(table)


@sources_app.command("add")
def sources_add(
    source_id: str = typer.Option(..., "--id", help="Unique source id"),
    url: str = typer.Option(..., "--url", "-u", help="Feed URL"),
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    name_zh: str = typer.Option("", "--name-zh", help="Chinese display name"),
    category: str = typer.Option("", "--category", "-c", help="Source category"),
    color: str = typer.Option("", "--color", help="Display colour"),
    lang: str = typer.Option("", "--lang", help="Content language"),
    sources: Optional[Path] = SOURCES_OPTION,
) -> None:
    """Add a new feed source."""
    sources_path = _resolve_path(sources)

    configured = _load_or_exit(sources_path, missing_ok=True)

    if any(s.id == source_id or s.url == url for s in configured):
        console.print(f"[red]Source '{source_id}' or URL already exists.[/red]")
        raise typer.Exit(1)

    configured.append(
        SourceConfig(
            id=source_id,
            url=url,
            name=name,
            name_zh=name_zh,
            category=category,
            color=color,
            lang=lang,
        )
    )
    save_sources(configured, sources_path)

    console.print(f"[green]✅ Added source: {source_id}[/green]")


@sources_app.command("remove")
def sources_remove(
    source_id: str = typer.Argument(..., help="Source id to remove"),
    sources: Optional[Path] = SOURCES_OPTION,
) -> None:
    """Remove a source."""
    sources_path = _resolve_path(sources)
    configured = _load_or_exit(sources_path)

    remaining = [s for s in configured if s.id != source_id]

    if len(remaining) == len(configured):
        console.print(f"[red]Source '{source_id}' not found.[/red]")
        raise typer.Exit(1)

    save_sources(remaining, sources_path)
    console.print(f"[green]✅ Removed source: {source_id}[/green]")


@sources_app.command("test")
def sources_test(
    source_id: Optional[str] = typer.Argument(None, help="Source id to test (or test all)"),
    sources: Optional[Path] = SOURCES_OPTION,
) -> None:
    """Fetch and parse sources, reporting article counts."""
    configured = _load_or_exit(_resolve_path(sources))

    if source_id:
        configured = [s for s in configured if s.id == source_id]
        if not configured:
            console.print(f"[red]Source '{source_id}' not found.[/red]")
            raise typer.Exit(1)

    try:
        settings = Config().get_fetch_settings()
    except (FileNotFoundError, ValueError) as e:
        raise _config_error(e)

    scheduler = BatchScheduler(settings, ConsoleProgressReporter(console))
    results = scheduler.run_all_sync(configured)

    failed = [r for r in results if not r.success]
    console.print(f"\n{len(results) - len(failed)}/{len(results)} sources OK")
    if failed:
        raise typer.Exit(1)
