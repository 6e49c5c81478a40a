"""Init command implementation."""

from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, OutputSettings, SourceConfig, save_config, save_sources

console = Console()


def create_default_sources() -> List[SourceConfig]:
    """Create a starter set covering RSS 2.0, Atom and RDF feeds."""
    return [
        SourceConfig(
            id="bbc-world",
            url="https://feeds.bbci.co.uk/news/world/rss.xml",
            name="BBC World",
            name_zh="BBC 国际",
            category="news",
            color="#BB1919",
            lang="en",
        ),
        SourceConfig(
            id="hn",
            url="https://hnrss.org/frontpage",
            name="Hacker News",
            name_zh="黑客新闻",
            category="tech",
            color="#FF6600",
            lang="en",
        ),
        SourceConfig(
            id="verge",
            url="https://www.theverge.com/rss/index.xml",
            name="The Verge",
            name_zh="The Verge",
            category="tech",
            color="#5200FF",
            lang="en",
        ),
        SourceConfig(
            id="slashdot",
            url="http://rss.slashdot.org/Slashdot/slashdotMain",
            name="Slashdot",
            name_zh="Slashdot",
            category="tech",
            color="#006666",
            lang="en",
        ),
        SourceConfig(
            id="36kr",
            url="https://36kr.com/feed",
            name="36Kr",
            name_zh="36氪",
            category="business",
            color="#0A7AFF",
            lang="zh",
        ),
    ]


def init_command(
    config_dir: Path = typer.Option(
        Path.home() / ".config" / "rssdash",
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    seed_sources: bool = typer.Option(
        True,
        "--seed-sources/--no-seed-sources",
        help="Seed a starter list of feed sources",
    ),
) -> None:
    """Initialize RSS Dashboard configuration and sources file."""
    console.print(Panel.fit("📡 RSS Dashboard - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    sources_path = config_dir / "feeds.json"

    config = ConfigModel(
        sources_file=str(sources_path),
        output=OutputSettings(path="raw_feeds.json"),
    )

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if seed_sources:
        sources = create_default_sources()
        save_sources(sources, sources_path)
        console.print(f"✅ Created sources: {sources_path} (seeded with {len(sources)} sources)")
    else:
        save_sources([], sources_path)
        console.print(f"✅ Created sources: {sources_path} (empty)")

    console.print(
        Panel(
            f"[green]✅ RSS Dashboard initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Sources: {sources_path}\n\n"
            f"Next steps:\n"
            f"1. Edit sources: [bold]rssdash sources list[/bold]\n"
            f"2. Run: [bold]rssdash run[/bold]",
            style="green",
        )
    )
