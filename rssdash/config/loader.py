"""Configuration loader."""

import json
import os
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .models import ConfigModel, FetchSettings, SourceConfig

console = Console(stderr=True)

CONFIG_ENV = "RSSDASH_CONFIG"


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            env_path = os.environ.get(CONFIG_ENV)
            if env_path:
                config_path = Path(env_path).expanduser()
            else:
                config_path = Path.home() / ".config" / "rssdash" / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, falling back to defaults when no file exists."""
        if self._config is None:
            if self.config_path.exists():
                self._config = load_config(self.config_path)
            else:
                self._config = ConfigModel()
        return self._config

    @property
    def sources_path(self) -> Path:
        """Get sources file path."""
        return Path(self.config.sources_file).expanduser()

    @property
    def output_path(self) -> Path:
        """Get report output path."""
        return Path(self.config.output.path).expanduser()

    def get_fetch_settings(self, **overrides: Any) -> FetchSettings:
        """Get fetch settings with non-None overrides applied."""
        values = self.config.fetch.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return FetchSettings(**values)


def _read_structured(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def _write_structured(data: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
        else:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        config_data = _read_structured(config_path)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid syntax in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_sources(sources_path: Path) -> List[SourceConfig]:
    """Load sources from a JSON array or a YAML file with a ``sources`` list.

    Invalid entries and entries whose id was already seen are skipped with a
    warning; order is preserved.
    """
    if not sources_path.exists():
        raise FileNotFoundError(f"Sources file not found: {sources_path}")

    try:
        sources_data = _read_structured(sources_path)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid syntax in sources file: {e}")

    if isinstance(sources_data, dict):
        sources_data = sources_data.get("sources")
    if not sources_data:
        return []
    if not isinstance(sources_data, list):
        raise ValueError(f"Sources file must contain a list of sources: {sources_path}")

    sources = []
    seen_ids = set()
    for source_data in sources_data:
        try:
            source = SourceConfig.model_validate(source_data)
        except ValidationError as e:
            label = source_data.get("id", "unknown") if isinstance(source_data, dict) else "unknown"
            console.print(f"[yellow]Skipping invalid source {escape(str(label))}: {escape(str(e))}[/yellow]")
            continue

        if source.id in seen_ids:
            console.print(f"[yellow]Skipping duplicate source id: {escape(source.id)}[/yellow]")
            continue

        seen_ids.add(source.id)
        sources.append(source)

    return sources


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    _write_structured(config.model_dump(), config_path)


def save_sources(sources: List[SourceConfig], sources_path: Path) -> None:
    """Save sources, as a JSON array or a YAML ``sources`` mapping by suffix."""
    records = [s.model_dump(by_alias=True) for s in sources]

    if sources_path.suffix.lower() == ".json":
        _write_structured(records, sources_path)
    else:
        _write_structured({"sources": records}, sources_path)
