"""Configuration management for RSS Dashboard."""

from .loader import Config, load_config, load_sources, save_config, save_sources
from .models import ConfigModel, FetchSettings, OutputSettings, SourceConfig

__all__ = [
    "Config",
    "ConfigModel",
    "FetchSettings",
    "OutputSettings",
    "SourceConfig",
    "load_config",
    "load_sources",
    "save_config",
    "save_sources",
]
