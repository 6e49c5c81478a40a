"""Configuration models."""

from pydantic import BaseModel, ConfigDict, Field


class FetchSettings(BaseModel):
    """Network and scheduling parameters for a fetch run."""

    concurrency: int = Field(8, description="Sources fetched at once per batch", ge=1)
    timeout_ms: int = Field(25000, description="Per-request timeout in milliseconds", ge=1)
    max_retries: int = Field(2, description="Retries after the first failed attempt", ge=0)
    retry_backoff_ms: int = Field(
        2000, description="Delay multiplier per retry attempt in milliseconds", ge=0
    )
    batch_delay_ms: int = Field(500, description="Pause between batches in milliseconds", ge=0)
    user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) RSS-Dashboard/1.0",
        description="User-Agent header sent with every request",
    )

    @property
    def timeout_seconds(self) -> float:
        """Timeout as seconds, for httpx and asyncio."""
        return self.timeout_ms / 1000


class OutputSettings(BaseModel):
    """Where the aggregated report is written."""

    path: str = Field("raw_feeds.json", description="Output JSON file")


class ConfigModel(BaseModel):
    """Main configuration model."""

    sources_file: str = Field("feeds.json", description="Source list (JSON or YAML)")
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)


class SourceConfig(BaseModel):
    """One feed source from the sources file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(..., description="Unique source identifier", min_length=1)
    url: str = Field(..., description="Feed URL")
    name: str = Field(..., description="Display name")
    name_zh: str = Field(..., alias="nameZh", description="Chinese display name")
    category: str = Field(..., description="Source category")
    color: str = Field(..., description="Display colour")
    lang: str = Field(..., description="Content language")

    @property
    def label(self) -> str:
        """Name used in terminal output."""
        return self.name_zh or self.name
