"""Data models for ingestion."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import SourceConfig


class RawArticle(BaseModel):
    """One feed entry mapped to the common article shape."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field("", description="Trimmed title")
    link: str = Field("", description="Article URL, empty if unresolved")
    pub_date: str = Field("", alias="pubDate", description="Source-native date string")
    summary: str = Field("", description="Tag-stripped summary, at most 500 characters")


class SourceResult(BaseModel):
    """Outcome of fetching one source."""

    model_config = ConfigDict(frozen=True)

    source: SourceConfig = Field(..., description="Source that was fetched")
    articles: List[RawArticle] = Field(default_factory=list, description="Normalized entries")
    error: Optional[str] = Field(None, description="Last error message if every attempt failed")

    @property
    def success(self) -> bool:
        """Whether the fetch eventually succeeded."""
        return self.error is None

    @property
    def article_count(self) -> int:
        """Number of normalized entries."""
        return len(self.articles)
