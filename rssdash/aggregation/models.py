"""Aggregated report models.

Field aliases are the JSON names of ``raw_feeds.json``.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ReportModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class SourceSummary(_ReportModel):
    """Per-source line of the report."""

    id: str = Field(..., description="Source identifier")
    name: str = Field(..., description="Display name")
    name_zh: str = Field("", alias="nameZh")
    category: str = Field("")
    color: str = Field("")
    lang: str = Field("")
    article_count: int = Field(0, alias="articleCount", ge=0)
    error: Optional[str] = Field(None, description="Terminal error, None on success")


class FlatArticle(_ReportModel):
    """An article stamped with the metadata of the source it came from."""

    feed_id: str = Field(..., alias="feedId")
    feed_name: str = Field(..., alias="feedName")
    feed_name_zh: str = Field("", alias="feedNameZh")
    category: str = Field("")
    color: str = Field("")
    lang: str = Field("")
    title: str = Field("")
    link: str = Field("")
    pub_date: str = Field("", alias="pubDate")
    summary: str = Field("")


class AggregateReport(_ReportModel):
    """Result of one complete fetch run."""

    fetched_at: str = Field(..., alias="fetchedAt", description="ISO-8601 completion time")
    feed_count: int = Field(..., alias="feedCount", ge=0)
    success_count: int = Field(..., alias="successCount", ge=0)
    article_count: int = Field(..., alias="articleCount", ge=0)
    feeds: List[SourceSummary] = Field(default_factory=list)
    articles: List[FlatArticle] = Field(default_factory=list)

    @property
    def failed_feeds(self) -> List[SourceSummary]:
        """Feeds that ended with an error."""
        return [feed for feed in self.feeds if feed.error is not None]

    def to_json(self) -> str:
        """Serialize with the interchange field names."""
        return self.model_dump_json(by_alias=True, indent=2)
