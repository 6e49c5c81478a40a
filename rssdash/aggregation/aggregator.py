"""Combine per-source results into one report."""

from pathlib import Path
from typing import List, Optional, Sequence

import pendulum

from ..ingestion.models import SourceResult
from .models import AggregateReport, FlatArticle, SourceSummary


def summarize_source(result: SourceResult) -> SourceSummary:
    source = result.source
    return SourceSummary(
        id=source.id,
        name=source.name,
        name_zh=source.name_zh,
        category=source.category,
        color=source.color,
        lang=source.lang,
        article_count=result.article_count,
        error=result.error,
    )


def flatten_articles(result: SourceResult) -> List[FlatArticle]:
    """Stamp each article of a result with its source metadata."""
    source = result.source
    return [
        FlatArticle(
            feed_id=source.id,
            feed_name=source.name,
            feed_name_zh=source.name_zh,
            category=source.category,
            color=source.color,
            lang=source.lang,
            title=article.title,
            link=article.link,
            pub_date=article.pub_date,
            summary=article.summary,
        )
        for article in result.articles
    ]


def aggregate(results: Sequence[SourceResult], fetched_at: Optional[str] = None) -> AggregateReport:
    """Build the report for a run.

    Args:
        results: One result per source, in source order.
        fetched_at: Completion timestamp; defaults to now in UTC.

    Returns:
        Report whose ``feeds`` and ``articles`` follow the order of ``results``.
    """
    if fetched_at is None:
        fetched_at = pendulum.now("UTC").to_iso8601_string()

    articles: List[FlatArticle] = []
    for result in results:
        articles.extend(flatten_articles(result))

    return AggregateReport(
        fetched_at=fetched_at,
        feed_count=len(results),
        success_count=sum(1 for r in results if r.success),
        article_count=sum(r.article_count for r in results),
        feeds=[summarize_source(r) for r in results],
        articles=articles,
    )


def save_report(report: AggregateReport, output_path: Path) -> None:
    """Write the report as UTF-8 JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(report.to_json() + "\n", encoding="utf-8")
