"""Report aggregation."""

from .aggregator import aggregate, save_report
from .models import AggregateReport, FlatArticle, SourceSummary

__all__ = [
    "AggregateReport",
    "FlatArticle",
    "SourceSummary",
    "aggregate",
    "save_report",
]
