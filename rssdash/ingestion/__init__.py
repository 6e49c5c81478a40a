"""Feed fetching, parsing and normalization."""

from .errors import FeedError, FeedParseError, TransportError, UnrecognizedFormatError
from .fetcher import SourceFetcher
from .models import RawArticle, SourceResult
from .normalizer import FeedShape, detect_shape, normalize
from .progress import (
    ConsoleProgressReporter,
    FetchPhase,
    ProgressEvent,
    ProgressReporter,
    RecordingReporter,
)
from .scheduler import BatchScheduler
from .xml_tree import parse_xml

__all__ = [
    "BatchScheduler",
    "ConsoleProgressReporter",
    "FeedError",
    "FeedParseError",
    "FeedShape",
    "FetchPhase",
    "ProgressEvent",
    "ProgressReporter",
    "RawArticle",
    "RecordingReporter",
    "SourceFetcher",
    "SourceResult",
    "TransportError",
    "UnrecognizedFormatError",
    "detect_shape",
    "normalize",
    "parse_xml",
]
