"""Feed normalization.

Maps a parsed RSS 2.0, Atom or RDF/RSS 1.0 tree (see ``xml_tree``) onto a
list of ``RawArticle``. Missing or oddly shaped fields degrade to empty
strings; only an unknown document root is an error.
"""

import re
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from .errors import UnrecognizedFormatError
from .models import RawArticle
from .xml_tree import ATTR_PREFIX, TEXT_KEY

SUMMARY_MAX_LENGTH = 500

TAG_PATTERN = re.compile(r"<[^>]+>")

DATE_FIELDS = ("pubDate", "published", "updated", "dc:date")
SUMMARY_FIELDS = ("description", "summary", "content")

HREF = ATTR_PREFIX + "href"
REL = ATTR_PREFIX + "rel"


class FeedShape(str, Enum):
    """Recognized document shapes."""

    RSS = "rss"
    ATOM = "atom"
    RDF = "rdf"


def _is_rss(document: Mapping[str, Any]) -> bool:
    rss = document.get("rss")
    return isinstance(rss, dict) and isinstance(rss.get("channel"), dict)


def _is_atom(document: Mapping[str, Any]) -> bool:
    return isinstance(document.get("feed"), dict)


def _is_rdf(document: Mapping[str, Any]) -> bool:
    return isinstance(document.get("rdf:RDF"), dict)


def _rss_entries(document: Mapping[str, Any]) -> Any:
    return document["rss"]["channel"].get("item")


def _atom_entries(document: Mapping[str, Any]) -> Any:
    return document["feed"].get("entry")


def _rdf_entries(document: Mapping[str, Any]) -> Any:
    # Items are siblings of the channel, not children of it.
    return document["rdf:RDF"].get("item")


# Evaluated in order; the first matching predicate decides the shape.
SHAPES: Sequence[Tuple[FeedShape, Callable[[Mapping[str, Any]], bool], Callable[[Mapping[str, Any]], Any]]] = (
    (FeedShape.RSS, _is_rss, _rss_entries),
    (FeedShape.ATOM, _is_atom, _atom_entries),
    (FeedShape.RDF, _is_rdf, _rdf_entries),
)


def detect_shape(document: Any) -> FeedShape:
    """Return the shape of a parsed document.

    Raises:
        UnrecognizedFormatError: If no known root shape matches.
    """
    if isinstance(document, dict):
        for shape, matches, _ in SHAPES:
            if matches(document):
                return shape
    raise UnrecognizedFormatError("Unrecognized feed format (expected RSS, Atom or RDF)")


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _text(value: Any) -> str:
    """Plain text of a node: the string itself or a wrapped ``#text``."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get(TEXT_KEY), str):
        return value[TEXT_KEY]
    return ""


def _first_present(entry: Mapping[str, Any], fields: Sequence[str]) -> Any:
    for field in fields:
        value = entry.get(field)
        if value:
            return value
    return None


def extract_title(entry: Mapping[str, Any]) -> str:
    return _text(entry.get("title")).strip()


def extract_link(entry: Mapping[str, Any]) -> str:
    """Resolve the entry link from text, an Atom link list or a single href."""
    link = entry.get("link")

    if isinstance(link, str):
        return link

    if isinstance(link, list):
        for candidate in link:
            if isinstance(candidate, dict) and candidate.get(REL) == "alternate" and candidate.get(HREF):
                return candidate[HREF]
        first = link[0] if link else None
        if isinstance(first, dict) and isinstance(first.get(HREF), str):
            return first[HREF]
        return ""

    if isinstance(link, dict) and isinstance(link.get(HREF), str):
        return link[HREF]

    return ""


def extract_pub_date(entry: Mapping[str, Any]) -> str:
    for field in DATE_FIELDS:
        value = _text(entry.get(field))
        if value:
            return value
    return ""


def clean_summary(text: str) -> str:
    """Drop every ``<...>`` span, trim and truncate."""
    return TAG_PATTERN.sub("", text).strip()[:SUMMARY_MAX_LENGTH]


def extract_summary(entry: Mapping[str, Any]) -> str:
    # Structured content (e.g. <summary type="html">) is not unwrapped.
    value = _first_present(entry, SUMMARY_FIELDS)
    if isinstance(value, str):
        return clean_summary(value)
    return ""


def normalize_entry(entry: Any) -> RawArticle:
    """Map one feed entry onto a ``RawArticle``."""
    if not isinstance(entry, dict):
        entry = {}

    return RawArticle(
        title=extract_title(entry),
        link=extract_link(entry),
        pub_date=extract_pub_date(entry),
        summary=extract_summary(entry),
    )


def normalize(document: Dict[str, Any], shape: Optional[FeedShape] = None) -> List[RawArticle]:
    """Extract articles from a parsed feed document.

    Args:
        document: Tree produced by ``parse_xml``.
        shape: Skip detection when the shape is already known.

    Returns:
        One article per entry, in document order.

    Raises:
        UnrecognizedFormatError: If the document is not RSS, Atom or RDF.
    """
    if shape is None:
        shape = detect_shape(document)

    entries_of = next(entries for known, _, entries in SHAPES if known is shape)
    return [normalize_entry(entry) for entry in _as_list(entries_of(document))]
