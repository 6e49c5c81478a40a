"""Feed ingestion errors."""


class FeedError(Exception):
    """Base class for failures that end one fetch attempt."""


class TransportError(FeedError):
    """Network failure, timeout or non-2xx response."""


class FeedParseError(FeedError):
    """Response body is not well-formed XML."""


class UnrecognizedFormatError(FeedError):
    """Parsed document is not RSS 2.0, Atom or RDF."""
