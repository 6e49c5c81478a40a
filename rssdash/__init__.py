"""RSS Dashboard: concurrent feed fetching, normalization and aggregation."""

__version__ = "0.1.0"
