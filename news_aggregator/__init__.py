"""Multi-source news aggregation with near-duplicate clustering, search and AI summaries."""

__version__ = "1.0.0"
