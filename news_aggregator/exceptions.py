"""Exception hierarchy for the news aggregation pipeline."""


class NewsAggregatorError(Exception):
    """Base exception for pipeline errors."""


class SourceFetchError(NewsAggregatorError):
    """A single source could not be fetched or parsed. Recovered by the orchestrator."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


class AggregateIngestionError(NewsAggregatorError):
    """Every configured source failed during a refresh."""

    def __init__(self, failures: list[SourceFetchError]):
        self.failures = failures
        details = "; ".join(str(f) for f in failures) or "no sources configured"
        super().__init__(
            f"Failed to fetch news from all sources ({details}). "
            "Check network connection and source availability."
        )


class DeduplicationError(NewsAggregatorError):
    """Similarity computation failed; deduplication falls back to no merging."""


class QueryParseDegenerate(NewsAggregatorError):
    """Malformed search syntax.

    Never raised by the parser, which degrades to literal-token matching instead.
    Kept so callers can name the condition when reporting it.
    """


class AIServiceUnavailable(NewsAggregatorError):
    """The LLM provider is not configured."""


class AIGenerationError(NewsAggregatorError):
    """Summary generation failed for one article."""

    def __init__(self, title: str, message: str):
        self.title = title
        super().__init__(f"Failed to summarize '{title[:50]}': {message}")


class RefreshInProgressError(NewsAggregatorError):
    """A refresh was triggered while another one is still running."""
