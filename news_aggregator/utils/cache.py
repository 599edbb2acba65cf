"""In-memory cache for generated article summaries."""

import re

from news_aggregator.constants import CACHE_STATS_SAMPLE_SIZE
from news_aggregator.models.articles import AISummary
from news_aggregator.utils.logging import get_logger

logger = get_logger(__name__)

_KEY_RE = re.compile(r"[^a-z0-9]+")


class SummaryCache:
    """Maps (source, title) to the summary generated for it.

    Entries live for the process lifetime: there is no TTL and no eviction,
    only an explicit clear.
    """

    def __init__(self) -> None:
        self._entries: dict[str, AISummary] = {}

    @staticmethod
    def make_key(source: str, title: str) -> str:
        """
        Build the cache key for an article.

        Case, punctuation and spacing differences between refreshes map to
        the same key.

        Args:
            source: Source name
            title: Article title

        Returns:
            Normalized key
        """
        normalized_source = _KEY_RE.sub("_", source.lower()).strip("_")
        normalized_title = _KEY_RE.sub("_", title.lower()).strip("_")
        return f"{normalized_source}:{normalized_title}"

    def get(self, source: str, title: str) -> AISummary | None:
        return self._entries.get(self.make_key(source, title))

    def set(self, source: str, title: str, summary: AISummary) -> None:
        self._entries[self.make_key(source, title)] = summary

    def clear(self) -> None:
        """Drop every cached summary."""
        count = len(self._entries)
        self._entries.clear()
        logger.info("Summary cache cleared", entries=count)

    def stats(self) -> dict[str, int | list[str]]:
        """Return the cache size and a sample of its keys."""
        return {
            "size": len(self._entries),
            "sample_keys": list(self._entries)[:CACHE_STATS_SAMPLE_SIZE],
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
