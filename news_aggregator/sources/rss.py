"""Generic RSS/Atom source."""

from datetime import UTC, datetime

import aiohttp
import feedparser
from bs4 import BeautifulSoup

from news_aggregator.models.articles import RawArticle
from news_aggregator.sources.base import SourceAdapter, fetch_page
from news_aggregator.utils.logging import get_logger

logger = get_logger(__name__)


class RssFeedSource(SourceAdapter):
    """Reads articles from an RSS or Atom feed."""

    kind = "rss"

    async def fetch_and_parse(self, session: aiohttp.ClientSession) -> list[RawArticle]:
        content = await fetch_page(session, self.url)
        return self.parse(content, scraped=datetime.now(UTC))

    def parse(self, content: str, scraped: datetime) -> list[RawArticle]:
        """
        Parse feed content.

        Raises:
            ValueError: For malformed feed
        """
        parsed = feedparser.parse(content)

        if parsed.bozo and not parsed.entries:
            error_msg = str(parsed.get("bozo_exception", "Unknown parse error"))
            logger.warning(f"Malformed feed {self.name}: {error_msg}")
            raise ValueError(f"Malformed feed: {error_msg}")

        articles: list[RawArticle] = []
        for entry in parsed.entries[: self.max_articles]:
            summary = entry.get("summary") or entry.get("description") or ""
            if summary:
                summary = BeautifulSoup(summary, "html.parser").get_text(" ", strip=True)

            article = self.make_article(
                title=entry.get("title", "").strip(),
                link=entry.get("link", ""),
                summary=summary,
                published_at=entry.get("published") or entry.get("updated"),
                scraped=scraped,
            )
            if article is not None:
                articles.append(article)

        return articles
