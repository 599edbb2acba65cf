"""Source adapter interface and shared HTTP helpers."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import ClassVar
from urllib.parse import urljoin

import aiohttp
from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from news_aggregator.constants import (
    DEFAULT_MAX_ARTICLES_PER_SOURCE,
    DEFAULT_PUBLISHED_AT,
    DEFAULT_USER_AGENT,
)
from news_aggregator.models.articles import RawArticle
from news_aggregator.utils.logging import get_logger

logger = get_logger(__name__)


def build_request_headers(user_agent: str = DEFAULT_USER_AGENT) -> dict[str, str]:
    """Browser-like headers sent with every source request."""
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate",
        "DNT": "1",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }


async def fetch_page(session: aiohttp.ClientSession, url: str) -> str:
    """
    Fetch a page body as text.

    Raises:
        aiohttp.ClientError: For HTTP errors
        asyncio.TimeoutError: For timeout
    """
    async with session.get(url) as response:
        response.raise_for_status()
        return await response.text()


class SourceAdapter(ABC):
    """A news source that can fetch its page and turn it into raw articles."""

    kind: ClassVar[str]

    def __init__(
        self,
        name: str,
        url: str,
        category: str,
        max_articles: int = DEFAULT_MAX_ARTICLES_PER_SOURCE,
    ) -> None:
        self.name = name
        self.url = url
        self.category = category
        self.max_articles = max_articles

    @abstractmethod
    async def fetch_and_parse(self, session: aiohttp.ClientSession) -> list[RawArticle]:
        """Fetch the source and return its articles, newest page order preserved."""

    def make_article(
        self,
        title: str,
        link: str,
        summary: str | None,
        published_at: str | None,
        scraped: datetime,
    ) -> RawArticle | None:
        """Build a RawArticle, or None when the entry lacks a title or link."""
        if not title or not link:
            return None
        try:
            return RawArticle(
                title=title,
                link=urljoin(self.url, link),
                summary=summary,
                source=self.name,
                category=self.category,
                published_at=published_at or DEFAULT_PUBLISHED_AT,
                scraped=scraped,
            )
        except ValidationError as e:
            logger.debug(f"Skipping invalid entry in {self.name}: {e}")
            return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, url={self.url!r})"


class HtmlScraperSource(SourceAdapter):
    """Scrapes a listing page using CSS selectors.

    Subclasses set the selectors; comma-separated alternatives pick the first
    match in document order.
    """

    item_selector: ClassVar[str]
    title_selector: ClassVar[str]
    summary_selector: ClassVar[str]
    date_selector: ClassVar[str]

    async def fetch_and_parse(self, session: aiohttp.ClientSession) -> list[RawArticle]:
        html = await fetch_page(session, self.url)
        return self.parse(html, scraped=datetime.now(UTC))

    def parse(self, html: str, scraped: datetime) -> list[RawArticle]:
        soup = BeautifulSoup(html, "html.parser")
        articles: list[RawArticle] = []

        for element in soup.select(self.item_selector)[: self.max_articles]:
            anchor = element.select_one(self.title_selector)
            if anchor is None:
                continue

            article = self.make_article(
                title=_text(anchor),
                link=str(anchor.get("href") or ""),
                summary=_text(element.select_one(self.summary_selector)),
                published_at=_text(element.select_one(self.date_selector)),
                scraped=scraped,
            )
            if article is not None:
                articles.append(article)

        return articles


def _text(element: Tag | None) -> str:
    if element is None:
        return ""
    return " ".join(element.get_text(" ", strip=True).split())
