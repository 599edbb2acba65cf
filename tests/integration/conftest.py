"""Fixtures for integration tests."""

import asyncio
from datetime import UTC, datetime, timedelta

import aiohttp
import pytest

from news_aggregator.models.articles import RawArticle
from news_aggregator.sources.base import SourceAdapter

BASE_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


class FakeSource(SourceAdapter):
    """In-memory source with controllable latency and failure."""

    kind = "fake"

    def __init__(
        self,
        name: str,
        titles: list[str] | None = None,
        minutes: int = 0,
        delay: float = 0.0,
        error: Exception | None = None,
        category: str = "Cybersecurity",
    ) -> None:
        super().__init__(name, f"https://{name.lower().replace(' ', '')}.example.com/", category)
        self.titles = titles or []
        self.minutes = minutes
        self.delay = delay
        self.error = error
        self.calls = 0
        self.tracker: dict[str, int] | None = None

    async def fetch_and_parse(self, session: aiohttp.ClientSession) -> list[RawArticle]:
        self.calls += 1
        if self.tracker is not None:
            self.tracker["active"] += 1
            self.tracker["peak"] = max(self.tracker["peak"], self.tracker["active"])
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
            scraped = BASE_TIME + timedelta(minutes=self.minutes)
            return [
                RawArticle(
                    title=title,
                    link=f"{self.url}{i}",
                    summary=f"{title}. Reported by {self.name} with further details below.",
                    source=self.name,
                    category=self.category,
                    scraped=scraped,
                )
                for i, title in enumerate(self.titles)
            ]
        finally:
            if self.tracker is not None:
                self.tracker["active"] -= 1


@pytest.fixture
def fake_source():
    """Factory for in-memory sources."""
    return FakeSource
