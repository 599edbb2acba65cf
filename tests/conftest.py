"""Shared pytest fixtures and configuration."""

from datetime import UTC, datetime, timedelta

import pytest

from news_aggregator.models.articles import Article, RawArticle
from news_aggregator.models.config import DedupConfig, EnrichmentConfig
from news_aggregator.pipeline.identity import resolve_identity

BASE_TIME = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def make_article(
    title: str,
    source: str = "BleepingComputer",
    minutes: int = 0,
    summary: str | None = None,
    category: str = "Cybersecurity",
    link: str | None = None,
) -> Article:
    """Build a resolved article scraped ``minutes`` after BASE_TIME."""
    slug = "-".join(title.lower().split())[:60]
    raw = RawArticle(
        title=title,
        link=link or f"https://{source.lower().replace(' ', '')}.example.com/{slug}",
        summary=summary,
        source=source,
        category=category,
        scraped=BASE_TIME + timedelta(minutes=minutes),
    )
    return resolve_identity(raw)


@pytest.fixture
def dedup_config() -> DedupConfig:
    """Deduplication configuration with default thresholds."""
    return DedupConfig(enabled=True, title_similarity_threshold=0.75, time_proximity_hours=6)


@pytest.fixture
def enrichment_config() -> EnrichmentConfig:
    """Enrichment configuration with no retries and no spacing."""
    return EnrichmentConfig(enabled=True, retry_attempts=1, rate_limit_delay_ms=0)


@pytest.fixture
def sample_articles() -> list[Article]:
    """A small mixed corpus, newest first."""
    return [
        make_article(
            "Critical zero day exploit hits Chrome users",
            source="BleepingComputer",
            minutes=50,
            summary="Google patched a zero day vulnerability actively exploited in the wild.",
        ),
        make_article(
            "Ransomware gang claims breach of hospital network",
            source="Cybersecurity News",
            minutes=40,
            summary="The ransomware group published stolen patient records on its leak site.",
        ),
        make_article(
            "Windows 11 update brings new AI features",
            source="Neowin",
            minutes=30,
            summary="Microsoft is rolling out Copilot improvements to Windows Insiders.",
            category="Technology",
        ),
        make_article(
            "Linux kernel patch fixes privilege escalation bug",
            source="AskWoody",
            minutes=20,
            summary="A local privilege escalation flaw in the Linux kernel was fixed.",
            category="Technology",
        ),
        make_article(
            "AI chatbot data breach exposes user conversations",
            source="BleepingComputer",
            minutes=10,
            summary="Researchers found an exposed database holding millions of chat logs.",
        ),
    ]


@pytest.fixture
def article_factory():
    """Factory for resolved articles with controllable scrape times."""
    return make_article
