"""News source adapters and the static source registry."""

from news_aggregator.constants import DEFAULT_MAX_ARTICLES_PER_SOURCE
from news_aggregator.models.config import SourceConfig, SourcesConfig
from news_aggregator.sources.base import (
    HtmlScraperSource,
    SourceAdapter,
    build_request_headers,
    fetch_page,
)
from news_aggregator.sources.rss import RssFeedSource
from news_aggregator.sources.scrapers import (
    AskWoodySource,
    BleepingComputerSource,
    CybersecurityNewsSource,
    NeowinSource,
)

ADAPTERS: dict[str, type[SourceAdapter]] = {
    adapter.kind: adapter
    for adapter in (
        BleepingComputerSource,
        CybersecurityNewsSource,
        NeowinSource,
        AskWoodySource,
        RssFeedSource,
    )
}

DEFAULT_SOURCES = SourcesConfig(
    sources=[
        SourceConfig(
            name="BleepingComputer",
            url="https://www.bleepingcomputer.com/",
            kind="bleepingcomputer",
            category="Cybersecurity",
        ),
        SourceConfig(
            name="Cybersecurity News",
            url="https://cybersecuritynews.com/",
            kind="cybersecuritynews",
            category="Cybersecurity",
        ),
        SourceConfig(
            name="Neowin",
            url="https://www.neowin.net/",
            kind="neowin",
            category="Technology",
        ),
        SourceConfig(
            name="AskWoody",
            url="https://www.askwoody.com/",
            kind="askwoody",
            category="Technology",
        ),
    ]
)


def build_sources(
    config: SourcesConfig | None = None,
    max_articles: int = DEFAULT_MAX_ARTICLES_PER_SOURCE,
) -> list[SourceAdapter]:
    """Instantiate the adapter for every enabled source, in configuration order."""
    config = config or DEFAULT_SOURCES
    return [
        ADAPTERS[source.kind](
            name=source.name,
            url=source.url,
            category=source.category,
            max_articles=max_articles,
        )
        for source in config.sources
        if source.enabled
    ]


__all__ = [
    "ADAPTERS",
    "DEFAULT_SOURCES",
    "SourceAdapter",
    "HtmlScraperSource",
    "RssFeedSource",
    "BleepingComputerSource",
    "CybersecurityNewsSource",
    "NeowinSource",
    "AskWoodySource",
    "build_sources",
    "build_request_headers",
    "fetch_page",
]
