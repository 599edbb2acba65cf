"""Source orchestration: fetch every source concurrently and merge the results."""

import asyncio

import aiohttp
from loguru import logger

from news_aggregator.exceptions import AggregateIngestionError, SourceFetchError
from news_aggregator.models.articles import IngestionResult, RawArticle
from news_aggregator.models.config import IngestionConfig
from news_aggregator.sources.base import SourceAdapter, build_request_headers


async def fetch_single_source(
    source: SourceAdapter,
    session: aiohttp.ClientSession,
    timeout_seconds: float,
) -> list[RawArticle]:
    """
    Fetch one source under its own timeout.

    Args:
        source: Source adapter
        session: Shared HTTP session
        timeout_seconds: Timeout for this source

    Returns:
        Articles produced by the source

    Raises:
        SourceFetchError: On network failure, timeout, parse failure or an empty result
    """
    try:
        articles = await asyncio.wait_for(source.fetch_and_parse(session), timeout=timeout_seconds)
    except TimeoutError as e:
        raise SourceFetchError(source.name, f"timed out after {timeout_seconds}s") from e
    except Exception as e:
        raise SourceFetchError(source.name, str(e) or type(e).__name__) from e

    if not articles:
        raise SourceFetchError(source.name, "no articles found")

    return articles


async def _fetch_source_isolated(
    source: SourceAdapter,
    session: aiohttp.ClientSession,
    timeout_seconds: float,
) -> tuple[SourceAdapter, list[RawArticle] | SourceFetchError]:
    """
    Fetch a source, returning its failure instead of raising.

    Returns:
        Tuple of (source, articles or error)
    """
    try:
        articles = await fetch_single_source(source, session, timeout_seconds)
        logger.info(f"Found {len(articles)} articles from {source.name}")
        return (source, articles)
    except SourceFetchError as e:
        logger.warning(f"Source fetch failed: {e}")
        return (source, e)


async def fetch_all_sources(
    sources: list[SourceAdapter],
    config: IngestionConfig,
    session: aiohttp.ClientSession | None = None,
) -> IngestionResult:
    """
    Fetch every source concurrently and merge their articles.

    Sources run on a bounded pool (one slot per source, capped by
    ``max_concurrent_sources``). A failing or slow source never cancels its
    siblings. Merged articles are sorted newest-scraped first; ties keep the
    order in which sources were listed.

    Args:
        sources: Source adapters in scan order
        config: Ingestion configuration
        session: Optional shared session (one is created and closed otherwise)

    Returns:
        IngestionResult with the merged articles

    Raises:
        AggregateIngestionError: If no source produced any article
    """
    if not sources:
        logger.error("No sources configured")
        raise AggregateIngestionError([])

    logger.info(f"Fetching {len(sources)} sources...")

    semaphore = asyncio.Semaphore(min(len(sources), config.max_concurrent_sources))

    async def fetch_with_semaphore(source: SourceAdapter):
        async with semaphore:
            return await _fetch_source_isolated(source, session, config.timeout_seconds)

    owns_session = session is None
    if owns_session:
        session = aiohttp.ClientSession(
            headers=build_request_headers(config.user_agent),
            timeout=aiohttp.ClientTimeout(total=config.timeout_seconds),
        )

    try:
        source_results = await asyncio.gather(*(fetch_with_semaphore(s) for s in sources))
    finally:
        if owns_session:
            await session.close()

    merged: list[RawArticle] = []
    failures: list[SourceFetchError] = []

    for _source, result in source_results:
        if isinstance(result, SourceFetchError):
            failures.append(result)
            continue
        merged.extend(result)

    sources_ok = len(sources) - len(failures)
    if sources_ok == 0:
        logger.error(f"All {len(sources)} sources failed")
        raise AggregateIngestionError(failures)

    # list.sort is stable, so equal timestamps keep source-scan order
    merged.sort(key=lambda article: article.scraped, reverse=True)

    if failures:
        logger.warning(
            f"Ingestion degraded: {sources_ok}/{len(sources)} sources succeeded",
            failed=[f.source for f in failures],
        )
    logger.info(
        f"Successfully scraped {sources_ok}/{len(sources)} sources "
        f"with {len(merged)} total articles"
    )

    return IngestionResult(
        success=True,
        articles=merged,
        sources_fetched=sources_ok,
        sources_failed=len(failures),
        errors=[str(f) for f in failures],
    )
