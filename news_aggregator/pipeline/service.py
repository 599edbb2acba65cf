"""Process-level pipeline: owns the in-memory article set and serializes refreshes."""

import asyncio
from datetime import UTC, datetime

from loguru import logger

from news_aggregator.exceptions import RefreshInProgressError
from news_aggregator.models.articles import AISummary, Article, DeduplicationStats
from news_aggregator.models.config import PipelineConfig, SourcesConfig
from news_aggregator.models.query import SearchMode, SearchResult
from news_aggregator.pipeline.dedup import deduplicate_articles
from news_aggregator.pipeline.enrichment import EnrichmentService
from news_aggregator.pipeline.identity import resolve_identities
from news_aggregator.pipeline.ingestion import fetch_all_sources
from news_aggregator.pipeline.query import apply_query, find_similar, suggest_terms
from news_aggregator.pipeline.scoring import KeywordOverlapScorer
from news_aggregator.sources import SourceAdapter, build_sources


class NewsPipeline:
    """Entry point used by the serving layer.

    A refresh (fetch, resolve ids, deduplicate) is a critical section: a
    second refresh requested while one runs is rejected. Queries read the
    current article set; the set is replaced wholesale when a refresh ends.
    """

    def __init__(
        self,
        config: PipelineConfig,
        sources: list[SourceAdapter],
        enrichment: EnrichmentService,
    ) -> None:
        self.config = config
        self.sources = sources
        self.enrichment = enrichment
        self.scorer = KeywordOverlapScorer(config.search.weights)
        self.articles: list[Article] = []
        self.last_refresh: datetime | None = None
        self.last_stats: DeduplicationStats | None = None
        self._refresh_lock = asyncio.Lock()

    @property
    def refreshing(self) -> bool:
        return self._refresh_lock.locked()

    async def ingest_all(self) -> list[Article]:
        """
        Run a full refresh and return the canonical article set.

        Raises:
            RefreshInProgressError: If another refresh is running
            AggregateIngestionError: If every source failed
        """
        if self._refresh_lock.locked():
            logger.warning("Refresh already in progress, rejecting new trigger")
            raise RefreshInProgressError("A refresh is already running")

        async with self._refresh_lock:
            started = datetime.now(UTC)
            logger.info("Starting news refresh...")

            ingestion = await fetch_all_sources(self.sources, self.config.ingestion)
            articles = resolve_identities(ingestion.articles)
            dedup = deduplicate_articles(articles, self.config.dedup)
            canonical = dedup.articles

            self._attach_cached_summaries(canonical)
            if self.config.enrichment.enrich_on_refresh:
                canonical = await self.enrichment.generate_batch_summaries(canonical)

            self.articles = canonical
            self.last_refresh = started
            self.last_stats = dedup.stats

            logger.info(
                f"News refresh completed with {len(canonical)} articles",
                sources_ok=ingestion.sources_fetched,
                sources_failed=ingestion.sources_failed,
                dedup_fail_open=dedup.fail_open,
            )
            return canonical

    def _attach_cached_summaries(self, articles: list[Article]) -> None:
        for article in articles:
            if article.ai_summary is None:
                article.ai_summary = self.enrichment.cache.get(article.source, article.title)

    def get_article(self, article_id: str) -> Article | None:
        return next((a for a in self.articles if a.id == article_id), None)

    def search(self, query: str, mode: SearchMode | str | None = None) -> list[Article]:
        return apply_query(
            query,
            self.articles,
            mode=mode or self.config.search.default_mode,
            scorer=self.scorer,
            min_score=self.config.search.min_semantic_score,
        )

    def find_similar(self, article: Article, k: int | None = None) -> list[SearchResult]:
        return find_similar(
            article,
            self.articles,
            k=self.config.search.similar_limit if k is None else k,
            scorer=self.scorer,
            min_score=self.config.search.min_similar_score,
        )

    def suggest(self, partial_query: str) -> list[str]:
        return suggest_terms(partial_query, self.articles)

    async def generate_summary(self, article: Article) -> AISummary:
        """Summarize one article and attach the result to it. Raises on failure."""
        summary = await self.enrichment.generate_summary(article)
        article.ai_summary = summary
        return summary

    async def generate_batch_summaries(
        self,
        articles: list[Article] | None = None,
        max_articles: int | None = None,
        prioritize_recent: bool | None = None,
        prioritize_trending: bool | None = None,
        min_duplicates: int | None = None,
    ) -> list[Article]:
        return await self.enrichment.generate_batch_summaries(
            self.articles if articles is None else articles,
            max_articles=max_articles,
            prioritize_recent=prioritize_recent,
            prioritize_trending=prioritize_trending,
            min_duplicates=min_duplicates,
        )

    def clear_summary_cache(self) -> None:
        self.enrichment.clear_cache()

    def get_cache_stats(self) -> dict[str, int | list[str]]:
        return self.enrichment.get_cache_stats()


def build_pipeline(
    config: PipelineConfig,
    sources_config: SourcesConfig | None = None,
    api_key: str | None = None,
) -> NewsPipeline:
    """Wire sources and the enrichment service into a pipeline."""
    sources = build_sources(sources_config, config.ingestion.max_articles_per_source)
    enrichment = EnrichmentService(config.enrichment, api_key=api_key)
    logger.info(f"Pipeline built with {len(sources)} sources")
    return NewsPipeline(config, sources, enrichment)
