"""AI summary generation with an in-memory cache and rate-limited provider calls.

One EnrichmentService is built at startup (reading the API key once) and
handed to every caller. Two entry points with different failure contracts:

- ``generate_summary`` is a requested action and raises on failure.
- ``generate_batch_summaries`` is best-effort and never raises; failed
  articles are returned without a summary.
"""

from google import genai
from google.genai import types
from loguru import logger
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from news_aggregator.constants import (
    DEFAULT_RETRY_MAX_WAIT,
    DEFAULT_RETRY_MIN_WAIT,
    MAX_KEY_POINTS,
    OVERVIEW_MAX_WORDS,
)
from news_aggregator.exceptions import AIGenerationError, AIServiceUnavailable
from news_aggregator.models.articles import AISummary, Article, BatchSummaryResult
from news_aggregator.models.config import EnrichmentConfig
from news_aggregator.utils.cache import SummaryCache
from news_aggregator.utils.prompt_loader import PromptLoader
from news_aggregator.utils.scheduler import RateLimitedScheduler

OVERVIEW_MARKER = "OVERVIEW:"
BULLET_PREFIXES = ("- ", "• ", "* ")
OVERVIEW_FALLBACK_CHARS = 150


def parse_summary_response(response_text: str) -> AISummary:
    """
    Parse the provider's reply into a structured summary.

    Reads the ``OVERVIEW:`` line and bullet lines; everything else is ignored.
    Without an overview line the start of the reply is used instead.

    Raises:
        ValueError: If the reply is empty
    """
    if not response_text or not response_text.strip():
        raise ValueError("empty response from provider")

    overview = ""
    key_points: list[str] = []

    for line in response_text.splitlines():
        line = line.strip()
        if not line:
            continue
        if line.upper().startswith(OVERVIEW_MARKER):
            overview = line[len(OVERVIEW_MARKER) :].strip()
        elif line.startswith(BULLET_PREFIXES):
            point = line[2:].strip()
            if point:
                key_points.append(point)

    if not overview:
        text = " ".join(response_text.split())
        overview = text if len(text) <= OVERVIEW_FALLBACK_CHARS else (
            text[:OVERVIEW_FALLBACK_CHARS] + "..."
        )

    words = overview.split()
    if len(words) > OVERVIEW_MAX_WORDS:
        overview = " ".join(words[:OVERVIEW_MAX_WORDS])

    return AISummary(overview=overview, key_points=key_points[:MAX_KEY_POINTS])


def select_batch_candidates(
    articles: list[Article],
    max_articles: int,
    prioritize_recent: bool = True,
    prioritize_trending: bool = True,
    min_duplicates: int = 1,
) -> list[Article]:
    """
    Choose which articles a batch run summarizes.

    Trending articles (``duplicate_count >= min_duplicates``) come first, each
    group newest-scraped first; articles already carrying a summary are
    skipped.
    """
    candidates = [a for a in articles if a.ai_summary is None]
    if prioritize_recent:
        candidates.sort(key=lambda a: a.scraped, reverse=True)
    if prioritize_trending:
        # Stable sort keeps recency order inside each group
        candidates.sort(key=lambda a: a.duplicate_count < min_duplicates)
    return candidates[:max_articles]


class EnrichmentService:
    """Generates and caches AI summaries for articles."""

    def __init__(
        self,
        config: EnrichmentConfig,
        api_key: str | None = None,
        cache: SummaryCache | None = None,
        scheduler: RateLimitedScheduler | None = None,
        prompt_loader: PromptLoader | None = None,
    ) -> None:
        self.config = config
        self.cache = cache or SummaryCache()
        self.scheduler = scheduler or RateLimitedScheduler(config.rate_limit_delay_ms / 1000)
        self.prompt_loader = prompt_loader or PromptLoader()
        self.api_calls = 0
        self._client: genai.Client | None = None

        if not config.enabled:
            logger.info("AI summaries disabled by configuration")
        elif not api_key:
            logger.warning("GEMINI_API_KEY not configured; AI summaries disabled")
        else:
            self._client = genai.Client(api_key=api_key)
            logger.info(f"Enrichment service initialized with {config.llm_model}")

    def is_available(self) -> bool:
        return self._client is not None

    def build_prompt(self, article: Article) -> str:
        content = article.summary or article.title
        return self.prompt_loader.format_prompt(
            "summary",
            title=article.title,
            source=article.source,
            content=content,
        )

    async def _call_provider(self, prompt: str) -> str:
        """Send one prompt, retrying transient failures."""
        generation_config = types.GenerateContentConfig(
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_output_tokens,
        )

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.config.retry_attempts),
            wait=wait_exponential(min=DEFAULT_RETRY_MIN_WAIT, max=DEFAULT_RETRY_MAX_WAIT),
            reraise=True,
        ):
            with attempt:
                self.api_calls += 1
                response = await self._client.aio.models.generate_content(
                    model=self.config.llm_model,
                    contents=prompt,
                    config=generation_config,
                )
                text = response.text or ""
                if not text.strip():
                    raise ValueError("empty response from provider")

        return text

    async def generate_summary(self, article: Article) -> AISummary:
        """
        Summarize one article, using the cache when possible.

        Args:
            article: Article to summarize

        Returns:
            The structured summary

        Raises:
            AIServiceUnavailable: If no provider is configured
            AIGenerationError: If the provider call or parsing fails
        """
        if not self.is_available():
            raise AIServiceUnavailable("AI service not available - API key not configured")

        cached = self.cache.get(article.source, article.title)
        if cached is not None:
            logger.debug(f"Returning cached summary for: {article.title[:50]}")
            return cached

        prompt = self.build_prompt(article)

        try:
            summary = await self.scheduler.run(lambda: self._summarize(article, prompt))
        except Exception as e:
            logger.error(f"Error generating summary for '{article.title[:50]}': {e}")
            raise AIGenerationError(article.title, str(e) or type(e).__name__) from e

        return summary

    async def _summarize(self, article: Article, prompt: str) -> AISummary:
        # Overlapping calls for one article may fill the cache while this one waits
        cached = self.cache.get(article.source, article.title)
        if cached is not None:
            logger.debug(f"Summary cached while waiting for: {article.title[:50]}")
            return cached

        response_text = await self._call_provider(prompt)
        summary = parse_summary_response(response_text)
        self.cache.set(article.source, article.title, summary)
        logger.info(f"Generated summary for: {article.title[:50]}")
        return summary

    async def run_batch(
        self,
        articles: list[Article],
        max_articles: int | None = None,
        prioritize_recent: bool | None = None,
        prioritize_trending: bool | None = None,
        min_duplicates: int | None = None,
    ) -> BatchSummaryResult:
        """
        Summarize a prioritized subset of articles, one provider call at a time.

        Selected articles get ``ai_summary`` set in place. Never raises.

        Returns:
            BatchSummaryResult whose ``articles`` is the full input list
        """
        if not self.is_available():
            logger.warning("Batch summaries skipped - API key not configured")
            return BatchSummaryResult(articles=list(articles), skipped_unavailable=True)

        cfg = self.config
        selected = select_batch_candidates(
            articles,
            max_articles=cfg.max_articles if max_articles is None else max_articles,
            prioritize_recent=cfg.prioritize_recent if prioritize_recent is None else prioritize_recent,
            prioritize_trending=(
                cfg.prioritize_trending if prioritize_trending is None else prioritize_trending
            ),
            min_duplicates=cfg.min_duplicates if min_duplicates is None else min_duplicates,
        )

        logger.info(f"Generating summaries for {len(selected)} articles...")

        summarized = 0
        errors: list[str] = []

        for idx, article in enumerate(selected, 1):
            logger.debug(f"Summarizing {idx}/{len(selected)}: {article.title[:50]}")
            try:
                article.ai_summary = await self.generate_summary(article)
                summarized += 1
            except Exception as exc:
                error_msg = f"Failed to summarize '{article.title[:50]}': {exc}"
                logger.error(error_msg)
                errors.append(error_msg)

        logger.info(
            f"Batch complete: {summarized}/{len(selected)} summarized, {len(errors)} failed"
        )

        return BatchSummaryResult(
            articles=list(articles),
            selected=len(selected),
            summarized=summarized,
            failures=len(errors),
            errors=errors,
        )

    async def generate_batch_summaries(
        self,
        articles: list[Article],
        max_articles: int | None = None,
        prioritize_recent: bool | None = None,
        prioritize_trending: bool | None = None,
        min_duplicates: int | None = None,
    ) -> list[Article]:
        """Best-effort batch enrichment; returns the input articles, enriched where possible."""
        result = await self.run_batch(
            articles,
            max_articles=max_articles,
            prioritize_recent=prioritize_recent,
            prioritize_trending=prioritize_trending,
            min_duplicates=min_duplicates,
        )
        return result.articles

    def clear_cache(self) -> None:
        self.cache.clear()

    def get_cache_stats(self) -> dict[str, int | list[str]]:
        return self.cache.stats()
