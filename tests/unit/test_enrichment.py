"""Unit tests for AI summary enrichment."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from news_aggregator.exceptions import AIGenerationError, AIServiceUnavailable
from news_aggregator.models.articles import AISummary
from news_aggregator.models.config import EnrichmentConfig
from news_aggregator.pipeline.enrichment import (
    EnrichmentService,
    parse_summary_response,
    select_batch_candidates,
)

VALID_RESPONSE = """OVERVIEW: Google patched an actively exploited Chrome zero day.
KEY POINTS:
- The flaw affects the V8 engine
- Exploitation was seen in the wild
- Users should update to the latest version
"""


def _response(text: str) -> MagicMock:
    response = MagicMock()
    response.text = text
    return response


def _service(config: EnrichmentConfig, side_effect=None) -> tuple[EnrichmentService, AsyncMock]:
    """Service whose provider client is mocked."""
    with patch("google.genai.Client") as mock_client_class:
        mock_client = mock_client_class.return_value
        generate = AsyncMock(return_value=_response(VALID_RESPONSE), side_effect=side_effect)
        mock_client.aio.models.generate_content = generate
        service = EnrichmentService(config, api_key="test-key")
    return service, generate


class TestParseSummaryResponse:
    """Test parsing of provider replies."""

    def test_valid_response(self) -> None:
        summary = parse_summary_response(VALID_RESPONSE)
        assert summary.overview == "Google patched an actively exploited Chrome zero day."
        assert summary.key_points == [
            "The flaw affects the V8 engine",
            "Exploitation was seen in the wild",
            "Users should update to the latest version",
        ]

    def test_alternative_bullets(self) -> None:
        summary = parse_summary_response("OVERVIEW: Short.\n• first\n* second")
        assert summary.key_points == ["first", "second"]

    def test_key_points_capped_at_four(self) -> None:
        text = "OVERVIEW: x\n" + "\n".join(f"- point {i}" for i in range(6))
        assert len(parse_summary_response(text).key_points) == 4

    def test_overview_capped_at_thirty_words(self) -> None:
        text = "OVERVIEW: " + " ".join(f"w{i}" for i in range(40))
        assert len(parse_summary_response(text).overview.split()) == 30

    def test_missing_overview_uses_reply_start(self) -> None:
        text = "Plain reply without any markers. " * 10
        summary = parse_summary_response(text)
        assert summary.overview.endswith("...")
        assert summary.overview.startswith("Plain reply without any markers.")

    def test_empty_reply_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_summary_response("   ")


class TestSelectBatchCandidates:
    """Test batch prioritization."""

    def test_trending_first_then_recent(self, article_factory) -> None:
        old_trending = article_factory("Old trending story", minutes=0)
        old_trending.duplicate_count = 2
        newest = article_factory("Newest story", minutes=50)
        middle = article_factory("Middle story", minutes=25)

        selected = select_batch_candidates([middle, old_trending, newest], max_articles=10)

        assert [a.title for a in selected] == ["Old trending story", "Newest story", "Middle story"]

    def test_trending_uses_configured_minimum(self, article_factory) -> None:
        one_copy = article_factory("Story with one duplicate", minutes=0)
        one_copy.duplicate_count = 1
        three_copies = article_factory("Story with three duplicates", minutes=10)
        three_copies.duplicate_count = 3
        newest = article_factory("Newest story", minutes=50)

        selected = select_batch_candidates(
            [one_copy, three_copies, newest], max_articles=10, min_duplicates=2
        )

        assert [a.title for a in selected] == [
            "Story with three duplicates",
            "Newest story",
            "Story with one duplicate",
        ]

    def test_skips_already_summarized(self, article_factory) -> None:
        done = article_factory("Done story")
        done.ai_summary = AISummary(overview="Already done")
        pending = article_factory("Pending story")
        assert select_batch_candidates([done, pending], max_articles=10) == [pending]

    def test_max_articles(self, sample_articles) -> None:
        assert len(select_batch_candidates(sample_articles, max_articles=2)) == 2

    def test_no_prioritization_keeps_input_order(self, sample_articles) -> None:
        reordered = list(reversed(sample_articles))
        selected = select_batch_candidates(
            reordered, max_articles=10, prioritize_recent=False, prioritize_trending=False
        )
        assert selected == reordered


class TestEnrichmentService:
    """Test summary generation against a mocked provider."""

    def test_unavailable_without_api_key(self, enrichment_config) -> None:
        assert EnrichmentService(enrichment_config, api_key=None).is_available() is False

    def test_unavailable_when_disabled(self) -> None:
        service = EnrichmentService(EnrichmentConfig(enabled=False), api_key="test-key")
        assert service.is_available() is False

    def test_prompt_contains_article(self, enrichment_config, sample_articles) -> None:
        service = EnrichmentService(enrichment_config, api_key=None)
        prompt = service.build_prompt(sample_articles[0])
        assert sample_articles[0].title in prompt
        assert "BleepingComputer" in prompt
        assert "OVERVIEW:" in prompt

    @pytest.mark.asyncio
    async def test_generate_summary(self, enrichment_config, sample_articles) -> None:
        service, generate = _service(enrichment_config)

        summary = await service.generate_summary(sample_articles[0])

        assert summary.overview.startswith("Google patched")
        assert len(summary.key_points) == 3
        generate.assert_awaited_once()
        assert generate.await_args.kwargs["model"] == enrichment_config.llm_model

    @pytest.mark.asyncio
    async def test_cache_hit_makes_one_external_call(
        self, enrichment_config, sample_articles
    ) -> None:
        service, generate = _service(enrichment_config)

        first = await service.generate_summary(sample_articles[0])
        second = await service.generate_summary(sample_articles[0])

        assert first == second
        assert generate.await_count == 1
        assert service.api_calls == 1
        assert service.get_cache_stats()["size"] == 1

    @pytest.mark.asyncio
    async def test_overlapping_calls_make_one_external_call(
        self, enrichment_config, sample_articles
    ) -> None:
        async def slow_reply(**kwargs) -> MagicMock:
            await asyncio.sleep(0.01)
            return _response(VALID_RESPONSE)

        service, generate = _service(enrichment_config, side_effect=slow_reply)

        first, second = await asyncio.gather(
            service.generate_summary(sample_articles[0]),
            service.generate_summary(sample_articles[0]),
        )

        assert first == second
        assert generate.await_count == 1
        assert service.api_calls == 1

    @pytest.mark.asyncio
    async def test_clear_cache_forces_new_call(self, enrichment_config, sample_articles) -> None:
        service, generate = _service(enrichment_config)

        await service.generate_summary(sample_articles[0])
        service.clear_cache()
        await service.generate_summary(sample_articles[0])

        assert generate.await_count == 2

    @pytest.mark.asyncio
    async def test_generate_summary_unavailable_raises(
        self, enrichment_config, sample_articles
    ) -> None:
        service = EnrichmentService(enrichment_config, api_key=None)
        with pytest.raises(AIServiceUnavailable):
            await service.generate_summary(sample_articles[0])

    @pytest.mark.asyncio
    async def test_provider_failure_raises_generation_error(
        self, enrichment_config, sample_articles
    ) -> None:
        service, _generate = _service(enrichment_config, side_effect=Exception("quota exceeded"))

        with pytest.raises(AIGenerationError, match="quota exceeded"):
            await service.generate_summary(sample_articles[0])
        assert service.get_cache_stats()["size"] == 0

    @pytest.mark.asyncio
    async def test_empty_provider_reply_is_a_failure(
        self, enrichment_config, sample_articles
    ) -> None:
        service, _generate = _service(enrichment_config, side_effect=[_response("")])

        with pytest.raises(AIGenerationError):
            await service.generate_summary(sample_articles[0])

    @pytest.mark.asyncio
    async def test_batch_unavailable_returns_input_unchanged(
        self, enrichment_config, sample_articles
    ) -> None:
        service = EnrichmentService(enrichment_config, api_key=None)

        result = await service.run_batch(sample_articles)

        assert result.skipped_unavailable is True
        assert result.articles == sample_articles
        assert all(a.ai_summary is None for a in result.articles)

    @pytest.mark.asyncio
    async def test_batch_partial_failure_never_raises(
        self, enrichment_config, sample_articles
    ) -> None:
        side_effect = [
            _response(VALID_RESPONSE),
            Exception("API failed"),
            _response(VALID_RESPONSE),
        ]
        service, generate = _service(enrichment_config, side_effect=side_effect)

        result = await service.run_batch(sample_articles, max_articles=3)

        assert result.selected == 3
        assert result.summarized == 2
        assert result.failures == 1
        assert len(result.errors) == 1
        assert len(result.articles) == len(sample_articles)
        assert sum(1 for a in result.articles if a.ai_summary is not None) == 2
        assert generate.await_count == 3

    @pytest.mark.asyncio
    async def test_generate_batch_summaries_returns_articles(
        self, enrichment_config, sample_articles
    ) -> None:
        service, _generate = _service(enrichment_config)

        articles = await service.generate_batch_summaries(sample_articles, max_articles=2)

        assert articles == sample_articles
        assert sum(1 for a in articles if a.ai_summary is not None) == 2
