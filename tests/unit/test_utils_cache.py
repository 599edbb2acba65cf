"""Unit tests for the summary cache."""

from news_aggregator.models.articles import AISummary
from news_aggregator.utils.cache import SummaryCache


def _summary(text: str = "Overview") -> AISummary:
    return AISummary(overview=text, key_points=["one", "two"])


def test_make_key_normalizes_case_and_punctuation() -> None:
    assert SummaryCache.make_key("Neowin", "Windows 11: Update!") == SummaryCache.make_key(
        "neowin", "windows 11 update"
    )
    assert SummaryCache.make_key("Neowin", "Windows 11: Update!") == "neowin:windows_11_update"


def test_set_and_get() -> None:
    cache = SummaryCache()
    summary = _summary()
    cache.set("Neowin", "Windows update", summary)

    assert cache.get("NEOWIN", "windows update") is summary
    assert cache.get("Neowin", "Other title") is None
    assert len(cache) == 1
    assert SummaryCache.make_key("Neowin", "Windows update") in cache


def test_same_title_different_source_is_separate() -> None:
    cache = SummaryCache()
    cache.set("Neowin", "Windows update", _summary("a"))
    cache.set("AskWoody", "Windows update", _summary("b"))
    assert cache.get("Neowin", "Windows update").overview == "a"
    assert cache.get("AskWoody", "Windows update").overview == "b"


def test_clear() -> None:
    cache = SummaryCache()
    cache.set("Neowin", "Windows update", _summary())
    cache.clear()
    assert len(cache) == 0
    assert cache.get("Neowin", "Windows update") is None


def test_stats_samples_at_most_ten_keys() -> None:
    cache = SummaryCache()
    for i in range(15):
        cache.set("Source", f"Title {i}", _summary())

    stats = cache.stats()
    assert stats["size"] == 15
    assert len(stats["sample_keys"]) == 10
    assert stats["sample_keys"][0] == "source:title_0"
