"""Unit tests for article identity hashing."""

from news_aggregator.constants import ARTICLE_ID_LENGTH
from news_aggregator.utils.hash import generate_article_id


def test_id_is_deterministic() -> None:
    first = generate_article_id("Patch Tuesday", "Neowin", "https://neowin.net/a")
    second = generate_article_id("Patch Tuesday", "Neowin", "https://neowin.net/a")
    assert first == second


def test_id_format() -> None:
    article_id = generate_article_id("Patch Tuesday", "Neowin", "https://neowin.net/a")
    assert len(article_id) == ARTICLE_ID_LENGTH
    assert all(c in "0123456789abcdef" for c in article_id)


def test_id_differs_by_link() -> None:
    """Same title and source on two pages are two articles."""
    a = generate_article_id("Patch Tuesday", "Neowin", "https://neowin.net/a")
    b = generate_article_id("Patch Tuesday", "Neowin", "https://neowin.net/b")
    assert a != b


def test_id_differs_by_source() -> None:
    a = generate_article_id("Patch Tuesday", "Neowin", "https://example.com/x")
    b = generate_article_id("Patch Tuesday", "AskWoody", "https://example.com/x")
    assert a != b


def test_field_boundaries_are_kept() -> None:
    assert generate_article_id("ab", "c", "l") != generate_article_id("a", "bc", "l")


def test_surrounding_whitespace_ignored() -> None:
    assert generate_article_id(" Title ", "Src", "https://x/ ") == generate_article_id(
        "Title", "Src", "https://x/"
    )
