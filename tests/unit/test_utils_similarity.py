"""Unit tests for title similarity measures."""

import pytest

from news_aggregator.utils.similarity import (
    dice_similarity,
    jaccard_similarity,
    levenshtein_similarity,
    normalize_title,
    title_similarity,
)


class TestNormalizeTitle:
    """Test title normalization."""

    def test_lowercases_and_strips_punctuation(self) -> None:
        assert normalize_title("Chrome Zero-Day Exploited!") == "chrome zeroday exploited"

    def test_collapses_whitespace(self) -> None:
        assert normalize_title("  Patch   Tuesday \t fixes  ") == "patch tuesday fixes"

    def test_removes_stop_words(self) -> None:
        assert normalize_title("The patch is out") == "patch"

    def test_keeps_words_when_all_are_stop_words(self) -> None:
        """A title made only of stop words is not reduced to nothing."""
        assert normalize_title("What is it") == "what is it"


class TestMeasures:
    """Test the individual similarity measures."""

    def test_levenshtein(self) -> None:
        assert levenshtein_similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
        assert levenshtein_similarity("", "") == 1.0

    def test_jaccard(self) -> None:
        assert jaccard_similarity("a b", "b c") == pytest.approx(1 / 3)
        assert jaccard_similarity("", "") == 0.0

    def test_dice(self) -> None:
        assert dice_similarity("night", "nacht") == pytest.approx(0.25)
        assert dice_similarity("a", "a") == 0.0


class TestTitleSimilarity:
    """Test the combined title similarity."""

    def test_equal_after_normalization(self) -> None:
        assert title_similarity("Chrome Zero-Day Exploited!", "chrome zeroday exploited") == 1.0

    def test_reworded_headline_scores_at_least_word_overlap(self) -> None:
        score = title_similarity(
            "Microsoft patches Exchange zero-day",
            "Exchange zero-day patched by Microsoft",
        )
        assert score >= 0.6

    def test_small_spelling_difference_is_near_duplicate(self) -> None:
        score = title_similarity(
            "Microsoft fixes Exchange zero-day vulnerability",
            "Microsoft fixes Exchange zero-day vulnerabilities",
        )
        assert score >= 0.9

    def test_unrelated_titles(self) -> None:
        assert title_similarity("Apple releases iPhone", "Ransomware hits hospital") < 0.5

    def test_empty_title_scores_zero(self) -> None:
        assert title_similarity("", "Anything") == 0.0
        assert title_similarity("   ", "   ") == 0.0

    def test_symmetric(self) -> None:
        a, b = "Linux kernel bug fixed", "Kernel bug in Linux gets a fix"
        assert title_similarity(a, b) == title_similarity(b, a)

    def test_non_string_raises(self) -> None:
        with pytest.raises(TypeError):
            title_similarity(None, "title")  # type: ignore[arg-type]
