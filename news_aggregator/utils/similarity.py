"""Title similarity measures used for near-duplicate detection.

All functions are pure and operate on plain strings so they can be tested
and swapped independently of the pipeline.
"""

import re
from collections import Counter

from rapidfuzz.distance import Levenshtein

from news_aggregator.constants import STOP_WORDS

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Lowercase, strip punctuation, collapse whitespace and drop stop words.

    If every word is a stop word the words are kept, so short titles such as
    "What is it" still compare meaningfully.
    """
    normalized = _PUNCTUATION_RE.sub("", title.lower())
    words = _WHITESPACE_RE.sub(" ", normalized).strip().split()
    content_words = [w for w in words if w not in STOP_WORDS]
    return " ".join(content_words or words)


def levenshtein_similarity(str1: str, str2: str) -> float:
    """Edit-distance similarity in [0, 1]."""
    if not str1 and not str2:
        return 1.0
    return Levenshtein.normalized_similarity(str1, str2)


def jaccard_similarity(str1: str, str2: str) -> float:
    """Word-set overlap in [0, 1]."""
    words1 = set(str1.split())
    words2 = set(str2.split())
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


def _bigrams(text: str) -> Counter[str]:
    return Counter(text[i : i + 2] for i in range(len(text) - 1))


def dice_similarity(str1: str, str2: str) -> float:
    """Sørensen-Dice coefficient over character bigrams in [0, 1]."""
    bigrams1 = _bigrams(str1)
    bigrams2 = _bigrams(str2)
    total = sum(bigrams1.values()) + sum(bigrams2.values())
    if not bigrams1 or not bigrams2:
        return 0.0
    overlap = sum((bigrams1 & bigrams2).values())
    return 2 * overlap / total


def title_similarity(title1: str, title2: str) -> float:
    """
    Similarity of two article titles.

    Titles are normalized first, then the best of edit-distance, word
    overlap and bigram overlap is taken, so reworded headlines and
    headlines with small spelling differences both score high.

    Args:
        title1: First title
        title2: Second title

    Returns:
        Similarity in [0, 1]

    Raises:
        TypeError: If either title is not a string
    """
    if not isinstance(title1, str) or not isinstance(title2, str):
        raise TypeError("titles must be strings")
    if not title1.strip() or not title2.strip():
        return 0.0

    norm1 = normalize_title(title1)
    norm2 = normalize_title(title2)

    if norm1 == norm2:
        return 1.0

    return max(
        levenshtein_similarity(norm1, norm2),
        jaccard_similarity(norm1, norm2),
        dice_similarity(norm1, norm2),
    )
