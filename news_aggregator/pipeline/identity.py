"""Identity resolution: turn raw articles into pipeline articles with stable ids."""

import re

from news_aggregator.constants import NO_SUMMARY_PLACEHOLDER, QUICK_SUMMARY_MIN_LENGTH
from news_aggregator.models.articles import Article, RawArticle
from news_aggregator.utils.hash import generate_article_id

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

_CANNED_SUMMARIES: list[tuple[tuple[str, ...], str]] = [
    (
        ("breach", "hack", "vulnerability"),
        "Security incident or vulnerability reported. Click to read full details about "
        "the threat and recommended actions.",
    ),
    (
        ("update", "patch"),
        "Software update or security patch released. Important information about new "
        "features or security fixes.",
    ),
    (
        ("malware", "ransomware"),
        "Malware or ransomware threat detected. Security advisory with prevention and "
        "mitigation strategies.",
    ),
]
_DEFAULT_CANNED_SUMMARY = (
    "Latest technology or cybersecurity news. Click to read the full article for "
    "detailed information."
)


def generate_quick_summary(title: str, summary: str) -> str:
    """Cheap extractive summary used until an AI summary exists.

    Takes the first two sentences of a substantial scraped summary; otherwise
    picks a canned sentence from keywords in the title.
    """
    if summary and summary != NO_SUMMARY_PLACEHOLDER and len(summary) > QUICK_SUMMARY_MIN_LENGTH:
        sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(summary) if s.strip()]
        if sentences:
            return ". ".join(sentences[:2]) + "."

    lowered = title.lower()
    for keywords, canned in _CANNED_SUMMARIES:
        if any(keyword in lowered for keyword in keywords):
            return canned
    return _DEFAULT_CANNED_SUMMARY


def resolve_identity(raw: RawArticle) -> Article:
    """Build a fresh, un-clustered Article from a raw article."""
    return Article(
        **raw.model_dump(),
        id=generate_article_id(raw.title, raw.source, raw.link),
        all_sources=[raw.source],
        quick_summary=generate_quick_summary(raw.title, raw.summary),
    )


def resolve_identities(raw_articles: list[RawArticle]) -> list[Article]:
    """Resolve every raw article, preserving order."""
    return [resolve_identity(raw) for raw in raw_articles]
