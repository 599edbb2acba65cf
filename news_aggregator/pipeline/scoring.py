"""Relevance scoring between a free-text query and an article.

The scorer is a plain strategy object: ``score(query, article)`` returns a
value in [0, 100] and the terms that contributed, with no I/O and no state
beyond its weights.
"""

import re
from typing import Protocol

from news_aggregator.constants import (
    MAX_DISCLOSED_MATCHES,
    MIN_PARTIAL_MATCH_LENGTH,
    NO_SUMMARY_PLACEHOLDER,
    STOP_WORDS,
)
from news_aggregator.models.articles import Article
from news_aggregator.models.config import ScoringWeights
from news_aggregator.models.query import ScoreResult

_WORD_RE = re.compile(r"[\w][\w-]*")

SYNONYMS: dict[str, list[str]] = {
    "ai": ["artificial intelligence", "machine learning", "neural network", "deep learning"],
    "security": ["cybersecurity", "infosec", "security threat", "vulnerability", "exploit"],
    "breach": ["data breach", "hack", "intrusion", "compromise", "leak", "exposure"],
    "malware": ["virus", "trojan", "ransomware", "spyware", "malicious software"],
    "vulnerability": ["security flaw", "exploit", "cve", "zero-day", "bug"],
    "update": ["patch", "upgrade", "fix", "release", "version"],
    "cloud": ["saas", "paas", "iaas", "aws", "azure", "gcp"],
    "crypto": ["cryptocurrency", "blockchain", "bitcoin", "ethereum", "web3"],
    "coding": ["programming", "development", "software engineering"],
    "tool": ["utility", "application", "software", "platform", "service"],
}


class RelevanceScorer(Protocol):
    def score(self, query: str, article: Article) -> ScoreResult: ...


def extract_concepts(query: str) -> list[str]:
    """Significant lowercase words of a query, stop words removed, order kept."""
    words = _WORD_RE.findall(query.lower())
    return list(dict.fromkeys(w for w in words if len(w) >= 2 and w not in STOP_WORDS))


def contains_term(term: str, text: str) -> bool:
    """True when ``term`` occurs in ``text`` as whole words, not inside a longer word."""
    return re.search(rf"(?<![\w-]){re.escape(term)}(?![\w-])", text) is not None


def expand_synonyms(query: str) -> list[str]:
    """Related terms for every concept of the query that has a synonym entry."""
    expanded: list[str] = []
    for concept in extract_concepts(query):
        expanded.extend(SYNONYMS.get(concept, []))
    return list(dict.fromkeys(expanded))


def relevance_label(score: float) -> str:
    if score >= 80:
        return "Highly Relevant"
    if score >= 60:
        return "Very Relevant"
    if score >= 40:
        return "Relevant"
    if score >= 20:
        return "Somewhat Relevant"
    return "Low Relevance"


class KeywordOverlapScorer:
    """Weighted keyword overlap: title hits count more than summary hits.

    Contributions, each capped at the final 100:
    the whole query appearing as whole words, each query concept, each synonym
    of a concept, and each article word that partially overlaps a concept.
    Matches never land inside a longer word, and words shorter than four
    characters take no part in partial overlaps.
    """

    def __init__(self, weights: ScoringWeights | None = None) -> None:
        self.weights = weights or ScoringWeights()

    def score(self, query: str, article: Article) -> ScoreResult:
        normalized_query = " ".join(query.lower().split())
        if not normalized_query:
            return ScoreResult(score=0.0)

        title = article.title.lower()
        summary = "" if article.summary == NO_SUMMARY_PLACEHOLDER else article.summary.lower()
        weights = self.weights
        total = 0.0
        matches: list[str] = []

        if contains_term(normalized_query, title):
            total += weights.exact_title
            matches.append(normalized_query)
        elif contains_term(normalized_query, summary):
            total += weights.exact_summary
            matches.append(normalized_query)

        concepts = extract_concepts(normalized_query)
        for concept in concepts:
            if contains_term(concept, title):
                total += weights.concept_title
            elif contains_term(concept, summary):
                total += weights.concept_summary
            else:
                continue
            matches.append(concept)

        for term in expand_synonyms(normalized_query):
            if term in concepts:
                continue
            if contains_term(term, title) or contains_term(term, summary):
                total += weights.synonym
                matches.append(term)

        article_words = [
            w for w in _WORD_RE.findall(f"{title} {summary}") if len(w) >= MIN_PARTIAL_MATCH_LENGTH
        ]
        for concept in concepts:
            if len(concept) < MIN_PARTIAL_MATCH_LENGTH:
                continue
            for word in article_words:
                if word != concept and (concept in word or word in concept):
                    total += weights.partial

        final = min(100.0, total)
        return ScoreResult(
            score=final,
            matches=list(dict.fromkeys(matches))[:MAX_DISCLOSED_MATCHES],
            relevance=relevance_label(final),
        )
