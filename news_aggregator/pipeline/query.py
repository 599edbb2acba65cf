"""Search over the canonical article set.

Grammar, applied to the lowercased text of an article:

    "zero day"      exact phrase, must appear as a substring
    category:tech   category filter, short tag mapped to the canonical name
    +term           must include
    -term           must exclude, any match disqualifies
    term            must include (bare terms are ANDed, never ORed)

Malformed input never raises: a stray quote is dropped and the word kept,
an operator with nothing after it is searched for literally.
"""

import re
from collections import Counter

from loguru import logger

from news_aggregator.constants import (
    DEFAULT_SIMILAR_LIMIT,
    MAX_SEARCH_SUGGESTIONS,
    MIN_SEMANTIC_SCORE,
    MIN_SIMILAR_SCORE,
    NO_SUMMARY_PLACEHOLDER,
    STOP_WORDS,
)
from news_aggregator.models.articles import Article
from news_aggregator.models.query import ParsedQuery, SearchMode, SearchResult
from news_aggregator.pipeline.scoring import KeywordOverlapScorer, RelevanceScorer, expand_synonyms

CATEGORY_ALIASES: dict[str, str] = {
    "security": "Cybersecurity",
    "cyber": "Cybersecurity",
    "cybersecurity": "Cybersecurity",
    "infosec": "Cybersecurity",
    "tech": "Technology",
    "technology": "Technology",
    "news": "News",
    "general": "News",
    "ai": "AI",
}

CANONICAL_CATEGORIES = frozenset(CATEGORY_ALIASES.values())

_PHRASE_RE = re.compile(r'"([^"]*)"')
_CATEGORY_PREFIX = "category:"
_SUGGESTION_WORD_RE = re.compile(r"\b[a-z]{4,}\b")


def resolve_category(tag: str) -> str:
    """Map a short tag to its canonical category; unknown tags pass through unchanged."""
    return CATEGORY_ALIASES.get(tag.lower(), tag)


def parse_query(raw_query: str) -> ParsedQuery:
    """
    Parse a search string into its grammar components.

    Args:
        raw_query: Query as typed by the user

    Returns:
        ParsedQuery with lowercased terms
    """
    text = (raw_query or "").strip()
    phrases = [p.strip().lower() for p in _PHRASE_RE.findall(text) if p.strip()]
    remainder = _PHRASE_RE.sub(" ", text)

    include: list[str] = []
    bare: list[str] = []
    exclude: list[str] = []
    category: str | None = None
    has_operators = bool(phrases)

    for token in remainder.split():
        # Unmatched quote: keep the word, drop the quote
        token = token.replace('"', "").lower()
        if not token:
            continue

        if token.startswith(_CATEGORY_PREFIX) and len(token) > len(_CATEGORY_PREFIX):
            category = resolve_category(token[len(_CATEGORY_PREFIX) :])
            has_operators = True
        elif token[0] in "+-" and len(token) > 1 and token[1] not in "+-":
            if token[0] == "+":
                include.append(token[1:])
            else:
                exclude.append(token[1:])
            has_operators = True
        else:
            include.append(token)
            bare.append(token)

    return ParsedQuery(
        include_terms=list(dict.fromkeys(include)),
        exclude_terms=list(dict.fromkeys(exclude)),
        exact_phrases=list(dict.fromkeys(phrases)),
        category_filter=category,
        has_operators=has_operators,
        bare_terms=list(dict.fromkeys(bare)),
    )


def article_text(article: Article) -> str:
    """Lowercased searchable text of an article."""
    summary = "" if article.summary == NO_SUMMARY_PLACEHOLDER else article.summary
    parts = [article.title, summary, article.source]
    if article.ai_summary is not None:
        parts.append(article.ai_summary.overview)
        parts.extend(article.ai_summary.key_points)
    return " ".join(parts).lower()


def matches_query(query: ParsedQuery, article: Article) -> bool:
    """Boolean filter: exclusions first, then phrases, then includes, then category."""
    text = article_text(article)

    if any(term in text for term in query.exclude_terms):
        return False
    if not all(phrase in text for phrase in query.exact_phrases):
        return False
    if not all(term in text for term in query.include_terms):
        return False
    if query.category_filter is None:
        return True
    if query.category_filter in CANONICAL_CATEGORIES:
        return article.category == query.category_filter
    return article.category.casefold() == query.category_filter.casefold()


def apply_query(
    raw_query: str,
    articles: list[Article],
    mode: SearchMode | str = SearchMode.KEYWORD,
    scorer: RelevanceScorer | None = None,
    min_score: float = MIN_SEMANTIC_SCORE,
) -> list[Article]:
    """
    Filter, and in semantic mode rank, articles against a query.

    Keyword mode returns the matching articles in their original order.
    Semantic mode keeps the operator constraints (phrases, +terms, -terms,
    category) as a hard filter, scores the survivors against the free text of
    the query, drops scores below ``min_score`` and returns copies carrying
    ``search_score`` and ``search_matches``, best first.

    Args:
        raw_query: Query string
        articles: Canonical article set (not modified)
        mode: "keyword" or "semantic"
        scorer: Relevance strategy for semantic mode
        min_score: Lowest semantic score kept

    Returns:
        Matching articles
    """
    mode = SearchMode(mode)
    parsed = parse_query(raw_query)

    if parsed.is_empty:
        return list(articles)

    if mode is SearchMode.KEYWORD:
        results = [a for a in articles if matches_query(parsed, a)]
        logger.debug(f"Keyword search '{raw_query}': {len(results)}/{len(articles)} matched")
        return results

    required = [t for t in parsed.include_terms if t not in parsed.bare_terms]
    hard_filter = parsed.model_copy(update={"include_terms": required})
    candidates = [a for a in articles if matches_query(hard_filter, a)]

    query_text = " ".join([*parsed.exact_phrases, *parsed.include_terms])
    if not query_text:
        return candidates

    scorer = scorer or KeywordOverlapScorer()
    ranked: list[Article] = []
    for article in candidates:
        result = scorer.score(query_text, article)
        if result.score < min_score:
            continue
        ranked.append(
            article.model_copy(
                update={"search_score": result.score, "search_matches": result.matches}
            )
        )

    ranked.sort(key=lambda a: a.search_score, reverse=True)
    logger.debug(f"Semantic search '{raw_query}': {len(ranked)}/{len(articles)} scored")
    return ranked


def find_similar(
    article: Article,
    candidates: list[Article],
    k: int = DEFAULT_SIMILAR_LIMIT,
    scorer: RelevanceScorer | None = None,
    min_score: float = MIN_SIMILAR_SCORE,
) -> list[SearchResult]:
    """
    Articles most related to a reference article.

    The reference title is scored against every other candidate.

    Args:
        article: Reference article
        candidates: Articles to search (the reference itself is skipped)
        k: Maximum results
        scorer: Relevance strategy
        min_score: Lowest score kept

    Returns:
        Up to ``k`` results, best first
    """
    scorer = scorer or KeywordOverlapScorer()
    results: list[SearchResult] = []

    for candidate in candidates:
        if candidate.id == article.id:
            continue
        scored = scorer.score(article.title, candidate)
        if scored.score < min_score:
            continue
        results.append(
            SearchResult(
                article=candidate,
                score=scored.score,
                matches=scored.matches,
                relevance=scored.relevance,
            )
        )

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:k]


def suggest_terms(
    partial_query: str,
    articles: list[Article],
    limit: int = MAX_SEARCH_SUGGESTIONS,
) -> list[str]:
    """Completions for a partial query from frequent article terms, plus synonyms."""
    prefix = partial_query.strip().lower()
    if not prefix:
        return []

    frequencies: Counter[str] = Counter()
    for article in articles:
        words = _SUGGESTION_WORD_RE.findall(article_text(article))
        frequencies.update(w for w in words if w not in STOP_WORDS)

    common_terms = [term for term, _count in frequencies.most_common(50)]
    suggestions = [term for term in common_terms if term.startswith(prefix)]
    suggestions.extend(expand_synonyms(prefix))
    return list(dict.fromkeys(suggestions))[:limit]
