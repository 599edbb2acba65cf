"""Near-duplicate clustering of articles covering the same story.

Two articles belong to the same cluster when their normalized titles are
similar enough and they were scraped close together in time. Clustering is
transitive (union-find), so chains of pairwise matches form one cluster.

Articles are compared in scrape-time order and the inner loop stops as soon
as the time gap exceeds the proximity window. This prunes pairs that could
never match and leaves the result identical to a full pairwise pass.
"""

from collections.abc import Callable
from datetime import timedelta

from loguru import logger

from news_aggregator.exceptions import DeduplicationError
from news_aggregator.models.articles import (
    Article,
    DeduplicationResult,
    DeduplicationStats,
    DuplicateRef,
)
from news_aggregator.models.config import DedupConfig
from news_aggregator.utils.similarity import title_similarity

SimilarityFn = Callable[[str, str], float]


class _UnionFind:
    def __init__(self, size: int) -> None:
        self.parent = list(range(size))

    def find(self, i: int) -> int:
        while self.parent[i] != i:
            self.parent[i] = self.parent[self.parent[i]]
            i = self.parent[i]
        return i

    def union(self, i: int, j: int) -> None:
        root_i, root_j = self.find(i), self.find(j)
        if root_i != root_j:
            # Lower index stays root so cluster order follows input order
            if root_j < root_i:
                root_i, root_j = root_j, root_i
            self.parent[root_j] = root_i


def are_duplicates(
    article1: Article,
    article2: Article,
    config: DedupConfig,
    similarity: SimilarityFn = title_similarity,
) -> bool:
    """Check whether two articles cover the same story."""
    window = timedelta(hours=config.time_proximity_hours)
    if abs(article1.scraped - article2.scraped) > window:
        return False
    return similarity(article1.title, article2.title) >= config.title_similarity_threshold


def cluster_articles(
    articles: list[Article],
    config: DedupConfig,
    similarity: SimilarityFn = title_similarity,
) -> list[list[int]]:
    """
    Partition article indices into duplicate clusters.

    Args:
        articles: Articles to cluster
        config: Deduplication configuration
        similarity: Title similarity function returning a value in [0, 1]

    Returns:
        Clusters as lists of input indices, each list ascending, clusters
        ordered by their first index

    Raises:
        DeduplicationError: If the similarity computation fails
    """
    window = timedelta(hours=config.time_proximity_hours)
    threshold = config.title_similarity_threshold
    union_find = _UnionFind(len(articles))
    by_time = sorted(range(len(articles)), key=lambda i: articles[i].scraped)

    for pos, i in enumerate(by_time):
        article = articles[i]
        for j in by_time[pos + 1 :]:
            candidate = articles[j]
            if candidate.scraped - article.scraped > window:
                break
            if union_find.find(i) == union_find.find(j):
                continue
            try:
                score = similarity(article.title, candidate.title)
            except Exception as e:
                raise DeduplicationError(
                    f"Similarity failed for '{article.title[:50]}' vs '{candidate.title[:50]}': {e}"
                ) from e
            if score >= threshold:
                union_find.union(i, j)

    clusters: dict[int, list[int]] = {}
    for i in range(len(articles)):
        clusters.setdefault(union_find.find(i), []).append(i)
    return list(clusters.values())


def select_canonical(members: list[tuple[int, Article]]) -> tuple[int, Article]:
    """Earliest-scraped member wins; ties go to the lexically first source, then input order."""
    return min(members, key=lambda pair: (pair[1].scraped, pair[1].source, pair[0]))


def _to_ref(article: Article) -> DuplicateRef:
    return DuplicateRef(
        source=article.source,
        title=article.title,
        link=article.link,
        scraped=article.scraped,
    )


def _merge_cluster(canonical: Article, others: list[Article]) -> Article:
    """Build the canonical article for a cluster.

    Disclosure lists already carried by members are folded in, so running
    the engine on its own output leaves every article unchanged.
    """
    duplicates = [_to_ref(other) for other in others]
    duplicates.extend(canonical.duplicates)
    for other in others:
        duplicates.extend(other.duplicates)

    sources = [canonical.source, *canonical.all_sources]
    for other in others:
        sources.append(other.source)
        sources.extend(other.all_sources)

    return canonical.model_copy(
        update={
            "is_duplicate": False,
            "duplicate_count": len(duplicates),
            "duplicates": duplicates,
            "all_sources": list(dict.fromkeys(sources)),
        }
    )


def _as_unique(article: Article) -> Article:
    return article.model_copy(
        update={
            "is_duplicate": False,
            "duplicate_count": 0,
            "duplicates": [],
            "all_sources": [article.source],
        }
    )


def compute_stats(total_original: int, deduplicated: list[Article]) -> DeduplicationStats:
    """Summarize how much a deduplication run reduced the article set."""
    total_unique = len(deduplicated)
    removed = total_original - total_unique
    return DeduplicationStats(
        total_original=total_original,
        total_unique=total_unique,
        duplicates_removed=removed,
        articles_with_duplicates=sum(1 for a in deduplicated if a.duplicate_count > 0),
        reduction_percentage=round(removed / total_original * 100, 1) if total_original else 0.0,
    )


def deduplicate_articles(
    articles: list[Article],
    config: DedupConfig,
    similarity: SimilarityFn = title_similarity,
) -> DeduplicationResult:
    """
    Collapse duplicate coverage into one canonical article per story.

    If similarity computation fails the run fails open: every article is
    returned as a non-duplicate and the pipeline continues.

    Args:
        articles: Articles with resolved identities, newest first
        config: Deduplication configuration
        similarity: Title similarity function

    Returns:
        DeduplicationResult with canonical articles sorted newest-scraped first
    """
    if not config.enabled or not articles:
        logger.info("Deduplication skipped", enabled=config.enabled, articles=len(articles))
        unique = [_as_unique(a) for a in articles]
        return DeduplicationResult(
            success=True,
            articles=unique,
            stats=compute_stats(len(articles), unique),
        )

    try:
        clusters = cluster_articles(articles, config, similarity)
    except DeduplicationError as e:
        logger.error(f"Deduplication disabled for this run (fail-open): {e}")
        unique = [_as_unique(a) for a in articles]
        return DeduplicationResult(
            success=False,
            articles=unique,
            stats=compute_stats(len(articles), unique),
            fail_open=True,
            errors=[str(e)],
        )

    canonical_articles: list[Article] = []
    for cluster in clusters:
        members = [(i, articles[i]) for i in cluster]
        canonical_index, canonical = select_canonical(members)
        others = [article for i, article in members if i != canonical_index]
        canonical_articles.append(_merge_cluster(canonical, others))

    # Stable: equal timestamps keep cluster order (first member's input position)
    canonical_articles.sort(key=lambda a: a.scraped, reverse=True)

    stats = compute_stats(len(articles), canonical_articles)
    logger.info(
        "Deduplication complete",
        before=stats.total_original,
        after=stats.total_unique,
        removed=stats.duplicates_removed,
        reduction=f"{stats.reduction_percentage}%",
    )

    return DeduplicationResult(success=True, articles=canonical_articles, stats=stats)
