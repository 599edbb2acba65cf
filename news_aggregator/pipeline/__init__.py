"""Ingestion, deduplication, query and enrichment stages."""

from news_aggregator.pipeline.dedup import deduplicate_articles
from news_aggregator.pipeline.enrichment import EnrichmentService
from news_aggregator.pipeline.identity import resolve_identities
from news_aggregator.pipeline.ingestion import fetch_all_sources
from news_aggregator.pipeline.query import apply_query, find_similar, parse_query
from news_aggregator.pipeline.service import NewsPipeline, build_pipeline

__all__ = [
    "fetch_all_sources",
    "resolve_identities",
    "deduplicate_articles",
    "parse_query",
    "apply_query",
    "find_similar",
    "EnrichmentService",
    "NewsPipeline",
    "build_pipeline",
]
