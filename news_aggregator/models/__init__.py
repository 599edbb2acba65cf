"""Pydantic data models for the pipeline."""

from news_aggregator.models.articles import (
    AISummary,
    Article,
    BatchSummaryResult,
    DeduplicationResult,
    DeduplicationStats,
    DuplicateRef,
    IngestionResult,
    RawArticle,
)
from news_aggregator.models.config import (
    DedupConfig,
    EnrichmentConfig,
    IngestionConfig,
    LoggingConfig,
    PipelineConfig,
    PipelineMetadata,
    ScoringWeights,
    SearchConfig,
    SourceConfig,
    SourcesConfig,
    StepConfig,
)
from news_aggregator.models.query import ParsedQuery, ScoreResult, SearchMode, SearchResult

__all__ = [
    # Articles
    "RawArticle",
    "Article",
    "DuplicateRef",
    "AISummary",
    "IngestionResult",
    "DeduplicationStats",
    "DeduplicationResult",
    "BatchSummaryResult",
    # Query
    "ParsedQuery",
    "ScoreResult",
    "SearchMode",
    "SearchResult",
    # Config
    "SourceConfig",
    "SourcesConfig",
    "StepConfig",
    "IngestionConfig",
    "DedupConfig",
    "ScoringWeights",
    "SearchConfig",
    "EnrichmentConfig",
    "LoggingConfig",
    "PipelineMetadata",
    "PipelineConfig",
]
