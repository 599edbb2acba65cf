"""Configuration models for the pipeline."""

from typing import Literal

from pydantic import BaseModel, Field

from news_aggregator.constants import (
    DEFAULT_BATCH_MAX_ARTICLES,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_LLM_MAX_RETRIES,
    DEFAULT_LLM_MAX_TOKENS,
    DEFAULT_LLM_MODEL,
    DEFAULT_LLM_TEMPERATURE,
    DEFAULT_MAX_ARTICLES_PER_SOURCE,
    DEFAULT_MAX_CONCURRENT_SOURCES,
    DEFAULT_RATE_LIMIT_DELAY_MS,
    DEFAULT_SIMILAR_LIMIT,
    DEFAULT_TIME_PROXIMITY_HOURS,
    DEFAULT_TITLE_SIMILARITY_THRESHOLD,
    DEFAULT_USER_AGENT,
    MIN_SEMANTIC_SCORE,
    MIN_SIMILAR_SCORE,
)

SourceKind = Literal["bleepingcomputer", "cybersecuritynews", "neowin", "askwoody", "rss"]


class SourceConfig(BaseModel):
    """Configuration for a single news source."""

    name: str = Field(description="Source name shown on articles")
    url: str = Field(description="Page or feed URL")
    kind: SourceKind = Field(description="Registered adapter used to parse the source")
    category: str = Field(description="Canonical category assigned to the source's articles")
    enabled: bool = Field(default=True)


class SourcesConfig(BaseModel):
    """Configuration for all news sources."""

    sources: list[SourceConfig] = Field(description="List of news sources")


class StepConfig(BaseModel):
    """Base configuration for a pipeline stage."""

    enabled: bool = Field(default=True)


class IngestionConfig(BaseModel):
    """Source fetching configuration."""

    timeout_seconds: float = Field(default=DEFAULT_FETCH_TIMEOUT_SECONDS, gt=0)
    max_concurrent_sources: int = Field(default=DEFAULT_MAX_CONCURRENT_SOURCES, ge=1)
    max_articles_per_source: int = Field(default=DEFAULT_MAX_ARTICLES_PER_SOURCE, ge=1)
    user_agent: str = Field(default=DEFAULT_USER_AGENT)


class DedupConfig(StepConfig):
    """Near-duplicate clustering configuration."""

    title_similarity_threshold: float = Field(
        ge=0.0, le=1.0, default=DEFAULT_TITLE_SIMILARITY_THRESHOLD
    )
    time_proximity_hours: float = Field(ge=0.0, default=DEFAULT_TIME_PROXIMITY_HOURS)


class ScoringWeights(BaseModel):
    """Weights for the keyword-overlap relevance scorer."""

    exact_title: float = Field(default=60.0, ge=0.0)
    exact_summary: float = Field(default=40.0, ge=0.0)
    concept_title: float = Field(default=35.0, ge=0.0)
    concept_summary: float = Field(default=20.0, ge=0.0)
    synonym: float = Field(default=15.0, ge=0.0)
    partial: float = Field(default=5.0, ge=0.0)


class SearchConfig(BaseModel):
    """Query engine configuration."""

    default_mode: Literal["keyword", "semantic"] = Field(default="keyword")
    min_semantic_score: float = Field(default=MIN_SEMANTIC_SCORE, ge=0.0, le=100.0)
    min_similar_score: float = Field(default=MIN_SIMILAR_SCORE, ge=0.0, le=100.0)
    similar_limit: int = Field(default=DEFAULT_SIMILAR_LIMIT, ge=1)
    weights: ScoringWeights = Field(default_factory=ScoringWeights)


class EnrichmentConfig(StepConfig):
    """AI summary generation configuration."""

    llm_model: str = Field(default=DEFAULT_LLM_MODEL)
    temperature: float = Field(ge=0.0, le=2.0, default=DEFAULT_LLM_TEMPERATURE)
    max_output_tokens: int = Field(default=DEFAULT_LLM_MAX_TOKENS, ge=1)
    retry_attempts: int = Field(default=DEFAULT_LLM_MAX_RETRIES, ge=1)
    rate_limit_delay_ms: int = Field(default=DEFAULT_RATE_LIMIT_DELAY_MS, ge=0)
    max_articles: int = Field(default=DEFAULT_BATCH_MAX_ARTICLES, ge=0)
    min_duplicates: int = Field(default=1, ge=0, description="Duplicate count marking trending")
    prioritize_recent: bool = Field(default=True)
    prioritize_trending: bool = Field(default=True)
    enrich_on_refresh: bool = Field(default=False, description="Run a batch after each refresh")


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    serialize: bool = Field(default=False, description="Serialize file logs to JSON")
    colorize: bool = Field(default=True, description="Colorize console output")
    file_path: str | None = Field(default="logs/news_aggregator.log")
    rotation: str = Field(default="50 MB", description="Log rotation size/time")
    retention: str = Field(default="14 days", description="Log retention period")
    compression: str = Field(default="zip", description="Compression format for rotated logs")


class PipelineMetadata(BaseModel):
    """Pipeline metadata."""

    name: str = Field(default="news-aggregator")
    version: str = Field(default="1.0.0")


class PipelineConfig(BaseModel):
    """Complete pipeline configuration."""

    pipeline: PipelineMetadata = Field(default_factory=PipelineMetadata)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
    dedup: DedupConfig = Field(default_factory=DedupConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
