"""Article data models for the pipeline."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from news_aggregator.constants import DEFAULT_PUBLISHED_AT, NO_SUMMARY_PLACEHOLDER


class RawArticle(BaseModel):
    """Normalized article produced by a source adapter."""

    title: str = Field(min_length=1, description="Article title")
    link: str = Field(min_length=1, description="Absolute article URL")
    summary: str = Field(default=NO_SUMMARY_PLACEHOLDER, description="Scraped summary text")
    source: str = Field(description="Source name")
    category: str = Field(description="Canonical category name")
    published_at: str = Field(
        default=DEFAULT_PUBLISHED_AT, description="Publication time as shown by the source"
    )
    scraped: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Fetch time (authoritative ordering timestamp)",
    )

    @field_validator("title", "link", mode="before")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value

    @field_validator("summary", mode="before")
    @classmethod
    def _default_summary(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            return NO_SUMMARY_PLACEHOLDER
        return str(value).strip()

    @field_validator("scraped")
    @classmethod
    def _ensure_aware(cls, value: datetime) -> datetime:
        # Naive timestamps are taken to be UTC so comparisons never mix kinds
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class DuplicateRef(BaseModel):
    """Another source's coverage of the same story, kept for disclosure."""

    source: str = Field(description="Source name")
    title: str = Field(description="Title as published by that source")
    link: str = Field(description="Article URL")
    scraped: datetime = Field(description="Fetch time")


class AISummary(BaseModel):
    """Structured summary generated by the LLM provider."""

    overview: str = Field(description="One-sentence overview, at most 30 words")
    key_points: list[str] = Field(default_factory=list, max_length=4)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Article(RawArticle):
    """Canonical pipeline unit after identity resolution and deduplication."""

    id: str = Field(description="Stable content identifier")
    is_duplicate: bool = Field(default=False)
    duplicate_count: int = Field(default=0, ge=0, description="Cluster size minus one")
    duplicates: list[DuplicateRef] = Field(default_factory=list)
    all_sources: list[str] = Field(default_factory=list)
    quick_summary: str | None = Field(default=None, description="Heuristic extractive summary")
    ai_summary: AISummary | None = Field(default=None)
    search_score: float | None = Field(
        default=None, ge=0.0, le=100.0, description="Semantic relevance, set on search copies"
    )
    search_matches: list[str] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        """Ensure the article's own source is always listed."""
        if self.source not in self.all_sources:
            self.all_sources.insert(0, self.source)


class IngestionResult(BaseModel):
    """Result of fetching every configured source."""

    success: bool = Field(description="Whether at least one source produced articles")
    articles: list[RawArticle] = Field(default_factory=list)
    sources_fetched: int = Field(ge=0, description="Sources that produced articles")
    sources_failed: int = Field(ge=0, description="Sources that failed or returned nothing")
    errors: list[str] = Field(default_factory=list, description="Per-source error messages")


class DeduplicationStats(BaseModel):
    """Statistics from a deduplication run."""

    total_original: int = Field(ge=0)
    total_unique: int = Field(ge=0)
    duplicates_removed: int = Field(ge=0)
    articles_with_duplicates: int = Field(ge=0)
    reduction_percentage: float = Field(ge=0.0, le=100.0)


class DeduplicationResult(BaseModel):
    """Result of a deduplication run."""

    success: bool = Field(description="Whether clustering completed normally")
    articles: list[Article] = Field(default_factory=list, description="Canonical articles")
    stats: DeduplicationStats
    fail_open: bool = Field(default=False, description="Deduplication disabled after an error")
    errors: list[str] = Field(default_factory=list)


class BatchSummaryResult(BaseModel):
    """Outcome of a batch enrichment pass."""

    articles: list[Article] = Field(default_factory=list)
    selected: int = Field(default=0, ge=0, description="Articles chosen for enrichment")
    summarized: int = Field(default=0, ge=0)
    failures: int = Field(default=0, ge=0)
    skipped_unavailable: bool = Field(default=False, description="Provider not configured")
    errors: list[str] = Field(default_factory=list)
