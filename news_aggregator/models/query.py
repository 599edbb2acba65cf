"""Search models."""

from enum import StrEnum

from pydantic import BaseModel, Field

from news_aggregator.models.articles import Article


class SearchMode(StrEnum):
    """Ranking mode for search."""

    KEYWORD = "keyword"
    SEMANTIC = "semantic"


class ParsedQuery(BaseModel):
    """Search query broken down into grammar components."""

    include_terms: list[str] = Field(default_factory=list, description="All must match")
    exclude_terms: list[str] = Field(default_factory=list, description="Any match disqualifies")
    exact_phrases: list[str] = Field(default_factory=list, description="All must be substrings")
    category_filter: str | None = Field(default=None, description="Canonical category name")
    has_operators: bool = Field(default=False, description="Diagnostic only")
    bare_terms: list[str] = Field(
        default_factory=list, description="Subset of include_terms written without '+'"
    )

    @property
    def is_empty(self) -> bool:
        return not (
            self.include_terms or self.exclude_terms or self.exact_phrases or self.category_filter
        )


class ScoreResult(BaseModel):
    """Relevance of one article to a query."""

    score: float = Field(ge=0.0, le=100.0)
    matches: list[str] = Field(default_factory=list)
    relevance: str = Field(default="Low Relevance")


class SearchResult(BaseModel):
    """An article paired with its relevance score."""

    article: Article
    score: float = Field(ge=0.0, le=100.0)
    matches: list[str] = Field(default_factory=list)
    relevance: str = Field(default="Low Relevance")
