"""Utility functions and helpers."""

from news_aggregator.utils.cache import SummaryCache
from news_aggregator.utils.config_loader import (
    load_pipeline_config,
    load_sources_config,
    load_yaml_config,
)
from news_aggregator.utils.hash import generate_article_id
from news_aggregator.utils.logging import get_logger, setup_logging
from news_aggregator.utils.prompt_loader import PromptLoader
from news_aggregator.utils.scheduler import RateLimitedScheduler
from news_aggregator.utils.similarity import normalize_title, title_similarity

__all__ = [
    "SummaryCache",
    "RateLimitedScheduler",
    "PromptLoader",
    "setup_logging",
    "get_logger",
    "load_yaml_config",
    "load_pipeline_config",
    "load_sources_config",
    "generate_article_id",
    "normalize_title",
    "title_similarity",
]
