#!/usr/bin/env python3
"""Command-line entry point for the news aggregator.

Usage:
    news-aggregator refresh
    news-aggregator refresh --enrich
    news-aggregator search "ransomware -linux category:security"
    news-aggregator search "zero day exploits" --semantic
"""

import asyncio
import os
import sys
import time
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from loguru import logger

from news_aggregator.exceptions import AggregateIngestionError
from news_aggregator.models.articles import Article
from news_aggregator.models.config import PipelineConfig, SourcesConfig
from news_aggregator.models.query import SearchMode
from news_aggregator.pipeline.service import NewsPipeline, build_pipeline
from news_aggregator.utils.config_loader import load_pipeline_config, load_sources_config
from news_aggregator.utils.logging import setup_logging

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="Aggregate, deduplicate, search and summarize tech news.")

ConfigOption = Annotated[
    Path, typer.Option("--config", "-c", help="Path to pipeline configuration")
]
SourcesOption = Annotated[
    Path, typer.Option("--sources", "-s", help="Path to sources configuration")
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging")]


def print_header(title: str) -> None:
    """Print a formatted header."""
    print("\n" + "=" * 80)
    print(f"  {title}")
    print("=" * 80 + "\n")


def print_stats(label: str, value: object) -> None:
    """Print a formatted stat line."""
    print(f"  • {label}: {value}")


def print_article(article: Article) -> None:
    sources = ", ".join(article.all_sources)
    score = f" [{article.search_score:.0f}]" if article.search_score is not None else ""
    print(f"- {article.title}{score}")
    print(f"    {article.category} | {sources} | {article.published_at}")
    print(f"    {article.link}")
    if article.ai_summary is not None:
        print(f"    AI: {article.ai_summary.overview}")
        for point in article.ai_summary.key_points:
            print(f"      • {point}")
    elif article.quick_summary:
        print(f"    {article.quick_summary}")


def _load(config_path: Path, sources_path: Path, verbose: bool) -> NewsPipeline:
    pipeline_config: PipelineConfig = load_pipeline_config(config_path)
    if verbose:
        pipeline_config.logging.level = "DEBUG"
    setup_logging(pipeline_config.logging)

    sources_config: SourcesConfig | None = None
    if sources_path.exists():
        sources_config = load_sources_config(sources_path)
    else:
        logger.info("No sources file found, using built-in sources", path=str(sources_path))

    return build_pipeline(pipeline_config, sources_config, api_key=os.getenv("GEMINI_API_KEY"))


async def _refresh(pipeline: NewsPipeline, enrich: bool) -> list[Article]:
    articles = await pipeline.ingest_all()
    if enrich:
        articles = await pipeline.generate_batch_summaries(articles)
    return articles


@app.command()
def refresh(
    config: ConfigOption = Path("config/pipeline.yaml"),
    sources: SourcesOption = Path("config/sources.yaml"),
    enrich: Annotated[
        bool, typer.Option("--enrich", help="Generate AI summaries for top articles")
    ] = False,
    limit: Annotated[int, typer.Option("--limit", "-n", help="Articles to print")] = 20,
    verbose: VerboseOption = False,
) -> None:
    """Fetch every source, deduplicate and print the newest articles."""
    pipeline = _load(config, sources, verbose)
    start = time.time()

    try:
        articles = asyncio.run(_refresh(pipeline, enrich))
    except AggregateIngestionError as e:
        logger.error(f"Refresh failed: {e}")
        print(f"\n❌ No sources available: {e}")
        raise typer.Exit(code=1) from e

    print_header("📰 Latest News")
    for article in articles[:limit]:
        print_article(article)

    print_header("📈 Refresh Summary")
    stats = pipeline.last_stats
    print_stats("Articles", len(articles))
    if stats is not None:
        print_stats("Duplicates removed", stats.duplicates_removed)
        print_stats("Stories with multiple sources", stats.articles_with_duplicates)
        print_stats("Reduction", f"{stats.reduction_percentage}%")
    if enrich:
        print_stats("Cached summaries", pipeline.get_cache_stats()["size"])
    print_stats("Elapsed", f"{time.time() - start:.2f}s")


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Search query")],
    semantic: Annotated[bool, typer.Option("--semantic", help="Rank by relevance")] = False,
    config: ConfigOption = Path("config/pipeline.yaml"),
    sources: SourcesOption = Path("config/sources.yaml"),
    verbose: VerboseOption = False,
) -> None:
    """Refresh, then print the articles matching QUERY."""
    pipeline = _load(config, sources, verbose)

    try:
        asyncio.run(pipeline.ingest_all())
    except AggregateIngestionError as e:
        print(f"\n❌ No sources available: {e}")
        raise typer.Exit(code=1) from e

    mode = SearchMode.SEMANTIC if semantic else None
    results = pipeline.search(query, mode=mode)

    print_header(f"🔎 {len(results)} results for: {query}")
    for article in results:
        print_article(article)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
