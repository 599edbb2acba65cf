"""Unit tests for logging setup."""

import sys

import pytest
from loguru import logger

from news_aggregator.models.config import LoggingConfig
from news_aggregator.utils.logging import component_name, get_logger, setup_logging


@pytest.fixture
def restore_loguru():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.parametrize(
    "module_name, component",
    [
        ("news_aggregator.pipeline.dedup", "dedup"),
        ("news_aggregator.sources.rss", "rss"),
        ("standalone", "standalone"),
        ("", "news"),
    ],
)
def test_component_name(module_name: str, component: str) -> None:
    assert component_name(module_name) == component


def test_file_sink_tags_component(tmp_path, restore_loguru) -> None:
    log_file = tmp_path / "nested" / "run.log"
    setup_logging(LoggingConfig(level="INFO", colorize=False, file_path=str(log_file)))

    get_logger("news_aggregator.pipeline.dedup").info("Collapsed 3 duplicates")
    logger.info("Untagged record")
    logger.remove()

    lines = log_file.read_text().splitlines()
    assert any("| dedup |" in line and "Collapsed 3 duplicates" in line for line in lines)
    assert any("| news |" in line and "Untagged record" in line for line in lines)


def test_file_sink_optional(tmp_path, restore_loguru, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    setup_logging(LoggingConfig(file_path=None))
    get_logger(__name__).info("console only")
    assert list(tmp_path.iterdir()) == []
