"""Logging configuration using loguru.

Every module logs through ``get_logger(__name__)``, which tags records with
the short component name (``dedup``, ``rss``, ``scheduler``...) so a refresh
can be followed stage by stage in the console and the rotating log file.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

from news_aggregator.models.config import LoggingConfig

DEFAULT_COMPONENT = "news"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]: <12}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[component]} | "
    "{name}:{function}:{line} | {message}"
)


def component_name(module_name: str) -> str:
    """``news_aggregator.pipeline.dedup`` -> ``dedup``."""
    return module_name.rsplit(".", 1)[-1] or DEFAULT_COMPONENT


def setup_logging(config: LoggingConfig) -> None:
    """Replace loguru's default sink with the console sink and, when configured, a rotating file."""
    logger.remove()
    # Records from the bare loguru logger still need a component for the formats
    logger.configure(extra={"component": DEFAULT_COMPONENT})

    logger.add(
        sys.stderr,
        level=config.level,
        format=CONSOLE_FORMAT,
        colorize=config.colorize,
    )

    if config.file_path:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            config.file_path,
            level=config.level,
            format=FILE_FORMAT,
            rotation=config.rotation,
            retention=config.retention,
            compression=config.compression,
            serialize=config.serialize,
            enqueue=True,
        )

    logger.debug(f"Logging at {config.level}, file sink: {config.file_path or 'disabled'}")


def get_logger(name: str) -> "Logger":
    return logger.bind(component=component_name(name))
