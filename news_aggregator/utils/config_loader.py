"""Configuration loading utilities."""

from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from news_aggregator.utils.logging import get_logger

if TYPE_CHECKING:
    from news_aggregator.models.config import PipelineConfig, SourcesConfig

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def load_yaml_config(file_path: Path | str, model_class: type[T]) -> T:
    """
    Load and validate YAML configuration file.

    Args:
        file_path: Path to YAML configuration file
        model_class: Pydantic model class to validate against

    Returns:
        Validated configuration instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
        yaml.YAMLError: If YAML is malformed
    """
    path = Path(file_path)

    if not path.exists():
        logger.error("Configuration file not found", path=str(path))
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}

        config = model_class.model_validate(raw_config)
        logger.info("Configuration loaded", path=str(path), model=model_class.__name__)
        return config

    except yaml.YAMLError as e:
        logger.error("Invalid YAML syntax", path=str(path), error=str(e))
        raise

    except ValidationError as e:
        logger.error("Configuration validation failed", path=str(path), error=str(e))
        raise


def load_pipeline_config(file_path: Path | str | None = "config/pipeline.yaml") -> "PipelineConfig":
    """
    Load pipeline configuration, falling back to defaults when the file is absent.

    Args:
        file_path: Path to pipeline.yaml file

    Returns:
        PipelineConfig instance
    """
    from news_aggregator.models.config import PipelineConfig

    if file_path is None or not Path(file_path).exists():
        logger.info("No pipeline configuration file, using defaults", path=str(file_path))
        return PipelineConfig()
    return load_yaml_config(file_path, PipelineConfig)


def load_sources_config(file_path: Path | str = "config/sources.yaml") -> "SourcesConfig":
    """
    Load sources configuration.

    Args:
        file_path: Path to sources.yaml file

    Returns:
        SourcesConfig instance
    """
    from news_aggregator.models.config import SourcesConfig

    return load_yaml_config(file_path, SourcesConfig)
