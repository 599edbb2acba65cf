"""Prompt loader utility for LLM interactions.

Loads prompts from YAML files shipped in the package's prompts/ directory.
"""

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

DEFAULT_PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"


class PromptLoader:
    """Load and format prompts from YAML files."""

    def __init__(self, prompts_dir: Path | str = DEFAULT_PROMPTS_DIR):
        """Initialize prompt loader.

        Args:
            prompts_dir: Directory containing prompt YAML files
        """
        self.prompts_dir = Path(prompts_dir)
        if not self.prompts_dir.exists():
            raise FileNotFoundError(f"Prompts directory not found: {self.prompts_dir}")
        self._loaded: dict[str, dict[str, str]] = {}

    def load_prompt(self, name: str) -> dict[str, str]:
        """Load prompt template by name.

        Args:
            name: Prompt file name without extension (e.g., "summary")

        Returns:
            Dictionary with 'system_prompt' and 'user_prompt' keys

        Raises:
            FileNotFoundError: If prompt file doesn't exist
            ValueError: If prompt file is invalid
        """
        if name in self._loaded:
            return self._loaded[name]

        prompt_file = self.prompts_dir / f"{name}.yaml"

        if not prompt_file.exists():
            raise FileNotFoundError(f"Prompt file not found: {prompt_file}")

        try:
            with open(prompt_file, encoding="utf-8") as f:
                prompt_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse prompt YAML: {e}") from e

        if not isinstance(prompt_data, dict):
            raise ValueError(f"Invalid prompt file format: {prompt_file}")

        if "system_prompt" not in prompt_data or "user_prompt" not in prompt_data:
            raise ValueError(
                f"Prompt file must contain 'system_prompt' and 'user_prompt': {prompt_file}"
            )

        logger.debug(f"Loaded prompt from {prompt_file}")
        self._loaded[name] = {
            "system_prompt": prompt_data["system_prompt"].strip(),
            "user_prompt": prompt_data["user_prompt"].strip(),
        }
        return self._loaded[name]

    def format_prompt(self, name: str, **kwargs: Any) -> str:
        """Load and format prompt with variables.

        Args:
            name: Prompt file name without extension
            **kwargs: Variables to substitute in the prompt template

        Returns:
            Formatted complete prompt (system + user)
        """
        prompts = self.load_prompt(name)

        try:
            user_prompt_formatted = prompts["user_prompt"].format(**kwargs)
        except KeyError as e:
            raise ValueError(f"Missing required prompt variable: {e}") from e

        complete_prompt = f"{prompts['system_prompt']}\n\n{user_prompt_formatted}"

        logger.debug(f"Formatted prompt {name} ({len(complete_prompt)} chars)")
        return complete_prompt
