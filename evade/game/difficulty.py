"""
Difficulty Loader - YAML difficulty presets with Pydantic validation.

Examples:
    >>> loader = DifficultyLoader()
    >>> presets = loader.load()
    >>> presets.get(Difficulty.HARD).enemy_speed
    2.0
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from evade.logging import get_logger
from evade.models import DifficultyPresets

log = get_logger('difficulty')

DEFAULT_PRESETS_PATH = Path(__file__).parent.parent / 'presets' / 'difficulty.yaml'


class DifficultyLoader:
    """Loads and validates difficulty presets from a YAML file.

    A missing file is not an error: the built-in presets are used and a
    warning is logged. Malformed or invalid content raises ValueError.

    Attributes:
        path: Path to the presets YAML file
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else DEFAULT_PRESETS_PATH

    def load(self) -> DifficultyPresets:
        """Load and validate every preset.

        Returns:
            Validated DifficultyPresets (built-ins if the file is missing)

        Raises:
            ValueError: If the YAML is malformed or fails validation
        """
        if not self.path.exists():
            log.warning("Difficulty presets not found at %s, using built-in presets", self.path)
            return DifficultyPresets.defaults()

        try:
            with open(self.path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML file '{self.path}': {e}") from e

        if not isinstance(data, dict) or 'presets' not in data:
            raise ValueError(f"Invalid difficulty file '{self.path}': missing 'presets' mapping")

        try:
            presets = DifficultyPresets(**data)
        except ValidationError as e:
            raise ValueError(
                f"Invalid difficulty configuration in '{self.path}':\n{e}"
            ) from e

        log.debug("Loaded difficulty presets from %s", self.path)
        return presets

    def load_or_default(self) -> DifficultyPresets:
        """Like load(), but falls back to the built-in presets on bad content."""
        try:
            return self.load()
        except ValueError as e:
            log.warning("%s; using built-in presets", e)
            return DifficultyPresets.defaults()
