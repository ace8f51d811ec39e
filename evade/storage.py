"""
Local persistence for settings and statistics.

Storage is a small JSON key/value file in the per-user data directory.
Nothing here ever raises to the game: an unreadable or unwritable file is
logged and the caller gets defaults back.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from evade.logging import get_data_dir, get_logger
from evade.models import GameSettings, GameStatistics

log = get_logger('storage')

STORAGE_FILENAME = 'evade.json'

BEST_TIME_KEY = 'bestTime'
STATISTICS_KEY = 'gameStatistics'
SETTINGS_KEY = 'gameSettings'


class Storage:
    """JSON-backed key/value store.

    Args:
        path: File to use; defaults to evade.json in the data directory
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else Path(get_data_dir()) / STORAGE_FILENAME

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("Could not read %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> bool:
        """Store value under key.

        Returns:
            True if the file was written
        """
        data = self._read()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w') as f:
                json.dump(data, f, indent=2)
        except (OSError, TypeError) as e:
            log.warning("Could not write %s: %s", self.path, e)
            return False
        return True


class SettingsStore:
    """Typed access to settings and statistics on top of Storage."""

    def __init__(self, storage: Optional[Storage] = None):
        self.storage = storage if storage is not None else Storage()

    def load_settings(self) -> GameSettings:
        raw = self.storage.get(SETTINGS_KEY)
        if raw is None:
            return GameSettings()
        try:
            return GameSettings.model_validate(raw)
        except ValidationError as e:
            log.warning("Invalid stored settings, using defaults: %s", e)
            return GameSettings()

    def save_settings(self, settings: GameSettings) -> bool:
        return self.storage.set(SETTINGS_KEY, settings.model_dump(mode='json', by_alias=True))

    def load_statistics(self) -> GameStatistics:
        raw = self.storage.get(STATISTICS_KEY)
        if raw is None:
            return GameStatistics()
        try:
            return GameStatistics.model_validate(raw)
        except ValidationError as e:
            log.warning("Invalid stored statistics, using defaults: %s", e)
            return GameStatistics()

    def best_time(self) -> float:
        value = self.storage.get(BEST_TIME_KEY, 0.0)
        try:
            return max(0.0, float(value))
        except (TypeError, ValueError):
            log.warning("Invalid stored best time %r", value)
            return 0.0

    def record_game(self, elapsed: float, barriers: int) -> GameStatistics:
        """Fold one finished game into best time and statistics.

        Args:
            elapsed: Survival time in seconds
            barriers: Barriers held at game over

        Returns:
            The updated statistics
        """
        stats = self.load_statistics().with_game(elapsed, barriers)
        best = max(self.best_time(), stats.best_time)
        stats = stats.model_copy(update={'best_time': best})

        self.storage.set(BEST_TIME_KEY, best)
        self.storage.set(STATISTICS_KEY, stats.model_dump(mode='json', by_alias=True))
        return stats
