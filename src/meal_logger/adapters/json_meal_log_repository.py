"""JSON file repository for the meal log."""

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from meal_logger.domain.meals import MealEntry
from meal_logger.services.meals import MealLogRepository, StorageError

_ENTRIES = TypeAdapter(list[MealEntry])

_logger = logging.getLogger(__name__)


@dataclass
class JsonMealLogRepository(MealLogRepository):
    """Stores all meals as one pretty-printed JSON array."""

    path: Path

    def ensure_storage_ready(self) -> None:
        """Create the log directory if it does not exist."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Error creating nutrition directory: {exc}") from exc

    def load(self) -> list[MealEntry]:
        """Read all entries; a missing file is an empty log."""
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            _logger.debug("Log file %s not found, starting empty", self.path)
            return []
        except OSError as exc:
            raise StorageError(f"Error reading log file: {exc}") from exc
        try:
            return _ENTRIES.validate_json(data)
        except ValidationError as exc:
            raise StorageError(f"Error reading log file {self.path}: {exc}") from exc

    def save(self, entries: list[MealEntry]) -> None:
        """Rewrite the whole log file with ``entries``."""
        payload = _ENTRIES.dump_json(entries, indent=2, by_alias=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            tmp_path.write_bytes(payload + b"\n")
            tmp_path.replace(self.path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Error writing to log file: {exc}") from exc
        _logger.debug("Saved %s entries to %s", len(entries), self.path)
