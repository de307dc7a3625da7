"""Meal logging service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_logger.domain.meals import MealEntry
from meal_logger.services.analysis import MealAnalysis, MealAnalyzer
from meal_logger.services.editor import EditRequest, EditResult, MealEditor

_logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """The meal log could not be read or written."""


class MealLogRepository(Protocol):
    """Persistence interface for the meal log."""

    def ensure_storage_ready(self) -> None:
        """Create the storage location if needed."""

    def load(self) -> list[MealEntry]:
        """Return all logged meals in insertion order."""

    def save(self, entries: list[MealEntry]) -> None:
        """Replace the stored meals with ``entries``."""


@dataclass
class MealLogService:
    """Service that analyzes, edits and persists meals."""

    repository: MealLogRepository
    analyzer: MealAnalyzer
    editor: MealEditor

    def load(self) -> list[MealEntry]:
        """Prepare storage and return the logged meals."""
        self.repository.ensure_storage_ready()
        return self.repository.load()

    async def log_meal(
        self, entries: list[MealEntry], description: str, image_path: str
    ) -> tuple[list[MealEntry], MealAnalysis]:
        """Analyze a new meal, append it and persist the log."""
        analysis = await self.analyzer.analyze(description, image_path)
        entry = MealEntry(
            description=description,
            estimated_calories=analysis.estimated_calories,
            food_items=analysis.food_items,
            nutrition_details=analysis.nutrition_details,
            image_path=image_path,
        )
        updated = [*entries, entry]
        self.repository.save(updated)
        _logger.info("Logged meal %s (%s kcal)", len(updated), entry.estimated_calories)
        return updated, analysis

    async def edit_meal(
        self, entries: list[MealEntry], index: int, request: EditRequest
    ) -> EditResult:
        """Apply an edit and persist the log when the entry changed."""
        result = await self.editor.edit(entries, index, request)
        if result.changed:
            self.repository.save(result.entries)
        return result
