"""Edits applied to logged meals."""

import logging
import math
from dataclasses import dataclass

from meal_logger.domain.meals import (
    ImageComparedRecord,
    ImageUpdatedRecord,
    ItemAddedRecord,
    MealEntry,
    PortionAdjustedRecord,
)
from meal_logger.services.analysis import MealAnalyzer
from meal_logger.services.instructions import (
    AddItem,
    AdjustPortion,
    parse_fraction,
    parse_instruction,
)
from meal_logger.services.labels import LabelService
from meal_logger.services.nutrition import NutritionService

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReplaceImage:
    """Re-analyze the meal from a new photo."""

    image_path: str


@dataclass(frozen=True)
class ChatUpdate:
    """Apply a free-text update such as ``"I also had a banana"``."""

    text: str


@dataclass(frozen=True)
class CompareImage:
    """Estimate remaining calories from a photo of what is left."""

    image_path: str


EditRequest = ReplaceImage | ChatUpdate | CompareImage


@dataclass(frozen=True)
class EditResult:
    """Outcome of an edit: the entries, whether they changed, and a message."""

    entries: list[MealEntry]
    changed: bool
    message: str


@dataclass
class MealEditor:
    """Service that applies one edit to a logged meal and records it."""

    analyzer: MealAnalyzer
    label_service: LabelService
    nutrition_service: NutritionService

    async def edit(
        self, entries: list[MealEntry], index: int, request: EditRequest
    ) -> EditResult:
        """Apply ``request`` to the entry at ``index``.

        Returns a new list with the updated entry in place; ``entries`` is
        never mutated. Raises ZeroDivisionError when a portion instruction
        has a zero denominator.
        """
        if not entries:
            return EditResult(
                entries=entries, changed=False, message="No meals to edit."
            )
        entry = entries[index]
        if isinstance(request, ReplaceImage):
            updated, message = await self.replace_image(entry, request.image_path)
        elif isinstance(request, ChatUpdate):
            updated, message = await self.apply_update(entry, request.text)
        else:
            updated, message = await self.compare_image(entry, request.image_path)
        if updated is None:
            return EditResult(entries=entries, changed=False, message=message)
        new_entries = list(entries)
        new_entries[index] = updated
        _logger.info("Meal %s edited: %s", index + 1, updated.history[-1].action)
        return EditResult(entries=new_entries, changed=True, message=message)

    async def replace_image(
        self, entry: MealEntry, image_path: str
    ) -> tuple[MealEntry, str]:
        """Re-run the analysis with the existing description and a new photo."""
        analysis = await self.analyzer.analyze(entry.description, image_path)
        record = ImageUpdatedRecord(
            new_image_path=image_path,
            new_calories=analysis.estimated_calories,
        )
        updated = entry.with_record(
            record,
            image_path=image_path,
            estimated_calories=analysis.estimated_calories,
            nutrition_details=analysis.nutrition_details,
            food_items=analysis.food_items,
        )
        return updated, analysis.summary

    async def apply_update(
        self, entry: MealEntry, text: str
    ) -> tuple[MealEntry | None, str]:
        """Apply a chat-style update; returns ``None`` when nothing changed."""
        instruction = parse_instruction(text)
        if isinstance(instruction, AddItem):
            return await self._add_item(entry, instruction.item)
        if isinstance(instruction, AdjustPortion):
            return _adjust_portion(entry, instruction)
        return None, instruction.reason

    async def compare_image(
        self, entry: MealEntry, image_path: str
    ) -> tuple[MealEntry, str]:
        """Estimate what is left of the meal by comparing label counts."""
        original_labels = await self.label_service.extract(entry.image_path)
        new_labels = await self.label_service.extract(image_path)
        remaining_fraction = len(new_labels) / max(len(original_labels), 1)
        original_calories = entry.estimated_calories
        net_calories = float(round(original_calories * remaining_fraction))
        record = ImageComparedRecord(
            new_image_path=image_path,
            original_calories=original_calories,
            remaining_fraction=remaining_fraction,
            net_calories=net_calories,
        )
        updated = entry.with_record(record, estimated_calories=net_calories)
        message = (
            f"Estimated remaining portion: {remaining_fraction:.0%}. "
            f"Net calories: {net_calories:g} kcal."
        )
        return updated, message

    async def _add_item(self, entry: MealEntry, item: str) -> tuple[MealEntry, str]:
        nutrition = await self.nutrition_service.estimate([item])
        additional_calories = nutrition.calories
        total = entry.estimated_calories + additional_calories
        record = ItemAddedRecord(new_item=item, additional_calories=additional_calories)
        updated = entry.with_record(
            record,
            description=f"{entry.description}, {item}",
            estimated_calories=total,
        )
        message = (
            f"Added {item} with {additional_calories:g} calories. "
            f"New total: {total:g} kcal."
        )
        return updated, message


def _adjust_portion(
    entry: MealEntry, instruction: AdjustPortion
) -> tuple[MealEntry | None, str]:
    fraction = parse_fraction(instruction.fraction)
    item = instruction.item
    if item not in entry.description.lower():
        return None, f'Item "{item}" not found in meal description.'
    original_calories = entry.estimated_calories
    scaled = original_calories * fraction
    if not math.isfinite(scaled):
        raise ValueError(f"Portion {instruction.fraction} is too large")
    new_calories = float(round(scaled))
    record = PortionAdjustedRecord.for_item(
        item,
        fraction=fraction,
        original_calories=original_calories,
        new_calories=new_calories,
    )
    updated = entry.with_record(record, estimated_calories=new_calories)
    message = (
        f"Adjusted {item} to {fraction:.0%} of original. "
        f"New total: {new_calories:g} kcal."
    )
    return updated, message
