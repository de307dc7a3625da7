"""Nutrition estimation via the Edamam Nutrition Analysis API."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from meal_logger.adapters.edamam_client import EdamamClient
from meal_logger.domain.nutrition import ZERO_NUTRITION, NutritionDetails

_NUTRIENT_CODES = {
    "protein": "PROCNT",
    "fat": "FAT",
    "carbs": "CHOCDF",
    "fiber": "FIBTG",
    "sugar": "SUGAR",
    "sodium": "NA",
}

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Service that estimates an aggregate nutrition breakdown."""

    edamam_client: EdamamClient

    async def estimate(self, food_items: Sequence[str]) -> NutritionDetails:
        """Estimate nutrition for one unit of each item.

        A failed lookup is logged and reported as all zeros.
        """
        if not food_items:
            return ZERO_NUTRITION
        ingredients = [f"1 {item}" for item in food_items]
        try:
            payload = await self.edamam_client.analyze(ingredients)
            details = _extract_nutrition(payload)
        except Exception as exc:
            _logger.error(
                "Error estimating calories (status=%s): %s",
                _status_code_from_exception(exc),
                exc,
            )
            return ZERO_NUTRITION
        _logger.debug(
            "Nutrition estimate: items=%s calories=%s",
            len(ingredients),
            details.calories,
        )
        return details


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _extract_nutrition(payload: dict[str, object]) -> NutritionDetails:
    """Map an Edamam response to a nutrition breakdown."""
    nutrients = payload.get("totalNutrients") or {}
    values: dict[str, float] = {"calories": _to_float(payload.get("calories"))}
    for field, code in _NUTRIENT_CODES.items():
        nutrient = nutrients.get(code) or {}
        values[field] = _to_float(nutrient.get("quantity"))
    return NutritionDetails(**values)


def _to_float(value: object) -> float:
    if isinstance(value, int | float):
        return float(value)
    return 0.0
