"""Meal analysis combining photo labels and the user's description."""

from collections.abc import Iterable
from dataclasses import dataclass

from meal_logger.domain.nutrition import NutritionDetails
from meal_logger.domain.vision import ImageLabel
from meal_logger.services.labels import LabelService
from meal_logger.services.nutrition import NutritionService

FOOD_KEYWORDS = ("food", "burrito", "potato", "salsa", "cheese", "avocado")


@dataclass(frozen=True)
class MealAnalysis:
    """Result of analyzing a meal."""

    estimated_calories: float
    nutrition_details: NutritionDetails
    food_items: list[str]
    summary: str


@dataclass
class MealAnalyzer:
    """Service that turns a description and a photo into a nutrition estimate."""

    label_service: LabelService
    nutrition_service: NutritionService

    async def analyze(self, description: str, image_path: str) -> MealAnalysis:
        """Identify food items and estimate the meal's nutrition."""
        labels = await self.label_service.extract(image_path)
        food_items = merge_food_items(
            food_items_from_labels(labels), description_items(description)
        )
        nutrition = await self.nutrition_service.estimate(food_items)
        return MealAnalysis(
            estimated_calories=nutrition.calories,
            nutrition_details=nutrition,
            food_items=food_items,
            summary=format_summary(description, food_items, nutrition),
        )


def food_items_from_labels(labels: Iterable[ImageLabel]) -> list[str]:
    """Keep lowercased labels that mention one of the food keywords."""
    items = []
    for label in labels:
        text = label.description.lower()
        if any(keyword in text for keyword in FOOD_KEYWORDS):
            items.append(text)
    return items


def description_items(description: str) -> list[str]:
    """Split a comma-separated description into lowercase items."""
    segments = (segment.strip() for segment in description.lower().split(","))
    return [segment for segment in segments if segment]


def merge_food_items(*sources: Iterable[str]) -> list[str]:
    """Union item lists, dropping case-insensitive duplicates in first-seen order."""
    seen: set[str] = set()
    merged: list[str] = []
    for source in sources:
        for item in source:
            key = item.lower()
            if key in seen:
                continue
            seen.add(key)
            merged.append(key)
    return merged


def format_summary(
    description: str, food_items: list[str], nutrition: NutritionDetails
) -> str:
    """Render a human-readable nutrition summary."""
    items_text = ", ".join(food_items) or "none detected"
    lines = [
        f"I analyzed your meal: {description}",
        "Based on the image and description, I identified the following food "
        f"items: {items_text}.",
        "Estimated nutritional breakdown:",
        f"- Calories: {nutrition.calories:.0f} kcal",
        f"- Protein: {nutrition.protein:.1f} g",
        f"- Fat: {nutrition.fat:.1f} g",
        f"- Carbs: {nutrition.carbs:.1f} g",
        f"- Fiber: {nutrition.fiber:.1f} g",
        f"- Sugar: {nutrition.sugar:.1f} g",
        f"- Sodium: {nutrition.sodium:.1f} mg",
    ]
    return "\n".join(lines) + "\n"
