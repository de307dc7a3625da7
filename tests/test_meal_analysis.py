"""Tests for meal analysis."""

import asyncio

from meal_logger.domain.nutrition import NutritionDetails
from meal_logger.domain.vision import ImageLabel
from meal_logger.services.analysis import (
    MealAnalyzer,
    description_items,
    food_items_from_labels,
    format_summary,
    merge_food_items,
)
from tests.conftest import FakeEdamamClient, FakeLabelClient, labels_payload


def test_food_items_from_labels_filters_by_keyword() -> None:
    labels = [
        ImageLabel(description="Burrito", score=0.9),
        ImageLabel(description="Tableware", score=0.9),
        ImageLabel(description="Fast food", score=0.8),
        ImageLabel(description="Sweet Potato", score=0.75),
        ImageLabel(description="Rice", score=0.9),
    ]

    assert food_items_from_labels(labels) == ["burrito", "fast food", "sweet potato"]


def test_description_items_trims_and_lowercases() -> None:
    assert description_items(" Rice,  Black Beans ,,salsa ") == [
        "rice",
        "black beans",
        "salsa",
    ]


def test_merge_food_items_dedupes_case_insensitively() -> None:
    merged = merge_food_items(["Cheese", "cheese"], description_items("cheese, rice"))

    assert merged == ["cheese", "rice"]


def test_analyze_combines_labels_and_description(
    analyzer: MealAnalyzer,
    label_client: FakeLabelClient,
    edamam_client: FakeEdamamClient,
    image_path: str,
) -> None:
    label_client.payloads.append(labels_payload("Cheese", "cheese", "Plate"))

    analysis = asyncio.run(analyzer.analyze("cheese, rice", image_path))

    assert analysis.food_items == ["cheese", "rice"]
    assert edamam_client.requests == [["1 cheese", "1 rice"]]
    assert analysis.estimated_calories == 310
    assert analysis.nutrition_details.calories == 310


def test_analyze_uses_description_when_labeling_fails(
    analyzer: MealAnalyzer, label_client: FakeLabelClient, image_path: str
) -> None:
    label_client.error = PermissionError("could not load credentials")

    analysis = asyncio.run(analyzer.analyze("Banana, rice", image_path))

    assert analysis.food_items == ["banana", "rice"]
    assert analysis.estimated_calories == 305
    assert "banana, rice" in analysis.summary


def test_analyze_with_nothing_detected(
    analyzer: MealAnalyzer, edamam_client: FakeEdamamClient, image_path: str
) -> None:
    analysis = asyncio.run(analyzer.analyze("", image_path))

    assert analysis.food_items == []
    assert analysis.nutrition_details == NutritionDetails()
    assert "none detected" in analysis.summary
    assert edamam_client.requests == []


def test_format_summary_rounds_values() -> None:
    nutrition = NutritionDetails(
        calories=512.6,
        protein=10.25,
        fat=5,
        carbs=40.04,
        fiber=0,
        sugar=1.96,
        sodium=120,
    )

    summary = format_summary("Burrito bowl", ["burrito", "salsa"], nutrition)

    assert summary.splitlines() == [
        "I analyzed your meal: Burrito bowl",
        "Based on the image and description, I identified the following food "
        "items: burrito, salsa.",
        "Estimated nutritional breakdown:",
        "- Calories: 513 kcal",
        "- Protein: 10.2 g",
        "- Fat: 5.0 g",
        "- Carbs: 40.0 g",
        "- Fiber: 0.0 g",
        "- Sugar: 2.0 g",
        "- Sodium: 120.0 mg",
    ]
