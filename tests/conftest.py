"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from meal_logger.adapters.edamam_client import EdamamClient
from meal_logger.adapters.json_meal_log_repository import JsonMealLogRepository
from meal_logger.config import Settings
from meal_logger.domain.meals import MealEntry
from meal_logger.domain.nutrition import NutritionDetails
from meal_logger.domain.vision import LabelExtract
from meal_logger.services.analysis import MealAnalyzer
from meal_logger.services.editor import MealEditor
from meal_logger.services.labels import LabelClient, LabelService
from meal_logger.services.meals import MealLogService
from meal_logger.services.nutrition import NutritionService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-image"


@dataclass
class FakeLabelClient(LabelClient):
    """Fake label client returning queued payloads, one per call."""

    payloads: list[dict[str, object]] = field(default_factory=list)
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)

    async def detect_labels(self, image_data_url: str) -> LabelExtract:
        self.calls.append(image_data_url)
        if self.error is not None:
            raise self.error
        if not self.payloads:
            return LabelExtract(labels=[])
        return LabelExtract.model_validate(self.payloads.pop(0))


@dataclass
class FakeEdamamClient(EdamamClient):
    """Fake Edamam client with per-ingredient calories."""

    calories: dict[str, float] = field(default_factory=dict)
    error: Exception | None = None
    requests: list[list[str]] = field(default_factory=list)

    async def analyze(self, ingredients: list[str]) -> dict[str, object]:
        self.requests.append(list(ingredients))
        if self.error is not None:
            raise self.error
        total = sum(
            self.calories.get(line.removeprefix("1 "), 0.0) for line in ingredients
        )
        return {
            "calories": total,
            "totalNutrients": {
                "PROCNT": {"label": "Protein", "quantity": 10.25, "unit": "g"},
                "FAT": {"label": "Fat", "quantity": 5.0, "unit": "g"},
                "CHOCDF": {"label": "Carbs", "quantity": 40.04, "unit": "g"},
                "NA": {"label": "Sodium", "quantity": 120.0, "unit": "mg"},
            },
        }


@dataclass
class FakePrompter:
    """Prompter answering from scripted lists."""

    answers: list[str] = field(default_factory=list)
    selections: list[int] = field(default_factory=list)
    shown: list[str] = field(default_factory=list)

    def ask(self, question: str) -> str:
        return self.answers.pop(0)

    def choose(self, message: str, choices: Sequence[str]) -> int:
        return self.selections.pop(0)

    def show(self, text: str) -> None:
        self.shown.append(text)


def labels_payload(*descriptions: str, score: float = 0.9) -> dict[str, object]:
    """Build a label payload with the same score for every label."""
    return {
        "labels": [
            {"description": description, "score": score} for description in descriptions
        ]
    }


def make_entry(**overrides: object) -> MealEntry:
    """Build a meal entry with sensible defaults."""
    values: dict[str, object] = {
        "description": "rice and potatoes",
        "estimated_calories": 800,
        "food_items": ["rice and potatoes"],
        "nutrition_details": NutritionDetails(calories=800, protein=20.0),
        "image_path": "lunch.png",
    }
    values.update(overrides)
    return MealEntry(**values)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        openai_api_key="openai-key",
        edamam_app_id="app-id",
        edamam_app_key="app-key",
        log_file=tmp_path / "nutrition" / "nutrition-log.json",
    )


@pytest.fixture
def image_path(tmp_path: Path) -> str:
    path = tmp_path / "meal.png"
    path.write_bytes(PNG_BYTES)
    return str(path)


@pytest.fixture
def label_client() -> FakeLabelClient:
    return FakeLabelClient()


@pytest.fixture
def edamam_client() -> FakeEdamamClient:
    return FakeEdamamClient(calories={"banana": 105, "cheese": 110, "rice": 200})


@pytest.fixture
def label_service(label_client: FakeLabelClient) -> LabelService:
    return LabelService(client=label_client)


@pytest.fixture
def nutrition_service(edamam_client: FakeEdamamClient) -> NutritionService:
    return NutritionService(edamam_client=edamam_client)


@pytest.fixture
def analyzer(
    label_service: LabelService, nutrition_service: NutritionService
) -> MealAnalyzer:
    return MealAnalyzer(
        label_service=label_service, nutrition_service=nutrition_service
    )


@pytest.fixture
def editor(
    analyzer: MealAnalyzer,
    label_service: LabelService,
    nutrition_service: NutritionService,
) -> MealEditor:
    return MealEditor(
        analyzer=analyzer,
        label_service=label_service,
        nutrition_service=nutrition_service,
    )


@pytest.fixture
def repository(tmp_path: Path) -> JsonMealLogRepository:
    return JsonMealLogRepository(tmp_path / "nutrition" / "nutrition-log.json")


@pytest.fixture
def meal_log_service(
    repository: JsonMealLogRepository, analyzer: MealAnalyzer, editor: MealEditor
) -> MealLogService:
    return MealLogService(repository=repository, analyzer=analyzer, editor=editor)
