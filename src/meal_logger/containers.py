"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from meal_logger.adapters.edamam_client import HttpxEdamamClient
from meal_logger.adapters.json_meal_log_repository import JsonMealLogRepository
from meal_logger.adapters.openai_vision_client import OpenAILabelClient
from meal_logger.config import Settings
from meal_logger.services.analysis import MealAnalyzer
from meal_logger.services.editor import MealEditor
from meal_logger.services.labels import LabelService
from meal_logger.services.meals import MealLogService
from meal_logger.services.nutrition import NutritionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    log_path: Path
    label_service: LabelService
    nutrition_service: NutritionService
    meal_log_service: MealLogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, log_file: Path | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    log_path = log_file or resolved_settings.log_file
    openai_client = OpenAILabelClient.create(
        api_key=resolved_settings.openai_api_key,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    label_service = LabelService(
        client=openai_client,
        min_score=resolved_settings.label_confidence_threshold,
    )
    edamam_client = HttpxEdamamClient.create(
        app_id=resolved_settings.edamam_app_id,
        app_key=resolved_settings.edamam_app_key,
        base_url=resolved_settings.edamam_base_url,
    )
    nutrition_service = NutritionService(edamam_client=edamam_client)
    analyzer = MealAnalyzer(
        label_service=label_service,
        nutrition_service=nutrition_service,
    )
    editor = MealEditor(
        analyzer=analyzer,
        label_service=label_service,
        nutrition_service=nutrition_service,
    )
    meal_log_service = MealLogService(
        repository=JsonMealLogRepository(log_path),
        analyzer=analyzer,
        editor=editor,
    )

    async def close_resources() -> None:
        await openai_client.close()
        await edamam_client.close()

    return AppContainer(
        settings=resolved_settings,
        log_path=log_path,
        label_service=label_service,
        nutrition_service=nutrition_service,
        meal_log_service=meal_log_service,
        close_resources=close_resources,
    )
