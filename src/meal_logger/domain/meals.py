"""Domain models for logged meals and their edit history."""

from datetime import UTC, datetime
from typing import Annotated, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
)
from pydantic.alias_generators import to_camel

from meal_logger.domain.nutrition import NutritionDetails

IMAGE_UPDATED_ACTION = "Updated image"
ITEM_ADDED_ACTION = "Added item"
PORTION_ADJUSTED_PREFIX = "Adjusted portion of "
IMAGE_COMPARED_ACTION = "Compared new image for remaining calories"


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


class _LogModel(BaseModel):
    """Base model serialized with camelCase keys in the log file."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageUpdatedRecord(_LogModel):
    """A new photo replaced the meal's analysis."""

    date: datetime = Field(default_factory=utc_now)
    action: Literal["Updated image"] = IMAGE_UPDATED_ACTION
    new_image_path: str
    new_calories: float


class ItemAddedRecord(_LogModel):
    """An item was added to the meal via a chat instruction."""

    date: datetime = Field(default_factory=utc_now)
    action: Literal["Added item"] = ITEM_ADDED_ACTION
    new_item: str
    additional_calories: float


class PortionAdjustedRecord(_LogModel):
    """Calories were scaled after the user ate only part of an item."""

    date: datetime = Field(default_factory=utc_now)
    action: str
    fraction: float
    original_calories: float
    new_calories: float

    @field_validator("action")
    @classmethod
    def _check_action(cls, value: str) -> str:
        if not value.startswith(PORTION_ADJUSTED_PREFIX):
            raise ValueError(f"action must start with {PORTION_ADJUSTED_PREFIX!r}")
        return value

    @classmethod
    def for_item(
        cls, item: str, fraction: float, original_calories: float, new_calories: float
    ) -> "PortionAdjustedRecord":
        """Build a record whose action names the adjusted item."""
        return cls(
            action=f"{PORTION_ADJUSTED_PREFIX}{item}",
            fraction=fraction,
            original_calories=original_calories,
            new_calories=new_calories,
        )


class ImageComparedRecord(_LogModel):
    """Remaining calories were estimated from a photo of the leftovers."""

    date: datetime = Field(default_factory=utc_now)
    action: Literal["Compared new image for remaining calories"] = (
        IMAGE_COMPARED_ACTION
    )
    new_image_path: str
    original_calories: float
    remaining_fraction: float
    net_calories: float


def _history_tag(value: object) -> str | None:
    if isinstance(value, dict):
        action = value.get("action")
    else:
        action = getattr(value, "action", None)
    if not isinstance(action, str):
        return None
    if action == IMAGE_UPDATED_ACTION:
        return "image_updated"
    if action == ITEM_ADDED_ACTION:
        return "item_added"
    if action.startswith(PORTION_ADJUSTED_PREFIX):
        return "portion_adjusted"
    if action == IMAGE_COMPARED_ACTION:
        return "image_compared"
    return None


HistoryRecord = Annotated[
    Union[
        Annotated[ImageUpdatedRecord, Tag("image_updated")],
        Annotated[ItemAddedRecord, Tag("item_added")],
        Annotated[PortionAdjustedRecord, Tag("portion_adjusted")],
        Annotated[ImageComparedRecord, Tag("image_compared")],
    ],
    Discriminator(_history_tag),
]


class MealEntry(_LogModel):
    """One logged meal as persisted in the log file."""

    date: datetime = Field(default_factory=utc_now)
    description: str
    estimated_calories: float = Field(ge=0.0)
    food_items: list[str] = Field(default_factory=list)
    nutrition_details: NutritionDetails = Field(default_factory=NutritionDetails)
    image_path: str
    history: list[HistoryRecord] = Field(default_factory=list)

    def with_record(self, record: HistoryRecord, **changes: object) -> "MealEntry":
        """Return a copy with field changes applied and one record appended."""
        return self.model_copy(
            update={**changes, "history": [*self.history, record]}
        )
