"""Models for image labeling results."""

from pydantic import BaseModel, Field


class ImageLabel(BaseModel):
    """Single label detected in a meal photo."""

    description: str
    score: float = Field(ge=0.0, le=1.0)


class LabelExtract(BaseModel):
    """Structured output for label detection."""

    labels: list[ImageLabel]
