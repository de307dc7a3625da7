"""Image label extraction using a vision model."""

import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from meal_logger.domain.vision import ImageLabel, LabelExtract

_logger = logging.getLogger(__name__)


class LabelClient(Protocol):
    """Interface for vision label detection."""

    async def detect_labels(self, image_data_url: str) -> LabelExtract:
        """Return validated labels for a base64 image data URL."""


@dataclass
class LabelService:
    """Service that labels meal photos and drops low-confidence labels."""

    client: LabelClient
    min_score: float = 0.7

    async def extract(self, image_path: str) -> list[ImageLabel]:
        """Return labels scoring above ``min_score``.

        Labeling is best effort: an unreadable file or a failed API call is
        logged and results in an empty list.
        """
        try:
            image_bytes = Path(image_path).expanduser().read_bytes()
            extract = await self.client.detect_labels(_to_data_url(image_bytes))
        except Exception as exc:
            _logger.error("Error analyzing image %s: %s", image_path, exc)
            return []
        labels = [label for label in extract.labels if label.score > self.min_score]
        _logger.debug(
            "Labels for %s: kept=%s total=%s",
            image_path,
            len(labels),
            len(extract.labels),
        )
        return labels


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"
