"""OpenAI image labeling backed by structured outputs."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from meal_logger.domain.vision import LabelExtract
from meal_logger.services.labels import LabelClient

LABEL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "labels": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "description": {"type": "string"},
                    "score": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                },
                "required": ["description", "score"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["labels"],
    "additionalProperties": False,
}

LABEL_PROMPT = (
    "Describe the image with short labels, the way an image labeling API would. "
    "Include the dishes and ingredients you can see as well as general labels "
    "such as 'Food' or 'Tableware'. Give each label a confidence score (0-1)."
)


@dataclass
class OpenAILabelClient(LabelClient):
    """Labels meal photos with an OpenAI vision model."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAILabelClient":
        """Create a label client with its own OpenAI session."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def detect_labels(self, image_data_url: str) -> LabelExtract:
        """Ask the model for labels and validate them against ``LabelExtract``."""
        response = await self.client.responses.create(
            **self.label_request(image_data_url)
        )
        if not response.output_text:
            raise RuntimeError("OpenAI returned no labels")
        return LabelExtract.model_validate_json(response.output_text)

    def label_request(self, image_data_url: str) -> dict[str, object]:
        """Build the Responses API payload for one photo."""
        message = {
            "role": "user",
            "content": [
                {"type": "input_text", "text": LABEL_PROMPT},
                {"type": "input_image", "image_url": image_data_url},
            ],
        }
        request: dict[str, object] = {
            "model": self.model,
            "input": [message],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "label_detection",
                    "strict": True,
                    "schema": LABEL_SCHEMA,
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request["reasoning"] = {"effort": self.reasoning_effort}
        return request

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()
