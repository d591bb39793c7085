"""OpenAI Responses API client for food photo classification."""

import base64
import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from food_diary.domain.vision import ClassifierOutput, LabelPrediction
from food_diary.services.photo import FoodClassifier

CLASSIFIER_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "labels": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                },
                "required": ["label", "confidence"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["labels"],
    "additionalProperties": False,
}

CLASSIFIER_PROMPT = (
    "Identify the main food in the image. "
    "Return up to three short lowercase English labels such as 'chicken', "
    "'rice' or 'apple', best first, each with a confidence between 0 and 1."
)


@dataclass
class OpenAIFoodClassifier(FoodClassifier):
    """Food classifier backed by OpenAI Responses API."""

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
    ) -> "OpenAIFoodClassifier":
        """Create an OpenAI food classifier."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def classify(self, image_bytes: bytes) -> list[LabelPrediction]:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": CLASSIFIER_PROMPT},
                        {"type": "input_image", "image_url": to_data_url(image_bytes)},
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "food_labels",
                    "strict": True,
                    "schema": CLASSIFIER_SCHEMA,
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        output = ClassifierOutput.model_validate(json.loads(output_text))
        return sorted(output.labels, key=lambda item: item.confidence, reverse=True)

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()


def to_data_url(image_bytes: bytes) -> str:
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
    return "image/jpeg"
