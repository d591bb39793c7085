"""Photo analysis: classify, map to a catalog food, estimate macros."""

import logging
from dataclasses import dataclass
from typing import Protocol

from food_diary.domain.foods import FoodItem, MacroProfile
from food_diary.domain.vision import LabelPrediction, PhotoAnalysis
from food_diary.services.label_mapper import LabelMapper
from food_diary.services.portions import estimate_portion_by_category

FALLBACK_LABEL = "food"
FALLBACK_CONFIDENCE = 0.5

_logger = logging.getLogger(__name__)


class FoodClassifier(Protocol):
    """Interface for an image food classifier."""

    async def classify(self, image_bytes: bytes) -> list[LabelPrediction]:
        """Return label predictions, best first."""


@dataclass
class PhotoAnalysisService:
    """Service that turns a food photo into a diary-ready estimate."""

    classifier: FoodClassifier | None
    label_mapper: LabelMapper

    async def analyze(self, image_bytes: bytes, owner_id: str | None = None) -> PhotoAnalysis:
        """Analyze a photo; classifier failures fall back to a generic label."""
        if not image_bytes:
            raise ValueError("Image is empty")

        prediction = await self._top_prediction(image_bytes)
        match = await self.label_mapper.map_label_to_food(
            prediction.label, prediction.confidence, owner_id
        )
        macros = recalculate_macros(match.food, match.estimated_weight_g)
        category = match.food.category if match.food and match.food.category else None
        return PhotoAnalysis(
            food=match.food,
            detected_label=prediction.label,
            confidence=prediction.confidence,
            estimated_weight_g=match.estimated_weight_g,
            portion=estimate_portion_by_category(category or prediction.label),
            calories=macros.calories,
            protein_g=macros.protein_g,
            fat_g=macros.fat_g,
            carbs_g=macros.carbs_g,
        )

    async def _top_prediction(self, image_bytes: bytes) -> LabelPrediction:
        fallback = LabelPrediction(label=FALLBACK_LABEL, confidence=FALLBACK_CONFIDENCE)
        if self.classifier is None:
            return fallback
        try:
            predictions = await self.classifier.classify(image_bytes)
        except Exception:
            _logger.exception("Food classifier failed, using fallback label")
            return fallback
        for prediction in predictions:
            label = prediction.label.strip().lower()
            if label:
                return LabelPrediction(label=label, confidence=prediction.confidence)
        return fallback


def recalculate_macros(food: FoodItem | None, weight_g: float) -> MacroProfile:
    """Return macros for a weight: calories to an integer, grams to 0.1."""
    if food is None or weight_g <= 0:
        return MacroProfile(calories=0, protein_g=0.0, fat_g=0.0, carbs_g=0.0)
    multiplier = weight_g / 100.0
    return MacroProfile(
        calories=round(food.calories * multiplier),
        protein_g=round(food.protein_g * multiplier, 1),
        fat_g=round(food.fat_g * multiplier, 1),
        carbs_g=round(food.carbs_g * multiplier, 1),
    )
