"""Models for classifier output and photo analysis results."""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from food_diary.domain.foods import FoodItem


class LabelPrediction(BaseModel):
    """Single label predicted by the food classifier."""

    label: str
    confidence: float = Field(ge=0.0, le=1.0)


class ClassifierOutput(BaseModel):
    """Structured output of the food classifier."""

    labels: list[LabelPrediction]


@dataclass(frozen=True)
class LabelMapping:
    """Catalog search hints for one classifier label."""

    canonical_name: str
    search_terms: tuple[str, ...]
    default_weight_g: int


@dataclass(frozen=True)
class LabelMatch:
    """Catalog food matched to a label with an estimated portion weight."""

    food: FoodItem | None
    estimated_weight_g: int
    mapping_hit: bool


@dataclass(frozen=True)
class PortionEstimate:
    """Plausible portion range for a kind of food."""

    min_g: int
    max_g: int
    average_g: int
    kind: str


@dataclass(frozen=True)
class PhotoAnalysis:
    """Result of analyzing a food photo."""

    food: FoodItem | None
    detected_label: str
    confidence: float
    estimated_weight_g: int
    portion: PortionEstimate
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
