"""Food catalog domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

FoodSource = Literal["local", "custom", "external", "classifier"]


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrient profile, per 100 g unless stated otherwise."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float


@dataclass(frozen=True)
class FoodItem:
    """Catalog entry with macros expressed per 100 g."""

    id: str
    name: str
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    source: FoodSource
    created_at: datetime
    updated_at: datetime
    name_localized: str | None = None
    brand: str | None = None
    barcode: str | None = None
    category: str | None = None
    aliases: tuple[str, ...] = ()
    owner_id: str | None = None
    photo: str | None = None
    auto_filled: bool = False
    suspicious: bool = False
    popularity: int = 0

    @property
    def macros(self) -> MacroProfile:
        """Return the per-100 g macro profile."""
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            fat_g=self.fat_g,
            carbs_g=self.carbs_g,
        )


class RawFood(BaseModel):
    """Food record as delivered by an external source, before normalization."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    name_localized: str | None = None
    barcode: str | None = None
    calories: float | None = None
    protein_g: float | None = None
    fat_g: float | None = None
    carbs_g: float | None = None
    serving_size_g: float | None = None
    serving_calories: float | None = None
    serving_protein_g: float | None = None
    serving_fat_g: float | None = None
    serving_carbs_g: float | None = None
    category: str | None = None
    brand: str | None = None
    photo: str | None = None
    aliases: list[str] = []


@dataclass(frozen=True)
class NutritionValidation:
    """Result of a nutrition plausibility check."""

    suspicious: bool


@dataclass(frozen=True)
class SearchResult:
    """Ranked search results plus every record written during the search."""

    foods: list[FoodItem]
    updated: list[FoodItem] = field(default_factory=list)


class FoodImportRow(BaseModel):
    """One row of a bulk catalog import, values per 100 g."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    brand: str | None = None
    barcode: str | None = None
    category: str | None = None
    calories: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    carbs_g: float = 0.0
    fiber_g: float = 0.0
    aliases: list[str] = []


@dataclass(frozen=True)
class ImportResult:
    """Foods written by a bulk import and descriptions of the skipped rows."""

    imported: list[FoodItem]
    skipped: list[str] = field(default_factory=list)
