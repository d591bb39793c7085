"""Recipe analysis domain models."""

from dataclasses import dataclass, field
from typing import Literal

from food_diary.domain.foods import FoodItem, MacroProfile

BaseUnit = Literal["g", "ml", "pcs"]


@dataclass(frozen=True)
class ParsedIngredient:
    """Ingredient line split into a product name and an amount.

    ``amount`` is expressed in ``unit`` (grams, millilitres or pieces), so
    "2 ст.л." becomes 30 ml. ``amount_grams`` is the weight used for macros.
    """

    original: str
    name: str
    amount: float | None
    unit: BaseUnit | None
    amount_text: str
    amount_grams: float


@dataclass(frozen=True)
class RecipeIngredient:
    """Parsed ingredient with the catalog food it matched."""

    parsed: ParsedIngredient
    food: FoodItem | None
    macros: MacroProfile


@dataclass(frozen=True)
class RecipeTotals:
    """Whole-recipe macros and the same macros per 100 g."""

    total: MacroProfile
    weight_g: float
    per_100g: MacroProfile


@dataclass(frozen=True)
class RecipeAnalysis:
    ingredients: list[RecipeIngredient]
    totals: RecipeTotals
    unmatched: list[str] = field(default_factory=list)
