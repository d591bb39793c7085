"""Normalization of external food records to the per-100 g representation."""

import math
import re
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from uuid import uuid4

from food_diary.domain.foods import FoodItem, FoodSource, NutritionValidation, RawFood

MAX_CALORIES_PER_100G = 1000.0
MAX_MACRO_PER_100G = 100.0

SUSPICIOUS_CALORIES_PER_100G = 900.0
SUSPICIOUS_MACRO_SUM_PER_100G = 110.0

_NON_WORD = re.compile(r"[^a-z0-9а-яё]+")
_SPACES = re.compile(r"\s+")


def normalize_food_data(
    raw: RawFood, source: FoodSource, owner_id: str | None = None
) -> FoodItem | None:
    """Convert a raw food record into a catalog item.

    Returns ``None`` for records without a name or whose macros are all zero,
    so bulk importers can skip them.
    """
    name = (raw.name or "").strip()
    if not name:
        return None

    serving_size = _finite(raw.serving_size_g)
    if serving_size > 0:
        multiplier = 100.0 / serving_size
        calories = _per_serving(raw.serving_calories, raw.calories) * multiplier
        protein = _per_serving(raw.serving_protein_g, raw.protein_g) * multiplier
        fat = _per_serving(raw.serving_fat_g, raw.fat_g) * multiplier
        carbs = _per_serving(raw.serving_carbs_g, raw.carbs_g) * multiplier
    else:
        calories = _finite(raw.calories)
        protein = _finite(raw.protein_g)
        fat = _finite(raw.fat_g)
        carbs = _finite(raw.carbs_g)

    calories = round_macro(_clamp(calories, MAX_CALORIES_PER_100G))
    protein = round_macro(_clamp(protein, MAX_MACRO_PER_100G))
    fat = round_macro(_clamp(fat, MAX_MACRO_PER_100G))
    carbs = round_macro(_clamp(carbs, MAX_MACRO_PER_100G))
    if calories == 0 and protein == 0 and fat == 0 and carbs == 0:
        return None

    now = datetime.now(tz=UTC)
    name_localized = (raw.name_localized or "").strip() or None
    return FoodItem(
        id=new_food_id(),
        name=name,
        name_localized=name_localized,
        brand=raw.brand or None,
        barcode=(raw.barcode or "").strip() or None,
        calories=calories,
        protein_g=protein,
        fat_g=fat,
        carbs_g=carbs,
        category=raw.category or None,
        aliases=tuple(alias for alias in raw.aliases if alias),
        source=source,
        owner_id=owner_id,
        photo=raw.photo or None,
        auto_filled=False,
        popularity=0,
        created_at=now,
        updated_at=now,
    )


def round_macro(value: float, digits: int = 2) -> float:
    """Round half up to ``digits`` decimal places, so 1.125 becomes 1.13."""
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def new_food_id() -> str:
    """Return a fresh catalog id."""
    return f"food_{uuid4().hex}"


def normalize_food_text(value: str | None) -> str:
    """Lower-case text and collapse punctuation into single spaces."""
    if not value:
        return ""
    cleaned = _NON_WORD.sub(" ", value.lower())
    return _SPACES.sub(" ", cleaned).strip()


def validate_nutrition(
    calories: float,
    protein_g: float,
    fat_g: float,
    carbs_g: float,
    fiber_g: float = 0.0,
) -> NutritionValidation:
    """Check user-entered per-100 g values.

    Raises ``ValueError`` for negative or non-finite values and flags values
    that are possible but unlikely.
    """
    values = [calories, protein_g, fat_g, carbs_g]
    if any(not math.isfinite(value) or value < 0 for value in values):
        raise ValueError("Nutrition values must be finite and non-negative")
    fiber = fiber_g if math.isfinite(fiber_g) and fiber_g > 0 else 0.0
    macro_sum = protein_g + fat_g + carbs_g + fiber
    suspicious = (
        calories > SUSPICIOUS_CALORIES_PER_100G
        or protein_g > MAX_MACRO_PER_100G
        or fat_g > MAX_MACRO_PER_100G
        or carbs_g > MAX_MACRO_PER_100G
        or fiber > MAX_MACRO_PER_100G
        or macro_sum > SUSPICIOUS_MACRO_SUM_PER_100G
    )
    return NutritionValidation(suspicious=suspicious)


def _per_serving(serving_value: float | None, plain_value: float | None) -> float:
    if serving_value is not None:
        return _finite(serving_value)
    return _finite(plain_value)


def _finite(value: float | None) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return float(value)


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(upper, value))
