"""Category macro defaults used as a last-resort autofill."""

import re

from food_diary.data.category_defaults import (
    CATEGORY_DEFAULTS,
    CATEGORY_KEYWORDS,
    DEFAULT_FALLBACK_CATEGORY,
)
from food_diary.domain.foods import FoodItem, MacroProfile

_WORD = re.compile(r"\w+")


def get_category_defaults(
    category: str | None, fallback: str = DEFAULT_FALLBACK_CATEGORY
) -> MacroProfile:
    """Return the average profile for a category, or the fallback profile."""
    key = (category or "").strip().lower()
    if key in CATEGORY_DEFAULTS:
        return CATEGORY_DEFAULTS[key]
    return CATEGORY_DEFAULTS.get(fallback, CATEGORY_DEFAULTS[DEFAULT_FALLBACK_CATEGORY])


def needs_auto_fill(food: FoodItem) -> bool:
    """Return True only when every macro is missing or zero."""
    return not (food.calories or food.protein_g or food.fat_g or food.carbs_g)


def derive_category_from_text(text: str | None) -> str | None:
    """Guess a category key from an external category string or description."""
    if not text:
        return None
    words = _WORD.findall(text.lower())
    for category, keywords in CATEGORY_KEYWORDS:
        if any(word.startswith(keywords) for word in words):
            return category
    return None
