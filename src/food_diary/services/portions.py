"""Portion weight heuristics for classifier labels and food categories."""

import math

from food_diary.data.label_map import (
    DEFAULT_LABEL_WEIGHT_BAND,
    LABEL_TO_FOOD_MAP,
    LABEL_WEIGHT_BANDS,
)
from food_diary.domain.vision import PortionEstimate

DEFAULT_CONFIDENCE = 0.5

# (keywords, min, max, average, kind), checked in order.
_PORTION_KINDS: tuple[tuple[tuple[str, ...], int, int, int, str], ...] = (
    (
        ("meat", "fish", "chicken", "beef", "pork", "turkey", "salmon", "tuna"),
        120,
        180,
        150,
        "meat",
    ),
    (("rice", "pasta", "noodles", "potato", "grains", "grain"), 150, 200, 175, "side"),
    (("soup", "stew", "broth"), 250, 350, 300, "soup"),
    (("fruit", "apple", "banana", "orange", "avocado"), 100, 150, 125, "fruit"),
    (
        (
            "vegetable",
            "tomato",
            "cucumber",
            "carrot",
            "pepper",
            "salad",
            "lettuce",
            "broccoli",
            "cabbage",
        ),
        100,
        150,
        125,
        "vegetable",
    ),
    (("dairy", "cheese", "milk", "yogurt", "egg"), 50, 150, 100, "dairy"),
    (("bread", "bakery"), 30, 80, 50, "grain"),
)

_DEFAULT_PORTION = PortionEstimate(min_g=100, max_g=200, average_g=150, kind="other")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves up.

    Float noise is dropped first so ``150 * 0.85`` rounds like ``127.5``.
    """
    return math.floor(round(value, 6) + 0.5)


def clamp_confidence(confidence: object) -> float:
    """Clamp a classifier confidence into [0, 1]; junk becomes 0.5."""
    if isinstance(confidence, bool) or not isinstance(confidence, int | float):
        return DEFAULT_CONFIDENCE
    if not math.isfinite(confidence):
        return DEFAULT_CONFIDENCE
    return min(1.0, max(0.0, float(confidence)))


def estimate_weight_by_label(label: str, confidence: float = DEFAULT_CONFIDENCE) -> int:
    """Estimate a portion weight in grams for a classifier label.

    Known labels scale their default weight between 70 % and 100 % with the
    confidence; other labels interpolate inside a keyword band.
    """
    normalized = label.strip().lower()
    safe_confidence = clamp_confidence(confidence)
    mapping = LABEL_TO_FOOD_MAP.get(normalized)
    if mapping is not None and mapping.default_weight_g:
        return round_half_up(mapping.default_weight_g * (0.7 + safe_confidence * 0.3))

    low, high = DEFAULT_LABEL_WEIGHT_BAND
    for keywords, band_low, band_high in LABEL_WEIGHT_BANDS:
        if any(keyword in normalized for keyword in keywords):
            low, high = band_low, band_high
            break
    return round_half_up(low + safe_confidence * (high - low))


def estimate_portion_by_category(category: str | None) -> PortionEstimate:
    """Return a typical portion range for a food category or label."""
    normalized = (category or "").strip().lower()
    if not normalized:
        return _DEFAULT_PORTION
    for keywords, min_g, max_g, average_g, kind in _PORTION_KINDS:
        if any(keyword in normalized for keyword in keywords):
            return PortionEstimate(min_g=min_g, max_g=max_g, average_g=average_g, kind=kind)
    return _DEFAULT_PORTION
