"""Conversion of user-entered quantities into canonical grams."""

import math

from food_diary.data.unit_conversions import (
    DEFAULT_PIECE_GRAMS,
    DEFAULT_PORTION_GRAMS,
    PIECE_WEIGHTS,
    UNIT_ALIASES,
    UNIT_CONVERSIONS,
)

DISPLAY_UNITS: tuple[str, ...] = tuple(UNIT_CONVERSIONS)


def resolve_unit(unit: str | None) -> str:
    """Map a unit or one of its aliases to the canonical display unit."""
    if not unit:
        return "г"
    cleaned = unit.strip().lower()
    if cleaned in UNIT_CONVERSIONS:
        return cleaned
    return UNIT_ALIASES.get(cleaned, cleaned)


def piece_weight(food_name: str | None) -> float:
    """Return the average weight of one piece of a food."""
    normalized = (food_name or "").lower()
    for keyword, grams in PIECE_WEIGHTS.items():
        if keyword in normalized:
            return grams
    return DEFAULT_PIECE_GRAMS


def convert_to_grams(
    amount: object, unit: str | None, food_name: str | None = None
) -> float:
    """Convert an amount in a display unit into grams.

    Unparseable, negative or non-finite amounts count as zero. Unknown units
    are treated as grams.
    """
    safe_amount = parse_amount(amount)
    resolved = resolve_unit(unit)
    if resolved == "порция":
        return safe_amount * DEFAULT_PORTION_GRAMS
    if resolved == "шт":
        return safe_amount * piece_weight(food_name)
    return safe_amount * UNIT_CONVERSIONS.get(resolved, 1.0)


def format_display_amount(amount: float | None, unit: str | None) -> str:
    """Format an amount with its unit, dropping a trailing ``.0``."""
    if amount is None or not unit:
        return ""
    value = amount if math.isfinite(amount) else 0.0
    if value % 1 == 0:
        return f"{round(value)} {unit}"
    return f"{round(value, 2):g} {unit}"


def parse_amount(value: object) -> float:
    """Parse a user-entered amount; anything invalid or negative becomes 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().replace(",", "."))
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number
