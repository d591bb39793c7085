"""Recipe text parsing and nutrition totals."""

import logging
import re
from dataclasses import dataclass

from food_diary.domain.foods import FoodItem, MacroProfile
from food_diary.domain.recipes import (
    BaseUnit,
    ParsedIngredient,
    RecipeAnalysis,
    RecipeIngredient,
    RecipeTotals,
)
from food_diary.services.catalog import FoodCatalogService
from food_diary.services.diary import portion_macros
from food_diary.services.normalizer import round_macro
from food_diary.services.units import convert_to_grams, format_display_amount

_NUMBER = r"\d+(?:[.,]\d+)?"
_RANGE = re.compile(rf"({_NUMBER})\s*[–—-]\s*({_NUMBER})")
_FRACTION = re.compile(r"(\d+)\s*/\s*(\d+)")
_SINGLE = re.compile(_NUMBER)
# Commas split ingredients unless they sit inside a decimal number.
_SEPARATORS = re.compile(r"[\n;]|(?<!\d),|,(?!\d)")
_SPACES = re.compile(r"\s+")

# (pattern, base unit, conversion unit, display unit). Spoons precede
# litres so "ч.л." is not read as "л".
_UNIT_TABLE: tuple[tuple[str, BaseUnit, str, str], ...] = (
    (r"ч\.?\s*л\.?|чайн\w*\s+ложк\w*|tsp", "ml", "ч.л", "ч.л."),
    (r"ст\.?\s*л\.?|столов\w*\s+ложк\w*|ст\.?\s*ложк\w*|tbsp", "ml", "ст.л", "ст.л."),
    (r"кг|килограмм\w*|kg", "g", "кг", "кг"),
    (r"грамм\w*|гр?\.?|grams?|gr?", "g", "г", "г"),
    (r"миллилитр\w*|мл|ml", "ml", "мл", "мл"),
    (r"литр\w*|л|l", "ml", "л", "л"),
    (r"штук\w*|шт\.?|кус\w*|pcs|pieces?", "pcs", "шт", "шт"),
    (r"дол\w*|зубчик\w*|cloves?", "pcs", "шт", "шт"),
)
_UNITS_AFTER = tuple(
    (re.compile(rf"^[\s-]*(?:{pattern})(?!\w)", re.IGNORECASE), base, unit, display)
    for pattern, base, unit, display in _UNIT_TABLE
)
_UNITS_BEFORE = tuple(
    (re.compile(rf"(?<!\w)(?:{pattern})[\s-]*$", re.IGNORECASE), base, unit, display)
    for pattern, base, unit, display in _UNIT_TABLE
)

# Unit assumed from the product name when the line carries only a number.
_DEFAULT_UNITS: tuple[tuple[tuple[str, ...], BaseUnit, str], ...] = (
    (("морков", "лук", "чеснок", "зубчик", "яйц", "яиц"), "pcs", "шт"),
    (("молок", "сливк", "вода", "воды", "масл"), "ml", "мл"),
)

_ENDINGS = ("ами", "ями", "ого", "его", "ки", "ой", "ей", "а", "я", "ы", "и", "у", "ю", "ь")
_MIN_STEM = 3

_ZERO = MacroProfile(0.0, 0.0, 0.0, 0.0)

_logger = logging.getLogger(__name__)


def parse_recipe_text(text: str) -> list[ParsedIngredient]:
    """Split recipe text on newlines, semicolons and commas and parse each line."""
    if not text or not text.strip():
        return []
    parsed = (parse_ingredient_line(line) for line in _SEPARATORS.split(text))
    return [item for item in parsed if item is not None]


def parse_ingredient_line(line: str) -> ParsedIngredient | None:
    """Parse one ingredient in either order: "250 г говядины" or "говядина 250 г".

    Ranges such as "1–2" use their midpoint. Without a unit, the unit is
    guessed from the product name and defaults to grams.
    """
    original = line.strip()
    if not original:
        return None

    quantity = _find_quantity(original)
    if quantity is None:
        name = _clean_name(original) or original
        return ParsedIngredient(
            original=original,
            name=name,
            amount=None,
            unit=None,
            amount_text=name,
            amount_grams=0.0,
        )

    count, start, end = quantity
    found = _find_unit(original, start, end)
    if found is None:
        name = _clean_name(f"{original[:start]} {original[end:]}") or original
        base, unit = _default_unit(name)
        display = unit
    else:
        base, unit, display, start, end = found
        name = _clean_name(f"{original[:start]} {original[end:]}") or original

    grams = convert_to_grams(count, unit, name)
    amount = count if base == "pcs" else grams
    if unit == "л":
        amount_text = format_display_amount(amount, "мл")
    else:
        amount_text = format_display_amount(count, display)
    return ParsedIngredient(
        original=original,
        name=name,
        amount=round_macro(amount),
        unit=base,
        amount_text=amount_text,
        amount_grams=round_macro(grams),
    )


def calc_totals(ingredients: list[RecipeIngredient]) -> RecipeTotals:
    """Sum ingredient macros and scale them to 100 g of the finished recipe.

    A recipe without any weight is treated as weighing 100 g.
    """
    calories = sum(item.macros.calories for item in ingredients)
    protein = sum(item.macros.protein_g for item in ingredients)
    fat = sum(item.macros.fat_g for item in ingredients)
    carbs = sum(item.macros.carbs_g for item in ingredients)
    weight = sum(item.parsed.amount_grams for item in ingredients)
    factor = 100.0 / (weight if weight > 0 else 100.0)
    return RecipeTotals(
        total=MacroProfile(
            calories=round_macro(calories),
            protein_g=round_macro(protein),
            fat_g=round_macro(fat),
            carbs_g=round_macro(carbs),
        ),
        weight_g=round_macro(weight),
        per_100g=MacroProfile(
            calories=round_macro(calories * factor),
            protein_g=round_macro(protein * factor),
            fat_g=round_macro(fat * factor),
            carbs_g=round_macro(carbs * factor),
        ),
    )


@dataclass
class RecipeAnalyzer:
    """Matches recipe ingredients to catalog foods and totals their macros."""

    catalog: FoodCatalogService
    search_limit: int = 3

    async def analyze(self, text: str, owner_id: str | None = None) -> RecipeAnalysis:
        """Parse recipe text and compute its nutrition.

        Unmatched ingredients count towards the weight with zero macros and
        are listed in ``unmatched``.
        """
        ingredients: list[RecipeIngredient] = []
        unmatched: list[str] = []
        for parsed in parse_recipe_text(text):
            food = await self._match(parsed.name, owner_id)
            if food is None:
                unmatched.append(parsed.name)
                macros = _ZERO
            else:
                macros = portion_macros(food.macros, parsed.amount_grams)
            ingredients.append(RecipeIngredient(parsed=parsed, food=food, macros=macros))

        totals = calc_totals(ingredients)
        _logger.info(
            "Recipe analyzed: ingredients=%s unmatched=%s calories=%s",
            len(ingredients),
            len(unmatched),
            totals.total.calories,
        )
        return RecipeAnalysis(ingredients=ingredients, totals=totals, unmatched=unmatched)

    async def _match(self, name: str, owner_id: str | None) -> FoodItem | None:
        terms = [name]
        stemmed = stem_words(name)
        if stemmed != name:
            terms.append(stemmed)
        for term in terms:
            try:
                result = await self.catalog.search(
                    term, limit=self.search_limit, owner_id=owner_id
                )
            except Exception:
                _logger.exception("Catalog search failed for ingredient %s", term)
                return None
            if result.foods:
                return result.foods[0]
        return None


def stem_words(name: str) -> str:
    """Drop one inflection ending per word: "морковки" -> "морков"."""
    words = []
    for word in name.lower().split():
        for ending in _ENDINGS:
            if word.endswith(ending) and len(word) - len(ending) >= _MIN_STEM:
                word = word[: -len(ending)]
                break
        words.append(word)
    return " ".join(words)


def _find_quantity(line: str) -> tuple[float, int, int] | None:
    match = _RANGE.search(line)
    if match:
        low, high = _to_number(match[1]), _to_number(match[2])
        return (low + high) / 2, match.start(), match.end()
    match = _FRACTION.search(line)
    if match and int(match[2]) != 0:
        return int(match[1]) / int(match[2]), match.start(), match.end()
    match = _SINGLE.search(line)
    if match:
        return _to_number(match[0]), match.start(), match.end()
    return None


def _find_unit(
    line: str, start: int, end: int
) -> tuple[BaseUnit, str, str, int, int] | None:
    """Find the unit next to the quantity; return it with the span to cut."""
    after = line[end:]
    for pattern, base, unit, display in _UNITS_AFTER:
        match = pattern.match(after)
        if match:
            return base, unit, display, start, end + match.end()
    before = line[:start]
    for pattern, base, unit, display in _UNITS_BEFORE:
        match = pattern.search(before)
        if match:
            return base, unit, display, match.start(), end
    return None


def _default_unit(name: str) -> tuple[BaseUnit, str]:
    lowered = name.lower()
    for keywords, base, unit in _DEFAULT_UNITS:
        if any(keyword in lowered for keyword in keywords):
            return base, unit
    return "g", "г"


def _clean_name(text: str) -> str:
    return _SPACES.sub(" ", text.replace(",", " ").replace(";", " ")).strip(" -.")


def _to_number(text: str) -> float:
    return float(text.replace(",", "."))
