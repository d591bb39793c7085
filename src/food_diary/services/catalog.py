"""Food catalog search, matching, barcode lookup and autofill."""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Literal, Protocol

from pydantic import ValidationError

from food_diary.data.category_defaults import DEFAULT_FALLBACK_CATEGORY
from food_diary.domain.foods import (
    FoodImportRow,
    FoodItem,
    ImportResult,
    MacroProfile,
    RawFood,
    SearchResult,
)
from food_diary.services.category_defaults import get_category_defaults, needs_auto_fill
from food_diary.services.food_import import parse_csv_rows
from food_diary.services.lookup import NutritionLookupService
from food_diary.services.normalizer import (
    new_food_id,
    normalize_food_data,
    normalize_food_text,
    round_macro,
    validate_nutrition,
)

MatchKind = Literal["exact", "prefix", "substring", "subsequence"]

_MATCH_ORDER: dict[MatchKind, int] = {
    "exact": 0,
    "prefix": 1,
    "substring": 2,
    "subsequence": 2,
}
_NO_MATCH_ORDER = 3

_logger = logging.getLogger(__name__)


class CatalogStore(Protocol):
    """Key-value persistence for catalog foods.

    Shared foods (local, external, classifier) are visible to everyone;
    custom foods are stored per owner and only returned by ``list_custom``.
    """

    def get(self, food_id: str) -> FoodItem | None:
        """Return a shared or custom food by id."""

    def get_by_barcode(self, code: str) -> FoodItem | None:
        """Return the shared food with this barcode, if any."""

    def upsert(self, food: FoodItem) -> None:
        """Insert or replace a food keyed by id."""

    def query_all(self) -> list[FoodItem]:
        """Return every shared food."""

    def list_custom(self, owner_id: str) -> list[FoodItem]:
        """Return the custom foods created by an owner."""


def fuzzy_match(query: str, text: str | None) -> MatchKind | None:
    """Return how loosely ``query`` matches ``text``, or None."""
    if not text:
        return None
    needle = query.strip().lower()
    if not needle:
        return None
    haystack = text.lower()
    if haystack == needle:
        return "exact"
    if haystack.startswith(needle):
        return "prefix"
    if needle in haystack:
        return "substring"
    position = 0
    for char in haystack:
        if char == needle[position]:
            position += 1
            if position == len(needle):
                return "subsequence"
    return None


def searchable_fields(food: FoodItem) -> list[str]:
    """Return the food's searchable texts in match order."""
    fields = [
        food.name,
        food.name_localized,
        food.brand,
        food.category,
        food.barcode,
        *food.aliases,
    ]
    return [value for value in fields if value]


def match_food(query: str, food: FoodItem) -> MatchKind | None:
    """Return the strongest match of the query over the food's fields."""
    best: MatchKind | None = None
    for value in searchable_fields(food):
        kind = fuzzy_match(query, value)
        if kind is None:
            continue
        if best is None or _MATCH_ORDER[kind] < _MATCH_ORDER[best]:
            best = kind
        if best == "exact":
            break
    return best


def rank_foods(query: str, foods: list[FoodItem]) -> list[FoodItem]:
    """Order foods: exact matches, prefix matches, then the rest by name."""

    def sort_key(food: FoodItem) -> tuple[int, str, str]:
        kind = match_food(query, food)
        order = _MATCH_ORDER[kind] if kind else _NO_MATCH_ORDER
        return (order, food.name.casefold(), food.id)

    return sorted(foods, key=sort_key)


def in_category(food: FoodItem, category: str | None) -> bool:
    """Return whether the food belongs to the category; no category matches all."""
    if not category or not category.strip():
        return True
    return (food.category or "").strip().lower() == category.strip().lower()


@dataclass
class FoodCatalogService:
    """Search and maintenance of the food catalog."""

    store: CatalogStore
    lookup: NutritionLookupService
    external_search_threshold: int = 10
    fallback_category: str = DEFAULT_FALLBACK_CATEGORY

    async def search(
        self,
        query: str,
        limit: int = 30,
        owner_id: str | None = None,
        category: str | None = None,
    ) -> SearchResult:
        """Search local and custom foods, falling back to external databases.

        With ``category`` set, only foods of that category are returned.
        Every returned food has been through the autofill cascade. Records
        written to the catalog during the call are reported in ``updated``.
        """
        cleaned = query.strip()
        if not cleaned or limit <= 0:
            return SearchResult(foods=[])

        pool = self._pool(owner_id)
        local = [
            food
            for food in pool
            if in_category(food, category) and match_food(cleaned, food)
        ]
        merged: dict[str, FoodItem] = {food.id: food for food in local}
        updated: dict[str, FoodItem] = {}

        if len(local) < self.external_search_threshold:
            fetch_limit = max(limit, self.external_search_threshold)
            for food in await self._fetch_external(cleaned, fetch_limit, pool, updated):
                if in_category(food, category):
                    merged[food.id] = food

        results = await self._autofilled(list(merged.values()), updated)
        ranked = rank_foods(cleaned, results)[:limit]
        _logger.info(
            "Catalog search: query=%s category=%s local=%s returned=%s updated=%s",
            cleaned,
            category,
            len(local),
            len(ranked),
            len(updated),
        )
        return SearchResult(foods=ranked, updated=list(updated.values()))

    async def search_by_category(
        self, category: str, limit: int = 50, owner_id: str | None = None
    ) -> SearchResult:
        """List the most popular foods of a category.

        When the catalog holds fewer than ``limit`` of them, external
        databases are searched by the category name and their hits appended.
        """
        cleaned = category.strip()
        if not cleaned or limit <= 0:
            return SearchResult(foods=[])

        pool = self._pool(owner_id)
        local = sorted(
            (food for food in pool if in_category(food, cleaned)),
            key=lambda food: (-food.popularity, food.name.casefold(), food.id),
        )
        merged: dict[str, FoodItem] = {food.id: food for food in local[:limit]}
        updated: dict[str, FoodItem] = {}

        if len(local) < limit:
            for food in await self._fetch_external(cleaned, limit, pool, updated):
                merged.setdefault(food.id, food)

        results = (await self._autofilled(list(merged.values()), updated))[:limit]
        _logger.info(
            "Category listing: category=%s local=%s returned=%s updated=%s",
            cleaned,
            len(local),
            len(results),
            len(updated),
        )
        return SearchResult(foods=results, updated=list(updated.values()))

    async def find_by_barcode(
        self, code: str, owner_id: str | None = None
    ) -> FoodItem | None:
        """Find a food by barcode locally, then externally.

        External hits are stored under the barcode; repeated lookups return
        the stored record instead of inserting a duplicate.
        """
        cleaned = code.strip()
        if not cleaned:
            return None
        local = self.store.get_by_barcode(cleaned)
        if local is not None:
            return local
        if owner_id:
            for food in self.store.list_custom(owner_id):
                if food.barcode == cleaned:
                    return food

        raw = await self.lookup.get_by_barcode(cleaned)
        if raw is None:
            return None
        food = normalize_food_data(raw.model_copy(update={"barcode": cleaned}), "external")
        if food is None:
            return None
        existing = self.store.get_by_barcode(cleaned)
        if existing is not None:
            return existing
        self.store.upsert(food)
        _logger.info("Stored external food for barcode %s: %s", cleaned, food.id)
        return food

    async def auto_fill_nutrition(self, food: FoodItem) -> FoodItem | None:
        """Fill an all-zero food from external data or category defaults.

        Returns the stored food when it was updated, otherwise None. Custom
        foods are left as entered.
        """
        if food.source == "custom" or not needs_auto_fill(food):
            return None
        profile = await self._external_profile(food.name)
        if profile is None and food.category:
            profile = get_category_defaults(food.category, self.fallback_category)
        if profile is None:
            return None

        filled = replace(
            food,
            calories=profile.calories,
            protein_g=profile.protein_g,
            fat_g=profile.fat_g,
            carbs_g=profile.carbs_g,
            auto_filled=True,
            updated_at=datetime.now(tz=UTC),
        )
        self.store.upsert(filled)
        _logger.info("Autofilled nutrition for %s (%s)", food.id, food.name)
        return filled

    def create_custom_food(self, owner_id: str, payload: dict[str, object]) -> FoodItem:
        """Create a user-authored food; zero macros are allowed."""
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValueError("Food name is required")
        calories = _to_float(payload.get("calories"))
        protein = _to_float(payload.get("protein_g"))
        fat = _to_float(payload.get("fat_g"))
        carbs = _to_float(payload.get("carbs_g"))
        validation = validate_nutrition(calories, protein, fat, carbs)
        if validation.suspicious:
            _logger.warning("Suspicious nutrition for custom food %s", name)

        now = datetime.now(tz=UTC)
        aliases = payload.get("aliases") or []
        food = FoodItem(
            id=new_food_id(),
            name=name,
            name_localized=_optional_str(payload.get("name_localized")),
            brand=_optional_str(payload.get("brand")),
            barcode=_optional_str(payload.get("barcode")),
            calories=round_macro(calories),
            protein_g=round_macro(protein),
            fat_g=round_macro(fat),
            carbs_g=round_macro(carbs),
            category=_optional_str(payload.get("category")),
            aliases=tuple(str(alias) for alias in aliases if alias),
            source="custom",
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        self.store.upsert(food)
        return food

    def import_foods(self, rows: Iterable[Mapping[str, object]]) -> ImportResult:
        """Bulk-load shared foods.

        Rows the normalizer rejects are skipped. A row whose normalized name
        and brand match a known food replaces it in place, keeping its id,
        popularity and aliases, so re-importing a file creates no duplicates.
        """
        known: dict[tuple[str, str], FoodItem] = {}
        for food in self.store.query_all():
            known.setdefault(_identity_key(food), food)

        imported: dict[str, FoodItem] = {}
        skipped: list[str] = []
        for index, values in enumerate(rows, start=1):
            try:
                row = FoodImportRow.model_validate(values)
            except ValidationError as exc:
                skipped.append(f"row {index}: {exc.error_count()} invalid value(s)")
                continue
            label = f"row {index} ({row.name.strip() or 'unnamed'})"
            try:
                validation = validate_nutrition(
                    row.calories, row.protein_g, row.fat_g, row.carbs_g, row.fiber_g
                )
            except ValueError as exc:
                skipped.append(f"{label}: {exc}")
                continue

            raw = RawFood(
                name=row.name,
                brand=row.brand,
                barcode=row.barcode,
                category=row.category,
                calories=row.calories,
                protein_g=row.protein_g,
                fat_g=row.fat_g,
                carbs_g=row.carbs_g,
                aliases=row.aliases,
            )
            food = normalize_food_data(raw, "local")
            if food is None:
                skipped.append(f"{label}: no name or no nutrition")
                continue

            key = _identity_key(food)
            existing = known.get(key)
            if existing is not None:
                food = replace(
                    food,
                    id=existing.id,
                    aliases=_merge_aliases(existing.aliases, food.aliases),
                    category=food.category or existing.category,
                    photo=food.photo or existing.photo,
                    popularity=existing.popularity,
                    created_at=existing.created_at,
                )
            food = replace(food, suspicious=validation.suspicious)
            self.store.upsert(food)
            known[key] = food
            imported[food.id] = food

        _logger.info(
            "Imported foods: written=%s skipped=%s", len(imported), len(skipped)
        )
        return ImportResult(imported=list(imported.values()), skipped=skipped)

    def import_csv(self, text: str) -> ImportResult:
        """Bulk-load shared foods from CSV text with a header row."""
        return self.import_foods(parse_csv_rows(text))

    def get_food(self, food_id: str, owner_id: str | None = None) -> FoodItem | None:
        """Return a shared food, or one of the owner's custom foods."""
        food = self.store.get(food_id)
        if food is None:
            return None
        if food.source == "custom" and food.owner_id != owner_id:
            return None
        return food

    def record_use(self, food_id: str) -> None:
        """Increase a food's popularity counter."""
        food = self.store.get(food_id)
        if food is None:
            return
        self.store.upsert(replace(food, popularity=food.popularity + 1))

    def _pool(self, owner_id: str | None) -> list[FoodItem]:
        foods: dict[str, FoodItem] = {}
        for food in self.store.query_all():
            foods[food.id] = food
        if owner_id:
            for food in self.store.list_custom(owner_id):
                foods[food.id] = food
        return list(foods.values())

    async def _fetch_external(
        self,
        query: str,
        limit: int,
        pool: list[FoodItem],
        updated: dict[str, FoodItem],
    ) -> list[FoodItem]:
        """Search external databases and persist the new hits."""
        stored_foods: list[FoodItem] = []
        for raw in await self.lookup.search_by_name(query, limit=limit):
            stored, written = self._store_external(raw, pool)
            if stored is None:
                continue
            if written:
                pool.append(stored)
                updated[stored.id] = stored
            stored_foods.append(stored)
        return stored_foods

    async def _autofilled(
        self, foods: list[FoodItem], updated: dict[str, FoodItem]
    ) -> list[FoodItem]:
        results: list[FoodItem] = []
        for food in foods:
            filled = await self.auto_fill_nutrition(food)
            if filled is not None:
                updated[filled.id] = filled
                food = filled
            results.append(food)
        return results

    def _store_external(
        self, raw: RawFood, pool: list[FoodItem]
    ) -> tuple[FoodItem | None, bool]:
        """Normalize an external record and persist it unless already known."""
        food = normalize_food_data(raw, "external")
        if food is None:
            return None, False
        if food.barcode:
            existing = self.store.get_by_barcode(food.barcode)
            if existing is not None:
                return existing, False
        key = _identity_key(food)
        for candidate in pool:
            if candidate.source == "external" and _identity_key(candidate) == key:
                return candidate, False
        self.store.upsert(food)
        return food, True

    async def _external_profile(self, name: str) -> MacroProfile | None:
        for raw in await self.lookup.search_by_name(name, limit=3):
            candidate = normalize_food_data(raw, "external")
            if candidate is not None:
                return candidate.macros
        return None


def _identity_key(food: FoodItem) -> tuple[str, str]:
    return normalize_food_text(food.name), normalize_food_text(food.brand)


def _merge_aliases(first: tuple[str, ...], second: tuple[str, ...]) -> tuple[str, ...]:
    merged: dict[str, str] = {}
    for alias in (*first, *second):
        merged.setdefault(normalize_food_text(alias), alias)
    return tuple(merged.values())


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.replace(",", "."))
        except ValueError:
            return math.nan
    return 0.0


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None
