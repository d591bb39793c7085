"""Diary bookkeeping: entries per user, day and meal slot."""

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Protocol
from uuid import uuid4

from food_diary.domain.diary import MEAL_SLOTS, DailyMeals, DiaryEntry, MealSlot
from food_diary.domain.foods import FoodItem, MacroProfile
from food_diary.services.units import convert_to_grams, parse_amount, resolve_unit

if TYPE_CHECKING:
    from food_diary.services.catalog import FoodCatalogService

_UNSET = object()


class DiaryStore(Protocol):
    """Persistence interface for diary days."""

    def get_day(self, user_id: str, day: date) -> DailyMeals:
        """Return the day's meals, empty when nothing was logged."""

    def save_day(self, user_id: str, meals: DailyMeals) -> None:
        """Replace the stored meals for ``meals.day``."""


@dataclass
class DiaryService:
    """Service that computes entry macros and persists diary days."""

    store: DiaryStore
    catalog: "FoodCatalogService | None" = None

    def get_day(self, user_id: str, day: date) -> DailyMeals:
        """Return the meals logged for a day."""
        return self.store.get_day(user_id, day)

    def add_entry(  # noqa: PLR0913
        self,
        user_id: str,
        day: date,
        slot: str,
        food: FoodItem,
        amount: object,
        unit: str = "г",
        note: str | None = None,
    ) -> DiaryEntry:
        """Log a food in a meal slot, capturing its macros at entry time."""
        meal_slot = _check_slot(slot)
        entry = build_entry(food, amount, unit, note=note)
        meals = self.store.get_day(user_id, day)
        meals.slot(meal_slot).append(entry)
        self.store.save_day(user_id, meals)
        if self.catalog is not None:
            self.catalog.record_use(food.id)
        return entry

    def update_entry(  # noqa: PLR0913
        self,
        user_id: str,
        day: date,
        slot: str,
        entry_id: str,
        *,
        amount: object = None,
        unit: str | None = None,
        note: object = _UNSET,
    ) -> DiaryEntry | None:
        """Change an entry's quantity or note.

        Macros are recomputed from the entry's food snapshot, not from the
        current catalog.
        """
        meal_slot = _check_slot(slot)
        meals = self.store.get_day(user_id, day)
        entries = meals.slot(meal_slot)
        for index, current in enumerate(entries):
            if current.id != entry_id:
                continue
            new_amount = current.amount if amount is None else amount
            new_unit = current.unit if unit is None else unit
            new_note = current.note if note is _UNSET else note
            updated = build_entry(
                current.food,
                new_amount,
                new_unit,
                note=new_note,
                entry_id=current.id,
            )
            entries[index] = updated
            self.store.save_day(user_id, meals)
            return updated
        return None

    def remove_entry(self, user_id: str, day: date, slot: str, entry_id: str) -> bool:
        """Remove an entry; return whether it existed."""
        meal_slot = _check_slot(slot)
        meals = self.store.get_day(user_id, day)
        entries = meals.slot(meal_slot)
        remaining = [entry for entry in entries if entry.id != entry_id]
        if len(remaining) == len(entries):
            return False
        setattr(meals, meal_slot, remaining)
        self.store.save_day(user_id, meals)
        return True

    def clear_meal(self, user_id: str, day: date, slot: str) -> None:
        """Remove every entry of one meal slot."""
        meal_slot = _check_slot(slot)
        meals = self.store.get_day(user_id, day)
        setattr(meals, meal_slot, [])
        self.store.save_day(user_id, meals)

    def clear_day(self, user_id: str, day: date) -> None:
        """Remove every entry of a day, keeping the water count."""
        meals = self.store.get_day(user_id, day)
        self.store.save_day(user_id, DailyMeals(day=day, water=meals.water))

    def update_water(self, user_id: str, day: date, glasses: int) -> DailyMeals:
        """Set the number of water glasses for a day."""
        meals = self.store.get_day(user_id, day)
        meals.water = max(0, int(glasses))
        self.store.save_day(user_id, meals)
        return meals

    def day_totals(self, user_id: str, day: date) -> MacroProfile:
        """Return the summed macros of a day."""
        return sum_entries(self.store.get_day(user_id, day).entries())


def build_entry(
    food: FoodItem,
    amount: object,
    unit: str,
    *,
    note: object = None,
    entry_id: str | None = None,
) -> DiaryEntry:
    """Create a diary entry for an amount of a food."""
    display_unit = resolve_unit(unit)
    grams = convert_to_grams(amount, display_unit, food.name)
    macros = portion_macros(food.macros, grams)
    return DiaryEntry(
        id=entry_id or str(uuid4()),
        food_id=food.id,
        food=food,
        amount=parse_amount(amount),
        unit=display_unit,
        weight_g=round(grams, 2),
        calories=macros.calories,
        protein_g=macros.protein_g,
        fat_g=macros.fat_g,
        carbs_g=macros.carbs_g,
        note=str(note) if note else None,
    )


def portion_macros(per_100g: MacroProfile, grams: float) -> MacroProfile:
    """Scale per-100 g macros to a weight in grams."""
    if grams <= 0:
        return MacroProfile(0.0, 0.0, 0.0, 0.0)
    factor = grams / 100.0
    return MacroProfile(
        calories=round(per_100g.calories * factor, 2),
        protein_g=round(per_100g.protein_g * factor, 2),
        fat_g=round(per_100g.fat_g * factor, 2),
        carbs_g=round(per_100g.carbs_g * factor, 2),
    )


def sum_entries(entries: list[DiaryEntry]) -> MacroProfile:
    """Sum the macros of diary entries."""
    total = MacroProfile(0.0, 0.0, 0.0, 0.0)
    for entry in entries:
        total = MacroProfile(
            calories=total.calories + entry.calories,
            protein_g=total.protein_g + entry.protein_g,
            fat_g=total.fat_g + entry.fat_g,
            carbs_g=total.carbs_g + entry.carbs_g,
        )
    return total


def _check_slot(slot: str) -> MealSlot:
    if slot not in MEAL_SLOTS:
        raise ValueError(f"Unknown meal slot: {slot}")
    return slot  # type: ignore[return-value]
