"""Domain models for the food diary."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from food_diary.domain.foods import FoodItem

MealSlot = Literal["breakfast", "lunch", "dinner", "snack"]

MEAL_SLOTS: tuple[MealSlot, ...] = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class DiaryEntry:
    """One consumption record with macros captured at entry time."""

    id: str
    food_id: str
    food: FoodItem
    amount: float
    unit: str
    weight_g: float
    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    note: str | None = None


@dataclass
class DailyMeals:
    """All diary entries for one user and day, grouped by meal slot."""

    day: date
    breakfast: list[DiaryEntry] = field(default_factory=list)
    lunch: list[DiaryEntry] = field(default_factory=list)
    dinner: list[DiaryEntry] = field(default_factory=list)
    snack: list[DiaryEntry] = field(default_factory=list)
    water: int = 0

    def entries(self) -> list[DiaryEntry]:
        """Return entries of every slot in slot order."""
        return [*self.breakfast, *self.lunch, *self.dinner, *self.snack]

    def slot(self, slot: MealSlot) -> list[DiaryEntry]:
        """Return the mutable entry list for a meal slot."""
        return getattr(self, slot)
