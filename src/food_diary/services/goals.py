"""Daily goals and over-consumption ("excess") reporting."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Protocol

from food_diary.domain.diary import DailyMeals
from food_diary.domain.foods import FoodItem
from food_diary.domain.goals import (
    ActualConsumption,
    DailyExcess,
    DailyExcessWithDate,
    DailyGoals,
    DayStatus,
    ExcessInterpretation,
    ExcessLevel,
    PeriodExcess,
    PeriodReport,
    SweetAndFlourCalories,
)

if TYPE_CHECKING:
    from food_diary.services.diary import DiaryStore

DEFAULT_GOALS = DailyGoals(
    calories_target=2000,
    protein_target=100,
    fat_target=70,
    carbs_target=250,
)

LOW_EXCESS_CALORIES = 100
MODERATE_EXCESS_CALORIES = 300

SWEET_KEYWORDS = ("sweet", "dessert", "конфеты", "сладости", "десерт", "сладкое")
FLOUR_KEYWORDS = ("flour", "bread", "bakery", "хлеб", "мучное", "выпечка")

_EXCESS_TEXT: dict[ExcessLevel, str] = {
    "none": "нет",
    "low": "незначительно",
    "moderate": "умеренно",
    "high": "много",
}

_DAY_STATUS_TEXT: dict[DayStatus, str] = {
    "normal": "в норме",
    "excess": "перебор",
    "significant_excess": "значительный перебор",
}

_NO_EXCESS = DailyExcess(0.0, 0.0, 0.0, 0.0)
_NO_CONSUMPTION = ActualConsumption(0.0, 0.0, 0.0, 0.0)

_logger = logging.getLogger(__name__)


class GoalsStore(Protocol):
    """Persistence interface for per-user goal settings."""

    def get_goals(self, user_id: str) -> dict[str, object] | None:
        """Return the raw stored goals, if any."""

    def set_goals(self, user_id: str, payload: dict[str, object]) -> None:
        """Store goals for a user."""


@dataclass
class GoalsService:
    """Reads goals and builds excess reports from the diary."""

    store: GoalsStore
    diary_store: "DiaryStore"

    def get_daily_goals(self, user_id: str) -> DailyGoals:
        """Return the user's goals, falling back to defaults per field."""
        try:
            stored = self.store.get_goals(user_id)
        except Exception:
            _logger.exception("Failed to load goals for %s", user_id)
            return DEFAULT_GOALS
        if not stored:
            return DEFAULT_GOALS
        return DailyGoals(
            calories_target=_goal_value(
                stored, ("calories_target", "calories"), DEFAULT_GOALS.calories_target
            ),
            protein_target=_goal_value(
                stored, ("protein_target", "proteins"), DEFAULT_GOALS.protein_target
            ),
            fat_target=_goal_value(
                stored, ("fat_target", "fats"), DEFAULT_GOALS.fat_target
            ),
            carbs_target=_goal_value(
                stored, ("carbs_target", "carbs"), DEFAULT_GOALS.carbs_target
            ),
        )

    def set_daily_goals(self, user_id: str, goals: DailyGoals) -> DailyGoals:
        """Store the user's goals."""
        self.store.set_goals(
            user_id,
            {
                "calories_target": goals.calories_target,
                "protein_target": goals.protein_target,
                "fat_target": goals.fat_target,
                "carbs_target": goals.carbs_target,
            },
        )
        return goals

    def summarize_period(self, user_id: str, days: list[date]) -> PeriodReport:
        """Build the excess report for the given days."""
        goals = self.get_daily_goals(user_id)
        meals = [self.diary_store.get_day(user_id, day) for day in days]
        actual = [calculate_actual_consumption(day) for day in meals]
        excess = [calculate_daily_excess(value, goals) for value in actual]
        return PeriodReport(
            goals=goals,
            excess=aggregate_period_excess(meals, excess),
            sweet_and_flour=calculate_sweet_and_flour_calories(
                meals, excess, actual, goals
            ),
            interpretations=[interpret_excess(value) for value in excess],
        )


def calculate_actual_consumption(day: DailyMeals | None) -> ActualConsumption:
    """Sum the macros of every meal slot; malformed values count as zero."""
    if day is None:
        return _NO_CONSUMPTION
    calories = protein = fat = carbs = 0.0
    for entry in _day_entries(day):
        calories += _safe_number(getattr(entry, "calories", 0))
        protein += _safe_number(getattr(entry, "protein_g", 0))
        fat += _safe_number(getattr(entry, "fat_g", 0))
        carbs += _safe_number(getattr(entry, "carbs_g", 0))
    return ActualConsumption(calories=calories, protein_g=protein, fat_g=fat, carbs_g=carbs)


def calculate_daily_excess(
    actual: ActualConsumption | None, goals: DailyGoals | None
) -> DailyExcess:
    """Return ``max(0, actual - target)`` per macro.

    With no goals, or every target at zero, no excess is reported at all.
    """
    if goals is None or actual is None:
        return _NO_EXCESS
    calories_target = _safe_number(goals.calories_target)
    protein_target = _safe_number(goals.protein_target)
    fat_target = _safe_number(goals.fat_target)
    carbs_target = _safe_number(goals.carbs_target)
    if not (calories_target or protein_target or fat_target or carbs_target):
        return _NO_EXCESS
    return DailyExcess(
        extra_calories=max(0.0, _safe_number(actual.calories) - calories_target),
        extra_protein_g=max(0.0, _safe_number(actual.protein_g) - protein_target),
        extra_fat_g=max(0.0, _safe_number(actual.fat_g) - fat_target),
        extra_carbs_g=max(0.0, _safe_number(actual.carbs_g) - carbs_target),
    )


def aggregate_period_excess(
    days: list[DailyMeals], excess_list: list[DailyExcess]
) -> PeriodExcess:
    """Sum excess over a period and keep the per-day series."""
    daily: list[DailyExcessWithDate] = []
    for index, day in enumerate(days):
        excess = excess_list[index] if index < len(excess_list) else _NO_EXCESS
        daily.append(
            DailyExcessWithDate(
                day=day.day,
                extra_calories=excess.extra_calories,
                extra_protein_g=excess.extra_protein_g,
                extra_fat_g=excess.extra_fat_g,
                extra_carbs_g=excess.extra_carbs_g,
            )
        )
    return PeriodExcess(
        total_extra_calories=sum(item.extra_calories for item in excess_list),
        total_extra_protein_g=sum(item.extra_protein_g for item in excess_list),
        total_extra_fat_g=sum(item.extra_fat_g for item in excess_list),
        total_extra_carbs_g=sum(item.extra_carbs_g for item in excess_list),
        daily=daily,
    )


def calculate_sweet_and_flour_calories(
    days: list[DailyMeals],
    excess_list: list[DailyExcess],
    actual_list: list[ActualConsumption],
    goals: DailyGoals | None = None,  # noqa: ARG001
) -> SweetAndFlourCalories:
    """Sum sweet and flour calories and their share of each day's excess.

    A day's excess is spread over everything eaten that day: the sweet part
    of the excess is ``sweet_calories * extra_calories / actual_calories``.
    """
    total_sweet = total_flour = extra_sweet = extra_flour = 0.0
    for index, day in enumerate(days):
        excess = excess_list[index] if index < len(excess_list) else _NO_EXCESS
        actual = actual_list[index] if index < len(actual_list) else _NO_CONSUMPTION

        day_sweet = day_flour = 0.0
        for entry in _day_entries(day):
            calories = _safe_number(getattr(entry, "calories", 0))
            food = getattr(entry, "food", None)
            if is_sweet(food):
                day_sweet += calories
            if is_flour(food):
                day_flour += calories

        total_sweet += day_sweet
        total_flour += day_flour
        if excess.extra_calories > 0 and actual.calories > 0:
            ratio = excess.extra_calories / actual.calories
            extra_sweet += day_sweet * ratio
            extra_flour += day_flour * ratio

    return SweetAndFlourCalories(
        total_sweet_calories=total_sweet,
        total_flour_calories=total_flour,
        extra_sweet_calories=extra_sweet,
        extra_flour_calories=extra_flour,
    )


def is_sweet(food: FoodItem | None) -> bool:
    """Return True when the food's category names a sweet."""
    return _category_has(food, SWEET_KEYWORDS)


def is_flour(food: FoodItem | None) -> bool:
    """Return True when the food's category names a flour product."""
    return _category_has(food, FLOUR_KEYWORDS)


def get_excess_level(extra_calories: float) -> ExcessLevel:
    """Classify an excess amount."""
    value = _safe_number(extra_calories)
    if value <= 0:
        return "none"
    if value < LOW_EXCESS_CALORIES:
        return "low"
    if value <= MODERATE_EXCESS_CALORIES:
        return "moderate"
    return "high"


def get_excess_text(extra_calories: float) -> str:
    """Return the user-facing label for an excess amount."""
    return _EXCESS_TEXT[get_excess_level(extra_calories)]


def get_day_status(excess: DailyExcess) -> DayStatus:
    """Classify a day by its calorie excess."""
    value = _safe_number(excess.extra_calories)
    if value <= 0:
        return "normal"
    if value <= MODERATE_EXCESS_CALORIES:
        return "excess"
    return "significant_excess"


def get_day_status_text(status: DayStatus) -> str:
    """Return the user-facing label for a day status."""
    return _DAY_STATUS_TEXT.get(status, _DAY_STATUS_TEXT["normal"])


def interpret_excess(excess: DailyExcess) -> ExcessInterpretation:
    """Return the excess level per macro and the day status."""
    return ExcessInterpretation(
        calories=get_excess_level(excess.extra_calories),
        protein=get_excess_level(excess.extra_protein_g),
        fat=get_excess_level(excess.extra_fat_g),
        carbs=get_excess_level(excess.extra_carbs_g),
        day_status=get_day_status(excess),
    )


def _day_entries(day: DailyMeals) -> list[object]:
    entries: list[object] = []
    for slot in ("breakfast", "lunch", "dinner", "snack"):
        entries.extend(getattr(day, slot, None) or [])
    return entries


def _category_has(food: FoodItem | None, keywords: tuple[str, ...]) -> bool:
    category = getattr(food, "category", None)
    if not category:
        return False
    lowered = str(category).lower()
    return any(keyword in lowered for keyword in keywords)


def _goal_value(
    stored: dict[str, object], keys: tuple[str, ...], default: float
) -> float:
    for key in keys:
        value = _safe_number(stored.get(key))
        if value:
            return value
    return default


def _safe_number(value: object) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0
