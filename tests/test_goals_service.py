"""Tests for goals and excess reporting."""

from datetime import date

from food_diary.domain.diary import DailyMeals
from food_diary.domain.goals import ActualConsumption, DailyExcess, DailyGoals
from food_diary.services.diary import DiaryService, build_entry
from food_diary.services.goals import (
    DEFAULT_GOALS,
    GoalsService,
    aggregate_period_excess,
    calculate_actual_consumption,
    calculate_daily_excess,
    calculate_sweet_and_flour_calories,
    get_day_status,
    get_day_status_text,
    get_excess_level,
    get_excess_text,
    interpret_excess,
)
from tests.conftest import make_food

DAY = date(2024, 3, 1)

CAKE = make_food("cake", "Cake", calories=400, category="desserts")
BREAD = make_food("bread", "Bread", calories=250, category="bread")
CHICKEN = make_food("chicken", "Chicken", calories=200, category="meat")


def _day(day: date = DAY, **slots: list) -> DailyMeals:
    return DailyMeals(day=day, **slots)


def test_actual_consumption_sums_every_slot() -> None:
    meals = _day(
        breakfast=[build_entry(BREAD, 100, "г")],
        dinner=[build_entry(CHICKEN, 150, "г")],
    )

    actual = calculate_actual_consumption(meals)

    assert actual.calories == 550
    assert actual.protein_g == 12.5
    assert calculate_actual_consumption(None).calories == 0


def test_daily_excess_is_never_negative() -> None:
    goals = DailyGoals(2000, 100, 70, 250)
    actual = ActualConsumption(calories=2300, protein_g=80, fat_g=90, carbs_g=250)

    excess = calculate_daily_excess(actual, goals)

    assert excess == DailyExcess(300, 0, 20, 0)


def test_zero_goals_report_no_excess() -> None:
    actual = ActualConsumption(calories=5000, protein_g=300, fat_g=300, carbs_g=300)

    assert calculate_daily_excess(actual, DailyGoals(0, 0, 0, 0)) == DailyExcess(0, 0, 0, 0)
    assert calculate_daily_excess(actual, None) == DailyExcess(0, 0, 0, 0)


def test_sweet_share_of_excess_is_proportional() -> None:
    meals = _day(
        breakfast=[build_entry(CAKE, 50, "г")],
        lunch=[build_entry(CHICKEN, 400, "г")],
    )
    actual = calculate_actual_consumption(meals)
    excess = calculate_daily_excess(actual, DailyGoals(500, 100, 70, 250))

    result = calculate_sweet_and_flour_calories([meals], [excess], [actual])

    assert actual.calories == 1000
    assert excess.extra_calories == 500
    assert result.total_sweet_calories == 200
    assert result.extra_sweet_calories == 100
    assert result.total_flour_calories == 0
    assert result.extra_flour_calories == 0


def test_sweet_totals_count_even_without_excess() -> None:
    meals = _day(snack=[build_entry(CAKE, 100, "г"), build_entry(BREAD, 100, "г")])
    actual = calculate_actual_consumption(meals)
    excess = calculate_daily_excess(actual, DEFAULT_GOALS)

    result = calculate_sweet_and_flour_calories([meals], [excess], [actual])

    assert result.total_sweet_calories == 400
    assert result.total_flour_calories == 250
    assert result.extra_sweet_calories == 0


def test_period_aggregation_keeps_daily_series() -> None:
    days = [_day(date(2024, 3, 1)), _day(date(2024, 3, 2)), _day(date(2024, 3, 3))]
    excess = [DailyExcess(100, 5, 0, 10), DailyExcess(250, 0, 3, 0)]

    period = aggregate_period_excess(days, excess)

    assert period.total_extra_calories == 350
    assert period.total_extra_fat_g == 3
    assert [item.day for item in period.daily] == [day.day for day in days]
    assert period.daily[2].extra_calories == 0


def test_excess_levels_and_texts() -> None:
    assert get_excess_level(0) == "none"
    assert get_excess_level(-5) == "none"
    assert get_excess_level(99) == "low"
    assert get_excess_level(100) == "moderate"
    assert get_excess_level(300) == "moderate"
    assert get_excess_level(301) == "high"
    assert get_excess_text(301) == "много"


def test_day_status() -> None:
    assert get_day_status(DailyExcess(0, 10, 10, 10)) == "normal"
    assert get_day_status(DailyExcess(300, 0, 0, 0)) == "excess"
    assert get_day_status(DailyExcess(301, 0, 0, 0)) == "significant_excess"
    assert get_day_status_text("excess") == "перебор"


def test_interpret_excess() -> None:
    result = interpret_excess(DailyExcess(150, 0, 20, 400))

    assert result.calories == "moderate"
    assert result.protein == "none"
    assert result.fat == "low"
    assert result.carbs == "high"
    assert result.day_status == "excess"


def test_goals_default_and_legacy_keys(goals_service, goals_store) -> None:
    assert goals_service.get_daily_goals("nobody") == DEFAULT_GOALS

    goals_store.goals["legacy"] = {"calories": 1800, "proteins": 120, "fats": 0}
    goals = goals_service.get_daily_goals("legacy")

    assert goals.calories_target == 1800
    assert goals.protein_target == 120
    assert goals.fat_target == DEFAULT_GOALS.fat_target
    assert goals.carbs_target == DEFAULT_GOALS.carbs_target


def test_set_goals_roundtrip(goals_service) -> None:
    goals = DailyGoals(1500, 90, 50, 150)

    goals_service.set_daily_goals("u1", goals)

    assert goals_service.get_daily_goals("u1") == goals


def test_broken_goals_store_falls_back_to_defaults(diary_store) -> None:
    class BrokenStore:
        def get_goals(self, user_id: str) -> dict[str, object] | None:
            raise RuntimeError("db down")

        def set_goals(self, user_id: str, payload: dict[str, object]) -> None:
            raise RuntimeError("db down")

    service = GoalsService(store=BrokenStore(), diary_store=diary_store)

    assert service.get_daily_goals("u1") == DEFAULT_GOALS


def test_summarize_period(goals_service, diary_store) -> None:
    diary = DiaryService(store=diary_store)
    goals_service.set_daily_goals("u1", DailyGoals(500, 100, 70, 250))
    diary.add_entry("u1", date(2024, 3, 1), "breakfast", CAKE, 50)
    diary.add_entry("u1", date(2024, 3, 1), "lunch", CHICKEN, 400)
    diary.add_entry("u1", date(2024, 3, 2), "lunch", CHICKEN, 100)

    report = goals_service.summarize_period("u1", [date(2024, 3, 1), date(2024, 3, 2)])

    assert report.excess.total_extra_calories == 500
    assert report.sweet_and_flour.extra_sweet_calories == 100
    assert [item.day_status for item in report.interpretations] == [
        "significant_excess",
        "normal",
    ]
