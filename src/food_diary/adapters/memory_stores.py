"""In-memory store implementations for local runs and tests."""

from dataclasses import dataclass, field
from datetime import date

from food_diary.domain.diary import DailyMeals
from food_diary.domain.foods import FoodItem
from food_diary.services.catalog import CatalogStore
from food_diary.services.diary import DiaryStore
from food_diary.services.goals import GoalsStore


@dataclass
class InMemoryCatalogStore(CatalogStore):
    """Catalog kept in a dict keyed by food id."""

    foods: dict[str, FoodItem] = field(default_factory=dict)

    def get(self, food_id: str) -> FoodItem | None:
        return self.foods.get(food_id)

    def get_by_barcode(self, code: str) -> FoodItem | None:
        for food in self.foods.values():
            if food.source != "custom" and food.barcode == code:
                return food
        return None

    def upsert(self, food: FoodItem) -> None:
        self.foods[food.id] = food

    def query_all(self) -> list[FoodItem]:
        return [food for food in self.foods.values() if food.source != "custom"]

    def list_custom(self, owner_id: str) -> list[FoodItem]:
        return [
            food
            for food in self.foods.values()
            if food.source == "custom" and food.owner_id == owner_id
        ]


@dataclass
class InMemoryDiaryStore(DiaryStore):
    """Diary days kept per (user, day)."""

    days: dict[tuple[str, date], DailyMeals] = field(default_factory=dict)

    def get_day(self, user_id: str, day: date) -> DailyMeals:
        meals = self.days.get((user_id, day))
        if meals is None:
            return DailyMeals(day=day)
        return DailyMeals(
            day=meals.day,
            breakfast=list(meals.breakfast),
            lunch=list(meals.lunch),
            dinner=list(meals.dinner),
            snack=list(meals.snack),
            water=meals.water,
        )

    def save_day(self, user_id: str, meals: DailyMeals) -> None:
        self.days[(user_id, meals.day)] = meals


@dataclass
class InMemoryGoalsStore(GoalsStore):
    """Raw goal payloads kept per user."""

    goals: dict[str, dict[str, object]] = field(default_factory=dict)

    def get_goals(self, user_id: str) -> dict[str, object] | None:
        return self.goals.get(user_id)

    def set_goals(self, user_id: str, payload: dict[str, object]) -> None:
        self.goals[user_id] = dict(payload)
