"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from food_diary.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
    food_to_row,
)
from food_diary.adapters.supabase_diary_repository import SupabaseDiaryRepository
from food_diary.adapters.supabase_goals_repository import SupabaseGoalsRepository
from food_diary.domain.diary import DailyMeals
from food_diary.services.diary import build_entry
from tests.conftest import make_food


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_on_conflict: str | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        self.last_filters = []
        return self

    def upsert(self, payload, on_conflict: str | None = None) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def neq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("neq", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_catalog_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    food = make_food("f1", "Kefir", barcode="4601", aliases=("кефирчик",))
    foods.queue("upsert", [food_to_row(food)])
    foods.queue("select", [food_to_row(food)])

    repository = SupabaseCatalogRepository(client)
    repository.upsert(food)
    fetched = repository.get_by_barcode("4601")

    assert foods.last_payload == food_to_row(food)
    assert fetched == food
    assert ("neq", "source", "custom") in foods.last_filters


def test_catalog_repository_lists_custom_foods_per_owner() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    custom = make_food("c1", "Борщ", source="custom", owner_id="u1")
    foods.queue("select", [food_to_row(custom)])

    repository = SupabaseCatalogRepository(client)
    listed = repository.list_custom("u1")

    assert listed == [custom]
    assert ("eq", "owner_id", "u1") in foods.last_filters
    assert repository.get("missing") is None
    assert repository.query_all() == []


def test_catalog_repository_raises_when_upsert_returns_nothing() -> None:
    repository = SupabaseCatalogRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.upsert(make_food("f1", "Kefir"))


def test_diary_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("diary_days")
    day = date(2024, 3, 1)
    meals = DailyMeals(
        day=day,
        breakfast=[build_entry(make_food("f1", "Oats", 370, 13, 7, 60), 50, "г")],
        water=3,
    )

    repository = SupabaseDiaryRepository(client)
    table.queue("upsert", [{"user_id": "u1"}])
    repository.save_day("u1", meals)
    stored = table.last_payload
    table.queue("select", [stored])
    loaded = repository.get_day("u1", day)

    assert table.last_on_conflict == "user_id,day"
    assert stored["day"] == "2024-03-01"
    assert loaded.breakfast == meals.breakfast
    assert loaded.water == 3
    assert loaded.lunch == []


def test_diary_repository_missing_day_is_empty() -> None:
    repository = SupabaseDiaryRepository(FakeSupabaseClient())

    meals = repository.get_day("u1", date(2024, 3, 1))

    assert meals.entries() == []
    assert meals.water == 0


def test_goals_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_goals")
    table.queue("select", [{"user_id": "u1", "calories_target": 1800}])
    table.queue("upsert", [{"user_id": "u1"}])

    repository = SupabaseGoalsRepository(client)
    assert repository.get_goals("u1") == {"user_id": "u1", "calories_target": 1800}
    repository.set_goals("u1", {"calories_target": 1700})

    assert isinstance(table.last_payload, dict)
    assert table.last_payload["calories_target"] == 1700
    assert table.last_on_conflict == "user_id"
    assert repository.get_goals("u2") is None
    with pytest.raises(RuntimeError):
        repository.set_goals("u2", {"calories_target": 1700})
