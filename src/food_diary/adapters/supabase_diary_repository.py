"""Supabase implementation of the diary store."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from supabase import Client

from food_diary.adapters.supabase_catalog_repository import food_from_row, food_to_row
from food_diary.domain.diary import MEAL_SLOTS, DailyMeals, DiaryEntry
from food_diary.services.diary import DiaryStore

_TABLE = "diary_days"


@dataclass
class SupabaseDiaryRepository(DiaryStore):
    """Supabase-backed diary keeping one row per user and day."""

    client: Client

    def get_day(self, user_id: str, day: date) -> DailyMeals:
        """Return the stored meals, or an empty day."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("day", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return DailyMeals(day=day)
        return _parse_day(response.data[0], day)

    def save_day(self, user_id: str, meals: DailyMeals) -> None:
        """Replace the stored meals for the day."""
        payload = {
            "user_id": user_id,
            "day": meals.day.isoformat(),
            "meals": {
                slot: [_entry_to_row(entry) for entry in meals.slot(slot)]
                for slot in MEAL_SLOTS
            },
            "water": meals.water,
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        response = (
            self.client.table(_TABLE).upsert(payload, on_conflict="user_id,day").execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save diary day")


def _entry_to_row(entry: DiaryEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "food_id": entry.food_id,
        "food": food_to_row(entry.food),
        "amount": entry.amount,
        "unit": entry.unit,
        "weight_g": entry.weight_g,
        "calories": entry.calories,
        "protein_g": entry.protein_g,
        "fat_g": entry.fat_g,
        "carbs_g": entry.carbs_g,
        "note": entry.note,
    }


def _entry_from_row(row: dict[str, object]) -> DiaryEntry:
    return DiaryEntry(
        id=str(row["id"]),
        food_id=str(row.get("food_id", "")),
        food=food_from_row(row["food"]),
        amount=float(row.get("amount") or 0.0),
        unit=str(row.get("unit") or "г"),
        weight_g=float(row.get("weight_g") or 0.0),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        fat_g=float(row.get("fat_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        note=row.get("note"),
    )


def _parse_day(row: dict[str, object], day: date) -> DailyMeals:
    meals = row.get("meals") or {}
    slots = {
        slot: [_entry_from_row(item) for item in meals.get(slot) or []]
        for slot in MEAL_SLOTS
    }
    return DailyMeals(day=day, water=int(row.get("water") or 0), **slots)
