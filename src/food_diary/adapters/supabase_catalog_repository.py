"""Supabase implementation of the food catalog store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from food_diary.domain.foods import FoodItem
from food_diary.services.catalog import CatalogStore

_TABLE = "foods"


@dataclass
class SupabaseCatalogRepository(CatalogStore):
    """Supabase-backed catalog of shared and custom foods."""

    client: Client

    def get(self, food_id: str) -> FoodItem | None:
        """Return a food by id, if present."""
        response = (
            self.client.table(_TABLE).select("*").eq("id", food_id).limit(1).execute()
        )
        if not response.data:
            return None
        return food_from_row(response.data[0])

    def get_by_barcode(self, code: str) -> FoodItem | None:
        """Return the shared food with this barcode."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("barcode", code)
            .neq("source", "custom")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return food_from_row(response.data[0])

    def upsert(self, food: FoodItem) -> None:
        """Insert or replace a food row keyed by id."""
        response = self.client.table(_TABLE).upsert(food_to_row(food)).execute()
        if not response.data:
            raise RuntimeError("Failed to upsert food")

    def query_all(self) -> list[FoodItem]:
        """Return every shared food."""
        response = self.client.table(_TABLE).select("*").neq("source", "custom").execute()
        return [food_from_row(row) for row in response.data or []]

    def list_custom(self, owner_id: str) -> list[FoodItem]:
        """Return the owner's custom foods."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("source", "custom")
            .eq("owner_id", owner_id)
            .execute()
        )
        return [food_from_row(row) for row in response.data or []]


def food_to_row(food: FoodItem) -> dict[str, object]:
    """Serialize a food into a table row."""
    return {
        "id": food.id,
        "name": food.name,
        "name_localized": food.name_localized,
        "brand": food.brand,
        "barcode": food.barcode,
        "calories": food.calories,
        "protein_g": food.protein_g,
        "fat_g": food.fat_g,
        "carbs_g": food.carbs_g,
        "category": food.category,
        "aliases": list(food.aliases),
        "source": food.source,
        "owner_id": food.owner_id,
        "photo": food.photo,
        "auto_filled": food.auto_filled,
        "suspicious": food.suspicious,
        "popularity": food.popularity,
        "created_at": food.created_at.isoformat(),
        "updated_at": food.updated_at.isoformat(),
    }


def food_from_row(row: dict[str, object]) -> FoodItem:
    """Parse a food row into a domain model."""
    aliases = row.get("aliases") or []
    return FoodItem(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        name_localized=row.get("name_localized"),
        brand=row.get("brand"),
        barcode=row.get("barcode"),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        fat_g=float(row.get("fat_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        category=row.get("category"),
        aliases=tuple(str(alias) for alias in aliases),
        source=row.get("source") or "local",
        owner_id=row.get("owner_id"),
        photo=row.get("photo"),
        auto_filled=bool(row.get("auto_filled", False)),
        suspicious=bool(row.get("suspicious", False)),
        popularity=int(row.get("popularity") or 0),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(value: object) -> datetime:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return datetime.now(tz=UTC)
