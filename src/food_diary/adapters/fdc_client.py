"""USDA FoodData Central API client."""

from dataclasses import dataclass

import httpx

from food_diary.domain.foods import RawFood
from food_diary.services.category_defaults import derive_category_from_text
from food_diary.services.lookup import ExternalFoodDatabase

# Energy (kcal), protein, total fat, carbohydrate by difference.
_NUTRIENT_NUMBERS = {
    "calories": "208",
    "protein": "203",
    "fat": "204",
    "carbs": "205",
}
_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}


@dataclass
class HttpxFdcClient(ExternalFoodDatabase):
    """HTTPX-backed FDC client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15
    name: str = "fdc"

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_by_name(self, query: str, limit: int) -> list[RawFood]:
        """Search foods by query."""
        foods = await self._search(query, limit)
        return [parse_food(item) for item in foods if item.get("description")]

    async def get_by_barcode(self, code: str) -> RawFood | None:
        """Find a branded food whose GTIN/UPC equals the barcode."""
        for item in await self._search(code, 10):
            gtin = str(item.get("gtinUpc") or "")
            if gtin and gtin.lstrip("0") == code.lstrip("0"):
                return parse_food(item).model_copy(update={"barcode": code})
        return None

    async def _search(self, query: str, page_size: int) -> list[dict[str, object]]:
        response = await self.http_client.post(
            f"{self.base_url}/foods/search",
            params={"api_key": self.api_key},
            json={"query": query, "pageSize": page_size},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        foods = response.json().get("foods") or []
        return [item for item in foods if isinstance(item, dict)]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def parse_food(item: dict[str, object]) -> RawFood:
    """Map an FDC search hit to a raw food record."""
    description = str(item.get("description") or "").strip()
    nutrients = item.get("foodNutrients")
    values = _extract_macros(nutrients if isinstance(nutrients, list) else [])
    brand = item.get("brandName") or item.get("brandOwner")
    category = item.get("foodCategory")
    return RawFood(
        name=description,
        barcode=str(item["gtinUpc"]) if item.get("gtinUpc") else None,
        calories=values["calories"],
        protein_g=values["protein"],
        fat_g=values["fat"],
        carbs_g=values["carbs"],
        brand=str(brand) if brand else None,
        category=derive_category_from_text(
            f"{category} {description}" if isinstance(category, str) else description
        ),
    )


def _extract_macros(food_nutrients: list[object]) -> dict[str, float | None]:
    """Extract calories, protein, fat, carbs from FDC nutrients."""
    values: dict[str, float | None] = dict.fromkeys(_NUTRIENT_IDS)
    for nutrient in food_nutrients:
        if not isinstance(nutrient, dict):
            continue
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        nutrient_number = str(
            nutrient_info.get("number") or nutrient.get("nutrientNumber") or ""
        )
        amount = nutrient.get("value", nutrient.get("amount"))
        if not isinstance(amount, int | float) or isinstance(amount, bool):
            continue
        for key, expected_id in _NUTRIENT_IDS.items():
            if nutrient_id == expected_id or nutrient_number == _NUTRIENT_NUMBERS[key]:
                values[key] = float(amount)
    return values
