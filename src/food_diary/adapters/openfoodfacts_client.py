"""Open Food Facts API client."""

from dataclasses import dataclass

import httpx

from food_diary.domain.foods import RawFood
from food_diary.services.category_defaults import derive_category_from_text
from food_diary.services.lookup import ExternalFoodDatabase

_SEARCH_FIELDS = ",".join(
    (
        "code",
        "product_name",
        "product_name_ru",
        "product_name_en",
        "generic_name",
        "brands",
        "categories",
        "nutriments",
        "serving_quantity",
        "image_front_small_url",
    )
)


@dataclass
class HttpxOpenFoodFactsClient(ExternalFoodDatabase):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15
    name: str = "openfoodfacts"

    @classmethod
    def create(
        cls, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxOpenFoodFactsClient":
        """Create an Open Food Facts client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_by_name(self, query: str, limit: int) -> list[RawFood]:
        """Search products by free text."""
        response = await self.http_client.get(
            f"{self.base_url}/cgi/search.pl",
            params={
                "search_terms": query,
                "search_simple": 1,
                "action": "process",
                "json": 1,
                "page_size": limit,
                "fields": _SEARCH_FIELDS,
            },
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        products = response.json().get("products") or []
        foods = [parse_product(product) for product in products]
        return [food for food in foods if food is not None][:limit]

    async def get_by_barcode(self, code: str) -> RawFood | None:
        """Fetch a product by barcode; unknown codes return None."""
        response = await self.http_client.get(
            f"{self.base_url}/api/v2/product/{code}.json",
            params={"fields": _SEARCH_FIELDS},
            timeout=self.timeout_seconds,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        payload = response.json()
        if payload.get("status") == 0 or not payload.get("product"):
            return None
        food = parse_product(payload["product"])
        if food is None:
            return None
        return food.model_copy(update={"barcode": food.barcode or code})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def parse_product(product: dict[str, object]) -> RawFood | None:
    """Map an Open Food Facts product to a raw food record."""
    original = _text(product.get("product_name")) or _text(product.get("generic_name"))
    localized = _text(product.get("product_name_ru"))
    name = localized or original or _text(product.get("product_name_en"))
    if not name:
        return None
    nutriments = product.get("nutriments")
    if not isinstance(nutriments, dict):
        nutriments = {}
    brands = _text(product.get("brands"))
    categories = _text(product.get("categories"))
    return RawFood(
        name=name,
        name_localized=original if localized and original != localized else None,
        barcode=_text(product.get("code")),
        calories=_first_number(nutriments, "energy-kcal_100g", "energy_kcal_100g"),
        protein_g=_first_number(nutriments, "proteins_100g"),
        fat_g=_first_number(nutriments, "fat_100g"),
        carbs_g=_first_number(nutriments, "carbohydrates_100g"),
        brand=brands.split(",")[0].strip() if brands else None,
        category=derive_category_from_text(categories or name),
        photo=_text(product.get("image_front_small_url")),
    )


def _first_number(values: dict[str, object], *keys: str) -> float | None:
    for key in keys:
        value = values.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, int | float):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                continue
    return None


def _text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    return cleaned or None
