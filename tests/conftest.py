"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from food_diary.adapters.memory_stores import (
    InMemoryCatalogStore,
    InMemoryDiaryStore,
    InMemoryGoalsStore,
)
from food_diary.config import Settings
from food_diary.containers import AppContainer
from food_diary.data.seed_foods import seed_foods
from food_diary.domain.foods import FoodItem, RawFood
from food_diary.domain.vision import LabelPrediction
from food_diary.services.cache import InMemoryCache
from food_diary.services.catalog import FoodCatalogService
from food_diary.services.diary import DiaryService
from food_diary.services.goals import GoalsService
from food_diary.services.label_mapper import LabelMapper
from food_diary.services.lookup import ExternalFoodDatabase, NutritionLookupService
from food_diary.services.photo import FoodClassifier, PhotoAnalysisService
from food_diary.services.recipes import RecipeAnalyzer


def make_food(  # noqa: PLR0913
    food_id: str,
    name: str,
    calories: float = 100.0,
    protein_g: float = 5.0,
    fat_g: float = 5.0,
    carbs_g: float = 10.0,
    **extra: object,
) -> FoodItem:
    """Build a catalog food with sensible defaults."""
    now = datetime(2024, 1, 1, tzinfo=UTC)
    values: dict[str, object] = {
        "source": "local",
        "created_at": now,
        "updated_at": now,
    }
    values.update(extra)
    return FoodItem(
        id=food_id,
        name=name,
        calories=calories,
        protein_g=protein_g,
        fat_g=fat_g,
        carbs_g=carbs_g,
        **values,
    )


@dataclass
class FakeExternalDatabase(ExternalFoodDatabase):
    """External database answering from in-memory data."""

    name: str = "fake"
    search_results: dict[str, list[RawFood]] = field(default_factory=dict)
    barcodes: dict[str, RawFood] = field(default_factory=dict)
    fail: bool = False
    search_calls: list[str] = field(default_factory=list)
    barcode_calls: list[str] = field(default_factory=list)

    async def search_by_name(self, query: str, limit: int) -> list[RawFood]:
        self.search_calls.append(query)
        if self.fail:
            raise RuntimeError("external database is down")
        return list(self.search_results.get(query.lower(), []))[:limit]

    async def get_by_barcode(self, code: str) -> RawFood | None:
        self.barcode_calls.append(code)
        if self.fail:
            raise RuntimeError("external database is down")
        return self.barcodes.get(code)


@dataclass
class RecordingCatalogStore(InMemoryCatalogStore):
    """In-memory catalog that records the ids it writes."""

    upserts: list[str] = field(default_factory=list)

    def upsert(self, food: FoodItem) -> None:
        super().upsert(food)
        self.upserts.append(food.id)


@dataclass
class FakeClassifier(FoodClassifier):
    """Classifier returning fixed predictions."""

    predictions: list[LabelPrediction] = field(default_factory=list)
    fail: bool = False
    calls: int = 0

    async def classify(self, image_bytes: bytes) -> list[LabelPrediction]:
        self.calls += 1
        if self.fail:
            raise RuntimeError("classifier unavailable")
        return self.predictions


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url=None,
        supabase_service_key=None,
        fdc_api_key=None,
        openai_api_key=None,
    )


@pytest.fixture
def external_db() -> FakeExternalDatabase:
    return FakeExternalDatabase()


@pytest.fixture
def catalog_store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore(foods={food.id: food for food in seed_foods()})


@pytest.fixture
def lookup_service(external_db: FakeExternalDatabase) -> NutritionLookupService:
    return NutritionLookupService(
        clients=[external_db],
        cache=InMemoryCache(),
        retry_attempts=0,
        retry_delay_seconds=0,
    )


@pytest.fixture
def catalog_service(
    catalog_store: InMemoryCatalogStore, lookup_service: NutritionLookupService
) -> FoodCatalogService:
    return FoodCatalogService(store=catalog_store, lookup=lookup_service)


@pytest.fixture
def diary_store() -> InMemoryDiaryStore:
    return InMemoryDiaryStore()


@pytest.fixture
def goals_store() -> InMemoryGoalsStore:
    return InMemoryGoalsStore()


@pytest.fixture
def diary_service(
    diary_store: InMemoryDiaryStore, catalog_service: FoodCatalogService
) -> DiaryService:
    return DiaryService(store=diary_store, catalog=catalog_service)


@pytest.fixture
def goals_service(
    goals_store: InMemoryGoalsStore, diary_store: InMemoryDiaryStore
) -> GoalsService:
    return GoalsService(store=goals_store, diary_store=diary_store)


@pytest.fixture
def classifier() -> FakeClassifier:
    return FakeClassifier()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    lookup_service: NutritionLookupService,
    catalog_service: FoodCatalogService,
    diary_service: DiaryService,
    goals_service: GoalsService,
    classifier: FakeClassifier,
) -> AppContainer:
    label_mapper = LabelMapper(catalog_service)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        lookup_service=lookup_service,
        catalog_service=catalog_service,
        diary_service=diary_service,
        goals_service=goals_service,
        label_mapper=label_mapper,
        photo_service=PhotoAnalysisService(
            classifier=classifier, label_mapper=label_mapper
        ),
        recipe_analyzer=RecipeAnalyzer(catalog_service),
        close_resources=close_resources,
    )
