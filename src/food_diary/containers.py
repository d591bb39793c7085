"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_diary.adapters.fdc_client import HttpxFdcClient
from food_diary.adapters.memory_stores import (
    InMemoryCatalogStore,
    InMemoryDiaryStore,
    InMemoryGoalsStore,
)
from food_diary.adapters.openai_classifier import OpenAIFoodClassifier
from food_diary.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from food_diary.adapters.supabase_catalog_repository import SupabaseCatalogRepository
from food_diary.adapters.supabase_diary_repository import SupabaseDiaryRepository
from food_diary.adapters.supabase_goals_repository import SupabaseGoalsRepository
from food_diary.config import Settings
from food_diary.data.seed_foods import seed_foods
from food_diary.services.cache import InMemoryCache
from food_diary.services.catalog import CatalogStore, FoodCatalogService
from food_diary.services.diary import DiaryService, DiaryStore
from food_diary.services.goals import GoalsService, GoalsStore
from food_diary.services.label_mapper import LabelMapper
from food_diary.services.lookup import ExternalFoodDatabase, NutritionLookupService
from food_diary.services.photo import PhotoAnalysisService
from food_diary.services.recipes import RecipeAnalyzer

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    lookup_service: NutritionLookupService
    catalog_service: FoodCatalogService
    diary_service: DiaryService
    goals_service: GoalsService
    label_mapper: LabelMapper
    photo_service: PhotoAnalysisService
    recipe_analyzer: RecipeAnalyzer
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()

    catalog_store: CatalogStore
    diary_store: DiaryStore
    goals_store: GoalsStore
    if resolved_settings.supabase_enabled:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        catalog_store = SupabaseCatalogRepository(supabase_client)
        diary_store = SupabaseDiaryRepository(supabase_client)
        goals_store = SupabaseGoalsRepository(supabase_client)
    else:
        _logger.info("Supabase is not configured, using in-memory stores")
        seeded = seed_foods() if resolved_settings.seed_catalog else []
        catalog_store = InMemoryCatalogStore(foods={food.id: food for food in seeded})
        diary_store = InMemoryDiaryStore()
        goals_store = InMemoryGoalsStore()

    off_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.off_base_url,
        timeout_seconds=resolved_settings.external_timeout_seconds,
    )
    external_clients: list[ExternalFoodDatabase] = [off_client]
    fdc_client: HttpxFdcClient | None = None
    if resolved_settings.fdc_api_key:
        fdc_client = HttpxFdcClient.create(
            api_key=resolved_settings.fdc_api_key,
            base_url=resolved_settings.fdc_base_url,
            timeout_seconds=resolved_settings.external_timeout_seconds,
        )
        external_clients.append(fdc_client)

    classifier: OpenAIFoodClassifier | None = None
    if resolved_settings.openai_api_key:
        classifier = OpenAIFoodClassifier.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )

    lookup_service = NutritionLookupService(
        clients=external_clients,
        cache=InMemoryCache(),
    )
    catalog_service = FoodCatalogService(
        store=catalog_store,
        lookup=lookup_service,
        external_search_threshold=resolved_settings.external_search_threshold,
        fallback_category=resolved_settings.fallback_category,
    )
    diary_service = DiaryService(store=diary_store, catalog=catalog_service)
    goals_service = GoalsService(store=goals_store, diary_store=diary_store)
    label_mapper = LabelMapper(catalog_service)
    photo_service = PhotoAnalysisService(classifier=classifier, label_mapper=label_mapper)
    recipe_analyzer = RecipeAnalyzer(catalog_service)

    async def close_resources() -> None:
        await off_client.close()
        if fdc_client is not None:
            await fdc_client.close()
        if classifier is not None:
            await classifier.close()

    return AppContainer(
        settings=resolved_settings,
        lookup_service=lookup_service,
        catalog_service=catalog_service,
        diary_service=diary_service,
        goals_service=goals_service,
        label_mapper=label_mapper,
        photo_service=photo_service,
        recipe_analyzer=recipe_analyzer,
        close_resources=close_resources,
    )
