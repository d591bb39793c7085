"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, timedelta

from fastapi import FastAPI, HTTPException, Request, status

from food_diary.api.models import (
    CustomFoodRequest,
    EntryCreateRequest,
    EntryUpdateRequest,
    GoalsRequest,
    RecipeRequest,
    WaterRequest,
)
from food_diary.app_logging import configure_logging
from food_diary.containers import AppContainer
from food_diary.domain.goals import DailyGoals
from food_diary.services.goals import get_day_status_text, get_excess_text

MAX_REPORT_DAYS = 93
UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/foods/search")
    async def search_foods(
        request: Request,
        q: str,
        limit: int = 30,
        owner_id: str | None = None,
        category: str | None = None,
    ) -> dict[str, object]:
        """Search the catalog, falling back to external databases."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.catalog_service.search(
            q, limit=limit, owner_id=owner_id, category=category
        )
        return {"foods": result.foods, "updated": [food.id for food in result.updated]}

    @app.get("/foods/category/{category}")
    async def list_category(
        category: str, request: Request, limit: int = 50, owner_id: str | None = None
    ) -> dict[str, object]:
        """List the most popular foods of a category."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.catalog_service.search_by_category(
            category, limit=limit, owner_id=owner_id
        )
        return {"foods": result.foods, "updated": [food.id for food in result.updated]}

    @app.post("/foods/import")
    async def import_foods(request: Request) -> dict[str, object]:
        """Bulk-load shared foods from a CSV request body."""
        state_container: AppContainer = request.app.state.container
        body = await request.body()
        try:
            text = body.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HTTPException(
                status_code=UNPROCESSABLE, detail="CSV must be UTF-8"
            ) from exc
        result = state_container.catalog_service.import_csv(text)
        logger.info(
            "CSV import: imported=%s skipped=%s",
            len(result.imported),
            len(result.skipped),
        )
        return {
            "imported": [food.id for food in result.imported],
            "skipped": result.skipped,
        }

    @app.get("/foods/barcode/{code}")
    async def find_by_barcode(
        code: str, request: Request, owner_id: str | None = None
    ) -> dict[str, object]:
        """Return the food for a barcode."""
        state_container: AppContainer = request.app.state.container
        food = await state_container.catalog_service.find_by_barcode(code, owner_id)
        if food is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"food": food}

    @app.post("/foods/custom", status_code=status.HTTP_201_CREATED)
    async def create_custom_food(
        payload: CustomFoodRequest, request: Request
    ) -> dict[str, object]:
        """Create a user-authored food."""
        state_container: AppContainer = request.app.state.container
        try:
            food = state_container.catalog_service.create_custom_food(
                payload.owner_id, payload.model_dump(exclude={"owner_id"})
            )
        except ValueError as exc:
            raise HTTPException(status_code=UNPROCESSABLE, detail=str(exc)) from exc
        return {"food": food}

    @app.get("/foods/{food_id}")
    async def get_food(
        food_id: str, request: Request, owner_id: str | None = None
    ) -> dict[str, object]:
        """Return a catalog food by id."""
        state_container: AppContainer = request.app.state.container
        food = state_container.catalog_service.get_food(food_id, owner_id)
        if food is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"food": food}

    @app.get("/diary/{user_id}/{day}")
    async def get_diary_day(user_id: str, day: date, request: Request) -> dict[str, object]:
        """Return a day's meals and totals."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.diary_service.get_day(user_id, day)
        return {
            "meals": meals,
            "totals": state_container.diary_service.day_totals(user_id, day),
        }

    @app.post("/diary/{user_id}/{day}/{slot}", status_code=status.HTTP_201_CREATED)
    async def add_diary_entry(
        user_id: str,
        day: date,
        slot: str,
        payload: EntryCreateRequest,
        request: Request,
    ) -> dict[str, object]:
        """Log a food into a meal slot."""
        state_container: AppContainer = request.app.state.container
        food = state_container.catalog_service.get_food(payload.food_id, user_id)
        if food is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Food not found"
            )
        try:
            entry = state_container.diary_service.add_entry(
                user_id,
                day,
                slot,
                food,
                payload.amount,
                payload.unit,
                note=payload.note,
            )
        except ValueError as exc:
            raise HTTPException(status_code=UNPROCESSABLE, detail=str(exc)) from exc
        return {"entry": entry}

    @app.patch("/diary/{user_id}/{day}/{slot}/{entry_id}")
    async def update_diary_entry(  # noqa: PLR0913
        user_id: str,
        day: date,
        slot: str,
        entry_id: str,
        payload: EntryUpdateRequest,
        request: Request,
    ) -> dict[str, object]:
        """Change the amount, unit or note of an entry."""
        state_container: AppContainer = request.app.state.container
        changes: dict[str, object] = {"amount": payload.amount, "unit": payload.unit}
        if "note" in payload.model_fields_set:
            changes["note"] = payload.note
        try:
            entry = state_container.diary_service.update_entry(
                user_id, day, slot, entry_id, **changes
            )
        except ValueError as exc:
            raise HTTPException(status_code=UNPROCESSABLE, detail=str(exc)) from exc
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"entry": entry}

    @app.delete("/diary/{user_id}/{day}/{slot}/{entry_id}")
    async def remove_diary_entry(
        user_id: str, day: date, slot: str, entry_id: str, request: Request
    ) -> dict[str, str]:
        """Remove an entry from a meal slot."""
        state_container: AppContainer = request.app.state.container
        try:
            removed = state_container.diary_service.remove_entry(
                user_id, day, slot, entry_id
            )
        except ValueError as exc:
            raise HTTPException(status_code=UNPROCESSABLE, detail=str(exc)) from exc
        if not removed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    @app.put("/diary/{user_id}/{day}/water")
    async def update_water(
        user_id: str, day: date, payload: WaterRequest, request: Request
    ) -> dict[str, object]:
        """Set the water glasses for a day."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.diary_service.update_water(user_id, day, payload.glasses)
        return {"water": meals.water}

    @app.get("/goals/{user_id}")
    async def get_goals(user_id: str, request: Request) -> dict[str, object]:
        """Return the user's daily goals."""
        state_container: AppContainer = request.app.state.container
        return {"goals": state_container.goals_service.get_daily_goals(user_id)}

    @app.put("/goals/{user_id}")
    async def set_goals(
        user_id: str, payload: GoalsRequest, request: Request
    ) -> dict[str, object]:
        """Store the user's daily goals."""
        state_container: AppContainer = request.app.state.container
        goals = state_container.goals_service.set_daily_goals(
            user_id, DailyGoals(**payload.model_dump())
        )
        return {"goals": goals}

    @app.get("/goals/{user_id}/excess")
    async def get_excess(
        user_id: str,
        request: Request,
        start: date | None = None,
        end: date | None = None,
    ) -> dict[str, object]:
        """Return the excess report for a date range (default: last 7 days)."""
        state_container: AppContainer = request.app.state.container
        end_day = end or date.today()
        start_day = start or end_day - timedelta(days=6)
        if start_day > end_day:
            raise HTTPException(
                status_code=UNPROCESSABLE,
                detail="start must not be after end",
            )
        span = (end_day - start_day).days + 1
        if span > MAX_REPORT_DAYS:
            raise HTTPException(
                status_code=UNPROCESSABLE,
                detail=f"Range is limited to {MAX_REPORT_DAYS} days",
            )
        days = [start_day + timedelta(days=offset) for offset in range(span)]
        report = state_container.goals_service.summarize_period(user_id, days)
        return {
            "report": report,
            "total_excess_text": get_excess_text(report.excess.total_extra_calories),
            "day_status_text": [
                get_day_status_text(item.day_status) for item in report.interpretations
            ],
        }

    @app.post("/photo/analyze")
    async def analyze_photo(
        request: Request, owner_id: str | None = None
    ) -> dict[str, object]:
        """Analyze a food photo sent as the raw request body."""
        state_container: AppContainer = request.app.state.container
        image_bytes = await request.body()
        try:
            analysis = await state_container.photo_service.analyze(image_bytes, owner_id)
        except ValueError as exc:
            raise HTTPException(status_code=UNPROCESSABLE, detail=str(exc)) from exc
        logger.info(
            "Photo analyzed: label=%s food=%s",
            analysis.detected_label,
            analysis.food.id if analysis.food else None,
        )
        return {"analysis": analysis}

    @app.post("/recipes/analyze")
    async def analyze_recipe(
        payload: RecipeRequest, request: Request
    ) -> dict[str, object]:
        """Parse a recipe and compute its total and per-100 g nutrition."""
        state_container: AppContainer = request.app.state.container
        analysis = await state_container.recipe_analyzer.analyze(
            payload.text, payload.owner_id
        )
        return {"analysis": analysis}

    return app
