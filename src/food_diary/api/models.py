"""Request bodies for the HTTP API."""

from pydantic import BaseModel, Field


class CustomFoodRequest(BaseModel):
    """User-authored food, macros per 100 g."""

    owner_id: str
    name: str
    calories: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    carbs_g: float = 0.0
    name_localized: str | None = None
    brand: str | None = None
    barcode: str | None = None
    category: str | None = None
    aliases: list[str] = Field(default_factory=list)


class EntryCreateRequest(BaseModel):
    """Food logged into a meal slot."""

    food_id: str
    amount: float = Field(ge=0)
    unit: str = "г"
    note: str | None = None


class EntryUpdateRequest(BaseModel):
    """Partial update of a diary entry."""

    amount: float | None = Field(default=None, ge=0)
    unit: str | None = None
    note: str | None = None


class WaterRequest(BaseModel):
    """Number of water glasses for a day."""

    glasses: int = Field(ge=0)


class GoalsRequest(BaseModel):
    """Daily macro targets."""

    calories_target: float = Field(ge=0)
    protein_target: float = Field(ge=0)
    fat_target: float = Field(ge=0)
    carbs_target: float = Field(ge=0)


class RecipeRequest(BaseModel):
    """Free-text ingredient list, one ingredient per line or comma."""

    text: str
    owner_id: str | None = None
