# =========================
# FILE: recipehub/api/schemas.py
# =========================
from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field

from recipehub.domain import entities as e


class IngredientModel(BaseModel):
    id: str
    name: str
    image_url: Optional[str] = None
    quantity: Optional[str] = None
    unit: Optional[str] = None

    def to_entity(self) -> e.Ingredient:
        return e.Ingredient(
            id=self.id, name=self.name, image_url=self.image_url,
            quantity=self.quantity, unit=self.unit,
        )


class AddIngredientRequest(BaseModel):
    """Either a known ingredient (id + name) or a manual entry (name only)."""
    id: Optional[str] = None
    name: str = Field(..., min_length=1, json_schema_extra={"example": "tomato"})
    image_url: Optional[str] = None


class FiltersModel(BaseModel):
    dietary_preferences: List[str] = Field(default_factory=lambda: [e.NO_PREFERENCE])
    time_to_cook: str = e.ANY
    difficulty: str = e.ANY
    servings: int = Field(default=2, ge=1)
    calorie_limit: Optional[int] = None

    def to_entity(self) -> e.RecipeFilters:
        # raises FilterConfigError on unknown labels
        return e.RecipeFilters.from_dict(self.model_dump())


class RecipeSearchRequest(BaseModel):
    ingredients: Optional[List[IngredientModel]] = None
    filters: Optional[FiltersModel] = None


class RecipeCardModel(BaseModel):
    id: str
    name: str
    image_url: Optional[str] = None
    matched_ingredients: int
    total_ingredients: int
    time_to_cook: int
    difficulty: str
    calories_per_serving: float


class DietaryInfoModel(BaseModel):
    is_vegan: bool
    is_vegetarian: bool
    is_gluten_free: bool
    is_dairy_free: bool
    is_keto: bool
    is_paleo: bool
    is_low_carb: bool


class RecipeDetailModel(BaseModel):
    id: str
    name: str
    image_url: Optional[str] = None
    time_to_cook: int
    prep_time: int
    cook_time: int
    difficulty: str
    calories_per_serving: float
    servings: Optional[int] = None
    ingredients: List[IngredientModel]
    instructions: List[str]
    tags: List[str]
    dietary_info: DietaryInfoModel


class RecipeSearchResponse(BaseModel):
    recipes: List[RecipeCardModel]
    ingredients: List[IngredientModel]
    filters: FiltersModel


class SavedRecipesResponse(BaseModel):
    recipe_ids: List[str]
    recipes: Optional[List[RecipeDetailModel]] = None
