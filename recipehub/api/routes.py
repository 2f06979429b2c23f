# recipehub/api/routes.py
from __future__ import annotations

import logging
from typing import Any, List

import anyio
import requests
from fastapi import APIRouter, Depends, HTTPException, Request

from recipehub.api.schemas import (
    AddIngredientRequest,
    FiltersModel,
    IngredientModel,
    RecipeDetailModel,
    RecipeSearchRequest,
    RecipeSearchResponse,
    SavedRecipesResponse,
)
from recipehub.domain.entities import FilterConfigError, Ingredient, RecipeFilters

log = logging.getLogger("api.routes")
router = APIRouter()


# -------------------------
# Dependencies via app.state
# -------------------------
def _state(request: Request, name: str):
    obj = getattr(request.app.state, name, None)
    if obj is None:
        raise RuntimeError(f"{name} not initialized. Check app startup wiring.")
    return obj


def get_user_store(request: Request):
    return _state(request, "user_store")


def get_find_recipes(request: Request):
    return _state(request, "find_recipes_uc")


def get_recipe_detail(request: Request):
    return _state(request, "recipe_detail_uc")


def get_search_ingredients(request: Request):
    return _state(request, "search_ingredients_uc")


def get_lookup_barcode(request: Request):
    return _state(request, "lookup_barcode_uc")


def get_saved_recipes(request: Request):
    return _state(request, "saved_recipes_uc")


def _upstream_failure(e: requests.RequestException, what: str, not_found: bool = False) -> HTTPException:
    # an upstream 404 only means "missing" for single-resource lookups
    resp = getattr(e, "response", None)
    if not_found and resp is not None and resp.status_code == 404:
        return HTTPException(status_code=404, detail=f"{what} not found upstream")
    log.exception("Upstream failure during %s", what)
    return HTTPException(status_code=502, detail=f"Recipe provider error: {e}")


@router.get("/healthz")
def healthz() -> Any:
    return {"status": "ok"}


# -------------------------
# Recipes
# -------------------------
@router.post("/recipes/search", response_model=RecipeSearchResponse)
async def search_recipes(
    req: RecipeSearchRequest,
    uc=Depends(get_find_recipes),
    store=Depends(get_user_store),
) -> Any:
    if req.ingredients is not None:
        ingredients = [i.to_entity() for i in req.ingredients]
    else:
        ingredients = store.get_ingredients()

    try:
        filters = req.filters.to_entity() if req.filters else (store.get_filters() or RecipeFilters())
    except FilterConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not ingredients:
        raise HTTPException(status_code=400, detail="at least one ingredient is required")

    try:
        cards = await anyio.to_thread.run_sync(uc, ingredients, filters)
    except requests.RequestException as e:
        raise _upstream_failure(e, "recipe search")

    return {
        "recipes": [c.to_dict() for c in cards],
        "ingredients": [i.to_dict() for i in ingredients],
        "filters": filters.to_dict(),
    }


@router.get("/recipes/{recipe_id}", response_model=RecipeDetailModel)
async def recipe_detail(recipe_id: str, uc=Depends(get_recipe_detail)) -> Any:
    try:
        detail = await anyio.to_thread.run_sync(uc, recipe_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=f"Recipe not found: {e}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except requests.RequestException as e:
        raise _upstream_failure(e, f"recipe {recipe_id}", not_found=True)
    return detail.to_dict()


# -------------------------
# Ingredients
# -------------------------
@router.get("/ingredients/search", response_model=List[IngredientModel])
async def search_ingredients(query: str = "", uc=Depends(get_search_ingredients)) -> Any:
    try:
        found = await anyio.to_thread.run_sync(uc, query)
    except requests.RequestException as e:
        raise _upstream_failure(e, "ingredient search")
    return [i.to_dict() for i in found]


@router.get("/ingredients/barcode/{upc}", response_model=IngredientModel)
async def lookup_barcode(upc: str, uc=Depends(get_lookup_barcode)) -> Any:
    try:
        found = await anyio.to_thread.run_sync(uc, upc)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except requests.RequestException as e:
        raise _upstream_failure(e, f"barcode {upc}")
    return found.to_dict()


# -------------------------
# Pantry (the user's current ingredient list)
# -------------------------
@router.get("/pantry", response_model=List[IngredientModel])
def get_pantry(store=Depends(get_user_store)) -> Any:
    return [i.to_dict() for i in store.get_ingredients()]


@router.put("/pantry", response_model=List[IngredientModel])
def replace_pantry(items: List[IngredientModel], store=Depends(get_user_store)) -> Any:
    ingredients = [i.to_entity() for i in items]
    store.save_ingredients(ingredients)
    return [i.to_dict() for i in ingredients]


@router.post("/pantry", response_model=List[IngredientModel])
def add_to_pantry(req: AddIngredientRequest, store=Depends(get_user_store)) -> Any:
    try:
        if req.id:
            ingredient = Ingredient(id=req.id, name=req.name.strip(), image_url=req.image_url)
        else:
            ingredient = Ingredient.manual(req.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [i.to_dict() for i in store.add_ingredient(ingredient)]


@router.delete("/pantry/{ingredient_id}", response_model=List[IngredientModel])
def remove_from_pantry(ingredient_id: str, store=Depends(get_user_store)) -> Any:
    return [i.to_dict() for i in store.remove_ingredient(ingredient_id)]


# -------------------------
# Filters
# -------------------------
@router.get("/filters", response_model=FiltersModel)
def get_filters(store=Depends(get_user_store)) -> Any:
    return (store.get_filters() or RecipeFilters()).to_dict()


@router.put("/filters", response_model=FiltersModel)
def put_filters(req: FiltersModel, store=Depends(get_user_store)) -> Any:
    try:
        filters = req.to_entity()
    except FilterConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
    store.save_filters(filters)
    return filters.to_dict()


@router.post("/filters/dietary/{preference}", response_model=FiltersModel)
def toggle_dietary(preference: str, store=Depends(get_user_store)) -> Any:
    current = store.get_filters() or RecipeFilters()
    try:
        filters = current.toggle_dietary_preference(preference)
    except FilterConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
    store.save_filters(filters)
    return filters.to_dict()


# -------------------------
# Saved recipes
# -------------------------
@router.get("/saved", response_model=SavedRecipesResponse)
async def list_saved(
    details: bool = False,
    store=Depends(get_user_store),
    uc=Depends(get_saved_recipes),
) -> Any:
    out: dict = {"recipe_ids": store.get_saved_recipes()}
    if details:
        try:
            recipes = await anyio.to_thread.run_sync(uc)
        except requests.RequestException as e:
            raise _upstream_failure(e, "saved recipes")
        out["recipes"] = [r.to_dict() for r in recipes]
    return out


@router.put("/saved/{recipe_id}", response_model=SavedRecipesResponse)
def save_recipe(recipe_id: str, store=Depends(get_user_store)) -> Any:
    store.save_recipe(recipe_id)
    return {"recipe_ids": store.get_saved_recipes()}


@router.delete("/saved/{recipe_id}", response_model=SavedRecipesResponse)
def unsave_recipe(recipe_id: str, store=Depends(get_user_store)) -> Any:
    store.remove_recipe(recipe_id)
    return {"recipe_ids": store.get_saved_recipes()}


# -------------------------
# Recent searches
# -------------------------
@router.get("/recent-searches", response_model=List[str])
def recent_searches(store=Depends(get_user_store)) -> Any:
    return store.get_recent_searches()


@router.delete("/recent-searches", response_model=List[str])
def clear_recent_searches(store=Depends(get_user_store)) -> Any:
    store.clear_recent_searches()
    return []
