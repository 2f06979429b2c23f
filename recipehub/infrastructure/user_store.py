# =========================
# FILE: recipehub/infrastructure/user_store.py
# Typed access to the user's pantry, filters, favorites and recent searches
# =========================
from __future__ import annotations

import logging
from typing import Any, List, Optional

import ujson as json

from recipehub.core.config import RECENT_SEARCH_LIMIT
from recipehub.domain.entities import FilterConfigError, Ingredient, RecipeFilters
from recipehub.domain.repositories import KeyValueStore

log = logging.getLogger("infra.user_store")

KEY_INGREDIENTS = "ingredients"
KEY_FILTERS = "filters"
KEY_SAVED_RECIPES = "saved_recipes"
KEY_RECENT_SEARCHES = "recent_searches"


class UserStore:
    def __init__(self, store: KeyValueStore, recent_limit: int = RECENT_SEARCH_LIMIT) -> None:
        self.store = store
        self.recent_limit = recent_limit

    def _read(self, key: str) -> Any:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            log.warning("Discarding corrupt value under key %r", key)
            return None

    def _write(self, key: str, value: Any) -> None:
        self.store.set(key, json.dumps(value, ensure_ascii=False))

    # ---- ingredients ----
    def get_ingredients(self) -> List[Ingredient]:
        data = self._read(KEY_INGREDIENTS)
        if not isinstance(data, list):
            return []
        out: List[Ingredient] = []
        for d in data:
            try:
                out.append(Ingredient.from_dict(d))
            except (KeyError, TypeError, AttributeError):
                log.warning("Skipping malformed stored ingredient: %s", d)
        return out

    def save_ingredients(self, ingredients: List[Ingredient]) -> None:
        self._write(KEY_INGREDIENTS, [i.to_dict() for i in ingredients])

    def add_ingredient(self, ingredient: Ingredient) -> List[Ingredient]:
        items = self.get_ingredients()
        if not any(i.id == ingredient.id for i in items):
            items.append(ingredient)
            self.save_ingredients(items)
        return items

    def remove_ingredient(self, ingredient_id: str) -> List[Ingredient]:
        items = [i for i in self.get_ingredients() if i.id != ingredient_id]
        self.save_ingredients(items)
        return items

    # ---- filters ----
    def get_filters(self) -> Optional[RecipeFilters]:
        data = self._read(KEY_FILTERS)
        if not isinstance(data, dict):
            return None
        try:
            return RecipeFilters.from_dict(data)
        except FilterConfigError as e:
            log.warning("Ignoring stored filters: %s", e)
            return None

    def save_filters(self, filters: RecipeFilters) -> None:
        self._write(KEY_FILTERS, filters.to_dict())

    # ---- saved recipes ----
    def get_saved_recipes(self) -> List[str]:
        data = self._read(KEY_SAVED_RECIPES)
        return [str(x) for x in data] if isinstance(data, list) else []

    def save_recipe(self, recipe_id: str) -> None:
        saved = self.get_saved_recipes()
        if recipe_id not in saved:
            saved.append(recipe_id)
            self._write(KEY_SAVED_RECIPES, saved)

    def remove_recipe(self, recipe_id: str) -> None:
        saved = self.get_saved_recipes()
        self._write(KEY_SAVED_RECIPES, [x for x in saved if x != recipe_id])

    def is_recipe_saved(self, recipe_id: str) -> bool:
        return recipe_id in self.get_saved_recipes()

    # ---- recent searches ----
    def get_recent_searches(self) -> List[str]:
        data = self._read(KEY_RECENT_SEARCHES)
        return [str(x) for x in data] if isinstance(data, list) else []

    def save_recent_search(self, query: str) -> None:
        recent = [query] + [q for q in self.get_recent_searches() if q != query]
        self._write(KEY_RECENT_SEARCHES, recent[: self.recent_limit])

    def clear_recent_searches(self) -> None:
        self.store.delete(KEY_RECENT_SEARCHES)
