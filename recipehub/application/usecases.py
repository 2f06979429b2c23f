# =========================
# FILE: recipehub/application/usecases.py
# =========================
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from recipehub.core.config import (
    BARCODE_CACHE_TTL_S,
    INGREDIENT_QUERY_MIN_LEN,
    INGREDIENT_SEARCH_CACHE_TTL_S,
    INGREDIENT_SEARCH_COUNT,
    RECIPE_DETAIL_CACHE_TTL_S,
    RECIPES_CACHE_TTL_S,
    SEARCH_RESULT_COUNT,
)
from recipehub.domain.entities import Ingredient, RecipeCard, RecipeDetail, RecipeFilters
from recipehub.domain.repositories import RecipeProvider
from recipehub.infrastructure.user_store import UserStore
from recipehub.services.cache import TTLCache
from recipehub.services.normalizer import build_recipe_cards, build_recipe_detail, parse_search_hits

log = logging.getLogger("app.usecases")


@dataclass(frozen=True)
class FindRecipes:
    provider: RecipeProvider
    user_store: UserStore
    number: int = SEARCH_RESULT_COUNT
    cache: TTLCache = field(default_factory=lambda: TTLCache(ttl_s=RECIPES_CACHE_TTL_S))

    def __call__(self, ingredients: Sequence[Ingredient], filters: RecipeFilters) -> List[RecipeCard]:
        names = [i.name for i in ingredients if i.name.strip()]
        if not names:
            return []

        key = (tuple(names), filters)
        cards = self.cache.get_or_load(key, lambda: self._search(names, filters))
        # only completed searches are remembered
        self.user_store.save_recent_search(", ".join(names))
        return cards

    def _search(self, names: List[str], filters: RecipeFilters) -> List[RecipeCard]:
        # two sequential calls; the bulk call carries nutrients/flags/steps, not match counts
        hits = parse_search_hits(self.provider.find_by_ingredients(names, self.number))
        records = self.provider.information_bulk([h.id for h in hits])
        cards = build_recipe_cards(hits, records, filters)
        log.info("FindRecipes: %d hits, %d records, %d cards", len(hits), len(records), len(cards))
        return cards


@dataclass(frozen=True)
class GetRecipeDetail:
    provider: RecipeProvider
    cache: TTLCache = field(default_factory=lambda: TTLCache(ttl_s=RECIPE_DETAIL_CACHE_TTL_S))

    def __call__(self, recipe_id: str) -> RecipeDetail:
        key = (recipe_id or "").strip()
        if not key:
            raise ValueError("recipe_id is required")
        return self.cache.get_or_load(key, lambda: build_recipe_detail(self.provider.information(key)))


@dataclass(frozen=True)
class SearchIngredients:
    provider: RecipeProvider
    number: int = INGREDIENT_SEARCH_COUNT
    cache: TTLCache = field(default_factory=lambda: TTLCache(ttl_s=INGREDIENT_SEARCH_CACHE_TTL_S))

    def __call__(self, query: str) -> List[Ingredient]:
        q = (query or "").strip()
        if len(q) < INGREDIENT_QUERY_MIN_LEN:
            return []
        return self.cache.get_or_load(q.lower(), lambda: self.provider.search_ingredients(q, self.number))


@dataclass(frozen=True)
class LookupBarcode:
    provider: RecipeProvider
    cache: TTLCache = field(default_factory=lambda: TTLCache(ttl_s=BARCODE_CACHE_TTL_S))

    def __call__(self, upc: str) -> Ingredient:
        code = (upc or "").strip()
        if not code:
            raise ValueError("upc is required")
        found: Optional[Ingredient] = self.cache.get(code)
        if found is None:
            found = self.provider.product_by_upc(code)
            if found is None:
                raise LookupError(f"No product for barcode: {code}")
            self.cache.set(code, found)
        return found


@dataclass(frozen=True)
class ListSavedRecipes:
    user_store: UserStore
    recipe_detail: GetRecipeDetail

    def __call__(self) -> List[RecipeDetail]:
        return [self.recipe_detail(rid) for rid in self.user_store.get_saved_recipes()]
