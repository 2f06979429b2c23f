"""
Use-case tests: two-call join, caching, recent searches, lookups.
"""
import pytest

from conftest import FakeProvider, make_record
from recipehub.application.usecases import (
    FindRecipes,
    GetRecipeDetail,
    ListSavedRecipes,
    LookupBarcode,
    SearchIngredients,
)
from recipehub.domain.entities import Ingredient, RecipeFilters
from recipehub.services.cache import TTLCache


PANTRY = [Ingredient(id="1", name="tomato"), Ingredient(id="2", name="beef")]


def test_find_recipes_joins_match_counts(provider, user_store):
    cards = FindRecipes(provider, user_store)(PANTRY, RecipeFilters())

    assert [c.id for c in cards] == ["2", "1"]
    assert [c.matched_ingredients for c in cards] == [3, 1]
    assert provider.calls[0] == ("find_by_ingredients", ("tomato", "beef"), 20)
    assert provider.calls[1] == ("information_bulk", ("2", "1"))


def test_find_recipes_applies_filters(provider, user_store):
    cards = FindRecipes(provider, user_store)(PANTRY, RecipeFilters(dietary_preferences=("vegan",)))
    assert [c.name for c in cards] == ["Quick Salad"]


def test_find_recipes_records_recent_search(provider, user_store):
    FindRecipes(provider, user_store)(PANTRY, RecipeFilters())
    assert user_store.get_recent_searches() == ["tomato, beef"]


def test_find_recipes_caches_per_query(provider, user_store):
    uc = FindRecipes(provider, user_store)
    uc(PANTRY, RecipeFilters())
    uc(PANTRY, RecipeFilters())
    assert len(provider.calls) == 2

    uc(PANTRY, RecipeFilters(difficulty="easy"))
    assert len(provider.calls) == 4


def test_find_recipes_without_ingredients_skips_upstream(provider, user_store):
    assert FindRecipes(provider, user_store)([], RecipeFilters()) == []
    assert provider.calls == []


def test_find_recipes_propagates_upstream_failure(user_store):
    class Broken(FakeProvider):
        def information_bulk(self, recipe_ids):
            raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        FindRecipes(Broken(hits=[{"id": 1}]), user_store)(PANTRY, RecipeFilters())


def test_failed_search_is_not_remembered(user_store):
    class Unreachable(FakeProvider):
        def find_by_ingredients(self, names, number):
            raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        FindRecipes(Unreachable(), user_store)(PANTRY, RecipeFilters())
    assert user_store.get_recent_searches() == []


def test_recipe_detail_cached(provider):
    uc = GetRecipeDetail(provider)
    assert uc("2").name == "Beef Stew"
    uc("2")
    assert provider.calls == [("information", "2")]


def test_recipe_detail_requires_id(provider):
    with pytest.raises(ValueError):
        GetRecipeDetail(provider)("  ")


def test_search_ingredients_min_length(provider):
    uc = SearchIngredients(provider)
    assert uc("to") == []
    assert provider.calls == []
    assert [i.name for i in uc("toma")] == ["tomato", "tomato paste"]


def test_lookup_barcode(provider):
    uc = LookupBarcode(provider)
    assert uc("041631000564").name == "Swan Flour"
    with pytest.raises(LookupError):
        uc("999")


def test_list_saved_recipes(provider, user_store):
    user_store.save_recipe("1")
    user_store.save_recipe("2")
    details = ListSavedRecipes(user_store, GetRecipeDetail(provider))()
    assert [d.name for d in details] == ["Quick Salad", "Beef Stew"]


def test_ttl_cache_expires():
    now = [1000.0]
    cache = TTLCache(ttl_s=10, clock=lambda: now[0])
    cache.set("k", [make_record()])
    assert cache.get("k") is not None
    now[0] += 11
    assert cache.get("k") is None


def test_ttl_cache_evicts_oldest_when_full():
    now = [0.0]
    cache = TTLCache(ttl_s=100, max_items=10, clock=lambda: now[0])
    for i in range(10):
        now[0] += 1
        cache.set(i, i)
    cache.set("new", 1)
    assert cache.get(0) is None
    assert cache.get(9) == 9 and cache.get("new") == 1
