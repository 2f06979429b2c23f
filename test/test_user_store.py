"""
Tests for the key-value stores and the typed user store on top of them.
"""
import os

import pytest

from recipehub.domain.entities import Ingredient, RecipeFilters
from recipehub.infrastructure.kv_store import InMemoryKeyValueStore, JsonFileKeyValueStore, build_store
from recipehub.infrastructure.user_store import KEY_FILTERS, KEY_INGREDIENTS, UserStore


def test_in_memory_store_get_set_delete():
    kv = InMemoryKeyValueStore()
    assert kv.get("a") is None
    kv.set("a", "1")
    assert kv.get("a") == "1"
    kv.delete("a")
    kv.delete("a")
    assert kv.get("a") is None


def test_file_store_persists_across_instances(tmp_path):
    path = str(tmp_path / "nested" / "store.json")
    kv = JsonFileKeyValueStore(path)
    kv.set("filters", '{"servings": 4}')
    assert os.path.exists(path)

    again = JsonFileKeyValueStore(path)
    assert again.get("filters") == '{"servings": 4}'
    again.delete("filters")
    assert JsonFileKeyValueStore(path).get("filters") is None


def test_file_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonFileKeyValueStore(str(path)).get("anything") is None


def test_build_store_rejects_unknown_backend(tmp_path):
    assert isinstance(build_store("memory", str(tmp_path / "x.json")), InMemoryKeyValueStore)
    with pytest.raises(ValueError):
        build_store("redis", "")


class TestIngredients:
    def test_empty_by_default(self, user_store):
        assert user_store.get_ingredients() == []

    def test_add_dedupes_by_id(self, user_store):
        tomato = Ingredient(id="11529", name="tomato")
        user_store.add_ingredient(tomato)
        user_store.add_ingredient(Ingredient(id="11529", name="tomato again"))
        assert user_store.get_ingredients() == [tomato]

    def test_remove(self, user_store):
        user_store.save_ingredients([Ingredient(id="1", name="egg"), Ingredient(id="2", name="milk")])
        assert [i.id for i in user_store.remove_ingredient("1")] == ["2"]
        assert [i.name for i in user_store.get_ingredients()] == ["milk"]

    def test_corrupt_value_reads_as_empty(self, user_store):
        user_store.store.set(KEY_INGREDIENTS, "[{broken")
        assert user_store.get_ingredients() == []


class TestFilters:
    def test_unset_is_none(self, user_store):
        assert user_store.get_filters() is None

    def test_round_trip(self, user_store):
        f = RecipeFilters(dietary_preferences=("vegan", "keto"), difficulty="hard", servings=4, calorie_limit=700)
        user_store.save_filters(f)
        assert user_store.get_filters() == f

    def test_invalid_stored_filters_are_ignored(self, user_store):
        user_store.store.set(KEY_FILTERS, '{"difficulty": "impossible"}')
        assert user_store.get_filters() is None

    def test_non_list_dietary_preferences_are_ignored(self, user_store):
        user_store.store.set(KEY_FILTERS, '{"dietary_preferences": 5}')
        assert user_store.get_filters() is None


class TestSavedRecipes:
    def test_save_is_idempotent_and_ordered(self, user_store):
        for rid in ("3", "1", "3", "2"):
            user_store.save_recipe(rid)
        assert user_store.get_saved_recipes() == ["3", "1", "2"]
        assert user_store.is_recipe_saved("1")

    def test_remove(self, user_store):
        user_store.save_recipe("3")
        user_store.remove_recipe("3")
        user_store.remove_recipe("missing")
        assert user_store.get_saved_recipes() == []
        assert not user_store.is_recipe_saved("3")


class TestRecentSearches:
    def test_move_to_front(self, user_store):
        for q in ("egg", "milk", "egg"):
            user_store.save_recent_search(q)
        assert user_store.get_recent_searches() == ["egg", "milk"]

    def test_capped(self):
        store = UserStore(InMemoryKeyValueStore(), recent_limit=3)
        for i in range(5):
            store.save_recent_search(f"q{i}")
        assert store.get_recent_searches() == ["q4", "q3", "q2"]

    def test_clear(self, user_store):
        user_store.save_recent_search("egg")
        user_store.clear_recent_searches()
        assert user_store.get_recent_searches() == []
