"""
Shared fixtures: upstream-shaped recipe records and an in-memory recipe provider.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import pytest

from recipehub.domain.entities import Ingredient
from recipehub.domain.repositories import RecipeProvider
from recipehub.infrastructure.kv_store import InMemoryKeyValueStore
from recipehub.infrastructure.user_store import UserStore


def make_record(
    recipe_id: int = 1,
    title: str = "Tomato Soup",
    n_ingredients: int = 3,
    n_steps: int = 2,
    ready: int = 25,
    calories: Optional[float] = None,
    carbs: Optional[float] = None,
    **flags: Any,
) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "id": recipe_id,
        "title": title,
        "image": f"https://img.spoonacular.com/recipes/{recipe_id}-312x231.jpg",
        "readyInMinutes": ready,
        "servings": 2,
        "dishTypes": ["soup"],
        "extendedIngredients": [
            {"id": 100 + i, "name": f"ing{i}", "image": f"ing{i}.png", "amount": 1.0, "unit": "cup"}
            for i in range(n_ingredients)
        ],
        "analyzedInstructions": [
            {"name": "", "steps": [{"number": i + 1, "step": f"Step {i + 1}"} for i in range(n_steps)]}
        ],
    }
    nutrients: List[Dict[str, Any]] = []
    if calories is not None:
        nutrients.append({"name": "Calories", "amount": calories, "unit": "kcal"})
    if carbs is not None:
        nutrients.append({"name": "Carbohydrates", "amount": carbs, "unit": "g"})
    if nutrients:
        record["nutrition"] = {"nutrients": nutrients}
    record.update(flags)
    return record


class FakeProvider(RecipeProvider):
    def __init__(
        self,
        hits: Optional[List[Dict[str, Any]]] = None,
        records: Optional[List[Dict[str, Any]]] = None,
        ingredients: Optional[List[Ingredient]] = None,
        products: Optional[Dict[str, Ingredient]] = None,
    ) -> None:
        self.hits = hits or []
        self.records = records or []
        self.ingredients = ingredients or []
        self.products = products or {}
        self.calls: List[tuple] = []

    def find_by_ingredients(self, names: Sequence[str], number: int) -> List[Dict[str, Any]]:
        self.calls.append(("find_by_ingredients", tuple(names), number))
        return list(self.hits)

    def information_bulk(self, recipe_ids: Sequence[str]) -> List[Dict[str, Any]]:
        self.calls.append(("information_bulk", tuple(recipe_ids)))
        wanted = set(recipe_ids)
        return [r for r in self.records if str(r["id"]) in wanted]

    def information(self, recipe_id: str) -> Dict[str, Any]:
        self.calls.append(("information", recipe_id))
        for r in self.records:
            if str(r["id"]) == recipe_id:
                return r
        raise LookupError(recipe_id)

    def search_ingredients(self, query: str, number: int) -> List[Ingredient]:
        self.calls.append(("search_ingredients", query, number))
        return [i for i in self.ingredients if query.lower() in i.name.lower()][:number]

    def product_by_upc(self, upc: str) -> Optional[Ingredient]:
        self.calls.append(("product_by_upc", upc))
        return self.products.get(upc)


@pytest.fixture
def user_store() -> UserStore:
    return UserStore(InMemoryKeyValueStore())


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(
        hits=[
            {"id": 2, "usedIngredientCount": 3, "missedIngredientCount": 1},
            {"id": 1, "usedIngredientCount": 1, "missedIngredientCount": 4},
        ],
        records=[
            make_record(1, "Quick Salad", n_ingredients=4, n_steps=2, ready=10, calories=200, vegan=True, vegetarian=True),
            make_record(2, "Beef Stew", n_ingredients=12, n_steps=6, ready=120, calories=650),
        ],
        ingredients=[
            Ingredient(id="11529", name="tomato", image_url="https://spoonacular.com/cdn/ingredients_100x100/tomato.png"),
            Ingredient(id="10011529", name="tomato paste"),
        ],
        products={"041631000564": Ingredient(id="22347", name="Swan Flour")},
    )
