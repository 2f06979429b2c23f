# =========================
# FILE: recipehub/services/normalizer.py
# Raw Spoonacular records -> filtered RecipeCards / one RecipeDetail
# =========================
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging

from recipehub.core.config import INGREDIENT_IMAGE_BASE
from recipehub.domain.entities import (
    ANY,
    DietaryInfo,
    Ingredient,
    RecipeCard,
    RecipeDetail,
    RecipeFilters,
    SearchHit,
)

log = logging.getLogger("services.normalizer")

EASY, MEDIUM, HARD = "easy", "medium", "hard"
LOW_CARB_MAX_GRAMS = 20.0


# ----------------------------
# Optional-field accessors
# ----------------------------
def _nutrient_amount(record: Mapping[str, Any], name: str) -> Optional[float]:
    nutrients = (record.get("nutrition") or {}).get("nutrients") or []
    for n in nutrients:
        if n.get("name") == name and n.get("amount") is not None:
            return float(n["amount"])
    return None


def _ingredients(record: Mapping[str, Any]) -> List[Dict[str, Any]]:
    return list(record.get("extendedIngredients") or [])


def _first_instruction_steps(record: Mapping[str, Any]) -> List[Dict[str, Any]]:
    # Only the first instruction group is used; sub-recipes in later groups are dropped.
    groups = record.get("analyzedInstructions") or []
    if not groups:
        return []
    return list(groups[0].get("steps") or [])


def _minutes(record: Mapping[str, Any], key: str) -> int:
    v = record.get(key)
    try:
        return max(0, int(v or 0))
    except (TypeError, ValueError):
        return 0


def _format_amount(amount: Any) -> Optional[str]:
    if amount is None:
        return None
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def ingredient_image_url(image: Optional[str]) -> Optional[str]:
    if not image:
        return None
    return f"{INGREDIENT_IMAGE_BASE}{image}"


# ----------------------------
# Difficulty
# ----------------------------
def classify_difficulty(ingredient_count: int = 0, step_count: int = 0) -> str:
    complexity = (ingredient_count or 0) + (step_count or 0)
    if complexity < 10:
        return EASY
    if complexity < 20:
        return MEDIUM
    return HARD


def record_difficulty(record: Mapping[str, Any]) -> str:
    return classify_difficulty(len(_ingredients(record)), len(_first_instruction_steps(record)))


# ----------------------------
# Dietary facets
# ----------------------------
def resolve_dietary_info(record: Mapping[str, Any]) -> DietaryInfo:
    """
    Derive the seven dietary facets from upstream flags.

    keto, paleo and low-carb are heuristics: Spoonacular has no keto or paleo
    flag, so they are approximated from veryHealthy/veryPopular/whole30, and
    low-carb falls back to a carbohydrate threshold. They are not dietary
    certifications.
    """
    def flag(k: str) -> bool:
        return bool(record.get(k))

    carbs = _nutrient_amount(record, "Carbohydrates")
    return DietaryInfo(
        is_vegan=flag("vegan"),
        is_vegetarian=flag("vegetarian"),
        is_gluten_free=flag("glutenFree"),
        is_dairy_free=flag("dairyFree"),
        is_keto=flag("veryHealthy") and flag("veryPopular"),
        is_paleo=flag("whole30") or flag("veryHealthy"),
        is_low_carb=flag("lowFodmap") or (carbs is not None and carbs < LOW_CARB_MAX_GRAMS),
    )


_PREFERENCE_FACET = {
    "vegan": "is_vegan",
    "vegetarian": "is_vegetarian",
    "gluten-free": "is_gluten_free",
    "dairy-free": "is_dairy_free",
    "keto": "is_keto",
    "paleo": "is_paleo",
    "low-carb": "is_low_carb",
}


# ----------------------------
# Filter predicate
# ----------------------------
def _dietary_match(record: Mapping[str, Any], filters: RecipeFilters) -> bool:
    if not filters.has_dietary_preferences:
        return True
    info = resolve_dietary_info(record)
    # unknown values pass; RecipeFilters rejects them at construction
    return any(
        getattr(info, _PREFERENCE_FACET[p]) if p in _PREFERENCE_FACET else True
        for p in filters.dietary_preferences
    )


def _time_match(record: Mapping[str, Any], filters: RecipeFilters) -> bool:
    if filters.time_limit_minutes is None:
        return True
    return _minutes(record, "readyInMinutes") <= filters.time_limit_minutes


def _difficulty_match(record: Mapping[str, Any], filters: RecipeFilters) -> bool:
    if filters.difficulty == ANY:
        return True
    return record_difficulty(record) == filters.difficulty


def _calorie_match(record: Mapping[str, Any], filters: RecipeFilters) -> bool:
    if filters.calorie_limit is None:
        return True
    calories = _nutrient_amount(record, "Calories")
    return calories is None or calories <= filters.calorie_limit


_PREDICATES = (_dietary_match, _time_match, _difficulty_match, _calorie_match)


def matches_filters(record: Mapping[str, Any], filters: RecipeFilters) -> bool:
    return all(pred(record, filters) for pred in _PREDICATES)


# ----------------------------
# Projections
# ----------------------------
def parse_search_hits(raw: Iterable[Mapping[str, Any]]) -> List[SearchHit]:
    return [
        SearchHit(id=str(r["id"]), used_ingredient_count=int(r.get("usedIngredientCount") or 0))
        for r in raw
        if r.get("id") is not None
    ]


def to_recipe_card(record: Mapping[str, Any], hit: Optional[SearchHit]) -> RecipeCard:
    return RecipeCard(
        id=str(record.get("id")),
        name=(record.get("title") or "").strip(),
        image_url=record.get("image"),
        matched_ingredients=hit.used_ingredient_count if hit else 0,
        total_ingredients=len(_ingredients(record)),
        time_to_cook=_minutes(record, "readyInMinutes"),
        difficulty=record_difficulty(record),
        calories_per_serving=_nutrient_amount(record, "Calories") or 0,
    )


def build_recipe_cards(
    hits: Iterable[SearchHit],
    records: Iterable[Mapping[str, Any]],
    filters: RecipeFilters,
) -> List[RecipeCard]:
    """
    Join the search-by-ingredients hits with the bulk detail records by recipe id,
    drop records failing the filters, and order by search rank.

    Match counts only exist on the search hits, so they are always read from there.
    """
    by_id: Dict[str, SearchHit] = {}
    rank: Dict[str, int] = {}
    for i, h in enumerate(hits):
        by_id.setdefault(h.id, h)
        rank.setdefault(h.id, i)

    records = list(records)
    kept = [r for r in records if matches_filters(r, filters)]
    cards = [to_recipe_card(r, by_id.get(str(r.get("id")))) for r in kept]
    # stable sort: records missing from the search set keep bulk order at the end
    cards.sort(key=lambda c: rank.get(c.id, len(rank)))

    log.debug("build_recipe_cards: %d records -> %d cards", len(records), len(cards))
    return cards


def _to_ingredient(raw: Mapping[str, Any]) -> Ingredient:
    return Ingredient(
        id=str(raw.get("id")),
        name=raw.get("originalName") or raw.get("name") or "",
        image_url=ingredient_image_url(raw.get("image")),
        quantity=_format_amount(raw.get("amount")),
        unit=raw.get("unit"),
    )


def build_recipe_detail(record: Mapping[str, Any]) -> RecipeDetail:
    ready = _minutes(record, "readyInMinutes")
    prep = _minutes(record, "preparationMinutes")
    cook = _minutes(record, "cookingMinutes")
    servings = record.get("servings")
    return RecipeDetail(
        id=str(record.get("id")),
        name=(record.get("title") or "").strip(),
        image_url=record.get("image"),
        time_to_cook=ready,
        # approximate 1/3 prep, 2/3 cook split when upstream omits them
        prep_time=prep if prep > 0 else ready // 3,
        cook_time=cook if cook > 0 else ready * 2 // 3,
        difficulty=record_difficulty(record),
        calories_per_serving=_nutrient_amount(record, "Calories") or 0,
        servings=int(servings) if servings is not None else None,
        ingredients=[_to_ingredient(i) for i in _ingredients(record)],
        instructions=[s.get("step") or "" for s in _first_instruction_steps(record)],
        tags=list(record.get("dishTypes") or []),
        dietary_info=resolve_dietary_info(record),
    )
