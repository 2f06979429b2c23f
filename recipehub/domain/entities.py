# recipehub/domain/entities.py
from __future__ import annotations
import re
import uuid
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from recipehub.core.config import DIETARY_PREFERENCES, DIFFICULTY_OPTIONS, TIME_TO_COOK_OPTIONS

NO_PREFERENCE = "none"
ANY = "any"

_RE_TIME_LABEL = re.compile(r"^\s*(\d+)")


class FilterConfigError(ValueError):
    """Raised when a RecipeFilters value is outside its allowed set."""


@dataclass(frozen=True)
class Ingredient:
    id: str
    name: str
    image_url: str | None = None
    quantity: str | None = None
    unit: str | None = None

    @classmethod
    def manual(cls, name: str) -> "Ingredient":
        name = (name or "").strip()
        if not name:
            raise ValueError("ingredient name is required")
        return cls(id=f"manual-{uuid.uuid4().hex}", name=name)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Ingredient":
        return cls(
            id=str(d["id"]),
            name=str(d["name"]),
            image_url=d.get("image_url"),
            quantity=d.get("quantity"),
            unit=d.get("unit"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def parse_time_limit(label: str) -> Optional[int]:
    """Leading integer of a time-to-cook label, None for 'any'.

    "30 min or less" -> 30. The unit word is not read: "1 hour or less" -> 1.
    """
    if label == ANY:
        return None
    m = _RE_TIME_LABEL.match(label or "")
    if not m:
        raise FilterConfigError(f"Unparseable time_to_cook label: {label!r}")
    return int(m.group(1))


def normalize_dietary_preferences(prefs: Iterable[str]) -> Tuple[str, ...]:
    out: List[str] = []
    for p in prefs:
        if p not in DIETARY_PREFERENCES:
            raise FilterConfigError(f"Unknown dietary preference: {p!r}")
        if p != NO_PREFERENCE and p not in out:
            out.append(p)
    return tuple(out) or (NO_PREFERENCE,)


@dataclass(frozen=True)
class RecipeFilters:
    dietary_preferences: Tuple[str, ...] = (NO_PREFERENCE,)
    time_to_cook: str = ANY
    difficulty: str = ANY
    servings: int = 2
    calorie_limit: Optional[int] = None
    time_limit_minutes: Optional[int] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "dietary_preferences", normalize_dietary_preferences(self.dietary_preferences)
        )
        if self.time_to_cook not in TIME_TO_COOK_OPTIONS:
            raise FilterConfigError(f"Unknown time_to_cook: {self.time_to_cook!r}")
        object.__setattr__(self, "time_limit_minutes", parse_time_limit(self.time_to_cook))
        if self.difficulty not in DIFFICULTY_OPTIONS:
            raise FilterConfigError(f"Unknown difficulty: {self.difficulty!r}")
        if isinstance(self.servings, bool) or not isinstance(self.servings, int) or self.servings < 1:
            raise FilterConfigError(f"servings must be an integer >= 1, got {self.servings!r}")
        if self.calorie_limit is not None and (
            isinstance(self.calorie_limit, bool) or not isinstance(self.calorie_limit, int)
        ):
            raise FilterConfigError(f"calorie_limit must be an integer or None, got {self.calorie_limit!r}")

    @property
    def has_dietary_preferences(self) -> bool:
        return self.dietary_preferences != (NO_PREFERENCE,)

    def toggle_dietary_preference(self, preference: str) -> "RecipeFilters":
        if preference not in DIETARY_PREFERENCES:
            raise FilterConfigError(f"Unknown dietary preference: {preference!r}")
        if preference == NO_PREFERENCE:
            return replace(self, dietary_preferences=(NO_PREFERENCE,))

        prefs = [p for p in self.dietary_preferences if p != NO_PREFERENCE]
        if preference in prefs:
            prefs.remove(preference)
        else:
            prefs.append(preference)
        # empty tuple is normalized back to (none,)
        return replace(self, dietary_preferences=tuple(prefs))

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "RecipeFilters":
        prefs = d.get("dietary_preferences") or (NO_PREFERENCE,)
        if not isinstance(prefs, (list, tuple)):
            raise FilterConfigError(f"dietary_preferences must be a list, got {prefs!r}")
        return cls(
            dietary_preferences=tuple(prefs),
            time_to_cook=d.get("time_to_cook", ANY),
            difficulty=d.get("difficulty", ANY),
            servings=d.get("servings", 2),
            calorie_limit=d.get("calorie_limit"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dietary_preferences": list(self.dietary_preferences),
            "time_to_cook": self.time_to_cook,
            "difficulty": self.difficulty,
            "servings": self.servings,
            "calorie_limit": self.calorie_limit,
        }


@dataclass(frozen=True)
class SearchHit:
    id: str
    used_ingredient_count: int = 0


@dataclass(frozen=True)
class DietaryInfo:
    is_vegan: bool = False
    is_vegetarian: bool = False
    is_gluten_free: bool = False
    is_dairy_free: bool = False
    is_keto: bool = False
    is_paleo: bool = False
    is_low_carb: bool = False


@dataclass(frozen=True)
class RecipeCard:
    id: str
    name: str
    image_url: str | None
    matched_ingredients: int
    total_ingredients: int
    time_to_cook: int
    difficulty: str
    calories_per_serving: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RecipeDetail:
    id: str
    name: str
    image_url: str | None
    time_to_cook: int
    prep_time: int
    cook_time: int
    difficulty: str
    calories_per_serving: float
    servings: int | None
    ingredients: List[Ingredient]
    instructions: List[str]
    tags: List[str]
    dietary_info: DietaryInfo

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
