# recipehub/core/config.py
from __future__ import annotations
from dataclasses import dataclass
import os
import logging

# Spoonacular upstream
SPOONACULAR_API_KEY: str = os.getenv("SPOONACULAR_API_KEY", "")
SPOONACULAR_BASE_URL: str = os.getenv("SPOONACULAR_BASE_URL", "https://api.spoonacular.com")
INGREDIENT_IMAGE_BASE: str = os.getenv(
    "INGREDIENT_IMAGE_BASE", "https://spoonacular.com/cdn/ingredients_100x100/"
)
HTTP_TIMEOUT_S: float = float(os.getenv("HTTP_TIMEOUT_S", "10"))

SEARCH_RESULT_COUNT: int = int(os.getenv("SEARCH_RESULT_COUNT", "20"))
INGREDIENT_SEARCH_COUNT: int = int(os.getenv("INGREDIENT_SEARCH_COUNT", "10"))
INGREDIENT_QUERY_MIN_LEN: int = 3
RECENT_SEARCH_LIMIT: int = int(os.getenv("RECENT_SEARCH_LIMIT", "10"))

# Cache TTLs (seconds) per upstream call
RECIPES_CACHE_TTL_S: int = int(os.getenv("RECIPES_CACHE_TTL_S", str(5 * 60)))
RECIPE_DETAIL_CACHE_TTL_S: int = int(os.getenv("RECIPE_DETAIL_CACHE_TTL_S", str(60 * 60)))
INGREDIENT_SEARCH_CACHE_TTL_S: int = int(os.getenv("INGREDIENT_SEARCH_CACHE_TTL_S", str(30 * 60)))
BARCODE_CACHE_TTL_S: int = int(os.getenv("BARCODE_CACHE_TTL_S", str(24 * 60 * 60)))

DIETARY_PREFERENCES = [
    "vegan", "vegetarian", "gluten-free", "dairy-free",
    "keto", "paleo", "low-carb", "none",
]
TIME_TO_COOK_OPTIONS = [
    "any", "15 min or less", "30 min or less", "45 min or less", "1 hour or less",
]
DIFFICULTY_OPTIONS = ["any", "easy", "medium", "hard"]


@dataclass(frozen=True)
class Paths:
    ROOT: str = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
    DATA_DIR: str = os.path.join(ROOT, "data")
    STORE_FILE: str = os.path.join(DATA_DIR, "recipehub-storage.json")


# "memory" or "file"
STORE_BACKEND: str = os.getenv("STORE_BACKEND", "memory").lower()
STORE_PATH: str = os.getenv("STORE_PATH", Paths.STORE_FILE)

# Global logging (module-level loggers inherit this)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
LOGGER = logging.getLogger("recipehub")
