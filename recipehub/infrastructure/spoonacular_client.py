# recipehub/infrastructure/spoonacular_client.py
from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence
import logging

import requests

from recipehub.core.config import HTTP_TIMEOUT_S, SPOONACULAR_BASE_URL
from recipehub.domain.entities import Ingredient
from recipehub.domain.repositories import RecipeProvider
from recipehub.services.normalizer import ingredient_image_url

log = logging.getLogger("infra.spoonacular")


class SpoonacularClient(RecipeProvider):
    """
    Thin wrapper over the Spoonacular REST API.
    Failures are not retried: any requests exception reaches the caller as-is.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = SPOONACULAR_BASE_URL,
        timeout: float = HTTP_TIMEOUT_S,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            log.warning("SPOONACULAR_API_KEY is empty; upstream calls will be rejected")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        url = self.base_url + path
        q = dict(params or {})
        q["apiKey"] = self.api_key
        log.debug("GET %s %s", path, {k: v for k, v in q.items() if k != "apiKey"})
        r = self.session.get(url, params=q, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def find_by_ingredients(self, names: Sequence[str], number: int) -> List[Dict[str, Any]]:
        data = self._get(
            "/recipes/findByIngredients",
            {
                "ingredients": ",".join(names),
                "number": number,
                "ranking": 2,  # maximize used ingredients
                "ignorePantry": "true",
            },
        )
        log.info("findByIngredients(%d names) -> %d hits", len(names), len(data or []))
        return list(data or [])

    def information_bulk(self, recipe_ids: Sequence[str]) -> List[Dict[str, Any]]:
        if not recipe_ids:
            return []
        data = self._get(
            "/recipes/informationBulk",
            {"ids": ",".join(str(i) for i in recipe_ids), "includeNutrition": "true"},
        )
        return list(data or [])

    def information(self, recipe_id: str) -> Dict[str, Any]:
        return self._get(f"/recipes/{recipe_id}/information", {"includeNutrition": "true"})

    def search_ingredients(self, query: str, number: int) -> List[Ingredient]:
        data = self._get(
            "/food/ingredients/search",
            {"query": query, "number": number, "metaInformation": "true"},
        )
        return [
            Ingredient(
                id=str(x["id"]),
                name=(x.get("name") or "").strip(),
                image_url=ingredient_image_url(x.get("image")),
            )
            for x in (data or {}).get("results") or []
        ]

    def product_by_upc(self, upc: str) -> Optional[Ingredient]:
        try:
            data = self._get(f"/food/products/upc/{upc}")
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                log.info("No product for UPC %s", upc)
                return None
            raise
        if not data or data.get("id") is None:
            return None
        return Ingredient(
            id=str(data["id"]),
            name=(data.get("title") or "").strip(),
            image_url=data.get("image"),
        )
