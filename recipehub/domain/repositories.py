# recipehub/domain/repositories.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from recipehub.domain.entities import Ingredient


class KeyValueStore(ABC):
    """Minimal string-keyed store; values are serialized JSON text."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def delete(self, key: str) -> None: ...


class RecipeProvider(ABC):
    """Upstream recipe data source (Spoonacular in production)."""

    @abstractmethod
    def find_by_ingredients(self, names: Sequence[str], number: int) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def information_bulk(self, recipe_ids: Sequence[str]) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def information(self, recipe_id: str) -> Dict[str, Any]: ...

    @abstractmethod
    def search_ingredients(self, query: str, number: int) -> List[Ingredient]: ...

    @abstractmethod
    def product_by_upc(self, upc: str) -> Optional[Ingredient]: ...
