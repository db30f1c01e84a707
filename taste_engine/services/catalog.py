"""
Recipe Catalog abstraction.

Read-only access to recipes for candidate selection, similarity, and trending.
Implementations: in-memory (tests, embedding in another service) and JSON file
(local runs). The catalog is owned elsewhere; the engine never writes to it.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Set, Union

from ..models.recipe import RecipeAttributes, ensure_recipes
from .json_file import read_json

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class RecipeFilter:
    """
    Hard constraints for get_published_recipes.

    dietary_overlap: keep recipes sharing at least one restriction with this list.
    exclude_ids: recipe ids to leave out.
    newest_first: order by created_at descending instead of catalog order.
    """

    dietary_overlap: List[str] = field(default_factory=list)
    exclude_ids: Set[str] = field(default_factory=set)
    newest_first: bool = False


class RecipeCatalog(Protocol):
    """Protocol for catalog reads."""

    def get_published_recipes(
        self,
        recipe_filter: Optional[RecipeFilter] = None,
        limit: int = 100,
    ) -> List[RecipeAttributes]:
        """Return up to limit published recipes matching the filter."""
        ...

    def get_recipe(self, recipe_id: str) -> Optional[RecipeAttributes]:
        """Return the recipe (published or not), or None."""
        ...


def _sort_key_created(recipe: RecipeAttributes) -> datetime:
    if recipe.created_at is None:
        return _EPOCH
    if recipe.created_at.tzinfo is None:
        return recipe.created_at.replace(tzinfo=timezone.utc)
    return recipe.created_at


class InMemoryRecipeCatalog:
    """Catalog held in a dict, preserving insertion order."""

    def __init__(self, recipes: Optional[Iterable[Union[Dict, RecipeAttributes]]] = None):
        self._recipes: Dict[str, RecipeAttributes] = {}
        self._lock = threading.Lock()
        if recipes:
            self.add_recipes(recipes)

    def add_recipes(self, recipes: Iterable[Union[Dict, RecipeAttributes]]) -> None:
        with self._lock:
            for recipe in ensure_recipes(list(recipes)):
                self._recipes[recipe.id] = recipe

    def get_published_recipes(
        self,
        recipe_filter: Optional[RecipeFilter] = None,
        limit: int = 100,
    ) -> List[RecipeAttributes]:
        recipe_filter = recipe_filter or RecipeFilter()
        wanted = set(recipe_filter.dietary_overlap)
        with self._lock:
            recipes = list(self._recipes.values())
        out = []
        for recipe in recipes:
            if not recipe.is_published:
                continue
            if recipe.id in recipe_filter.exclude_ids:
                continue
            if wanted and not wanted.intersection(recipe.dietary_restrictions):
                continue
            out.append(recipe)
        if recipe_filter.newest_first:
            out.sort(key=_sort_key_created, reverse=True)
        return out[: max(0, limit)]

    def get_recipe(self, recipe_id: str) -> Optional[RecipeAttributes]:
        with self._lock:
            return self._recipes.get(recipe_id)

    def __len__(self) -> int:
        return len(self._recipes)


class JsonRecipeCatalog(InMemoryRecipeCatalog):
    """Catalog loaded once from a JSON file: a list of recipes or {"recipes": [...]}."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        data = read_json(self._path, default=[])
        recipes = data.get("recipes", []) if isinstance(data, dict) else data
        super().__init__(recipes)
