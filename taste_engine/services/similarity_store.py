"""
Similarity store: cached pairwise recipe similarities.

Rows are keyed by the ordered pair (recipe_a_id, recipe_b_id) and upserted.
Nothing here expires rows; callers invalidate explicitly via delete_for_recipe.
"""

import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Tuple, Union

from ..models.similarity import RecipeSimilarity
from .json_file import read_json, write_json_atomic


class SimilarityStore(Protocol):
    """Protocol for the similarity cache."""

    def get_similarities(self, recipe_id: str, limit: Optional[int] = None) -> List[RecipeSimilarity]:
        """Rows with recipe_a_id == recipe_id, highest score first."""
        ...

    def upsert_similarities(self, rows: Iterable[RecipeSimilarity]) -> int:
        """Insert or replace rows by pair key. Returns rows written."""
        ...

    def delete_for_recipe(self, recipe_id: str) -> int:
        """Remove rows where recipe_id is on either side. Returns rows removed."""
        ...


class InMemorySimilarityStore:
    def __init__(self, rows: Optional[Iterable[Union[Dict, RecipeSimilarity]]] = None):
        self._rows: Dict[Tuple[str, str], RecipeSimilarity] = {}
        self._lock = threading.Lock()
        for row in rows or []:
            model = RecipeSimilarity.model_validate(row) if isinstance(row, dict) else row
            self._rows[model.key] = model

    def _persist(self) -> None:
        """Hook for file-backed subclasses; called with the lock held."""

    def get_similarities(self, recipe_id: str, limit: Optional[int] = None) -> List[RecipeSimilarity]:
        with self._lock:
            rows = [r for r in self._rows.values() if r.recipe_a_id == recipe_id]
        rows.sort(key=lambda r: r.similarity_score, reverse=True)
        return rows if limit is None else rows[:limit]

    def upsert_similarities(self, rows: Iterable[RecipeSimilarity]) -> int:
        rows = list(rows)
        if not rows:
            return 0
        with self._lock:
            before = dict(self._rows)
            for row in rows:
                self._rows[row.key] = row
            try:
                self._persist()
            except Exception:
                self._rows = before
                raise
        return len(rows)

    def delete_for_recipe(self, recipe_id: str) -> int:
        with self._lock:
            doomed = [k for k in self._rows if recipe_id in k]
            if not doomed:
                return 0
            before = dict(self._rows)
            for key in doomed:
                del self._rows[key]
            try:
                self._persist()
            except Exception:
                self._rows = before
                raise
        return len(doomed)

    def __len__(self) -> int:
        return len(self._rows)


class JsonSimilarityStore(InMemorySimilarityStore):
    """Similarity rows persisted as {"similarities": [...]}."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        data = read_json(self._path, default={"similarities": []})
        super().__init__(data.get("similarities", []) if isinstance(data, dict) else data)

    def _persist(self) -> None:
        write_json_atomic(
            self._path,
            {"similarities": [r.model_dump(mode="json") for r in self._rows.values()]},
        )
