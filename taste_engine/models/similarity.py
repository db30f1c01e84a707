"""
RecipeSimilarity model: one cached pairwise similarity row.
"""

from datetime import datetime, timezone
from typing import Tuple

from pydantic import BaseModel, Field


class RecipeSimilarity(BaseModel):
    """Similarity keyed by the ordered pair (recipe_a_id, recipe_b_id)."""

    recipe_a_id: str
    recipe_b_id: str
    similarity_score: float
    similarity_type: str = "content"
    last_calculated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def key(self) -> Tuple[str, str]:
        return (self.recipe_a_id, self.recipe_b_id)
