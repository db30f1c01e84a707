"""
Taste profile models: the persisted per-user profile and the result of
an update call.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class TasteProfile(BaseModel):
    """
    Per-user taste representation, upserted wholesale on every update.

    profile_vector is empty when no embedding could be generated; scoring
    treats that as "no semantic signal".
    """

    user_id: str
    profile_vector: List[float] = []
    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)
    dominant_cuisines: List[str] = []
    preferred_ingredients: List[str] = []
    avoided_patterns: List[str] = []
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_vector(self) -> bool:
        return len(self.profile_vector) > 0


class InteractionSummary(BaseModel):
    """Counts describing the interaction set a profile was built from."""

    total_interactions: int
    positive_interactions: int
    cuisine_diversity: int
    ingredient_diversity: int
    cooking_style: str


class ProfileUpdateResult(BaseModel):
    """
    Outcome of update_taste_profile.

    status "insufficient_data" means nothing was written and any existing
    profile is unchanged.
    """

    user_id: str
    status: Literal["updated", "insufficient_data"]
    message: str
    interactions_count: int
    profile: Optional[TasteProfile] = None
    interaction_summary: Optional[InteractionSummary] = None
    similarities_stored: int = 0

    @property
    def updated(self) -> bool:
        return self.status == "updated"
