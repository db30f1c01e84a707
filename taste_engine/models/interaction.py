"""
Interaction model: one tracked user action on a recipe.

Events are append-only; the reader attaches the recipe attributes the
analysis stages need (``recipe``). Built from log rows via
InteractionEvent.model_validate(d) or ensure_interactions().
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .recipe import RecipeAttributes

InteractionType = Literal["view", "like", "cook", "rate", "save", "skip", "share"]

INTERACTION_TYPES = ("view", "like", "cook", "rate", "save", "skip", "share")

# Preference buckets (pattern analysis) count rate as positive.
POSITIVE_TYPES = frozenset({"like", "cook", "save", "rate"})
NEGATIVE_TYPES = frozenset({"skip"})

# Stronger signals used for profile embeddings, behavior, and social scoring.
FAVORED_TYPES = frozenset({"like", "cook", "save"})

# Counted by the trending scorer.
TRENDING_TYPES = frozenset({"view", "like", "cook", "save"})


class SessionContext(BaseModel):
    """
    Context captured when the interaction happened.

    time_of_day: hour 0-23. day_of_week: Sunday=0 … Saturday=6.
    Any other keys are kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    time_of_day: Optional[int] = Field(default=None, ge=0, le=23)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    device: Optional[str] = None


class InteractionEvent(BaseModel):
    """A single user interaction (view, like, cook, rate, save, skip, share)."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    recipe_id: str
    interaction_type: InteractionType
    strength: float = Field(default=1.0, gt=0)
    session_context: SessionContext = SessionContext()
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    # Denormalized recipe attributes, attached by the interaction reader.
    recipe: Optional[RecipeAttributes] = None

    @field_validator("session_context", mode="before")
    @classmethod
    def _none_context(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_positive(self) -> bool:
        return self.interaction_type in POSITIVE_TYPES

    @property
    def is_negative(self) -> bool:
        return self.interaction_type in NEGATIVE_TYPES

    @property
    def is_favored(self) -> bool:
        return self.interaction_type in FAVORED_TYPES

    def with_recipe(self, recipe: RecipeAttributes) -> "InteractionEvent":
        return self.model_copy(update={"recipe": recipe})


def ensure_interactions(
    items: List[Union[Dict, "InteractionEvent"]],
) -> List["InteractionEvent"]:
    """Convert list of dicts or InteractionEvents to models for the pipeline."""
    return [
        InteractionEvent.model_validate(e) if isinstance(e, dict) else e
        for e in items
    ]
