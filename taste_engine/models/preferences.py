"""
Explicit user preferences, as declared by the user.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# Both skill vocabularies in use map onto the same 3-level ranking.
SKILL_LEVELS = {
    "easy": 1,
    "beginner": 1,
    "medium": 2,
    "intermediate": 2,
    "hard": 3,
    "advanced": 3,
}
DEFAULT_SKILL_LEVEL = 2


def skill_rank(level: Optional[str]) -> int:
    """3-level rank for a skill/difficulty label; unknown labels rank as medium."""
    if not level:
        return DEFAULT_SKILL_LEVEL
    return SKILL_LEVELS.get(level.strip().lower(), DEFAULT_SKILL_LEVEL)


class UserPreferences(BaseModel):
    """Preference record; every field may be missing."""

    model_config = ConfigDict(extra="allow")

    dietary_restrictions: List[str] = []
    favorite_cuisines: List[str] = []
    cooking_skill_level: Optional[str] = None

    @field_validator("dietary_restrictions", "favorite_cuisines", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value
