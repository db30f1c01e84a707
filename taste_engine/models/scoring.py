"""
Scoring models: request context and ranked results.

Contains:
- RecommendationContext: situational inputs for the contextual multiplier
- LayerScores: raw per-layer scores for one candidate
- RecommendationResult: one ranked, explained recipe
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

ResultContext = Literal["personalized", "trending", "similar"]


class RecommendationContext(BaseModel):
    """
    Request context.

    time_of_day: "morning" | "afternoon" | "evening" (derived from the clock
    when absent). cooking_time: "quick" | "elaborate" | anything else (ignored).
    Extra keys such as meal_type, weather, occasion pass through untouched.
    """

    model_config = ConfigDict(extra="allow")

    time_of_day: Optional[str] = None
    cooking_time: Optional[str] = None
    meal_type: Optional[str] = None


class LayerScores(BaseModel):
    """Raw layer scores plus the contextual multiplier for one candidate."""

    preference: float
    behavior: float
    ai: float
    social: float
    context: float = 1.0

    def as_dict(self) -> Dict[str, float]:
        return self.model_dump()


class RecommendationResult(BaseModel):
    """A scored recipe id with human-readable reasons."""

    recipe_id: str
    score: float
    reasons: List[str] = []
    context: ResultContext
    breakdown: Optional[Dict[str, float]] = None
