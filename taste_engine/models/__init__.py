"""Data models for the taste profile and recommendation pipeline."""

from .config import DEFAULT_CONFIG, RecommendationConfig, resolve_config
from .interaction import (
    FAVORED_TYPES,
    INTERACTION_TYPES,
    NEGATIVE_TYPES,
    POSITIVE_TYPES,
    TRENDING_TYPES,
    InteractionEvent,
    SessionContext,
    ensure_interactions,
)
from .preferences import UserPreferences, skill_rank
from .profile import InteractionSummary, ProfileUpdateResult, TasteProfile
from .recipe import RecipeAttributes, ensure_recipes
from .scoring import LayerScores, RecommendationContext, RecommendationResult
from .similarity import RecipeSimilarity

__all__ = [
    "DEFAULT_CONFIG",
    "FAVORED_TYPES",
    "INTERACTION_TYPES",
    "NEGATIVE_TYPES",
    "POSITIVE_TYPES",
    "TRENDING_TYPES",
    "InteractionEvent",
    "InteractionSummary",
    "LayerScores",
    "ProfileUpdateResult",
    "RecipeAttributes",
    "RecipeSimilarity",
    "RecommendationConfig",
    "RecommendationContext",
    "RecommendationResult",
    "SessionContext",
    "TasteProfile",
    "UserPreferences",
    "ensure_interactions",
    "ensure_recipes",
    "resolve_config",
    "skill_rank",
]
