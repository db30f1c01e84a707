"""
Taste Engine: taste profiles and recipe recommendations

Single entry point for the package:
- models/: RecommendationConfig, InteractionEvent, RecipeAttributes, TasteProfile, results
- stages/: pattern analysis, taste profile, candidate pool, ranking, similarity, trending
- embedding/: embed text strategy, provider contract, OpenAI provider, cache
- services/: store protocols with in-memory and JSON implementations
- engine: RecommendationEngine facade; tasks: background profile refresh
"""

from .config import EngineSettings, create_engine, get_settings, load_recommendation_config, reload_settings
from .engine import RecommendationEngine
from .errors import ConfigurationError, EmbeddingError, StorageError, TasteEngineError
from .models import (
    DEFAULT_CONFIG,
    InteractionEvent,
    ProfileUpdateResult,
    RecipeAttributes,
    RecipeSimilarity,
    RecommendationConfig,
    RecommendationContext,
    RecommendationResult,
    TasteProfile,
    UserPreferences,
)
from .tasks import ProfileRefreshQueue

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigurationError",
    "EmbeddingError",
    "EngineSettings",
    "InteractionEvent",
    "ProfileRefreshQueue",
    "ProfileUpdateResult",
    "RecipeAttributes",
    "RecipeSimilarity",
    "RecommendationConfig",
    "RecommendationContext",
    "RecommendationEngine",
    "RecommendationResult",
    "StorageError",
    "TasteEngineError",
    "TasteProfile",
    "UserPreferences",
    "create_engine",
    "get_settings",
    "load_recommendation_config",
    "reload_settings",
]
