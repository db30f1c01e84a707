"""
Algorithm configuration: profile building, layer scoring, similarity, and trending.

RecommendationConfig defaults are defined here. The engine may be given a dict
(e.g. from a JSON file named by RECOMMENDATION_CONFIG_PATH); from_dict() merges
it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, model_validator


class RecommendationConfig(BaseModel):
    """Configuration for the taste profile and recommendation pipeline."""

    # -------------------------------------------------------------------------
    # Lookback windows (days)
    # -------------------------------------------------------------------------

    # Events older than this are excluded from profile computation.
    profile_lookback_days: int = 90
    # Window of the user's own history used by the behavioral layer.
    behavior_lookback_days: int = 30
    # Window of interactions counted by the trending scorer.
    trending_window_days: int = 7

    # -------------------------------------------------------------------------
    # Taste profile
    # -------------------------------------------------------------------------

    # Fewer qualifying interactions than this and the profile is left untouched.
    min_interactions: int = 5
    # Max distinct favored recipes embedded into the profile vector.
    profile_recipe_limit: int = 20
    max_dominant_cuisines: int = 5
    max_preferred_ingredients: int = 20
    max_avoided_ingredients: int = 10

    # -------------------------------------------------------------------------
    # Candidate pool
    # -------------------------------------------------------------------------

    candidate_pool_size: int = 100

    # -------------------------------------------------------------------------
    # Layer weights (must sum to 1.0)
    # base = w_pref * pref + w_behavior * behavior + w_ai * ai + w_social * social
    # -------------------------------------------------------------------------

    weight_preference: float = 0.4
    weight_behavior: float = 0.3
    weight_ai: float = 0.2
    weight_social: float = 0.1

    # Score used by a layer when it has nothing to go on (no profile vector,
    # no history, no popularity data).
    neutral_score: float = 0.5

    # -------------------------------------------------------------------------
    # Reason thresholds (independent of the weights)
    # -------------------------------------------------------------------------

    reason_threshold_preference: float = 0.7
    reason_threshold_behavior: float = 0.6
    reason_threshold_ai: float = 0.5
    reason_threshold_social: float = 0.7

    # -------------------------------------------------------------------------
    # Contextual multiplier
    # -------------------------------------------------------------------------

    breakfast_morning_multiplier: float = 1.3
    dinner_evening_multiplier: float = 1.2
    quick_cooking_multiplier: float = 1.3
    elaborate_cooking_multiplier: float = 1.2
    # total_time_minutes <= quick_meal_minutes counts as quick;
    # >= elaborate_meal_minutes counts as elaborate.
    quick_meal_minutes: int = 30
    elaborate_meal_minutes: int = 60

    # -------------------------------------------------------------------------
    # Social layer: positive interactions / social_normalizer, capped at 1.0
    # -------------------------------------------------------------------------

    social_normalizer: float = 50.0

    # -------------------------------------------------------------------------
    # Trending
    # score = trending_weight_popularity * popularity + trending_weight_recency * recency
    # recency = max(trending_recency_floor, 1 - days_since_created / trending_recency_days)
    # -------------------------------------------------------------------------

    trending_popularity_normalizer: float = 100.0
    trending_recency_days: float = 30.0
    trending_recency_floor: float = 0.1
    trending_weight_popularity: float = 0.7
    trending_weight_recency: float = 0.3
    trending_fallback_score: float = 0.8

    # -------------------------------------------------------------------------
    # Similarity
    # -------------------------------------------------------------------------

    # Only pairs strictly above this are persisted (storage pruning, not a cutoff).
    similarity_threshold: float = 0.5
    # Max catalog recipes compared against in one similarity computation.
    similarity_pool_size: int = 100
    # Max recipes of the user used as left-hand side in the batch pass.
    similarity_seed_recipes: int = 10

    # -------------------------------------------------------------------------
    # Embedding calls
    # -------------------------------------------------------------------------

    # Max concurrent embedding-provider calls when looping over candidates.
    embedding_max_workers: int = 4

    @model_validator(mode="after")
    def weights_sum_to_one(self):
        total = (
            self.weight_preference
            + self.weight_behavior
            + self.weight_ai
            + self.weight_social
        )
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Layer weights must sum to 1.0, got {total}")
        trending_total = self.trending_weight_popularity + self.trending_weight_recency
        if abs(trending_total - 1.0) > 0.01:
            raise ValueError(f"Trending weights must sum to 1.0, got {trending_total}")
        if self.embedding_max_workers < 1:
            raise ValueError("embedding_max_workers must be at least 1")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "RecommendationConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "lookback" in config_dict:
            lb = config_dict["lookback"]
            for key in ("profile", "behavior"):
                if key in lb:
                    flat[f"{key}_lookback_days"] = lb[key]
            if "trending" in lb:
                flat["trending_window_days"] = lb["trending"]
        if "profile" in config_dict:
            flat.update(config_dict["profile"])
        if "weights" in config_dict:
            for layer, value in config_dict["weights"].items():
                flat[f"weight_{layer}"] = value
        if "reason_thresholds" in config_dict:
            for layer, value in config_dict["reason_thresholds"].items():
                flat[f"reason_threshold_{layer}"] = value
        if "context" in config_dict:
            flat.update(config_dict["context"])
        if "social" in config_dict:
            sc = config_dict["social"]
            if "normalizer" in sc:
                flat["social_normalizer"] = sc["normalizer"]
        if "trending" in config_dict:
            for key, value in config_dict["trending"].items():
                flat[key if key.startswith("trending_") else f"trending_{key}"] = value
        if "similarity" in config_dict:
            sim = config_dict["similarity"]
            if "threshold" in sim:
                flat["similarity_threshold"] = sim["threshold"]
            if "pool_size" in sim:
                flat["similarity_pool_size"] = sim["pool_size"]
            if "seed_recipes" in sim:
                flat["similarity_seed_recipes"] = sim["seed_recipes"]
        if "embedding" in config_dict:
            emb = config_dict["embedding"]
            if "max_workers" in emb:
                flat["embedding_max_workers"] = emb["max_workers"]
        # Top-level flat keys are accepted as well
        flat.update({k: v for k, v in config_dict.items() if not isinstance(v, dict)})
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = RecommendationConfig()


def resolve_config(config: Optional["RecommendationConfig"]) -> "RecommendationConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
