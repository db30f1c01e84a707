"""
Trending: popularity over the last few days blended with recipe recency.

Needs no user context. With no interactions in the window it falls back to
the newest published recipes at a flat score.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.interaction import TRENDING_TYPES
from ..models.scoring import RecommendationResult
from ..services.catalog import RecipeCatalog, RecipeFilter
from ..services.interaction_log import InteractionLog
from ..utils.scores import days_since

logger = logging.getLogger(__name__)

FALLBACK_REASON = "Recently added recipe"


def trending_score(
    interaction_count: int,
    days_since_created: float,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> float:
    """0.7 * popularity + 0.3 * recency with the configured normalizers."""
    recency = max(
        config.trending_recency_floor,
        1.0 - days_since_created / config.trending_recency_days,
    )
    popularity = min(1.0, interaction_count / config.trending_popularity_normalizer)
    return (
        config.trending_weight_popularity * popularity
        + config.trending_weight_recency * recency
    )


def recently_added(
    catalog: RecipeCatalog,
    limit: int,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[RecommendationResult]:
    recipes = catalog.get_published_recipes(RecipeFilter(newest_first=True), limit=limit)
    return [
        RecommendationResult(
            recipe_id=recipe.id,
            score=config.trending_fallback_score,
            reasons=[FALLBACK_REASON],
            context="trending",
        )
        for recipe in recipes
    ]


def get_trending_recipes(
    catalog: RecipeCatalog,
    interaction_log: InteractionLog,
    config: RecommendationConfig = DEFAULT_CONFIG,
    limit: int = 10,
    now: Optional[datetime] = None,
) -> List[RecommendationResult]:
    """Top recipes by trending score, highest first."""
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=config.trending_window_days)
    counts = interaction_log.count_interactions_by_recipe(TRENDING_TYPES, since=since)

    results: List[RecommendationResult] = []
    for recipe_id, count in counts.items():
        recipe = catalog.get_recipe(recipe_id)
        if recipe is None or not recipe.is_published:
            continue
        score = trending_score(count, days_since(recipe.created_at, now), config)
        results.append(
            RecommendationResult(
                recipe_id=recipe_id,
                score=score,
                reasons=[f"Trending recipe with {count} recent interactions"],
                context="trending",
            )
        )

    if not results:
        logger.info("[trending] NO_RECENT_INTERACTIONS window_days=%s falling back to recent recipes",
                    config.trending_window_days)
        return recently_added(catalog, limit, config)

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]
