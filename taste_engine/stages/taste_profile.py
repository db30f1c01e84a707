"""
Taste profile building: pattern analysis + embeddings of favored recipes.

build_taste_profile computes a complete TasteProfile from one interaction set
and never writes; the caller upserts it. The same inputs (and a deterministic
embedding provider) always give the same vector, confidence, and ranked lists.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..embedding.batch import embed_many
from ..embedding.embedding_strategy import get_profile_embed_text
from ..embedding.provider import EmbeddingProvider
from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.interaction import InteractionEvent
from ..models.profile import InteractionSummary, TasteProfile
from ..models.recipe import RecipeAttributes
from ..utils.scores import clamp, ensure_utc
from .pattern_analysis import (
    InteractionPatterns,
    analyze_interaction_patterns,
    determine_cooking_style,
    rank_by_weight,
)

logger = logging.getLogger(__name__)


def has_sufficient_data(events: Sequence[InteractionEvent], config: RecommendationConfig = DEFAULT_CONFIG) -> bool:
    return len(events) >= config.min_interactions


def select_favored_recipes(events: Sequence[InteractionEvent], limit: int = 20) -> List[RecipeAttributes]:
    """
    Up to limit distinct recipes from like/cook/save events, most recent first.

    A recipe favored several times appears once, at its most recent position.
    """
    ordered = sorted(events, key=lambda e: ensure_utc(e.created_at), reverse=True)
    seen = set()
    recipes: List[RecipeAttributes] = []
    for event in ordered:
        if not event.is_favored or event.recipe is None:
            continue
        if event.recipe_id in seen:
            continue
        seen.add(event.recipe_id)
        recipes.append(event.recipe)
        if len(recipes) >= limit:
            break
    return recipes


def mean_vector(vectors: Sequence[Sequence[float]]) -> List[float]:
    """Element-wise mean; vectors whose length differs from the first are ignored."""
    if not vectors:
        return []
    dim = len(vectors[0])
    usable = [v for v in vectors if len(v) == dim]
    if len(usable) < len(vectors):
        logger.warning(
            "[taste_profile] EMBEDDING_DIM_MISMATCH expected=%s dropped=%s",
            dim, len(vectors) - len(usable),
        )
    return [float(x) for x in np.mean(np.asarray(usable, dtype=float), axis=0)]


def compute_profile_vector(
    recipes: Sequence[RecipeAttributes],
    provider: EmbeddingProvider,
    max_workers: int = 4,
) -> List[float]:
    """
    Mean of profile-text embeddings of the given recipes.

    Recipes whose embedding fails are skipped; empty list when none succeed.
    """
    texts: Dict[int, str] = {i: get_profile_embed_text(r) for i, r in enumerate(recipes)}
    embedded = embed_many(provider, texts, max_workers=max_workers)
    # Average in recipe order so the result does not depend on completion order
    vectors = [embedded[i] for i in sorted(embedded)]
    return mean_vector(vectors)


def confidence_components(patterns: InteractionPatterns) -> Dict[str, float]:
    """The four independently capped confidence terms."""
    consistent_cuisines = sum(1 for w in patterns.liked_cuisines.values() if w > 2)
    return {
        "interaction_volume": min(0.4, patterns.interaction_count / 50),
        "cuisine_diversity": min(0.2, len(patterns.liked_cuisines) / 10),
        "ingredient_diversity": min(0.2, len(patterns.liked_ingredients) / 25),
        "consistency": min(0.2, consistent_cuisines / 5),
    }


def calculate_confidence_score(patterns: InteractionPatterns) -> float:
    """Sum of the capped terms, clamped to [0, 1]."""
    return clamp(sum(confidence_components(patterns).values()), 0.0, 1.0)


def build_avoided_patterns(patterns: InteractionPatterns, max_ingredients: int = 10) -> List[str]:
    """Every avoided cuisine plus the heaviest avoided ingredients, as tagged strings."""
    avoided = [f"cuisine:{c}" for c in patterns.avoided_cuisines]
    avoided.extend(
        f"ingredient:{i}"
        for i in rank_by_weight(patterns.avoided_ingredients, max_ingredients)
    )
    return avoided


def summarize_interactions(
    events: Sequence[InteractionEvent],
    patterns: InteractionPatterns,
) -> InteractionSummary:
    return InteractionSummary(
        total_interactions=len(events),
        positive_interactions=sum(1 for e in events if e.is_favored),
        cuisine_diversity=len(patterns.liked_cuisines),
        ingredient_diversity=len(patterns.liked_ingredients),
        cooking_style=determine_cooking_style(patterns),
    )


def build_taste_profile(
    user_id: str,
    events: Sequence[InteractionEvent],
    provider: EmbeddingProvider,
    config: RecommendationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> Tuple[TasteProfile, InteractionSummary]:
    """
    Build the profile for user_id from events (recipes attached, most recent first).

    The caller checks has_sufficient_data first; this function does not.
    """
    patterns = analyze_interaction_patterns(
        events,
        quick_meal_minutes=config.quick_meal_minutes,
        elaborate_meal_minutes=config.elaborate_meal_minutes,
    )

    favored = select_favored_recipes(events, config.profile_recipe_limit)
    profile_vector = compute_profile_vector(
        favored, provider, max_workers=config.embedding_max_workers
    )
    if favored and not profile_vector:
        logger.warning(
            "[taste_profile] NO_EMBEDDINGS user_id=%s favored_recipes=%s",
            user_id, len(favored),
        )

    profile = TasteProfile(
        user_id=user_id,
        profile_vector=profile_vector,
        confidence_score=calculate_confidence_score(patterns),
        dominant_cuisines=rank_by_weight(patterns.liked_cuisines, config.max_dominant_cuisines),
        preferred_ingredients=rank_by_weight(
            patterns.liked_ingredients, config.max_preferred_ingredients
        ),
        avoided_patterns=build_avoided_patterns(patterns, config.max_avoided_ingredients),
        last_updated=now or datetime.now(timezone.utc),
    )
    return profile, summarize_interactions(events, patterns)
