"""
Main ranking orchestration: layer scores, weighted fusion, contextual multiplier.

score_recipe is pure (embedding and popularity already resolved);
rank_candidates resolves those for a whole pool, with embedding calls
bounded by config.embedding_max_workers, then sorts.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ...embedding.batch import embed_many
from ...embedding.embedding_strategy import get_candidate_embed_text
from ...embedding.provider import EmbeddingProvider
from ...models.config import DEFAULT_CONFIG, RecommendationConfig
from ...models.interaction import FAVORED_TYPES, InteractionEvent
from ...models.preferences import UserPreferences
from ...models.profile import TasteProfile
from ...models.recipe import RecipeAttributes
from ...models.scoring import LayerScores, RecommendationContext, RecommendationResult
from ...services.interaction_log import InteractionLog
from ...utils.scores import clamp
from .context import contextual_multiplier
from .layers import behavioral_match, preference_match, semantic_match, social_match
from .reasons import build_reasons

logger = logging.getLogger(__name__)


def fuse_layers(layers: LayerScores, config: RecommendationConfig = DEFAULT_CONFIG) -> float:
    """Weighted base score, before the contextual multiplier."""
    return (
        config.weight_preference * layers.preference
        + config.weight_behavior * layers.behavior
        + config.weight_ai * layers.ai
        + config.weight_social * layers.social
    )


def score_recipe(
    recipe: RecipeAttributes,
    preferences: Optional[UserPreferences],
    interactions: Sequence[InteractionEvent],
    profile: Optional[TasteProfile],
    context: Optional[RecommendationContext],
    *,
    recipe_embedding: Optional[Sequence[float]] = None,
    positive_count: int = 0,
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> RecommendationResult:
    """
    Score one candidate.

    final = clamp((w_pref*pref + w_beh*behavior + w_ai*ai + w_soc*social) * multiplier, 0, 1)
    """
    layers = LayerScores(
        preference=preference_match(recipe, preferences),
        behavior=behavioral_match(recipe, interactions, config),
        ai=semantic_match(recipe_embedding, profile, config),
        social=social_match(positive_count, config),
        context=contextual_multiplier(recipe, context, config),
    )
    final = clamp(fuse_layers(layers, config) * layers.context)
    return RecommendationResult(
        recipe_id=recipe.id,
        score=final,
        reasons=build_reasons(layers, config),
        context="personalized",
        breakdown=layers.as_dict(),
    )


def _candidate_embeddings(
    candidates: Sequence[RecipeAttributes],
    profile: Optional[TasteProfile],
    provider: EmbeddingProvider,
    config: RecommendationConfig,
) -> Dict[str, List[float]]:
    # No taste vector means the semantic layer is neutral; skip the calls entirely
    if profile is None or not profile.has_vector:
        return {}
    texts = {r.id: get_candidate_embed_text(r) for r in candidates}
    return embed_many(provider, texts, max_workers=config.embedding_max_workers)


def rank_candidates(
    candidates: Sequence[RecipeAttributes],
    preferences: Optional[UserPreferences],
    interactions: Sequence[InteractionEvent],
    profile: Optional[TasteProfile],
    context: Optional[RecommendationContext],
    provider: EmbeddingProvider,
    interaction_log: InteractionLog,
    config: RecommendationConfig = DEFAULT_CONFIG,
    limit: Optional[int] = None,
) -> List[RecommendationResult]:
    """Score every candidate and return them by score, highest first."""
    embeddings = _candidate_embeddings(candidates, profile, provider, config)
    if profile is not None and profile.has_vector and len(embeddings) < len(candidates):
        logger.warning(
            "[ranking] CANDIDATE_EMBEDDINGS_MISSING missing=%s total=%s (semantic layer neutral)",
            len(candidates) - len(embeddings), len(candidates),
        )

    scored: List[RecommendationResult] = []
    for recipe in candidates:
        positive_count = interaction_log.count_recipe_interactions(recipe.id, FAVORED_TYPES)
        scored.append(
            score_recipe(
                recipe,
                preferences,
                interactions,
                profile,
                context,
                recipe_embedding=embeddings.get(recipe.id),
                positive_count=positive_count,
                config=config,
            )
        )

    scored.sort(key=lambda r: r.score, reverse=True)
    return scored if limit is None else scored[:limit]
