"""
The four independent layer scores for one candidate recipe.

Each returns a float in [0, 1]. Layers without the data they need return the
configured neutral score so missing context never reads as a bad match.
"""

import logging
from typing import Optional, Sequence

from ...models.config import DEFAULT_CONFIG, RecommendationConfig
from ...models.interaction import InteractionEvent
from ...models.preferences import UserPreferences, skill_rank
from ...models.profile import TasteProfile
from ...models.recipe import RecipeAttributes
from ...utils.scores import clamp
from ...utils.similarity import cosine_similarity

logger = logging.getLogger(__name__)


def preference_match(recipe: RecipeAttributes, preferences: Optional[UserPreferences]) -> float:
    """
    Explicit-preference layer. Starts at 0.5.

    Dietary: -0.3 when the user requires a restriction the recipe lacks,
    else +0.2 when the user declared any. Favorite cuisine: +0.2.
    Skill: +0.1 when the recipe is within the user's level, -0.2 when it
    is more than one level above.
    """
    score = 0.5
    if preferences is None:
        return score

    required = preferences.dietary_restrictions
    if required:
        offered = set(recipe.dietary_restrictions)
        if any(r not in offered for r in required):
            score -= 0.3
        else:
            score += 0.2

    if recipe.cuisine_name and recipe.cuisine_name in preferences.favorite_cuisines:
        score += 0.2

    if preferences.cooking_skill_level:
        user_skill = skill_rank(preferences.cooking_skill_level)
        recipe_skill = skill_rank(recipe.difficulty)
        if recipe_skill <= user_skill:
            score += 0.1
        elif recipe_skill > user_skill + 1:
            score -= 0.2

    return clamp(score)


def behavioral_match(
    recipe: RecipeAttributes,
    interactions: Sequence[InteractionEvent],
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> float:
    """
    Observed-behavior layer over the user's recent history.

    Interactions on recipes sharing the candidate's cuisine or difficulty
    count +0.1 when favored (like/cook/save) and -0.05 when skipped.
    """
    if not interactions:
        return config.neutral_score

    positive = 0
    negative = 0
    for event in interactions:
        seen = event.recipe
        if seen is None:
            continue
        same_cuisine = bool(recipe.cuisine_name) and seen.cuisine_name == recipe.cuisine_name
        same_difficulty = bool(recipe.difficulty) and seen.difficulty == recipe.difficulty
        if not (same_cuisine or same_difficulty):
            continue
        if event.is_favored:
            positive += 1
        elif event.is_negative:
            negative += 1

    return clamp(0.5 + positive * 0.1 - negative * 0.05)


def semantic_match(
    recipe_embedding: Optional[Sequence[float]],
    profile: Optional[TasteProfile],
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> float:
    """
    Semantic layer: cosine of the candidate embedding against the taste vector.

    No profile vector, no candidate embedding (provider failed), or vectors of
    different dimensions (embedding model changed since the profile was built)
    are neutral.
    Negative similarity is "no match" (0.0), not an anti-match.
    """
    if profile is None or not profile.has_vector:
        return config.neutral_score
    if not recipe_embedding:
        return config.neutral_score
    if len(recipe_embedding) != len(profile.profile_vector):
        logger.warning(
            "[ranking] EMBEDDING_DIM_MISMATCH user_id=%s profile_dim=%s recipe_dim=%s",
            profile.user_id, len(profile.profile_vector), len(recipe_embedding),
        )
        return config.neutral_score
    return clamp(cosine_similarity(profile.profile_vector, recipe_embedding))


def social_match(positive_count: int, config: RecommendationConfig = DEFAULT_CONFIG) -> float:
    """Popularity layer from favored-interaction count across all users."""
    if positive_count <= 0:
        return config.neutral_score
    return clamp(positive_count / config.social_normalizer)
