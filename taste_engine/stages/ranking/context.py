"""
Contextual multiplier applied after layer fusion.

Time-of-day and cooking-duration boosts compose multiplicatively; the final
clamp happens in scoring, not here.
"""

from typing import Optional

from ...models.config import DEFAULT_CONFIG, RecommendationConfig
from ...models.recipe import RecipeAttributes
from ...models.scoring import RecommendationContext


def contextual_multiplier(
    recipe: RecipeAttributes,
    context: Optional[RecommendationContext],
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> float:
    multiplier = 1.0
    if context is None:
        return multiplier

    category = (recipe.category_name or "").lower()
    time_of_day = (context.time_of_day or "").lower()
    if time_of_day == "morning" and "breakfast" in category:
        multiplier *= config.breakfast_morning_multiplier
    elif time_of_day == "evening" and "dinner" in category:
        multiplier *= config.dinner_evening_multiplier

    total_time = recipe.total_time
    cooking_time = (context.cooking_time or "").lower()
    if total_time is not None:
        if cooking_time == "quick" and total_time <= config.quick_meal_minutes:
            multiplier *= config.quick_cooking_multiplier
        elif cooking_time == "elaborate" and total_time >= config.elaborate_meal_minutes:
            multiplier *= config.elaborate_cooking_multiplier

    return multiplier
