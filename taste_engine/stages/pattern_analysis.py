"""
Pattern analysis: aggregate raw interaction events into weighted preference signals.

Positive events (like, cook, save, rate) feed the liked-* buckets, negative
events (skip) the avoided-* buckets; view and share feed nothing. Every
bucket sums event strength. Missing attributes skip the bucket for that event;
analysis never fails.

Maps keep first-seen insertion order, which is the tie-break order when the
profile builder ranks them by weight.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..models.interaction import InteractionEvent


@dataclass
class CookingPatterns:
    """Strength-weighted cooking-style counters (positive events only)."""

    quick_meals: float = 0.0
    elaborate_meals: float = 0.0
    weekend_cooking: float = 0.0
    weekday_cooking: float = 0.0


@dataclass
class InteractionPatterns:
    liked_cuisines: Dict[str, float] = field(default_factory=dict)
    liked_difficulties: Dict[str, float] = field(default_factory=dict)
    liked_ingredients: Dict[str, float] = field(default_factory=dict)
    avoided_cuisines: Dict[str, float] = field(default_factory=dict)
    avoided_ingredients: Dict[str, float] = field(default_factory=dict)
    time_preferences: Dict[str, float] = field(default_factory=dict)
    cooking_patterns: CookingPatterns = field(default_factory=CookingPatterns)
    # Every event seen, including view/share
    interaction_count: int = 0


def get_time_slot(hour: int) -> str:
    """Map an hour (0-23) onto a time-of-day bucket."""
    if hour < 6:
        return "late_night"
    if hour < 10:
        return "morning"
    if hour < 14:
        return "midday"
    if hour < 18:
        return "afternoon"
    if hour < 22:
        return "evening"
    return "late_night"


def _add(bucket: Dict[str, float], key: Optional[str], weight: float) -> None:
    if not key:
        return
    bucket[key] = bucket.get(key, 0.0) + weight


def analyze_interaction_patterns(
    events: Iterable[InteractionEvent],
    quick_meal_minutes: int = 30,
    elaborate_meal_minutes: int = 60,
) -> InteractionPatterns:
    """
    Aggregate events (with recipe attached) into InteractionPatterns.

    Events without a recipe still count toward interaction_count.
    """
    patterns = InteractionPatterns()
    cooking = patterns.cooking_patterns

    for event in events:
        patterns.interaction_count += 1
        recipe = event.recipe
        if recipe is None:
            continue
        positive = event.is_positive
        negative = event.is_negative
        if not (positive or negative):
            continue
        weight = event.strength

        if positive:
            _add(patterns.liked_cuisines, recipe.cuisine_name, weight)
            _add(patterns.liked_difficulties, recipe.difficulty, weight)
            for ingredient in recipe.ingredients:
                _add(patterns.liked_ingredients, ingredient, weight)
        else:
            _add(patterns.avoided_cuisines, recipe.cuisine_name, weight)
            for ingredient in recipe.ingredients:
                _add(patterns.avoided_ingredients, ingredient, weight)
            continue

        # Time and cooking-style patterns: positive events only
        context = event.session_context
        if context.time_of_day is not None:
            _add(patterns.time_preferences, get_time_slot(context.time_of_day), weight)

        total_time = recipe.total_time
        if total_time is not None:
            if total_time <= quick_meal_minutes:
                cooking.quick_meals += weight
            elif total_time >= elaborate_meal_minutes:
                cooking.elaborate_meals += weight

        if context.day_of_week is not None:
            if context.day_of_week in (0, 6):
                cooking.weekend_cooking += weight
            else:
                cooking.weekday_cooking += weight

    return patterns


def rank_by_weight(bucket: Dict[str, float], limit: Optional[int] = None) -> List[str]:
    """Keys by descending weight; equal weights keep insertion order."""
    ranked = [k for k, _ in sorted(bucket.items(), key=lambda kv: kv[1], reverse=True)]
    return ranked if limit is None else ranked[:limit]


def determine_cooking_style(patterns: InteractionPatterns) -> str:
    """Label the user's cooking style from the cooking counters."""
    c = patterns.cooking_patterns
    if c.quick_meals > c.elaborate_meals * 2:
        return "quick_and_easy"
    if c.elaborate_meals > c.quick_meals:
        return "elaborate_cooking"
    if c.weekend_cooking > c.weekday_cooking:
        return "weekend_chef"
    return "balanced"
