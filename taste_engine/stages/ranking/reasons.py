"""
Human-readable reasons for a personalized recommendation.

One canned string per layer whose raw score crosses its threshold; any
number of them may apply.
"""

from typing import List

from ...models.config import DEFAULT_CONFIG, RecommendationConfig
from ...models.scoring import LayerScores

PREFERENCE_REASON = "Matches your dietary preferences"
BEHAVIOR_REASON = "Similar to recipes you've enjoyed"
AI_REASON = "AI recommends based on your taste profile"
SOCIAL_REASON = "Popular among users with similar tastes"


def build_reasons(layers: LayerScores, config: RecommendationConfig = DEFAULT_CONFIG) -> List[str]:
    reasons = []
    if layers.preference > config.reason_threshold_preference:
        reasons.append(PREFERENCE_REASON)
    if layers.behavior > config.reason_threshold_behavior:
        reasons.append(BEHAVIOR_REASON)
    if layers.ai > config.reason_threshold_ai:
        reasons.append(AI_REASON)
    if layers.social > config.reason_threshold_social:
        reasons.append(SOCIAL_REASON)
    return reasons
