"""
Personalized ranking: four layer scores fused with fixed weights, then a
contextual multiplier.

Public API: rank_candidates, score_recipe.
- layers: preference, behavioral, semantic, social
- context: contextual multiplier
- reasons: threshold-based explanations
"""

from .context import contextual_multiplier
from .core import fuse_layers, rank_candidates, score_recipe
from .layers import behavioral_match, preference_match, semantic_match, social_match
from .reasons import build_reasons

__all__ = [
    "behavioral_match",
    "build_reasons",
    "contextual_multiplier",
    "fuse_layers",
    "preference_match",
    "rank_candidates",
    "score_recipe",
    "semantic_match",
    "social_match",
]
