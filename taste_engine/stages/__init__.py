"""
Pipeline stages: interaction reading, pattern analysis, taste profile
building, candidate selection, ranking, similarity, and trending.
"""

from .candidate_pool import get_candidate_pool
from .interaction_reader import load_user_interactions
from .pattern_analysis import InteractionPatterns, analyze_interaction_patterns
from .ranking import rank_candidates, score_recipe
from .similarity import compute_taste_similarities, get_similar_recipes
from .taste_profile import build_taste_profile, has_sufficient_data
from .trending import get_trending_recipes

__all__ = [
    "InteractionPatterns",
    "analyze_interaction_patterns",
    "build_taste_profile",
    "compute_taste_similarities",
    "get_candidate_pool",
    "get_similar_recipes",
    "get_trending_recipes",
    "has_sufficient_data",
    "load_user_interactions",
    "rank_candidates",
    "score_recipe",
]
