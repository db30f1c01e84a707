"""
Candidate selection: a bounded pool of eligible recipes for one user.

Hard constraints only: published recipes, and when the user declared dietary
restrictions, recipes sharing at least one of them. Ranking decides the rest.
"""

from typing import List, Optional

from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.preferences import UserPreferences
from ..models.recipe import RecipeAttributes
from ..services.catalog import RecipeCatalog, RecipeFilter


def get_candidate_pool(
    catalog: RecipeCatalog,
    preferences: Optional[UserPreferences],
    config: RecommendationConfig = DEFAULT_CONFIG,
) -> List[RecipeAttributes]:
    """Return up to candidate_pool_size published recipes passing the hard constraints."""
    recipe_filter = RecipeFilter(
        dietary_overlap=list(preferences.dietary_restrictions) if preferences else [],
    )
    return catalog.get_published_recipes(recipe_filter, limit=config.candidate_pool_size)
