"""
Embedding Strategy

This module defines HOW text is extracted from recipes for embedding.
Changes to this module invalidate cached vectors (bump STRATEGY_VERSION).

Three formulas are in use:
    profile:    "{title} {description} {ingredients} {cuisine}"
    candidate:  "{title} {description} {ingredients}"
    similarity: "{title} {description} {ingredients} {cuisine} {category}"

The profile vector is the mean of profile-text embeddings of recipes the user
favored; candidates are scored against it using candidate-text embeddings.
"""

from typing import Iterable, Optional

from ..models.recipe import RecipeAttributes

# Metadata for cache validation
# IMPORTANT: Bump this version when the embedding logic changes!
STRATEGY_VERSION = "1.0"

# OpenAI embedding configuration
EMBEDDING_MODEL = "text-embedding-3-small"
EMBEDDING_DIMENSIONS = 1536


def _join(parts: Iterable[Optional[str]]) -> str:
    return " ".join(p.strip() for p in parts if p and p.strip())


def get_profile_embed_text(recipe: RecipeAttributes) -> str:
    """Text for a favored recipe contributing to the taste profile vector."""
    return _join([
        recipe.title,
        recipe.description,
        " ".join(recipe.ingredients),
        recipe.cuisine_name,
    ])


def get_candidate_embed_text(recipe: RecipeAttributes) -> str:
    """Text for a candidate scored against the taste profile (and for batch similarities)."""
    return _join([
        recipe.title,
        recipe.description,
        " ".join(recipe.ingredients),
    ])


def get_similarity_embed_text(recipe: RecipeAttributes) -> str:
    """Text for on-demand recipe-to-recipe content similarity."""
    return _join([
        recipe.title,
        recipe.description,
        " ".join(recipe.ingredients),
        recipe.cuisine_name,
        recipe.category_name,
    ])
