"""
Recipe-to-recipe similarity: cached lookup, on-demand fallback, and the
batch pass that fills the cache after a profile update.

Cache hits are returned as stored, never recomputed. The on-demand path does
not write to the cache; only compute_taste_similarities produces rows, and
only pairs scoring above config.similarity_threshold.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from ..embedding.batch import embed_many, embed_one
from ..embedding.embedding_strategy import get_candidate_embed_text, get_similarity_embed_text
from ..embedding.provider import EmbeddingProvider
from ..models.config import DEFAULT_CONFIG, RecommendationConfig
from ..models.interaction import InteractionEvent
from ..models.recipe import RecipeAttributes
from ..models.scoring import RecommendationResult
from ..models.similarity import RecipeSimilarity
from ..services.catalog import RecipeCatalog, RecipeFilter
from ..services.similarity_store import SimilarityStore
from ..utils.scores import ensure_utc
from ..utils.similarity import cosine_similarity

logger = logging.getLogger(__name__)

ON_DEMAND_REASON = "AI-calculated content similarity"
TASTE_PROFILE_SIMILARITY = "taste_profile"


def cached_similar_recipes(
    store: SimilarityStore,
    recipe_id: str,
    limit: int,
) -> List[RecommendationResult]:
    """Top cached rows for recipe_id, as results. Empty on a cache miss."""
    rows = store.get_similarities(recipe_id, limit=limit)
    return [
        RecommendationResult(
            recipe_id=row.recipe_b_id,
            score=row.similarity_score,
            reasons=[f"Similar {row.similarity_type.replace('_', ' ')}"],
            context="similar",
        )
        for row in rows
    ]


def compute_similar_recipes(
    recipe_id: str,
    catalog: RecipeCatalog,
    provider: EmbeddingProvider,
    config: RecommendationConfig = DEFAULT_CONFIG,
    limit: int = 5,
) -> List[RecommendationResult]:
    """
    Embed the target and up to similarity_pool_size other published recipes,
    rank by cosine similarity. Candidates whose embedding fails are skipped;
    if the target itself cannot be embedded the result is empty.
    """
    if limit <= 0:
        return []
    target = catalog.get_recipe(recipe_id)
    if target is None:
        logger.info("[similarity] TARGET_NOT_FOUND recipe_id=%s", recipe_id)
        return []

    target_vector = embed_one(provider, get_similarity_embed_text(target), recipe_id)
    if target_vector is None:
        return []

    others = catalog.get_published_recipes(
        RecipeFilter(exclude_ids={recipe_id}),
        limit=config.similarity_pool_size,
    )
    texts = {r.id: get_similarity_embed_text(r) for r in others}
    vectors = embed_many(provider, texts, max_workers=config.embedding_max_workers)

    results = [
        RecommendationResult(
            recipe_id=other_id,
            score=cosine_similarity(target_vector, vector),
            reasons=[ON_DEMAND_REASON],
            context="similar",
        )
        for other_id, vector in vectors.items()
    ]
    # Sort ties by catalog order so completion order never leaks into the ranking
    position = {r.id: i for i, r in enumerate(others)}
    results.sort(key=lambda r: (-r.score, position[r.recipe_id]))
    return results[:limit]


def get_similar_recipes(
    recipe_id: str,
    catalog: RecipeCatalog,
    store: SimilarityStore,
    provider: EmbeddingProvider,
    config: RecommendationConfig = DEFAULT_CONFIG,
    limit: int = 5,
) -> List[RecommendationResult]:
    """Cached similarities when any exist for recipe_id, else computed on demand."""
    if limit <= 0:
        return []
    cached = cached_similar_recipes(store, recipe_id, limit)
    if cached:
        logger.info("[similarity] CACHE_HIT recipe_id=%s rows=%s", recipe_id, len(cached))
        return cached
    logger.info("[similarity] CACHE_MISS recipe_id=%s computing on demand", recipe_id)
    return compute_similar_recipes(recipe_id, catalog, provider, config, limit)


def favored_recipe_ids(events: Sequence[InteractionEvent], limit: int = 10) -> List[str]:
    """Distinct recipe ids the user liked/cooked/saved, most recent first."""
    ordered = sorted(events, key=lambda e: ensure_utc(e.created_at), reverse=True)
    ids: List[str] = []
    for event in ordered:
        if event.is_favored and event.recipe_id not in ids:
            ids.append(event.recipe_id)
            if len(ids) >= limit:
                break
    return ids


def compute_taste_similarities(
    seed_recipe_ids: Sequence[str],
    catalog: RecipeCatalog,
    provider: EmbeddingProvider,
    config: RecommendationConfig = DEFAULT_CONFIG,
    now: Optional[datetime] = None,
) -> List[RecipeSimilarity]:
    """
    Pairwise similarities between the seed recipes and the catalog pool.

    Every recipe is embedded once. Only pairs scoring above
    config.similarity_threshold are returned.
    """
    if not seed_recipe_ids:
        return []
    now = now or datetime.now(timezone.utc)

    seeds: List[RecipeAttributes] = []
    for rid in seed_recipe_ids:
        recipe = catalog.get_recipe(rid)
        if recipe is not None:
            seeds.append(recipe)
    pool = catalog.get_published_recipes(limit=config.similarity_pool_size)
    if not seeds or not pool:
        return []

    texts: Dict[str, str] = {}
    for recipe in list(seeds) + list(pool):
        texts.setdefault(recipe.id, get_candidate_embed_text(recipe))
    vectors = embed_many(provider, texts, max_workers=config.embedding_max_workers)

    rows: List[RecipeSimilarity] = []
    for seed in seeds:
        seed_vector = vectors.get(seed.id)
        if seed_vector is None:
            continue
        for recipe in pool:
            if recipe.id == seed.id:
                continue
            vector = vectors.get(recipe.id)
            if vector is None:
                continue
            score = cosine_similarity(seed_vector, vector)
            if score > config.similarity_threshold:
                rows.append(
                    RecipeSimilarity(
                        recipe_a_id=seed.id,
                        recipe_b_id=recipe.id,
                        similarity_score=score,
                        similarity_type=TASTE_PROFILE_SIMILARITY,
                        last_calculated=now,
                    )
                )
    logger.info(
        "[similarity] BATCH_COMPUTED seeds=%s pool=%s stored_pairs=%s",
        len(seeds), len(pool), len(rows),
    )
    return rows
