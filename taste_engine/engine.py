"""
Recommendation engine facade.

Wires the stores, the embedding provider and the config into the four
entry points (profile update, personalized, trending, similar) plus the
interaction tracking write path.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Union

from .embedding.provider import EmbeddingProvider
from .models.config import RecommendationConfig, resolve_config
from .models.interaction import InteractionEvent, SessionContext
from .models.profile import ProfileUpdateResult
from .models.scoring import RecommendationContext, RecommendationResult
from .services.catalog import RecipeCatalog
from .services.interaction_log import InteractionLog
from .services.preference_store import PreferenceStore
from .services.profile_store import ProfileStore
from .services.similarity_store import SimilarityStore
from .stages.candidate_pool import get_candidate_pool
from .stages.interaction_reader import load_user_interactions
from .stages.ranking import rank_candidates
from .stages.similarity import compute_taste_similarities, favored_recipe_ids, get_similar_recipes
from .stages.taste_profile import build_taste_profile, has_sufficient_data
from .stages.trending import get_trending_recipes
from .tasks import ProfileRefreshQueue
from .utils.scores import get_time_of_day, js_day_of_week

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecommendationEngine:
    """Taste profile and recommendation entry points over pluggable stores."""

    def __init__(
        self,
        catalog: RecipeCatalog,
        interaction_log: InteractionLog,
        preference_store: PreferenceStore,
        profile_store: ProfileStore,
        similarity_store: SimilarityStore,
        provider: EmbeddingProvider,
        config: Optional[RecommendationConfig] = None,
        refresh_queue: Optional[ProfileRefreshQueue] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.catalog = catalog
        self.interaction_log = interaction_log
        self.preference_store = preference_store
        self.profile_store = profile_store
        self.similarity_store = similarity_store
        self.provider = provider
        self.config = resolve_config(config)
        self.refresh_queue = refresh_queue
        self._clock = clock or _utcnow

    def now(self) -> datetime:
        return self._clock()

    def enable_background_refresh(self, start: bool = True, max_attempts: int = 3) -> ProfileRefreshQueue:
        """Create a refresh queue bound to update_taste_profile; optionally start its worker."""
        if self.refresh_queue is None:
            self.refresh_queue = ProfileRefreshQueue(self.update_taste_profile, max_attempts=max_attempts)
        if start:
            self.refresh_queue.start()
        return self.refresh_queue

    # ------------------------------------------------------------------
    # Profile update
    # ------------------------------------------------------------------

    def update_taste_profile(self, user_id: str) -> ProfileUpdateResult:
        """
        Rebuild and upsert the user's taste profile from the lookback window.

        With fewer than min_interactions events nothing is written and the
        result status is "insufficient_data". Store failures propagate.
        """
        config = self.config
        now = self.now()
        events = load_user_interactions(
            self.interaction_log, self.catalog, user_id, config.profile_lookback_days, now
        )

        if not has_sufficient_data(events, config):
            logger.info(
                "[taste_profile] INSUFFICIENT_DATA user_id=%s interactions=%s required=%s",
                user_id, len(events), config.min_interactions,
            )
            return ProfileUpdateResult(
                user_id=user_id,
                status="insufficient_data",
                message=(
                    f"Insufficient interaction data: {len(events)} interactions, "
                    f"at least {config.min_interactions} required"
                ),
                interactions_count=len(events),
            )

        profile, summary = build_taste_profile(user_id, events, self.provider, config, now)
        self.profile_store.upsert_taste_profile(profile)
        logger.info(
            "[taste_profile] PROFILE_UPDATED user_id=%s interactions=%s confidence=%.3f vector_dim=%s",
            user_id, len(events), profile.confidence_score, len(profile.profile_vector),
        )

        stored = 0
        if profile.has_vector:
            seeds = favored_recipe_ids(events, config.similarity_seed_recipes)
            rows = compute_taste_similarities(seeds, self.catalog, self.provider, config, now)
            if rows:
                stored = self.similarity_store.upsert_similarities(rows)

        return ProfileUpdateResult(
            user_id=user_id,
            status="updated",
            message="Taste profile updated successfully",
            interactions_count=len(events),
            profile=profile,
            interaction_summary=summary,
            similarities_stored=stored,
        )

    # ------------------------------------------------------------------
    # Read paths
    # ------------------------------------------------------------------

    def get_personalized_recommendations(
        self,
        user_id: str,
        context: Optional[Union[Dict[str, Any], RecommendationContext]] = None,
        limit: int = 10,
    ) -> List[RecommendationResult]:
        """Rank the candidate pool for user_id, highest score first."""
        config = self.config
        now = self.now()
        ctx = _ensure_context(context)
        if not ctx.time_of_day:
            ctx = ctx.model_copy(update={"time_of_day": get_time_of_day(now)})

        preferences = self.preference_store.get_user_preferences(user_id)
        profile = self.profile_store.get_taste_profile(user_id)
        interactions = load_user_interactions(
            self.interaction_log, self.catalog, user_id, config.behavior_lookback_days, now
        )
        candidates = get_candidate_pool(self.catalog, preferences, config)
        logger.info(
            "[recommend] PERSONALIZED user_id=%s candidates=%s interactions=%s has_profile=%s time_of_day=%s",
            user_id, len(candidates), len(interactions), profile is not None, ctx.time_of_day,
        )
        return rank_candidates(
            candidates,
            preferences,
            interactions,
            profile,
            ctx,
            self.provider,
            self.interaction_log,
            config,
            limit=limit,
        )

    def get_trending_recipes(self, limit: int = 10) -> List[RecommendationResult]:
        return get_trending_recipes(self.catalog, self.interaction_log, self.config, limit, self.now())

    def get_similar_recipes(self, recipe_id: str, limit: int = 5) -> List[RecommendationResult]:
        return get_similar_recipes(
            recipe_id, self.catalog, self.similarity_store, self.provider, self.config, limit
        )

    def invalidate_similarities(self, recipe_id: str) -> int:
        """Drop cached similarity rows involving recipe_id; returns rows removed."""
        removed = self.similarity_store.delete_for_recipe(recipe_id)
        logger.info("[similarity] INVALIDATED recipe_id=%s rows=%s", recipe_id, removed)
        return removed

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def track_interaction(
        self,
        user_id: str,
        recipe_id: str,
        interaction_type: str,
        strength: float = 1.0,
        context: Optional[Dict[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> InteractionEvent:
        """
        Record one interaction and queue a profile refresh for the user.

        session_context gets the current hour, the day of week (Sunday=0)
        and device "desktop"; keys in context override or extend those.
        Hour and day are read from `now` as given, so pass the user's local
        time (a tz-aware datetime) or build the engine with a local clock.
        """
        now = now or self.now()
        session = {
            "time_of_day": now.hour,
            "day_of_week": js_day_of_week(now),
            "device": "desktop",
        }
        session.update(context or {})
        event = InteractionEvent(
            user_id=user_id,
            recipe_id=recipe_id,
            interaction_type=interaction_type,
            strength=strength,
            session_context=SessionContext.model_validate(session),
            created_at=now,
        )
        self.interaction_log.record_interaction(event)
        logger.debug(
            "[interactions] TRACKED user_id=%s recipe_id=%s type=%s",
            user_id, recipe_id, interaction_type,
        )
        if self.refresh_queue is not None:
            self.refresh_queue.enqueue(user_id)
        return event


def _ensure_context(
    context: Optional[Union[Dict[str, Any], RecommendationContext]],
) -> RecommendationContext:
    if context is None:
        return RecommendationContext()
    if isinstance(context, RecommendationContext):
        return context
    return RecommendationContext.model_validate(context)
