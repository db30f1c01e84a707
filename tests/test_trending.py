"""
Trending tests: popularity/recency blend over the last week, and the
recently-added fallback when the window is empty.
"""

import pytest

from taste_engine.services import InMemoryInteractionLog
from taste_engine.stages.trending import FALLBACK_REASON, get_trending_recipes, trending_score


def _log(make_event, recipe_id, interaction_type, count, days_ago=1.0):
    return [
        make_event(recipe_id, interaction_type, days_ago=days_ago, user_id=f"u{i}")
        for i in range(count)
    ]


class TestTrendingScore:
    def test_blend(self):
        assert trending_score(50, 10.0) == pytest.approx(0.7 * 0.5 + 0.3 * (2 / 3))

    def test_caps_and_floor(self):
        assert trending_score(1000, 0.0) == pytest.approx(1.0)
        assert trending_score(0, 365.0) == pytest.approx(0.03)


class TestTrending:
    def test_fallback_to_recent_recipes(self, catalog, interaction_log, fixed_now):
        results = get_trending_recipes(catalog, interaction_log, limit=5, now=fixed_now)

        assert [r.recipe_id for r in results] == [
            "r-pancakes", "r-mandazi", "r-chapati", "r-ugali", "r-pasta",
        ]
        assert all(r.score == 0.8 for r in results)
        assert all(r.reasons == [FALLBACK_REASON] for r in results)
        assert all(r.context == "trending" for r in results)

    def test_old_interactions_fall_back(self, catalog, make_event, fixed_now):
        log = InMemoryInteractionLog(_log(make_event, "r-ugali", "cook", 20, days_ago=8))
        results = get_trending_recipes(catalog, log, limit=3, now=fixed_now)

        assert all(r.reasons == [FALLBACK_REASON] for r in results)

    @pytest.mark.parametrize("interaction_type", ["skip", "share", "rate"])
    def test_uncounted_types_fall_back(self, catalog, make_event, fixed_now, interaction_type):
        log = InMemoryInteractionLog(_log(make_event, "r-ugali", interaction_type, 5))
        results = get_trending_recipes(catalog, log, limit=3, now=fixed_now)

        assert all(r.reasons == [FALLBACK_REASON] for r in results)

    def test_scores_sorted_descending(self, catalog, make_event, fixed_now):
        log = InMemoryInteractionLog(
            _log(make_event, "r-ugali", "view", 50)
            + _log(make_event, "r-risotto", "cook", 100, days_ago=3)
        )
        results = get_trending_recipes(catalog, log, limit=10, now=fixed_now)

        assert [r.recipe_id for r in results] == ["r-risotto", "r-ugali"]
        # risotto: popularity 1.0, recency floored at 0.1 (created 60 days ago)
        assert results[0].score == pytest.approx(0.73)
        # ugali: popularity 0.5, recency 1 - 10/30
        assert results[1].score == pytest.approx(0.55)
        assert results[1].reasons == ["Trending recipe with 50 recent interactions"]

    def test_limit(self, catalog, make_event, fixed_now):
        events = []
        for rid in ["r-ugali", "r-sukuma", "r-chapati", "r-pasta"]:
            events.extend(_log(make_event, rid, "like", 3))
        results = get_trending_recipes(catalog, InMemoryInteractionLog(events), limit=2, now=fixed_now)

        assert len(results) == 2

    def test_unpublished_recipes_are_not_trending(self, catalog, make_event, fixed_now):
        log = InMemoryInteractionLog(
            _log(make_event, "r-draft", "view", 80) + _log(make_event, "r-pasta", "save", 2)
        )
        results = get_trending_recipes(catalog, log, limit=5, now=fixed_now)

        assert [r.recipe_id for r in results] == ["r-pasta"]
