"""
Pattern analysis tests.

Covers bucket classification (positive / negative / neutral types), strength
weighting, time-slot and cooking-style counters, and tie ordering.
"""

import pytest

from taste_engine.stages.pattern_analysis import (
    CookingPatterns,
    InteractionPatterns,
    analyze_interaction_patterns,
    determine_cooking_style,
    get_time_slot,
    rank_by_weight,
)


class TestBuckets:
    def test_positive_event_fills_liked_buckets(self, make_event):
        patterns = analyze_interaction_patterns([make_event("r-ugali", "cook")])

        assert patterns.liked_cuisines == {"Kenyan": 1.0}
        assert patterns.liked_difficulties == {"easy": 1.0}
        assert patterns.liked_ingredients == {"maize flour": 1.0, "water": 1.0, "salt": 1.0}
        assert patterns.avoided_cuisines == {}
        assert patterns.interaction_count == 1

    def test_skip_fills_avoided_buckets_but_not_difficulty(self, make_event):
        patterns = analyze_interaction_patterns([make_event("r-pasta", "skip")])

        assert patterns.avoided_cuisines == {"Italian": 1.0}
        assert "guanciale" in patterns.avoided_ingredients
        assert patterns.liked_difficulties == {}
        assert patterns.liked_cuisines == {}

    @pytest.mark.parametrize("interaction_type", ["view", "share"])
    def test_neutral_types_only_count(self, make_event, interaction_type):
        patterns = analyze_interaction_patterns([make_event("r-ugali", interaction_type, time_of_day=8)])

        assert patterns.interaction_count == 1
        assert patterns.liked_cuisines == {}
        assert patterns.avoided_cuisines == {}
        assert patterns.time_preferences == {}

    def test_rate_is_positive(self, make_event):
        patterns = analyze_interaction_patterns([make_event("r-risotto", "rate")])
        assert patterns.liked_cuisines == {"Italian": 1.0}

    def test_strength_is_summed(self, make_event):
        events = [
            make_event("r-ugali", "like", strength=2.0),
            make_event("r-sukuma", "save", strength=0.5),
        ]
        patterns = analyze_interaction_patterns(events)

        assert patterns.liked_cuisines["Kenyan"] == pytest.approx(2.5)
        # Ingredients accumulate per recipe they appear in
        assert patterns.liked_ingredients["maize flour"] == pytest.approx(2.0)
        assert patterns.liked_ingredients["kale"] == pytest.approx(0.5)

    def test_missing_attributes_are_skipped(self, make_event, recipes):
        bare = recipes["r-ugali"].model_copy(update={"cuisine_name": None, "difficulty": None})
        event = make_event("r-ugali", "cook", attach=False).with_recipe(bare)

        patterns = analyze_interaction_patterns([event])

        assert patterns.liked_cuisines == {}
        assert patterns.liked_difficulties == {}
        assert len(patterns.liked_ingredients) == 3

    def test_event_without_recipe_still_counts(self, make_event):
        patterns = analyze_interaction_patterns([make_event("r-unknown", "cook")])
        assert patterns.interaction_count == 1
        assert patterns.liked_cuisines == {}


class TestTimeAndCookingStyle:
    @pytest.mark.parametrize(
        "hour,slot",
        [
            (0, "late_night"),
            (5, "late_night"),
            (6, "morning"),
            (9, "morning"),
            (10, "midday"),
            (13, "midday"),
            (14, "afternoon"),
            (17, "afternoon"),
            (18, "evening"),
            (21, "evening"),
            (22, "late_night"),
            (23, "late_night"),
        ],
    )
    def test_time_slot_boundaries(self, hour, slot):
        assert get_time_slot(hour) == slot

    def test_time_preference_only_for_positive_with_hour(self, make_event):
        events = [
            make_event("r-ugali", "cook", time_of_day=19),
            make_event("r-sukuma", "cook"),
            make_event("r-pasta", "skip", time_of_day=8),
        ]
        patterns = analyze_interaction_patterns(events)
        assert patterns.time_preferences == {"evening": 1.0}

    def test_quick_and_elaborate_are_exclusive(self, make_event):
        events = [
            make_event("r-ugali", "cook"),      # 20 min
            make_event("r-pasta", "cook"),      # 30 min, boundary is quick
            make_event("r-chapati", "cook"),    # 45 min, neither
            make_event("r-risotto", "cook"),    # 60 min, boundary is elaborate
            make_event("r-nyama", "cook"),      # 90 min
        ]
        cooking = analyze_interaction_patterns(events).cooking_patterns

        assert cooking.quick_meals == pytest.approx(2.0)
        assert cooking.elaborate_meals == pytest.approx(2.0)

    def test_weekend_uses_sunday_zero(self, make_event):
        events = [
            make_event("r-ugali", "cook", day_of_week=0),
            make_event("r-ugali", "cook", day_of_week=6),
            make_event("r-ugali", "cook", day_of_week=3),
            make_event("r-ugali", "skip", day_of_week=6),
        ]
        cooking = analyze_interaction_patterns(events).cooking_patterns

        assert cooking.weekend_cooking == pytest.approx(2.0)
        assert cooking.weekday_cooking == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "counters,style",
        [
            (CookingPatterns(quick_meals=3, elaborate_meals=1), "quick_and_easy"),
            (CookingPatterns(quick_meals=2, elaborate_meals=1), "balanced"),
            (CookingPatterns(quick_meals=1, elaborate_meals=2), "elaborate_cooking"),
            (CookingPatterns(weekend_cooking=3, weekday_cooking=1), "weekend_chef"),
            (CookingPatterns(), "balanced"),
        ],
    )
    def test_cooking_style_order(self, counters, style):
        assert determine_cooking_style(InteractionPatterns(cooking_patterns=counters)) == style


class TestRankByWeight:
    def test_descending_with_stable_ties(self):
        bucket = {"a": 1.0, "b": 3.0, "c": 1.0, "d": 2.0}
        assert rank_by_weight(bucket) == ["b", "d", "a", "c"]

    def test_limit(self):
        assert rank_by_weight({"a": 1.0, "b": 2.0, "c": 3.0}, 2) == ["c", "b"]
