"""Shared utilities for scoring, similarity, and time handling."""

from .scores import clamp, days_since, get_time_of_day, js_day_of_week
from .similarity import cosine_similarity

__all__ = [
    "clamp",
    "days_since",
    "get_time_of_day",
    "js_day_of_week",
    "cosine_similarity",
]
