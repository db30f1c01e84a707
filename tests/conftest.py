"""
Shared fixtures: a deterministic fake embedding provider, a fixed clock,
a small recipe catalog, and in-memory stores.
"""

import hashlib
import re
import threading
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

import pytest

from taste_engine.engine import RecommendationEngine
from taste_engine.errors import EmbeddingError
from taste_engine.models import InteractionEvent, RecipeAttributes, SessionContext
from taste_engine.services import (
    InMemoryInteractionLog,
    InMemoryPreferenceStore,
    InMemoryProfileStore,
    InMemoryRecipeCatalog,
    InMemorySimilarityStore,
)

# Wednesday 2026-03-04 09:00 UTC
FIXED_NOW = datetime(2026, 3, 4, 9, 0, tzinfo=timezone.utc)

FAKE_DIMENSIONS = 256


class FakeEmbeddingProvider:
    """
    Bag-of-words embedding: each lowercase word adds 1.0 to a hashed bucket.

    Deterministic across runs. Texts containing any string in fail_on raise
    EmbeddingError. calls counts every embed() invocation.
    """

    def __init__(self, fail_on: Optional[Iterable[str]] = None, dimensions: int = FAKE_DIMENSIONS):
        self.fail_on = set(fail_on or ())
        self.dimensions = dimensions
        self.calls = 0
        self.texts: List[str] = []
        self._lock = threading.Lock()

    def embed(self, text: str) -> List[float]:
        with self._lock:
            self.calls += 1
            self.texts.append(text)
        if any(marker in text for marker in self.fail_on):
            raise EmbeddingError(f"fake failure for {text[:20]!r}")
        vector = [0.0] * self.dimensions
        for word in re.findall(r"[a-z]+", text.lower()):
            bucket = int(hashlib.md5(word.encode("utf-8")).hexdigest(), 16) % self.dimensions
            vector[bucket] += 1.0
        return vector


def _days_ago(days: float) -> datetime:
    return FIXED_NOW - timedelta(days=days)


SAMPLE_RECIPES = [
    {
        "id": "r-ugali",
        "title": "Ugali",
        "description": "Stiff maize porridge",
        "ingredients": ["maize flour", "water", "salt"],
        "cuisine": {"name": "Kenyan"},
        "category": {"name": "Dinner"},
        "difficulty": "easy",
        "total_time_minutes": 20,
        "dietary_restrictions": ["vegetarian", "gluten-free"],
        "created_at": _days_ago(10),
    },
    {
        "id": "r-sukuma",
        "title": "Sukuma Wiki",
        "description": "Braised collard greens",
        "ingredients": ["kale", "onion", "tomato", "oil"],
        "cuisine": {"name": "Kenyan"},
        "category": {"name": "Dinner"},
        "difficulty": "easy",
        "total_time_minutes": 25,
        "dietary_restrictions": ["vegan", "vegetarian", "gluten-free"],
        "created_at": _days_ago(20),
    },
    {
        "id": "r-chapati",
        "title": "Chapati",
        "description": "Layered flatbread",
        "ingredients": ["flour", "water", "salt", "oil"],
        "cuisine": {"name": "Kenyan"},
        "category": {"name": "Breakfast"},
        "difficulty": "medium",
        "total_time_minutes": 45,
        "dietary_restrictions": ["vegetarian"],
        "created_at": _days_ago(5),
    },
    {
        "id": "r-nyama",
        "title": "Nyama Choma",
        "description": "Slow grilled beef",
        "ingredients": ["beef", "salt", "lime"],
        "cuisine": {"name": "Kenyan"},
        "category": {"name": "Dinner"},
        "difficulty": "medium",
        "total_time_minutes": 90,
        "dietary_restrictions": ["gluten-free"],
        "created_at": _days_ago(40),
    },
    {
        "id": "r-mandazi",
        "title": "Mandazi",
        "description": "Fried coconut doughnuts",
        "ingredients": ["flour", "sugar", "coconut milk", "cardamom"],
        "cuisine": {"name": "Kenyan"},
        "category": {"name": "Breakfast"},
        "difficulty": "easy",
        "total_time_minutes": 40,
        "dietary_restrictions": ["vegetarian"],
        "created_at": _days_ago(2),
    },
    {
        "id": "r-pasta",
        "title": "Spaghetti Carbonara",
        "description": "Roman pasta with egg and cheese",
        "ingredients": ["spaghetti", "egg", "pecorino", "guanciale"],
        "cuisine": {"name": "Italian"},
        "category": {"name": "Dinner"},
        "difficulty": "medium",
        "total_time_minutes": 30,
        "dietary_restrictions": [],
        "created_at": _days_ago(15),
    },
    {
        "id": "r-risotto",
        "title": "Mushroom Risotto",
        "description": "Creamy rice slowly stirred",
        "ingredients": ["arborio rice", "parmesan", "butter", "stock"],
        "cuisine": {"name": "Italian"},
        "category": {"name": "Dinner"},
        "difficulty": "hard",
        "total_time_minutes": 60,
        "dietary_restrictions": ["vegetarian", "gluten-free"],
        "created_at": _days_ago(60),
    },
    {
        "id": "r-pancakes",
        "title": "Buttermilk Pancakes",
        "description": "Fluffy stack",
        "ingredients": ["flour", "milk", "egg", "butter"],
        "cuisine": {"name": "American"},
        "category": {"name": "Breakfast"},
        "difficulty": "easy",
        "total_time_minutes": 20,
        "dietary_restrictions": ["vegetarian"],
        "created_at": _days_ago(1),
    },
    {
        "id": "r-draft",
        "title": "Unreleased Ramen",
        "description": "Work in progress",
        "ingredients": ["noodles", "broth"],
        "cuisine": {"name": "Japanese"},
        "category": {"name": "Dinner"},
        "difficulty": "hard",
        "total_time_minutes": 240,
        "dietary_restrictions": [],
        "created_at": _days_ago(0),
        "is_published": False,
    },
]


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def recipes():
    return {r["id"]: RecipeAttributes.model_validate(r) for r in SAMPLE_RECIPES}


@pytest.fixture
def catalog():
    return InMemoryRecipeCatalog(SAMPLE_RECIPES)


@pytest.fixture
def interaction_log():
    return InMemoryInteractionLog()


@pytest.fixture
def preference_store():
    return InMemoryPreferenceStore()


@pytest.fixture
def profile_store():
    return InMemoryProfileStore()


@pytest.fixture
def similarity_store():
    return InMemorySimilarityStore()


@pytest.fixture
def provider():
    return FakeEmbeddingProvider()


@pytest.fixture
def make_event(recipes):
    """Factory for events with the recipe attached, dated relative to FIXED_NOW."""

    def _make(
        recipe_id: str,
        interaction_type: str = "cook",
        days_ago: float = 1.0,
        user_id: str = "user-1",
        strength: float = 1.0,
        attach: bool = True,
        **session,
    ) -> InteractionEvent:
        event = InteractionEvent(
            user_id=user_id,
            recipe_id=recipe_id,
            interaction_type=interaction_type,
            strength=strength,
            session_context=SessionContext(**session),
            created_at=FIXED_NOW - timedelta(days=days_ago),
        )
        if attach and recipe_id in recipes:
            event = event.with_recipe(recipes[recipe_id])
        return event

    return _make


@pytest.fixture
def engine(catalog, interaction_log, preference_store, profile_store, similarity_store, provider):
    return RecommendationEngine(
        catalog=catalog,
        interaction_log=interaction_log,
        preference_store=preference_store,
        profile_store=profile_store,
        similarity_store=similarity_store,
        provider=provider,
        clock=lambda: FIXED_NOW,
    )
