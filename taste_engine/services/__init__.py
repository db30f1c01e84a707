"""Store abstractions the engine reads from and writes to, with in-memory and JSON implementations."""

from .catalog import InMemoryRecipeCatalog, JsonRecipeCatalog, RecipeCatalog, RecipeFilter
from .interaction_log import InMemoryInteractionLog, InteractionLog, JsonInteractionLog
from .preference_store import InMemoryPreferenceStore, JsonPreferenceStore, PreferenceStore
from .profile_store import InMemoryProfileStore, JsonProfileStore, ProfileStore
from .similarity_store import InMemorySimilarityStore, JsonSimilarityStore, SimilarityStore

__all__ = [
    "InMemoryInteractionLog",
    "InMemoryPreferenceStore",
    "InMemoryProfileStore",
    "InMemoryRecipeCatalog",
    "InMemorySimilarityStore",
    "InteractionLog",
    "JsonInteractionLog",
    "JsonPreferenceStore",
    "JsonProfileStore",
    "JsonRecipeCatalog",
    "JsonSimilarityStore",
    "PreferenceStore",
    "ProfileStore",
    "RecipeCatalog",
    "RecipeFilter",
    "SimilarityStore",
]
