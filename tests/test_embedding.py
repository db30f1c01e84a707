"""
Embedding tests: text strategy, the memoizing provider, bounded batch
embedding, and the OpenAI provider's key handling.
"""

import threading
import time

import pytest

from taste_engine.embedding import (
    CachedEmbeddingProvider,
    OpenAIEmbeddingProvider,
    embed_many,
    embed_one,
    get_candidate_embed_text,
    get_profile_embed_text,
    get_similarity_embed_text,
)
from taste_engine.errors import ConfigurationError, EmbeddingError
from taste_engine.models import RecipeAttributes

from .conftest import FakeEmbeddingProvider


class TestEmbedText:
    def test_profile_text(self, recipes):
        assert get_profile_embed_text(recipes["r-ugali"]) == (
            "Ugali Stiff maize porridge maize flour water salt Kenyan"
        )

    def test_candidate_text_has_no_cuisine(self, recipes):
        assert get_candidate_embed_text(recipes["r-ugali"]) == (
            "Ugali Stiff maize porridge maize flour water salt"
        )

    def test_similarity_text_adds_category(self, recipes):
        assert get_similarity_embed_text(recipes["r-ugali"]).endswith("Kenyan Dinner")

    def test_missing_parts_are_skipped(self):
        recipe = RecipeAttributes(id="r1", title="Githeri")
        assert get_similarity_embed_text(recipe) == "Githeri"


class TestCachedEmbeddingProvider:
    def test_second_call_is_served_from_cache(self):
        inner = FakeEmbeddingProvider()
        cached = CachedEmbeddingProvider(inner)

        first = cached.embed("maize flour water")
        second = cached.embed("maize flour water")

        assert first == second
        assert inner.calls == 1
        assert (cached.hits, cached.misses) == (1, 1)

    def test_failures_are_not_cached(self):
        inner = FakeEmbeddingProvider(fail_on={"boom"})
        cached = CachedEmbeddingProvider(inner)

        for _ in range(2):
            with pytest.raises(EmbeddingError):
                cached.embed("boom")
        assert inner.calls == 2
        assert len(cached) == 0

    def test_oldest_entry_evicted(self):
        inner = FakeEmbeddingProvider()
        cached = CachedEmbeddingProvider(inner, max_entries=2)
        for text in ["a", "b", "c"]:
            cached.embed(text)

        cached.embed("c")
        assert inner.calls == 3
        cached.embed("a")
        assert inner.calls == 4

    def test_clear(self):
        cached = CachedEmbeddingProvider(FakeEmbeddingProvider())
        cached.embed("a")
        cached.clear()
        assert len(cached) == 0


class TestBatch:
    @pytest.mark.parametrize("workers", [1, 4])
    def test_failures_skipped(self, workers):
        provider = FakeEmbeddingProvider(fail_on={"bad"})
        texts = {"r1": "good one", "r2": "bad one", "r3": "another good"}

        vectors = embed_many(provider, texts, max_workers=workers)

        assert set(vectors) == {"r1", "r3"}
        assert provider.calls == 3

    def test_concurrency_is_bounded(self):
        class SlowProvider:
            def __init__(self):
                self.active = 0
                self.peak = 0
                self.calls = 0
                self._lock = threading.Lock()

            def embed(self, text):
                with self._lock:
                    self.active += 1
                    self.calls += 1
                    self.peak = max(self.peak, self.active)
                time.sleep(0.02)
                with self._lock:
                    self.active -= 1
                return [1.0, 0.0]

        provider = SlowProvider()
        texts = {f"r{i}": f"recipe {i}" for i in range(12)}

        vectors = embed_many(provider, texts, max_workers=2)

        assert len(vectors) == 12
        assert provider.calls == 12
        assert 1 <= provider.peak <= 2

    def test_empty_input(self):
        provider = FakeEmbeddingProvider()
        assert embed_many(provider, {}) == {}
        assert provider.calls == 0

    def test_embed_one_rejects_empty_vector(self):
        class EmptyProvider:
            def embed(self, text):
                return []

        assert embed_one(EmptyProvider(), "anything") is None


class TestOpenAIProvider:
    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        provider = OpenAIEmbeddingProvider()

        with pytest.raises(ConfigurationError):
            provider.embed("text")

    def test_client_is_lazy(self):
        provider = OpenAIEmbeddingProvider(api_key="sk-test", dimensions=256)
        assert provider._client is None
        assert provider.dimensions == 256
