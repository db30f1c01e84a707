"""
Embedding Provider

The engine treats text embedding as an external collaborator with a fixed
contract: ``embed(text) -> List[float]``, same dimensionality on every call,
may fail transiently (raise). Implementations here:

- OpenAIEmbeddingProvider: OpenAI embeddings API, one text per call
- CachedEmbeddingProvider: memoizes another provider per (strategy, text)

Usage:
    provider = CachedEmbeddingProvider(OpenAIEmbeddingProvider(api_key="sk-..."))
    vector = provider.embed("Chapati flour water salt oil")
"""

import hashlib
import logging
import os
import threading
from collections import OrderedDict
from typing import List, Optional, Protocol

from openai import OpenAI

from ..errors import ConfigurationError, EmbeddingError
from .embedding_strategy import EMBEDDING_DIMENSIONS, EMBEDDING_MODEL, STRATEGY_VERSION

logger = logging.getLogger(__name__)


class EmbeddingProvider(Protocol):
    """Protocol for text embedding. Implement for OpenAI, a local model, or a test fake."""

    def embed(self, text: str) -> List[float]:
        """Return a dense vector for text. Raise on failure."""
        ...


class OpenAIEmbeddingProvider:
    """
    Embedding provider backed by OpenAI's embedding API.

    The client is created lazily so constructing the provider never needs
    network access or a key.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = EMBEDDING_MODEL,
        dimensions: int = EMBEDDING_DIMENSIONS,
    ):
        """
        Args:
            api_key: OpenAI API key (falls back to OPENAI_API_KEY env var)
            model: Embedding model to use
            dimensions: Embedding dimensions
        """
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model
        self.dimensions = dimensions
        self._client: Optional[OpenAI] = None

    @property
    def client(self) -> OpenAI:
        """Get or create OpenAI client."""
        if not self.api_key:
            raise ConfigurationError(
                "OpenAI API key not provided. Set OPENAI_API_KEY environment variable "
                "or pass api_key to OpenAIEmbeddingProvider."
            )
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def embed(self, text: str) -> List[float]:
        client = self.client
        try:
            response = client.embeddings.create(
                model=self.model,
                input=[text],
                dimensions=self.dimensions,
            )
        except Exception as e:
            raise EmbeddingError(f"OpenAI embedding request failed: {e}") from e
        if not response.data:
            raise EmbeddingError("OpenAI embedding response contained no data")
        return list(response.data[0].embedding)


class CachedEmbeddingProvider:
    """
    Memoizing wrapper: a text is embedded at most once per strategy version.

    Failures are not cached. Oldest entries are evicted past max_entries.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        max_entries: int = 10_000,
        strategy_version: str = STRATEGY_VERSION,
    ):
        self._provider = provider
        self._max_entries = max_entries
        self._strategy_version = strategy_version
        self._cache: "OrderedDict[str, List[float]]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def _key(self, text: str) -> str:
        digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
        return f"s{self._strategy_version}:{digest}"

    def embed(self, text: str) -> List[float]:
        key = self._key(text)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                self.hits += 1
                return list(cached)
            self.misses += 1
        vector = self._provider.embed(text)
        with self._lock:
            self._cache[key] = list(vector)
            while len(self._cache) > self._max_entries:
                self._cache.popitem(last=False)
        return list(vector)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
