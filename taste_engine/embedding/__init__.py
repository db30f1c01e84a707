"""Embedding text strategy, provider contract, and batch helpers."""

from .batch import embed_many, embed_one
from .embedding_strategy import (
    EMBEDDING_DIMENSIONS,
    EMBEDDING_MODEL,
    STRATEGY_VERSION,
    get_candidate_embed_text,
    get_profile_embed_text,
    get_similarity_embed_text,
)
from .provider import CachedEmbeddingProvider, EmbeddingProvider, OpenAIEmbeddingProvider

__all__ = [
    "CachedEmbeddingProvider",
    "EmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "embed_many",
    "embed_one",
    "get_candidate_embed_text",
    "get_profile_embed_text",
    "get_similarity_embed_text",
    "STRATEGY_VERSION",
    "EMBEDDING_MODEL",
    "EMBEDDING_DIMENSIONS",
]
