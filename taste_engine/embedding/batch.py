"""
Bounded-concurrency embedding of many texts.

Provider calls are the slow part of scoring up to a hundred recipes; they are
issued through a small thread pool so outbound calls stay bounded. A failing
item is logged and left out of the result; the batch always completes.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Hashable, List, Mapping, Optional, TypeVar

from .provider import EmbeddingProvider

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


def embed_one(provider: EmbeddingProvider, text: str, label: str = "") -> Optional[List[float]]:
    """Embed a single text; None (logged) on failure or empty vector."""
    try:
        vector = provider.embed(text)
    except Exception as e:
        logger.warning("[embedding] EMBED_FAILED item=%s err=%s", label, e)
        return None
    if not vector:
        logger.warning("[embedding] EMBED_EMPTY item=%s", label)
        return None
    return list(vector)


def embed_many(
    provider: EmbeddingProvider,
    texts: Mapping[K, str],
    max_workers: int = 4,
) -> Dict[K, List[float]]:
    """
    Embed every text in ``texts`` (key -> text) with at most max_workers calls in flight.

    Returns key -> vector for the items that succeeded. Completion order is not
    preserved; callers sort or index by key.
    """
    if not texts:
        return {}
    results: Dict[K, List[float]] = {}
    if max_workers <= 1 or len(texts) == 1:
        for key, text in texts.items():
            vector = embed_one(provider, text, str(key))
            if vector is not None:
                results[key] = vector
        return results

    with ThreadPoolExecutor(
        max_workers=min(max_workers, len(texts)),
        thread_name_prefix="embed-call",
    ) as executor:
        futures = {
            executor.submit(embed_one, provider, text, str(key)): key
            for key, text in texts.items()
        }
        for future in as_completed(futures):
            vector = future.result()
            if vector is not None:
                results[futures[future]] = vector
    failed = len(texts) - len(results)
    if failed:
        logger.warning(
            "[embedding] BATCH_PARTIAL requested=%s embedded=%s skipped=%s",
            len(texts), len(results), failed,
        )
    return results
