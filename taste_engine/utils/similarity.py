"""
Similarity utilities: cosine similarity for semantic matching.
"""

from typing import Sequence

import numpy as np


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    """
    Compute cosine similarity between two vectors.

    Empty vectors, mismatched lengths, and zero-norm vectors all give 0.0.
    """
    if v1 is None or v2 is None or len(v1) == 0 or len(v2) == 0 or len(v1) != len(v2):
        return 0.0
    v1_arr = np.asarray(v1, dtype=float)
    v2_arr = np.asarray(v2, dtype=float)
    dot_product = np.dot(v1_arr, v2_arr)
    norm_product = np.linalg.norm(v1_arr) * np.linalg.norm(v2_arr)
    return float(dot_product / norm_product) if norm_product > 0 else 0.0
