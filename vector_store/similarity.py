"""
Cosine similarity for brute-force nearest-neighbor search.

A zero-magnitude vector has similarity 0 with everything, so no NaN ever
reaches the ranking.
"""

from typing import Sequence

import numpy as np

from .exceptions import DimensionMismatchError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors; 0.0 if either has zero magnitude."""
    vec1 = np.asarray(a, dtype=np.float64)
    vec2 = np.asarray(b, dtype=np.float64)
    if vec1.shape != vec2.shape:
        raise DimensionMismatchError(len(vec1), len(vec2))

    norm1 = np.linalg.norm(vec1)
    norm2 = np.linalg.norm(vec2)
    if norm1 == 0 or norm2 == 0:
        return 0.0
    return float(np.dot(vec1, vec2) / (norm1 * norm2))


def cosine_similarities(
    matrix: Sequence[Sequence[float]],
    query: Sequence[float],
) -> np.ndarray:
    """
    Score every row of ``matrix`` against ``query``.

    Args:
        matrix: Stored embeddings, one per row.
        query: The query embedding.

    Returns:
        1-D array of similarities, one per row.

    Raises:
        DimensionMismatchError: If the query length differs from the rows.
    """
    rows = np.asarray(matrix, dtype=np.float64)
    vec = np.asarray(query, dtype=np.float64)
    if len(rows) == 0:
        return np.zeros(0, dtype=np.float64)
    if rows.shape[1] != vec.shape[0]:
        raise DimensionMismatchError(rows.shape[1], vec.shape[0], context="query")

    row_norms = np.linalg.norm(rows, axis=1)
    query_norm = np.linalg.norm(vec)
    denominators = row_norms * query_norm
    dots = rows @ vec

    scores = np.zeros(len(rows), dtype=np.float64)
    nonzero = denominators > 0
    scores[nonzero] = dots[nonzero] / denominators[nonzero]
    return scores
