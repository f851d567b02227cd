"""
Cosine similarity ranking.

Linear-scan scoring of stored knowledge items against a query vector,
followed by top-k selection and a relevance threshold.

Dependencies: numpy, knowledge_chat.models.knowledge
System role: Retrieval ranking
"""

import logging
from collections.abc import Sequence

import numpy as np

from knowledge_chat.models.knowledge import KnowledgeItem, SimilarityResult

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5
# Implemented relevance cut-off; scores must be strictly greater.
DEFAULT_THRESHOLD = 0.3
SCORE_PRECISION = 4


def cosine_similarity(a: Sequence[float] | None, b: Sequence[float] | None) -> float:
    """
    Cosine similarity of two vectors.

    Empty, mismatched-length, non-numeric or zero-norm inputs mean
    "no relation" and score 0 instead of raising.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: Similarity in [-1, 1]
    """
    if a is None or b is None or len(a) == 0 or len(a) != len(b):
        return 0.0
    try:
        vec_a = np.asarray(a, dtype=float)
        vec_b = np.asarray(b, dtype=float)
    except (TypeError, ValueError):
        return 0.0
    if vec_a.ndim != 1 or vec_b.ndim != 1:
        return 0.0

    norm_a = float(np.linalg.norm(vec_a))
    norm_b = float(np.linalg.norm(vec_b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = float(np.dot(vec_a, vec_b)) / (norm_a * norm_b)
    if not np.isfinite(score):
        return 0.0
    return max(-1.0, min(1.0, score))


def rank(
    query: Sequence[float],
    candidates: Sequence[KnowledgeItem],
    top_k: int = DEFAULT_TOP_K,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[SimilarityResult]:
    """
    Rank candidates by similarity to the query.

    Scores every candidate, sorts descending (stable, so ties keep
    candidate order), keeps the first ``top_k`` and then drops anything
    not strictly above ``threshold``.

    Args:
        query: Query embedding
        candidates: Knowledge items to score
        top_k: Number of candidates considered after sorting
        threshold: Minimum (exclusive) similarity

    Returns:
        list[SimilarityResult]: Results in descending score order
    """
    scored = [(cosine_similarity(query, item.embedding), item) for item in candidates]
    scored.sort(key=lambda pair: pair[0], reverse=True)

    results = [
        SimilarityResult(
            id=item.id,
            content=item.content,
            metadata=item.metadata.model_dump(),
            score=round(score, SCORE_PRECISION),
        )
        for score, item in scored[:top_k]
        if score > threshold
    ]
    logger.debug(
        f"{__name__}:rank - {len(results)} relevant of {len(candidates)} candidates"
    )
    return results
