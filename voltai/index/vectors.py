"""
Vector encoding for documents and queries.

Documents use sublinear term frequency, 1 + log2(count), over the shared
vocabulary. Queries use raw counts. Both are L2-normalized, so the dot
product of a query vector and a document vector is their cosine
similarity.

No inverse document frequency is applied; see DESIGN.md.
"""

from collections import Counter

import numpy as np

from voltai.config import NORM_EPSILON
from voltai.index.vocabulary import Vocabulary


def l2_normalize(vector: np.ndarray) -> np.ndarray:
    """
    Scale a vector to unit Euclidean norm.

    The norm is floored at NORM_EPSILON, so an all-zero vector comes back
    all-zero instead of NaN.
    """
    norm = max(float(np.linalg.norm(vector)), NORM_EPSILON)
    return vector / norm


def _term_counts(tokens: list[str], vocabulary: Vocabulary) -> dict[int, int]:
    """Raw counts keyed by dimension, restricted to in-vocabulary terms."""
    positions = vocabulary.positions
    counts: Counter = Counter()
    for token in tokens:
        position = positions.get(token)
        if position is not None:
            counts[position] += 1
    return counts


def encode_document(tokens: list[str], vocabulary: Vocabulary) -> np.ndarray:
    """
    Encode a document's tokens as a normalized sublinear-TF vector.

    Args:
        tokens: The document's token sequence
        vocabulary: Finalized corpus vocabulary

    Returns:
        float64 array of length len(vocabulary)
    """
    vector = np.zeros(len(vocabulary), dtype=np.float64)
    for position, count in _term_counts(tokens, vocabulary).items():
        vector[position] = 1.0 + np.log2(count)
    return l2_normalize(vector)


def encode_query(tokens: list[str], vocabulary: Vocabulary) -> np.ndarray:
    """
    Encode query tokens as a normalized raw-count vector.

    Out-of-vocabulary terms are ignored; a query with no known terms yields
    an all-zero vector (every document then scores 0.0).
    """
    vector = np.zeros(len(vocabulary), dtype=np.float64)
    for position, count in _term_counts(tokens, vocabulary).items():
        vector[position] = float(count)
    return l2_normalize(vector)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity of two already-normalized vectors."""
    return float(np.dot(a, b))
