"""Sparse TF-IDF vectors and cosine similarity."""

import math
from typing import AbstractSet, Dict, Mapping, Optional


def tfidf_vector(
    document, vocabulary: AbstractSet[str], idf: Mapping[str, float]
) -> Dict[str, float]:
    """Weight a document's term frequencies by IDF.

    Only vocabulary tokens present in the document with a non-zero weight
    are stored; absent entries are implicitly zero.

    Args:
        document: Document with a ``term_frequencies`` mapping
        vocabulary: Corpus vocabulary
        idf: Token to IDF weight

    Returns:
        Sparse mapping of token to tf * idf
    """
    vector = {}
    for token, tf in document.term_frequencies.items():
        if token not in vocabulary:
            continue
        weight = tf * idf.get(token, 0.0)
        if weight != 0.0:
            vector[token] = weight
    return vector


def cosine_similarity(
    vector_a: Mapping[str, float],
    vector_b: Mapping[str, float],
    vocabulary: Optional[AbstractSet[str]] = None,
) -> float:
    """Cosine similarity of two sparse vectors.

    Sums run over ``vocabulary`` when given, otherwise over the keys of both
    vectors. Returns 0.0 when either vector has zero norm.

    Args:
        vector_a: First vector
        vector_b: Second vector
        vocabulary: Optional token universe to restrict the sums to

    Returns:
        Similarity in [0, 1] for vectors built from one IDF table
    """
    def keep(token):
        return vocabulary is None or token in vocabulary

    norm_a = math.sqrt(sum(w * w for t, w in vector_a.items() if keep(t)))
    norm_b = math.sqrt(sum(w * w for t, w in vector_b.items() if keep(t)))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    # Iterate the smaller vector for the dot product
    if len(vector_a) > len(vector_b):
        vector_a, vector_b = vector_b, vector_a
    dot = sum(w * vector_b.get(t, 0.0) for t, w in vector_a.items() if keep(t))

    sim = dot / (norm_a * norm_b)
    # Guard against rounding pushing identical vectors past 1.0
    return max(0.0, min(1.0, sim))
