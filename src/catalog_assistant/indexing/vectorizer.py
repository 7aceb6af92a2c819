"""
Vectorizer Module - Bag-of-words term vectors and cosine similarity.
====================================================================

Documents and queries go through the same `vectorize` function, so both
live in one vector space:

    "Tax Planning & Research!" -> {"tax": 1, "planning": 1, "research": 1}

Tokens of two characters or fewer ("of", "a", "b-") are dropped.
"""

import math
import re
from typing import Mapping

from catalog_assistant.shared.schemas import TermVector

MIN_TOKEN_LENGTH = 3

_NON_WORD = re.compile(r"[^\w\s]")


def tokenize(text: str) -> list[str]:
    """
    Normalize text into index tokens.

    Lower-cases, strips everything that is neither a word character nor
    whitespace, splits on whitespace runs and drops short tokens.
    """
    cleaned = _NON_WORD.sub("", text.lower())
    return [token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH]


def vectorize(text: str) -> TermVector:
    """
    Turn text into a term-frequency vector.

    Example:
        >>> vectorize("Derivatives and derivative pricing")
        Counter({'derivatives': 1, 'and': 1, 'derivative': 1, 'pricing': 1})
    """
    return TermVector(tokenize(text))


def vector_norm(vector: Mapping[str, int]) -> float:
    """Euclidean length of a term vector."""
    return math.sqrt(sum(count * count for count in vector.values()))


def cosine_similarity(
    a: Mapping[str, int],
    b: Mapping[str, int],
    norm_a: float | None = None,
    norm_b: float | None = None,
) -> float:
    """
    Cosine similarity of two term vectors.

    Terms missing from one side count as 0, so only the shared terms add
    to the dot product. Precomputed norms may be passed in.

    Returns:
        Similarity in [0, 1]; 0.0 when either vector is empty
    """
    if norm_a is None:
        norm_a = vector_norm(a)
    if norm_b is None:
        norm_b = vector_norm(b)

    if norm_a == 0 or norm_b == 0:
        return 0.0

    # Iterate the smaller side
    if len(a) > len(b):
        a, b = b, a
    dot = sum(count * b.get(term, 0) for term, count in a.items())

    return max(0.0, min(1.0, dot / (norm_a * norm_b)))
