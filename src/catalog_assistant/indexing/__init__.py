"""
Indexing Module - Term vectors and similarity search.
=====================================================

This module provides the vector space the assistant retrieves from:

- vectorizer: Bag-of-words term vectors and cosine similarity
- vector_store: SimilarityIndex interface and the exact TermVectorIndex

Documents and queries share one vectorizer, so their vectors are comparable.
"""

from catalog_assistant.indexing.vectorizer import (
    cosine_similarity,
    tokenize,
    vector_norm,
    vectorize,
)
from catalog_assistant.indexing.vector_store import (
    DocumentMatch,
    SimilarityIndex,
    TermVectorIndex,
    create_index,
)

__all__ = [
    # Vectorizer
    "vectorize",
    "tokenize",
    "vector_norm",
    "cosine_similarity",
    # Vector store
    "DocumentMatch",
    "SimilarityIndex",
    "TermVectorIndex",
    "create_index",
]
