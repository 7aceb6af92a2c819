"""
Vector Store Module - Similarity index over course documents.
=============================================================

Provides:
- SimilarityIndex: the interface retrieval code depends on
- TermVectorIndex: exact cosine search over bag-of-words vectors

An exhaustive scan is O(documents x terms) per query, which is fine for
a catalog of tens to a few hundred courses. A different backend (e.g.
approximate nearest neighbours) only has to implement SimilarityIndex.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

from catalog_assistant.indexing.vectorizer import cosine_similarity, vector_norm, vectorize
from catalog_assistant.shared.config import get_settings
from catalog_assistant.shared.logging import get_logger
from catalog_assistant.shared.schemas import CourseDocument, DocumentKind, TermVector

logger = get_logger(__name__)


@dataclass(frozen=True)
class DocumentMatch:
    """A document scored against a query."""

    document: CourseDocument
    similarity: float


@dataclass
class _IndexedDocument:
    document: CourseDocument
    vector: TermVector
    norm: float


# ─────────────────────────────────────────────────────────────────────────────
# Interface
# ─────────────────────────────────────────────────────────────────────────────


class SimilarityIndex(ABC):
    """Interface for document similarity search."""

    @abstractmethod
    def index(self, documents: Iterable[CourseDocument]) -> int:
        """Replace the indexed documents. Returns the number indexed."""

    @abstractmethod
    def search(self, query: str, top_k: Optional[int] = None) -> list[DocumentMatch]:
        """Return up to top_k documents with similarity > 0, best first."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every document."""

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of indexed documents."""


# ─────────────────────────────────────────────────────────────────────────────
# Term Vector Index
# ─────────────────────────────────────────────────────────────────────────────


class TermVectorIndex(SimilarityIndex):
    """
    Exact cosine-similarity search over term-frequency vectors.

    Example:
        >>> index = TermVectorIndex()
        >>> index.index(corpus.documents())
        >>> for match in index.search("derivative pricing", top_k=3):
        ...     print(match.document.source_code, f"{match.similarity:.3f}")
    """

    def __init__(self, default_top_k: Optional[int] = None):
        """
        Initialize an empty index.

        Args:
            default_top_k: top_k used when search() gets none (config if None)
        """
        self.default_top_k = default_top_k or get_settings().get_effective_top_k()
        # Insertion order doubles as the tie-break order for equal scores
        self._entries: dict[tuple[str, DocumentKind], _IndexedDocument] = {}

    def index(self, documents: Iterable[CourseDocument]) -> int:
        self._entries = {}
        for document in documents:
            vector = vectorize(document.text)
            self._entries[document.key] = _IndexedDocument(
                document=document,
                vector=vector,
                norm=vector_norm(vector),
            )

        logger.info(f"Indexed {len(self._entries)} documents")
        return len(self._entries)

    def search(self, query: str, top_k: Optional[int] = None) -> list[DocumentMatch]:
        k = self.default_top_k if top_k is None else top_k
        if k <= 0:
            return []

        query_vector = vectorize(query)
        query_norm = vector_norm(query_vector)
        if query_norm == 0:
            logger.debug(f"Query has no indexable terms: '{query[:50]}'")
            return []

        matches = []
        for entry in self._entries.values():
            similarity = cosine_similarity(query_vector, entry.vector, query_norm, entry.norm)
            if similarity > 0:
                matches.append(DocumentMatch(document=entry.document, similarity=similarity))

        # sorted() is stable, so equal scores keep corpus order
        matches = sorted(matches, key=lambda m: m.similarity, reverse=True)

        logger.debug(
            f"Search '{query[:50]}': {len(matches)} matching documents, returning {min(k, len(matches))}"
        )
        return matches[:k]

    def clear(self) -> None:
        self._entries = {}

    @property
    def count(self) -> int:
        return len(self._entries)

    def get_vector(self, source_code: str, kind: DocumentKind) -> Optional[TermVector]:
        """Stored vector for one document, if indexed."""
        entry = self._entries.get((source_code, kind))
        return entry.vector if entry else None


# ─────────────────────────────────────────────────────────────────────────────
# Factory
# ─────────────────────────────────────────────────────────────────────────────


def create_index(backend: Optional[str] = None) -> SimilarityIndex:
    """
    Create the configured similarity index.

    Args:
        backend: Index backend name (default from config)

    Raises:
        ValueError: If the backend is unknown
    """
    settings = get_settings()
    backend = (backend or settings.retrieval.index_backend).lower()

    if backend == "term_vector":
        return TermVectorIndex()

    raise ValueError(f"Unknown index backend: {backend}. Available: term_vector")
