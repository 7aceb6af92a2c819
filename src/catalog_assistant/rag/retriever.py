"""
Retriever Module - Query-time document retrieval.
=================================================

Runs a query against the similarity index and turns the matches into
RetrievalHits carrying their course record:
- Over-fetches (top 8 by default) for the answer pipeline
- Drops weak matches (similarity must exceed 0.1 by default)
- Resolves each match's course through the corpus store
"""

from typing import Any, Optional

from catalog_assistant.indexing.vector_store import DocumentMatch, SimilarityIndex
from catalog_assistant.ingestion.corpus import CorpusStore
from catalog_assistant.shared.config import get_settings
from catalog_assistant.shared.logging import get_logger
from catalog_assistant.shared.schemas import RetrievalHit
from catalog_assistant.shared.utils import unique

logger = get_logger(__name__)


class Retriever:
    """
    Retrieves course documents relevant to a query.

    Example:
        >>> retriever = Retriever(corpus, index)
        >>> for hit in retriever.retrieve("derivative pricing"):
        ...     print(f"{hit.source_code}: {hit.similarity:.3f}")
    """

    def __init__(
        self,
        corpus: CorpusStore,
        index: SimilarityIndex,
        top_k: Optional[int] = None,
        similarity_threshold: Optional[float] = None,
    ):
        """
        Initialize the retriever.

        Args:
            corpus: Store used to resolve matched documents to courses
            index: Similarity index to search
            top_k: Matches fetched per query (config if None)
            similarity_threshold: Hits must score strictly above this (config if None)
        """
        settings = get_settings()

        self.corpus = corpus
        self.index = index
        self._top_k = top_k if top_k is not None else settings.retrieval.pipeline_top_k
        self._similarity_threshold = (
            similarity_threshold
            if similarity_threshold is not None
            else settings.get_effective_threshold()
        )

        logger.debug(
            f"Retriever initialized: top_k={self._top_k}, "
            f"threshold={self._similarity_threshold}"
        )

    @property
    def top_k(self) -> int:
        return self._top_k

    @property
    def similarity_threshold(self) -> float:
        return self._similarity_threshold

    def retrieve(
        self,
        query: str,
        top_k: Optional[int] = None,
        similarity_threshold: Optional[float] = None,
    ) -> list[RetrievalHit]:
        """
        Retrieve hits for a query.

        Args:
            query: Query text
            top_k: Matches to fetch (uses default if None)
            similarity_threshold: Minimum score, exclusive (uses default if None)

        Returns:
            Hits sorted by descending similarity
        """
        if not query or not query.strip():
            logger.warning("Empty query provided")
            return []

        k = top_k if top_k is not None else self._top_k
        threshold = (
            similarity_threshold
            if similarity_threshold is not None
            else self._similarity_threshold
        )

        hits = []
        for match in self.index.search(query, top_k=k):
            if match.similarity <= threshold:
                continue
            hit = self._to_hit(match)
            if hit is not None:
                hits.append(hit)

        logger.info(
            f"Retrieved {len(hits)} documents for query: '{query[:50]}' "
            f"(k={k}, threshold={threshold})"
        )
        return hits

    def _to_hit(self, match: DocumentMatch) -> Optional[RetrievalHit]:
        document = match.document
        course = self.corpus.get(document.source_code)
        if course is None:
            # Index built from a different corpus than the one attached
            logger.warning(f"Indexed document {document.document_id} has no course in the corpus")
            return None

        return RetrievalHit(
            source_code=document.source_code,
            similarity=match.similarity,
            document_kind=document.kind,
            text=document.text,
            course=course,
        )

    def get_retrieval_stats(self, hits: list[RetrievalHit]) -> dict[str, Any]:
        """
        Get statistics about retrieval results.

        Args:
            hits: List of retrieval hits

        Returns:
            Statistics dictionary
        """
        if not hits:
            return {
                "count": 0,
                "max_score": 0.0,
                "min_score": 0.0,
                "avg_score": 0.0,
                "courses": [],
            }

        scores = [h.similarity for h in hits]

        return {
            "count": len(hits),
            "max_score": max(scores),
            "min_score": min(scores),
            "avg_score": sum(scores) / len(scores),
            "courses": unique(h.source_code for h in hits),
        }
