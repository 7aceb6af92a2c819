"""
Assistant Module - End-to-end query pipeline.
=============================================

CourseAssistant is what front ends talk to. For each query it:
1. Loads the catalog on first use (retried, never fatal)
2. Classifies the intent
3. Retrieves matching documents
4. Composes the structured answer
5. Records both turns in the transcript

Failures while loading leave an empty corpus, so answers degrade to
"not found" / "no results" messages. Unexpected errors while answering
become a generic apology; neither ever reaches the caller as an exception.
"""

from typing import Any, Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_fixed

from catalog_assistant.indexing.vector_store import SimilarityIndex, create_index
from catalog_assistant.ingestion.corpus import CorpusStore
from catalog_assistant.ingestion.loader import CatalogLoader, catalog_loader
from catalog_assistant.rag import templates
from catalog_assistant.rag.formatting import render
from catalog_assistant.rag.generator import ResponseGenerator
from catalog_assistant.rag.intent import IntentClassifier
from catalog_assistant.rag.retriever import Retriever
from catalog_assistant.rag.session import Transcript
from catalog_assistant.shared.config import OUTPUT_FORMATS, get_settings
from catalog_assistant.shared.logging import get_logger
from catalog_assistant.shared.schemas import (
    AssistantResponse,
    ConversationTurn,
    ResponseStatus,
    RetrievalHit,
)

logger = get_logger(__name__)


class CorpusLoadError(Exception):
    """The loader supplied no usable course records."""


class CourseAssistant:
    """
    Course catalog question-answering assistant.

    Example:
        >>> assistant = CourseAssistant()
        >>> print(assistant.process_query("Tell me about ACFI 801"))
        >>> assistant.history[-1].sources
        ['ACFI 801', ...]
    """

    def __init__(
        self,
        loader: Optional[CatalogLoader] = None,
        corpus: Optional[CorpusStore] = None,
        index: Optional[SimilarityIndex] = None,
        output_format: Optional[str] = None,
        max_attempts: Optional[int] = None,
        retry_wait: Optional[float] = None,
    ):
        """
        Initialize the assistant. Nothing is loaded until first use.

        Args:
            loader: Zero-argument callable returning course records
                (configured catalog file if None)
            corpus: CorpusStore to fill (new store if None)
            index: Similarity index to build (configured backend if None)
            output_format: "html", "markdown" or "json" for process_query (config if None)
            max_attempts: Loader attempts per initialization (config if None)
            retry_wait: Seconds between loader attempts (config if None)

        Raises:
            ValueError: If the output format is unknown
        """
        settings = get_settings()

        self.loader = loader or catalog_loader(settings.get_effective_catalog_file())
        self.corpus = corpus if corpus is not None else CorpusStore()
        self.index = index if index is not None else create_index()

        self.output_format = (output_format or settings.get_effective_output_format()).lower()
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format: {self.output_format}. "
                f"Available: {', '.join(OUTPUT_FORMATS)}"
            )

        self.max_attempts = max_attempts or settings.corpus.init_max_attempts
        self.retry_wait = retry_wait if retry_wait is not None else settings.corpus.init_retry_wait

        self.classifier = IntentClassifier()
        self.retriever = Retriever(self.corpus, self.index)
        self.generator = ResponseGenerator(self.corpus)
        self.transcript = Transcript()
        self.initialized = False

    # ─────────────────────────────────────────────────────────────────────────
    # Initialization
    # ─────────────────────────────────────────────────────────────────────────

    def initialize(self) -> bool:
        """
        Load the catalog and build the index.

        Returns:
            True on success; False if every attempt failed (corpus left empty)
        """
        logger.info("Initializing course assistant...")

        @retry(
            retry=retry_if_exception_type((OSError, ValueError, CorpusLoadError)),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.retry_wait),
            before_sleep=lambda retry_state: logger.warning(
                f"Catalog load attempt {retry_state.attempt_number}/{self.max_attempts} "
                f"failed: {retry_state.outcome.exception()}"
            ),
            reraise=True,
        )
        def _load_with_retry() -> None:
            records = self.loader()
            if not self.corpus.load(records):
                raise CorpusLoadError("catalog contained no usable course records")

        try:
            _load_with_retry()
        except Exception as e:
            logger.error(f"Failed to initialize course assistant: {e}")
            self.corpus.clear()
            self.index.clear()
            self.initialized = False
            return False

        self.index.index(self.corpus.documents())
        self.initialized = True
        logger.info(
            f"Course assistant initialized: {len(self.corpus)} courses, "
            f"{self.index.count} documents indexed"
        )
        return True

    def _ensure_initialized(self) -> None:
        if not self.initialized:
            self.initialize()

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def ask(self, query: str) -> AssistantResponse:
        """
        Answer a query and record it in the transcript.

        Args:
            query: User question

        Returns:
            Structured answer; status "error" if something unexpected failed
        """
        response, _ = self._answer(query)
        return response

    def process_query(self, query: str) -> str:
        """
        Answer a query, rendered in the configured output format.

        Args:
            query: User question

        Returns:
            Rendered answer text
        """
        _, rendered = self._answer(query)
        return rendered

    def _answer(self, query: str) -> tuple[AssistantResponse, str]:
        self._ensure_initialized()
        self.transcript.add_user(query)

        try:
            intent = self.classifier.classify(query)
            hits = self.retriever.retrieve(query)

            stats = self.retriever.get_retrieval_stats(hits)
            logger.debug(
                f"Retrieval stats: count={stats['count']}, "
                f"max={stats['max_score']:.3f}, courses={stats['courses']}"
            )

            response = self.generator.respond(intent, hits, query=query)
            rendered = render(response, self.output_format)
        except Exception:
            logger.exception(f"Error processing query: '{query[:50]}'")
            response = self.error_response(query)
            return response, render(response, self.output_format)

        self.transcript.add_assistant(rendered, response.sources)
        return response, rendered

    def search(self, query: str, top_k: Optional[int] = None) -> list[RetrievalHit]:
        """
        Plain similarity search, without intent handling or transcript.

        Args:
            query: Search text
            top_k: Number of hits (config retrieval.top_k if None)

        Returns:
            Hits with similarity > 0, best first
        """
        self._ensure_initialized()
        k = top_k if top_k is not None else get_settings().get_effective_top_k()
        return self.retriever.retrieve(query, top_k=k, similarity_threshold=0.0)

    @staticmethod
    def error_response(query: str = "") -> AssistantResponse:
        """The generic apology returned when answering fails unexpectedly."""
        return AssistantResponse(
            query=query,
            status=ResponseStatus.ERROR,
            message=templates.ERROR_MESSAGE,
            suggestions=list(templates.ERROR_SUGGESTIONS),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Session
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def history(self) -> list[ConversationTurn]:
        return self.transcript.turns

    def clear_history(self) -> None:
        self.transcript.clear()
        logger.debug("Conversation history cleared")

    def get_status(self) -> dict[str, Any]:
        """Initialization state, corpus data status and conversation length."""
        return {
            "initialized": self.initialized,
            "data_status": self.corpus.data_status(),
            "conversation_length": len(self.transcript),
        }

    def greeting(self) -> str:
        return templates.GREETING

    def help_text(self) -> str:
        return templates.HELP_TEXT

    def data_status_message(self) -> str:
        return templates.data_status_message(self.corpus.data_status())
