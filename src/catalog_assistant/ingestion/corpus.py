"""
Corpus Module - In-memory store of course records and their documents.
======================================================================

The store owns the course records for a session. Every other component
looks courses up by code instead of keeping its own copy.

Loading never raises: an empty or malformed record list leaves the store
empty and returns False, so queries degrade to "no results" answers.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from catalog_assistant.ingestion.chunker import Chunker
from catalog_assistant.shared.config import get_settings
from catalog_assistant.shared.logging import get_logger
from catalog_assistant.shared.schemas import CourseDocument, CourseRecord
from catalog_assistant.shared.utils import normalize_course_code

logger = get_logger(__name__)

RecordInput = Union[CourseRecord, Mapping[str, Any]]


class CorpusStore:
    """
    Holds course records keyed by code plus the documents chunked from them.

    Example:
        >>> store = CorpusStore()
        >>> store.load([{"code": "ACFI 801", "title": "Corporate Finance"}])
        True
        >>> store.get("acfi 801").title
        'Corporate Finance'
    """

    def __init__(
        self,
        chunker: Optional[Chunker] = None,
        category_keywords: Optional[Mapping[str, list[str]]] = None,
        catalog_source: Optional[str] = None,
    ):
        """
        Initialize an empty store.

        Args:
            chunker: Chunker used on load (default Chunker if None)
            category_keywords: Tag -> keywords for by_category (config if None)
            catalog_source: Label of where the records came from (config if None)
        """
        settings = get_settings()

        self._chunker = chunker or Chunker()
        if category_keywords is None:
            category_keywords = settings.categories
        self._category_keywords = {
            tag.lower(): [k.lower() for k in keywords]
            for tag, keywords in category_keywords.items()
        }
        self.catalog_source = catalog_source or settings.corpus.catalog_source

        self._courses: dict[str, CourseRecord] = {}
        self._documents: list[CourseDocument] = []
        self.last_updated: Optional[datetime] = None

    # ─────────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────────

    def load(self, records: Optional[Iterable[RecordInput]]) -> bool:
        """
        Replace the store's contents with the given records.

        Args:
            records: Course records as CourseRecord instances or dicts

        Returns:
            True on success. False if the sequence is empty or any record is
            malformed; the store is then left empty.
        """
        self.clear()

        items = list(records) if records is not None else []
        if not items:
            logger.error("Corpus load failed: no course records supplied")
            return False

        courses: dict[str, CourseRecord] = {}
        for position, item in enumerate(items):
            try:
                course = item if isinstance(item, CourseRecord) else CourseRecord.model_validate(item)
            except ValidationError as e:
                logger.error(
                    f"Corpus load failed: record {position} is malformed "
                    f"({e.error_count()} validation errors)"
                )
                return False

            if course.code in courses:
                logger.warning(f"Duplicate course code {course.code}; keeping the later record")
            courses[course.code] = course

        self._courses = courses
        self._documents = list(self._chunker.chunk_many(self._courses.values()))
        self.last_updated = datetime.now(timezone.utc)

        logger.info(
            f"Corpus loaded: {len(self._courses)} courses, {len(self._documents)} documents"
        )
        return True

    def clear(self) -> None:
        """Drop every record and document."""
        self._courses = {}
        self._documents = []
        self.last_updated = None

    # ─────────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────────

    def get(self, code: str) -> Optional[CourseRecord]:
        """
        Look a course up by code.

        Args:
            code: Course code in any case/spacing ("acfi801", "ACFI 801")

        Returns:
            The CourseRecord, or None if no course has that code
        """
        if not code:
            return None
        return self._courses.get(normalize_course_code(code))

    def all(self) -> list[CourseRecord]:
        """All courses in load order."""
        return list(self._courses.values())

    def by_category(self, tag: str) -> list[CourseRecord]:
        """
        Courses whose title or description mentions any keyword of a category.

        Args:
            tag: Category tag ("finance", "accounting")

        Returns:
            Matching courses in load order; [] for an unknown tag
        """
        keywords = self._category_keywords.get(tag.lower(), [])
        if not keywords:
            return []

        matches = []
        for course in self._courses.values():
            search_text = f"{course.title} {course.description}".lower()
            if any(keyword in search_text for keyword in keywords):
                matches.append(course)
        return matches

    @property
    def categories(self) -> list[str]:
        """Configured category tags."""
        return list(self._category_keywords)

    def documents(self) -> list[CourseDocument]:
        """All documents, in corpus order then emission order."""
        return list(self._documents)

    def data_status(self) -> dict[str, Any]:
        """Freshness and size of the loaded data."""
        return {
            "last_updated": self.last_updated,
            "total_courses": len(self._courses),
            "total_documents": len(self._documents),
            "catalog_source": self.catalog_source,
        }

    @property
    def is_empty(self) -> bool:
        return not self._courses

    def __len__(self) -> int:
        return len(self._courses)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and self.get(code) is not None
