"""
Chunker Module - Split course records into short retrievable documents.
=======================================================================

Each course becomes between two and four sentences, one per aspect:
- description (always)
- prerequisites (only when the course lists some)
- logistics: credits and grade mode (always)
- rules: repeat / mutual exclusion / equivalence (only when any is set)

Chunking is a pure function of the record, so the same corpus always
produces the same documents in the same order.
"""

from typing import Iterable, Iterator

from catalog_assistant.shared.logging import get_logger
from catalog_assistant.shared.schemas import CourseDocument, CourseRecord, DocumentKind

logger = get_logger(__name__)


class Chunker:
    """
    Turns a CourseRecord into CourseDocuments.

    Example:
        >>> chunker = Chunker()
        >>> docs = chunker.chunk(course)
        >>> [d.kind.value for d in docs]
        ['description', 'logistics']
    """

    def chunk(self, course: CourseRecord) -> list[CourseDocument]:
        """
        Chunk a single course.

        Args:
            course: CourseRecord to chunk

        Returns:
            Documents in emission order: description, prerequisites?,
            logistics, rules?
        """
        documents = [self._description(course)]

        if course.prerequisites:
            documents.append(self._prerequisites(course))

        documents.append(self._logistics(course))

        if course.has_rules:
            documents.append(self._rules(course))

        logger.debug(f"Created {len(documents)} documents for {course.code}")
        return documents

    def chunk_many(self, courses: Iterable[CourseRecord]) -> Iterator[CourseDocument]:
        """
        Chunk several courses, in corpus order.

        Yields:
            CourseDocuments for all courses
        """
        total_courses = 0
        total_documents = 0

        for course in courses:
            documents = self.chunk(course)
            total_courses += 1
            total_documents += len(documents)
            yield from documents

        logger.info(f"Created {total_documents} documents from {total_courses} courses")

    def _description(self, course: CourseRecord) -> CourseDocument:
        return CourseDocument(
            kind=DocumentKind.DESCRIPTION,
            text=f"{course.code} {course.title}: {course.description}",
            source_code=course.code,
        )

    def _prerequisites(self, course: CourseRecord) -> CourseDocument:
        return CourseDocument(
            kind=DocumentKind.PREREQUISITES,
            text=f"Prerequisites for {course.code}: {course.prerequisites}",
            source_code=course.code,
        )

    def _logistics(self, course: CourseRecord) -> CourseDocument:
        return CourseDocument(
            kind=DocumentKind.LOGISTICS,
            text=f"{course.code} is worth {course.credits} credits and uses {course.grade_mode}",
            source_code=course.code,
        )

    def _rules(self, course: CourseRecord) -> CourseDocument:
        parts = []
        if course.repeat_rule:
            parts.append(course.repeat_rule)
        if course.mutual_exclusion:
            parts.append(course.mutual_exclusion)
        if course.equivalent:
            parts.append(f"Equivalent to {course.equivalent}")

        return CourseDocument(
            kind=DocumentKind.RULES,
            text=f"Additional rules for {course.code}: " + " ".join(parts),
            source_code=course.code,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Convenience Functions
# ─────────────────────────────────────────────────────────────────────────────


def chunk_course(course: CourseRecord) -> list[CourseDocument]:
    """Chunk a single course with a default Chunker."""
    return Chunker().chunk(course)


def chunk_courses(courses: Iterable[CourseRecord]) -> list[CourseDocument]:
    """Chunk several courses with a default Chunker."""
    return list(Chunker().chunk_many(courses))
