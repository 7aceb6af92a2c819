"""
Generator Module - Compose structured answers from intent and hits.
===================================================================

One strategy per intent:
- specific_course: the requested course, if retrieval surfaced it
- list_courses: a category subset or the whole corpus
- comparison: every named course, looked up directly in the corpus
- prerequisites: courses whose prerequisites document was retrieved
- topic_search: retrieved courses whose matched text mentions the topic
- general_info: credit distribution over the whole corpus
- semantic_search: best few retrieved courses

The generator only decides WHAT to say. Markup lives in
catalog_assistant.rag.formatting.
"""

from collections import Counter
from typing import Optional

from catalog_assistant.ingestion.corpus import CorpusStore
from catalog_assistant.rag import templates
from catalog_assistant.rag.intent import (
    ComparisonIntent,
    GeneralInfoIntent,
    Intent,
    ListCoursesIntent,
    PrerequisitesIntent,
    SemanticSearchIntent,
    SpecificCourseIntent,
    TopicSearchIntent,
)
from catalog_assistant.shared.config import get_settings
from catalog_assistant.shared.logging import get_logger
from catalog_assistant.shared.schemas import (
    AssistantResponse,
    CourseRecord,
    CourseView,
    CourseViewStyle,
    CreditBucket,
    DocumentKind,
    ResponseStatus,
    RetrievalHit,
)
from catalog_assistant.shared.utils import normalize_course_code, unique, unique_by

logger = get_logger(__name__)


def _views(courses: list[CourseRecord], style: CourseViewStyle) -> list[CourseView]:
    return [CourseView(style=style, course=course) for course in courses]


class ResponseGenerator:
    """
    Builds an AssistantResponse for a classified query.

    Example:
        >>> generator = ResponseGenerator(corpus)
        >>> response = generator.respond(classify_intent(query), hits, query=query)
        >>> response.course_codes
        ['ACFI 801']
    """

    def __init__(self, corpus: CorpusStore, semantic_max_results: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            corpus: Store used for list, comparison and summary answers
            semantic_max_results: Hits considered by the fallback answer (config if None)
        """
        self.corpus = corpus
        self.semantic_max_results = (
            semantic_max_results or get_settings().retrieval.semantic_max_results
        )

    def respond(
        self,
        intent: Intent,
        hits: list[RetrievalHit],
        query: str = "",
    ) -> AssistantResponse:
        """
        Compose the answer for an intent.

        Args:
            intent: Classified intent
            hits: Retrieved hits, best first
            query: Original query, echoed into the response

        Returns:
            AssistantResponse whose sources are the retrieved course codes

        Raises:
            TypeError: If the intent is not one of the known variants
        """
        if isinstance(intent, SpecificCourseIntent):
            response = self._specific_course(intent, hits)
        elif isinstance(intent, ListCoursesIntent):
            response = self._list_courses(intent)
        elif isinstance(intent, ComparisonIntent):
            response = self._comparison(intent)
        elif isinstance(intent, PrerequisitesIntent):
            response = self._prerequisites(hits)
        elif isinstance(intent, TopicSearchIntent):
            response = self._topic_search(intent, hits)
        elif isinstance(intent, GeneralInfoIntent):
            response = self._general_info()
        elif isinstance(intent, SemanticSearchIntent):
            response = self._semantic_search(hits)
        else:
            raise TypeError(f"Unsupported intent: {intent!r}")

        response.query = query
        response.intent = intent.type.value
        response.sources = unique(hit.source_code for hit in hits)

        logger.debug(
            f"Generated {intent.type.value} answer: status={response.status.value}, "
            f"courses={response.course_codes}"
        )
        return response

    # ─────────────────────────────────────────────────────────────────────────
    # Strategies
    # ─────────────────────────────────────────────────────────────────────────

    def _specific_course(
        self, intent: SpecificCourseIntent, hits: list[RetrievalHit]
    ) -> AssistantResponse:
        hit = next((h for h in hits if h.source_code == intent.code), None)
        if hit is None:
            return AssistantResponse(
                status=ResponseStatus.NOT_FOUND,
                message=templates.COURSE_NOT_FOUND.format(code=intent.code),
            )

        return AssistantResponse(courses=_views([hit.course], CourseViewStyle.DETAIL))

    def _list_courses(self, intent: ListCoursesIntent) -> AssistantResponse:
        if intent.category == "all":
            courses = self.corpus.all()
        else:
            courses = self.corpus.by_category(intent.category)

        title = templates.LIST_TITLES.get(intent.category, templates.LIST_TITLES["all"])
        if not courses:
            return AssistantResponse(
                status=ResponseStatus.NO_RESULTS,
                title=title,
                message=templates.NO_CATEGORY_COURSES,
            )

        return AssistantResponse(title=title, courses=_views(courses, CourseViewStyle.CARD))

    def _comparison(self, intent: ComparisonIntent) -> AssistantResponse:
        if len(intent.codes) < 2:
            return AssistantResponse(
                status=ResponseStatus.NEEDS_INPUT,
                message=templates.COMPARISON_NEEDS_INPUT,
            )

        codes = [normalize_course_code(code) for code in intent.codes]
        courses = [course for course in map(self.corpus.get, codes) if course is not None]

        if not courses:
            return AssistantResponse(
                status=ResponseStatus.NOT_FOUND,
                title=templates.COMPARISON_TITLE,
                message=templates.COMPARISON_NOT_FOUND.format(codes=", ".join(unique(codes))),
            )

        return AssistantResponse(
            title=templates.COMPARISON_TITLE,
            courses=_views(courses, CourseViewStyle.DETAIL),
        )

    def _prerequisites(self, hits: list[RetrievalHit]) -> AssistantResponse:
        prerequisite_hits = [h for h in hits if h.document_kind == DocumentKind.PREREQUISITES]
        courses = [h.course for h in unique_by(prerequisite_hits, key=lambda h: h.source_code)]

        if not courses:
            return AssistantResponse(
                status=ResponseStatus.NO_RESULTS,
                message=templates.NO_PREREQUISITES,
            )

        return AssistantResponse(
            title=templates.PREREQUISITES_TITLE,
            courses=_views(courses, CourseViewStyle.PREREQUISITES),
        )

    def _topic_search(self, intent: TopicSearchIntent, hits: list[RetrievalHit]) -> AssistantResponse:
        topic = intent.topic.lower()
        matching = [h for h in hits if topic in h.text.lower()]
        courses = [h.course for h in unique_by(matching, key=lambda h: h.source_code)]

        if not courses:
            return AssistantResponse(
                status=ResponseStatus.NO_RESULTS,
                message=templates.NO_TOPIC_COURSES.format(topic=intent.topic),
            )

        return AssistantResponse(
            title=templates.TOPIC_TITLE.format(topic=intent.topic),
            courses=_views(courses, CourseViewStyle.CARD),
        )

    def _general_info(self) -> AssistantResponse:
        courses = self.corpus.all()
        if not courses:
            return AssistantResponse(
                status=ResponseStatus.NO_RESULTS,
                title=templates.GENERAL_INFO_TITLE,
                message=templates.NO_COURSE_DATA,
            )

        # Counter keeps first-seen key order
        histogram = Counter(str(course.credits) for course in courses)

        return AssistantResponse(
            title=templates.GENERAL_INFO_TITLE,
            message=templates.GENERAL_INFO_NOTE,
            credit_distribution=[
                CreditBucket(credits=credits, count=count) for credits, count in histogram.items()
            ],
        )

    def _semantic_search(self, hits: list[RetrievalHit]) -> AssistantResponse:
        if not hits:
            return AssistantResponse(
                status=ResponseStatus.HELP,
                message=templates.DEFAULT_INTRO,
                suggestions=list(templates.DEFAULT_SUGGESTIONS),
            )

        top_hits = unique_by(hits[: self.semantic_max_results], key=lambda h: h.source_code)
        courses = [self.corpus.get(h.source_code) or h.course for h in top_hits]

        if len(courses) == 1:
            return AssistantResponse(courses=_views(courses, CourseViewStyle.DETAIL))

        return AssistantResponse(
            title=templates.RELATED_TITLE,
            courses=_views(courses[: self.semantic_max_results], CourseViewStyle.CARD),
        )
