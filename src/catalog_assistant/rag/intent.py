"""
Intent Module - Rule-based query intent classification.
=======================================================

Decides which answer strategy a query gets. Rules are tried in a fixed
order on the lower-cased query and the first match wins:

1. specific_course - exactly one course code ("ACFI 801", "acfi801")
2. list_courses    - "list" together with "course" or "all"
3. comparison      - two or more course codes, or "compare" / "difference"
4. prerequisites   - "prerequisite" or "prereq"
5. topic_search    - a word from the topic vocabulary
6. general_info    - "credit", "hour", "grade" or "repeat"
7. semantic_search - anything else

A query naming a single code is answered as that course even when it
also says "compare".
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from catalog_assistant.shared.logging import get_logger

logger = get_logger(__name__)


class IntentType(str, Enum):
    """Classified purpose of a query."""

    SPECIFIC_COURSE = "specific_course"
    LIST_COURSES = "list_courses"
    COMPARISON = "comparison"
    PREREQUISITES = "prerequisites"
    TOPIC_SEARCH = "topic_search"
    GENERAL_INFO = "general_info"
    SEMANTIC_SEARCH = "semantic_search"


# ─────────────────────────────────────────────────────────────────────────────
# Intent Variants
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SpecificCourseIntent:
    code: str  # normalized, e.g. "ACFI 801"
    type: IntentType = field(default=IntentType.SPECIFIC_COURSE, init=False)


@dataclass(frozen=True)
class ListCoursesIntent:
    category: str  # "finance", "accounting" or "all"
    type: IntentType = field(default=IntentType.LIST_COURSES, init=False)


@dataclass(frozen=True)
class ComparisonIntent:
    codes: tuple[str, ...] = ()  # raw matched substrings, may be empty
    type: IntentType = field(default=IntentType.COMPARISON, init=False)


@dataclass(frozen=True)
class PrerequisitesIntent:
    type: IntentType = field(default=IntentType.PREREQUISITES, init=False)


@dataclass(frozen=True)
class TopicSearchIntent:
    topic: str
    type: IntentType = field(default=IntentType.TOPIC_SEARCH, init=False)


@dataclass(frozen=True)
class GeneralInfoIntent:
    type: IntentType = field(default=IntentType.GENERAL_INFO, init=False)


@dataclass(frozen=True)
class SemanticSearchIntent:
    type: IntentType = field(default=IntentType.SEMANTIC_SEARCH, init=False)


Intent = Union[
    SpecificCourseIntent,
    ListCoursesIntent,
    ComparisonIntent,
    PrerequisitesIntent,
    TopicSearchIntent,
    GeneralInfoIntent,
    SemanticSearchIntent,
]


# ─────────────────────────────────────────────────────────────────────────────
# Patterns
# ─────────────────────────────────────────────────────────────────────────────

COURSE_CODE_PATTERN = re.compile(r"acfi\s*(\d{3})(?!\d)", re.IGNORECASE)

# Checked in this order; the first one contained in the query wins
TOPICS = [
    "derivative",
    "audit",
    "international",
    "tax",
    "finance",
    "accounting",
    "ethics",
    "fraud",
]

COMPARISON_KEYWORDS = ["compare", "difference"]
PREREQUISITE_KEYWORDS = ["prerequisite", "prereq"]
GENERAL_INFO_KEYWORDS = ["credit", "hour", "grade", "repeat"]


def extract_course_codes(query: str) -> list[str]:
    """
    Find course code literals in a query, as written.

    Example:
        >>> extract_course_codes("compare acfi801 and ACFI 802")
        ['acfi801', 'ACFI 802']
    """
    return [match.group(0) for match in COURSE_CODE_PATTERN.finditer(query)]


class IntentClassifier:
    """
    Classifies queries with ordered keyword and pattern rules.

    Example:
        >>> classifier = IntentClassifier()
        >>> classifier.classify("Tell me about ACFI 801")
        SpecificCourseIntent(code='ACFI 801', type=<IntentType.SPECIFIC_COURSE: 'specific_course'>)
    """

    def __init__(self, topics: list[str] | None = None):
        self.topics = [t.lower() for t in (topics or TOPICS)]

    def classify(self, query: str) -> Intent:
        """
        Classify a query.

        Args:
            query: Raw user query

        Returns:
            The intent of the first matching rule
        """
        text = (query or "").lower()
        matches = list(COURSE_CODE_PATTERN.finditer(text))

        intent = self._classify(text, matches)
        logger.debug(f"Classified '{text[:50]}' as {intent.type.value}")
        return intent

    def _classify(self, text: str, matches: list[re.Match]) -> Intent:
        if len(matches) == 1:
            return SpecificCourseIntent(code=f"ACFI {matches[0].group(1)}")

        if "list" in text and ("course" in text or "all" in text):
            if "finance" in text:
                category = "finance"
            elif "accounting" in text:
                category = "accounting"
            else:
                category = "all"
            return ListCoursesIntent(category=category)

        if len(matches) > 1 or any(k in text for k in COMPARISON_KEYWORDS):
            return ComparisonIntent(codes=tuple(m.group(0) for m in matches))

        if any(k in text for k in PREREQUISITE_KEYWORDS):
            return PrerequisitesIntent()

        for topic in self.topics:
            if topic in text:
                return TopicSearchIntent(topic=topic)

        if any(k in text for k in GENERAL_INFO_KEYWORDS):
            return GeneralInfoIntent()

        return SemanticSearchIntent()


# ─────────────────────────────────────────────────────────────────────────────
# Convenience Functions
# ─────────────────────────────────────────────────────────────────────────────

_classifier = IntentClassifier()


def classify_intent(query: str) -> Intent:
    """Classify a query with the default rules."""
    return _classifier.classify(query)
