"""
Schemas Module - Pydantic data models for the application.
==========================================================

Defines all data contracts used across the application:
- Course records and the documents chunked from them
- Retrieval hits
- Structured assistant responses
- Conversation transcript turns
"""

from collections import Counter
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator

from catalog_assistant.shared.utils import normalize_course_code

# Sparse bag-of-words vector: token -> occurrence count
TermVector = Counter


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────


class DocumentKind(str, Enum):
    """Kind of document chunked from a course record."""

    DESCRIPTION = "description"
    PREREQUISITES = "prerequisites"
    LOGISTICS = "logistics"
    RULES = "rules"


class Role(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class CourseViewStyle(str, Enum):
    """How much of a course a response shows."""

    DETAIL = "detail"  # every field
    CARD = "card"  # code, title, credits, description
    PREREQUISITES = "prerequisites"  # code, title, prerequisites


class ResponseStatus(str, Enum):
    """Which message variant a response is."""

    ANSWERED = "answered"
    NOT_FOUND = "not_found"
    NO_RESULTS = "no_results"
    NEEDS_INPUT = "needs_input"
    HELP = "help"
    ERROR = "error"


# ─────────────────────────────────────────────────────────────────────────────
# Course Data Models
# ─────────────────────────────────────────────────────────────────────────────


class CourseRecord(BaseModel):
    """
    A single catalog course.

    Immutable once loaded. Accepts the catalog's camelCase keys
    (repeatRule, mutualExclusion, gradeMode) as well as snake_case.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    code: str = Field(..., min_length=1, description="Course code (e.g., 'ACFI 801')")
    title: str = Field(..., min_length=1, description="Course title")
    credits: Union[int, float, str] = Field(default=3, description="Credit value or range ('1-6')")
    description: str = Field(default="", description="Catalog description")
    prerequisites: Optional[str] = Field(default=None, description="Prerequisites text")
    repeat_rule: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("repeat_rule", "repeatRule"),
        description="Repeat-for-credit rule",
    )
    mutual_exclusion: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("mutual_exclusion", "mutualExclusion"),
        description="No-credit-if-taken rule",
    )
    equivalent: Optional[str] = Field(default=None, description="Equivalent course code")
    grade_mode: str = Field(
        default="Letter Grading",
        validation_alias=AliasChoices("grade_mode", "gradeMode"),
        description="Grading mode",
    )

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        code = normalize_course_code(v)
        if not code:
            raise ValueError("code must not be blank")
        return code

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v

    @field_validator("prerequisites", "repeat_rule", "mutual_exclusion", "equivalent", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_rules(self) -> bool:
        """Whether any repeat/exclusion/equivalence rule applies."""
        return bool(self.repeat_rule or self.mutual_exclusion or self.equivalent)


class CourseDocument(BaseModel):
    """
    A short natural-language excerpt derived from one course.

    Indexed independently for retrieval; refers back to its course by code.
    """

    model_config = {"frozen": True}

    kind: DocumentKind = Field(..., description="Which part of the course this covers")
    text: str = Field(..., description="Rendered sentence")
    source_code: str = Field(..., description="Code of the course it came from")

    @property
    def document_id(self) -> str:
        return f"{self.source_code}_{self.kind.value}"

    @property
    def key(self) -> tuple[str, DocumentKind]:
        return (self.source_code, self.kind)


# ─────────────────────────────────────────────────────────────────────────────
# Retrieval Models
# ─────────────────────────────────────────────────────────────────────────────


class RetrievalHit(BaseModel):
    """A retrieved document with its similarity and the course it belongs to."""

    source_code: str = Field(..., description="Course code")
    similarity: float = Field(..., ge=0.0, le=1.0, description="Cosine similarity (0-1)")
    document_kind: DocumentKind = Field(..., description="Kind of matched document")
    text: str = Field(..., description="Matched document text")
    course: CourseRecord = Field(..., description="The course the document came from")

    @property
    def course_title(self) -> str:
        return self.course.title


# ─────────────────────────────────────────────────────────────────────────────
# Response Models
# ─────────────────────────────────────────────────────────────────────────────


class CourseView(BaseModel):
    """One course block inside a response."""

    style: CourseViewStyle
    course: CourseRecord


class CreditBucket(BaseModel):
    """Number of courses carrying a given credit value."""

    credits: str
    count: int


class AssistantResponse(BaseModel):
    """
    Structured answer to one query.

    Holds the information content only; formatting is done by
    catalog_assistant.rag.formatting.
    """

    query: str = Field(default="", description="Original query")
    intent: str = Field(default="semantic_search", description="Classified intent type")
    status: ResponseStatus = Field(default=ResponseStatus.ANSWERED)
    title: Optional[str] = Field(default=None, description="Heading")
    message: Optional[str] = Field(default=None, description="Prose message")
    courses: list[CourseView] = Field(default_factory=list)
    credit_distribution: list[CreditBucket] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list, description="Cited course codes")

    @property
    def course_codes(self) -> list[str]:
        return [view.course.code for view in self.courses]


# ─────────────────────────────────────────────────────────────────────────────
# Conversation Models
# ─────────────────────────────────────────────────────────────────────────────


class ConversationTurn(BaseModel):
    """One entry of the session transcript."""

    role: Role
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    sources: list[str] = Field(default_factory=list)
