"""
Shared Module - Common utilities, configuration, schemas, and logging.
======================================================================

This module provides foundational components used across all other modules:

- config: Configuration loading and management
- logging: Structured logging setup
- schemas: Pydantic data models
- utils: Course code normalization, ordered de-duplication, file I/O
"""

from catalog_assistant.shared.config import get_settings, Settings
from catalog_assistant.shared.logging import configure_logging, get_logger, setup_logging
from catalog_assistant.shared.schemas import (
    AssistantResponse,
    ConversationTurn,
    CourseDocument,
    CourseRecord,
    CourseView,
    CourseViewStyle,
    CreditBucket,
    DocumentKind,
    ResponseStatus,
    RetrievalHit,
    Role,
    TermVector,
)
from catalog_assistant.shared.utils import (
    normalize_course_code,
    unique,
    unique_by,
    load_json,
    save_json,
    load_jsonl,
    load_yaml,
)

__all__ = [
    # Config
    "get_settings",
    "Settings",
    # Logging
    "configure_logging",
    "get_logger",
    "setup_logging",
    # Schemas
    "AssistantResponse",
    "ConversationTurn",
    "CourseDocument",
    "CourseRecord",
    "CourseView",
    "CourseViewStyle",
    "CreditBucket",
    "DocumentKind",
    "ResponseStatus",
    "RetrievalHit",
    "Role",
    "TermVector",
    # Utils
    "normalize_course_code",
    "unique",
    "unique_by",
    "load_json",
    "save_json",
    "load_jsonl",
    "load_yaml",
]
