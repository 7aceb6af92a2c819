"""
RAG Module - Retrieval and answer composition.
==============================================

This module implements the question-answering workflow:

- intent: Ordered rules that pick an answer strategy
- retriever: Similarity search filtered and resolved to courses
- generator: Structured answers per intent
- formatting: HTML / Markdown / JSON renderers
- session: Conversation transcript
- assistant: CourseAssistant tying it all together

Flow:
    Query → Intent + Retriever → Generator → AssistantResponse → Renderer
"""

from catalog_assistant.rag.assistant import CorpusLoadError, CourseAssistant
from catalog_assistant.rag.formatting import render, render_html, render_json, render_markdown
from catalog_assistant.rag.generator import ResponseGenerator
from catalog_assistant.rag.intent import (
    ComparisonIntent,
    GeneralInfoIntent,
    Intent,
    IntentClassifier,
    IntentType,
    ListCoursesIntent,
    PrerequisitesIntent,
    SemanticSearchIntent,
    SpecificCourseIntent,
    TopicSearchIntent,
    classify_intent,
    extract_course_codes,
)
from catalog_assistant.rag.retriever import Retriever
from catalog_assistant.rag.session import Transcript

__all__ = [
    # Assistant
    "CourseAssistant",
    "CorpusLoadError",
    # Intent
    "Intent",
    "IntentType",
    "IntentClassifier",
    "SpecificCourseIntent",
    "ListCoursesIntent",
    "ComparisonIntent",
    "PrerequisitesIntent",
    "TopicSearchIntent",
    "GeneralInfoIntent",
    "SemanticSearchIntent",
    "classify_intent",
    "extract_course_codes",
    # Retriever
    "Retriever",
    # Generator
    "ResponseGenerator",
    # Formatting
    "render",
    "render_html",
    "render_markdown",
    "render_json",
    # Session
    "Transcript",
]
