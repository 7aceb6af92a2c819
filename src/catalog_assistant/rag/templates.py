"""
Templates Module - Fixed assistant wording.
===========================================

Every sentence the assistant says that does not come from a course
record lives here, so renderers and front ends share one wording.
"""

from datetime import datetime
from typing import Any, Mapping

# ─────────────────────────────────────────────────────────────────────────────
# Conversation
# ─────────────────────────────────────────────────────────────────────────────

GREETING = (
    "Hello! I'm your Course Catalog Assistant. I can help you find information "
    "about ACFI courses using data from the UNH graduate catalog."
)

HELP_TEXT = (
    "I can help you with course information, prerequisites, credit requirements, "
    "and topic-based searches."
)

EXAMPLE_QUESTIONS = [
    "Tell me about ACFI 801",
    "List all finance courses",
    "Compare ACFI 840 and ACFI 850",
    "Which courses have prerequisites?",
    "Courses about derivatives",
    "How many credits are courses?",
]


# ─────────────────────────────────────────────────────────────────────────────
# Answer Titles
# ─────────────────────────────────────────────────────────────────────────────

LIST_TITLES = {
    "finance": "Finance-Related Courses",
    "accounting": "Accounting-Related Courses",
    "all": "All ACFI Courses",
}

PREREQUISITES_TITLE = "Courses with Prerequisites"
COMPARISON_TITLE = "Course Comparison"
TOPIC_TITLE = 'Courses related to "{topic}"'
GENERAL_INFO_TITLE = "Course Information Summary"
CREDIT_DISTRIBUTION_TITLE = "Credit Distribution"
RELATED_TITLE = "Related Information"


# ─────────────────────────────────────────────────────────────────────────────
# Answer Messages
# ─────────────────────────────────────────────────────────────────────────────

COURSE_NOT_FOUND = (
    "I couldn't find information about {code}. Please check the course code and try again."
)

COMPARISON_NOT_FOUND = "I couldn't find any of these courses: {codes}."

NO_CATEGORY_COURSES = "No courses found for this category."

COMPARISON_NEEDS_INPUT = "Please specify at least two courses to compare."

NO_PREREQUISITES = (
    "Most ACFI courses do not have specific prerequisites listed. However, some "
    "advanced courses may require foundational knowledge."
)

NO_TOPIC_COURSES = (
    'No courses found specifically related to "{topic}". Try asking about specific '
    "course codes or browse all courses."
)

GENERAL_INFO_NOTE = (
    "Most ACFI courses are 3 credits and use Letter Grading. Some courses may be "
    "repeated for additional credits."
)

NO_COURSE_DATA = "No course data is loaded, so there is nothing to summarize yet."

DEFAULT_INTRO = "I'm not sure about that specific question. Here are some things you can try:"

DEFAULT_SUGGESTIONS = [
    "Try asking about a specific course like 'ACFI 801' or 'Corporate Finance'",
    "Ask 'List all courses' to see all available ACFI courses",
    "Ask about prerequisites or course requirements",
    "Search by topic like 'international', 'derivatives', or 'accounting'",
]

DEFAULT_OUTRO = "Feel free to ask me anything about ACFI courses at UNH!"

ERROR_MESSAGE = (
    "I'm sorry, I encountered an error processing your request. Please try asking "
    "your question differently or contact support if the problem persists."
)

ERROR_INTRO = "You can try:"

ERROR_SUGGESTIONS = [
    'Asking about specific course codes (e.g., "ACFI 801")',
    "Requesting course lists by category",
    'Searching for topics like "derivatives" or "accounting"',
]


def data_status_message(status: Mapping[str, Any]) -> str:
    """
    One-line summary of corpus freshness.

    Args:
        status: CorpusStore.data_status() output
    """
    last_updated = status.get("last_updated")
    if isinstance(last_updated, datetime):
        updated = last_updated.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    else:
        updated = "Never"
    return f"Data last updated: {updated}. Total courses: {status.get('total_courses', 0)}"
