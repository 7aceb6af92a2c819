"""
Formatting Module - Render AssistantResponses for display.
==========================================================

Renderers are pure functions of the response:
- html: course-card markup for web chat widgets (values escaped)
- markdown: for the terminal and Streamlit
- json: the structured response itself
"""

from html import escape
from typing import Callable

from catalog_assistant.rag import templates
from catalog_assistant.shared.config import OUTPUT_FORMATS
from catalog_assistant.shared.schemas import (
    AssistantResponse,
    CourseRecord,
    CourseView,
    CourseViewStyle,
    ResponseStatus,
)


def _detail_fields(course: CourseRecord) -> list[tuple[str, str]]:
    """Labelled lines shown under a course in detail view, in display order."""
    fields = []
    if course.prerequisites:
        fields.append(("Prerequisites", course.prerequisites))
    if course.repeat_rule:
        fields.append(("Repeat Rule", course.repeat_rule))
    if course.mutual_exclusion:
        fields.append(("Mutual Exclusion", course.mutual_exclusion))
    if course.equivalent:
        fields.append(("Equivalent", course.equivalent))
    fields.append(("Grade Mode", course.grade_mode))
    return fields


# ─────────────────────────────────────────────────────────────────────────────
# HTML
# ─────────────────────────────────────────────────────────────────────────────


def _html_course(view: CourseView) -> str:
    course = view.course
    parts = [
        '<div class="course-card">',
        f'<div class="course-title">{escape(course.code)} - {escape(course.title)}</div>',
    ]

    if view.style == CourseViewStyle.PREREQUISITES:
        parts.append('<div class="course-details">')
        parts.append(f"<p><strong>Prerequisites:</strong> {escape(course.prerequisites or '')}</p>")
        parts.append("</div>")
    else:
        parts.append(f'<div class="course-credits">Credits: {escape(str(course.credits))}</div>')
        parts.append(f'<div class="course-description">{escape(course.description)}</div>')
        if view.style == CourseViewStyle.DETAIL:
            parts.append('<div class="course-details">')
            for label, value in _detail_fields(course):
                parts.append(f"<p><strong>{label}:</strong> {escape(value)}</p>")
            parts.append("</div>")

    parts.append("</div>")
    return "\n".join(parts)


def _html_list(items: list[str]) -> str:
    return "<ul>" + "".join(f"<li>{escape(item)}</li>" for item in items) + "</ul>"


def render_html(response: AssistantResponse) -> str:
    """Render a response as HTML course cards."""
    parts = []

    if response.title:
        parts.append(f"<h3>{escape(response.title)}:</h3>")

    if response.credit_distribution:
        parts.append(f"<h4>{templates.CREDIT_DISTRIBUTION_TITLE}:</h4>")
        parts.append(
            "<ul>"
            + "".join(
                f"<li><strong>{escape(b.credits)} credits:</strong> {b.count} courses</li>"
                for b in response.credit_distribution
            )
            + "</ul>"
        )

    parts.extend(_html_course(view) for view in response.courses)

    if response.message:
        parts.append(f"<p>{escape(response.message)}</p>")

    if response.status == ResponseStatus.ERROR:
        parts.append(f"<p>{templates.ERROR_INTRO}</p>")
    if response.suggestions:
        parts.append(_html_list(response.suggestions))
    if response.status == ResponseStatus.HELP:
        parts.append(f"<p>{escape(templates.DEFAULT_OUTRO)}</p>")

    return "\n".join(parts)


# ─────────────────────────────────────────────────────────────────────────────
# Markdown
# ─────────────────────────────────────────────────────────────────────────────


def _markdown_course(view: CourseView) -> str:
    course = view.course
    lines = [f"#### {course.code} - {course.title}"]

    if view.style == CourseViewStyle.PREREQUISITES:
        lines.append(f"**Prerequisites:** {course.prerequisites or ''}")
        return "\n".join(lines)

    lines.append(f"**Credits:** {course.credits}")
    if course.description:
        lines.append("")
        lines.append(course.description)

    if view.style == CourseViewStyle.DETAIL:
        lines.append("")
        lines.extend(f"- **{label}:** {value}" for label, value in _detail_fields(course))

    return "\n".join(lines)


def render_markdown(response: AssistantResponse) -> str:
    """Render a response as Markdown."""
    blocks = []

    if response.title:
        blocks.append(f"### {response.title}")

    if response.credit_distribution:
        lines = [f"**{templates.CREDIT_DISTRIBUTION_TITLE}:**", ""]
        lines.extend(
            f"- **{b.credits} credits:** {b.count} courses" for b in response.credit_distribution
        )
        blocks.append("\n".join(lines))

    blocks.extend(_markdown_course(view) for view in response.courses)

    if response.message:
        blocks.append(response.message)

    if response.status == ResponseStatus.ERROR:
        blocks.append(templates.ERROR_INTRO)
    if response.suggestions:
        blocks.append("\n".join(f"- {s}" for s in response.suggestions))
    if response.status == ResponseStatus.HELP:
        blocks.append(templates.DEFAULT_OUTRO)

    return "\n\n".join(blocks)


# ─────────────────────────────────────────────────────────────────────────────
# Dispatch
# ─────────────────────────────────────────────────────────────────────────────


def render_json(response: AssistantResponse) -> str:
    """Render a response as indented JSON."""
    return response.model_dump_json(indent=2)


_RENDERERS: dict[str, Callable[[AssistantResponse], str]] = {
    "html": render_html,
    "markdown": render_markdown,
    "json": render_json,
}


def render(response: AssistantResponse, fmt: str = "html") -> str:
    """
    Render a response in the named format.

    Args:
        response: Response to render
        fmt: One of "html", "markdown", "json"

    Raises:
        ValueError: If the format is unknown
    """
    renderer = _RENDERERS.get(fmt.lower())
    if renderer is None:
        raise ValueError(f"Unknown output format: {fmt}. Available: {', '.join(OUTPUT_FORMATS)}")
    return renderer(response)
