"""
Tests for the CourseAssistant pipeline.
=======================================

Tests for:
- Initialization: retries and non-fatal failure
- Queries: end-to-end answers, transcript, error handling
- Session helpers: status, greeting, history
"""

from unittest.mock import patch

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Initialization Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestInitialization:
    """Tests for loading the catalog."""

    def test_initialize(self, assistant):
        """Test that initialization fills corpus and index."""
        assert assistant.initialize() is True

        assert assistant.initialized
        assert len(assistant.corpus) == 3
        assert assistant.index.count == 8

    def test_lazy_initialization(self, assistant):
        """Test that the first query loads the catalog."""
        assert not assistant.initialized

        assistant.ask("list all courses")

        assert assistant.initialized

    def test_retries_failing_loader(self, make_assistant, three_course_data):
        """Test that a transient loader error is retried."""
        calls = []

        def flaky_loader():
            calls.append(1)
            if len(calls) == 1:
                raise OSError("catalog temporarily unavailable")
            return three_course_data

        assistant = make_assistant([], max_attempts=3)
        assistant.loader = flaky_loader

        assert assistant.initialize() is True
        assert len(calls) == 2

    def test_retries_empty_catalog(self, make_assistant):
        """Test that an empty catalog counts as a failed attempt."""
        calls = []

        def empty_loader():
            calls.append(1)
            return []

        assistant = make_assistant([], max_attempts=3)
        assistant.loader = empty_loader

        assert assistant.initialize() is False
        assert len(calls) == 3

    def test_failure_is_not_fatal(self, make_assistant):
        """Test that an unexpected loader error leaves an empty corpus."""
        def broken_loader():
            raise RuntimeError("boom")

        assistant = make_assistant([])
        assistant.loader = broken_loader

        assert assistant.initialize() is False
        assert assistant.corpus.is_empty
        assert assistant.index.count == 0

    def test_malformed_catalog(self, make_assistant, minimal_course_data):
        """Test that a malformed record fails initialization."""
        assistant = make_assistant([minimal_course_data, {"title": "No code"}])

        assert assistant.initialize() is False
        assert assistant.corpus.is_empty

    def test_failed_initialization_retried_on_next_query(self, make_assistant, three_course_data):
        """Test that each query retries until the catalog loads."""
        responses = [OSError("offline"), three_course_data]

        def loader():
            result = responses.pop(0)
            if isinstance(result, Exception):
                raise result
            return result

        assistant = make_assistant([])
        assistant.loader = loader

        first = assistant.ask("list all courses")
        second = assistant.ask("list all courses")

        assert first.course_codes == []
        assert second.course_codes == ["ACFI 801", "ACFI 840", "ACFI 860"]

    def test_unknown_output_format(self):
        """Test that an unknown output format is rejected up front."""
        from catalog_assistant.rag.assistant import CourseAssistant

        with pytest.raises(ValueError):
            CourseAssistant(loader=lambda: [], output_format="pdf")


# ─────────────────────────────────────────────────────────────────────────────
# End-to-End Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestEndToEnd:
    """Query scenarios through the whole pipeline."""

    def test_single_course_details(self, make_assistant, minimal_course_data):
        """Test asking about the only course in the catalog."""
        assistant = make_assistant([minimal_course_data])

        answer = assistant.process_query("Tell me about ACFI 801")

        assert "Corporate Finance" in answer
        assert "**Credits:** 3" in answer
        assert "Prerequisites" not in answer

    def test_list_all_courses(self, assistant):
        """Test listing enumerates each course exactly once."""
        response = assistant.ask("list all courses")

        assert response.course_codes == ["ACFI 801", "ACFI 840", "ACFI 860"]

    def test_topic_search(self, assistant):
        """Test a topic found in exactly one course."""
        response = assistant.ask("derivative")

        assert response.intent == "topic_search"
        assert response.course_codes == ["ACFI 840"]

    @pytest.mark.parametrize(
        "query",
        [
            "Tell me about ACFI 801",
            "list all courses",
            "compare ACFI 801 and ACFI 802",
            "which courses have prerequisites?",
            "derivative",
            "how many credits?",
            "something else entirely",
        ],
    )
    def test_empty_corpus_answers_every_intent(self, make_assistant, query):
        """Test that every branch answers with a notice when nothing is loaded."""
        from catalog_assistant.shared.schemas import ResponseStatus

        assistant = make_assistant([])

        response = assistant.ask(query)

        assert response.status in {
            ResponseStatus.NOT_FOUND,
            ResponseStatus.NO_RESULTS,
            ResponseStatus.HELP,
        }
        assert response.message
        assert response.courses == []

    def test_same_query_same_ranking(self, assistant):
        """Test that repeating a query gives the same hits and answer."""
        first = assistant.ask("capital evidence")
        second = assistant.ask("capital evidence")

        assert first.sources == second.sources
        assert first.course_codes == second.course_codes

    def test_html_output(self, make_assistant, three_course_data):
        """Test that the default format is the course-card markup."""
        assistant = make_assistant(three_course_data, output_format="html")

        answer = assistant.process_query("Tell me about ACFI 840")

        assert '<div class="course-card">' in answer
        assert "<strong>Prerequisites:</strong> ACFI 801 with a grade of B- or better." in answer

    def test_search(self, assistant):
        """Test plain search returns the configured five hits."""
        hits = assistant.search("acfi")

        assert len(hits) == 5
        assert len(assistant.history) == 0

    def test_search_top_k(self, assistant):
        """Test plain search honours top_k."""
        assert len(assistant.search("acfi", top_k=2)) == 2


# ─────────────────────────────────────────────────────────────────────────────
# Transcript and Error Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestSession:
    """Tests for transcript bookkeeping and status."""

    def test_turns_recorded_with_sources(self, assistant):
        """Test that both turns are recorded and sources cited."""
        from catalog_assistant.shared.schemas import Role

        response = assistant.ask("derivative")

        user, reply = assistant.history
        assert user.role == Role.USER
        assert user.content == "derivative"
        assert reply.role == Role.ASSISTANT
        assert reply.sources == response.sources == ["ACFI 840"]

    def test_unexpected_error_becomes_apology(self, assistant):
        """Test that an exception while answering is not raised."""
        from catalog_assistant.shared.schemas import ResponseStatus

        with patch.object(assistant.generator, "respond", side_effect=RuntimeError("bug")):
            response = assistant.ask("derivative")

        assert response.status == ResponseStatus.ERROR
        assert response.message.startswith("I'm sorry")
        assert len(response.suggestions) == 3
        # Only the user turn is recorded
        assert len(assistant.history) == 1

    def test_clear_history(self, assistant):
        """Test clearing the conversation."""
        assistant.ask("derivative")

        assistant.clear_history()

        assert assistant.history == []

    def test_status(self, assistant):
        """Test the status summary."""
        assistant.ask("derivative")

        status = assistant.get_status()

        assert status["initialized"] is True
        assert status["conversation_length"] == 2
        assert status["data_status"]["total_courses"] == 3

    def test_messages(self, assistant):
        """Test greeting, help and data status texts."""
        assert assistant.greeting().startswith("Hello!")
        assert "prerequisites" in assistant.help_text()
        assert assistant.data_status_message() == "Data last updated: Never. Total courses: 0"

        assistant.initialize()

        assert assistant.data_status_message().endswith("Total courses: 3")


@pytest.mark.integration
class TestBundledCatalog:
    """Runs against the bundled ACFI catalog."""

    def test_default_assistant_loads_bundled_catalog(self):
        """Test the default loader."""
        from catalog_assistant.rag.assistant import CourseAssistant

        assistant = CourseAssistant(output_format="markdown")

        assert assistant.initialize() is True
        assert len(assistant.corpus) == 24

    def test_list_finance_courses(self):
        """Test a category listing over the real catalog."""
        from catalog_assistant.rag.assistant import CourseAssistant

        response = CourseAssistant().ask("list all finance courses")

        assert response.title == "Finance-Related Courses"
        assert "ACFI 801" in response.course_codes

    def test_credit_distribution_covers_catalog(self):
        """Test the credit histogram adds up to the catalog size."""
        from catalog_assistant.rag.assistant import CourseAssistant

        response = CourseAssistant().ask("How many credits are courses?")

        assert sum(b.count for b in response.credit_distribution) == 24
        assert "1-6" in [b.credits for b in response.credit_distribution]
