"""
Pytest Configuration and Fixtures.
===================================

Shared fixtures for all test modules:
- Sample course data and records
- Small corpora, indexes and assistants
- Catalog files in temporary directories
- Settings isolation
"""

import json
from pathlib import Path

import pytest

SETTINGS_ENV_VARS = [
    "CATALOG_FILE",
    "TOP_K",
    "SIMILARITY_THRESHOLD",
    "OUTPUT_FORMAT",
    "LOG_LEVEL",
]


# ─────────────────────────────────────────────────────────────────────────────
# Sample Data Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_course_data() -> dict:
    """A course with every optional field set, in catalog (camelCase) form."""
    return {
        "code": "ACFI 850",
        "title": "Financial Reporting Research",
        "credits": 3,
        "description": "Research of authoritative accounting standards for financial reporting.",
        "prerequisites": "ACFI 801; ACFI 802.",
        "repeatRule": "May be repeated for a maximum of 6 credits.",
        "mutualExclusion": "Cannot receive credit for both ACFI 850 and ACFI 851.",
        "equivalent": "ACFI 897",
        "gradeMode": "Letter Grading",
    }


@pytest.fixture
def minimal_course_data() -> dict:
    """A course with only the required fields."""
    return {
        "code": "ACFI 801",
        "title": "Corporate Finance",
        "credits": 3,
        "description": "Covers capital budgeting, cost of capital, and corporate financing decisions.",
    }


@pytest.fixture
def three_course_data(minimal_course_data: dict) -> list[dict]:
    """Three courses: one finance, one derivatives with prerequisites, one audit."""
    return [
        minimal_course_data,
        {
            "code": "ACFI 840",
            "title": "Derivative Securities",
            "credits": 3,
            "description": (
                "Pricing and hedging with options, futures and swaps, "
                "including derivative valuation models."
            ),
            "prerequisites": "ACFI 801 with a grade of B- or better.",
        },
        {
            "code": "ACFI 860",
            "title": "Auditing and Assurance",
            "credits": "1-6",
            "description": "Audit planning, evidence, internal control and professional ethics.",
            "repeatRule": "May be repeated for a maximum of 6 credits.",
        },
    ]


@pytest.fixture
def sample_course_record(sample_course_data: dict):
    """Sample CourseRecord instance."""
    from catalog_assistant.shared.schemas import CourseRecord
    return CourseRecord.model_validate(sample_course_data)


@pytest.fixture
def minimal_course_record(minimal_course_data: dict):
    """CourseRecord with no optional fields."""
    from catalog_assistant.shared.schemas import CourseRecord
    return CourseRecord.model_validate(minimal_course_data)


# ─────────────────────────────────────────────────────────────────────────────
# Component Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def corpus(three_course_data: list[dict]):
    """CorpusStore loaded with the three sample courses."""
    from catalog_assistant.ingestion.corpus import CorpusStore

    store = CorpusStore()
    assert store.load(three_course_data)
    return store


@pytest.fixture
def index(corpus):
    """TermVectorIndex over the sample corpus."""
    from catalog_assistant.indexing.vector_store import TermVectorIndex

    term_index = TermVectorIndex()
    term_index.index(corpus.documents())
    return term_index


@pytest.fixture
def retriever(corpus, index):
    """Retriever with the answer pipeline defaults (top 8, > 0.1)."""
    from catalog_assistant.rag.retriever import Retriever
    return Retriever(corpus, index, top_k=8, similarity_threshold=0.1)


@pytest.fixture
def make_assistant():
    """Factory for assistants fed from an in-memory record list."""
    from catalog_assistant.rag.assistant import CourseAssistant

    def _make(records, output_format: str = "markdown", max_attempts: int = 1):
        return CourseAssistant(
            loader=lambda: list(records),
            output_format=output_format,
            max_attempts=max_attempts,
            retry_wait=0,
        )

    return _make


@pytest.fixture
def assistant(make_assistant, three_course_data: list[dict]):
    """Assistant over the three sample courses."""
    return make_assistant(three_course_data)


# ─────────────────────────────────────────────────────────────────────────────
# File Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def catalog_file(tmp_path: Path, three_course_data: list[dict]) -> Path:
    """JSON catalog file holding the three sample courses."""
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"courses": three_course_data}), encoding="utf-8")
    return path


# ─────────────────────────────────────────────────────────────────────────────
# Pytest Configuration
# ─────────────────────────────────────────────────────────────────────────────


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that run the bundled catalog end to end"
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep environment overrides and cached settings from leaking between tests."""
    from catalog_assistant.shared.config import get_settings

    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()
