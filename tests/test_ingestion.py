"""
Tests for Ingestion Module.
===========================

Tests for:
- Loader: Catalog files in JSON, JSONL and YAML
- Chunker: Course-to-document splitting
- CorpusStore: Loading, lookup and category filters
"""

import json

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Loader Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestLoader:
    """Tests for catalog file loading."""

    def test_bundled_catalog(self):
        """Test that the bundled ACFI catalog loads."""
        from catalog_assistant.ingestion.loader import load_catalog

        records = load_catalog()

        assert len(records) == 24
        assert all("code" in r and "title" in r for r in records)
        assert records[0]["code"] == "ACFI 801"

    def test_json_list(self, tmp_path, three_course_data):
        """Test a JSON file holding a plain list."""
        from catalog_assistant.ingestion.loader import load_catalog

        path = tmp_path / "courses.json"
        path.write_text(json.dumps(three_course_data), encoding="utf-8")

        assert load_catalog(path) == three_course_data

    def test_json_courses_key(self, catalog_file, three_course_data):
        """Test a JSON object with a courses list."""
        from catalog_assistant.ingestion.loader import load_catalog

        assert load_catalog(catalog_file) == three_course_data

    def test_jsonl(self, tmp_path, three_course_data):
        """Test a JSON Lines file."""
        from catalog_assistant.ingestion.loader import load_catalog

        path = tmp_path / "courses.jsonl"
        path.write_text("\n".join(json.dumps(r) for r in three_course_data), encoding="utf-8")

        assert [r["code"] for r in load_catalog(path)] == ["ACFI 801", "ACFI 840", "ACFI 860"]

    def test_yaml(self, tmp_path):
        """Test a YAML file."""
        from catalog_assistant.ingestion.loader import load_catalog

        path = tmp_path / "courses.yaml"
        path.write_text(
            "courses:\n"
            "  - code: ACFI 801\n"
            "    title: Corporate Finance\n"
            "    credits: 3\n",
            encoding="utf-8",
        )

        records = load_catalog(path)

        assert records == [{"code": "ACFI 801", "title": "Corporate Finance", "credits": 3}]

    def test_non_object_entries_skipped(self, tmp_path, minimal_course_data):
        """Test that non-dict entries are dropped."""
        from catalog_assistant.ingestion.loader import load_catalog

        path = tmp_path / "courses.json"
        path.write_text(json.dumps([minimal_course_data, "junk", 3]), encoding="utf-8")

        assert load_catalog(path) == [minimal_course_data]

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        from catalog_assistant.ingestion.loader import load_catalog

        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.json")

    def test_unsupported_format(self, tmp_path):
        """Test that unknown extensions are rejected."""
        from catalog_assistant.ingestion.loader import load_catalog

        path = tmp_path / "courses.csv"
        path.write_text("code,title\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_catalog(path)

    def test_wrong_structure(self, tmp_path):
        """Test that a JSON object without a course list is rejected."""
        from catalog_assistant.ingestion.loader import load_catalog

        path = tmp_path / "courses.json"
        path.write_text(json.dumps({"items": []}), encoding="utf-8")

        with pytest.raises(ValueError):
            load_catalog(path)

    def test_catalog_loader_is_zero_argument(self, catalog_file):
        """Test that catalog_loader defers reading until called."""
        from catalog_assistant.ingestion.loader import catalog_loader

        loader = catalog_loader(catalog_file)

        assert len(loader()) == 3


# ─────────────────────────────────────────────────────────────────────────────
# Chunker Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestChunker:
    """Tests for course chunking."""

    def test_full_record_gives_four_documents(self, sample_course_record):
        """Test that a course with every field yields all four kinds."""
        from catalog_assistant.ingestion.chunker import Chunker
        from catalog_assistant.shared.schemas import DocumentKind

        documents = Chunker().chunk(sample_course_record)

        assert [d.kind for d in documents] == [
            DocumentKind.DESCRIPTION,
            DocumentKind.PREREQUISITES,
            DocumentKind.LOGISTICS,
            DocumentKind.RULES,
        ]

    def test_minimal_record_gives_two_documents(self, minimal_course_record):
        """Test that a course without optional fields yields description and logistics."""
        from catalog_assistant.ingestion.chunker import Chunker
        from catalog_assistant.shared.schemas import DocumentKind

        documents = Chunker().chunk(minimal_course_record)

        assert [d.kind for d in documents] == [DocumentKind.DESCRIPTION, DocumentKind.LOGISTICS]

    def test_document_texts(self, sample_course_record):
        """Test the rendered sentences."""
        from catalog_assistant.ingestion.chunker import chunk_course

        description, prerequisites, logistics, rules = chunk_course(sample_course_record)

        assert description.text == (
            "ACFI 850 Financial Reporting Research: "
            "Research of authoritative accounting standards for financial reporting."
        )
        assert prerequisites.text == "Prerequisites for ACFI 850: ACFI 801; ACFI 802."
        assert logistics.text == "ACFI 850 is worth 3 credits and uses Letter Grading"
        assert rules.text == (
            "Additional rules for ACFI 850: "
            "May be repeated for a maximum of 6 credits. "
            "Cannot receive credit for both ACFI 850 and ACFI 851. "
            "Equivalent to ACFI 897"
        )

    def test_rules_only_include_present_parts(self):
        """Test that the rules document skips absent rules."""
        from catalog_assistant.ingestion.chunker import chunk_course
        from catalog_assistant.shared.schemas import CourseRecord

        course = CourseRecord(code="ACFI 825", title="Tax Research", equivalent="ACFI 897")

        rules = chunk_course(course)[-1]

        assert rules.text == "Additional rules for ACFI 825: Equivalent to ACFI 897"

    def test_credit_range_in_logistics(self):
        """Test that textual credit ranges are rendered as given."""
        from catalog_assistant.ingestion.chunker import chunk_course
        from catalog_assistant.shared.schemas import CourseRecord, DocumentKind

        course = CourseRecord(code="ACFI 892", title="Independent Study", credits="1-6")

        logistics = [d for d in chunk_course(course) if d.kind == DocumentKind.LOGISTICS][0]

        assert "worth 1-6 credits" in logistics.text

    def test_documents_reference_their_course(self, sample_course_record):
        """Test that every document points back to its course."""
        from catalog_assistant.ingestion.chunker import chunk_course

        assert {d.source_code for d in chunk_course(sample_course_record)} == {"ACFI 850"}

    def test_chunking_is_deterministic(self, sample_course_record):
        """Test that chunking twice gives the same documents."""
        from catalog_assistant.ingestion.chunker import chunk_course

        assert chunk_course(sample_course_record) == chunk_course(sample_course_record)

    def test_chunk_many_keeps_course_order(self, sample_course_record, minimal_course_record):
        """Test that documents come out in course order."""
        from catalog_assistant.ingestion.chunker import chunk_courses

        documents = chunk_courses([minimal_course_record, sample_course_record])

        assert len(documents) == 6
        assert [d.source_code for d in documents[:2]] == ["ACFI 801", "ACFI 801"]


# ─────────────────────────────────────────────────────────────────────────────
# Corpus Store Tests
# ─────────────────────────────────────────────────────────────────────────────


class TestCorpusStore:
    """Tests for the in-memory corpus store."""

    def test_load_and_get(self, corpus):
        """Test lookup by exact and loosely written codes."""
        assert corpus.get("ACFI 801").title == "Corporate Finance"
        assert corpus.get("acfi801").title == "Corporate Finance"
        assert corpus.get("ACFI 999") is None
        assert "acfi 840" in corpus

    def test_all_keeps_insertion_order(self, corpus):
        """Test that all() follows load order."""
        assert [c.code for c in corpus.all()] == ["ACFI 801", "ACFI 840", "ACFI 860"]

    def test_documents(self, corpus):
        """Test that documents are chunked on load."""
        documents = corpus.documents()

        # 801: 2, 840: 3 (prerequisites), 860: 3 (rules)
        assert len(documents) == 8
        assert corpus.data_status()["total_documents"] == 8

    def test_by_category(self, corpus):
        """Test keyword category filters."""
        assert [c.code for c in corpus.by_category("finance")] == ["ACFI 801", "ACFI 840"]
        assert [c.code for c in corpus.by_category("Accounting")] == ["ACFI 860"]
        assert corpus.by_category("marketing") == []

    def test_custom_category_keywords(self, three_course_data):
        """Test that category keywords can be supplied."""
        from catalog_assistant.ingestion.corpus import CorpusStore

        store = CorpusStore(category_keywords={"risk": ["Hedging"]})
        store.load(three_course_data)

        assert [c.code for c in store.by_category("risk")] == ["ACFI 840"]
        assert store.categories == ["risk"]

    def test_load_replaces_previous_state(self, corpus, minimal_course_data):
        """Test that a second load replaces the first."""
        assert corpus.load([minimal_course_data])

        assert len(corpus) == 1
        assert corpus.get("ACFI 840") is None

    def test_empty_load_fails(self, corpus):
        """Test that an empty record list is rejected and empties the store."""
        assert corpus.load([]) is False
        assert corpus.load(None) is False

        assert corpus.is_empty
        assert corpus.documents() == []

    def test_malformed_record_fails(self, corpus, minimal_course_data):
        """Test that a record without a title fails the whole load."""
        assert corpus.load([minimal_course_data, {"code": "ACFI 802"}]) is False

        assert corpus.is_empty

    def test_non_mapping_record_fails(self, corpus):
        """Test that a non-object record fails the load."""
        assert corpus.load(["ACFI 801"]) is False

        assert corpus.is_empty

    def test_duplicate_code_keeps_later_record(self, minimal_course_data):
        """Test that a repeated code overwrites the earlier record in place."""
        from catalog_assistant.ingestion.corpus import CorpusStore

        store = CorpusStore()
        store.load([
            minimal_course_data,
            {"code": "ACFI 802", "title": "Investments"},
            {"code": "acfi 801", "title": "Corporate Finance II"},
        ])

        assert [c.code for c in store.all()] == ["ACFI 801", "ACFI 802"]
        assert store.get("ACFI 801").title == "Corporate Finance II"

    def test_data_status(self, corpus):
        """Test the freshness summary."""
        status = corpus.data_status()

        assert status["total_courses"] == 3
        assert status["last_updated"] is not None
        assert status["catalog_source"].startswith("https://")

    def test_clear(self, corpus):
        """Test that clear empties the store."""
        corpus.clear()

        assert len(corpus) == 0
        assert corpus.data_status()["last_updated"] is None
