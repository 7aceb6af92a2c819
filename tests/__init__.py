"""
Tests Package - Unit and integration tests for Catalog Assistant.
=================================================================

Test modules:
- test_shared: Schemas, utils and settings
- test_ingestion: Loader, chunker and corpus store tests
- test_indexing: Vectorizer and similarity index tests
- test_rag: Intent, retriever, generator, formatting and transcript tests
- test_assistant: End-to-end query pipeline tests
- test_cli: Typer command tests

Run tests with:
    pytest tests/
    pytest tests/ -v --cov=src/catalog_assistant
"""
