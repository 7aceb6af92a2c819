"""
Ingestion Module - Course corpus loading and chunking.
======================================================

This module turns catalog data into the in-memory corpus:

- loader: Read catalog files (JSON, JSONL, YAML) or the bundled catalog
- chunker: Split each course into description/prerequisites/logistics/rules documents
- corpus: CorpusStore holding records and documents for a session
"""

from catalog_assistant.ingestion.chunker import Chunker, chunk_course, chunk_courses
from catalog_assistant.ingestion.corpus import CorpusStore
from catalog_assistant.ingestion.loader import CatalogLoader, catalog_loader, load_catalog

__all__ = [
    # Chunker
    "Chunker",
    "chunk_course",
    "chunk_courses",
    # Corpus
    "CorpusStore",
    # Loader
    "CatalogLoader",
    "catalog_loader",
    "load_catalog",
]
