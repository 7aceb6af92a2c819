"""
Catalog Assistant - Course catalog question answering
=====================================================

Answers questions about the UNH graduate Accounting & Finance (ACFI)
courses with a small retrieval pipeline: course records are chunked into
short documents, indexed as bag-of-words vectors, and matched against
the query, while a rule-based classifier picks how the answer is built:

- single course details
- course lists by category
- side-by-side comparisons
- prerequisites and topic searches
- credit summaries
"""

__version__ = "0.1.0"
__author__ = "Catalog Assistant Team"
__license__ = "MIT"

# Public API - subpackages are imported on demand
__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Main modules (imported on demand)
    "shared",
    "ingestion",
    "indexing",
    "rag",
    "app",
    "cli",
]
