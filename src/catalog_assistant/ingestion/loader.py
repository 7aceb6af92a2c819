"""
Loader Module - Read course catalogs from disk.
===============================================

The assistant itself never fetches or parses catalog pages; it is handed
a zero-argument callable that returns course records. This module
provides that callable for catalog files:

- JSON: a list of records or {"courses": [...]}
- JSONL: one record per line
- YAML: same shapes as JSON

Without a path the bundled ACFI graduate catalog is used.
"""

from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from catalog_assistant.shared.config import BUNDLED_CATALOG_FILE
from catalog_assistant.shared.logging import get_logger
from catalog_assistant.shared.utils import load_json, load_jsonl, load_yaml

logger = get_logger(__name__)

CatalogLoader = Callable[[], list[dict[str, Any]]]


def load_catalog(path: Optional[Path] = None) -> list[dict[str, Any]]:
    """
    Read course records from a catalog file.

    Args:
        path: Catalog file (bundled catalog if None)

    Returns:
        List of raw record dicts, in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file format or structure is not understood
    """
    path = Path(path) if path is not None else BUNDLED_CATALOG_FILE

    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        data: Any = list(load_jsonl(path))
    elif suffix == ".json":
        data = load_json(path)
    elif suffix in (".yaml", ".yml"):
        try:
            data = load_yaml(path)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
    else:
        raise ValueError(f"Unsupported catalog format '{suffix}' for {path}")

    if isinstance(data, dict):
        data = data.get("courses")

    if not isinstance(data, list):
        raise ValueError(f"Catalog {path} must contain a list of courses")

    records = [item for item in data if isinstance(item, dict)]
    if len(records) != len(data):
        logger.warning(f"Skipped {len(data) - len(records)} non-object entries in {path}")

    logger.info(f"Read {len(records)} course records from {path.name}")
    return records


def catalog_loader(path: Optional[Path] = None) -> CatalogLoader:
    """
    Build a zero-argument loader for CourseAssistant.

    Example:
        >>> assistant = CourseAssistant(loader=catalog_loader(Path("courses.yaml")))
    """

    def _load() -> list[dict[str, Any]]:
        return load_catalog(path)

    return _load
