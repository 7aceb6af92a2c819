"""
Utilities Module - Small helpers shared across the assistant.
=============================================================

Helpers for:
- Course code normalization
- Ordered de-duplication
- File I/O (JSON, JSONL, YAML)
- Text helpers
"""

import json
import re
from pathlib import Path
from typing import Any, Callable, Hashable, Iterable, Iterator, TypeVar

import yaml

from catalog_assistant.shared.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Letter prefix + number, with or without whitespace in between
_CODE_PARTS = re.compile(r"^([A-Z]+)\s*(\d+)$")


# ─────────────────────────────────────────────────────────────────────────────
# Course Codes
# ─────────────────────────────────────────────────────────────────────────────


def normalize_course_code(code: str) -> str:
    """
    Normalize a course code to its canonical "PREFIX ###" form.

    Args:
        code: Course code as typed (e.g., "acfi801", " ACFI   801 ")

    Returns:
        Canonical code (upper-case, one space between prefix and number)

    Example:
        >>> normalize_course_code("acfi801")
        'ACFI 801'
    """
    collapsed = re.sub(r"\s+", " ", code.strip().upper())
    match = _CODE_PARTS.match(collapsed)
    if match:
        return f"{match.group(1)} {match.group(2)}"
    return collapsed


# ─────────────────────────────────────────────────────────────────────────────
# Collections
# ─────────────────────────────────────────────────────────────────────────────


def unique_by(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """
    Keep the first item seen for each key, preserving order.

    Example:
        >>> unique_by(["ACFI 801", "acfi 801", "ACFI 802"], key=str.upper)
        ['ACFI 801', 'ACFI 802']
    """
    seen: dict[Hashable, T] = {}
    for item in items:
        k = key(item)
        if k not in seen:
            seen[k] = item
    return list(seen.values())


def unique(items: Iterable[Hashable]) -> list[Any]:
    """Order-preserving de-duplication of hashable items."""
    return list(dict.fromkeys(items))


# ─────────────────────────────────────────────────────────────────────────────
# Catalog and Transcript Files
# ─────────────────────────────────────────────────────────────────────────────


def load_json(file_path: Path) -> Any:
    """Parse a whole JSON document (raises FileNotFoundError / json.JSONDecodeError)."""
    return json.loads(Path(file_path).read_text(encoding="utf-8"))


def save_json(file_path: Path, data: Any, indent: int = 2) -> None:
    """
    Write data as JSON, creating missing parent directories.

    Values JSON cannot encode (datetimes, paths) are written with str().
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=indent, ensure_ascii=False, default=str), encoding="utf-8")
    logger.debug(f"Wrote {path}")


def load_jsonl(file_path: Path) -> Iterator[dict[str, Any]]:
    """
    Yield one record per non-blank line of a JSON Lines file.

    Lines that are not valid JSON are skipped with a warning.
    """
    path = Path(file_path)
    with path.open(encoding="utf-8") as f:
        for number, raw in enumerate(f, start=1):
            if not raw.strip():
                continue
            try:
                yield json.loads(raw)
            except json.JSONDecodeError as e:
                logger.warning(f"Skipping line {number} of {path.name}: {e}")


def load_yaml(file_path: Path) -> Any:
    """Parse a YAML document with the safe loader."""
    return yaml.safe_load(Path(file_path).read_text(encoding="utf-8"))


# ─────────────────────────────────────────────────────────────────────────────
# Display
# ─────────────────────────────────────────────────────────────────────────────


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """Shorten text to at most max_length characters, ending in suffix when cut."""
    if len(text) > max_length:
        return text[: max_length - len(suffix)] + suffix
    return text
