"""
Configuration Module - Assistant settings.
==========================================

Settings are layered, later layers winning:
1. Field defaults below
2. config/settings.yaml at the project root
3. A .env file, then the process environment (CATALOG_FILE, TOP_K,
   SIMILARITY_THRESHOLD, OUTPUT_FORMAT, LOG_LEVEL)

Read them through get_settings(); the get_effective_* accessors apply
the environment overrides.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, TypeVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_assistant.shared.utils import load_yaml

load_dotenv()

V = TypeVar("V")


def _locate_project_root() -> Path:
    """Nearest directory above this file holding a pyproject.toml (else the cwd)."""
    here = Path(__file__).resolve()
    for candidate in here.parents:
        if (candidate / "pyproject.toml").exists():
            return candidate
    return Path.cwd()


PROJECT_ROOT = _locate_project_root()
CONFIG_DIR = PROJECT_ROOT / "config"
DEFAULT_CONFIG_FILE = CONFIG_DIR / "settings.yaml"
PACKAGE_DIR = Path(__file__).resolve().parent.parent
BUNDLED_CATALOG_FILE = PACKAGE_DIR / "data" / "acfi_courses.json"

OUTPUT_FORMATS = ("html", "markdown", "json")


# ─────────────────────────────────────────────────────────────────────────────
# Sections
# ─────────────────────────────────────────────────────────────────────────────


class CorpusConfig(BaseModel):
    """Where the catalog comes from and how hard to try loading it."""

    catalog_file: str = ""  # empty = bundled ACFI catalog
    catalog_source: str = "https://catalog.unh.edu/graduate/course-descriptions/acfi/"
    init_max_attempts: int = 3
    init_retry_wait: float = 0.5


def _default_categories() -> dict[str, list[str]]:
    return {
        "finance": [
            "finance",
            "investment",
            "corporate",
            "derivative",
            "portfolio",
            "valuation",
            "capital",
            "securities",
            "markets",
        ],
        "accounting": [
            "accounting",
            "audit",
            "financial reporting",
            "tax",
            "governmental",
            "non-profit",
            "fraud",
            "ethics",
        ],
    }


class RetrievalConfig(BaseModel):
    """Index and ranking knobs."""

    top_k: int = 5  # plain search
    pipeline_top_k: int = 8  # answering
    similarity_threshold: float = 0.1
    semantic_max_results: int = 3
    index_backend: str = "term_vector"


class ResponseConfig(BaseModel):
    """How process_query renders answers."""

    output_format: str = "html"

    @field_validator("output_format")
    @classmethod
    def check_output_format(cls, value: str) -> str:
        value = value.lower()
        if value not in OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {OUTPUT_FORMATS}, got '{value}'")
        return value


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    rich_console: bool = True
    file: str = ""


# ─────────────────────────────────────────────────────────────────────────────
# Settings
# ─────────────────────────────────────────────────────────────────────────────


def _first_set(override: Optional[V], configured: V) -> V:
    return configured if override is None else override


class Settings(BaseSettings):
    """
    Assistant settings: YAML sections plus flat environment overrides.

    Example:
        >>> Settings(retrieval={"top_k": 3}).get_effective_top_k()
        3
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Flat overrides, read from the environment
    catalog_file: Optional[str] = Field(default=None, validation_alias="CATALOG_FILE")
    top_k: Optional[int] = Field(default=None, validation_alias="TOP_K")
    similarity_threshold: Optional[float] = Field(default=None, validation_alias="SIMILARITY_THRESHOLD")
    output_format: Optional[str] = Field(default=None, validation_alias="OUTPUT_FORMAT")
    log_level: Optional[str] = Field(default=None, validation_alias="LOG_LEVEL")

    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    categories: dict[str, list[str]] = Field(default_factory=_default_categories)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    response: ResponseConfig = Field(default_factory=ResponseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("categories", mode="before")
    @classmethod
    def lower_case_categories(cls, value: Any) -> dict[str, list[str]]:
        """Category matching is case-insensitive, so store tags and keywords lower-cased."""
        if not value:
            return _default_categories()
        return {
            str(tag).lower(): [str(keyword).lower() for keyword in keywords]
            for tag, keywords in value.items()
        }

    @property
    def project_root(self) -> Path:
        return PROJECT_ROOT

    def get_effective_catalog_file(self) -> Path:
        """Catalog path; relative paths resolve against the project root."""
        name = self.catalog_file or self.corpus.catalog_file
        if not name:
            return BUNDLED_CATALOG_FILE
        path = Path(name)
        return path if path.is_absolute() else PROJECT_ROOT / path

    def get_effective_top_k(self) -> int:
        return _first_set(self.top_k, self.retrieval.top_k)

    def get_effective_threshold(self) -> float:
        return _first_set(self.similarity_threshold, self.retrieval.similarity_threshold)

    def get_effective_output_format(self) -> str:
        """Answer format; an unrecognized OUTPUT_FORMAT falls back to the configured one."""
        if self.output_format and self.output_format.lower() in OUTPUT_FORMATS:
            return self.output_format.lower()
        return self.response.output_format

    def get_effective_log_level(self) -> str:
        return (self.log_level or self.logging.level).upper()


# ─────────────────────────────────────────────────────────────────────────────
# Loading
# ─────────────────────────────────────────────────────────────────────────────


def build_settings(config_path: Optional[Path] = None) -> Settings:
    """
    Build settings from a YAML file and the environment.

    Args:
        config_path: YAML file (config/settings.yaml if None); a missing
            file means defaults only

    Raises:
        ValueError: If the file does not hold a mapping
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_FILE

    sections: Any = load_yaml(path) if path.exists() else None
    if sections is None:
        sections = {}
    if not isinstance(sections, dict):
        raise ValueError(f"{path} must contain a mapping of settings sections")

    return Settings(**sections)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Cached settings shared by the whole process.

    Example:
        >>> get_settings().retrieval.pipeline_top_k
        8
    """
    return build_settings()


def reload_settings() -> Settings:
    """Drop the cached settings and read them again."""
    get_settings.cache_clear()
    return get_settings()
