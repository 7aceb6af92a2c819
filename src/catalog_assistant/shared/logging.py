"""
Logging Module - Rich console logging for the assistant.
========================================================

One place configures logging for the assistant, the CLI and the
Streamlit app:
- Log records go to stderr through Rich, so answers printed on stdout
  (e.g. `query -f json`) stay pipe-friendly
- An optional log file keeps long chat sessions around
- configure_logging() applies the `logging` section of the settings
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from catalog_assistant.shared.config import Settings

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Libraries that are chatty at INFO
QUIET_LOGGERS = ["streamlit", "watchdog", "urllib3"]

_configured = False
_stderr_console = Console(stderr=True)


def _console_handler(use_rich: bool, log_format: str) -> logging.Handler:
    if use_rich:
        handler: logging.Handler = RichHandler(
            console=_stderr_console,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(log_format))
    return handler


def _file_handler(log_file: str, log_format: str) -> logging.Handler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(log_format))
    return handler


def setup_logging(
    level: str = "INFO",
    use_rich: bool = True,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Install the root handlers.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_rich: Rich handler if True, plain stderr stream otherwise
        log_file: Also write records to this file
        log_format: Format for the plain and file handlers
        force: Replace handlers installed by an earlier call

    Note:
        Without force only the first call takes effect.
    """
    global _configured

    if _configured and not force:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    log_format = log_format or DEFAULT_FORMAT

    handlers = [_console_handler(use_rich, log_format)]
    if log_file:
        handlers.append(_file_handler(log_file, log_format))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)
    for handler in handlers:
        handler.setLevel(numeric_level)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).debug(
        f"Logging configured: level={level}, rich={use_rich}, file={log_file}"
    )


def configure_logging(settings: Optional["Settings"] = None, verbose: bool = False) -> None:
    """
    Apply the logging settings, replacing any earlier setup.

    Args:
        settings: Settings to read (get_settings() if None)
        verbose: Force DEBUG regardless of the configured level
    """
    if settings is None:
        from catalog_assistant.shared.config import get_settings

        settings = get_settings()

    setup_logging(
        level="DEBUG" if verbose else settings.get_effective_log_level(),
        use_rich=settings.logging.rich_console,
        log_file=settings.logging.file or None,
        log_format=settings.logging.format,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger, installing the default handlers on first use.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Corpus loaded")
    """
    if not _configured:
        setup_logging()

    return logging.getLogger(name)
