"""Logging configuration for gitscript.

Every message goes to two places: the terminal, through rich, and an
append-only log file that keeps the history of earlier runs. Fetch threads
log concurrently; each handler holds its own lock while emitting a record,
so a record is always written whole and never interleaved with another.

Directory names on POSIX are bytes and need not be valid UTF-8. Python
carries such names as surrogate escapes, which the file handler writes as
backslash escapes instead of dropping the record.

Example:
    ```python
    from gitscript.core.logging import setup_logging

    setup_logging(log_file="gitscript.log")

    import logging
    logger = logging.getLogger(__name__)
    logger.info("Successfully fetched in repository: %s", "/src/project")
    ```
"""

import logging
import sys
from pathlib import Path
from types import TracebackType
from typing import List, Optional, Type

from rich.console import Console
from rich.logging import RichHandler

console = Console()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def console_handler(debug: bool = False) -> RichHandler:
    """Build the terminal handler.

    Paths and git output are printed verbatim, so rich markup stays off.
    """
    handler = RichHandler(
        console=console,
        show_path=debug,
        enable_link_path=debug,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
    )
    handler.setLevel(logging.DEBUG if debug else logging.INFO)
    return handler


def file_handler(log_file: str, log_format: str = LOG_FORMAT) -> logging.FileHandler:
    """Open ``log_file`` for appending, creating parent directories.

    Raises:
        OSError: If the directory or the file cannot be created.
    """
    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(
        log_path, mode="a", encoding="utf-8", errors="backslashreplace"
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(log_format))
    return handler


def log_uncaught(
    exc_type: Type[BaseException],
    exc_value: BaseException,
    exc_traceback: Optional[TracebackType],
) -> None:
    """``sys.excepthook`` replacement that sends crashes to the log."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))


def setup_logging(
    debug: bool = False,
    log_file: Optional[str] = None,
    log_format: str = LOG_FORMAT,
) -> None:
    """Send log records to the terminal and, optionally, a log file.

    Any handlers already on the root logger are closed and replaced, so the
    function can be called again (e.g. by tests) without leaking files. The
    file is opened before anything is changed; if that fails, logging is
    left as it was.

    Args:
        debug: Whether to enable debug logging (default: False).
        log_file: Optional path to the log file. ``~`` is expanded.
        log_format: Format string for file log records.

    Raises:
        OSError: If the log file cannot be opened.
    """
    handlers: List[logging.Handler] = [console_handler(debug)]
    if log_file:
        handlers.append(file_handler(log_file, log_format))

    root_logger = logging.getLogger()
    for old in list(root_logger.handlers):
        root_logger.removeHandler(old)
        old.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    sys.excepthook = log_uncaught

    logger.debug("Logging initialized (debug=%s)", debug)
    if log_file:
        logger.debug("Log file: %s", log_file)
