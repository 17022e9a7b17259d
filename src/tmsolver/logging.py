"""Logging utilities for tmsolver.

tmsolver logs through loguru and stays silent unless a caller opts in with
``enable_logging()``. A custom SEARCH level marks the start and the result of
each decision tree search; search internals log at DEBUG and TRACE.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) so
    that ``enable_logging()`` does not print every record twice. When an
    application has already replaced handler 0 before importing tmsolver the
    removal is skipped silently. Configure your own loguru handlers after
    importing tmsolver to be safe.
"""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

# Custom SEARCH level, between INFO (20) and WARNING (30)
SEARCH_LEVEL: Final[str] = "SEARCH"
SEARCH_LEVEL_NUMBER: Final[int] = 25


def _register_search_level() -> None:
    """Register the SEARCH level with loguru unless it already exists.

    loguru cannot change the number of an existing level, so a pre-existing
    SEARCH level with a different number only triggers a UserWarning.
    """
    try:
        existing_level = logger.level(SEARCH_LEVEL)
    except ValueError:
        logger.level(SEARCH_LEVEL, no=SEARCH_LEVEL_NUMBER, icon="🔎")
    else:
        if existing_level.no != SEARCH_LEVEL_NUMBER:
            msg = (
                f"SEARCH level already registered with numeric value {existing_level.no},"
                f" expected {SEARCH_LEVEL_NUMBER}"
            )
            warnings.warn(msg, stacklevel=2)


_register_search_level()

type LogLevel = Literal[
    "TRACE",
    "DEBUG",
    "INFO",
    "SEARCH",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

type LogFormat = Literal["short", "full"]

_SHORT_FORMAT: Final[str] = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{function}</cyan> - "
    "<level>{message}</level> {extra}"
)
_FULL_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level> {extra}"
)


class LoggingHandle:
    """Owns one loguru handler added by ``enable_logging``.

    Disabling the last active handle turns tmsolver logging off again.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     build_optimal_tree(candidates, catalogue, tests_per_round=3)

        >>> handle = enable_logging()  # doctest: +SKIP
        >>> handle.disable()  # doctest: +SKIP
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        """Initialize the handle.

        Args:
            handler_id (int): The loguru handler ID returned by ``logger.add()``.
        """
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's handler; idempotent.

        When no other handle remains active, ``logger.disable("tmsolver")`` is
        called, which also silences handlers added independently of
        ``enable_logging``.
        """
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        """Enter the context manager.

        Returns:
            LoggingHandle: This handle.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Disable the handle on context exit."""
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Return how many handles are currently enabled."""
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = SEARCH_LEVEL,
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Route tmsolver log records to stderr.

    Each call adds an independent handler; dispose of it with the returned
    handle's ``disable()`` method or by using the handle as a context manager.

    Args:
        level (LogLevel): Minimum level to display. The default "SEARCH" shows
            one line when a search starts and one when it ends. "DEBUG" adds
            every sub-problem solved at a round boundary; "TRACE" also shows
            each rejected recombination and can be very verbose.
        log_format (LogFormat): "short" prints time, level and function;
            "full" adds the date, module and line number.

    Returns:
        LoggingHandle: Handle managing the new handler.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_tmsolver_record,
        format=_SHORT_FORMAT if log_format == "short" else _FULL_FORMAT,
    )
    return LoggingHandle(handler_id)


def _is_tmsolver_record(record: Record) -> bool:
    """Return whether a record was emitted from within the tmsolver package.

    Args:
        record (Record): The loguru record to filter.

    Returns:
        bool: True for tmsolver records.
    """
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
