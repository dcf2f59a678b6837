"""
Logging setup for dir2context.

Library modules log structured events through :func:`get_logger`; the CLI
decides where they end up. Three sinks exist: nothing (the default while a
report or JSON summary owns the terminal), stderr above a threshold
(warnings by default, everything with ``--verbose``) and a log file next to
the output (``--log``).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger, ProcessorFormatter
from structlog.typing import Processor

_PRE_CHAIN: tuple[Processor, ...] = (
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.TimeStamper(fmt="iso"),
)


def _bridge_structlog(min_level: int) -> None:
    structlog.configure(
        processors=_PRE_CHAIN + (ProcessorFormatter.wrap_for_formatter,),
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        # the level can change between runs in one process (--verbose)
        cache_logger_on_first_use=False,
    )


def _plain_formatter() -> ProcessorFormatter:
    return ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=_PRE_CHAIN,
    )


def _install(handler: logging.Handler, level: int) -> None:
    """Make ``handler`` the only sink of the root logger."""
    _bridge_structlog(level)
    root = logging.getLogger()
    for previous in list(root.handlers):
        root.removeHandler(previous)
        previous.close()
    if not isinstance(handler, logging.NullHandler):
        handler.setFormatter(_plain_formatter())
    root.addHandler(handler)
    root.setLevel(level)


def configure_logging(
    level: int = logging.INFO,
    enable_console: bool = True,
    console_level: Optional[int] = None,
) -> None:
    """
    Route log events to stderr, or drop them.

    Parameters
    ----------
    level:
        Lowest level that is processed at all.
    enable_console:
        When False, events are discarded so the CLI's own output stays clean.
    console_level:
        Threshold of the stderr handler. Defaults to ``level``.
    """
    logging.captureWarnings(True)
    if not enable_console:
        _install(logging.NullHandler(), level)
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(console_level if console_level is not None else level)
    _install(handler, level)


def redirect_logging_to_file(path: Path, level: int = logging.INFO) -> None:
    """Write every event at ``level`` or above to ``path``, replacing other sinks."""
    path.parent.mkdir(parents=True, exist_ok=True)
    _install(logging.FileHandler(path, mode="w", encoding="utf-8"), level)


def get_logger(name: Optional[str] = None) -> BoundLogger:
    return structlog.get_logger(name)
