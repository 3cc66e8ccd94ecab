# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""structlog setup for StudyCompanion.

Library modules log through ``logging.getLogger(__name__)``. Applications
call ``setup_logging`` once at startup; it installs a single stdout
handler whose formatter pushes stdlib records through the structlog
processor chain. Records from structlog loggers and stdlib loggers
therefore share one format: a readable console layout while developing,
one JSON object per line otherwise.

Example:
    >>> setup_logging(get_settings())
    >>> bind_context(student_id="student-1")
    >>> logging.getLogger("studycompanion.demo").info("Card order computed")
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from studycompanion.core.config.settings import Settings

PACKAGE_LOGGER = "studycompanion"

# Third-party loggers kept at WARNING regardless of the configured level
QUIET_LOGGERS = ("asyncio",)


def _pre_chain() -> list[Processor]:
    """Processors applied to every record before rendering."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(settings: "Settings", pre_chain: list[Processor]) -> Processor:
    if settings.is_development or settings.debug:
        return structlog.dev.ConsoleRenderer(colors=True)

    pre_chain.append(structlog.processors.format_exc_info)
    return structlog.processors.JSONRenderer()


def setup_logging(settings: "Settings") -> None:
    """Route all logging through structlog.

    Console rendering is used in development or when ``debug`` is set;
    any other environment emits JSON lines. Calling this again replaces
    the previous root handler.

    Args:
        settings: Provides ``log_level``, ``environment`` and ``debug``.
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    pre_chain = _pre_chain()
    renderer = _renderer(settings, pre_chain)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, for callers that want key-value events."""
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Attach key-value pairs to every record logged from this context.

    Typical keys are ``student_id`` or ``session_id`` for the duration of
    one request.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Remove everything bound with bind_context."""
    structlog.contextvars.clear_contextvars()
