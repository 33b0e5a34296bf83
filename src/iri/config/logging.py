"""structlog rendering for the ``iri`` logger namespace.

The library only ever logs through stdlib loggers under ``iri``.  An
application that wants those records rendered by structlog calls
:func:`configure_logging`; the root logger and the host's own handlers
are left untouched.

Two output modes:
- Human (default): console output to stderr
- JSON (log_json): Structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "iri"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> logging.Logger:
    """Route ``iri`` records through a structlog formatter on stderr.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.

    Returns:
        The configured ``iri`` logger. Repeated calls replace its handler
        rather than stacking a new one.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    iri_logger = logging.getLogger(LOGGER_NAME)
    for old in iri_logger.handlers[:]:
        iri_logger.removeHandler(old)
    iri_logger.addHandler(handler)
    iri_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    # Rendered here only, never forwarded to the root handlers.
    iri_logger.propagate = False
    return iri_logger
