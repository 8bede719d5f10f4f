"""Structured logging for the cbpro library, built on structlog.

Library loggers are stdlib loggers under the ``cbpro`` namespace wrapped by
structlog. They never go through structlog's global configuration, so
importing or calling the client prints nothing until an application attaches
a handler. ``setup_logging`` does that for the ``cbpro`` command.
"""

import logging
import os
import sys
from typing import TextIO

import structlog

LIBRARY_LOGGER = "cbpro"

_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


def setup_logging(log_level: str = "INFO", stream: TextIO | None = None) -> logging.Handler:
    """Attach a rendering handler to the ``cbpro`` logger.

    Events go to ``stream`` (stderr by default) so command output on stdout
    stays machine-readable. The root logger is left alone. Calling this again
    replaces the previous handler.

    Rendering format is controlled by the LOG_FORMAT environment variable:
    - "json" for machine-readable output
    - "console" for human-readable output (default)
    """
    if os.environ.get("LOG_FORMAT", "console").lower() == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.handlers = [handler]
    library_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    library_logger.propagate = False
    return handler


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the stdlib logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
