"""structlog loggers for the package, and an opt-in handler for host applications.

Every module logs through :func:`get_logger`, which routes structlog events to
stdlib loggers under the ``data_extractor`` namespace without touching the
process-wide structlog configuration. Nothing is printed until the host
application either configures stdlib logging itself or calls
:func:`configure_logging`, which attaches a JSON (or console) handler to the
``data_extractor`` logger only. The root logger is never modified.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

import structlog

LOGGER_NAMESPACE = "data_extractor"


def _rename_logger_to_module(
    logger: logging.Logger, method_name: str, event_dict: dict
) -> dict:
    """Rename 'logger' key to 'module' for structured log field consistency."""
    if "logger" in event_dict:
        event_dict["module"] = event_dict.pop("logger")
    return event_dict


_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    _rename_logger_to_module,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def get_logger(name: str = LOGGER_NAMESPACE) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to the stdlib logger ``name``.

    Events below the stdlib logger's effective level are dropped before any
    processor runs, so debug events on the filtering path cost a level check.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def configure_logging(
    log_level: str | None = None,
    json_format: bool | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Attach a structlog-rendering handler to the ``data_extractor`` logger.

    Arguments left as None are taken from the extractor settings. Calling
    this again replaces the handler installed by the previous call. Events
    stop propagating to the root logger so they are not emitted twice.
    """
    if log_level is None or json_format is None:
        from data_extractor.config.loader import get_settings

        settings = get_settings()
        log_level = settings.log_level if log_level is None else log_level
        json_format = settings.log_json if json_format is None else json_format

    if json_format:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    reset_logging()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    package_logger.propagate = False
    return handler


def reset_logging() -> None:
    """Remove handlers and level set on the ``data_extractor`` logger."""
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
