"""
Structured logging configuration.

structlog renders every record through the stdlib logging handlers so that
application logs, uvicorn logs and third-party logs share one pipeline:

- console: colored key/value output, or JSON lines when log_format="json"
- <log_dir>/app.log: every record as a JSON line
- <log_dir>/error.log: ERROR and above as JSON lines

Each record carries timestamp, level, logger, event, the service metadata
(service, environment) and any contextvars bound for the current request.

Usage:
    from sample_app.core.logging_setup import configure_logging

    configure_logging(get_settings())
    logger = structlog.get_logger(__name__)
    logger.info("user_created", user_id=3)
"""

import logging
import sys
from typing import Any

import structlog

from sample_app.config.settings import Settings

APP_LOG_FILENAME = "app.log"
ERROR_LOG_FILENAME = "error.log"

# Marker attribute so reconfiguration only removes handlers installed here
_HANDLER_MARKER = "_sample_app_handler"

_service_context: dict[str, str] = {}


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Attach the default service metadata without overriding explicit fields."""
    for key, value in _service_context.items():
        event_dict.setdefault(key, value)
    return event_dict


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_context,
        structlog.processors.StackInfoRenderer(),
    ]


def _json_formatter() -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def _console_formatter() -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ],
    )


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARKER, True)
    return handler


def _remove_installed_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            handler.close()


def configure_logging(settings: Settings) -> None:
    """
    Configure structlog and the stdlib root logger from settings.

    Safe to call more than once: handlers installed by a previous call are
    closed and replaced.
    """
    _service_context.clear()
    _service_context.update(
        service=settings.service_name,
        environment=settings.app_env,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    _remove_installed_handlers(root)
    root.setLevel(settings.log_level)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(
        _json_formatter() if settings.log_format == "json" else _console_formatter()
    )
    root.addHandler(_mark(console))

    if settings.log_to_file:
        log_dir = settings.log_dir
        log_dir.mkdir(parents=True, exist_ok=True)

        app_file = logging.FileHandler(log_dir / APP_LOG_FILENAME, encoding="utf-8")
        app_file.setFormatter(_json_formatter())
        root.addHandler(_mark(app_file))

        error_file = logging.FileHandler(log_dir / ERROR_LOG_FILENAME, encoding="utf-8")
        error_file.setLevel(logging.ERROR)
        error_file.setFormatter(_json_formatter())
        root.addHandler(_mark(error_file))
