"""
Logging Configuration - Shared Layer

structlog is routed through the standard library so that records emitted by
uvicorn, FastAPI and TensorFlow share the same handlers and renderer as the
sidecar's own dotted events (``scoring.cycle.completed`` and friends).
"""

import logging
import os
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

from predict_sidecar.shared.consts import EnumEnvironment

# Loggers from third-party libraries that are too chatty at INFO.
_NOISY_LOGGERS = ("tensorflow", "absl", "uvicorn.access")


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _select_renderer(environment: str) -> Processor:
    if environment.lower() == EnumEnvironment.PRODUCTION.value:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _build_handlers(file_path: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if file_path:
        handlers.append(logging.FileHandler(file_path))
    return handlers


def configure_logging(
    level: Optional[str] = None,
    file_path: Optional[str] = None,
    environment: str = "development",
) -> None:
    """
    Configure stdlib logging and structlog for the process.

    Called once at import of the entry points, before settings are loaded,
    and again from :func:`update_logging_from_settings` once they are.

    Args:
        level: Log level name; falls back to ``LOG_LEVEL`` then ``INFO``.
        file_path: Optional log file; falls back to ``LOG_FILE_PATH``.
        environment: Deployment environment; production renders JSON.
    """
    log_level = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    log_file = file_path or os.environ.get("LOG_FILE_PATH")
    numeric_level = getattr(logging, log_level, logging.INFO)

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=_select_renderer(environment),
        foreign_pre_chain=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        ],
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = _build_handlers(log_file)
    for handler in handlers:
        handler.setFormatter(formatter)
    root_logger.handlers = handlers
    root_logger.setLevel(numeric_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    get_logger(__name__).debug(
        "logging.configured", level=log_level, file_path=log_file
    )


def update_logging_from_settings(settings: Any) -> None:
    """
    Reconfigure logging from the loaded application settings.

    Args:
        settings: ``AppSettings`` (or any object exposing ``logging.level``,
            ``logging.file_path`` and ``environment``).
    """
    level = getattr(settings.logging.level, "value", settings.logging.level)
    environment = getattr(settings.environment, "value", settings.environment)
    configure_logging(
        level=str(level),
        file_path=settings.logging.file_path,
        environment=str(environment),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger configured for the project."""
    return structlog.get_logger(name)
