"""
Logging Configuration

Structured logging for the cleaning pipeline using structlog.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

from config.settings import settings

APP_NAME = "housing_cleaner"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Tag every log entry with the application name and environment.
    """
    event_dict["app"] = APP_NAME
    event_dict["environment"] = settings.environment
    return event_dict


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> structlog.BoundLogger:
    """
    Configure structured logging for a cleaning run.

    Args:
        log_level: Overrides settings.log_level
        log_format: Overrides settings.log_format ("json" or "console")

    Returns:
        Configured structlog logger instance
    """
    level = (log_level or settings.log_level).upper()
    fmt = log_format or settings.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.processors.ExceptionRenderer())
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger(APP_NAME)


def get_logger(name: str = None) -> structlog.BoundLogger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


def bind_stage(stage: str) -> None:
    """Attach the current pipeline stage to every subsequent log entry."""
    structlog.contextvars.bind_contextvars(stage=stage)


def clear_stage() -> None:
    """Remove the pipeline stage from the logging context."""
    structlog.contextvars.unbind_contextvars("stage")
