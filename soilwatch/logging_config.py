"""
Structured logging configuration using structlog
JSON logs in production, coloured console output for local development
"""
import logging
import structlog
from typing import Any, Optional

from .core.config import settings


def add_app_context(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Add application-level context to all log entries"""
    event_dict['app'] = 'soilwatch-api'
    event_dict['version'] = settings.app_version
    event_dict['environment'] = settings.environment
    return event_dict


def drop_color_message_key(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Uvicorn adds 'color_message' for its own formatter; JSON output does not need it"""
    event_dict.pop('color_message', None)
    return event_dict


def configure_logging(log_level: str = "INFO", json_logs: bool = True):
    """
    Configure structured logging for the application

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON logs. If False, use human-readable format

    Returns:
        Configured structlog logger

    Usage:
        logger = get_logger(__name__)
        logger.info("reading_ingested", sensor_id=12, alerts=2)
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        add_app_context,
        drop_color_message_key,
    ]

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level] + shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Route stdlib records (uvicorn, sqlalchemy, our own logging.getLogger users) through structlog
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level.upper())

    return structlog.get_logger()


def get_logger(name: Optional[str] = None):
    """
    Get a logger instance with optional name

    Args:
        name: Logger name (usually __name__ of the module)
    """
    # Named loggers need the stdlib factory; set it up from settings if nobody has yet
    if not structlog.is_configured():
        configure_logging(log_level=settings.log_level, json_logs=settings.json_logs)

    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()
