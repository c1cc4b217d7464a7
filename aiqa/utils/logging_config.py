"""
Structured logging for AIQA.

Wraps structlog so every module logs snake_case events with keyword context:

    from aiqa.utils.logging_config import get_logger

    logger = get_logger(__name__, component="monitoring")
    logger.info("alert_created", alert_id=alert.id, severity="HIGH")

Call ``configure_logging`` once at application startup. Modules that log
before configuration still work; structlog falls back to its defaults.
"""

import logging
import sys
from typing import Any, Optional

import structlog

from aiqa.config import load_settings

_configured: bool = False


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure stdlib logging and structlog processors.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR); default AIQA_LOG_LEVEL
        json_output: Render events as JSON lines instead of console output;
            default AIQA_LOG_JSON
    """
    global _configured

    if level is None or json_output is None:
        settings = load_settings()
        level = settings.log_level if level is None else level
        json_output = settings.log_json if json_output is None else json_output

    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger().setLevel(log_level)

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    _configured = True


def get_logger(name: Optional[str] = None, **initial_context: Any) -> Any:
    """
    Get a lazy structlog logger carrying initial context.

    The logger resolves the active configuration when it emits, so module-level
    loggers follow a later configure_logging call.

    Args:
        name: Logger name (typically __name__)
        **initial_context: Key-value pairs bound to every event (e.g. component)

    Returns:
        Lazy structlog logger proxy
    """
    return structlog.get_logger(name, **initial_context)


def is_configured() -> bool:
    """Return True once configure_logging has run."""
    return _configured
