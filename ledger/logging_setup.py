"""
Logging setup

Structured logging for the whole package goes through structlog,
rendered on top of the standard library logging module.

Library modules never configure logging themselves. They only call
``get_logger(__name__)``. The composition root (``create_dashboard``)
calls ``configure_logging``; repeated calls are no-ops.
"""

import logging
import sys
from typing import Optional

import structlog

from ledger.config import get_settings


_CONFIGURED = False


def configure_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> None:
    """
    Configure structlog and the stdlib root handler exactly once.

    Args:
        level: Level name (e.g. "DEBUG"). Defaults to AppSettings.log_level.
        json_output: JSON lines when True, console rendering when False.
                     Defaults to AppSettings.log_json.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    app_settings = get_settings().app
    level = (level or app_settings.log_level).upper()
    if json_output is None:
        json_output = app_settings.log_json

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger bound to ``name``."""
    return structlog.get_logger(name)
