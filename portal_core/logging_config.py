"""
Logging Setup
=============
Configure structlog for services embedding the portal core.

Usage:
    from portal_core.logging_config import setup_logging
    
    setup_logging(service_name="text-portal", level="INFO")
"""

import logging
import sys

import structlog


def setup_logging(
    service_name: str,
    level: str = "INFO",
    json_output: bool = True,
) -> None:
    """
    Configure structlog and the stdlib root logger.
    
    Args:
        service_name: Bound to every event as "service"
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: JSON lines for production, console renderer otherwise
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    structlog.contextvars.bind_contextvars(service=service_name)
    
    structlog.get_logger(__name__).info(
        "logging_configured",
        level=level.upper(),
        json_output=json_output,
    )
