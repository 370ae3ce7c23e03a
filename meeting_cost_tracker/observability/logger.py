"""
Structured Logging

All components log through structlog on top of the stdlib logging module,
so the host application controls levels and handlers the usual way.

Events are logged with a snake_case event name plus keyword context, e.g.:

    logger.info("categories_loaded", path=str(path), count=3)

configure_logging() is called once at startup (create_app_components does
this from settings). Until then structlog runs with the defaults below.
"""

import logging
import sys
from typing import Optional

import structlog


_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog and the stdlib root logger.
    
    Args:
        level: Stdlib level name (DEBUG, INFO, WARNING, ERROR)
        json_output: Render JSON lines if True, human-readable console otherwise
    """
    root = logging.getLogger()
    # Leave handlers installed by the host application in place
    if not root.handlers:
        logging.basicConfig(format="%(message)s", stream=sys.stderr)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger, named after the calling module by convention."""
    return structlog.get_logger(name)


# Default configuration, so library use without configure_logging() still
# produces structured output at the stdlib's default level.
structlog.configure(
    processors=[*_SHARED_PROCESSORS, structlog.processors.JSONRenderer()],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)
