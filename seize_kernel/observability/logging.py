"""
Structured logging for the kernel.

Every component logs through structlog so that phase results, iteration
boundaries and charter advisories come out as key/value events.
"""

import logging
import sys
from typing import Any, Dict

import structlog


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    service_name: str = "seize-kernel",
) -> None:
    """Configure stdlib logging and structlog. Safe to call more than once."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )
    logging.getLogger().setLevel(getattr(logging, log_level.upper(), logging.INFO))

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to a module name."""
    return structlog.get_logger(name)


def bind_run_context(**values: Any) -> Dict[str, Any]:
    """Attach values (e.g. run_id, iteration) to every subsequent log event."""
    structlog.contextvars.bind_contextvars(**values)
    return structlog.contextvars.get_contextvars()


def clear_run_context(*keys: str) -> None:
    """Remove run-scoped values bound with bind_run_context."""
    structlog.contextvars.unbind_contextvars(*keys)
