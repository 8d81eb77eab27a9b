"""Structured logging for kubecore using structlog.

kubecore is a library, so it never configures logging on import. Applications
call :func:`setup_logging` once (typically with the level from
:func:`kubecore.config.load_config`) to get JSON lines on stderr, or pass
``json_output=False`` for a human-readable console renderer.
"""

from __future__ import annotations

import logging
import sys
from typing import cast

import structlog
from structlog.typing import FilteringBoundLogger, Processor


def setup_logging(level: str = "info", *, json_output: bool = True) -> None:
    """Configure structlog output for the whole process."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer: Processor = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> FilteringBoundLogger:
    """Get a logger bound with a ``kubecore.<component>`` name."""
    return cast(FilteringBoundLogger, structlog.get_logger(component=f"kubecore.{component}"))
