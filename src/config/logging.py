"""
structlog setup for the costing engine.

Every event carries the app identity and the costing policy in force, so a
clamped-stock warning reads correctly without the deployment config at hand.
Use cases bind the reporting window with ``bind_summary_context``; replayer
and store log lines emitted inside that block inherit it via contextvars.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from typing import Any

import structlog
from structlog.types import Processor

from src.config.settings import get_settings

# Chatty at INFO during a replay
QUIET_LOGGERS = ("aiosqlite", "asyncio")


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add application name, version and environment."""
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["version"] = settings.app_version
    event_dict["environment"] = settings.environment
    return event_dict


def add_costing_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add the negative stock policy and output scale unless already bound."""
    costing = get_settings().costing
    event_dict.setdefault("negative_stock_policy", costing.negative_stock_policy)
    event_dict.setdefault("money_scale", costing.money_scale)
    return event_dict


def _renderers(environment: str) -> list[Processor]:
    if environment == "development":
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging() -> None:
    """Configure structlog and the stdlib root logger from settings."""
    settings = get_settings()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            add_app_context,
            add_costing_context,
            *_renderers(settings.environment),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=settings.log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def bind_summary_context(
    from_date: date, to_date: date, supplier_id: str | None = None
) -> Iterator[None]:
    """Tag log lines emitted inside the block with the reporting window."""
    with structlog.contextvars.bound_contextvars(
        from_date=from_date.isoformat(),
        to_date=to_date.isoformat(),
        supplier_id=supplier_id,
    ):
        yield


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
