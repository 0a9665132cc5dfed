"""
fetchstate.observability.logging

Logging helpers for a library that lives inside someone else's process.

Responsibilities:
- Hand out `structlog` loggers to library modules.
- Offer an opt-in JSON configuration for hosts that have none of their own.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, service_name: str, level: str, force: bool = False) -> bool:
    """
    Install JSON structlog output for hosts that have not configured logging.

    An existing structlog configuration or root handler set up by the host is left alone
    unless `force=True`. Returns whether anything was configured.
    """

    if structlog.is_configured() and not force:
        return False

    if force or not logging.getLogger().handlers:
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, level.upper(), logging.INFO),
            force=force,
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return True


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Library modules only call `get_logger`; configuration is the host's decision.
# Engine events are named `operation.*`; provider lifecycle events `provider.*`.
