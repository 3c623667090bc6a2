"""
Shared logging configuration for the segmentation service.
"""

import sys
import structlog
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional
from contextvars import ContextVar

from .config import get_config

# Context variable for the campaign being built
campaign_id_var: ContextVar[Optional[str]] = ContextVar('campaign_id', default=None)


def configure_logging(service_name: str, log_level: Optional[str] = None) -> None:
    """Configure structured logging for a service.

    The level defaults to the configured ``log_level``.
    """
    config = get_config()
    if log_level is None:
        log_level = config.log_level
    
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
            add_service_context,
            add_campaign_context,
            add_timestamp,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )
    get_logger(f"{service_name}.logging").debug("Logging configured", log_level=log_level, env=config.env)


def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add service context to log events."""
    # Service name is the logger name prefix
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        event_dict["service"] = logger_name.split(".")[0]
    
    return event_dict


def add_campaign_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add campaign context to log events."""
    campaign_id = campaign_id_var.get()
    if campaign_id:
        event_dict["campaign_id"] = campaign_id
    
    return event_dict


def add_timestamp(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add high-precision timestamp to log events."""
    event_dict["timestamp"] = time.time()
    return event_dict


def set_campaign_context(campaign_id: Optional[str]) -> None:
    """Set campaign context in logging."""
    campaign_id_var.set(campaign_id)


@contextmanager
def campaign_context(campaign_id: Optional[str]) -> Iterator[None]:
    """Bind ``campaign_id`` to log events for the duration of the block."""
    token = campaign_id_var.set(campaign_id)
    try:
        yield
    finally:
        campaign_id_var.reset(token)


def clear_context():
    """Clear all context variables."""
    campaign_id_var.set(None)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
