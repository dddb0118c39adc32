"""
Alert Relay - Structured Logging Configuration
"""

import logging
import sys
from typing import Any, Dict

import structlog

from alertrelay.core.config import settings

SECRET_KEYS = ("password", "passwd", "secret", "token", "credential")


def setup_logging() -> None:
    """Configure structured logging with structlog."""
    
    log_level = logging.DEBUG if settings.APP_DEBUG else logging.INFO
    
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    
    # slixmpp is chatty at DEBUG
    logging.getLogger("slixmpp").setLevel(logging.WARNING)
    
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    
    if settings.LOG_REDACT_SECRETS:
        shared_processors.append(secret_filter_processor)
    
    # Development: Pretty console output
    if settings.APP_ENV == "development":
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        # Production: JSON output for log aggregation
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def secret_filter_processor(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Mask credentials in log events."""
    for key in list(event_dict.keys()):
        key_lower = key.lower()
        if any(secret in key_lower for secret in SECRET_KEYS):
            value = event_dict[key]
            if isinstance(value, str) and len(value) > 0:
                event_dict[key] = f"[REDACTED:{len(value)} chars]"
            else:
                event_dict[key] = "[REDACTED]"
    
    return event_dict
