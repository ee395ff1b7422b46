"""
Centralized logging configuration for the Nexa Rest storefront.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Cart updated")
    logger.warning("Corrupted record", exc_info=True)
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"


def _get_log_level() -> int:
    """Get log level from environment or default to INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    """Configure root logger with a stdout handler unless one exists."""
    root = logging.getLogger()

    if root.handlers:
        return

    root.setLevel(_get_log_level())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_get_log_level())

    is_production = os.environ.get("STOREFRONT_ENV") == "production"
    formatter = logging.Formatter(LOG_FORMAT_SIMPLE if is_production else LOG_FORMAT)
    handler.setFormatter(formatter)

    root.addHandler(handler)

    # Request-level noise from the HTTP stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Escape control characters that could forge log lines (CWE-117)."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: str | None) -> str:
    """
    Sanitize an ID for logging: escaped and truncated to 8 characters.

    Args:
        id_value: ID value to sanitize (can be None)

    Returns:
        Sanitized ID string or "N/A" if empty
    """
    if not id_value:
        return "N/A"
    safe_value = _escape_log_injection(str(id_value))
    return safe_value[:8] if len(safe_value) > 8 else safe_value


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Sanitize a user-controlled string for logging.

    Args:
        value: String value to sanitize (can be None)
        max_length: Maximum length to keep (default: 50)

    Returns:
        Sanitized string or "N/A" if empty
    """
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def mask_email_for_logging(email: str | None) -> str:
    """Mask the local part of an email address (``j***@example.com``)."""
    if not email:
        return "N/A"
    safe_value = _escape_log_injection(str(email))
    local, sep, domain = safe_value.partition("@")
    if not sep:
        return sanitize_id_for_logging(safe_value[:1]) + "***"
    return f"{local[:1]}***@{domain}"


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "mask_email_for_logging",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
