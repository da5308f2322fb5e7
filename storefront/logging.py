"""
Storefront logging.

Every module asks for its logger here so all output shares one stdout
handler configured from the environment:

    LOG_LEVEL    DEBUG / INFO / WARNING / ... (INFO when unset or unknown)
    VERCEL=1     drop timestamps, the platform stamps each line itself

    from storefront.logging import get_logger
    logger = get_logger(__name__)
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Client libraries that log each outgoing request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "stripe", "postgrest")

_CONTROL_CHARS = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": ""}


def _get_log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def _configure_root_logger() -> None:
    """Install the stdout handler once; an already configured root is left alone."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = _get_log_level()
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    on_vercel = os.environ.get("VERCEL") == "1"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if on_vercel else LOG_FORMAT))

    root.setLevel(level)
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Neutralise line breaks and NULs so one value cannot forge extra log lines (CWE-117)."""
    for char, replacement in _CONTROL_CHARS.items():
        value = value.replace(char, replacement)
    return value


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """
    Make an untrusted string safe to log.

    Control characters are escaped, then the result is cut to
    ``max_length`` with a trailing ``...``. Empty values log as ``N/A``.
    """
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


def mask_email_for_logging(email: str | None) -> str:
    """Customer email with the local part hidden: ``shopper@example.com`` -> ``s***@example.com``."""
    if not email:
        return "N/A"
    local, sep, domain = str(email).partition("@")
    if not sep:
        return "***"
    return sanitize_string_for_logging(f"{local[:1]}***@{domain}", 80)


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "mask_email_for_logging",
    "sanitize_string_for_logging",
]
