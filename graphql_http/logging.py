"""
Logging helpers for graphql_http.

GET requests carry variables in the URL and default headers often carry
credentials, so records emitted by the client go through a masking filter.
"""

import json
import logging
import re
import time
from typing import List, Optional, Pattern, Union

LOGGER_NAME = "graphql_http"


class SensitiveDataFilter(logging.Filter):
    """Filter to mask sensitive data in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        self.patterns: List[Pattern[str]] = [
            # API keys and tokens, also as JSON-encoded variables
            re.compile(
                r'(api[_-]?key|token|secret)(["\s]*[:=]["\s]*)([a-zA-Z0-9+/=_.-]{8,})',
                re.IGNORECASE,
            ),
            re.compile(r"(bearer\s+)([a-zA-Z0-9+/=_.-]{8,})", re.IGNORECASE),
            re.compile(
                r'(authorization["\s]*[:=]["\s]*["\']?)([a-zA-Z0-9+/=]{8,})',
                re.IGNORECASE,
            ),
            re.compile(
                r'(password|passwd|pwd)(["\s]*[:=]["\s]*)([^\s"\',&}]+)', re.IGNORECASE
            ),
            # URLs with credentials
            re.compile(r"(https?://[^:/\s]+):([^@/\s]+)@", re.IGNORECASE),
        ]

        self.replacements = [
            r"\1\2***MASKED***",
            r"\1***MASKED***",
            r"\1***MASKED***",
            r"\1\2***MASKED***",
            r"\1:***MASKED***@",
        ]

    def mask(self, message: str) -> str:
        """Apply all masking patterns to a message."""
        for pattern, replacement in zip(self.patterns, self.replacements):
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log record to mask sensitive data."""
        try:
            record.msg = self.mask(record.getMessage())
            record.args = ()
            return True

        except Exception:
            # If filtering fails, allow the record through
            return True


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": time.strftime(
                "%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    structured: bool = False,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Configure the ``graphql_http`` logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Logging level
        structured: Emit JSON lines instead of plain text
        handler: Handler to install, a console handler if omitted

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for existing in list(logger.handlers):
        if getattr(existing, "_graphql_http_handler", False):
            logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    handler.setFormatter(
        StructuredFormatter()
        if structured
        else logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    handler.addFilter(SensitiveDataFilter())
    handler._graphql_http_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
