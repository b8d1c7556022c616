"""Log redaction and secure logging setup.

The SDK holds a bearer API key for the lifetime of a client. Nothing in
the SDK logs it directly, and the helpers here make sure it cannot leak
through log messages, headers or URLs either:

- :func:`sanitize_string` redacts tokens and API keys inside free text
- :func:`sanitize_headers` redacts credential-bearing headers
- :func:`sanitize_url` redacts credential-like query parameters
- :class:`SanitizingFormatter` applies the above to every log record
- :func:`setup_secure_logging` installs the formatter for applications
"""

import logging
import re
import sys
from typing import Any, Dict, Mapping

# Patterns for sensitive data detection
SENSITIVE_PATTERNS = {
    "jwt_token": re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
    "bearer_token": re.compile(r"Bearer\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE),
    "api_key": re.compile(r"\blk_[A-Za-z0-9_-]+"),
}

# Headers that should never be logged
SENSITIVE_HEADERS = {
    "authorization",
    "x-api-key",
    "cookie",
    "set-cookie",
}

SENSITIVE_QUERY_PARAMS = ("api_key", "apikey", "token", "access_token", "key", "secret")


def sanitize_string(value: str) -> str:
    """Redact tokens and API keys embedded in a string.

    :param value: String to sanitize
    :type value: str
    :return: String with each sensitive match replaced by a marker
    :rtype: str
    """
    if not value:
        return value
    for pattern_name, pattern in SENSITIVE_PATTERNS.items():
        value = pattern.sub(f"<{pattern_name}:REDACTED>", value)
    return value


def sanitize_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """Sanitize HTTP headers for logging.

    :param headers: HTTP headers
    :type headers: Mapping[str, Any]
    :return: New dict with credential headers redacted
    :rtype: Dict[str, Any]
    """
    sanitized: Dict[str, Any] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            if isinstance(value, str) and value:
                sanitized[key] = f"<REDACTED:length={len(value)}>"
            else:
                sanitized[key] = "<REDACTED>"
        elif isinstance(value, str):
            sanitized[key] = sanitize_string(value)
        else:
            sanitized[key] = value
    return sanitized


def sanitize_url(url: str) -> str:
    """Redact credential-like query parameters from a URL.

    :param url: URL to sanitize
    :type url: str
    :return: URL safe to log
    :rtype: str
    """
    if not url:
        return url
    for param in SENSITIVE_QUERY_PARAMS:
        url = re.sub(
            rf"([?&]{param}=)[^&\s]+", r"\1<REDACTED>", url, flags=re.IGNORECASE
        )
    return sanitize_string(url)


class SanitizingFormatter(logging.Formatter):
    """Formatter that redacts sensitive data from every record."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, then redact the rendered message.

        :param record: Log record to format
        :type record: logging.LogRecord
        :return: Sanitized log line
        :rtype: str
        """
        return sanitize_string(super().format(record))


# Global flag to track if logging has been set up
_LOGGING_CONFIGURED = False


def setup_secure_logging(level: str = "INFO") -> None:
    """Configure root logging with automatic redaction.

    Meant for applications and scripts embedding the SDK; the SDK itself
    never configures logging. Calling it twice is a no-op.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger(__name__).debug(
            "Logging already configured, skipping duplicate setup"
        )
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        SanitizingFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[handler],
        force=True,
    )

    # httpx logs full request lines at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
