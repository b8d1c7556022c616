"""HTTP utilities public API (barrel module).

This package provides:
- URL construction with repeated array parameters
- Option-name normalization to the API's wire names
- Jittered exponential backoff and retry settings
- The request engine with typed error mapping

Recommended import pattern for consumers:
    from clado_sdk.utils.http import build_url, make_request, to_snake_case
"""

from .params import SNAKE_CASE_MAP, to_snake_case
from .request import make_request, parse_error_response, parse_retry_after
from .retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    calculate_backoff,
    should_retry_status,
)
from .url import build_url

__all__ = [
    "build_url",
    "to_snake_case",
    "SNAKE_CASE_MAP",
    "calculate_backoff",
    "should_retry_status",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "make_request",
    "parse_error_response",
    "parse_retry_after",
]
