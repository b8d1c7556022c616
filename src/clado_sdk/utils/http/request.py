"""Request engine for the Clado API.

This module turns one logical API call into a resilient HTTP exchange:
it composes authentication headers, sends the request through an
``httpx.AsyncClient``, parses JSON responses and maps failures onto the
typed error hierarchy in :mod:`clado_sdk.exceptions`.

Transient failures are retried within a single per-call budget:

- 429 responses wait for the server's Retry-After hint
- 5xx responses and transport errors wait for a jittered exponential backoff

401, 404, 422 and any other non-success status are raised on first sight.
"""

import asyncio
import json
import logging
import math
import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Awaitable, Callable, Mapping, Optional

import httpx

from ...exceptions import CladoError, ErrorKind, classify_error
from ..security import sanitize_url
from .retry import (
    DEFAULT_RETRY_CONFIG,
    RetryConfig,
    calculate_backoff,
    should_retry_status,
)

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


def parse_error_response(response: httpx.Response) -> str:
    """Extract a human-readable detail from a failed response.

    Looks for ``detail``, ``error`` or ``message`` in a JSON body, then
    falls back to the raw body text, then to the HTTP reason phrase.

    :param response: The failed response
    :type response: httpx.Response
    :return: Detail message
    :rtype: str
    """
    text = response.text
    try:
        data = json.loads(text)
    except ValueError:
        return text or response.reason_phrase

    if isinstance(data, dict):
        for key in ("detail", "error", "message"):
            value = data.get(key)
            if value:
                return value if isinstance(value, str) else json.dumps(value)
    return text or response.reason_phrase


def parse_retry_after(response: httpx.Response, default: int = 60) -> int:
    """Parse the Retry-After header into whole seconds.

    Supports both delta-seconds and HTTP-date formats. A missing or
    unparseable header yields ``default``.

    :param response: Response carrying the header
    :type response: httpx.Response
    :param default: Fallback in seconds
    :type default: int
    :return: Seconds to wait
    :rtype: int
    """
    retry_after = response.headers.get("retry-after", "").strip()
    if not retry_after:
        return default

    match = re.match(r"\d+", retry_after)
    if match:
        return int(match.group())

    try:
        retry_date = parsedate_to_datetime(retry_after)
    except (TypeError, ValueError):
        logger.warning(f"Failed to parse Retry-After header '{retry_after}'")
        return default
    delay = (retry_date - datetime.now(retry_date.tzinfo)).total_seconds()
    return max(0, math.ceil(delay))


def _parse_success(response: httpx.Response) -> Any:
    text = response.text
    if not text:
        return {}
    try:
        return json.loads(text)
    except ValueError as e:
        raise CladoError(
            response.status_code, f"Failed to parse response JSON: {e}"
        ) from e


async def make_request(
    url: str,
    api_key: str,
    *,
    method: str = "GET",
    body: Any = None,
    headers: Optional[Mapping[str, str]] = None,
    retry: bool = True,
    max_retries: Optional[int] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    retry_config: Optional[RetryConfig] = None,
    sleep: SleepFunc = asyncio.sleep,
) -> Any:
    """Make an authenticated request to the Clado API with retries.

    :param url: Full URL to request
    :type url: str
    :param api_key: API key sent as a bearer token
    :type api_key: str
    :param method: HTTP method
    :type method: str
    :param body: Optional JSON-serializable request body
    :type body: Any
    :param headers: Optional headers layered over the defaults
    :type headers: Optional[Mapping[str, str]]
    :param retry: Whether transient failures are retried
    :type retry: bool
    :param max_retries: Retry budget override for this call
    :type max_retries: Optional[int]
    :param http_client: Client used for the exchange; a short-lived one
                        is opened when omitted
    :type http_client: Optional[httpx.AsyncClient]
    :param retry_config: Backoff settings (defaults to 3 retries, 1s..30s)
    :type retry_config: Optional[RetryConfig]
    :param sleep: Coroutine function used to wait between attempts
    :type sleep: SleepFunc
    :return: Parsed JSON response, ``{}`` for an empty body
    :rtype: Any
    :raises CladoError: One of the typed error kinds
    """
    config = retry_config or DEFAULT_RETRY_CONFIG
    if max_retries is None:
        max_retries = config.max_retries

    request_headers = httpx.Headers(
        {
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }
    )
    content: Optional[str] = None
    if body is not None:
        request_headers["Content-Type"] = "application/json"
        content = json.dumps(body)
    # overrides replace defaults regardless of key case
    request_headers.update(headers or {})

    if http_client is None:
        async with httpx.AsyncClient(follow_redirects=True) as client:
            return await _send_with_retry(
                client, method, url, request_headers, content,
                retry, max_retries, config, sleep,
            )
    return await _send_with_retry(
        http_client, method, url, request_headers, content,
        retry, max_retries, config, sleep,
    )


async def _send_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    headers: httpx.Headers,
    content: Optional[str],
    retry: bool,
    max_retries: int,
    config: RetryConfig,
    sleep: SleepFunc,
) -> Any:
    safe_url = sanitize_url(url)
    attempt = 0

    while True:
        logger.debug(f"{method} {safe_url} (attempt {attempt + 1}/{max_retries + 1})")
        can_retry = retry and attempt < max_retries

        try:
            response = await client.request(method, url, headers=headers, content=content)
        except httpx.RequestError as e:
            if not can_retry:
                logger.error(
                    f"Network error for {method} {safe_url} after {attempt + 1} attempts: {e}"
                )
                raise CladoError(0, f"Network error: {e}") from e
            delay = calculate_backoff(attempt, config.initial_delay, config.max_delay)
            logger.info(
                f"Network error for {method} {safe_url}, retry {attempt + 1}/{max_retries} "
                f"after {delay:.2f}s: {e}"
            )
            await sleep(delay)
            attempt += 1
            continue

        if response.is_success:
            return _parse_success(response)

        status = response.status_code
        detail = parse_error_response(response)
        retry_after = (
            parse_retry_after(response, config.default_retry_after)
            if status == 429
            else None
        )
        error = classify_error(status, detail, retry_after)

        if error.kind is ErrorKind.RATE_LIMIT and can_retry:
            logger.warning(
                f"Rate limited on {method} {safe_url}, retry {attempt + 1}/{max_retries} "
                f"after {error.retry_after}s"
            )
            await sleep(error.retry_after)
        elif (
            error.kind is ErrorKind.GENERIC
            and should_retry_status(status)
            and can_retry
        ):
            delay = calculate_backoff(attempt, config.initial_delay, config.max_delay)
            logger.info(
                f"Server error {status} on {method} {safe_url}, "
                f"retry {attempt + 1}/{max_retries} after {delay:.2f}s"
            )
            await sleep(delay)
        else:
            if attempt > 0:
                logger.error(
                    f"Request {method} {safe_url} failed after {attempt + 1} attempts: "
                    f"{status}"
                )
            raise error

        attempt += 1
