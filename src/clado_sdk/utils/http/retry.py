"""Retry policy and jittered exponential backoff.

The request engine retries rate-limited responses (429), server errors
(5xx) and transport failures, all drawing from one shared retry budget.
Delays between backoff retries grow exponentially up to a ceiling, with
a small random jitter so that many clients failing together do not retry
in lockstep.
"""

import random
from dataclasses import dataclass

from ...exceptions import DEFAULT_RETRY_AFTER

JITTER_FRACTION = 0.1


@dataclass(frozen=True)
class RetryConfig:
    """Retry settings for one client.

    :param max_retries: Retries allowed per call after the first attempt
    :type max_retries: int
    :param initial_delay: Backoff delay for the first retry, in seconds
    :type initial_delay: float
    :param max_delay: Ceiling for the exponential growth, in seconds
    :type max_delay: float
    :param default_retry_after: Wait used when a 429 carries no usable
                                Retry-After header, in seconds
    :type default_retry_after: int
    """

    max_retries: int = 3
    initial_delay: float = 1.0
    max_delay: float = 30.0
    default_retry_after: int = DEFAULT_RETRY_AFTER


DEFAULT_RETRY_CONFIG = RetryConfig()


def calculate_backoff(attempt: int, initial_delay: float, max_delay: float) -> float:
    """Calculate a jittered exponential backoff delay.

    The exponential term ``initial_delay * 2 ** attempt`` is clamped to
    ``max_delay`` first, then up to +/-10% jitter is added. The result can
    therefore exceed ``max_delay`` by at most 10%.

    :param attempt: Zero-based retry attempt
    :type attempt: int
    :param initial_delay: Delay for attempt 0
    :type initial_delay: float
    :param max_delay: Ceiling applied before jitter
    :type max_delay: float
    :return: Delay in the same unit as the inputs
    :rtype: float
    """
    # large exponents overflow float conversion
    if attempt >= 64:
        delay = max_delay
    else:
        delay = min(initial_delay * (2**attempt), max_delay)
    jitter = delay * JITTER_FRACTION * random.uniform(-1.0, 1.0)
    return delay + jitter


def should_retry_status(status_code: int) -> bool:
    """Determine if a status code is retryable (429 or 5xx)."""
    return status_code == 429 or 500 <= status_code < 600
