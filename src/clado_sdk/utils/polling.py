"""Polling for long-running deep research jobs.

Deep research runs server-side; the client only holds the job id. Each
poll re-fetches the authoritative status, so nothing about the job is
cached between iterations.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Mapping, Optional, TypeVar

from ..exceptions import CladoError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _field(payload: Any, name: str) -> Any:
    if isinstance(payload, Mapping):
        return payload.get(name)
    return getattr(payload, name, None)


def _status_value(payload: Any) -> Optional[str]:
    status = _field(payload, "status")
    # str-valued enums compare by their value
    return getattr(status, "value", status)


async def wait_for_job(
    fetch_status: Callable[[str], Awaitable[T]],
    job_id: str,
    *,
    poll_interval: float = 2.0,
    timeout: float = 300.0,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """Poll a job until it completes, fails or the timeout passes.

    :param fetch_status: Coroutine function returning the job's current
                         status payload (a model or a mapping with
                         ``status`` and optional ``error``)
    :type fetch_status: Callable[[str], Awaitable[T]]
    :param job_id: Job identifier
    :type job_id: str
    :param poll_interval: Seconds between polls
    :type poll_interval: float
    :param timeout: Seconds to wait overall, measured from the first poll
    :type timeout: float
    :param sleep: Coroutine function used to wait between polls
    :param clock: Monotonic clock in seconds
    :return: The payload whose status is ``completed``
    :rtype: T
    :raises CladoError: Status 500 when the job fails, 408 on timeout,
                        or any error raised by ``fetch_status``
    """
    start_time = clock()

    while True:
        payload = await fetch_status(job_id)
        status = _status_value(payload)
        logger.debug(
            f"Job {job_id} status={status} progress={_field(payload, 'progress')}"
        )

        if status == "completed":
            return payload

        if status == "failed":
            error = _field(payload, "error") or "Deep research job failed"
            logger.warning(f"Job {job_id} failed: {error}")
            raise CladoError(500, error)

        if clock() - start_time > timeout:
            logger.warning(f"Job {job_id} still {status} after {timeout}s")
            raise CladoError(408, f"Deep research job timed out after {timeout}s")

        await sleep(poll_interval)
