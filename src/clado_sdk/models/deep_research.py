"""Deep research job models."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import BaseAPIResponse
from .search import SearchResult


class DeepResearchStatus(str, Enum):
    """Deep research job states; ``COMPLETED`` and ``FAILED`` are terminal."""

    PENDING = "pending"
    SEARCHING = "searching"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class DeepResearchInitResponse(BaseAPIResponse):
    """Response when a deep research job is started.

    :param job_id: Identifier used for status, cancel and continue calls
    :type job_id: str
    :param status: Initial status, normally ``pending``
    :type status: str
    :param message: Optional human-readable message
    :type message: Optional[str]
    """

    job_id: str
    status: str = DeepResearchStatus.PENDING.value
    message: Optional[str] = None


class DeepResearchStatusResponse(BaseAPIResponse):
    """Current state of a deep research job.

    ``status`` is kept as a plain string so statuses added server-side do
    not break parsing; compare against :class:`DeepResearchStatus`.
    """

    job_id: str
    status: str
    progress: Optional[float] = None
    results: List[SearchResult] = Field(default_factory=list)
    total: Optional[int] = None
    error: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        """Whether the job has completed or failed."""
        return self.status in (
            DeepResearchStatus.COMPLETED.value,
            DeepResearchStatus.FAILED.value,
        )


class CancelJobResponse(BaseAPIResponse):
    """Response from cancelling a deep research job."""

    success: bool = False
    message: Optional[str] = None
