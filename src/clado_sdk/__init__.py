"""Clado SDK package.

This package provides a typed async client for the Clado people-search
API. It covers people search with pagination, deep research jobs,
profile and contact enrichment, post reactions and account credits, with
automatic retries and typed errors.

:var __version__: Current package version
:type __version__: str
"""

from .client import CladoClient
from .config import CladoSettings
from .exceptions import (
    CladoAuthError,
    CladoError,
    CladoNotFoundError,
    CladoRateLimitError,
    CladoValidationError,
    ConfigurationError,
    ErrorKind,
    classify_error,
)
from .models import (
    BaseAPIResponse,
    CancelJobResponse,
    ContactInfoResponse,
    ContactStatus,
    CreditsResponse,
    DeepResearchInitResponse,
    DeepResearchStatus,
    DeepResearchStatusResponse,
    Education,
    Experience,
    LinkedInProfileResponse,
    Post,
    PostAuthor,
    PostReactionsResponse,
    Profile,
    RateLimitTier,
    Reaction,
    ReactionType,
    ReactionUser,
    SearchPeopleResponse,
    SearchResult,
    SkillDetail,
)
from .utils.http import (
    RetryConfig,
    build_url,
    calculate_backoff,
    make_request,
    to_snake_case,
)
from .utils.pagination import Page, PageIterator
from .utils.polling import wait_for_job

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CladoClient",
    "CladoSettings",
    # Errors
    "CladoError",
    "CladoAuthError",
    "CladoNotFoundError",
    "CladoRateLimitError",
    "CladoValidationError",
    "ConfigurationError",
    "ErrorKind",
    "classify_error",
    # Core utilities
    "build_url",
    "to_snake_case",
    "calculate_backoff",
    "RetryConfig",
    "make_request",
    "wait_for_job",
    "Page",
    "PageIterator",
    # Models
    "BaseAPIResponse",
    "Profile",
    "Experience",
    "Education",
    "Post",
    "PostAuthor",
    "SkillDetail",
    "SearchResult",
    "SearchPeopleResponse",
    "DeepResearchStatus",
    "DeepResearchInitResponse",
    "DeepResearchStatusResponse",
    "CancelJobResponse",
    "ContactStatus",
    "ContactInfoResponse",
    "LinkedInProfileResponse",
    "ReactionType",
    "ReactionUser",
    "Reaction",
    "PostReactionsResponse",
    "RateLimitTier",
    "CreditsResponse",
]
