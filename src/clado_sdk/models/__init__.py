"""Clado SDK models package.

Pydantic models for Clado API responses, organized by API domain.
"""

from .base import BaseAPIResponse
from .deep_research import (
    CancelJobResponse,
    DeepResearchInitResponse,
    DeepResearchStatus,
    DeepResearchStatusResponse,
)
from .enrichment import (
    ContactInfoResponse,
    ContactStatus,
    LinkedInProfileResponse,
    PostReactionsResponse,
    Reaction,
    ReactionType,
    ReactionUser,
)
from .platform import CreditsResponse, RateLimitTier
from .profile import Education, Experience, Post, PostAuthor, Profile, SkillDetail
from .search import SearchPeopleResponse, SearchResult

__all__ = [
    "BaseAPIResponse",
    # Profiles
    "Profile",
    "Experience",
    "Education",
    "Post",
    "PostAuthor",
    "SkillDetail",
    # Search
    "SearchResult",
    "SearchPeopleResponse",
    # Deep research
    "DeepResearchStatus",
    "DeepResearchInitResponse",
    "DeepResearchStatusResponse",
    "CancelJobResponse",
    # Enrichment
    "ContactStatus",
    "ContactInfoResponse",
    "LinkedInProfileResponse",
    "ReactionType",
    "ReactionUser",
    "Reaction",
    "PostReactionsResponse",
    # Platform
    "RateLimitTier",
    "CreditsResponse",
]
