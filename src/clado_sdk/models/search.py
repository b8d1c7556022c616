"""Search response models."""

from typing import List, Optional

from pydantic import Field

from .base import BaseAPIResponse
from .profile import Education, Experience, Post, Profile


class SearchResult(BaseAPIResponse):
    """A matching profile with its related records.

    Awards, certifications, patents, projects, publications and GitHub
    repositories are kept as extra fields when the API includes them.
    """

    profile: Profile
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    posts: List[Post] = Field(default_factory=list)


class SearchPeopleResponse(BaseAPIResponse):
    """Response from the people search endpoint.

    :param results: Matching profiles in ranked order
    :type results: List[SearchResult]
    :param total: Total number of matching profiles, if reported
    :type total: Optional[int]
    :param query: The executed query
    :type query: Optional[str]
    :param search_id: Continuation token for later pages
    :type search_id: Optional[str]
    """

    results: List[SearchResult] = Field(default_factory=list)
    total: Optional[int] = None
    query: Optional[str] = None
    search_id: Optional[str] = None
