"""Profile, experience, education and post models.

Profiles in the modern response format carry close to a hundred fields.
Only the commonly used ones are declared here; the rest are preserved as
extra fields by :class:`~clado_sdk.models.base.BaseAPIResponse`.
"""

from typing import List, Optional, Union

from pydantic import Field

from .base import BaseAPIResponse


class Profile(BaseAPIResponse):
    """LinkedIn profile.

    :param id: Profile identifier
    :type id: str
    :param name: Display name
    :type name: str
    :param headline: Professional headline
    :type headline: Optional[str]
    :param location: Human-readable location
    :type location: Optional[str]
    :param linkedin_url: Public profile URL
    :type linkedin_url: Optional[str]
    :param skills: Listed skills
    :type skills: List[str]
    """

    id: str
    name: str
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    headline: Optional[str] = None
    description: Optional[str] = None
    summary: Optional[str] = None
    picture_url: Optional[str] = None

    location: Optional[str] = None
    location_country: Optional[str] = None
    location_city: Optional[str] = None
    location_state: Optional[str] = None

    linkedin_url: Optional[str] = None
    connections_count: Optional[int] = None
    followers_count: Optional[int] = None

    # The API reports these as booleans or 0/1
    is_working: Optional[Union[bool, int]] = None
    is_decision_maker: Optional[Union[bool, int]] = None
    total_experience_duration_months: Optional[int] = None

    active_experience_title: Optional[str] = None
    active_experience_department: Optional[str] = None
    active_experience_management_level: Optional[str] = None

    skills: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)
    education_degrees: List[str] = Field(default_factory=list)

    projected_total_salary: Optional[float] = None


class Experience(BaseAPIResponse):
    """Work experience entry."""

    title: Optional[str] = None
    company_name: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    duration_months: Optional[int] = None
    is_current: Optional[bool] = None
    department: Optional[str] = None
    management_level: Optional[str] = None
    company_linkedin_url: Optional[str] = None
    company_website: Optional[str] = None
    company_industry: Optional[str] = None
    company_size: Optional[str] = None


class Education(BaseAPIResponse):
    """Education entry."""

    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    school_name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    school_linkedin_url: Optional[str] = None
    grade: Optional[str] = None


class PostAuthor(BaseAPIResponse):
    """Author of a reposted post."""

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    username: Optional[str] = None
    url: Optional[str] = None


class Post(BaseAPIResponse):
    """LinkedIn post.

    Post payloads use camelCase on the wire; fields are exposed in
    snake_case through aliases.
    """

    text: Optional[str] = None
    post_url: Optional[str] = Field(None, alias="postUrl")
    urn: Optional[str] = None
    total_reaction_count: Optional[int] = Field(None, alias="totalReactionCount")
    like_count: Optional[int] = Field(None, alias="likeCount")
    comments_count: Optional[int] = Field(None, alias="commentsCount")
    reposts_count: Optional[int] = Field(None, alias="repostsCount")
    posted_at: Optional[str] = Field(None, alias="postedAt")
    reposted: Optional[bool] = None
    author: Optional[PostAuthor] = None


class SkillDetail(BaseAPIResponse):
    """Skill with endorsement count."""

    name: str
    endorsement_count: Optional[int] = None
