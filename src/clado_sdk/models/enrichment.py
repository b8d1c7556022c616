"""Enrichment response models: contact info, profiles and post reactions."""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from .base import BaseAPIResponse
from .profile import Education, Experience, Post, Profile, SkillDetail


class ContactStatus(str, Enum):
    """Verification status of an email or phone number."""

    VERIFIED = "verified"
    UNVERIFIED = "unverified"
    NOT_FOUND = "not_found"


class ContactInfoResponse(BaseAPIResponse):
    """Contact details for a LinkedIn profile.

    :param linkedin_url: Profile URL the lookup was made for
    :type linkedin_url: str
    :param email: Email address, if found
    :type email: Optional[str]
    :param email_status: Email verification status
    :type email_status: Optional[str]
    :param phone: Phone number, if found
    :type phone: Optional[str]
    :param phone_status: Phone verification status
    :type phone_status: Optional[str]
    :param credits_used: Credits charged for the lookup
    :type credits_used: Optional[int]
    """

    linkedin_url: str
    email: Optional[str] = None
    email_status: Optional[str] = None
    phone: Optional[str] = None
    phone_status: Optional[str] = None
    credits_used: Optional[int] = None


class LinkedInProfileResponse(BaseAPIResponse):
    """Full profile from live scraping or the database."""

    profile: Profile
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    posts: List[Post] = Field(default_factory=list)
    skills_details: List[SkillDetail] = Field(default_factory=list)


class ReactionType(str, Enum):
    """Reaction filters accepted by the post reactions endpoint."""

    ALL = "all"
    LIKE = "like"
    APPRECIATION = "appreciation"
    EMPATHY = "empathy"
    INTEREST = "interest"
    PRAISE = "praise"


class ReactionUser(BaseAPIResponse):
    """User who reacted to a post."""

    name: Optional[str] = None
    linkedin_url: Optional[str] = None
    headline: Optional[str] = None
    picture_url: Optional[str] = None


class Reaction(BaseAPIResponse):
    """Single reaction on a post."""

    type: str
    user: ReactionUser
    timestamp: Optional[str] = None


class PostReactionsResponse(BaseAPIResponse):
    """Reactions on a LinkedIn post."""

    post_url: str
    total_reactions: int = 0
    reactions: List[Reaction] = Field(default_factory=list)
