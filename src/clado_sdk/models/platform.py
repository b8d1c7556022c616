"""Platform (account) models."""

from enum import Enum
from typing import Optional

from .base import BaseAPIResponse


class RateLimitTier(str, Enum):
    """Rate limit tiers."""

    FREE = "free"
    TIER1 = "tier1"
    TIER2 = "tier2"
    TIER3 = "tier3"


class CreditsResponse(BaseAPIResponse):
    """Credit balance and rate limit tier.

    :param credits_remaining: Credits left on the account
    :type credits_remaining: int
    :param credits_used: Credits used to date
    :type credits_used: int
    :param plan: Current plan name
    :type plan: Optional[str]
    :param rate_limit_tier: Current tier, see :class:`RateLimitTier`
    :type rate_limit_tier: Optional[str]
    """

    credits_remaining: int
    credits_used: int
    plan: Optional[str] = None
    rate_limit_tier: Optional[str] = None
