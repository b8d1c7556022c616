"""Option-name normalization for Clado API query strings and bodies."""

from typing import Any, Dict, Mapping

# camelCase option names the API expects in snake_case
SNAKE_CASE_MAP: Dict[str, str] = {
    "searchId": "search_id",
    "advancedFiltering": "advanced_filtering",
    "linkedinUrl": "linkedin_url",
    "enrichEmail": "enrich_email",
    "enrichPhone": "enrich_phone",
    "includePosts": "include_posts",
    "includeExperience": "include_experience",
    "includeEducation": "include_education",
    "postUrl": "post_url",
    "reactionType": "reaction_type",
}


def to_snake_case(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename known option keys to their wire form.

    Keys listed in :data:`SNAKE_CASE_MAP` are renamed; every other key is
    copied as-is, ``None`` values included. Dropping absent values is left
    to :func:`~clado_sdk.utils.http.url.build_url`. The input is not mutated.

    :param options: Options keyed by camelCase or snake_case names
    :type options: Mapping[str, Any]
    :return: New dict keyed by wire names
    :rtype: Dict[str, Any]
    """
    return {SNAKE_CASE_MAP.get(key, key): value for key, value in options.items()}
