"""URL construction for Clado API endpoints."""

from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import urlencode, urljoin


def _format_value(value: Any) -> str:
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    return str(value)


def build_url(
    base_url: str,
    path: str,
    params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Build an absolute URL with query parameters.

    ``None`` values are skipped entirely. List and tuple values become
    repeated ``key=value`` pairs in element order (``companies=A&companies=B``).
    Booleans serialize as ``true``/``false``.

    :param base_url: API origin, e.g. ``https://search.clado.ai``
    :type base_url: str
    :param path: API path, e.g. ``/api/search``
    :type path: str
    :param params: Optional query parameters
    :type params: Optional[Mapping[str, Any]]
    :return: Complete URL, with no trailing ``?`` when there is no query
    :rtype: str
    """
    url = urljoin(base_url, path)

    pairs: List[Tuple[str, str]] = []
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _format_value(item)) for item in value)
        else:
            pairs.append((key, _format_value(value)))

    if not pairs:
        return url
    return f"{url}?{urlencode(pairs)}"
