"""Async client for the Clado API.

:class:`CladoClient` is the public entry point. Each method normalizes its
options, builds the endpoint URL, sends the request through the retrying
request engine and parses the JSON into a response model.

Example::

    async with CladoClient(api_key="lk_...") as clado:
        response = await clado.search_people(query="ML engineers", limit=10)
        for result in response.results:
            print(result.profile.name)
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from .config.settings import CladoSettings
from .exceptions import CladoError, ConfigurationError
from .models import (
    CancelJobResponse,
    ContactInfoResponse,
    CreditsResponse,
    DeepResearchInitResponse,
    DeepResearchStatusResponse,
    LinkedInProfileResponse,
    PostReactionsResponse,
    SearchPeopleResponse,
    SearchResult,
)
from .models.base import BaseAPIResponse
from .utils.http import build_url, make_request, to_snake_case
from .utils.http.retry import RetryConfig
from .utils.pagination import Page, PageIterator
from .utils.polling import wait_for_job

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseAPIResponse)

SEARCH_PATH = "/api/search"
DEEP_RESEARCH_PATH = "/api/search/deep_research"
CONTACT_PATH = "/api/enrich/contact"
LINKEDIN_PATH = "/api/enrich/linkedin"
REACTIONS_PATH = "/api/enrich/reactions"
CREDITS_PATH = "/api/credits"

DEFAULT_PAGE_LIMIT = 30


def _merge_options(
    options: Optional[Mapping[str, Any]], params: Mapping[str, Any]
) -> Dict[str, Any]:
    merged = dict(options or {})
    merged.update(params)
    return to_snake_case(merged)


def _job_path(job_id: str, action: Optional[str] = None) -> str:
    path = f"{DEEP_RESEARCH_PATH}/{quote(job_id, safe='')}"
    return f"{path}/{action}" if action else path


class CladoClient:
    """Typed async client for the Clado people-search API.

    Settings are resolved once, at construction. The API key comes from
    the ``api_key`` argument, then from ``settings.api_key``
    (``CLADO_API_KEY``).

    :param api_key: API key; falls back to settings when omitted
    :type api_key: Optional[str]
    :param base_url: API origin; falls back to settings when omitted
    :type base_url: Optional[str]
    :param settings: Settings source; read from the environment when omitted
    :type settings: Optional[CladoSettings]
    :param http_client: Client to send requests through; the caller keeps
                        ownership and must close it
    :type http_client: Optional[httpx.AsyncClient]
    :param retry_config: Retry policy; derived from settings when omitted
    :type retry_config: Optional[RetryConfig]
    :param sleep: Coroutine function used to wait between retries and polls
    :type sleep: Callable[[float], Awaitable[Any]]
    :param clock: Monotonic clock in seconds, used for poll timeouts
    :type clock: Callable[[], float]
    :raises ConfigurationError: If no API key is available
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        settings: Optional[CladoSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        retry_config: Optional[RetryConfig] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        if settings is None:
            settings = CladoSettings()
        self.settings = settings

        api_key = api_key or settings.api_key
        if not api_key:
            raise ConfigurationError(
                "API key not provided and CLADO_API_KEY env var is not set",
                setting="CLADO_API_KEY",
            )
        self._api_key = api_key
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.retry_config = retry_config or settings.retry_config

        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._sleep = sleep
        self._clock = clock

    def __repr__(self) -> str:
        return f"CladoClient(base_url={self.base_url!r})"

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            logger.debug(f"Creating HTTP client for {self.base_url}")
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.timeout),
                limits=httpx.Limits(
                    max_keepalive_connections=10,
                    max_connections=20,
                    keepalive_expiry=30.0,
                ),
                follow_redirects=True,
            )
        return self._http_client

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "CladoClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def _request(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        method: str = "GET",
        body: Any = None,
    ) -> Any:
        url = build_url(self.base_url, path, params)
        return await make_request(
            url,
            self._api_key,
            method=method,
            body=body,
            http_client=self._get_http_client(),
            retry_config=self.retry_config,
            sleep=self._sleep,
        )

    @staticmethod
    def _parse(model: Type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            raise CladoError(
                0, f"Unexpected response shape for {model.__name__}: {e}"
            ) from e

    # Search

    async def search_people(
        self, options: Optional[Mapping[str, Any]] = None, **params: Any
    ) -> SearchPeopleResponse:
        """Search for people with a natural-language query.

        Accepts ``query``, ``limit``, ``offset``, ``search_id``,
        ``advanced_filtering``, ``companies``, ``schools`` and ``legacy``,
        in snake_case or camelCase, as an ``options`` mapping or keywords.
        ``companies`` and ``schools`` take lists of names.

        :return: One page of results
        :rtype: SearchPeopleResponse
        """
        query = _merge_options(options, params)
        data = await self._request(SEARCH_PATH, query)
        return self._parse(SearchPeopleResponse, data)

    def search_people_all(
        self, options: Optional[Mapping[str, Any]] = None, **params: Any
    ) -> PageIterator[SearchResult]:
        """Iterate over every result of a search, fetching pages on demand.

        The first page's ``search_id`` is sent with each later request so
        the server continues the same result set. No request is made until
        the iterator is consumed.

        :return: Iterator of search results
        :rtype: PageIterator[SearchResult]
        """
        query = _merge_options(options, params)
        limit = query.pop("limit", None) or DEFAULT_PAGE_LIMIT
        query.pop("offset", None)
        initial_search_id = query.pop("search_id", None)

        async def fetch_page(
            token: Optional[str], offset: int, page_limit: int
        ) -> Page[SearchResult]:
            page_query = dict(query)
            page_query["search_id"] = token or initial_search_id
            page_query["offset"] = offset
            page_query["limit"] = page_limit
            response = await self.search_people(page_query)
            return Page(
                items=response.results,
                total=response.total,
                token=response.search_id or token,
            )

        return PageIterator(fetch_page, limit=limit)

    # Deep research

    async def initiate_deep_research(
        self, options: Optional[Mapping[str, Any]] = None, **params: Any
    ) -> DeepResearchInitResponse:
        """Start a deep research job.

        Accepts ``query``, ``limit``, ``companies`` and ``schools``.

        :return: Job handle with ``job_id``
        :rtype: DeepResearchInitResponse
        """
        body = {k: v for k, v in _merge_options(options, params).items() if v is not None}
        data = await self._request(DEEP_RESEARCH_PATH, method="POST", body=body)
        return self._parse(DeepResearchInitResponse, data)

    async def get_deep_research_status(self, job_id: str) -> DeepResearchStatusResponse:
        """Fetch the current state of a deep research job."""
        data = await self._request(_job_path(job_id))
        return self._parse(DeepResearchStatusResponse, data)

    async def cancel_deep_research(self, job_id: str) -> CancelJobResponse:
        """Cancel a running deep research job."""
        data = await self._request(_job_path(job_id, "cancel"), method="POST")
        return self._parse(CancelJobResponse, data)

    async def continue_deep_research(
        self,
        job_id: str,
        options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> DeepResearchStatusResponse:
        """Ask a completed deep research job for more results.

        Accepts the options of :meth:`initiate_deep_research`, typically a
        new ``limit``. The request has no body when no options are given.
        """
        body = {k: v for k, v in _merge_options(options, params).items() if v is not None}
        data = await self._request(
            _job_path(job_id, "continue"), method="POST", body=body or None
        )
        return self._parse(DeepResearchStatusResponse, data)

    async def wait_for_deep_research(
        self, job_id: str, poll_interval: float = 2.0, timeout: float = 300.0
    ) -> DeepResearchStatusResponse:
        """Poll a deep research job until it completes.

        :param job_id: Job identifier
        :type job_id: str
        :param poll_interval: Seconds between polls
        :type poll_interval: float
        :param timeout: Seconds to wait before giving up
        :type timeout: float
        :return: Final status with results
        :rtype: DeepResearchStatusResponse
        :raises CladoError: Status 500 if the job fails, 408 on timeout
        """
        return await wait_for_job(
            self.get_deep_research_status,
            job_id,
            poll_interval=poll_interval,
            timeout=timeout,
            sleep=self._sleep,
            clock=self._clock,
        )

    # Enrichment

    async def get_contact_info(
        self, options: Optional[Mapping[str, Any]] = None, **params: Any
    ) -> ContactInfoResponse:
        """Look up email and phone for a profile.

        Accepts ``linkedin_url``, ``enrich_email`` and ``enrich_phone``.
        """
        data = await self._request(CONTACT_PATH, _merge_options(options, params))
        return self._parse(ContactInfoResponse, data)

    async def scrape_linkedin_profile(
        self, options: Optional[Mapping[str, Any]] = None, **params: Any
    ) -> LinkedInProfileResponse:
        """Scrape a LinkedIn profile live. Accepts ``linkedin_url``."""
        data = await self._request(LINKEDIN_PATH, _merge_options(options, params))
        return self._parse(LinkedInProfileResponse, data)

    async def get_linkedin_profile(
        self, options: Optional[Mapping[str, Any]] = None, **params: Any
    ) -> LinkedInProfileResponse:
        """Read a LinkedIn profile from the Clado database.

        Cheaper than :meth:`scrape_linkedin_profile` but may be stale.
        """
        query = _merge_options(options, params)
        query["database"] = True
        data = await self._request(LINKEDIN_PATH, query)
        return self._parse(LinkedInProfileResponse, data)

    async def get_post_reactions(
        self, options: Optional[Mapping[str, Any]] = None, **params: Any
    ) -> PostReactionsResponse:
        """List reactions on a post.

        Accepts ``post_url``, ``limit`` and ``reaction_type``
        (see :class:`~clado_sdk.models.ReactionType`).
        """
        data = await self._request(REACTIONS_PATH, _merge_options(options, params))
        return self._parse(PostReactionsResponse, data)

    # Platform

    async def get_credits(self) -> CreditsResponse:
        """Fetch the account's credit balance."""
        data = await self._request(CREDITS_PATH)
        return self._parse(CreditsResponse, data)
