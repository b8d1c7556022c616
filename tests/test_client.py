"""Tests for the CladoClient endpoint methods.

Requests are served by ``httpx.MockTransport`` routes keyed on method
and path, so each test checks both what was sent and what was parsed.
"""

import json
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio

from clado_sdk import (
    CladoClient,
    CladoNotFoundError,
    CladoSettings,
    ConfigurationError,
    DeepResearchStatusResponse,
    ReactionType,
    SearchResult,
)
from clado_sdk.exceptions import CladoError, ErrorKind
from clado_sdk.utils.http import RetryConfig

API_KEY = "lk_test_key"


class Router:
    """Mock API routing (method, path) to queued JSON responses."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, *bodies, status=200):
        self.routes[(method, path)] = [(status, body) for body in bodies]

    def __call__(self, request):
        self.requests.append(request)
        path = request.url.raw_path.decode().split("?")[0]
        queue = self.routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, json={"detail": "no route"})
        status, body = queue.pop(0) if len(queue) > 1 else queue[0]
        return httpx.Response(status, json=body)

    def query(self, index=-1):
        return parse_qs(self.requests[index].url.query.decode())


@pytest.fixture
def router():
    return Router()


@pytest_asyncio.fixture
async def clado(router, recording_sleep):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(router))
    client = CladoClient(api_key=API_KEY, http_client=http_client, sleep=recording_sleep)
    yield client
    await http_client.aclose()


class TestConstruction:
    """Test credential and settings resolution."""

    def test_explicit_key(self):
        """Test an explicit key wins over the environment."""
        client = CladoClient(api_key="lk_explicit")
        assert client._api_key == "lk_explicit"
        assert client.base_url == "https://search.clado.ai"

    def test_env_fallback(self, monkeypatch):
        """Test CLADO_API_KEY is used when no key is passed."""
        monkeypatch.setenv("CLADO_API_KEY", "lk_env")
        monkeypatch.setenv("CLADO_BASE_URL", "https://staging.clado.ai/")
        client = CladoClient()
        assert client._api_key == "lk_env"
        assert client.base_url == "https://staging.clado.ai"

    def test_injected_settings(self):
        """Test an injected settings object is the fallback source."""
        settings = CladoSettings(api_key="lk_injected", max_retries=1)
        client = CladoClient(settings=settings)
        assert client._api_key == "lk_injected"
        assert client.retry_config.max_retries == 1

    def test_missing_key_raises(self):
        """Test construction fails without any key."""
        with pytest.raises(ConfigurationError) as exc_info:
            CladoClient()
        assert "CLADO_API_KEY" in str(exc_info.value)
        assert exc_info.value.setting == "CLADO_API_KEY"

    def test_overrides(self):
        """Test base URL and retry config arguments."""
        config = RetryConfig(max_retries=0)
        client = CladoClient(
            api_key=API_KEY, base_url="http://localhost:8000/", retry_config=config
        )
        assert client.base_url == "http://localhost:8000"
        assert client.retry_config is config

    def test_repr_hides_key(self):
        """Test the key never appears in repr."""
        assert API_KEY not in repr(CladoClient(api_key=API_KEY))


@pytest.mark.asyncio
class TestLifecycle:
    """Test HTTP client ownership."""

    async def test_owned_client_closed(self):
        """Test a lazily created client is closed by aclose."""
        async with CladoClient(api_key=API_KEY) as client:
            http_client = client._get_http_client()
            assert client._get_http_client() is http_client
        assert http_client.is_closed
        assert client._http_client is None

    async def test_injected_client_left_open(self, router):
        """Test an injected client is not closed."""
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(router))
        async with CladoClient(api_key=API_KEY, http_client=http_client):
            pass
        assert not http_client.is_closed
        await http_client.aclose()


@pytest.mark.asyncio
class TestSearch:
    """Test people search."""

    async def test_search_people(self, clado, router, make_search_page):
        """Test query normalization and response parsing."""
        router.add("GET", "/api/search", make_search_page(2, total=2))
        response = await clado.search_people(
            {"query": "ml engineers", "searchId": None}, limit=2, advancedFiltering=True
        )
        assert response.total == 2
        assert isinstance(response.results[0], SearchResult)

        request = router.requests[0]
        assert request.headers["authorization"] == f"Bearer {API_KEY}"
        assert router.query() == {
            "query": ["ml engineers"],
            "limit": ["2"],
            "advanced_filtering": ["true"],
        }

    async def test_search_people_array_filters(self, clado, router, make_search_page):
        """Test company and school filters are sent as repeated keys."""
        router.add("GET", "/api/search", make_search_page(1, total=1))
        await clado.search_people(
            query="engineers", companies=["A", "B"], schools=["MIT"]
        )
        query = router.query()
        assert query["companies"] == ["A", "B"]
        assert query["schools"] == ["MIT"]
        raw_query = router.requests[0].url.query.decode()
        assert raw_query.count("companies=") == 2

    async def test_search_people_all_keeps_filters(self, clado, router, make_search_page):
        """Test filters are resent on every page and a missing total is tolerated."""
        first = make_search_page(2, total=None, search_id="s-1")
        second = make_search_page(1, total=None, search_id="s-1", start=2)
        del first["total"], second["total"]
        router.add("GET", "/api/search", first, second)

        iterator = clado.search_people_all(query="x", companies=["A", "B"], limit=2)
        names = [result.profile.name async for result in iterator]

        assert names == ["Person 0", "Person 1", "Person 2"]
        assert len(router.requests) == 2
        assert router.query(1)["companies"] == ["A", "B"]
        assert router.query(1)["offset"] == ["2"]

    async def test_search_people_all(self, clado, router, make_search_page):
        """Test iteration over 31 results in two pages."""
        router.add(
            "GET",
            "/api/search",
            make_search_page(30, total=31, search_id="s-1"),
            make_search_page(1, total=31, search_id="s-1", start=30),
        )
        iterator = clado.search_people_all(query="engineers")
        names = [result.profile.name async for result in iterator]

        assert names == [f"Person {i}" for i in range(31)]
        assert len(router.requests) == 2
        first, second = router.query(0), router.query(1)
        assert first == {"query": ["engineers"], "offset": ["0"], "limit": ["30"]}
        assert second["search_id"] == ["s-1"]
        assert second["offset"] == ["30"]

    async def test_search_people_all_early_break(self, clado, router, make_search_page):
        """Test breaking early makes a single request."""
        router.add("GET", "/api/search", make_search_page(5, total=50))
        async for _ in clado.search_people_all(query="x", limit=5):
            break
        assert len(router.requests) == 1

    async def test_search_error(self, clado, router):
        """Test typed errors surface from façade calls."""
        router.add("GET", "/api/search", {"detail": "bad"}, status=422)
        with pytest.raises(CladoError) as exc_info:
            await clado.search_people(query="")
        assert exc_info.value.kind is ErrorKind.VALIDATION


@pytest.mark.asyncio
class TestDeepResearch:
    """Test deep research job calls."""

    async def test_initiate(self, clado, router):
        """Test the POST body is normalized and drops None values."""
        router.add(
            "POST", "/api/search/deep_research", {"job_id": "j-1", "status": "pending"}
        )
        response = await clado.initiate_deep_research(
            query="founders", limit=50, companies=["Acme", "Globex"], schools=None
        )
        assert response.job_id == "j-1"
        request = router.requests[0]
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {
            "query": "founders",
            "limit": 50,
            "companies": ["Acme", "Globex"],
        }

    async def test_status(self, clado, router):
        """Test status parsing."""
        router.add(
            "GET",
            "/api/search/deep_research/j-1",
            {"job_id": "j-1", "status": "searching", "progress": 40},
        )
        status = await clado.get_deep_research_status("j-1")
        assert status.status == "searching"
        assert status.progress == 40

    async def test_job_id_is_path_encoded(self, clado, router):
        """Test job ids cannot escape their path segment."""
        router.add(
            "GET",
            "/api/search/deep_research/a%2Fb%3Fc",
            {"job_id": "a/b?c", "status": "pending"},
        )
        await clado.get_deep_research_status("a/b?c")
        assert router.requests[0].url.raw_path == b"/api/search/deep_research/a%2Fb%3Fc"

    async def test_cancel(self, clado, router):
        """Test cancel is a bodyless POST."""
        router.add(
            "POST", "/api/search/deep_research/j-1/cancel", {"success": True, "message": "ok"}
        )
        response = await clado.cancel_deep_research("j-1")
        assert response.success is True
        assert router.requests[0].content == b""
        assert "content-type" not in router.requests[0].headers

    async def test_continue_with_options(self, clado, router):
        """Test continue sends a body only when options are given."""
        router.add(
            "POST",
            "/api/search/deep_research/j-1/continue",
            {"job_id": "j-1", "status": "in_progress"},
        )
        await clado.continue_deep_research("j-1", limit=100)
        await clado.continue_deep_research("j-1")
        assert json.loads(router.requests[0].content) == {"limit": 100}
        assert router.requests[1].content == b""

    async def test_wait_for_deep_research(self, clado, router, recording_sleep):
        """Test polling until completion."""
        router.add(
            "GET",
            "/api/search/deep_research/j-1",
            {"job_id": "j-1", "status": "pending"},
            {"job_id": "j-1", "status": "in_progress"},
            {"job_id": "j-1", "status": "completed", "total": 1, "results": []},
        )
        result = await clado.wait_for_deep_research("j-1", poll_interval=0.5)
        assert isinstance(result, DeepResearchStatusResponse)
        assert result.status == "completed"
        assert result.total == 1
        assert recording_sleep.calls == [0.5, 0.5]

    async def test_wait_for_deep_research_timeout(self, router):
        """Test the injected clock drives the poll timeout."""
        now = [0.0]
        sleeps = []

        async def sleep(delay):
            sleeps.append(delay)
            now[0] += delay

        router.add(
            "GET", "/api/search/deep_research/j-1", {"job_id": "j-1", "status": "searching"}
        )
        async with httpx.AsyncClient(transport=httpx.MockTransport(router)) as http_client:
            client = CladoClient(
                api_key=API_KEY,
                http_client=http_client,
                sleep=sleep,
                clock=lambda: now[0],
            )
            with pytest.raises(CladoError) as exc_info:
                await client.wait_for_deep_research("j-1", poll_interval=5.0, timeout=12.0)

        assert exc_info.value.status == 408
        assert exc_info.value.kind is ErrorKind.GENERIC
        # polls at t=0,5,10 stay within the limit, t=15 exceeds it
        assert len(router.requests) == 4
        assert sleeps == [5.0, 5.0, 5.0]

    async def test_wait_for_failed_job(self, clado, router):
        """Test a failed job raises with its error."""
        router.add(
            "GET",
            "/api/search/deep_research/j-1",
            {"job_id": "j-1", "status": "failed", "error": "quota exhausted"},
        )
        with pytest.raises(CladoError) as exc_info:
            await clado.wait_for_deep_research("j-1")
        assert exc_info.value.status == 500
        assert "quota exhausted" in str(exc_info.value)

    async def test_unknown_job(self, clado, router):
        """Test a 404 is raised without retrying."""
        with pytest.raises(CladoNotFoundError):
            await clado.get_deep_research_status("nope")
        assert len(router.requests) == 1


@pytest.mark.asyncio
class TestEnrichment:
    """Test enrichment endpoints."""

    async def test_contact_info(self, clado, router):
        """Test camelCase options are renamed."""
        router.add(
            "GET",
            "/api/enrich/contact",
            {
                "linkedin_url": "https://linkedin.com/in/ada",
                "email": "ada@example.com",
                "email_status": "verified",
            },
        )
        contact = await clado.get_contact_info(
            linkedinUrl="https://linkedin.com/in/ada", enrichEmail=True, enrichPhone=False
        )
        assert contact.email == "ada@example.com"
        assert router.query() == {
            "linkedin_url": ["https://linkedin.com/in/ada"],
            "enrich_email": ["true"],
            "enrich_phone": ["false"],
        }

    async def test_scrape_profile(self, clado, router, sample_profile):
        """Test live scraping does not set database."""
        router.add("GET", "/api/enrich/linkedin", {"profile": sample_profile})
        response = await clado.scrape_linkedin_profile(linkedin_url="https://linkedin.com/in/ada")
        assert response.profile.name == "Ada Lovelace"
        assert "database" not in router.query()

    async def test_database_profile(self, clado, router, sample_profile):
        """Test the database lookup adds database=true."""
        router.add("GET", "/api/enrich/linkedin", {"profile": sample_profile})
        await clado.get_linkedin_profile({"linkedinUrl": "https://linkedin.com/in/ada"})
        assert router.query() == {
            "linkedin_url": ["https://linkedin.com/in/ada"],
            "database": ["true"],
        }

    async def test_post_reactions(self, clado, router):
        """Test enum filters serialize to their value."""
        router.add(
            "GET",
            "/api/enrich/reactions",
            {"post_url": "https://linkedin.com/posts/1", "total_reactions": 0, "reactions": []},
        )
        response = await clado.get_post_reactions(
            postUrl="https://linkedin.com/posts/1", reactionType=ReactionType.PRAISE, limit=50
        )
        assert response.total_reactions == 0
        assert router.query()["reaction_type"] == ["praise"]
        assert router.query()["limit"] == ["50"]


@pytest.mark.asyncio
class TestPlatform:
    """Test account endpoints."""

    async def test_get_credits(self, clado, router):
        """Test credits parsing."""
        router.add(
            "GET",
            "/api/credits",
            {"credits_remaining": 100, "credits_used": 5, "plan": "pro"},
        )
        credits = await clado.get_credits()
        assert credits.credits_remaining == 100
        assert credits.plan == "pro"
        assert router.requests[0].url.query == b""

    async def test_unexpected_shape_is_generic(self, clado, router):
        """Test a payload that fails validation becomes a generic error."""
        router.add("GET", "/api/credits", {"plan": "pro"})
        with pytest.raises(CladoError) as exc_info:
            await clado.get_credits()
        assert exc_info.value.kind is ErrorKind.GENERIC
        assert exc_info.value.status == 0
        assert "CreditsResponse" in str(exc_info.value)
