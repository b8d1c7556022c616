import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

CLADO_ENV_VARS = (
    "CLADO_API_KEY",
    "CLADO_BASE_URL",
    "CLADO_MAX_RETRIES",
    "CLADO_INITIAL_RETRY_DELAY",
    "CLADO_MAX_RETRY_DELAY",
    "CLADO_TIMEOUT",
    "CLADO_LOG_LEVEL",
)


def pytest_configure(config):
    # Register the asyncio marker so pytest doesn't warn when it's used.
    config.addinivalue_line(
        "markers", "asyncio: mark test to run in an asyncio event loop"
    )
    config.addinivalue_line("markers", "unit: mark test as a unit test")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's CLADO_* variables and .env file."""
    for name in CLADO_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


class RecordingSleep:
    """Stand-in for ``asyncio.sleep`` that records delays and returns at once."""

    def __init__(self):
        self.calls = []

    async def __call__(self, delay):
        self.calls.append(delay)


@pytest.fixture
def recording_sleep():
    """Sleep replacement that records requested delays."""
    return RecordingSleep()


@pytest.fixture
def sample_profile():
    """Minimal profile payload as returned by the API."""
    return {
        "id": "p-1",
        "name": "Ada Lovelace",
        "headline": "Analyst",
        "location": "London, UK",
        "linkedin_url": "https://www.linkedin.com/in/ada",
        "skills": ["math", "engines"],
        "projected_base_salary_median": 120000,
    }


@pytest.fixture
def make_search_page(sample_profile):
    """Build a search response page with ``count`` results."""

    def _make(count, total, search_id="search-1", start=0):
        results = []
        for i in range(start, start + count):
            profile = dict(sample_profile, id=f"p-{i}", name=f"Person {i}")
            results.append({"profile": profile, "experience": [], "education": []})
        return {
            "results": results,
            "total": total,
            "query": "engineers",
            "search_id": search_id,
        }

    return _make
