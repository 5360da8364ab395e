import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from stat_relay.main import app
from stat_relay.core.upstream import StatsClient, get_stats_client

UPSTREAM_BASE = "https://api.test"


class FakeUpstream:
    """
    Stands in for the stats API behind an httpx.MockTransport.

    routes maps a URL path to what it should answer with:
    a dict (sent as JSON), raw bytes, or an exception to raise.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.routes.get(request.url.path)

        if isinstance(result, Exception):
            raise result
        if result is None:
            return httpx.Response(404, json={"code": -404, "message": "not found"})
        if isinstance(result, bytes):
            return httpx.Response(200, content=result)
        return httpx.Response(200, json=result)

    @property
    def paths(self):
        return [request.url.path for request in self.requests]


# Upstream double, fresh for every test
@pytest.fixture(scope="function")
def upstream():
    return FakeUpstream()


# httpx client wired to the fake upstream
@pytest_asyncio.fixture(scope="function")
async def stats_client(upstream: FakeUpstream):
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    yield StatsClient(http, UPSTREAM_BASE)
    await http.aclose()


# Client
@pytest_asyncio.fixture(scope="function")
async def client(stats_client: StatsClient):
    async def override_get_stats_client():
        return stats_client

    app.dependency_overrides[get_stats_client] = override_get_stats_client

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# Envelopes as the real API sends them
@pytest.fixture
def relation_ok():
    return {
        "code": 0,
        "message": "0",
        "ttl": 1,
        "data": {
            "mid": 12345,
            "following": 210,
            "whisper": 0,
            "black": 3,
            "follower": 98765,
        },
    }


@pytest.fixture
def upstat_ok():
    return {
        "code": 0,
        "message": "0",
        "ttl": 1,
        "data": {"archive": {"view": 4567890}, "article": {"view": 321}},
    }
