"""Shared pytest fixtures for the storefront-e2e unit test suite.

Nothing here touches a real MongoDB or a real backend: the database is an
in-memory ``mongomock-motor`` client and HTTP goes through
``httpx.MockTransport``.  Browser tests under ``tests/e2e`` bring their own
conftest.

Fixture scopes
--------------
* ``test_settings``     — function: ``Settings`` with zero delays and fake URLs.
* ``mongo_client``      — function: fresh in-memory Motor-compatible client.
* ``db``                — function: the test database on ``mongo_client``.
* ``seeder``            — function: unconnected ``DataSeeder`` bound to ``mongo_client``.
* ``connected_seeder``  — function: ``seeder`` after ``connect()``; disconnected on teardown.
* ``backend_router``    — function: scripted responses for ``httpx.MockTransport``.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient

from storefront_e2e.config import Settings
from storefront_e2e.services.seeder import DataSeeder

BACKEND_URL = "http://backend.test"
FRONTEND_URL = "http://frontend.test"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings() -> Settings:
    """Settings with every delay at zero so retries and pacing do not sleep."""
    return Settings(
        _env_file=None,
        mongodb_uri="mongodb://mongo.test:27017",
        mongodb_database="storefront_e2e_test",
        backend_url=BACKEND_URL,
        frontend_url=FRONTEND_URL,
        frontend_origin=FRONTEND_URL,
        warmup_delay_seconds=0,
        registration_delay_seconds=0,
        isolated_registration_delay_seconds=0,
        register_retry_delay_seconds=0,
        admin_retry_delay_seconds=0,
        wait_timeout_seconds=1,
        poll_interval_seconds=0,
        cleanup_after_tests=False,
    )


# ---------------------------------------------------------------------------
# MongoDB
# ---------------------------------------------------------------------------


class InMemoryClient(AsyncMongoMockClient):
    """In-memory client; ``close()`` releases nothing so data survives a disconnect."""

    def close(self) -> None:
        pass


@pytest.fixture
def mongo_client() -> AsyncMongoMockClient:
    return InMemoryClient()


@pytest.fixture
def db(mongo_client: AsyncMongoMockClient, test_settings: Settings):
    return mongo_client[test_settings.mongodb_database]


@pytest.fixture
def seeder(test_settings: Settings, mongo_client: AsyncMongoMockClient) -> DataSeeder:
    return DataSeeder(test_settings, client_factory=lambda config: mongo_client)


@pytest.fixture
async def connected_seeder(seeder: DataSeeder) -> AsyncGenerator[DataSeeder]:
    await seeder.connect()
    yield seeder
    await seeder.disconnect()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


class BackendRouter:
    """Scripted backend for ``httpx.MockTransport``.

    Responses are queued per ``(method, path)``; the last queued response
    repeats once the queue is down to one.  An entry may also be an exception
    to raise or a (sync or async) handler taking the request.  Unscripted
    routes answer 404.
    Every request is recorded in :attr:`calls`.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], list[Any]] = {}
        self._defaults: dict[str, httpx.Response] = {}
        self.calls: list[httpx.Request] = []

    def add(self, method: str, path: str, *responses: Any) -> None:
        self._routes.setdefault((method, path), []).extend(responses)

    def replace(self, method: str, path: str, *responses: Any) -> None:
        """Discard anything queued for the route and queue *responses* instead."""
        self._routes[(method, path)] = list(responses)

    def default_for(self, method: str, response: httpx.Response) -> None:
        """Answer every unscripted *method* request with *response*."""
        self._defaults[method] = response

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [call for call in self.calls if call.method == method and call.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        queue = self._routes.get((request.method, request.url.path))
        if not queue:
            outcome = self._defaults.get(request.method, httpx.Response(404, text="not found"))
        else:
            outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            # MockTransport awaits coroutine results.
            return outcome(request)
        # A Response is bound to one request; hand out a fresh copy each time.
        return httpx.Response(
            outcome.status_code, headers=outcome.headers, content=outcome.content
        )


@pytest.fixture
def backend_router() -> BackendRouter:
    return BackendRouter()


@pytest.fixture
def make_http_client(
    backend_router: BackendRouter,
) -> Callable[[], httpx.AsyncClient]:
    """Factory for ``AsyncClient``s routed through ``backend_router``."""

    def factory() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(backend_router))

    return factory


@pytest.fixture
async def http_client(
    make_http_client: Callable[[], httpx.AsyncClient],
) -> AsyncGenerator[httpx.AsyncClient]:
    async with make_http_client() as client:
        yield client
