"""Service health polling and a request-logging API helper for tests."""

import asyncio
import logging
import time
from datetime import UTC, datetime
from typing import Any, Generic, Self, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from storefront_e2e.config import Settings, settings
from storefront_e2e.schemas import AuthenticateRequest, BackendHealth, HealthStatus
from storefront_e2e.services.backend import HEALTH_PATH

logger = logging.getLogger(__name__)

T = TypeVar("T")

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
_PROGRESS_EVERY_SECONDS = 10


class ApiHelperConfig(BaseModel):
    backend_url: str
    frontend_url: str
    default_timeout_seconds: float = 60.0
    health_check_interval_seconds: float = 1.0

    @classmethod
    def from_settings(cls, config: Settings = settings) -> Self:
        return cls(backend_url=config.backend_url, frontend_url=config.frontend_url)


class RequestLogEntry(BaseModel):
    timestamp: datetime
    method: str
    url: str
    status: int | None = None
    response_time_ms: int = 0
    error: str | None = None
    request_body: Any = None
    response_body: Any = None


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    status: int
    data: T | None = None
    error: str | None = None


class ApiHelper:
    """Direct backend access for tests, with every request recorded.

    Requests never raise: transport failures come back as an unsuccessful
    :class:`ApiResponse` with status 0.
    """

    def __init__(
        self,
        config: ApiHelperConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or ApiHelperConfig.from_settings()
        self._http = http_client or httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None
        self._request_logs: list[RequestLogEntry] = []
        self._auth_token: str | None = None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    async def check_backend_health(self) -> BackendHealth:
        response = await self._request("GET", f"{self._config.backend_url}{HEALTH_PATH}")
        if response.success and isinstance(response.data, dict):
            try:
                return BackendHealth.model_validate(response.data)
            except ValidationError:
                logger.debug("Unrecognised health payload: %s", response.data)
        return BackendHealth(status=HealthStatus.DOWN)

    async def check_frontend_health(self) -> bool:
        response = await self._request("GET", self._config.frontend_url)
        return response.success and response.status == 200

    async def wait_for_services(self, timeout: float | None = None) -> bool:
        """Poll both services until the backend reports UP and the frontend answers 200."""
        timeout = self._config.default_timeout_seconds if timeout is None else timeout
        interval = self._config.health_check_interval_seconds
        start = time.monotonic()
        logger.info("Waiting for services to become healthy (timeout: %ss)...", timeout)

        while time.monotonic() - start < timeout:
            backend_up = (await self.check_backend_health()).status is HealthStatus.UP
            frontend_up = await self.check_frontend_health()
            if backend_up and frontend_up:
                logger.info("All services healthy after %.1fs", time.monotonic() - start)
                return True

            logger.info(
                "Service status - Backend: %s, Frontend: %s",
                "UP" if backend_up else "DOWN",
                "UP" if frontend_up else "DOWN",
            )
            await asyncio.sleep(interval)

        logger.error("Services did not become healthy within %ss", timeout)
        return False

    # ------------------------------------------------------------------
    # API
    # ------------------------------------------------------------------

    async def create_order(self, order: dict[str, Any]) -> ApiResponse[Any]:
        return await self._request("POST", f"{self._config.backend_url}/api/orders", order)

    async def get_order(self, order_id: str) -> ApiResponse[Any]:
        return await self._request("GET", f"{self._config.backend_url}/api/orders/{order_id}")

    async def get_products(self, params: dict[str, str] | None = None) -> ApiResponse[Any]:
        return await self._request("GET", f"{self._config.backend_url}/api/products", params=params)

    async def get_product(self, product_id: str) -> ApiResponse[Any]:
        return await self._request(
            "GET", f"{self._config.backend_url}/api/products/{product_id}"
        )

    async def login(self, email: str, password: str) -> ApiResponse[Any]:
        """Authenticate against ``/api/authenticate`` and keep the ``id_token`` on success."""
        body = AuthenticateRequest(username=email, password=password).model_dump(by_alias=True)
        response = await self._request("POST", f"{self._config.backend_url}/api/authenticate", body)
        if response.success and isinstance(response.data, dict) and response.data.get("id_token"):
            self._auth_token = response.data["id_token"]
        return response

    def logout(self) -> None:
        self._auth_token = None
        logger.info("Logged out, token cleared")

    async def get_account(self) -> ApiResponse[Any]:
        return await self._request("GET", f"{self._config.backend_url}/api/account")

    @property
    def is_authenticated(self) -> bool:
        return self._auth_token is not None

    # ------------------------------------------------------------------
    # Request log
    # ------------------------------------------------------------------

    def get_request_logs(self) -> list[RequestLogEntry]:
        return list(self._request_logs)

    def clear_request_logs(self) -> None:
        self._request_logs.clear()
        logger.info("Request logs cleared")

    def get_formatted_logs(self) -> str:
        if not self._request_logs:
            return "No requests logged"
        lines = []
        for entry in self._request_logs:
            status = entry.status if entry.status is not None else "ERROR"
            error = f" - Error: {entry.error}" if entry.error else ""
            lines.append(
                f"[{entry.timestamp.isoformat()}] {entry.method} {entry.url} -> {status} "
                f"({entry.response_time_ms}ms){error}"
            )
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> ApiHelperConfig:
        return self._config.model_copy()

    def update_config(self, **changes: Any) -> None:
        self._config = self._config.model_copy(update=changes)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        body: Any = None,
        *,
        params: dict[str, str] | None = None,
    ) -> ApiResponse[Any]:
        entry = RequestLogEntry(
            timestamp=datetime.now(UTC), method=method, url=url, request_body=body
        )
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        json_body = body if body is not None and method in _BODY_METHODS else None

        start = time.monotonic()
        try:
            response = await self._http.request(
                method, url, headers=headers, json=json_body, params=params
            )
        except httpx.HTTPError as exc:
            entry.response_time_ms = int((time.monotonic() - start) * 1000)
            entry.error = str(exc) or type(exc).__name__
            self._record(entry)
            return ApiResponse(success=False, status=0, error=entry.error)

        entry.status = response.status_code
        entry.response_time_ms = int((time.monotonic() - start) * 1000)
        self._record(entry)

        data = None
        if "application/json" in response.headers.get("content-type", ""):
            try:
                data = response.json()
            except ValueError:
                data = None
            entry.response_body = data

        if response.is_success:
            return ApiResponse(success=True, status=response.status_code, data=data)
        return ApiResponse(
            success=False,
            status=response.status_code,
            data=data,
            error=f"HTTP {response.status_code}: {response.reason_phrase}",
        )

    def _record(self, entry: RequestLogEntry) -> None:
        self._request_logs.append(entry)
        ok = entry.status is not None and 200 <= entry.status < 300
        logger.debug(
            "%s %s %s -> %s (%dms)",
            "OK " if ok else "ERR",
            entry.method,
            entry.url,
            entry.status if entry.status is not None else "ERROR",
            entry.response_time_ms,
        )
        if entry.error:
            logger.debug("  Error: %s", entry.error)


# ---------------------------------------------------------------------------
# wait-for-services
# ---------------------------------------------------------------------------


async def _wait_for_service(
    http_client: httpx.AsyncClient, name: str, url: str, timeout: float, interval: float
) -> bool:
    logger.info("Waiting for %s at %s (timeout: %ss)...", name, url, timeout)
    start = time.monotonic()
    last_progress = 0.0
    while (elapsed := time.monotonic() - start) < timeout:
        try:
            response = await http_client.get(url, timeout=5.0)
        except httpx.HTTPError:
            response = None
        if response is not None and response.is_success:
            logger.info("%s is ready! (took %ds)", name, elapsed)
            return True

        if elapsed - last_progress >= _PROGRESS_EVERY_SECONDS:
            last_progress = elapsed
            logger.info("%s not ready yet... (%ds elapsed)", name, elapsed)
        await asyncio.sleep(interval)

    logger.error("%s failed to become ready within %ss", name, timeout)
    return False


async def wait_for_services(
    config: Settings = settings,
    *,
    timeout: float | None = None,
    interval: float | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> bool:
    """Wait for the backend health endpoint, then the frontend, within one shared timeout.

    The frontend gets whatever time the backend left over.
    """
    timeout = config.wait_timeout_seconds if timeout is None else timeout
    interval = config.poll_interval_seconds if interval is None else interval
    client = http_client or httpx.AsyncClient()
    start = time.monotonic()

    logger.info("Backend URL:  %s", config.backend_url)
    logger.info("Frontend URL: %s", config.frontend_url)
    logger.info("Timeout:      %ss", timeout)
    try:
        backend_url = f"{config.backend_url.rstrip('/')}{HEALTH_PATH}"
        if not await _wait_for_service(client, "Backend", backend_url, timeout, interval):
            logger.error("Backend service did not become ready in time")
            return False

        remaining = timeout - (time.monotonic() - start)
        if remaining <= 0:
            logger.error("No time remaining for frontend check")
            return False

        if not await _wait_for_service(client, "Frontend", config.frontend_url, remaining, interval):
            logger.error("Frontend service did not become ready in time")
            return False
    finally:
        if http_client is None:
            await client.aclose()

    logger.info("All services are ready! (total time: %ds)", time.monotonic() - start)
    return True
