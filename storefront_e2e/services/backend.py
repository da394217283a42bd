"""HTTP client for the backend endpoints the bootstrap depends on.

The backend runs a threat-detection filter that sometimes answers 403 with
a body mentioning "threat", typically for the first requests from a new
source.  Those responses are retried a bounded number of times; every other
outcome is returned to the caller to log.
"""

import logging
from enum import StrEnum
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from storefront_e2e.config import Settings, settings
from storefront_e2e.errors import BackendError
from storefront_e2e.schemas import FixtureUser, LoginRequest, LoginResponse, RegisterRequest

logger = logging.getLogger(__name__)

HEALTH_PATH = "/management/health"
REGISTER_PATH = "/api/auth/register"
LOGIN_PATH = "/api/auth/login"
PRODUCT_CACHE_CLEAR_PATH = "/api/admin/cache/app/products/clear"
USER_CACHE_CLEAR_PATH = "/api/admin/cache/app/users/clear"
PAYMENT_CONFIG_REFRESH_PATH = "/api/admin/payment-configuration/refresh"

_ALREADY_EXISTS_MARKERS = ("already", "exists", "duplicate")
_THREAT_MARKER = "threat"


class ResponseOutcome(StrEnum):
    OK = "OK"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    THREAT_BLOCKED = "THREAT_BLOCKED"
    FAILED = "FAILED"


def classify_response(response: httpx.Response) -> ResponseOutcome:
    """Map a backend response onto the outcomes the bootstrap acts on.

    - 2xx is ``OK``.
    - 400 whose body mentions already/exists/duplicate is ``ALREADY_EXISTS``.
    - 403 whose body mentions threat is ``THREAT_BLOCKED``.
    - Anything else is ``FAILED``.
    """
    if response.is_success:
        return ResponseOutcome.OK
    body = response.text
    if response.status_code == 400 and any(marker in body for marker in _ALREADY_EXISTS_MARKERS):
        return ResponseOutcome.ALREADY_EXISTS
    if response.status_code == 403 and _THREAT_MARKER in body:
        return ResponseOutcome.THREAT_BLOCKED
    return ResponseOutcome.FAILED


def _is_threat_blocked(response: httpx.Response) -> bool:
    return classify_response(response) is ResponseOutcome.THREAT_BLOCKED


def _last_outcome(retry_state: RetryCallState) -> httpx.Response:
    # Returns the final response, or re-raises the final exception.
    return retry_state.outcome.result()


def create_http_client(config: Settings = settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=config.http_timeout_seconds)


class BackendClient:
    """Thin wrapper over the backend's health, auth and admin endpoints.

    Every request carries the ``Origin`` header the backend's CORS policy
    expects.  The caller owns *http_client* and closes it.
    """

    def __init__(self, http_client: httpx.AsyncClient, config: Settings = settings) -> None:
        self._http = http_client
        self._config = config
        self._base_url = config.backend_url.rstrip("/")

    def _headers(self, token: str | None = None) -> dict[str, str]:
        headers = {"Accept": "application/json", "Origin": self._config.frontend_origin}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(
        self, method: str, path: str, *, token: str | None = None, json: Any = None
    ) -> httpx.Response:
        try:
            return await self._http.request(
                method, f"{self._base_url}{path}", headers=self._headers(token), json=json
            )
        except httpx.TransportError as exc:
            raise BackendError(f"{method} {path} failed: {exc}") from exc

    async def _request_with_retry(
        self,
        method: str,
        path: str,
        *,
        label: str,
        attempts: int,
        delay: float,
        retry_transport_errors: bool = False,
        token: str | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request, retrying threat-blocked responses up to *attempts* calls in total.

        With *retry_transport_errors*, connection failures are retried the same
        way.  Once attempts run out the last response is returned as-is.
        """
        retry = retry_if_result(_is_threat_blocked)
        if retry_transport_errors:
            retry = retry | retry_if_exception_type(BackendError)

        def before_sleep(retry_state: RetryCallState) -> None:
            if retry_state.outcome.failed:
                logger.info(
                    "Request for %s failed (%s), retrying after delay...",
                    label,
                    retry_state.outcome.exception(),
                )
            else:
                logger.info("Threat detection blocked %s, retrying after delay...", label)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(delay),
            retry=retry,
            before_sleep=before_sleep,
            retry_error_callback=_last_outcome,
        )
        return await retrying(self._request, method, path, token=token, json=json)

    # ------------------------------------------------------------------
    # Public endpoints
    # ------------------------------------------------------------------

    async def warmup(self) -> bool:
        """Best-effort health request so the threat filter has seen this host.

        Never raises; returns whether the request went through.
        """
        try:
            await self._request("GET", HEALTH_PATH)
        except BackendError as exc:
            logger.warning("Backend warmup failed (may be expected): %s", exc)
            return False
        logger.info("Backend warmup complete")
        return True

    async def register(self, user: FixtureUser, *, fallback_last_name: str = "User") -> bool:
        """Register *user* through the public endpoint.

        An "already exists" answer counts as success.  Returns ``False``
        after logging when registration fails or retries run out.
        """
        try:
            payload = RegisterRequest(
                first_name=user.first_name,
                last_name=user.last_name or fallback_last_name,
                email=user.email,
                password=user.password,
            )
        except ValidationError as exc:
            logger.warning("Invalid registration data for %s: %s", user.email, exc)
            return False

        try:
            response = await self._request_with_retry(
                "POST",
                REGISTER_PATH,
                label=user.email,
                attempts=self._config.register_max_attempts,
                delay=self._config.register_retry_delay_seconds,
                retry_transport_errors=True,
                json=payload.model_dump(by_alias=True),
            )
        except BackendError as exc:
            logger.warning("Error registering %s: %s", user.email, exc)
            return False

        outcome = classify_response(response)
        if outcome is ResponseOutcome.OK:
            logger.info("Registered user: %s", user.email)
            return True
        if outcome is ResponseOutcome.ALREADY_EXISTS:
            logger.info("User already exists: %s", user.email)
            return True
        logger.warning(
            "Failed to register %s: %d - %s", user.email, response.status_code, response.text
        )
        return False

    async def login(self, email: str, password: str) -> str | None:
        """Return a bearer token for *email*, or ``None`` when login fails."""
        payload = LoginRequest(email=email, password=password)
        try:
            response = await self._request(
                "POST", LOGIN_PATH, json=payload.model_dump(by_alias=True)
            )
        except BackendError as exc:
            logger.warning("Error logging in %s: %s", email, exc)
            return None

        if not response.is_success:
            logger.warning("Failed to login %s: %d - %s", email, response.status_code, response.text)
            return None

        try:
            token = LoginResponse.model_validate(response.json()).token
        except (ValueError, ValidationError) as exc:
            logger.warning("Unusable login response for %s: %s", email, exc)
            return None
        logger.info("Logged in as: %s", email)
        return token

    # ------------------------------------------------------------------
    # Admin endpoints
    # ------------------------------------------------------------------

    async def _admin_post(self, path: str, token: str, description: str) -> bool:
        try:
            response = await self._request_with_retry(
                "POST",
                path,
                label=description,
                attempts=self._config.admin_max_attempts,
                delay=self._config.admin_retry_delay_seconds,
                token=token,
            )
        except BackendError as exc:
            logger.warning("Error during %s: %s", description, exc)
            return False

        if response.is_success:
            logger.info("%s succeeded", description.capitalize())
            return True
        logger.warning(
            "Failed %s: %d - %s", description, response.status_code, response.text
        )
        return False

    async def clear_caches(self, token: str) -> bool:
        """Clear the product cache, then the user cache; ``True`` only if both cleared."""
        products_cleared = await self._admin_post(
            PRODUCT_CACHE_CLEAR_PATH, token, "product cache clear"
        )
        users_cleared = await self._admin_post(USER_CACHE_CLEAR_PATH, token, "user cache clear")
        return products_cleared and users_cleared

    async def refresh_payment_config(self, token: str) -> bool:
        return await self._admin_post(
            PAYMENT_CONFIG_REFRESH_PATH, token, "payment configuration refresh"
        )


