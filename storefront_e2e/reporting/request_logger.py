"""Browser network capture for diagnosing failed end-to-end tests.

Attach a :class:`RequestLogger` to a Playwright page and it records every
request, its response or failure, and timings.  Only backend API traffic is
logged as it happens; everything is kept for the summary.
"""

import itertools
import logging
from datetime import UTC, datetime

from playwright.sync_api import Page, Request, Response
from pydantic import BaseModel

logger = logging.getLogger(__name__)

_API_MARKERS = ("/api/", "/management/", "/authenticate")


def is_api_request(url: str) -> bool:
    return any(marker in url for marker in _API_MARKERS)


class LoggedRequest(BaseModel):
    timestamp: datetime
    method: str
    url: str
    resource_type: str
    post_data: str | None = None
    headers: dict[str, str] = {}


class LoggedResponse(BaseModel):
    timestamp: datetime
    url: str
    status: int
    status_text: str
    headers: dict[str, str] = {}


class NetworkLogEntry(BaseModel):
    id: str
    request: LoggedRequest
    response: LoggedResponse | None = None
    error: str | None = None
    duration_ms: int | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None or (self.response is not None and self.response.status >= 400)


class RequestSummary(BaseModel):
    total: int
    api_requests: int
    successful: int
    failed: int
    avg_duration_ms: int


class RequestLogger:
    def __init__(self) -> None:
        self._entries: list[NetworkLogEntry] = []
        self._counter = itertools.count(1)
        self._page: Page | None = None

    @property
    def attached(self) -> bool:
        return self._page is not None

    def attach(self, page: Page) -> None:
        """Start recording *page*'s traffic, detaching from any previous page first."""
        if self.attached:
            self.detach()
        page.on("request", self._on_request)
        page.on("response", self._on_response)
        page.on("requestfailed", self._on_request_failed)
        self._page = page
        logger.debug("Attached to page")

    def detach(self) -> None:
        if self._page is None:
            return
        self._page.remove_listener("request", self._on_request)
        self._page.remove_listener("response", self._on_response)
        self._page.remove_listener("requestfailed", self._on_request_failed)
        self._page = None
        logger.debug("Detached from page")

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_request(self, request: Request) -> None:
        entry = NetworkLogEntry(
            id=f"req-{next(self._counter)}",
            request=LoggedRequest(
                timestamp=datetime.now(UTC),
                method=request.method,
                url=request.url,
                resource_type=request.resource_type,
                post_data=request.post_data,
                headers=request.headers,
            ),
        )
        self._entries.append(entry)
        if is_api_request(request.url):
            logger.info("-> %s %s", request.method, request.url)

    def _on_response(self, response: Response) -> None:
        entry = self._latest_entry(response.request.url)
        if entry is None:
            return

        now = datetime.now(UTC)
        entry.response = LoggedResponse(
            timestamp=now,
            url=response.url,
            status=response.status,
            status_text=response.status_text,
            headers=response.headers,
        )
        entry.duration_ms = int((now - entry.request.timestamp).total_seconds() * 1000)
        if is_api_request(response.url):
            logger.info(
                "%s %d %s (%dms)",
                "OK " if 200 <= response.status < 300 else "ERR",
                response.status,
                response.url,
                entry.duration_ms,
            )

    def _on_request_failed(self, request: Request) -> None:
        entry = self._latest_entry(request.url)
        if entry is None:
            return
        entry.error = request.failure or "Unknown error"
        logger.warning("FAILED %s - %s", request.url, entry.error)

    def _latest_entry(self, url: str) -> NetworkLogEntry | None:
        for entry in reversed(self._entries):
            if entry.request.url == url:
                return entry
        return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_logs(self) -> list[NetworkLogEntry]:
        return list(self._entries)

    def get_api_logs(self) -> list[NetworkLogEntry]:
        return [entry for entry in self._entries if is_api_request(entry.request.url)]

    def get_failed_requests(self) -> list[NetworkLogEntry]:
        return [entry for entry in self._entries if entry.failed]

    def clear(self) -> None:
        self._entries.clear()
        self._counter = itertools.count(1)
        logger.debug("Logs cleared")

    def get_formatted_logs(self) -> str:
        api_logs = self.get_api_logs()
        if not api_logs:
            return "No API requests logged"

        lines = []
        for entry in api_logs:
            status = entry.response.status if entry.response else "PENDING"
            duration = f"{entry.duration_ms}ms" if entry.duration_ms else "N/A"
            error = f" - Error: {entry.error}" if entry.error else ""
            lines.append(
                f"[{entry.request.timestamp.isoformat()}] {entry.request.method} "
                f"{entry.request.url} -> {status} ({duration}){error}"
            )
        return "\n".join(lines)

    def get_summary(self) -> RequestSummary:
        api_logs = self.get_api_logs()
        failed = sum(1 for entry in api_logs if entry.failed)
        durations = [entry.duration_ms for entry in api_logs if entry.duration_ms is not None]
        return RequestSummary(
            total=len(self._entries),
            api_requests=len(api_logs),
            successful=len(api_logs) - failed,
            failed=failed,
            avg_duration_ms=round(sum(durations) / len(durations)) if durations else 0,
        )
