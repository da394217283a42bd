"""Browser suite fixtures.

The session starts by checking that the backend and frontend answer, then
runs the global setup once; every test in this directory is skipped when the
services are unreachable.  Run with pytest-playwright's options, e.g.::

    pytest tests/e2e --browser firefox
    pytest tests/e2e --browser chromium --device "Pixel 5"
"""

import asyncio
from collections.abc import Generator

import pytest
from playwright.sync_api import Page

from storefront_e2e.config import settings
from storefront_e2e.logging_config import configure_logging
from storefront_e2e.reporting import RequestLogger
from storefront_e2e.services.bootstrap import run_global_setup, run_global_teardown
from storefront_e2e.services.health import wait_for_services

SERVICE_PROBE_TIMEOUT_SECONDS = 5


@pytest.fixture(scope="session", autouse=True)
def e2e_environment() -> Generator[None]:
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    if not asyncio.run(wait_for_services(settings, timeout=SERVICE_PROBE_TIMEOUT_SECONDS)):
        pytest.skip(f"Storefront not reachable at {settings.backend_url} / {settings.frontend_url}")

    asyncio.run(run_global_setup(settings))
    yield
    asyncio.run(run_global_teardown(settings))


@pytest.fixture(scope="session")
def base_url() -> str:
    return settings.frontend_url


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args: dict) -> dict:
    return {**browser_context_args, "ignore_https_errors": True}


@pytest.fixture(scope="session")
def browser_project(browser_name: str, pytestconfig: pytest.Config) -> str:
    """``browser_name`` plus the emulated device, e.g. ``chromium Pixel 5``."""
    device = pytestconfig.getoption("--device", default=None)
    return f"{browser_name} {device}" if device else browser_name


@pytest.fixture
def request_logger(page: Page, request: pytest.FixtureRequest) -> Generator[RequestLogger]:
    """Record the page's traffic and print the API log when the test fails."""
    network = RequestLogger()
    network.attach(page)
    yield network
    network.detach()
    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        print(network.get_formatted_logs())


@pytest.hookimpl(wrapper=True, tryfirst=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo):
    report = yield
    setattr(item, f"rep_{report.when}", report)
    return report
