"""Shared behaviour for storefront page objects."""

import logging
import re
from typing import ClassVar, Literal

from playwright.sync_api import Locator, Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from storefront_e2e.config import settings

logger = logging.getLogger(__name__)

LoadState = Literal["load", "domcontentloaded", "networkidle"]


class BasePage:
    """A storefront page reachable at ``base_url + path``.

    Every navigation waits for the DOM and then dismisses the age gate and
    the cookie banner, either of which can cover the page on first visit.
    """

    path: ClassVar[str] = "/"

    def __init__(self, page: Page, base_url: str | None = None) -> None:
        self.page = page
        self.base_url = (base_url or settings.frontend_url).rstrip("/")

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    @property
    def current_url(self) -> str:
        return self.page.url

    def goto(self) -> None:
        self.navigate_to(self.url)

    def navigate_to(self, url: str) -> None:
        self.page.goto(url)
        self.wait_for_page_load()

    def reload(self) -> None:
        self.page.reload()
        self.wait_for_page_load()

    def wait_for_navigation(
        self, wait_until: LoadState = "networkidle", timeout: float | None = None
    ) -> None:
        self.page.wait_for_load_state(wait_until, timeout=timeout)

    def wait_for_page_load(self) -> None:
        # domcontentloaded rather than networkidle: some pages long-poll.
        self.page.wait_for_load_state("domcontentloaded")
        try:
            self.page.locator("body").wait_for(state="visible", timeout=5000)
        except PlaywrightTimeoutError:
            logger.debug("Body not visible after 5s on %s", self.page.url)
        self.handle_age_verification()
        self.handle_cookie_consent()

    def handle_age_verification(self) -> None:
        dialog = self.page.get_by_role("dialog")
        button = self.page.get_by_role("button", name="I am 21+")
        if not (dialog.is_visible() and button.is_visible()):
            return
        button.click()
        try:
            dialog.wait_for(state="hidden", timeout=3000)
        except PlaywrightTimeoutError:
            logger.debug("Age verification dialog still visible after confirming")

    def handle_cookie_consent(self) -> None:
        button = self.page.get_by_role("button", name="Accept", exact=True)
        if not button.is_visible():
            return
        button.click()
        try:
            button.wait_for(state="hidden", timeout=3000)
        except PlaywrightTimeoutError:
            logger.debug("Cookie banner still visible after accepting")

    def get_by_test_id(self, test_id: str) -> Locator:
        return self.page.get_by_test_id(test_id)

    def is_visible(self, locator: Locator, timeout: float = 1000) -> bool:
        """Whether *locator* becomes visible within *timeout* milliseconds."""
        try:
            locator.first.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeoutError:
            return False
        return True

    def wait_for_text(self, text: str | re.Pattern[str], timeout: float | None = None) -> None:
        self.page.get_by_text(text).first.wait_for(state="visible", timeout=timeout)
