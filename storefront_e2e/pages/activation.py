from urllib.parse import quote

from playwright.sync_api import Locator
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from storefront_e2e.pages.base import BasePage


class ActivationPage(BasePage):
    path = "/account/activate"

    @property
    def page_heading(self) -> Locator:
        return self.page.get_by_role("heading", name="Account Activation")

    @property
    def loading_spinner(self) -> Locator:
        return self.page.get_by_role("progressbar")

    @property
    def success_alert(self) -> Locator:
        return self.page.locator(".MuiAlert-standardSuccess")

    @property
    def error_alert(self) -> Locator:
        return self.page.locator(".MuiAlert-standardError")

    @property
    def go_to_login_button(self) -> Locator:
        return self.page.get_by_role("button", name="Go to Login")

    @property
    def resend_activation_button(self) -> Locator:
        return self.page.get_by_role("button", name="Resend Activation Email")

    def activate_account(self, key: str, timeout: float = 15_000) -> None:
        self.navigate_to(f"{self.url}?key={quote(key, safe='')}")
        self.wait_for_activation_complete(timeout)

    def wait_for_activation_complete(self, timeout: float = 20_000) -> None:
        """Wait for either the success or the error alert.

        Raises ``PlaywrightTimeoutError`` when neither appears in time.
        """
        try:
            self.loading_spinner.wait_for(state="hidden", timeout=timeout)
        except PlaywrightTimeoutError:
            pass
        self.success_alert.or_(self.error_alert).first.wait_for(state="visible", timeout=timeout)

    def is_activation_successful(self) -> bool:
        return self.is_visible(self.success_alert)

    def is_activation_failed(self) -> bool:
        return self.is_visible(self.error_alert)

    def get_success_message(self) -> str:
        self.success_alert.wait_for(state="visible")
        return self.success_alert.text_content() or ""

    def get_error_message(self) -> str:
        self.error_alert.wait_for(state="visible")
        return self.error_alert.text_content() or ""

    def click_go_to_login(self) -> None:
        self.go_to_login_button.click()
        self.wait_for_navigation()
