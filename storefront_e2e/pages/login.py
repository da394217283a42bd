import re

from playwright.sync_api import Locator

from storefront_e2e.pages.base import BasePage

_LOGIN_PATHS = ("/auth/login", "/account/login")


class LoginPage(BasePage):
    path = "/auth/login"

    @property
    def email_input(self) -> Locator:
        return self.page.get_by_role("textbox", name="Email address for login")

    @property
    def password_input(self) -> Locator:
        return self.page.get_by_role("textbox", name="Password for login")

    @property
    def submit_button(self) -> Locator:
        return self.page.get_by_role("button", name="Sign In")

    @property
    def remember_me_checkbox(self) -> Locator:
        return self.page.get_by_role("checkbox", name="Remember me on this device")

    @property
    def error_alert(self) -> Locator:
        return self.page.locator('.MuiAlert-root[role="alert"]')

    @property
    def forgot_password_link(self) -> Locator:
        return self.page.get_by_role("link", name="Reset your password if you've forgotten it")

    @property
    def account_link(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("account", re.IGNORECASE))

    def wait_for_form(self) -> None:
        self.email_input.wait_for(state="visible", timeout=10_000)
        self.password_input.wait_for(state="visible", timeout=5000)
        self.submit_button.wait_for(state="visible", timeout=5000)

    def login(self, email: str, password: str, remember_me: bool = False) -> None:
        self.email_input.fill(email)
        self.password_input.fill(password)
        if remember_me and not self.remember_me_checkbox.is_checked():
            self.remember_me_checkbox.click()
        self.submit_button.click()

    def wait_for_login_complete(self, timeout: float = 30_000) -> None:
        """Wait until the browser has left the login page."""
        self.page.wait_for_url(
            lambda url: not any(path in url for path in _LOGIN_PATHS), timeout=timeout
        )
        self.wait_for_page_load()

    def has_error(self, timeout: float = 3000) -> bool:
        return self.is_visible(self.error_alert, timeout)

    def get_error_message(self) -> str | None:
        if not self.error_alert.is_visible():
            return None
        return self.error_alert.text_content()

    def is_logged_in(self) -> bool:
        if any(path in self.current_url for path in _LOGIN_PATHS):
            return False
        return self.account_link.first.is_visible()
