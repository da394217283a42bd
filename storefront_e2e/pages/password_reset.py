"""Forgot-password and reset-password pages.

For an unknown email the backend currently answers the forgot-password form
with an error rather than the generic confirmation, which leaks whether an
account exists.  :meth:`ForgotPasswordPage.submit_and_read_outcome` reports
whichever message appears so tests can record the behaviour either way.
"""

import re
from urllib.parse import quote

from playwright.sync_api import Locator
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from storefront_e2e.pages.base import BasePage

_SUCCESS_ALERT = ".MuiAlert-standardSuccess, .MuiAlert-filledSuccess, .MuiAlert-outlinedSuccess"
_ERROR_ALERT = ".MuiAlert-standardError, .MuiAlert-filledError, .MuiAlert-outlinedError"


class ForgotPasswordPage(BasePage):
    path = "/account/forgot-password"

    @property
    def page_heading(self) -> Locator:
        return self.page.get_by_role("heading", name="Forgot Your Password?", level=1)

    @property
    def email_input(self) -> Locator:
        return self.page.get_by_label("Email Address")

    @property
    def submit_button(self) -> Locator:
        return self.page.get_by_role(
            "button", name=re.compile("Send Reset Instructions|Sending", re.IGNORECASE)
        )

    @property
    def success_alert(self) -> Locator:
        return self.page.locator(_SUCCESS_ALERT)

    @property
    def error_alert(self) -> Locator:
        return self.page.locator(_ERROR_ALERT)

    def wait_for_form(self) -> None:
        self.handle_age_verification()
        self.page_heading.wait_for(state="visible", timeout=15_000)
        self.email_input.wait_for(state="visible", timeout=5000)
        self.submit_button.wait_for(state="visible", timeout=5000)

    def submit_email(self, email: str) -> None:
        self.email_input.fill(email)
        self.submit_button.click()

    def submit_and_read_outcome(self, email: str, timeout: float = 15_000) -> tuple[str, str]:
        """Submit *email* and return ``("success" | "error", message)``."""
        self.submit_email(email)
        alert = self.success_alert.or_(self.error_alert).first
        alert.wait_for(state="visible", timeout=timeout)
        outcome = "success" if self.success_alert.first.is_visible() else "error"
        return outcome, (alert.text_content() or "").strip()

    def is_in_success_state(self) -> bool:
        return (
            self.email_input.is_disabled()
            and not self.submit_button.is_visible()
            and self.success_alert.first.is_visible()
        )


class ResetPasswordPage(BasePage):
    path = "/account/reset-password"

    @property
    def page_heading(self) -> Locator:
        return self.page.get_by_role("heading", name="Reset Your Password")

    @property
    def new_password_input(self) -> Locator:
        return self.page.get_by_role("textbox", name="New Password", exact=True)

    @property
    def confirm_password_input(self) -> Locator:
        return self.page.get_by_role("textbox", name="Confirm New Password")

    @property
    def submit_button(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("Reset Password", re.IGNORECASE))

    @property
    def success_alert(self) -> Locator:
        return self.page.get_by_role("alert").filter(
            has=self.page.locator('[class*="MuiAlert-standardSuccess"]')
        )

    @property
    def error_alert(self) -> Locator:
        return (
            self.page.locator('[role="alert"]')
            .filter(
                has=self.page.locator(
                    '[class*="MuiAlert-standardError"], [class*="MuiAlert-filledError"]'
                )
            )
            .or_(
                self.page.get_by_role("alert").filter(
                    has_text=re.compile("error|failed|invalid|expired", re.IGNORECASE)
                )
            )
        )

    def goto_with_key(self, key: str) -> None:
        self.navigate_to(f"{self.url}?key={quote(key, safe='')}")

    def submit_new_password(self, new_password: str, confirm_password: str | None = None) -> None:
        self.new_password_input.fill(new_password)
        self.confirm_password_input.fill(
            new_password if confirm_password is None else confirm_password
        )
        self.submit_button.click()

    def get_success_message(self) -> str:
        self.success_alert.first.wait_for(state="visible")
        return self.success_alert.first.text_content() or ""

    def get_error_message(self, timeout: float = 3000) -> str | None:
        try:
            self.error_alert.first.wait_for(state="visible", timeout=timeout)
        except PlaywrightTimeoutError:
            return None
        return self.error_alert.first.text_content()

    def is_reset_successful(self) -> bool:
        return self.is_visible(self.success_alert)

    def is_reset_failed(self) -> bool:
        return self.is_visible(self.error_alert)
