"""Per-browser choice of activation and reset users.

Activation and reset keys are single-use, so each browser project consumes
its own pair: the first user of a pair drives the flow itself, the second
drives the "log in afterwards" test.
"""

from typing import NamedTuple

from storefront_e2e.fixtures.defaults import (
    get_pending_activation_user,
    get_pending_reset_user,
    get_valid_activation_key,
    get_valid_reset_key,
)
from storefront_e2e.schemas import BrowserCategory, FixtureUser

# (flow user, login-after-flow user) per browser category.
_USER_PAIRS: dict[BrowserCategory, tuple[int, int]] = {
    BrowserCategory.DEFAULT: (1, 2),
    BrowserCategory.FIREFOX: (3, 4),
    BrowserCategory.MOBILE: (5, 6),
}


class KeyedUser(NamedTuple):
    key: str
    user: FixtureUser


def _user_number(browser_name: str, second: bool) -> int:
    pair = _USER_PAIRS[BrowserCategory.from_browser_name(browser_name)]
    return pair[1] if second else pair[0]


def _activation(browser_name: str, second: bool) -> KeyedUser:
    n = _user_number(browser_name, second)
    return KeyedUser(get_valid_activation_key(n), get_pending_activation_user(n))


def _reset(browser_name: str, second: bool) -> KeyedUser:
    n = _user_number(browser_name, second)
    return KeyedUser(get_valid_reset_key(n), get_pending_reset_user(n))


def get_browser_activation_key_and_user(browser_name: str) -> KeyedUser:
    return _activation(browser_name, second=False)


def get_browser_login_after_activation_key_and_user(browser_name: str) -> KeyedUser:
    return _activation(browser_name, second=True)


def get_browser_reset_key_and_user(browser_name: str) -> KeyedUser:
    return _reset(browser_name, second=False)


def get_browser_login_after_reset_key_and_user(browser_name: str) -> KeyedUser:
    return _reset(browser_name, second=True)
