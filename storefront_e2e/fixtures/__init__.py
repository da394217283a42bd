from .browsers import (
    KeyedUser,
    get_browser_activation_key_and_user,
    get_browser_login_after_activation_key_and_user,
    get_browser_login_after_reset_key_and_user,
    get_browser_reset_key_and_user,
)
from .defaults import (
    DEFAULT_FIXTURES,
    build_default_fixtures,
    get_account_orders_user_orders,
    get_account_user,
    get_all_isolated_users,
    get_bitcoin_user,
    get_checkout_user,
    get_default_fixtures,
    get_expired_reset_key,
    get_expired_reset_user,
    get_in_stock_product,
    get_invalid_shipping_address,
    get_isolated_user,
    get_out_of_stock_product,
    get_pending_activation_user,
    get_pending_reset_user,
    get_test_coupon,
    get_test_product,
    get_test_user,
    get_valid_activation_key,
    get_valid_reset_key,
    get_valid_shipping_address,
    seed_order_history,
)
from .empty import EMPTY_FIXTURES, get_empty_fixtures
from .orders import generate_order_number
from .users import ISOLATED_USERS, TEST_PASSWORD

__all__ = [
    # browsers
    "KeyedUser",
    "get_browser_activation_key_and_user",
    "get_browser_login_after_activation_key_and_user",
    "get_browser_login_after_reset_key_and_user",
    "get_browser_reset_key_and_user",
    # defaults
    "DEFAULT_FIXTURES",
    "build_default_fixtures",
    "get_account_orders_user_orders",
    "get_account_user",
    "get_all_isolated_users",
    "get_bitcoin_user",
    "get_checkout_user",
    "get_default_fixtures",
    "get_expired_reset_key",
    "get_expired_reset_user",
    "get_in_stock_product",
    "get_invalid_shipping_address",
    "get_isolated_user",
    "get_out_of_stock_product",
    "get_pending_activation_user",
    "get_pending_reset_user",
    "get_test_coupon",
    "get_test_product",
    "get_test_user",
    "get_valid_activation_key",
    "get_valid_reset_key",
    "get_valid_shipping_address",
    "seed_order_history",
    # empty
    "EMPTY_FIXTURES",
    "get_empty_fixtures",
    # orders / users
    "generate_order_number",
    "ISOLATED_USERS",
    "TEST_PASSWORD",
]
