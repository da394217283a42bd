"""Accounts the suite signs in with.

Core users are registered through the backend; special users are written
straight to MongoDB because they need activation or reset keys the
registration endpoint cannot set. Isolated users give each test file its own
account so parallel workers never mutate each other's carts, addresses or
orders.
"""

from datetime import datetime, timedelta

from storefront_e2e.schemas import FixtureUser, FixtureUsers

TEST_PASSWORD = "TestPassword123!"
TEST_EMAIL_DOMAIN = "test.zenithbioscience.com"

# Reset keys expire 24 hours after the request; this one is past the window.
EXPIRED_RESET_AGE = timedelta(hours=25)

_BROWSER_KEY_SUFFIXES = ("12345", "67890", "firefox-1", "firefox-2", "mobile-1", "mobile-2")


def _email(local_part: str) -> str:
    return f"{local_part}@{TEST_EMAIL_DOMAIN}"


def _pending_activation(n: int) -> FixtureUser:
    suffix = "" if n == 1 else str(n)
    return FixtureUser(
        id=f"e2e-pending-activation-{n:03d}",
        email=_email(f"testpendingactivation{suffix}"),
        password=TEST_PASSWORD,
        first_name="Test",
        last_name=f"PendingActivation{suffix}",
        activated=False,
        activation_key=f"e2e-valid-activation-key-{_BROWSER_KEY_SUFFIXES[n - 1]}",
    )


def _pending_reset(n: int, now: datetime) -> FixtureUser:
    suffix = "" if n == 1 else str(n)
    return FixtureUser(
        id=f"e2e-pending-reset-{n:03d}",
        email=_email(f"testpendingreset{suffix}"),
        password=TEST_PASSWORD,
        first_name="Test",
        last_name=f"PendingReset{suffix}",
        reset_key=f"e2e-valid-reset-key-{_BROWSER_KEY_SUFFIXES[n - 1]}",
        reset_date=now,
    )


def build_default_users(now: datetime) -> FixtureUsers:
    return FixtureUsers(
        customer=FixtureUser(
            id="e2e-customer-001",
            email=_email("testcustomer"),
            password=TEST_PASSWORD,
            first_name="Test",
            last_name="Customer",
        ),
        admin=FixtureUser(
            id="e2e-admin-001",
            email=_email("testadmin"),
            password="TestAdminPassword123!",
            first_name="Test",
            last_name="Admin",
            authorities=["ROLE_USER", "ROLE_ADMIN"],
        ),
        unverified=FixtureUser(
            id="e2e-unverified-001",
            email=_email("testunverified"),
            password="TestUnverifiedPassword123!",
            first_name="Test",
            last_name="Unverified",
            activated=False,
        ),
        pending_activation=_pending_activation(1),
        pending_activation2=_pending_activation(2),
        pending_activation3=_pending_activation(3),
        pending_activation4=_pending_activation(4),
        pending_activation5=_pending_activation(5),
        pending_activation6=_pending_activation(6),
        pending_reset=_pending_reset(1, now),
        pending_reset2=_pending_reset(2, now),
        pending_reset3=_pending_reset(3, now),
        pending_reset4=_pending_reset(4, now),
        pending_reset5=_pending_reset(5, now),
        pending_reset6=_pending_reset(6, now),
        expired_reset=FixtureUser(
            id="e2e-expired-reset-001",
            email=_email("testexpiredreset"),
            password=TEST_PASSWORD,
            first_name="Test",
            last_name="ExpiredReset",
            reset_key="e2e-expired-reset-key-12345",
            reset_date=now - EXPIRED_RESET_AGE,
        ),
    )


# ---------------------------------------------------------------------------
# Isolated per-test-file users: (key, id, email local part, first, last)
# ---------------------------------------------------------------------------

_ISOLATED_USER_ROWS: tuple[tuple[str, str, str, str, str], ...] = (
    # checkout
    ("checkout_flow", "e2e-checkout-flow-001", "checkout-flow", "Checkout", "Flow"),
    ("address_validation", "e2e-address-val-001", "address-validation", "Address", "Validation"),
    ("checkout_summary", "e2e-checkout-summary-001", "checkout-summary", "Checkout", "Summary"),
    ("order_creation", "e2e-order-creation-001", "order-creation", "Order", "Creation"),
    ("payment_processing", "e2e-payment-proc-001", "payment-processing", "Payment", "Processing"),
    # cart
    ("cart_management", "e2e-cart-mgmt-001", "cart-management", "Cart", "Management"),
    # auth
    ("auth_login", "e2e-auth-login-001", "auth-login", "Auth", "Login"),
    ("auth_logout", "e2e-auth-logout-001", "auth-logout", "Auth", "Logout"),
    # account
    ("account_dashboard", "e2e-account-dashboard-001", "account-dashboard", "Account", "Dashboard"),
    ("account_profile", "e2e-account-profile-001", "account-profile", "Account", "Profile"),
    ("account_addresses", "e2e-account-addresses-001", "account-addresses", "Account", "Addresses"),
    ("account_password", "e2e-account-password-001", "account-password", "Account", "Password"),
    (
        "account_password_change",
        "e2e-account-password-change-001",
        "account-password-change",
        "Account",
        "PasswordChange",
    ),
    ("account_orders", "e2e-account-orders-001", "account-orders", "Account", "Orders"),
    ("account_coa", "e2e-account-coa-001", "account-coa", "Account", "Coa"),
    ("account_credits", "e2e-account-credits-001", "account-credits", "Account", "Credits"),
    ("account_gdpr", "e2e-account-gdpr-001", "account-gdpr", "Account", "Gdpr"),
    # bitcoin checkout
    ("bitcoin_payment_selection", "e2e-bitcoin-selection-001", "bitcoin-selection", "Bitcoin", "Selection"),
    ("bitcoin_qr_generation", "e2e-bitcoin-qr-001", "bitcoin-qr", "Bitcoin", "QR"),
    ("bitcoin_payment_status", "e2e-bitcoin-status-001", "bitcoin-status", "Bitcoin", "Status"),
    ("bitcoin_error_handling", "e2e-bitcoin-error-001", "bitcoin-error", "Bitcoin", "Error"),
    ("bitcoin_accessibility", "e2e-bitcoin-a11y-001", "bitcoin-a11y", "Bitcoin", "Accessibility"),
    ("bitcoin_websocket", "e2e-bitcoin-ws-001", "bitcoin-ws", "Bitcoin", "Websocket"),
)

ISOLATED_USERS: dict[str, FixtureUser] = {
    key: FixtureUser(
        id=user_id,
        email=_email(local_part),
        password=TEST_PASSWORD,
        first_name=first_name,
        last_name=last_name,
    )
    for key, user_id, local_part, first_name, last_name in _ISOLATED_USER_ROWS
}

CHECKOUT_USER_KEYS = frozenset(
    {"checkout_flow", "address_validation", "checkout_summary", "order_creation", "payment_processing"}
)
BITCOIN_USER_KEYS = frozenset(key for key in ISOLATED_USERS if key.startswith("bitcoin_"))
ACCOUNT_USER_KEYS = frozenset(
    {
        "account_dashboard",
        "account_profile",
        "account_addresses",
        "account_password",
        "account_orders",
        "account_coa",
        "account_credits",
        "account_gdpr",
    }
)
