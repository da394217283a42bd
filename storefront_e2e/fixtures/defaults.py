"""Default fixture set and the accessors tests use to read it.

Every accessor hands out a deep copy, so a test that edits the object it was
given cannot leak the change into another test. Lookups for keys, indices or
users that do not exist raise :class:`FixtureNotFoundError` immediately.
"""

import logging
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Literal

from storefront_e2e.errors import FixtureNotFoundError
from storefront_e2e.fixtures.orders import build_orders
from storefront_e2e.fixtures.payments import build_bitcoin_payments
from storefront_e2e.fixtures.users import (
    ACCOUNT_USER_KEYS,
    BITCOIN_USER_KEYS,
    CHECKOUT_USER_KEYS,
    ISOLATED_USERS,
    build_default_users,
)
from storefront_e2e.schemas import (
    DiscountType,
    E2EFixtures,
    FixtureCoupon,
    FixtureCoupons,
    FixtureOrder,
    FixtureProduct,
    FixtureUser,
    ProductCategory,
    ShippingAddress,
    ShippingAddresses,
)

if TYPE_CHECKING:
    from storefront_e2e.services.seeder import DataSeeder

logger = logging.getLogger(__name__)

UserRole = Literal["customer", "admin", "unverified"]
CouponKind = Literal["percentage", "fixed", "expired"]

DEFAULT_PRODUCTS: tuple[FixtureProduct, ...] = (
    FixtureProduct(
        id="e2e-prod-001",
        slug="test-peptide-alpha",
        sku="E2E-PEPTIDE-001",
        name="Test Peptide Alpha",
        description="A high-quality test peptide for E2E testing",
        category=ProductCategory.PEPTIDE,
        is_featured=True,
        # High enough that parallel checkout runs never drain it.
        inventory=10_000,
        price=Decimal("99.99"),
        dose="5mg",
    ),
    FixtureProduct(
        id="e2e-prod-002",
        slug="test-blend-beta",
        sku="E2E-BLEND-002",
        name="Test Blend Beta",
        description="A premium test blend for E2E testing",
        category=ProductCategory.BLEND,
        on_sale=True,
        inventory=5_000,
        price=Decimal("149.99"),
        sale_price=Decimal("129.99"),
        dose="10mg",
    ),
    FixtureProduct(
        id="e2e-prod-003",
        slug="out-of-stock-bac-water",
        sku="E2E-BAC-003",
        name="Out of Stock BAC Water",
        description="Bacteriostatic water - currently out of stock",
        category=ProductCategory.BAC_WATER,
        inventory=0,
        price=Decimal("19.99"),
    ),
)

DEFAULT_COUPONS = FixtureCoupons(
    percentage=FixtureCoupon(
        code="E2ETEST10", discount_type=DiscountType.PERCENTAGE, discount_value=Decimal("10")
    ),
    fixed=FixtureCoupon(
        code="E2ESAVE20",
        discount_type=DiscountType.FIXED,
        discount_value=Decimal("20"),
        min_order_amount=Decimal("50"),
    ),
    expired=FixtureCoupon(
        code="E2EEXPIRED",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=Decimal("50"),
        is_expired=True,
    ),
)

DEFAULT_SHIPPING_ADDRESSES = ShippingAddresses(
    valid=ShippingAddress(
        first_name="Test",
        last_name="Customer",
        email="testcustomer@test.zenithbioscience.com",
        address1="417 Montgomery St",
        address2="Floor 5",
        city="San Francisco",
        state="CA",
        zip="94104",
        country="United States",
        phone_number="+14151234567",
    ),
    invalid=ShippingAddress(
        first_name="",
        last_name="",
        email="invalid-email",
        address1="",
        address2="",
        city="",
        state="",
        zip="invalid",
        country="",
        phone_number="",
    ),
)


def build_default_fixtures(now: datetime | None = None) -> E2EFixtures:
    """Build the standard fixture set with dates relative to *now* (UTC by default)."""
    now = now or datetime.now(UTC)
    return E2EFixtures(
        users=build_default_users(now),
        products=[product.model_copy(deep=True) for product in DEFAULT_PRODUCTS],
        coupons=DEFAULT_COUPONS.model_copy(deep=True),
        orders=build_orders(now),
        bitcoin_payments=build_bitcoin_payments(now),
        shipping_addresses=DEFAULT_SHIPPING_ADDRESSES.model_copy(deep=True),
    )


DEFAULT_FIXTURES = build_default_fixtures()


# ---------------------------------------------------------------------------
# Whole-set and core-user accessors
# ---------------------------------------------------------------------------


def get_default_fixtures() -> E2EFixtures:
    return DEFAULT_FIXTURES.model_copy(deep=True)


def get_test_user(role: UserRole) -> FixtureUser:
    if role not in ("customer", "admin", "unverified"):
        raise FixtureNotFoundError(f"Unknown test user role: {role!r}")
    return getattr(DEFAULT_FIXTURES.users, role).model_copy(deep=True)


# ---------------------------------------------------------------------------
# Isolated per-test-file users
# ---------------------------------------------------------------------------


def get_isolated_user(key: str, *, allowed: frozenset[str] | None = None) -> FixtureUser:
    """Return the isolated user registered for one test file.

    *allowed* narrows the accepted keys, which is how the checkout, bitcoin
    and account accessors reject a key from another group.
    """
    if key not in ISOLATED_USERS or (allowed is not None and key not in allowed):
        raise FixtureNotFoundError(f"Unknown isolated test user: {key!r}")
    return ISOLATED_USERS[key].model_copy(deep=True)


def get_checkout_user(key: str) -> FixtureUser:
    return get_isolated_user(key, allowed=CHECKOUT_USER_KEYS)


def get_bitcoin_user(key: str) -> FixtureUser:
    return get_isolated_user(key, allowed=BITCOIN_USER_KEYS)


def get_account_user(key: str) -> FixtureUser:
    return get_isolated_user(key, allowed=ACCOUNT_USER_KEYS)


def get_all_isolated_users() -> list[FixtureUser]:
    return [user.model_copy(deep=True) for user in ISOLATED_USERS.values()]


# ---------------------------------------------------------------------------
# Catalog and checkout data
# ---------------------------------------------------------------------------


def get_test_product(index: int) -> FixtureProduct:
    products = DEFAULT_FIXTURES.products
    if not 0 <= index < len(products):
        raise FixtureNotFoundError(f"Product index {index} out of range")
    return products[index].model_copy(deep=True)


def get_in_stock_product() -> FixtureProduct:
    for product in DEFAULT_FIXTURES.products:
        if product.in_stock:
            return product.model_copy(deep=True)
    raise FixtureNotFoundError("No in-stock product found in fixtures")


def get_out_of_stock_product() -> FixtureProduct:
    for product in DEFAULT_FIXTURES.products:
        if not product.in_stock:
            return product.model_copy(deep=True)
    raise FixtureNotFoundError("No out-of-stock product found in fixtures")


def get_test_coupon(kind: CouponKind) -> FixtureCoupon:
    if kind not in ("percentage", "fixed", "expired"):
        raise FixtureNotFoundError(f"Unknown coupon kind: {kind!r}")
    return getattr(DEFAULT_FIXTURES.coupons, kind).model_copy(deep=True)


def _shipping_addresses() -> ShippingAddresses:
    if DEFAULT_FIXTURES.shipping_addresses is None:
        raise FixtureNotFoundError("Shipping addresses not defined in fixtures")
    return DEFAULT_FIXTURES.shipping_addresses


def get_valid_shipping_address() -> ShippingAddress:
    return _shipping_addresses().valid.model_copy(deep=True)


def get_invalid_shipping_address() -> ShippingAddress:
    return _shipping_addresses().invalid.model_copy(deep=True)


# ---------------------------------------------------------------------------
# Activation / reset users and their keys
# ---------------------------------------------------------------------------


def _numbered_field(prefix: str, n: int) -> str:
    return prefix if n == 1 else f"{prefix}{n}"


def _special_user(field: str, label: str) -> FixtureUser:
    user = getattr(DEFAULT_FIXTURES.users, field, None)
    if user is None:
        raise FixtureNotFoundError(f"{label} not found in fixtures")
    return user.model_copy(deep=True)


def get_pending_activation_user(n: int = 1) -> FixtureUser:
    """Return pending-activation user *n* (1-6)."""
    return _special_user(
        _numbered_field("pending_activation", n), f"Pending activation user {n}"
    )


def get_pending_reset_user(n: int = 1) -> FixtureUser:
    """Return pending-reset user *n* (1-6)."""
    return _special_user(_numbered_field("pending_reset", n), f"Pending reset user {n}")


def get_expired_reset_user() -> FixtureUser:
    return _special_user("expired_reset", "Expired reset user")


def get_valid_activation_key(n: int = 1) -> str:
    key = get_pending_activation_user(n).activation_key
    if not key:
        raise FixtureNotFoundError(f"Activation key not set for pending activation user {n}")
    return key


def get_valid_reset_key(n: int = 1) -> str:
    key = get_pending_reset_user(n).reset_key
    if not key:
        raise FixtureNotFoundError(f"Reset key not set for pending reset user {n}")
    return key


def get_expired_reset_key() -> str:
    key = get_expired_reset_user().reset_key
    if not key:
        raise FixtureNotFoundError("Reset key not set for expired reset user")
    return key


# ---------------------------------------------------------------------------
# Order history
# ---------------------------------------------------------------------------


def get_account_orders_user_orders() -> list[FixtureOrder]:
    user_id = ISOLATED_USERS["account_orders"].id
    return [
        order.model_copy(deep=True) for order in DEFAULT_FIXTURES.orders if order.user_id == user_id
    ]


async def seed_order_history(seeder: "DataSeeder") -> int:
    """Upsert the account-orders user's orders through a connected *seeder*.

    Returns the number of orders written.
    """
    orders = get_account_orders_user_orders()
    if not orders:
        logger.warning("No orders found for the account-orders user")
        return 0

    await seeder.seed_orders(orders)
    logger.info(
        "Seeded %d order-history orders: %s",
        len(orders),
        ", ".join(f"{order.order_number}: {order.status}" for order in orders),
    )
    return len(orders)
