"""Minimal fixture profile: core users and coupons, no catalog and no orders.

Used by tests that assert empty states (empty shop, no order history).
"""

from decimal import Decimal

from storefront_e2e.schemas import (
    DiscountType,
    E2EFixtures,
    FixtureCoupon,
    FixtureCoupons,
    FixtureUser,
    FixtureUsers,
)

_DOMAIN = "test.zenith.com"

EMPTY_FIXTURES = E2EFixtures(
    users=FixtureUsers(
        customer=FixtureUser(
            id="empty-customer-001",
            email=f"empty-customer@{_DOMAIN}",
            password="EmptyTestPassword123!",
            first_name="Empty",
            last_name="Customer",
        ),
        admin=FixtureUser(
            id="empty-admin-001",
            email=f"empty-admin@{_DOMAIN}",
            password="EmptyAdminPassword123!",
            first_name="Empty",
            last_name="Admin",
            authorities=["ROLE_USER", "ROLE_ADMIN"],
        ),
        unverified=FixtureUser(
            id="empty-unverified-001",
            email=f"empty-unverified@{_DOMAIN}",
            password="EmptyUnverifiedPassword123!",
            first_name="Empty",
            last_name="Unverified",
        ),
    ),
    coupons=FixtureCoupons(
        percentage=FixtureCoupon(
            code="EMPTY_PERCENT", discount_type=DiscountType.PERCENTAGE, discount_value=Decimal("0")
        ),
        fixed=FixtureCoupon(
            code="EMPTY_FIXED", discount_type=DiscountType.FIXED, discount_value=Decimal("0")
        ),
        expired=FixtureCoupon(
            code="EMPTY_EXPIRED",
            discount_type=DiscountType.PERCENTAGE,
            discount_value=Decimal("0"),
            is_expired=True,
        ),
    ),
)


def get_empty_fixtures() -> E2EFixtures:
    return EMPTY_FIXTURES.model_copy(deep=True)
