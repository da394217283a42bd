from pydantic import BaseModel, Field

from storefront_e2e.schemas.catalog import FixtureCoupon, FixtureProduct
from storefront_e2e.schemas.orders import FixtureOrder, ShippingAddress
from storefront_e2e.schemas.payments import BitcoinPayment
from storefront_e2e.schemas.users import FixtureUser

# Users seeded directly with known keys, in the order they are written.
SPECIAL_USER_FIELDS: tuple[str, ...] = (
    "pending_activation",
    "pending_activation2",
    "pending_activation3",
    "pending_activation4",
    "pending_activation5",
    "pending_activation6",
    "pending_reset",
    "pending_reset2",
    "pending_reset3",
    "pending_reset4",
    "pending_reset5",
    "pending_reset6",
    "expired_reset",
)


class FixtureUsers(BaseModel):
    customer: FixtureUser
    admin: FixtureUser
    unverified: FixtureUser
    # One pair per browser project: chromium (1, 2), firefox (3, 4), mobile (5, 6).
    pending_activation: FixtureUser | None = None
    pending_activation2: FixtureUser | None = None
    pending_activation3: FixtureUser | None = None
    pending_activation4: FixtureUser | None = None
    pending_activation5: FixtureUser | None = None
    pending_activation6: FixtureUser | None = None
    pending_reset: FixtureUser | None = None
    pending_reset2: FixtureUser | None = None
    pending_reset3: FixtureUser | None = None
    pending_reset4: FixtureUser | None = None
    pending_reset5: FixtureUser | None = None
    pending_reset6: FixtureUser | None = None
    expired_reset: FixtureUser | None = None

    def core(self) -> list[FixtureUser]:
        return [self.customer, self.admin, self.unverified]

    def special(self) -> list[FixtureUser]:
        """Users carrying activation or reset keys, skipping any that are unset."""
        users = (getattr(self, name) for name in SPECIAL_USER_FIELDS)
        return [user for user in users if user is not None]


class FixtureCoupons(BaseModel):
    percentage: FixtureCoupon
    fixed: FixtureCoupon
    expired: FixtureCoupon

    def all(self) -> list[FixtureCoupon]:
        return [self.percentage, self.fixed, self.expired]


class ShippingAddresses(BaseModel):
    valid: ShippingAddress
    invalid: ShippingAddress


class E2EFixtures(BaseModel):
    """Everything one bootstrap run writes, with ids cross-referenced between entities."""

    users: FixtureUsers
    products: list[FixtureProduct] = Field(default_factory=list)
    coupons: FixtureCoupons
    orders: list[FixtureOrder] = Field(default_factory=list)
    bitcoin_payments: list[BitcoinPayment] = Field(default_factory=list)
    shipping_addresses: ShippingAddresses | None = None
