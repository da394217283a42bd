from .backend import (
    AuthenticateRequest,
    BackendHealth,
    HealthStatus,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)
from .browser import BrowserCategory
from .catalog import (
    DiscountType,
    FixtureCoupon,
    FixtureProduct,
    ImageMetadata,
    ImageVariant,
    ProductCategory,
    ProductImages,
)
from .fixtures import E2EFixtures, FixtureCoupons, FixtureUsers, ShippingAddresses
from .orders import (
    FixtureOrder,
    FixtureOrderItem,
    OrderAddress,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingAddress,
    ShippingMethod,
)
from .payments import BitcoinPayment, BlockchainNetwork, ComplianceStatus
from .users import FixtureUser

__all__ = [
    # backend
    "AuthenticateRequest",
    "BackendHealth",
    "HealthStatus",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    # browser
    "BrowserCategory",
    # catalog
    "DiscountType",
    "FixtureCoupon",
    "FixtureProduct",
    "ImageMetadata",
    "ImageVariant",
    "ProductCategory",
    "ProductImages",
    # fixtures
    "E2EFixtures",
    "FixtureCoupons",
    "FixtureUsers",
    "ShippingAddresses",
    # orders
    "FixtureOrder",
    "FixtureOrderItem",
    "OrderAddress",
    "OrderStatus",
    "PaymentMethod",
    "PaymentStatus",
    "ShippingAddress",
    "ShippingMethod",
    # payments
    "BitcoinPayment",
    "BlockchainNetwork",
    "ComplianceStatus",
    # users
    "FixtureUser",
]
