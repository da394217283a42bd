from collections.abc import Callable

from motor.motor_asyncio import AsyncIOMotorClient

from storefront_e2e.config import Settings, settings


class Collections:
    """Collection names used by the backend under test."""

    USERS = "users"
    PRODUCTS = "product"
    COUPONS = "coupons"
    ORDERS = "orders"
    INVENTORY_BATCHES = "inventory_batches"
    PAYMENT_METHOD_CONFIGURATIONS = "payment_method_configurations"
    PAYMENTS = "payments"


# Kept across resets: the product catalog, Mongock's migration state and email templates.
PRESERVED_COLLECTIONS: frozenset[str] = frozenset(
    {Collections.PRODUCTS, "mongockLock", "mongockChangeLog", "email_templates"}
)

# Always dropped on reset, listed explicitly so the intent survives edits to the preserve-list.
DROPPED_COLLECTIONS: frozenset[str] = frozenset(
    {
        Collections.INVENTORY_BATCHES,
        Collections.PAYMENT_METHOD_CONFIGURATIONS,
        "carts",
        "user_preferences",
    }
)

ClientFactory = Callable[[Settings], AsyncIOMotorClient]


def create_client(config: Settings = settings) -> AsyncIOMotorClient:
    """Build a Motor client for *config*; no I/O happens until the first command."""
    return AsyncIOMotorClient(
        config.mongodb_uri,
        serverSelectionTimeoutMS=config.mongodb_timeout_ms,
        tz_aware=True,
    )
