"""Direct MongoDB seeding for the storefront end-to-end environment.

:class:`DataSeeder` owns one Motor client for its lifetime and exposes one
idempotent-or-documented write per collection.  Construct it explicitly,
use it as an async context manager, and let it go out of scope:

    async with DataSeeder(settings) as seeder:
        await seeder.reset_database()
        await seeder.seed_all(fixtures)

Every database failure is re-raised as :class:`SeederError` naming the
operation, so the caller decides whether that step is fatal.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from datetime import UTC, datetime
from types import TracebackType
from typing import Self

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import UpdateOne

from storefront_e2e.config import Settings, settings
from storefront_e2e.database import (
    DROPPED_COLLECTIONS,
    PRESERVED_COLLECTIONS,
    ClientFactory,
    Collections,
    create_client,
)
from storefront_e2e.errors import NotConnectedError, SeederConnectionError, SeederError
from storefront_e2e.schemas import (
    BitcoinPayment,
    E2EFixtures,
    FixtureCoupon,
    FixtureOrder,
    FixtureProduct,
    FixtureUser,
)
from storefront_e2e.services.documents import (
    build_bitcoin_payment_document,
    build_coupon_document,
    build_inventory_batch,
    build_order_document,
    build_product_upsert,
    build_user_document,
    build_user_upsert,
)
from storefront_e2e.services.payment_configs import build_payment_method_configurations

logger = logging.getLogger(__name__)

# (email, authorities) pairs accepted by activate_and_setup_users.
UserRoles = tuple[str, Sequence[str]]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DataSeeder:
    """Seeds and resets the backend's MongoDB database.

    *client_factory* builds the Motor client on :meth:`connect`; tests pass
    one returning an in-memory client.
    """

    def __init__(
        self,
        config: Settings = settings,
        client_factory: ClientFactory = create_client,
    ) -> None:
        self._config = config
        self._client_factory = client_factory
        self._client: AsyncIOMotorClient | None = None
        self._db: AsyncIOMotorDatabase | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._client is not None and self._db is not None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise NotConnectedError()
        return self._db

    async def connect(self) -> None:
        """Open the client and ping the database; a no-op when already connected."""
        if self.is_connected:
            return

        database_name = self._config.mongodb_database
        try:
            self._client = self._client_factory(self._config)
            db = self._client[database_name]
            # Motor connects lazily; ping so an unreachable server fails here.
            await db.command("ping")
        except Exception as exc:
            if self._client is not None:
                self._client.close()
            self._client = None
            self._db = None
            raise SeederConnectionError("connect to MongoDB", exc) from exc

        self._db = db
        logger.info("Connected to MongoDB: %s", database_name)

    async def disconnect(self) -> None:
        """Close the client; safe to call repeatedly or after a failed connect."""
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._db = None
        logger.info("Disconnected from MongoDB")

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.disconnect()

    def _collection(self, name: str) -> AsyncIOMotorCollection:
        return self.db[name]

    @contextmanager
    def _operation(self, operation: str) -> Iterator[None]:
        """Re-raise anything the block raises as ``SeederError(operation)``."""
        try:
            yield
        except SeederError:
            raise
        except Exception as exc:
            raise SeederError(operation, exc) from exc

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def seed_users(self, users: Sequence[FixtureUser]) -> None:
        """Insert *users* as-is; the collection is expected to be freshly reset."""
        if not users:
            logger.info("No users to seed")
            return

        with self._operation("seed users"):
            now = _utcnow()
            documents = [build_user_document(user, now) for user in users]
            await self._collection(Collections.USERS).insert_many(documents)
        logger.info("Seeded %d users", len(users))

    async def seed_special_test_users(self, users: Sequence[FixtureUser]) -> None:
        """Upsert users that carry activation or reset keys, matched on ``_id``.

        Creation stamps are written only on first insert; everything else is
        refreshed on every call, so repeated bootstraps never hit duplicate keys.
        """
        if not users:
            logger.info("No special test users to seed")
            return

        with self._operation("seed special test users"):
            now = _utcnow()
            operations = [
                UpdateOne({"_id": user.id}, build_user_upsert(user, now), upsert=True)
                for user in users
            ]
            result = await self._collection(Collections.USERS).bulk_write(operations)

        logger.info(
            "Seeded %d special test users (%d inserted, %d updated)",
            len(users),
            result.upserted_count,
            result.modified_count,
        )
        for user in users:
            if user.activation_key:
                key_info = f"activationKey={user.activation_key}"
            elif user.reset_key:
                key_info = f"resetKey={user.reset_key}"
            else:
                key_info = "no special keys"
            logger.debug("  - %s: %s, activated=%s", user.email, key_info, user.activated)

    async def activate_and_setup_users(
        self, users: Iterable[FixtureUser | UserRoles]
    ) -> int:
        """Activate each user by email and replace its authorities.

        Accepts fixture users or ``(email, authorities)`` pairs.  A user that
        is not found is logged and skipped.  Returns how many were matched.
        """
        activated = 0
        with self._operation("activate users"):
            collection = self._collection(Collections.USERS)
            for user in users:
                if isinstance(user, FixtureUser):
                    email, authorities = user.email, list(user.authorities)
                else:
                    email, authorities = user[0], list(user[1])

                result = await collection.update_one(
                    {"email": email},
                    {"$set": {"activated": True, "authorities": authorities, "activationKey": None}},
                )
                if result.matched_count:
                    activated += 1
                    logger.info("Activated user: %s with roles: %s", email, ", ".join(authorities))
                else:
                    logger.warning("User not found for activation: %s", email)
        return activated

    async def get_user_id_by_email(self, email: str) -> str | None:
        """Stored ``_id`` of the user with *email*, or ``None``.

        Lookup failures are logged and reported as ``None``; callers only
        use the id for diagnostics.
        """
        collection = self._collection(Collections.USERS)
        try:
            user = await collection.find_one({"email": email}, {"_id": 1})
        except Exception as exc:
            logger.warning("Failed to get user ID for %s: %s", email, exc)
            return None
        return None if user is None else str(user["_id"])

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def seed_products(self, products: Sequence[FixtureProduct]) -> None:
        """Upsert *products* keyed on ``slug``.

        A product that already exists keeps its ``_id``; the fixture id is
        only used when the product is inserted.
        """
        if not products:
            logger.info("No products to seed")
            return

        with self._operation("seed products"):
            now = _utcnow()
            operations = [
                UpdateOne({"slug": product.slug}, build_product_upsert(product, now), upsert=True)
                for product in products
            ]
            result = await self._collection(Collections.PRODUCTS).bulk_write(operations)

        logger.info(
            "Seeded %d products (%d inserted, %d updated)",
            len(products),
            result.upserted_count,
            result.modified_count,
        )

    async def seed_inventory_batches(self, products: Sequence[FixtureProduct]) -> int:
        """Replace the single inventory batch of every in-stock product.

        The backend derives stock from batches, not from ``product.inventory``.
        Batches reference the product id actually stored in MongoDB, looked up
        by slug.  Out-of-stock products and products that are not in the
        database get no batch.  Returns the number of batches written.
        """
        if not products:
            logger.info("No products to create batches for")
            return 0

        with self._operation("seed inventory batches"):
            stocked = [product for product in products if product.in_stock]
            slugs = [product.slug for product in stocked]
            logger.debug("Looking up products by slugs: %s", ", ".join(slugs))

            cursor = self._collection(Collections.PRODUCTS).find(
                {"slug": {"$in": slugs}}, {"_id": 1, "slug": 1}
            )
            slug_to_id = {doc["slug"]: str(doc["_id"]) for doc in await cursor.to_list(None)}
            logger.debug("Found %d products in database", len(slug_to_id))

            now = _utcnow()
            batches = [
                build_inventory_batch(slug_to_id[product.slug], product.inventory, sequence, now)
                for sequence, product in enumerate(
                    (p for p in stocked if p.slug in slug_to_id), start=1
                )
            ]
            if not batches:
                logger.info(
                    "No batches to seed (all products have 0 inventory or not found in DB)"
                )
                return 0

            collection = self._collection(Collections.INVENTORY_BATCHES)
            await collection.delete_many({"_id": {"$in": [batch["_id"] for batch in batches]}})
            await collection.insert_many(batches)

        logger.info("Seeded %d inventory batches", len(batches))
        for batch in batches:
            logger.debug(
                "  - Batch %s: productId=%s, qty=%d",
                batch["batchNumber"],
                batch["productId"],
                batch["availableQuantity"],
            )
        return len(batches)

    async def seed_coupons(self, coupons: Sequence[FixtureCoupon]) -> None:
        """Insert *coupons*; expired ones are written inactive and already past ``validUntil``."""
        if not coupons:
            logger.info("No coupons to seed")
            return

        with self._operation("seed coupons"):
            now = _utcnow()
            documents = [
                build_coupon_document(coupon, sequence, now)
                for sequence, coupon in enumerate(coupons, start=1)
            ]
            await self._collection(Collections.COUPONS).insert_many(documents)
        logger.info("Seeded %d coupons", len(coupons))

    # ------------------------------------------------------------------
    # Orders and payments
    # ------------------------------------------------------------------

    async def seed_orders(self, orders: Sequence[FixtureOrder]) -> None:
        if not orders:
            logger.info("No orders to seed")
            return

        with self._operation("seed orders"):
            now = _utcnow()
            operations = [
                UpdateOne({"_id": order.id}, {"$set": build_order_document(order, now)}, upsert=True)
                for order in orders
            ]
            result = await self._collection(Collections.ORDERS).bulk_write(operations)

        logger.info(
            "Seeded %d orders (%d inserted, %d updated)",
            len(orders),
            result.upserted_count,
            result.modified_count,
        )
        for order in orders:
            logger.debug(
                "  - Order %s: status=%s, total=$%s", order.order_number, order.status, order.total
            )

    async def seed_bitcoin_payments(self, payments: Sequence[BitcoinPayment]) -> None:
        if not payments:
            logger.info("No Bitcoin payments to seed")
            return

        with self._operation("seed Bitcoin payments"):
            now = _utcnow()
            operations = [
                UpdateOne(
                    {"_id": payment.id},
                    {"$set": build_bitcoin_payment_document(payment, now)},
                    upsert=True,
                )
                for payment in payments
            ]
            result = await self._collection(Collections.PAYMENTS).bulk_write(operations)

        logger.info(
            "Seeded %d Bitcoin payments (%d inserted, %d updated)",
            len(payments),
            result.upserted_count,
            result.modified_count,
        )
        for payment in payments:
            flags = [
                name
                for name, raised in (("UNDERPAID", payment.underpaid), ("OVERPAID", payment.overpaid))
                if raised
            ]
            logger.debug(
                "  - Payment %s: status=%s, network=%s, sats=%d%s",
                payment.id,
                payment.status,
                payment.blockchain_network,
                payment.expected_sats,
                f" [{', '.join(flags)}]" if flags else "",
            )

    async def seed_payment_method_configurations(self) -> None:
        """Upsert the five payment method configurations checkout depends on."""
        with self._operation("seed payment method configurations"):
            configurations = build_payment_method_configurations(_utcnow())
            operations = [
                UpdateOne({"_id": config["_id"]}, {"$set": config}, upsert=True)
                for config in configurations
            ]
            result = await self._collection(Collections.PAYMENT_METHOD_CONFIGURATIONS).bulk_write(
                operations
            )

        logger.info(
            "Seeded %d payment method configurations (%d inserted, %d updated)",
            len(configurations),
            result.upserted_count,
            result.modified_count,
        )
        enabled = [config["displayName"] for config in configurations if config["enabled"]]
        logger.info("Enabled payment methods: %s", ", ".join(enabled))

    async def seed_all(self, fixtures: E2EFixtures) -> None:
        """Seed a whole fixture set directly, bypassing the backend.

        Order matters: batches need the products' stored ids.
        """
        logger.info("Starting full data seed...")
        users = [*fixtures.users.core(), *fixtures.users.special()]

        await self.seed_users(users)
        await self.seed_products(fixtures.products)
        await self.seed_inventory_batches(fixtures.products)
        await self.seed_coupons(fixtures.coupons.all())
        await self.seed_orders(fixtures.orders)
        await self.seed_payment_method_configurations()
        logger.info("Full data seed completed successfully")

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    async def reset_database(self) -> None:
        """Drop every collection except the preserved ones.

        Collections in ``DROPPED_COLLECTIONS`` go regardless of the preserve-list.
        """
        logger.info("Resetting test data...")
        with self._operation("reset database"):
            db = self.db
            for name in await db.list_collection_names():
                if name in DROPPED_COLLECTIONS or name not in PRESERVED_COLLECTIONS:
                    await db.drop_collection(name)
                    logger.info("Dropped collection: %s", name)
                else:
                    logger.info("Preserved collection: %s", name)
        logger.info("Database reset completed")

    async def reset_collection(self, name: str) -> None:
        """Drop collection *name*; a missing collection is not an error."""
        logger.info("Resetting collection: %s", name)
        with self._operation(f"reset collection {name}"):
            db = self.db
            if name not in await db.list_collection_names():
                logger.info("Collection %s does not exist, skipping", name)
                return
            await db.drop_collection(name)
        logger.info("Dropped collection: %s", name)

    # ------------------------------------------------------------------
    # Order ownership
    # ------------------------------------------------------------------

    async def update_order_user_ids(self, email_to_fixture_id: Mapping[str, str]) -> int:
        """Point orders seeded under a fixture user id at that user's stored id.

        Users registered through the backend receive generated ids, so orders
        authored against fixture ids must be rewritten.  Entries whose stored
        id already equals the fixture id cause no write.  Returns the number
        of orders modified.
        """
        updated = 0
        with self._operation("update order user IDs"):
            users = self._collection(Collections.USERS)
            orders = self._collection(Collections.ORDERS)

            for email, fixture_id in email_to_fixture_id.items():
                user = await users.find_one({"email": email}, {"_id": 1})
                if user is None:
                    logger.warning("User not found for order update: %s", email)
                    continue

                actual_id = str(user["_id"])
                if actual_id == fixture_id:
                    logger.info("User ID unchanged for %s: %s", email, actual_id)
                    continue

                result = await orders.update_many(
                    {"userId": fixture_id}, {"$set": {"userId": actual_id}}
                )
                if result.modified_count:
                    logger.info(
                        "Updated %d orders for %s: %s -> %s",
                        result.modified_count,
                        email,
                        fixture_id,
                        actual_id,
                    )
                    updated += result.modified_count

        logger.info("Total orders updated with correct user IDs: %d", updated)
        return updated

    async def count_orders_by_user_id(self, user_id: str) -> int:
        """Number of orders owned by *user_id*; 0 (with a warning) if the count fails."""
        collection = self._collection(Collections.ORDERS)
        try:
            return await collection.count_documents({"userId": user_id})
        except Exception as exc:
            logger.warning("Failed to count orders for user %s: %s", user_id, exc)
            return 0
