"""Tests for DataSeeder against an in-memory MongoDB.

Covers:
- connect / disconnect lifecycle and the async context manager
- idempotent product upserts keyed on slug
- inventory batches: none for zero stock or unknown products, stored ids used
- reset keeping the preserve-list and dropping everything else
- order user-id reconciliation, including the already-matching no-op
- Decimal128 money surviving repeated seed/read cycles
- special-user upserts, activation and the lookup helpers
"""

import logging
from decimal import Decimal

import pytest
from bson import Decimal128

from storefront_e2e.database import Collections
from storefront_e2e.errors import NotConnectedError
from storefront_e2e.fixtures import build_default_fixtures, seed_order_history
from storefront_e2e.schemas import FixtureProduct, ProductCategory
from storefront_e2e.services.seeder import DataSeeder


def _product(slug: str, inventory: int, product_id: str | None = None) -> FixtureProduct:
    return FixtureProduct(
        id=product_id or f"fixture-{slug}",
        slug=slug,
        sku=f"SKU-{slug.upper()}",
        name=slug.replace("-", " ").title(),
        category=ProductCategory.PEPTIDE,
        inventory=inventory,
        price=Decimal("10.00"),
    )


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_connect_and_disconnect(seeder: DataSeeder) -> None:
    assert seeder.is_connected is False
    await seeder.connect()
    assert seeder.is_connected is True
    # Second connect is a no-op.
    await seeder.connect()
    await seeder.disconnect()
    assert seeder.is_connected is False
    await seeder.disconnect()


def test_db_property_requires_connection(seeder: DataSeeder) -> None:
    with pytest.raises(NotConnectedError):
        _ = seeder.db


@pytest.mark.asyncio
async def test_async_context_manager(seeder: DataSeeder) -> None:
    async with seeder as connected:
        assert connected is seeder
        assert seeder.is_connected
    assert not seeder.is_connected


# ---------------------------------------------------------------------------
# Products and inventory batches
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_seed_products_twice_keeps_one_document_per_slug(
    connected_seeder: DataSeeder, db
) -> None:
    products = [_product("test-item", 5), _product("other-item", 3)]

    await connected_seeder.seed_products(products)
    renamed = [products[0].model_copy(update={"name": "Renamed"}), products[1]]
    await connected_seeder.seed_products(renamed)

    collection = db[Collections.PRODUCTS]
    assert await collection.count_documents({"slug": "test-item"}) == 1
    assert await collection.count_documents({}) == 2
    stored = await collection.find_one({"slug": "test-item"})
    assert stored["name"] == "Renamed"


@pytest.mark.asyncio
async def test_batches_skip_zero_inventory_and_unknown_products(
    connected_seeder: DataSeeder, db
) -> None:
    stocked = _product("stocked", 7)
    empty = _product("empty", 0)
    never_seeded = _product("ghost", 4)
    await connected_seeder.seed_products([stocked, empty])

    created = await connected_seeder.seed_inventory_batches([stocked, empty, never_seeded])

    assert created == 1
    batches = await db[Collections.INVENTORY_BATCHES].find({}).to_list(None)
    assert len(batches) == 1
    assert batches[0]["availableQuantity"] == 7


@pytest.mark.asyncio
async def test_batch_references_stored_product_id(connected_seeder: DataSeeder, db) -> None:
    # The product already exists under an id the fixture does not know.
    await db[Collections.PRODUCTS].insert_one({"_id": "real-product-id", "slug": "test-item"})
    product = _product("test-item", 5, product_id="fixture-product-id")

    await connected_seeder.seed_products([product])
    await connected_seeder.seed_inventory_batches([product])

    batches = await db[Collections.INVENTORY_BATCHES].find({}).to_list(None)
    assert len(batches) == 1
    assert batches[0]["productId"] == "real-product-id"
    assert batches[0]["availableQuantity"] == 5
    assert batches[0]["_id"] == "e2e-batch-real-product-id"


@pytest.mark.asyncio
async def test_reseeding_batches_replaces_them(connected_seeder: DataSeeder, db) -> None:
    product = _product("test-item", 5)
    await connected_seeder.seed_products([product])
    await connected_seeder.seed_inventory_batches([product])
    await connected_seeder.seed_inventory_batches([product.model_copy(update={"inventory": 9})])

    batches = await db[Collections.INVENTORY_BATCHES].find({}).to_list(None)
    assert [batch["availableQuantity"] for batch in batches] == [9]


@pytest.mark.asyncio
async def test_batches_with_no_products(connected_seeder: DataSeeder) -> None:
    assert await connected_seeder.seed_inventory_batches([]) == 0


# ---------------------------------------------------------------------------
# Reset
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_reset_preserves_allow_list(connected_seeder: DataSeeder, db) -> None:
    for name in (
        "product",
        "mongockLock",
        "mongockChangeLog",
        "email_templates",
        "inventory_batches",
        "payment_method_configurations",
        "carts",
        "users",
        "orders",
        "something_else",
    ):
        await db[name].insert_one({"_id": f"{name}-1", "marker": name})

    await connected_seeder.reset_database()

    remaining = set(await db.list_collection_names())
    assert remaining == {"product", "mongockLock", "mongockChangeLog", "email_templates"}
    assert await db["product"].find_one({"_id": "product-1"}) == {
        "_id": "product-1",
        "marker": "product",
    }


@pytest.mark.asyncio
async def test_reset_collection_missing_is_not_an_error(connected_seeder: DataSeeder, db) -> None:
    await connected_seeder.reset_collection("does_not_exist")

    await db["carts"].insert_one({"_id": "cart-1"})
    await connected_seeder.reset_collection("carts")
    assert "carts" not in await db.list_collection_names()


# ---------------------------------------------------------------------------
# Order ownership
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_order_user_ids_rewrites_fixture_ids(connected_seeder: DataSeeder, db) -> None:
    await db[Collections.USERS].insert_one({"_id": "real-99", "email": "a@test.com"})
    order = build_default_fixtures().orders[0].model_copy(update={"user_id": "fixture-1"})
    await connected_seeder.seed_orders([order])

    updated = await connected_seeder.update_order_user_ids({"a@test.com": "fixture-1"})

    assert updated == 1
    stored = await db[Collections.ORDERS].find_one({"_id": order.id})
    assert stored["userId"] == "real-99"
    assert await connected_seeder.count_orders_by_user_id("real-99") == 1


@pytest.mark.asyncio
async def test_update_order_user_ids_noop_when_ids_match(
    connected_seeder: DataSeeder, db, caplog
) -> None:
    await db[Collections.USERS].insert_one({"_id": "same-id", "email": "b@test.com"})
    order = build_default_fixtures().orders[0].model_copy(update={"user_id": "same-id"})
    await connected_seeder.seed_orders([order])

    with caplog.at_level(logging.INFO, logger="storefront_e2e.services.seeder"):
        updated = await connected_seeder.update_order_user_ids({"b@test.com": "same-id"})

    assert updated == 0
    assert "User ID unchanged for b@test.com" in caplog.text
    assert (await db[Collections.ORDERS].find_one({"_id": order.id}))["userId"] == "same-id"


@pytest.mark.asyncio
async def test_update_order_user_ids_skips_unknown_user(
    connected_seeder: DataSeeder, caplog
) -> None:
    with caplog.at_level(logging.WARNING):
        updated = await connected_seeder.update_order_user_ids({"nobody@test.com": "fixture-x"})
    assert updated == 0
    assert "User not found for order update: nobody@test.com" in caplog.text


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_order_money_round_trips_without_drift(connected_seeder: DataSeeder, db) -> None:
    order = build_default_fixtures().orders[0].model_copy(update={"subtotal": Decimal("19.999")})

    for _ in range(3):
        await connected_seeder.seed_orders([order])
        stored = await db[Collections.ORDERS].find_one({"_id": order.id})
        assert isinstance(stored["subtotal"], Decimal128)
        assert stored["subtotal"].to_decimal() == Decimal("20.00")

    assert await db[Collections.ORDERS].count_documents({}) == 1


@pytest.mark.asyncio
async def test_seed_bitcoin_payments_upserts(connected_seeder: DataSeeder, db) -> None:
    payments = build_default_fixtures().bitcoin_payments
    await connected_seeder.seed_bitcoin_payments(payments)
    await connected_seeder.seed_bitcoin_payments(payments)

    assert await db[Collections.PAYMENTS].count_documents({}) == len(payments)
    stored = await db[Collections.PAYMENTS].find_one({"_id": payments[0].id})
    assert stored["paymentType"] == "BITCOIN"


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_special_users_upsert_is_repeatable(connected_seeder: DataSeeder, db) -> None:
    special = build_default_fixtures().users.special()

    await connected_seeder.seed_special_test_users(special)
    await connected_seeder.seed_special_test_users(special)

    users = db[Collections.USERS]
    assert await users.count_documents({}) == len(special)
    pending = await users.find_one({"_id": "e2e-pending-activation-001"})
    assert pending["activationKey"] == "e2e-valid-activation-key-12345"
    assert pending["activated"] is False


@pytest.mark.asyncio
async def test_activate_and_setup_users(connected_seeder: DataSeeder, db, caplog) -> None:
    await db[Collections.USERS].insert_one(
        {"_id": "u1", "email": "x@test.com", "activated": False, "activationKey": "abc"}
    )

    with caplog.at_level(logging.WARNING):
        activated = await connected_seeder.activate_and_setup_users(
            [("x@test.com", ["ROLE_USER", "ROLE_ADMIN"]), ("missing@test.com", ["ROLE_USER"])]
        )

    assert activated == 1
    stored = await db[Collections.USERS].find_one({"_id": "u1"})
    assert stored["activated"] is True
    assert stored["authorities"] == ["ROLE_USER", "ROLE_ADMIN"]
    assert stored["activationKey"] is None
    assert "User not found for activation: missing@test.com" in caplog.text


@pytest.mark.asyncio
async def test_user_lookups(connected_seeder: DataSeeder, db) -> None:
    await db[Collections.USERS].insert_one({"_id": "u7", "email": "lookup@test.com"})
    assert await connected_seeder.get_user_id_by_email("lookup@test.com") == "u7"
    assert await connected_seeder.get_user_id_by_email("absent@test.com") is None
    assert await connected_seeder.count_orders_by_user_id("u7") == 0


# ---------------------------------------------------------------------------
# Whole fixture set
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_seed_all(connected_seeder: DataSeeder, db) -> None:
    fixtures = build_default_fixtures()

    await connected_seeder.seed_all(fixtures)

    assert await db[Collections.USERS].count_documents({}) == 16
    assert await db[Collections.PRODUCTS].count_documents({}) == 3
    assert await db[Collections.INVENTORY_BATCHES].count_documents({}) == 2
    assert await db[Collections.ORDERS].count_documents({}) == len(fixtures.orders)
    assert await db[Collections.PAYMENT_METHOD_CONFIGURATIONS].count_documents({}) == 5

    expired = await db[Collections.COUPONS].find_one({"code": "E2EEXPIRED"})
    assert expired["active"] is False
    active = await db[Collections.COUPONS].find_one({"code": "E2ETEST10"})
    assert active["active"] is True


@pytest.mark.asyncio
async def test_seed_order_history(connected_seeder: DataSeeder, db) -> None:
    written = await seed_order_history(connected_seeder)
    assert written > 0
    assert (
        await db[Collections.ORDERS].count_documents({"userId": "e2e-account-orders-001"})
        == written
    )
