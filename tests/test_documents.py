"""Tests for the fixture-to-document builders.

Covers:
- two-decimal half-up Decimal128 conversion
- the expired-coupon convention and its explicit override
- product upserts keeping ``_id`` and creation stamps insert-only
- inventory batch ids and numbers
- status-derived order dates and Decimal128 money on orders and payments
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest
from bson import Decimal128

from storefront_e2e.fixtures import build_default_fixtures
from storefront_e2e.schemas import DiscountType, FixtureCoupon, OrderStatus, PaymentStatus
from storefront_e2e.services.documents import (
    ORDER_CLASS,
    SEEDER_ACTOR,
    TEST_PASSWORD_HASH,
    build_bitcoin_payment_document,
    build_coupon_document,
    build_inventory_batch,
    build_order_document,
    build_product_upsert,
    build_user_document,
    build_user_upsert,
    order_lifecycle_dates,
    to_decimal128,
)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (19.999, "20.00"),
        (Decimal("19.994"), "19.99"),
        ("0.005", "0.01"),
        (10, "10.00"),
        (Decimal("118.23"), "118.23"),
    ],
)
def test_to_decimal128_rounds_half_up(value, expected: str) -> None:
    result = to_decimal128(value)
    assert isinstance(result, Decimal128)
    assert result.to_decimal() == Decimal(expected)
    assert str(result) == expected


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------


def _coupon(code: str, is_expired: bool | None = None) -> FixtureCoupon:
    return FixtureCoupon(
        code=code,
        discount_type=DiscountType.PERCENTAGE,
        discount_value=Decimal("10"),
        is_expired=is_expired,
    )


@pytest.mark.parametrize("code", ["E2EEXPIRED", "expired-summer", "OLD_Expired_1"])
def test_coupon_with_expired_in_code_is_inactive_and_past(code: str) -> None:
    doc = build_coupon_document(_coupon(code), 1, NOW)
    assert doc["active"] is False
    assert doc["validUntil"] < NOW


def test_regular_coupon_is_active_for_thirty_days() -> None:
    doc = build_coupon_document(_coupon("SAVE10"), 2, NOW)
    assert doc["_id"] == "coupon-2"
    assert doc["active"] is True
    assert doc["validUntil"] == NOW + timedelta(days=30)
    assert doc["usageLimit"] == 100
    assert doc["usageCount"] == 0


def test_explicit_is_expired_overrides_code_convention() -> None:
    assert build_coupon_document(_coupon("PLAIN", is_expired=True), 1, NOW)["active"] is False
    assert build_coupon_document(_coupon("EXPIRED", is_expired=False), 1, NOW)["active"] is True


# ---------------------------------------------------------------------------
# Users and products
# ---------------------------------------------------------------------------


def test_user_document_uses_shared_hash_and_fixture_id() -> None:
    user = build_default_fixtures(NOW).users.pending_activation
    doc = build_user_document(user, NOW)
    assert doc["_id"] == user.id
    assert doc["password"] == TEST_PASSWORD_HASH
    assert doc["activationKey"] == user.activation_key
    assert doc["activated"] is False
    assert doc["timezone"] == "America/Denver"
    assert doc["createdBy"] == SEEDER_ACTOR


def test_user_upsert_keeps_creation_stamp_insert_only() -> None:
    user = build_default_fixtures(NOW).users.pending_reset
    update = build_user_upsert(user, NOW)
    assert "createdDate" not in update["$set"]
    assert update["$setOnInsert"]["createdDate"] == NOW
    assert update["$set"]["resetKey"] == user.reset_key


def test_product_upsert_sets_id_only_on_insert() -> None:
    product = build_default_fixtures(NOW).products[1]
    update = build_product_upsert(product, NOW)
    assert "_id" not in update["$set"]
    assert update["$setOnInsert"]["_id"] == product.id
    assert update["$set"]["slug"] == product.slug
    assert update["$set"]["price"] == 149.99
    assert update["$set"]["salePrice"] == 129.99
    assert update["$set"]["category"] == "BLEND"


def test_inventory_batch_document() -> None:
    batch = build_inventory_batch("stored-id-1", 5, 3, NOW)
    assert batch["_id"] == "e2e-batch-stored-id-1"
    assert batch["batchNumber"] == "ZB2506150003"
    assert batch["productId"] == "stored-id-1"
    assert batch["availableQuantity"] == 5
    assert batch["manufactureDate"] == NOW - timedelta(days=30)
    assert batch["expiryDate"] == NOW + timedelta(days=365)


# ---------------------------------------------------------------------------
# Orders and payments
# ---------------------------------------------------------------------------


def _order_with(status: OrderStatus, payment_status: PaymentStatus = PaymentStatus.COMPLETED):
    order = build_default_fixtures(NOW).orders[0]
    return order.model_copy(update={"status": status, "payment_status": payment_status})


def test_lifecycle_dates_for_delivered_order() -> None:
    order = _order_with(OrderStatus.DELIVERED)
    dates = order_lifecycle_dates(order)
    assert dates["confirmationDate"] == order.order_date
    assert dates["shippedDate"] == order.order_date
    assert dates["deliveryDate"] == order.order_date
    assert dates["cancellationDate"] is None


def test_lifecycle_dates_for_pending_order() -> None:
    dates = order_lifecycle_dates(_order_with(OrderStatus.PENDING, PaymentStatus.PENDING))
    assert all(value is None for value in dates.values())


def test_lifecycle_dates_for_refunded_cancellation() -> None:
    order = _order_with(OrderStatus.CANCELLED, PaymentStatus.REFUNDED)
    dates = order_lifecycle_dates(order)
    assert dates["cancellationDate"] == order.order_date
    assert dates["refundDate"] == order.order_date
    assert dates["shippedDate"] is None


def test_order_document_money_is_decimal128() -> None:
    order = build_default_fixtures(NOW).orders[0]
    doc = build_order_document(order, NOW)
    assert "_id" not in doc
    assert doc["_class"] == ORDER_CLASS
    for field in ("subtotal", "tax", "shippingCost", "total", "discountAmount"):
        assert isinstance(doc[field], Decimal128), field
    assert doc["total"].to_decimal() == order.total
    assert doc["items"][0]["unitPrice"].to_decimal() == order.items[0].unit_price
    assert doc["shipping_address"]["addressType"] == "SHIPPING"
    assert doc["billing_address"]["userId"] == order.user_id


def test_bitcoin_payment_document_copies_flags() -> None:
    payments = build_default_fixtures(NOW).bitcoin_payments
    underpaid = next(payment for payment in payments if payment.underpaid)
    doc = build_bitcoin_payment_document(underpaid, NOW)
    assert "_id" not in doc
    assert doc["paymentType"] == "BITCOIN"
    assert doc["underpaid"] is True
    assert doc["overpaid"] is False
    assert doc["lockedBtcUsdRate"].to_decimal() == Decimal("40000.00")
    assert doc["transactionId"] == (underpaid.txids[0] if underpaid.txids else None)
