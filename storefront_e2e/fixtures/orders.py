"""Order fixtures.

Order ranges are partitioned by the test module that reads them so that
parallel workers never mutate each other's data:

* ``001``-``023`` belong to the primary customer (checkout, admin order
  management, status transitions). ``002b``/``002c``/``010b`` are spare
  copies for tests that consume an order by changing its status.
* ``024``-``030`` belong to the account-orders user (order history).
* ``031``-``033`` belong to the account-coa user (COA submission needs
  delivered orders with batch numbers).
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from storefront_e2e.schemas import (
    FixtureOrder,
    FixtureOrderItem,
    OrderAddress,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingMethod,
)


def generate_order_number(sequence: int, now: datetime) -> str:
    """``ZB`` + ``YYMMDD`` of *now* + a four-digit sequence, e.g. ``ZB2610160007``."""
    return f"ZB{now:%y%m%d}{sequence:04d}"


@dataclass(frozen=True)
class _Owner:
    user_id: str
    email: str
    name: str
    address: OrderAddress


@dataclass(frozen=True)
class _Line:
    product_id: str
    name: str
    sku: str
    dose: str | None
    unit_price: Decimal


CUSTOMER_ADDRESS = OrderAddress(
    first_name="Test",
    last_name="Customer",
    address_line1="417 Montgomery St",
    address_line2="Floor 5",
    city="San Francisco",
    state="CA",
    postal_code="94104",
    country="US",
    phone_number="+14151234567",
)

_CUSTOMER = _Owner(
    "e2e-customer-001",
    "testcustomer@test.zenithbioscience.com",
    "Test Customer",
    CUSTOMER_ADDRESS,
)
_ACCOUNT_ORDERS = _Owner(
    "e2e-account-orders-001",
    "account-orders@test.zenithbioscience.com",
    "Account Orders",
    OrderAddress(
        first_name="Account",
        last_name="Orders",
        address_line1="123 Test Street",
        city="Denver",
        state="CO",
        postal_code="80202",
        country="US",
        phone_number="+13031234567",
    ),
)
_ACCOUNT_COA = _Owner(
    "e2e-account-coa-001",
    "account-coa@test.zenithbioscience.com",
    "Account Coa",
    OrderAddress(
        first_name="Account",
        last_name="Coa",
        address_line1="456 Research Blvd",
        city="Boston",
        state="MA",
        postal_code="02101",
        country="US",
        phone_number="+16171234567",
    ),
)

_ALPHA = _Line("e2e-prod-001", "Test Peptide Alpha", "E2E-PEPTIDE-001", "5mg", Decimal("99.99"))
_BETA = _Line("e2e-prod-002", "Test Blend Beta", "E2E-BLEND-002", "10mg", Decimal("129.99"))
_BAC_WATER = _Line("e2e-prod-003", "Test BAC Water", "E2E-BAC-003", None, Decimal("19.99"))

# Totals as (subtotal, tax, shipping, total) for the common baskets.
_ONE_ALPHA_STANDARD = ("99.99", "8.25", "9.99", "118.23")
_TWO_ALPHA_STANDARD = ("199.98", "16.50", "9.99", "226.47")
_ONE_BETA_EXPRESS = ("129.99", "10.73", "14.99", "155.71")
_ONE_BETA_STANDARD = ("129.99", "10.73", "9.99", "150.71")


def _item(line: _Line, quantity: int = 1, batch_number: str | None = None) -> FixtureOrderItem:
    return FixtureOrderItem(
        product_id=line.product_id,
        product_name=line.name,
        product_sku=line.sku,
        product_dose=line.dose,
        quantity=quantity,
        unit_price=line.unit_price,
        total_price=line.unit_price * quantity,
        batch_number=batch_number,
    )


def build_orders(now: datetime) -> list[FixtureOrder]:
    def order(
        order_id: str,
        sequence: int,
        owner: _Owner,
        items: list[FixtureOrderItem],
        status: OrderStatus,
        payment_status: PaymentStatus,
        payment_method: PaymentMethod,
        shipping_method: ShippingMethod,
        amounts: tuple[str, str, str, str],
        days_ago: int,
        tracking_number: str | None = None,
        notes: str | None = None,
    ) -> FixtureOrder:
        subtotal, tax, shipping_cost, total = (Decimal(value) for value in amounts)
        return FixtureOrder(
            id=order_id,
            order_number=generate_order_number(sequence, now),
            user_id=owner.user_id,
            customer_email=owner.email,
            customer_name=owner.name,
            items=items,
            shipping_address=owner.address,
            billing_address=owner.address.model_copy(),
            status=status,
            payment_status=payment_status,
            payment_method=payment_method,
            shipping_method=shipping_method,
            subtotal=subtotal,
            tax=tax,
            shipping_cost=shipping_cost,
            total=total,
            order_date=now - timedelta(days=days_ago),
            tracking_number=tracking_number,
            notes=notes,
        )

    S = OrderStatus
    P = PaymentStatus
    M = PaymentMethod
    SH = ShippingMethod
    paid = P.COMPLETED
    cancellation_note = "Customer requested cancellation"

    return [
        # ---- primary customer ------------------------------------------------
        order("e2e-order-001", 1, _CUSTOMER, [_item(_ALPHA, 2)], S.PENDING, paid, M.CASHAPP, SH.STANDARD, _TWO_ALPHA_STANDARD, 1),
        order("e2e-order-002", 2, _CUSTOMER, [_item(_ALPHA)], S.PENDING, paid, M.ZELLE, SH.STANDARD, _ONE_ALPHA_STANDARD, 1),
        order("e2e-order-002b", 12, _CUSTOMER, [_item(_BETA)], S.PENDING, paid, M.ACH, SH.EXPRESS, _ONE_BETA_EXPRESS, 1),
        order("e2e-order-002c", 13, _CUSTOMER, [_item(_ALPHA, 2)], S.PENDING, paid, M.CASHAPP, SH.STANDARD, _TWO_ALPHA_STANDARD, 1),
        order("e2e-order-003", 3, _CUSTOMER, [_item(_BETA)], S.CONFIRMED, paid, M.ZELLE, SH.EXPRESS, _ONE_BETA_EXPRESS, 2),
        order("e2e-order-004", 4, _CUSTOMER, [_item(_ALPHA)], S.CONFIRMED, paid, M.ACH, SH.STANDARD, _ONE_ALPHA_STANDARD, 2),
        order(
            "e2e-order-005", 5, _CUSTOMER,
            [_item(_ALPHA, 1, "BATCH-E2E-001"), _item(_BETA, 2, "BATCH-E2E-002")],
            S.PROCESSING, paid, M.ACH, SH.STANDARD, ("359.97", "29.70", "9.99", "399.66"), 3,
        ),
        order("e2e-order-006", 6, _CUSTOMER, [_item(_BETA, 1, "BATCH-E2E-003")], S.PROCESSING, paid, M.CASHAPP, SH.EXPRESS, _ONE_BETA_EXPRESS, 4),
        order(
            "e2e-order-007", 7, _CUSTOMER, [_item(_ALPHA, 3, "BATCH-E2E-004")],
            S.SHIPPED, paid, M.CASHAPP, SH.EXPRESS, ("299.97", "24.75", "14.99", "339.71"), 7,
            tracking_number="E2E1234567890",
        ),
        order(
            "e2e-order-008", 8, _CUSTOMER, [_item(_BETA, 1, "BATCH-E2E-005")],
            S.DELIVERED, paid, M.SOLANA_PAY, SH.OVERNIGHT, ("129.99", "10.73", "24.99", "165.71"), 7,
            tracking_number="E2E0987654321",
        ),
        order("e2e-order-009", 9, _CUSTOMER, [_item(_ALPHA)], S.AWAITING_PAYMENT, P.PENDING, M.ZELLE, SH.STANDARD, _ONE_ALPHA_STANDARD, 0),
        order("e2e-order-010", 10, _CUSTOMER, [_item(_BETA)], S.AWAITING_PAYMENT, P.PENDING, M.ACH, SH.EXPRESS, _ONE_BETA_EXPRESS, 0),
        order("e2e-order-010b", 14, _CUSTOMER, [_item(_ALPHA, 2)], S.AWAITING_PAYMENT, P.PENDING, M.CASHAPP, SH.STANDARD, _TWO_ALPHA_STANDARD, 0),
        order(
            "e2e-order-011", 11, _CUSTOMER, [_item(_BETA)],
            S.CANCELLED, P.REFUNDED, M.CASHAPP, SH.STANDARD, _ONE_BETA_STANDARD, 7,
            notes=cancellation_note,
        ),
        order(
            "e2e-order-015", 15, _CUSTOMER, [_item(_ALPHA, 2, "BATCH-E2E-015")],
            S.PROCESSING, paid, M.ZELLE, SH.EXPRESS, ("199.98", "16.50", "14.99", "231.47"), 3,
        ),
        order("e2e-order-016", 16, _CUSTOMER, [_item(_BETA, 1, "BATCH-E2E-016")], S.PROCESSING, paid, M.ACH, SH.STANDARD, _ONE_BETA_STANDARD, 4),
        order("e2e-order-017", 17, _CUSTOMER, [_item(_ALPHA)], S.CONFIRMED, paid, M.ZELLE, SH.STANDARD, _ONE_ALPHA_STANDARD, 2),
        order("e2e-order-018", 18, _CUSTOMER, [_item(_BETA)], S.PENDING, paid, M.ACH, SH.EXPRESS, _ONE_BETA_EXPRESS, 1),
        order("e2e-order-019", 19, _CUSTOMER, [_item(_ALPHA)], S.AWAITING_PAYMENT, P.PENDING, M.CASHAPP, SH.STANDARD, _ONE_ALPHA_STANDARD, 0),
        order("e2e-order-020", 20, _CUSTOMER, [_item(_ALPHA, 2)], S.PENDING, paid, M.ZELLE, SH.STANDARD, _TWO_ALPHA_STANDARD, 1),
        order("e2e-order-021", 21, _CUSTOMER, [_item(_BETA)], S.CONFIRMED, paid, M.ACH, SH.EXPRESS, _ONE_BETA_EXPRESS, 2),
        order("e2e-order-022", 22, _CUSTOMER, [_item(_ALPHA)], S.PENDING, paid, M.CASHAPP, SH.STANDARD, _ONE_ALPHA_STANDARD, 1),
        order("e2e-order-023", 23, _CUSTOMER, [_item(_BETA)], S.PENDING, paid, M.ZELLE, SH.EXPRESS, _ONE_BETA_EXPRESS, 1),
        # ---- account-orders user: order history ------------------------------
        order("e2e-order-024", 24, _ACCOUNT_ORDERS, [_item(_ALPHA, 2)], S.PENDING, paid, M.CASHAPP, SH.STANDARD, _TWO_ALPHA_STANDARD, 1),
        order("e2e-order-025", 25, _ACCOUNT_ORDERS, [_item(_BETA)], S.CONFIRMED, paid, M.SOLANA_PAY, SH.EXPRESS, _ONE_BETA_EXPRESS, 2),
        order(
            "e2e-order-026", 26, _ACCOUNT_ORDERS, [_item(_BAC_WATER, 3)],
            S.SHIPPED, paid, M.CASHAPP, SH.STANDARD, ("59.97", "4.95", "9.99", "74.91"), 3,
            tracking_number="E2E123456789",
        ),
        order(
            "e2e-order-027", 27, _ACCOUNT_ORDERS, [_item(_ALPHA)],
            S.DELIVERED, paid, M.SOLANA_PAY, SH.EXPRESS, ("99.99", "8.25", "14.99", "123.23"), 7,
            tracking_number="E2E987654321",
        ),
        order(
            "e2e-order-028", 28, _ACCOUNT_ORDERS, [_item(_BETA, 2)],
            S.DELIVERED, paid, M.ACH, SH.STANDARD, ("259.98", "21.45", "9.99", "291.42"), 7,
            tracking_number="E2ECOMPLETE001",
        ),
        order(
            "e2e-order-029", 29, _ACCOUNT_ORDERS, [_item(_ALPHA, 3, "BATCH-E2E-029")],
            S.PROCESSING, paid, M.ZELLE, SH.EXPRESS, ("299.97", "24.75", "14.99", "339.71"), 2,
        ),
        order(
            "e2e-order-030", 30, _ACCOUNT_ORDERS, [_item(_BETA)],
            S.CANCELLED, P.REFUNDED, M.CASHAPP, SH.STANDARD, _ONE_BETA_STANDARD, 5,
            notes=cancellation_note,
        ),
        # ---- account-coa user: delivered orders with batches -----------------
        order(
            "e2e-order-031", 31, _ACCOUNT_COA, [_item(_ALPHA, 2, "BATCH-E2E-031")],
            S.DELIVERED, paid, M.BITCOIN, SH.EXPRESS, ("199.98", "16.50", "14.99", "231.47"), 7,
            tracking_number="E2ECOA001TRACK",
        ),
        order(
            "e2e-order-032", 32, _ACCOUNT_COA, [_item(_BETA, 1, "BATCH-E2E-032")],
            S.DELIVERED, paid, M.ZELLE, SH.STANDARD, _ONE_BETA_STANDARD, 7,
            tracking_number="E2ECOA002TRACK",
        ),
        order(
            "e2e-order-033", 33, _ACCOUNT_COA,
            [_item(_ALPHA, 1, "BATCH-E2E-033"), _item(_BETA, 1, "BATCH-E2E-033B")],
            S.DELIVERED, paid, M.CASHAPP, SH.OVERNIGHT, ("229.98", "18.97", "24.99", "273.94"), 7,
            tracking_number="E2ECOA003TRACK",
        ),
    ]  # fmt: skip
