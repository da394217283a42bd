"""Pydantic schemas for order fixtures and checkout addresses."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field


class OrderStatus(StrEnum):
    AWAITING_PAYMENT = "AWAITING_PAYMENT"
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentStatus(StrEnum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    TIMEOUT = "TIMEOUT"


class ShippingMethod(StrEnum):
    STANDARD = "STANDARD"
    EXPRESS = "EXPRESS"
    OVERNIGHT = "OVERNIGHT"
    PICKUP = "PICKUP"


class PaymentMethod(StrEnum):
    CASHAPP = "CASHAPP"
    SOLANA_PAY = "SOLANA_PAY"
    ZELLE = "ZELLE"
    ACH = "ACH"
    BITCOIN = "BITCOIN"


class OrderAddress(BaseModel):
    first_name: str
    last_name: str
    address_line1: str
    address_line2: str | None = None
    city: str
    state: str
    postal_code: str
    country: str
    phone_number: str | None = None
    company_name: str | None = None


class FixtureOrderItem(BaseModel):
    product_id: str
    product_name: str
    product_sku: str
    product_dose: str | None = None
    product_image: str | None = None
    quantity: int = Field(..., ge=1)
    unit_price: Decimal
    total_price: Decimal
    batch_number: str | None = None
    reservation_id: str | None = None


class FixtureOrder(BaseModel):
    id: str
    order_number: str
    # Fixture user id; rewritten to the registered user's id after bootstrap.
    user_id: str
    customer_email: str
    customer_name: str
    items: list[FixtureOrderItem] = Field(..., min_length=1)
    shipping_address: OrderAddress
    billing_address: OrderAddress
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    shipping_method: ShippingMethod
    subtotal: Decimal
    tax: Decimal
    shipping_cost: Decimal
    total: Decimal
    order_date: datetime
    coupon_code: str | None = None
    discount_amount: Decimal = Decimal("0")
    tracking_number: str | None = None
    notes: str | None = None


class ShippingAddress(BaseModel):
    """Checkout form input, as typed into the storefront's address fields."""

    first_name: str
    last_name: str
    email: str
    address1: str
    address2: str | None = None
    city: str
    state: str
    zip: str
    country: str
    phone_number: str
