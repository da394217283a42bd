"""Translate fixture models into the MongoDB documents the backend reads.

Pure functions only: every builder takes the timestamp to stamp audit fields
with, so the seeder controls "now" and tests can pin it.
"""

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from bson import Decimal128

from storefront_e2e.schemas import (
    BitcoinPayment,
    FixtureCoupon,
    FixtureOrder,
    FixtureOrderItem,
    FixtureProduct,
    FixtureUser,
    OrderAddress,
    OrderStatus,
    PaymentStatus,
    ProductImages,
)
from storefront_e2e.schemas.backend import DEFAULT_TIMEZONE

SEEDER_ACTOR = "e2e-seeder"
LAST_MODIFIED_REASON = "E2E test data seeding"

# Argon2id hash of "TestPassword123!", the password shared by every seeded user.
TEST_PASSWORD_HASH = (
    "$argon2id$v=19$m=4096,t=3,p=1$Fc7AoV1rusBGnW+Rpk8rkg$"
    "ywQyD5sJRRWvYBRkfmTCWwgiN0kxmlBIQhIEgymGTmk"
)

ORDER_CLASS = "com.zenithbioscience.backend.domain.order.Order"
CRYPTO_PAYMENT_CLASS = "com.zenithbioscience.backend.domain.payment.CryptoPayment"

# Inventory batch defaults
BATCH_SUPPLIER = "E2E Test Supplier"
BATCH_PURITY = 99.5
BATCH_AGE = timedelta(days=30)
BATCH_SHELF_LIFE = timedelta(days=365)

# Coupon defaults
COUPON_USAGE_LIMIT = 100
COUPON_VALIDITY = timedelta(days=30)
EXPIRED_COUPON_AGE = timedelta(days=1)

# Products fall back to these when the fixture does not override them.
LOW_STOCK_THRESHOLD = 10
REORDER_POINT = 5
REORDER_QUANTITY = 50

_CENTS = Decimal("0.01")

_UNCONFIRMED_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.AWAITING_PAYMENT})
_SHIPPED_STATUSES = frozenset({OrderStatus.SHIPPED, OrderStatus.DELIVERED})


def to_decimal128(value: Decimal | float | int | str) -> Decimal128:
    """Round *value* half-up to two places and wrap it as BSON Decimal128.

    Floats go through ``str`` first so ``19.999`` becomes ``20.00`` rather
    than picking up binary noise.
    """
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    return Decimal128(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))


def _number(value: Decimal | None) -> float | int | None:
    """Plain BSON number for fields the backend maps to ``double``."""
    if value is None:
        return None
    return int(value) if value == value.to_integral_value() else float(value)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def user_fields(user: FixtureUser) -> dict[str, Any]:
    """Fields refreshed on every write of *user*, insert or update."""
    return {
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
        "password": TEST_PASSWORD_HASH,
        "activated": user.activated,
        "authorities": list(user.authorities),
        "activationKey": user.activation_key,
        "resetKey": user.reset_key,
        "resetDate": user.reset_date,
        "resetAttempts": None,
        "emailSendFailed": None,
        "oauth2Provider": None,
        "oauth2Id": None,
        "phoneNumber": None,
        "timezone": DEFAULT_TIMEZONE,
        "terms_acceptance": None,
    }


def build_user_document(user: FixtureUser, now: datetime) -> dict[str, Any]:
    return {
        "_id": user.id,
        **user_fields(user),
        "createdBy": SEEDER_ACTOR,
        "createdDate": now,
        "lastModifiedBy": SEEDER_ACTOR,
        "lastModifiedDate": now,
    }


def build_user_upsert(user: FixtureUser, now: datetime) -> dict[str, Any]:
    """Update document that keeps the creation stamp of an existing user."""
    return {
        "$set": {**user_fields(user), "lastModifiedBy": SEEDER_ACTOR, "lastModifiedDate": now},
        "$setOnInsert": {"createdBy": SEEDER_ACTOR, "createdDate": now},
    }


# ---------------------------------------------------------------------------
# Products and inventory batches
# ---------------------------------------------------------------------------


def _images_document(images: ProductImages | None) -> dict[str, Any] | None:
    if images is None:
        return None
    return {
        "originalUrl": images.original_url,
        "variants": {
            name: {
                "url": variant.url,
                "width": variant.width,
                "height": variant.height,
                "fileSize": variant.file_size,
                "format": variant.format,
            }
            for name, variant in images.variants.items()
        },
        "metadata": {
            "originalFormat": images.metadata.original_format,
            "originalSize": images.metadata.original_size,
            "uploadedAt": images.metadata.uploaded_at,
            "uploadedBy": images.metadata.uploaded_by,
        },
    }


def build_product_upsert(product: FixtureProduct, now: datetime) -> dict[str, Any]:
    """Update document for upserting *product* on its slug.

    ``_id`` sits in ``$setOnInsert`` so an existing product keeps whatever id
    a previous run or the backend gave it.
    """
    return {
        "$set": {
            "slug": product.slug,
            "sku": product.sku,
            "name": product.name,
            "description": product.description or f"Test product: {product.name}",
            "category": str(product.category),
            "onSale": product.on_sale,
            "isFeatured": product.is_featured,
            "inventory": product.inventory,
            "lowStockThreshold": LOW_STOCK_THRESHOLD,
            "reorderPoint": REORDER_POINT,
            "reorderQuantity": REORDER_QUANTITY,
            "price": _number(product.price),
            "salePrice": _number(product.sale_price),
            "dose": product.dose,
            "coa_history": [],
            "images": _images_document(product.images),
            "related_products": [],
            "lastModifiedBy": SEEDER_ACTOR,
            "lastModifiedDate": now,
            "lastModifiedByIp": None,
            "lastModifiedByUserAgent": None,
            "lastModifiedReason": LAST_MODIFIED_REASON,
            "dataRetentionFlag": False,
            "dataRetentionDate": None,
            "complianceNotes": None,
        },
        "$setOnInsert": {
            "_id": product.id,
            "createdBy": SEEDER_ACTOR,
            "createdDate": now,
            "createdByIp": None,
            "createdByUserAgent": None,
        },
    }


def batch_id_for(product_id: str) -> str:
    return f"e2e-batch-{product_id}"


def batch_number(sequence: int, now: datetime) -> str:
    return f"ZB{now:%y%m%d}{sequence:04d}"


def build_inventory_batch(
    product_id: str, quantity: int, sequence: int, now: datetime
) -> dict[str, Any]:
    """One batch holding all of a product's stock.

    *product_id* must be the id stored in MongoDB, which can differ from the
    fixture's suggested id.
    """
    return {
        "_id": batch_id_for(product_id),
        "batchNumber": batch_number(sequence, now),
        "productId": product_id,
        "quantity": quantity,
        "availableQuantity": quantity,
        "supplier": BATCH_SUPPLIER,
        "coaId": None,
        "manufactureDate": now - BATCH_AGE,
        "expiryDate": now + BATCH_SHELF_LIFE,
        "purity": BATCH_PURITY,
        "receivedDate": now,
        "active": True,
        "sequence": sequence,
        "version": 0,
    }


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------


def build_coupon_document(coupon: FixtureCoupon, sequence: int, now: datetime) -> dict[str, Any]:
    expired = coupon.expired
    valid_until = now - EXPIRED_COUPON_AGE if expired else now + COUPON_VALIDITY
    return {
        "_id": f"coupon-{sequence}",
        "code": coupon.code,
        "discountType": str(coupon.discount_type),
        "discountValue": _number(coupon.discount_value),
        "minOrderAmount": _number(coupon.min_order_amount),
        "active": not expired,
        "usageLimit": COUPON_USAGE_LIMIT,
        "usageCount": 0,
        "validFrom": now,
        "validUntil": valid_until,
        "createdDate": now,
        "lastModifiedDate": now,
    }


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


def _address_document(address: OrderAddress, user_id: str, address_type: str) -> dict[str, Any]:
    return {
        "userId": user_id,
        "addressType": address_type,
        "firstName": address.first_name,
        "lastName": address.last_name,
        "addressLine1": address.address_line1,
        "addressLine2": address.address_line2,
        "city": address.city,
        "state": address.state,
        "postalCode": address.postal_code,
        "country": address.country,
        "phoneNumber": address.phone_number,
        "companyName": address.company_name,
    }


def _item_document(item: FixtureOrderItem) -> dict[str, Any]:
    return {
        "productId": item.product_id,
        "productName": item.product_name,
        "productSku": item.product_sku,
        "productDose": item.product_dose,
        "productImage": item.product_image,
        "quantity": item.quantity,
        "unitPrice": to_decimal128(item.unit_price),
        "totalPrice": to_decimal128(item.total_price),
        "batchNumber": item.batch_number,
        "reservationId": item.reservation_id,
    }


def order_lifecycle_dates(order: FixtureOrder) -> dict[str, datetime | None]:
    """Milestone dates implied by the order's status, all pinned to the order date."""
    at = order.order_date
    return {
        "confirmationDate": None if order.status in _UNCONFIRMED_STATUSES else at,
        "shippedDate": at if order.status in _SHIPPED_STATUSES else None,
        "deliveryDate": at if order.status == OrderStatus.DELIVERED else None,
        "cancellationDate": at if order.status == OrderStatus.CANCELLED else None,
        "refundDate": at if order.payment_status == PaymentStatus.REFUNDED else None,
        "estimatedDeliveryDate": None,
    }


def build_order_document(order: FixtureOrder, now: datetime) -> dict[str, Any]:
    """Backend ``Order`` document for *order*, without ``_id``.

    Money is Decimal128 throughout; the backend compares totals exactly.
    """
    return {
        "_class": ORDER_CLASS,
        "userId": order.user_id,
        "customerEmail": order.customer_email,
        "customerName": order.customer_name,
        "orderNumber": order.order_number,
        "orderDate": order.order_date,
        "status": str(order.status),
        "shipping_address": _address_document(order.shipping_address, order.user_id, "SHIPPING"),
        "billing_address": _address_document(order.billing_address, order.user_id, "BILLING"),
        "items": [_item_document(item) for item in order.items],
        "subtotal": to_decimal128(order.subtotal),
        "tax": to_decimal128(order.tax),
        "shippingCost": to_decimal128(order.shipping_cost),
        "total": to_decimal128(order.total),
        "paymentMethod": str(order.payment_method),
        "paymentStatus": str(order.payment_status),
        "shippingMethod": str(order.shipping_method),
        "trackingNumber": order.tracking_number,
        "trackingUrl": None,
        "carrier": None,
        "serviceLevel": None,
        "shipmentId": None,
        "easypostShipmentId": None,
        "labelUrl": None,
        "couponCode": order.coupon_code,
        "discountAmount": to_decimal128(order.discount_amount),
        "cryptoDiscountAmount": to_decimal128(0),
        "cryptoDiscountPercentage": to_decimal128(0),
        "cryptoDiscountApplied": False,
        "notes": order.notes,
        "adminNotes": None,
        **order_lifecycle_dates(order),
        "payment_details": {},
        "createdBy": SEEDER_ACTOR,
        "createdDate": order.order_date,
        "createdByIp": None,
        "createdByUserAgent": None,
        "lastModifiedBy": SEEDER_ACTOR,
        "lastModifiedDate": now,
        "lastModifiedByIp": None,
        "lastModifiedByUserAgent": None,
        "lastModifiedReason": LAST_MODIFIED_REASON,
        "dataRetentionFlag": False,
        "dataRetentionDate": None,
        "complianceNotes": None,
        "version": 0,
    }


# ---------------------------------------------------------------------------
# Bitcoin payments
# ---------------------------------------------------------------------------


def build_bitcoin_payment_document(payment: BitcoinPayment, now: datetime) -> dict[str, Any]:
    """Backend ``CryptoPayment`` document for *payment*, without ``_id``.

    The underpaid/overpaid flags are copied from the fixture, not derived.
    """
    first_txid = payment.txids[0] if payment.txids else None
    return {
        "_class": CRYPTO_PAYMENT_CLASS,
        "orderId": payment.order_id,
        "userId": payment.user_id,
        "amount": to_decimal128(payment.amount),
        "refundedAmount": to_decimal128(0),
        "status": str(payment.status),
        "paymentType": "BITCOIN",
        "paymentDate": payment.payment_date or now,
        "transactionId": first_txid,
        "transactionSignature": first_txid,
        "blockchainNetwork": str(payment.blockchain_network),
        "tokenSymbol": payment.token_symbol,
        "tokenMintAddress": None,
        "senderWalletAddress": payment.sender_wallet_address,
        "recipientWalletAddress": payment.recipient_wallet_address,
        "paymentReference": None,
        "tokenAmount": None,
        "blockHash": None,
        "blockTime": None,
        "programId": None,
        "transactionMetadata": None,
        "transactionFee": None,
        "gasPrice": None,
        "gasLimit": None,
        "confirmationCount": payment.confirmation_count,
        "complianceStatus": str(payment.compliance_status),
        "complianceVerifiedAt": payment.compliance_verified_at,
        "complianceNotes": payment.compliance_notes,
        "regulatoryData": None,
        "derivationIndex": payment.derivation_index,
        "expectedSats": payment.expected_sats,
        "receivedSats": payment.received_sats,
        "confirmedSats": payment.confirmed_sats,
        "lockedBtcUsdRate": to_decimal128(payment.locked_btc_usd_rate),
        "txids": list(payment.txids),
        "underpaid": payment.underpaid,
        "overpaid": payment.overpaid,
        "expiresAt": payment.expires_at,
        "createdBy": SEEDER_ACTOR,
        "createdDate": payment.payment_date or now,
        "lastModifiedBy": SEEDER_ACTOR,
        "lastModifiedDate": now,
        "sensitiveDataLastAccessed": None,
        "sensitiveDataAccessedBy": None,
    }
