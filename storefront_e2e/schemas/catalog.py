"""Pydantic schemas for catalog fixtures: products and coupons."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

# Coupons whose code contains this marker are seeded as expired unless told otherwise.
EXPIRED_COUPON_MARKER = "EXPIRED"


class ProductCategory(StrEnum):
    PEPTIDE = "PEPTIDE"
    BLEND = "BLEND"
    BAC_WATER = "BAC_WATER"


class DiscountType(StrEnum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


class ImageVariant(BaseModel):
    url: str
    width: int
    height: int
    file_size: int
    format: str


class ImageMetadata(BaseModel):
    original_format: str
    original_size: int
    uploaded_at: datetime
    uploaded_by: str


class ProductImages(BaseModel):
    original_url: str
    variants: dict[str, ImageVariant] = Field(default_factory=dict)
    metadata: ImageMetadata


class FixtureProduct(BaseModel):
    # Suggested id only; ``slug`` is the key products are upserted on.
    id: str
    slug: str
    sku: str
    name: str
    description: str | None = None
    category: ProductCategory
    on_sale: bool = False
    is_featured: bool = False
    # Desired stock. The storefront sums inventory batches, so this only takes
    # effect once a batch has been seeded for the product.
    inventory: int = Field(..., ge=0)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    sale_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    dose: str | None = None
    images: ProductImages | None = None

    @property
    def in_stock(self) -> bool:
        return self.inventory > 0


class FixtureCoupon(BaseModel):
    code: str
    discount_type: DiscountType
    discount_value: Decimal = Field(..., ge=0)
    min_order_amount: Decimal = Field(Decimal("0"), ge=0)
    # None means "derive from the code", see :attr:`expired`.
    is_expired: bool | None = None

    @field_validator("code")
    @classmethod
    def code_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Coupon code must not be empty")
        return v

    @property
    def expired(self) -> bool:
        if self.is_expired is not None:
            return self.is_expired
        return EXPIRED_COUPON_MARKER in self.code.upper()
