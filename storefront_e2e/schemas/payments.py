from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from storefront_e2e.schemas.orders import PaymentStatus


class ComplianceStatus(StrEnum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    FLAGGED = "FLAGGED"
    REJECTED = "REJECTED"
    FAILED = "FAILED"


class BlockchainNetwork(StrEnum):
    MAINNET = "bitcoin-mainnet"
    TESTNET = "bitcoin-testnet"


class BitcoinPayment(BaseModel):
    """A crypto payment for the admin dashboard views.

    ``underpaid`` and ``overpaid`` are authored, not derived from the satoshi
    amounts, so a fixture can describe states the backend would never compute.
    """

    id: str
    order_id: str
    user_id: str
    amount: Decimal
    status: PaymentStatus
    blockchain_network: BlockchainNetwork
    token_symbol: str = "BTC"
    recipient_wallet_address: str
    sender_wallet_address: str | None = None
    derivation_index: int = Field(..., ge=0)
    expected_sats: int = Field(..., ge=0)
    received_sats: int | None = None
    confirmed_sats: int | None = None
    locked_btc_usd_rate: Decimal
    txids: list[str] = Field(default_factory=list)
    confirmation_count: int = 0
    underpaid: bool = False
    overpaid: bool = False
    expires_at: datetime | None = None
    payment_date: datetime | None = None
    compliance_status: ComplianceStatus = ComplianceStatus.PENDING
    compliance_notes: str | None = None
    compliance_verified_at: datetime | None = None

    @model_validator(mode="after")
    def not_both_under_and_over(self) -> "BitcoinPayment":
        if self.underpaid and self.overpaid:
            raise ValueError("A payment cannot be both underpaid and overpaid")
        return self
