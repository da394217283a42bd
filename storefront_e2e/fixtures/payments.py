"""Bitcoin payment fixtures for the admin payment-management views.

Covers every status the dashboard filters on, both networks, and one
payment each flagged underpaid and overpaid. All belong to the primary
customer and reference ``e2e-order-btc-*`` orders that are not seeded.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from storefront_e2e.schemas import (
    BitcoinPayment,
    BlockchainNetwork,
    ComplianceStatus,
    PaymentStatus,
)

LOCKED_BTC_USD_RATE = Decimal("40000.00")

_CUSTOMER_ID = "e2e-customer-001"


def build_bitcoin_payments(now: datetime) -> list[BitcoinPayment]:
    yesterday = now - timedelta(days=1)
    one_hour_from_now = now + timedelta(hours=1)

    def payment(n: int, expires_at: datetime | None = None, **fields) -> BitcoinPayment:
        return BitcoinPayment(
            id=f"e2e-btc-payment-{n:03d}",
            order_id=f"e2e-order-btc-{n:03d}",
            user_id=_CUSTOMER_ID,
            derivation_index=n - 1,
            locked_btc_usd_rate=LOCKED_BTC_USD_RATE,
            expires_at=expires_at or one_hour_from_now,
            **fields,
        )

    return [
        payment(
            1,
            amount=Decimal("199.98"),
            status=PaymentStatus.COMPLETED,
            blockchain_network=BlockchainNetwork.TESTNET,
            recipient_wallet_address="tb1qw508d6qejxtdg4y5r3zarvary0c5xw7kxpjzsx",
            sender_wallet_address="tb1q0sg9rdst255gtldsmcf8rk0764avqy2h2ksqs5",
            expected_sats=500_000,
            received_sats=500_000,
            confirmed_sats=500_000,
            txids=["abc123def456789012345678901234567890123456789012345678901234abcd"],
            confirmation_count=6,
            payment_date=now - timedelta(days=2),
            compliance_status=ComplianceStatus.VERIFIED,
            compliance_notes="Verified by automated compliance check",
            compliance_verified_at=yesterday,
        ),
        payment(
            2,
            amount=Decimal("129.99"),
            status=PaymentStatus.PROCESSING,
            blockchain_network=BlockchainNetwork.TESTNET,
            recipient_wallet_address="tb1qrp33g0q5c5txsp9arysrx4k6zdkfs4nce4xj0g",
            sender_wallet_address="tb1q0sg9rdst255gtldsmcf8rk0764avqy2h2ksqs6",
            expected_sats=325_000,
            received_sats=325_000,
            confirmed_sats=325_000,
            txids=["def456abc789012345678901234567890123456789012345678901234567efgh"],
            confirmation_count=3,
            payment_date=yesterday,
        ),
        payment(
            3,
            amount=Decimal("99.99"),
            status=PaymentStatus.PENDING,
            blockchain_network=BlockchainNetwork.TESTNET,
            recipient_wallet_address="tb1qqqqqp399et2xygdj5xreqhjjvcmzhxw4aywxec",
            expected_sats=250_000,
            received_sats=0,
            confirmed_sats=0,
            payment_date=now,
        ),
        payment(
            4,
            amount=Decimal("59.99"),
            status=PaymentStatus.TIMEOUT,
            blockchain_network=BlockchainNetwork.TESTNET,
            recipient_wallet_address="tb1q0sg9rdst255gtldsmcf8rk0764avqy2h2ksqs7",
            expected_sats=150_000,
            received_sats=0,
            confirmed_sats=0,
            payment_date=now - timedelta(days=3),
            expires_at=now - timedelta(hours=1),
        ),
        payment(
            5,
            amount=Decimal("299.99"),
            status=PaymentStatus.COMPLETED,
            blockchain_network=BlockchainNetwork.MAINNET,
            recipient_wallet_address="bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4",
            sender_wallet_address="bc1q0sg9rdst255gtldsmcf8rk0764avqy2h2ksqs5",
            expected_sats=750_000,
            received_sats=750_000,
            confirmed_sats=750_000,
            txids=["mainnet123456789012345678901234567890123456789012345678901234ijkl"],
            confirmation_count=6,
            payment_date=now - timedelta(days=7),
            compliance_status=ComplianceStatus.VERIFIED,
            compliance_notes="Mainnet payment verified",
            compliance_verified_at=now - timedelta(days=3),
        ),
        payment(
            6,
            amount=Decimal("149.99"),
            status=PaymentStatus.COMPLETED,
            blockchain_network=BlockchainNetwork.TESTNET,
            recipient_wallet_address="tb1qm34lsc65zpw79lxes69zkqmk6ee3ewf0j77s3h",
            sender_wallet_address="tb1q0sg9rdst255gtldsmcf8rk0764avqy2h2ksqs8",
            expected_sats=375_000,
            received_sats=350_000,
            confirmed_sats=350_000,
            txids=["underpaid123456789012345678901234567890123456789012345678mnop"],
            confirmation_count=6,
            underpaid=True,
            payment_date=now - timedelta(days=2),
            compliance_status=ComplianceStatus.FAILED,
            compliance_notes="Underpaid by 25,000 sats - requires support escalation",
        ),
        payment(
            7,
            amount=Decimal("79.99"),
            status=PaymentStatus.COMPLETED,
            blockchain_network=BlockchainNetwork.TESTNET,
            recipient_wallet_address="tb1qcr8te4kr609gcawutmrza0j4xv80jy8z306fyu",
            sender_wallet_address="tb1q0sg9rdst255gtldsmcf8rk0764avqy2h2ksqs9",
            expected_sats=200_000,
            received_sats=250_000,
            confirmed_sats=250_000,
            txids=["overpaid123456789012345678901234567890123456789012345678qrst"],
            confirmation_count=6,
            overpaid=True,
            payment_date=yesterday,
            compliance_status=ComplianceStatus.VERIFIED,
            compliance_notes="Overpaid by 50,000 sats - refund may be required",
            compliance_verified_at=now,
        ),
        payment(
            8,
            amount=Decimal("199.99"),
            status=PaymentStatus.PROCESSING,
            blockchain_network=BlockchainNetwork.MAINNET,
            recipient_wallet_address="bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq",
            sender_wallet_address="bc1q0sg9rdst255gtldsmcf8rk0764avqy2h2ksqs0",
            expected_sats=500_000,
            received_sats=500_000,
            confirmed_sats=500_000,
            txids=["mainnetproc123456789012345678901234567890123456789012345uvwx"],
            confirmation_count=2,
            payment_date=now,
        ),
    ]
