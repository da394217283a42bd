"""The fixed set of payment method configurations checkout needs.

CashApp, Solana Pay and Bitcoin are live in the backend; Zelle and ACH are
seeded disabled because the backend does not implement them.
"""

from datetime import datetime
from typing import Any

from storefront_e2e.schemas import PaymentMethod
from storefront_e2e.services.documents import SEEDER_ACTOR

_NO_FEES = {"percentage": 0, "fixed": 0}
_MINIMUM_AMOUNT = 1
_MAXIMUM_AMOUNT = 50_000

# (id, method, enabled, display name, description, configuration,
#  countries, currencies, extra metadata)
_CONFIGURATIONS: tuple[tuple[Any, ...], ...] = (
    (
        "config-cashapp",
        PaymentMethod.CASHAPP,
        True,
        "CashApp",
        "Pay with CashApp - fast and secure mobile payments",
        {
            "cashAppBusinessId": "e2e-test-business-id",
            "cashAppApiKey": "e2e-test-api-key",
            "cashAppWebhookSecret": "e2e-test-webhook-secret",
        },
        ["US"],
        ["USD"],
        {},
    ),
    (
        "config-solana-pay",
        PaymentMethod.SOLANA_PAY,
        True,
        "Solana Pay",
        "Pay with USDC on Solana - instant crypto payments with 10% discount",
        {
            "solanaNetwork": "devnet",
            "solanaWalletAddress": "E2ETestWalletAddress1234567890123456789012345",
            # USDC mint
            "solanaTokenMint": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
        },
        [],
        ["USD", "USDC"],
        {"cryptoDiscountPercentage": 10},
    ),
    (
        "config-zelle",
        PaymentMethod.ZELLE,
        False,
        "Zelle",
        "Pay with Zelle - direct bank transfer",
        {
            "zelleBusinessEmail": "e2e-test@zenithbioscience.com",
            "zelleBusinessPhone": "+15551234567",
            "zelleBusinessName": "Zenith Bioscience E2E Test",
            "zelleInstructionTemplate": "Send payment to {email} with memo: Order #{orderId}",
        },
        ["US"],
        ["USD"],
        {},
    ),
    (
        "config-ach",
        PaymentMethod.ACH,
        False,
        "ACH Bank Transfer",
        "Pay via ACH bank transfer - 3-5 business days processing",
        {
            "achProcessorApiKey": "e2e-test-ach-api-key",
            "achProcessorEndpoint": "https://api.test.ach-processor.com",
            "achBusinessAccountNumber": "1234567890",
            "achBusinessRoutingNumber": "021000021",
            "achProcessorName": "E2E Test ACH Processor",
        },
        ["US"],
        ["USD"],
        {},
    ),
    (
        "config-bitcoin",
        PaymentMethod.BITCOIN,
        True,
        "Bitcoin",
        "Pay with Bitcoin - secure cryptocurrency payments with 10% discount",
        {
            "btcPayServerUrl": "https://testnet.demo.btcpayserver.org",
            "btcPayServerApiKey": "e2e-test-btcpay-api-key",
            "btcPayServerStoreId": "e2e-test-store-id",
            "btcPayServerWebhookSecret": "e2e-test-webhook-secret",
            "network": "testnet",
            "confirmationsRequired": 1,
            "invoiceExpirationMinutes": 60,
        },
        [],
        ["USD", "BTC"],
        {"cryptoDiscountPercentage": 10},
    ),
)


def build_payment_method_configurations(now: datetime) -> list[dict[str, Any]]:
    """Return the five configuration documents, stamped with *now*."""
    documents = []
    for (
        config_id,
        method,
        enabled,
        display_name,
        description,
        configuration,
        countries,
        currencies,
        metadata,
    ) in _CONFIGURATIONS:
        documents.append(
            {
                "_id": config_id,
                "paymentMethodType": str(method),
                "enabled": enabled,
                "displayName": display_name,
                "description": description,
                "configuration": dict(configuration),
                "processingFees": dict(_NO_FEES),
                "minimumAmount": _MINIMUM_AMOUNT,
                "maximumAmount": _MAXIMUM_AMOUNT,
                "supportedCountries": list(countries),
                "supportedCurrencies": list(currencies),
                "metadata": {"testMode": True, **metadata},
                "createdAt": now,
                "updatedAt": now,
                "createdBy": SEEDER_ACTOR,
                "updatedBy": SEEDER_ACTOR,
            }
        )
    return documents
