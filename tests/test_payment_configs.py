from datetime import UTC, datetime

from storefront_e2e.services.payment_configs import build_payment_method_configurations

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


def _by_id() -> dict[str, dict]:
    return {doc["_id"]: doc for doc in build_payment_method_configurations(NOW)}


def test_five_configurations_with_unique_methods() -> None:
    docs = build_payment_method_configurations(NOW)
    assert len(docs) == 5
    assert {doc["paymentMethodType"] for doc in docs} == {
        "CASHAPP",
        "SOLANA_PAY",
        "ZELLE",
        "ACH",
        "BITCOIN",
    }


def test_only_implemented_methods_are_enabled() -> None:
    enabled = {config_id for config_id, doc in _by_id().items() if doc["enabled"]}
    assert enabled == {"config-cashapp", "config-solana-pay", "config-bitcoin"}


def test_crypto_methods_carry_discount_metadata() -> None:
    docs = _by_id()
    assert docs["config-bitcoin"]["metadata"] == {"testMode": True, "cryptoDiscountPercentage": 10}
    assert docs["config-solana-pay"]["metadata"]["cryptoDiscountPercentage"] == 10
    assert docs["config-cashapp"]["metadata"] == {"testMode": True}


def test_documents_are_stamped_and_independent() -> None:
    first = build_payment_method_configurations(NOW)
    first[0]["configuration"]["mutated"] = True
    second = build_payment_method_configurations(NOW)
    assert "mutated" not in second[0]["configuration"]
    assert all(doc["createdAt"] == NOW and doc["createdBy"] == "e2e-seeder" for doc in second)
    assert all(doc["minimumAmount"] == 1 and doc["maximumAmount"] == 50_000 for doc in second)
