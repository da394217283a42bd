"""Tests for the exception hierarchy and the seeder's error wrapping.

Covers:
- message format ``[DataSeeder] Failed to {operation}: {cause}``
- use-before-connect raising ``NotConnectedError``
- database failures surfacing as ``SeederError`` with the cause chained
- connection failures closing the client and raising ``SeederConnectionError``
"""

import pytest

from storefront_e2e.errors import (
    FixtureNotFoundError,
    NotConnectedError,
    SeederConnectionError,
    SeederError,
    StorefrontE2EError,
)
from storefront_e2e.fixtures import get_default_fixtures
from storefront_e2e.services.seeder import DataSeeder

# ---------------------------------------------------------------------------
# Message formats
# ---------------------------------------------------------------------------


def test_seeder_error_message_names_component_and_operation() -> None:
    err = SeederError("seed users", "duplicate key")
    assert str(err) == "[DataSeeder] Failed to seed users: duplicate key"
    assert err.operation == "seed users"
    assert isinstance(err, StorefrontE2EError)


def test_not_connected_error_message() -> None:
    err = NotConnectedError()
    assert str(err) == "[DataSeeder] Not connected to MongoDB. Call connect() first."
    assert isinstance(err, SeederConnectionError)
    assert isinstance(err, SeederError)


def test_fixture_not_found_is_a_lookup_error() -> None:
    assert issubclass(FixtureNotFoundError, LookupError)
    assert issubclass(FixtureNotFoundError, StorefrontE2EError)


# ---------------------------------------------------------------------------
# Seeder wrapping
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_operation_before_connect_raises(seeder: DataSeeder) -> None:
    with pytest.raises(NotConnectedError):
        await seeder.reset_database()


@pytest.mark.asyncio
async def test_database_failure_is_wrapped(connected_seeder: DataSeeder, monkeypatch) -> None:
    async def boom(*args, **kwargs):
        raise RuntimeError("disk full")

    collection = connected_seeder.db["coupons"]
    monkeypatch.setattr(type(collection), "insert_many", boom)

    with pytest.raises(SeederError) as exc_info:
        await connected_seeder.seed_coupons(get_default_fixtures().coupons.all())

    assert str(exc_info.value) == "[DataSeeder] Failed to seed coupons: disk full"
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_connect_failure_raises_connection_error(test_settings) -> None:
    closed = []

    class UnreachableClient:
        def __getitem__(self, name):
            raise ConnectionError("server selection timeout")

        def close(self) -> None:
            closed.append(True)

    seeder = DataSeeder(test_settings, client_factory=lambda config: UnreachableClient())

    with pytest.raises(SeederConnectionError) as exc_info:
        await seeder.connect()

    assert "Failed to connect to MongoDB" in str(exc_info.value)
    assert closed == [True]
    assert seeder.is_connected is False
    # Disconnect after a failed connect is harmless.
    await seeder.disconnect()
