"""Seed script: load the default e2e fixtures straight into MongoDB.

Run as:
    python -m seed

Bypasses the backend entirely, so users get fixture ids and nothing is
registered or activated through the API.  Use ``storefront-e2e setup`` for
the full bootstrap.  Reads MONGODB_URI and MONGODB_DATABASE from the
environment (or a .env file).  Exits with status 1 if any step fails.
"""

import logging

from storefront_e2e.config import settings
from storefront_e2e.errors import SeederError
from storefront_e2e.fixtures import build_default_fixtures
from storefront_e2e.services.seeder import DataSeeder

logger = logging.getLogger("seed")


async def main(reset: bool = True) -> int:
    fixtures = build_default_fixtures()

    print("Storefront E2E Seed Script")
    print("=" * 50)
    print(f"Database: {settings.mongodb_database} @ {settings.mongodb_uri}")

    try:
        async with DataSeeder(settings) as seeder:
            if reset:
                print("\n[1/2] Resetting database...")
                await seeder.reset_database()
            else:
                print("\n[1/2] Keeping existing data")

            print("\n[2/2] Seeding fixtures...")
            await seeder.seed_all(fixtures)
            if fixtures.bitcoin_payments:
                await seeder.seed_bitcoin_payments(fixtures.bitcoin_payments)
    except SeederError:
        logger.exception("Seeding failed")
        return 1

    print(
        f"\n✓ Seed complete! {len(fixtures.users.core()) + len(fixtures.users.special())} users, "
        f"{len(fixtures.products)} products, {len(fixtures.orders)} orders"
    )
    return 0

