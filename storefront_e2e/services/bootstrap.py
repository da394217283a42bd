"""One-time environment bootstrap run before the browser suite.

``run_global_setup`` walks the phases below strictly in order, each awaited
before the next starts:

1. connect to MongoDB
2. reset the database (keeping the preserve-list)
3. warm the backend up
4. register the core and isolated users through the backend
5. activate them and assign roles directly in MongoDB
6. upsert the users that need known activation/reset keys
7. seed products, batches, coupons, orders, Bitcoin payments, payment configs
8. point seeded orders at the users' generated ids
9. count the reconciled users' orders (diagnostic only)
10. log in as admin and clear the backend caches

A failure anywhere is logged and recorded on the returned report instead of
raised; the test run goes ahead against whatever was set up.
"""

import asyncio
import logging

import httpx
from pydantic import BaseModel, Field

from storefront_e2e.config import Settings, settings
from storefront_e2e.fixtures import build_default_fixtures, get_all_isolated_users, get_isolated_user
from storefront_e2e.schemas import E2EFixtures, FixtureUser
from storefront_e2e.services.backend import BackendClient, create_http_client
from storefront_e2e.services.seeder import DataSeeder

logger = logging.getLogger(__name__)

ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"

# Isolated users whose seeded orders must follow them to their generated ids.
RECONCILED_ISOLATED_USERS = ("account_orders", "account_coa")


class SetupReport(BaseModel):
    registered: list[str] = Field(default_factory=list)
    failed_registrations: list[str] = Field(default_factory=list)
    activated: int = 0
    reconciled_orders: int = 0
    order_counts: dict[str, int] = Field(default_factory=dict)
    admin_logged_in: bool = False
    caches_cleared: bool = False
    payment_config_refreshed: bool = False
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------


async def _register_users(
    backend: BackendClient,
    fixtures: E2EFixtures,
    isolated_users: list[FixtureUser],
    config: Settings,
    report: SetupReport,
) -> None:
    async def register(user: FixtureUser, fallback_last_name: str) -> None:
        if await backend.register(user, fallback_last_name=fallback_last_name):
            report.registered.append(user.email)
        else:
            report.failed_registrations.append(user.email)

    await register(fixtures.users.admin, "Admin")
    await asyncio.sleep(config.registration_delay_seconds)
    await register(fixtures.users.customer, "Customer")

    logger.info("Creating %d isolated test users for parallel execution", len(isolated_users))
    for user in isolated_users:
        await asyncio.sleep(config.isolated_registration_delay_seconds)
        await register(user, "User")


def _roles(fixtures: E2EFixtures, isolated_users: list[FixtureUser]) -> list[tuple[str, list[str]]]:
    return [
        (fixtures.users.customer.email, [ROLE_USER]),
        (fixtures.users.admin.email, [ROLE_USER, ROLE_ADMIN]),
        *((user.email, [ROLE_USER]) for user in isolated_users),
    ]


async def _seed_catalog_and_orders(seeder: DataSeeder, fixtures: E2EFixtures) -> None:
    await seeder.seed_products(fixtures.products)
    # Batches look products up by slug, so products must be written first.
    await seeder.seed_inventory_batches(fixtures.products)
    await seeder.seed_coupons(fixtures.coupons.all())
    await seeder.seed_orders(fixtures.orders)
    if fixtures.bitcoin_payments:
        await seeder.seed_bitcoin_payments(fixtures.bitcoin_payments)
    await seeder.seed_payment_method_configurations()


def _reconciliation_map(fixtures: E2EFixtures) -> dict[str, str]:
    """email -> fixture id for every user whose orders are reconciled."""
    users = [fixtures.users.customer, *(get_isolated_user(key) for key in RECONCILED_ISOLATED_USERS)]
    return {user.email: user.id for user in users}


async def _verify_order_ownership(
    seeder: DataSeeder, emails: list[str], report: SetupReport
) -> None:
    for email in emails:
        user_id = await seeder.get_user_id_by_email(email)
        if user_id is None:
            logger.info("[Verification] No stored user for %s", email)
            continue
        count = await seeder.count_orders_by_user_id(user_id)
        report.order_counts[email] = count
        logger.info("[Verification] Orders for %s (%s): %d", email, user_id, count)


async def _invalidate_caches(
    backend: BackendClient, fixtures: E2EFixtures, report: SetupReport
) -> None:
    # Must run after seeding: the backend may have cached products read before
    # their batches existed, i.e. with zero inventory.
    admin = fixtures.users.admin
    token = await backend.login(admin.email, admin.password)
    if token is None:
        logger.warning("Could not clear backend cache - admin login failed")
        return

    report.admin_logged_in = True
    report.caches_cleared = await backend.clear_caches(token)
    report.payment_config_refreshed = await backend.refresh_payment_config(token)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


async def run_global_setup(
    config: Settings = settings,
    *,
    fixtures: E2EFixtures | None = None,
    seeder: DataSeeder | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> SetupReport:
    """Bring the database and backend into the state the browser suite expects.

    The seeder is always disconnected on the way out.  An *http_client*
    supplied by the caller is left open; one created here is closed.
    """
    fixtures = fixtures or build_default_fixtures()
    seeder = seeder or DataSeeder(config)
    owns_http_client = http_client is None
    http_client = http_client or create_http_client(config)
    backend = BackendClient(http_client, config)
    report = SetupReport()

    logger.info("Running global setup against backend %s", config.backend_url)
    try:
        logger.info("Connecting to MongoDB...")
        await seeder.connect()

        logger.info("Resetting database...")
        await seeder.reset_database()

        logger.info("Warming up backend...")
        if await backend.warmup():
            await asyncio.sleep(config.warmup_delay_seconds)

        logger.info("Creating test users via API...")
        isolated_users = get_all_isolated_users()
        await _register_users(backend, fixtures, isolated_users, config, report)

        logger.info("Activating users and setting roles...")
        report.activated = await seeder.activate_and_setup_users(_roles(fixtures, isolated_users))

        logger.info("Seeding special test users for activation/reset testing...")
        await seeder.seed_special_test_users(fixtures.users.special())

        logger.info("Seeding products, batches, coupons, orders and payments...")
        await _seed_catalog_and_orders(seeder, fixtures)

        logger.info("Updating order user IDs to match actual database IDs...")
        email_to_fixture_id = _reconciliation_map(fixtures)
        report.reconciled_orders = await seeder.update_order_user_ids(email_to_fixture_id)
        await _verify_order_ownership(seeder, list(email_to_fixture_id), report)

        logger.info("Clearing backend cache...")
        await _invalidate_caches(backend, fixtures, report)

        logger.info(
            "Global setup complete: %d users registered (%d failed), %d products, "
            "%d orders, %d Bitcoin payments",
            len(report.registered),
            len(report.failed_registrations),
            len(fixtures.products),
            len(fixtures.orders),
            len(fixtures.bitcoin_payments),
        )
    except Exception as exc:
        report.error = str(exc)
        logger.exception("Global setup failed")
        logger.warning("Tests will run but may fail due to missing test data")
    finally:
        await seeder.disconnect()
        if owns_http_client:
            await http_client.aclose()

    return report


async def run_global_teardown(
    config: Settings = settings, *, seeder: DataSeeder | None = None
) -> bool:
    """Reset the database after the suite when ``cleanup_after_tests`` is set.

    Data is kept by default so failures can be inspected.  Returns whether a
    cleanup ran and succeeded; errors are logged, never raised.
    """
    if not config.cleanup_after_tests:
        logger.info("Skipping cleanup (set CLEANUP_AFTER_TESTS=true to enable)")
        return False

    seeder = seeder or DataSeeder(config)
    try:
        await seeder.connect()
        logger.info("Cleaning up test data...")
        await seeder.reset_database()
    except Exception:
        logger.warning("Cleanup failed (non-fatal)", exc_info=True)
        return False
    finally:
        await seeder.disconnect()

    logger.info("Test data cleaned up")
    return True
