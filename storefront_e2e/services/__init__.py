from storefront_e2e.services.backend import (
    BackendClient,
    ResponseOutcome,
    classify_response,
    create_http_client,
)
from storefront_e2e.services.bootstrap import SetupReport, run_global_setup, run_global_teardown
from storefront_e2e.services.documents import to_decimal128
from storefront_e2e.services.health import (
    ApiHelper,
    ApiHelperConfig,
    ApiResponse,
    RequestLogEntry,
    wait_for_services,
)
from storefront_e2e.services.seeder import DataSeeder

__all__ = [
    # backend
    "BackendClient",
    "ResponseOutcome",
    "classify_response",
    "create_http_client",
    # bootstrap
    "SetupReport",
    "run_global_setup",
    "run_global_teardown",
    # documents
    "to_decimal128",
    # health
    "ApiHelper",
    "ApiHelperConfig",
    "ApiResponse",
    "RequestLogEntry",
    "wait_for_services",
    # seeder
    "DataSeeder",
]
