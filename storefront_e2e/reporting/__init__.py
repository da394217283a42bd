from storefront_e2e.reporting.request_logger import (
    NetworkLogEntry,
    RequestLogger,
    RequestSummary,
    is_api_request,
)

__all__ = [
    "NetworkLogEntry",
    "RequestLogger",
    "RequestSummary",
    "is_api_request",
]
