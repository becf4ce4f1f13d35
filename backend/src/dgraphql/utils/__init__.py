"""Utility modules for the GraphQL Lambda function."""

from dgraphql.utils.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    log_lambda_event,
    log_response,
    set_request_context,
)
from dgraphql.utils.responses import (
    build_base_headers,
    get_cors_headers,
    get_security_headers,
)

__all__ = [
    "build_base_headers",
    "clear_request_context",
    "configure_logging",
    "get_cors_headers",
    "get_logger",
    "get_security_headers",
    "log_lambda_event",
    "log_response",
    "set_request_context",
]
