"""Shared response header utilities for Lambda handlers."""

from __future__ import annotations

from typing import Any
from typing import Mapping
from typing import Optional
from typing import Sequence


def get_security_headers() -> dict[str, str]:
    """Get security headers for all responses.

    SECURITY: X-Content-Type-Options prevents MIME type sniffing of JSON
    bodies. Framing and caching are left to API Gateway since the GraphiQL
    page must stay embeddable in development tooling.

    Returns:
        Dictionary of security headers.
    """
    return {
        "X-Content-Type-Options": "nosniff",
    }


def get_cors_headers(
    event: Optional[Mapping[str, Any]] = None,
    allowed_origins: Sequence[str] = (),
) -> dict[str, str]:
    """Get CORS headers for the response.

    Args:
        event: The Lambda event containing the request origin header.
        allowed_origins: Origins allowed to call the API. Empty allows any.

    Returns:
        Dictionary of CORS headers to include in the response.
    """
    request_origin = None
    if event:
        headers = event.get("headers") or {}
        for key, value in headers.items():
            if str(key).lower() == "origin":
                request_origin = value
                break

    # Echo an allowed origin; non-browser clients get the first one
    if not allowed_origins:
        allow_origin = "*"
    elif request_origin and request_origin in allowed_origins:
        allow_origin = request_origin
    else:
        allow_origin = allowed_origins[0]

    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": (
            "Content-Type,Authorization,X-Amz-Date,X-Api-Key,X-Amz-Security-Token"
        ),
        "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    }


def build_base_headers(
    event: Optional[Mapping[str, Any]] = None,
    allowed_origins: Sequence[str] = (),
) -> dict[str, str]:
    """Headers every response starts from, before the responder adds its own."""
    headers = get_security_headers()
    headers.update(get_cors_headers(event, allowed_origins))
    return headers
