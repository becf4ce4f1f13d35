"""Lambda entrypoint for the GraphQL endpoint."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from dgraphql.handler import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the GraphQL handler."""
    return _handler(event, context)
