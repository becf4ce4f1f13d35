"""GraphQL request parameter extraction."""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any
from typing import Mapping
from typing import Optional

from dgraphql.events import InboundEvent


@dataclass(frozen=True)
class GraphQLParams:
    """All GraphQL parameters carried by one request."""

    query: Optional[str]
    variables: Optional[Any]
    operation_name: Optional[str]
    raw: bool = False


def parse_body(body: Optional[str], is_base64_encoded: bool = False) -> dict[str, Any]:
    """Decode a JSON request body.

    Bodies that are empty, undecodable or not a JSON object yield an
    empty mapping; no error is reported at this stage.

    Args:
        body: The raw request body.
        is_base64_encoded: Whether API Gateway base64 encoded the body.

    Returns:
        The decoded JSON object, or an empty dict.
    """
    if not body:
        return {}
    try:
        if is_base64_encoded:
            body = base64.b64decode(body).decode("utf-8")
        data = json.loads(body)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def get_graphql_params(event: InboundEvent) -> GraphQLParams:
    """Extract GraphQL parameters from the query string and body."""
    url_data = event.query_string_parameters or {}
    body_data = parse_body(event.body, event.is_base64_encoded)
    return parse_graphql_params(url_data, body_data)


def parse_graphql_params(
    url_data: Mapping[str, Any],
    body_data: Mapping[str, Any],
) -> GraphQLParams:
    """Build GraphQL parameters, preferring query string values over body values.

    Args:
        url_data: Query string parameters.
        body_data: Decoded JSON body.

    Returns:
        The normalized parameters.
    """
    query = url_data.get("query") or body_data.get("query")
    if not isinstance(query, str):
        query = None

    variables = url_data.get("variables") or body_data.get("variables")
    if isinstance(variables, str):
        variables = _decode_variables(variables)
    elif not isinstance(variables, (dict, list)):
        variables = None

    operation_name = url_data.get("operationName") or body_data.get("operationName")
    if not isinstance(operation_name, str):
        operation_name = None

    raw = "raw" in url_data or "raw" in body_data

    return GraphQLParams(
        query=query,
        variables=variables,
        operation_name=operation_name,
        raw=raw,
    )


def _decode_variables(value: str) -> Optional[Any]:
    # Malformed variables are dropped rather than rejected with a 400.
    try:
        return json.loads(value)
    except ValueError:
        return None
