"""Response envelope and final shaping of GraphQL results."""

from __future__ import annotations

import json
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Callable
from typing import Iterable
from typing import Mapping
from typing import Optional

from dgraphql.responder.options import default_format_error

ErrorFormatter = Callable[[Exception], Any]


@dataclass
class Response:
    """An API Gateway proxy response under construction."""

    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the dict API Gateway expects."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }


@dataclass(frozen=True)
class Terminal:
    """A response that ends the pipeline before execution completes."""

    response: Response


def dump_json(value: Any, pretty: bool = False) -> str:
    """Serialize a payload, indented when ``pretty`` is set."""
    if pretty:
        return json.dumps(value, indent=2, default=str)
    return json.dumps(value, separators=(",", ":"), default=str)


def send_response(response: Response, content_type: str, data: str) -> Response:
    """Set the body and its content type on a response."""
    response.headers["Content-Type"] = f"{content_type}; charset=utf-8"
    response.body = data
    return response


def text_response(
    response: Response,
    status_code: int,
    message: str,
    headers: Optional[Mapping[str, str]] = None,
) -> Terminal:
    """End the pipeline with a plain text transport-level rejection."""
    response.status_code = status_code
    if headers:
        response.headers.update(headers)
    return Terminal(send_response(response, "text/plain", message))


def errors_response(
    response: Response,
    status_code: int,
    errors: Iterable[Exception],
    format_error: Optional[ErrorFormatter] = None,
) -> Terminal:
    """End the pipeline with a JSON ``{"errors": [...]}`` body."""
    formatter = format_error or default_format_error
    response.status_code = status_code
    payload = {"errors": [formatter(error) for error in errors]}
    return Terminal(send_response(response, "application/json", dump_json(payload)))


def shape_result(
    response: Response,
    result: Optional[dict[str, Any]],
    *,
    pretty: bool = False,
    format_error: Optional[ErrorFormatter] = None,
    render_page: Optional[Callable[[Optional[dict[str, Any]]], str]] = None,
) -> Response:
    """Turn an execution result into the final response.

    Args:
        response: The response accumulated by earlier stages.
        result: The execution result, or None when execution was skipped.
        pretty: Indent the JSON body.
        format_error: Formats each entry of ``result["errors"]``.
        render_page: Renders GraphiQL around the result; set only when
            GraphiQL is to be shown instead of JSON.

    Returns:
        The completed response.
    """
    # A null "data" means the operation failed at runtime; the errors
    # are still delivered in the body.
    if result is not None and "data" in result and result["data"] is None:
        response.status_code = 500

    if result is not None and "errors" in result:
        formatter = format_error or default_format_error
        result["errors"] = [formatter(error) for error in result["errors"]]

    if render_page is not None:
        return send_response(response, "text/html", render_page(result))

    if result is None:
        response.status_code = 500
        return send_response(response, "text/plain", "Internal Error")

    return send_response(response, "application/json", dump_json(result, pretty))
