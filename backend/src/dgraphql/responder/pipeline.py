"""GraphQL request pipeline for API Gateway proxy events.

Each request runs through a fixed sequence of stages: parameter
extraction, options resolution, method check, query check, parse,
validate, GET operation policy, execute, and extensions. Any stage may end
the request early with a ``Terminal`` response; otherwise it hands the
(possibly absent) execution result on. The final shaping stage always
runs.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Mapping
from typing import Optional
from typing import Union

from graphql import DocumentNode
from graphql import ExecutionResult
from graphql import GraphQLError
from graphql import OperationType
from graphql import Source
from graphql import execute
from graphql import get_operation_ast
from graphql import parse
from graphql import validate
from graphql.execution import ExecutionContext

from dgraphql.events import InboundEvent
from dgraphql.exceptions import ConfigurationError
from dgraphql.responder.graphiql import render_graphiql
from dgraphql.responder.negotiation import can_display_graphiql
from dgraphql.responder.options import Options
from dgraphql.responder.options import OptionsData
from dgraphql.responder.options import RequestInfo
from dgraphql.responder.options import resolve_options
from dgraphql.responder.params import GraphQLParams
from dgraphql.responder.params import get_graphql_params
from dgraphql.responder.shaping import Response
from dgraphql.responder.shaping import Terminal
from dgraphql.responder.shaping import errors_response
from dgraphql.responder.shaping import shape_result
from dgraphql.responder.shaping import text_response
from dgraphql.utils.logging import get_logger

logger = get_logger(__name__)

ALLOWED_METHODS = ("GET", "POST")

Outcome = Union[Terminal, Optional[dict[str, Any]]]
HeadersFactory = Callable[[Any], Mapping[str, str]]
AsyncResponder = Callable[[Any, Any], Awaitable[dict[str, Any]]]
Responder = Callable[[Any, Any], dict[str, Any]]


@dataclass
class RequestState:
    """Per-request values that later stages read."""

    raw_event: Any
    lambda_context: Any
    response: Response
    event: Optional[InboundEvent] = None
    params: Optional[GraphQLParams] = None
    options: Optional[OptionsData] = None
    show_graphiql: bool = False
    document: Optional[DocumentNode] = None


def get_async_responder(
    options: Options,
    headers: Optional[HeadersFactory] = None,
) -> AsyncResponder:
    """Build a coroutine function that answers API Gateway proxy events.

    Args:
        options: An ``OptionsData``, a mapping, an awaitable of either, or
            a callable ``(event, lambda_context, params)`` returning one.
        headers: Called with the raw event to seed each response's headers.

    Returns:
        ``async respond(event, lambda_context) -> dict``.

    Raises:
        ConfigurationError: If no options are given.
    """
    if options is None:
        raise ConfigurationError("GraphQL middleware requires options.")
    if inspect.isawaitable(options):
        options = _resolve_once(options)

    async def respond(event: Any, lambda_context: Any = None) -> dict[str, Any]:
        initial_headers: dict[str, str] = {}
        if headers is not None:
            try:
                initial_headers = dict(headers(event))
            except Exception:
                logger.exception("Could not build base response headers")
        state = RequestState(
            raw_event=event,
            lambda_context=lambda_context,
            response=Response(headers=initial_headers),
        )

        try:
            outcome = await run_stages(state, options)
        except Exception as error:
            outcome = _internal_error(state, error)

        if isinstance(outcome, Terminal):
            return outcome.response.to_dict()

        try:
            response = _finish(state, outcome)
        except Exception as error:
            response = _internal_error(state, error).response
        return response.to_dict()

    return respond


def get_responder(
    options: Options,
    headers: Optional[HeadersFactory] = None,
) -> Responder:
    """Build a synchronous Lambda handler around ``get_async_responder``."""
    respond = get_async_responder(options, headers)

    def handler(event: Any, lambda_context: Any = None) -> dict[str, Any]:
        return asyncio.run(respond(event, lambda_context))

    return handler


async def run_stages(state: RequestState, options: Options) -> Outcome:
    """Run every stage up to and including extensions."""
    state.event = event = InboundEvent.from_event(state.raw_event)
    state.params = params = get_graphql_params(event)
    state.options = opts = await resolve_options(
        options, event, state.lambda_context, params
    )
    response = state.response

    if event.http_method not in ALLOWED_METHODS:
        return text_response(
            response,
            405,
            "GraphQL only supports GET and POST requests.",
            {"Allow": "GET, POST"},
        )

    state.show_graphiql = can_display_graphiql(event, params, opts.graphiql)

    if not params.query:
        if state.show_graphiql:
            return None
        return text_response(response, 400, "Must provide query string.")

    try:
        state.document = document = parse(Source(params.query, "GraphQL request"))
    except GraphQLError as syntax_error:
        logger.info("GraphQL syntax error", extra={"error": syntax_error.message})
        return errors_response(response, 400, [syntax_error], opts.format_error)

    validation_errors = validate(opts.schema, document, opts.rules)
    if validation_errors:
        logger.info(
            "GraphQL validation failed",
            extra={"error_count": len(validation_errors)},
        )
        return errors_response(response, 400, validation_errors, opts.format_error)

    # Only query operations are allowed on GET requests.
    if event.http_method == "GET":
        operation = get_operation_ast(document, params.operation_name)
        if operation is not None and operation.operation != OperationType.QUERY:
            if state.show_graphiql:
                return None
            kind = operation.operation.value
            return text_response(
                response,
                405,
                f"Can only perform a {kind} operation from a POST request.",
                {"Allow": "POST"},
            )

    result = await execute_operation(state)
    return await apply_extensions(state, result)


async def execute_operation(state: RequestState) -> dict[str, Any]:
    """Execute the parsed document.

    Failures while building the execution context (bad variables, an
    unknown operation name) produce a 400 with an errors-only result that
    still goes through the remaining stages.
    """
    opts = state.options
    params = state.params
    context = opts.context if opts.context is not None else state.lambda_context

    context_errors = _execution_context_errors(state, context)
    if context_errors:
        state.response.status_code = 400
        return {"errors": context_errors}

    result = execute(
        opts.schema,
        state.document,
        opts.root_value,
        context,
        params.variables,
        params.operation_name,
    )
    if inspect.isawaitable(result):
        result = await result
    return _result_payload(result)


async def apply_extensions(
    state: RequestState,
    result: Optional[dict[str, Any]],
) -> Optional[dict[str, Any]]:
    """Attach the configured extensions to the result."""
    extensions_fn = state.options.extensions
    if result is None or extensions_fn is None:
        return result

    extensions = extensions_fn(
        RequestInfo(
            document=state.document,
            variables=state.params.variables,
            operation_name=state.params.operation_name,
            result=result,
        )
    )
    if inspect.isawaitable(extensions):
        extensions = await extensions
    if isinstance(extensions, Mapping):
        result["extensions"] = dict(extensions)
    return result


def _execution_context_errors(state: RequestState, context: Any) -> list[Exception]:
    variables = state.params.variables
    if variables is not None and not isinstance(variables, dict):
        return [
            GraphQLError(
                "Variables must be provided as a dictionary where keys are"
                " variable names and values are variable values."
            )
        ]
    try:
        built = ExecutionContext.build(
            state.options.schema,
            state.document,
            root_value=state.options.root_value,
            context_value=context,
            raw_variable_values=variables,
            operation_name=state.params.operation_name,
        )
    except (GraphQLError, TypeError) as context_error:
        return [context_error]
    return list(built) if isinstance(built, list) else []


def _result_payload(result: ExecutionResult) -> dict[str, Any]:
    payload: dict[str, Any] = {"data": result.data}
    if result.errors:
        payload["errors"] = list(result.errors)
    if result.extensions:
        payload["extensions"] = dict(result.extensions)
    return payload


def _finish(state: RequestState, result: Optional[dict[str, Any]]) -> Response:
    opts = state.options
    render_page = None
    if state.show_graphiql:
        render = opts.render_graphiql or render_graphiql
        params = state.params

        def render_page(formatted: Optional[dict[str, Any]]) -> str:
            return render(
                {
                    "query": params.query,
                    "variables": params.variables,
                    "operation_name": params.operation_name,
                    "result": formatted,
                }
            )

    return shape_result(
        state.response,
        result,
        pretty=bool(opts.pretty),
        format_error=opts.format_error,
        render_page=render_page,
    )


def _internal_error(state: RequestState, error: Exception) -> Terminal:
    status_code = _error_status(error)
    if status_code >= 500:
        logger.exception("GraphQL request failed")
    else:
        logger.warning(f"GraphQL request rejected: {error}")
    return errors_response(state.response, status_code, [error])


def _error_status(error: Exception) -> int:
    for attr in ("status", "status_code"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool) and value:
            return value
    return 500


def _resolve_once(options: Awaitable[Any]) -> Callable[..., Awaitable[Any]]:
    # Every request awaits one shared future, so the awaitable runs once
    # even when requests overlap.
    shared: list[asyncio.Future] = []

    async def load(*_args: Any) -> Any:
        if not shared:
            shared.append(asyncio.ensure_future(options))
        return await shared[0]

    return load
