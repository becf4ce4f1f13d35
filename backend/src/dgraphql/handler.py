"""Lambda handler serving GraphQL over API Gateway.

The responder is built once per container from environment settings and
reused for every invocation.
"""

from __future__ import annotations

import time
from functools import lru_cache
from typing import Any
from typing import Callable
from typing import Mapping
from typing import Optional

from graphql import GraphQLSchema

from dgraphql.config import Settings
from dgraphql.responder import OptionsData
from dgraphql.responder import RequestInfo
from dgraphql.responder import get_responder
from dgraphql.responder.params import GraphQLParams
from dgraphql.schema import create_schema
from dgraphql.utils.logging import clear_request_context
from dgraphql.utils.logging import configure_logging
from dgraphql.utils.logging import get_logger
from dgraphql.utils.logging import log_lambda_event
from dgraphql.utils.logging import log_response
from dgraphql.utils.logging import set_request_context
from dgraphql.utils.responses import build_base_headers

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)

Handler = Callable[[Mapping[str, Any], Any], dict[str, Any]]


def build_options(
    settings: Settings,
    schema: GraphQLSchema,
) -> Callable[[Any, Any, GraphQLParams], OptionsData]:
    """Return the per-request options function.

    Resolvers receive a context dict carrying the Lambda context, the
    validated event, the Dgraph host and the request id. Responses report
    their runtime under ``extensions.runtime_ms``.
    """

    def options(event: Any, lambda_context: Any, params: GraphQLParams) -> OptionsData:
        started = time.perf_counter()

        def extensions(info: RequestInfo) -> dict[str, Any]:
            return {"runtime_ms": round((time.perf_counter() - started) * 1000, 2)}

        return OptionsData(
            schema=schema,
            context={
                "lambda_context": lambda_context,
                "event": event,
                "dgraph": settings.dgraph_host,
                "request_id": event.request_id,
            },
            pretty=settings.pretty_json,
            graphiql=settings.graphiql_enabled,
            extensions=extensions,
        )

    return options


def create_handler(settings: Optional[Settings] = None) -> Handler:
    """Build a Lambda handler from settings (defaults to the environment)."""
    settings = settings or Settings.from_env()
    schema = create_schema(settings.app_version)
    responder = get_responder(
        build_options(settings, schema),
        headers=lambda event: build_base_headers(
            event if isinstance(event, Mapping) else None,
            settings.cors_allowed_origins,
        ),
    )

    def handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
        set_request_context(req_id=_request_id(event, context))
        start_time = time.perf_counter()
        try:
            if isinstance(event, Mapping):
                log_lambda_event(logger, event)
            response = responder(event, context)
            log_response(
                logger,
                response["statusCode"],
                (time.perf_counter() - start_time) * 1000,
            )
            return response
        finally:
            clear_request_context()

    return handler


@lru_cache(maxsize=1)
def get_handler() -> Handler:
    """Return the handler for this container, building it on first use."""
    return create_handler()


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Handle an API Gateway request for the GraphQL endpoint."""
    return get_handler()(event, context)


def _request_id(event: Any, context: Any) -> str:
    request_id = getattr(context, "aws_request_id", "") or ""
    if not request_id and isinstance(event, Mapping):
        request_context = event.get("requestContext") or {}
        if isinstance(request_context, Mapping):
            request_id = request_context.get("requestId") or ""
    return str(request_id)
