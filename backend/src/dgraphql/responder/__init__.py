"""Answer API Gateway proxy events with GraphQL results or GraphiQL."""

from dgraphql.responder.graphiql import render_graphiql
from dgraphql.responder.negotiation import can_display_graphiql
from dgraphql.responder.options import OptionsData
from dgraphql.responder.options import RequestInfo
from dgraphql.responder.options import default_format_error
from dgraphql.responder.options import resolve_options
from dgraphql.responder.params import GraphQLParams
from dgraphql.responder.params import get_graphql_params
from dgraphql.responder.params import parse_graphql_params
from dgraphql.responder.pipeline import get_async_responder
from dgraphql.responder.pipeline import get_responder

__all__ = [
    "GraphQLParams",
    "OptionsData",
    "RequestInfo",
    "can_display_graphiql",
    "default_format_error",
    "get_async_responder",
    "get_graphql_params",
    "get_responder",
    "parse_graphql_params",
    "render_graphiql",
    "resolve_options",
]
