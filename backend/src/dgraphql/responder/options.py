"""Responder options and their per-request resolution.

Options can be given as an ``OptionsData``, a mapping, an awaitable of
either, or a callable ``(event, lambda_context, params)`` returning any
of those.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Mapping
from typing import Optional
from typing import Sequence
from typing import Union

from graphql import ASTValidationRule
from graphql import DocumentNode
from graphql import GraphQLError
from graphql import GraphQLSchema
from graphql import specified_rules

from dgraphql.events import InboundEvent
from dgraphql.exceptions import ConfigurationError
from dgraphql.responder.params import GraphQLParams

# Accepted option names, including the camelCase spellings of the JS ecosystem.
_OPTION_ALIASES = {
    "rootValue": "root_value",
    "formatError": "format_error",
    "validationRules": "validation_rules",
    "renderGraphiQL": "render_graphiql",
}


@dataclass
class RequestInfo:
    """Everything known about a request when extensions are computed."""

    document: DocumentNode
    variables: Optional[Any]
    operation_name: Optional[str]
    result: Optional[dict[str, Any]]


@dataclass
class OptionsData:
    """Configuration for one GraphQL request.

    Attributes:
        schema: The GraphQL schema to execute against.
        context: Value passed as the execution context. Defaults to the
            Lambda context object when None.
        root_value: Root value passed to top-level resolvers.
        pretty: Pretty-print JSON responses.
        format_error: Formats each error of the response. Defaults to
            ``GraphQLError.formatted``.
        validation_rules: Rules applied in addition to ``specified_rules``.
        extensions: Called with a ``RequestInfo``; a mapping it returns (or
            resolves to) is added as the response ``extensions``.
        graphiql: Serve GraphiQL to clients that prefer HTML.
        render_graphiql: Replaces the bundled GraphiQL page renderer.
    """

    schema: GraphQLSchema
    context: Any = None
    root_value: Any = None
    pretty: bool = False
    format_error: Optional[Callable[[Exception], Any]] = None
    validation_rules: Sequence[type[ASTValidationRule]] = field(default_factory=tuple)
    extensions: Optional[Callable[[RequestInfo], Any]] = None
    graphiql: bool = False
    render_graphiql: Optional[Callable[[Mapping[str, Any]], str]] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OptionsData":
        """Build options from a mapping, ignoring unknown keys."""
        known = {f for f in cls.__dataclass_fields__}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in known:
                values[name] = value
        values.setdefault("schema", None)
        return cls(**values)

    @property
    def rules(self) -> list[type[ASTValidationRule]]:
        """The specified rules followed by any additional rules."""
        rules = list(specified_rules)
        if self.validation_rules:
            rules.extend(self.validation_rules)
        return rules


OptionsResult = Union[OptionsData, Mapping[str, Any], Awaitable[Any]]
Options = Union[
    Callable[[InboundEvent, Any, GraphQLParams], OptionsResult],
    OptionsResult,
]


async def resolve_options(
    options: Options,
    event: InboundEvent,
    lambda_context: Any,
    params: GraphQLParams,
) -> OptionsData:
    """Resolve the configured options for one request.

    Args:
        options: The options given to the responder.
        event: The inbound event.
        lambda_context: The Lambda context object.
        params: Parameters extracted from the request.

    Returns:
        The concrete options for this request.

    Raises:
        ConfigurationError: If the options are not an options object or
            lack a schema.
    """
    value: Any = options
    if callable(value):
        value = value(event, lambda_context, params)
    if inspect.isawaitable(value):
        value = await value

    if isinstance(value, Mapping):
        value = OptionsData.from_mapping(value)
    if not isinstance(value, OptionsData):
        raise ConfigurationError(
            "GraphQL middleware option function must return an options object "
            "or a promise which will be resolved to an options object."
        )
    if not isinstance(value.schema, GraphQLSchema):
        raise ConfigurationError("GraphQL middleware options must contain a schema.")
    return value


def default_format_error(error: Exception) -> dict[str, Any]:
    """Format an error the way GraphQL responses expect."""
    if not isinstance(error, GraphQLError):
        error = GraphQLError(str(error), original_error=error)
    return error.formatted
