"""GraphQL schema served by the Lambda function."""

from __future__ import annotations

from typing import Any

from graphql import GraphQLResolveInfo
from graphql import GraphQLSchema
from graphql import build_schema

SDL = """
type Query {
  "Greets the given name."
  hello(name: String = "world"): String
  "Deployed application version."
  version: String
}

type Mutation {
  "Returns the message unchanged."
  echo(message: String!): String
}
"""


def create_schema(app_version: str = "unknown") -> GraphQLSchema:
    """Build the schema and bind its resolvers.

    Args:
        app_version: Value reported by ``Query.version``.

    Returns:
        The executable schema.
    """
    schema = build_schema(SDL)

    def resolve_hello(_root: Any, _info: GraphQLResolveInfo, name: str) -> str:
        return f"Hello {name}"

    def resolve_version(_root: Any, _info: GraphQLResolveInfo) -> str:
        return app_version

    async def resolve_echo(_root: Any, _info: GraphQLResolveInfo, message: str) -> str:
        return message

    schema.query_type.fields["hello"].resolve = resolve_hello
    schema.query_type.fields["version"].resolve = resolve_version
    schema.mutation_type.fields["echo"].resolve = resolve_echo
    return schema
