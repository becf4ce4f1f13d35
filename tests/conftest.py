"""Pytest configuration and fixtures for responder tests.

This module provides shared fixtures for testing the GraphQL responder,
including a test schema, API Gateway events and a Lambda context stub.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any
from typing import Optional
from uuid import uuid4

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))


TEST_SDL = '''
type Query {
  hello(name: String = "world"): String
  broken: String!
  contextName: String
}

type Mutation {
  echo(message: String!): String
}
'''


# --- Schema Fixtures ---


def build_test_schema():
    """Build a schema with sync, async and failing resolvers."""
    from graphql import build_schema

    schema = build_schema(TEST_SDL)

    def resolve_hello(_root, _info, name):
        return f'Hello {name}'

    def resolve_broken(_root, _info):
        raise RuntimeError('resolver exploded')

    def resolve_context_name(_root, info):
        if isinstance(info.context, dict):
            return info.context.get('name')
        return getattr(info.context, 'function_name', None)

    async def resolve_echo(_root, _info, message):
        return message

    schema.query_type.fields['hello'].resolve = resolve_hello
    schema.query_type.fields['broken'].resolve = resolve_broken
    schema.query_type.fields['contextName'].resolve = resolve_context_name
    schema.mutation_type.fields['echo'].resolve = resolve_echo
    return schema


@pytest.fixture(scope='session')
def schema():
    """The shared test schema."""
    return build_test_schema()


# --- API Event Fixtures ---


@pytest.fixture
def api_gateway_event() -> dict:
    """Base API Gateway event structure."""
    return {
        'httpMethod': 'GET',
        'path': '/',
        'queryStringParameters': {},
        'multiValueQueryStringParameters': {},
        'headers': {},
        'requestContext': {
            'requestId': str(uuid4()),
        },
        'body': None,
        'isBase64Encoded': False,
    }


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    """Minimal stand-in for the Lambda context object."""
    return SimpleNamespace(
        function_name='graphql',
        aws_request_id=str(uuid4()),
    )


# --- Utility Functions ---


def build_event(
    method: str = 'GET',
    query: Optional[dict[str, Any]] = None,
    body: Optional[Any] = None,
    headers: Optional[dict[str, str]] = None,
) -> dict:
    """Create an API Gateway event; dict bodies are JSON encoded."""
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {
        'httpMethod': method,
        'path': '/',
        'queryStringParameters': query,
        'headers': headers,
        'requestContext': {'requestId': 'req-1'},
        'body': body,
        'isBase64Encoded': False,
    }


@pytest.fixture
def make_event():
    """Factory fixture for API Gateway events."""
    return build_event
