"""Tests for the GraphiQL page renderer."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from dgraphql.responder.graphiql import render_graphiql, safe_serialize


class TestSafeSerialize:
    """Tests for safe_serialize function."""

    def test_none_is_undefined(self) -> None:
        assert safe_serialize(None) == 'undefined'

    def test_escapes_script_breakout(self) -> None:
        serialized = safe_serialize('</script><script>alert(1)</script>')
        assert '</script>' not in serialized
        assert '\\u003c/script\\u003e' in serialized


class TestRenderGraphiQL:
    """Tests for render_graphiql function."""

    def test_renders_empty_page(self) -> None:
        page = render_graphiql(
            {'query': None, 'variables': None, 'operation_name': None, 'result': None}
        )
        assert page.startswith('<!DOCTYPE html>')
        assert 'query: undefined' in page
        assert 'response: undefined' in page

    def test_embeds_query_and_result(self) -> None:
        page = render_graphiql(
            {
                'query': '{ hello }',
                'variables': {'name': 'Ada'},
                'operation_name': 'Greet',
                'result': {'data': {'hello': 'Hello Ada'}},
            }
        )
        assert 'query: "{ hello }"' in page
        assert 'operationName: "Greet"' in page
        assert 'Hello Ada' in page
        assert '\\"name\\": \\"Ada\\"' in page
