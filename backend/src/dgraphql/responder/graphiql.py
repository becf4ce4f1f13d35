"""GraphiQL page rendering."""

from __future__ import annotations

import json
from string import Template
from typing import Any
from typing import Mapping

GRAPHIQL_VERSION = "3.0.9"

_PAGE = Template(
    """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>GraphiQL</title>
  <meta name="robots" content="noindex" />
  <style>
    html, body, #graphiql { height: 100%; margin: 0; overflow: hidden; width: 100%; }
  </style>
  <link href="https://unpkg.com/graphiql@$version/graphiql.min.css" rel="stylesheet" />
  <script src="https://unpkg.com/react@18/umd/react.production.min.js"></script>
  <script src="https://unpkg.com/react-dom@18/umd/react-dom.production.min.js"></script>
  <script src="https://unpkg.com/graphiql@$version/graphiql.min.js"></script>
</head>
<body>
  <div id="graphiql">Loading...</div>
  <script>
    var parameters = {};
    window.location.search.substr(1).split('&').forEach(function (entry) {
      var eq = entry.indexOf('=');
      if (eq >= 0) {
        parameters[decodeURIComponent(entry.slice(0, eq))] =
          decodeURIComponent(entry.slice(eq + 1));
      }
    });

    function updateURL() {
      var newSearch = '?' + Object.keys(parameters).filter(function (key) {
        return Boolean(parameters[key]);
      }).map(function (key) {
        return encodeURIComponent(key) + '=' + encodeURIComponent(parameters[key]);
      }).join('&');
      history.replaceState(null, null, newSearch);
    }

    function graphQLFetcher(graphQLParams) {
      return fetch(window.location.pathname, {
        method: 'post',
        headers: {
          'Accept': 'application/json',
          'Content-Type': 'application/json'
        },
        body: JSON.stringify(graphQLParams),
        credentials: 'include'
      }).then(function (response) {
        return response.json();
      });
    }

    function onEditQuery(newQuery) {
      parameters.query = newQuery;
      updateURL();
    }

    function onEditVariables(newVariables) {
      parameters.variables = newVariables;
      updateURL();
    }

    function onEditOperationName(newOperationName) {
      parameters.operationName = newOperationName;
      updateURL();
    }

    ReactDOM.render(
      React.createElement(GraphiQL, {
        fetcher: graphQLFetcher,
        onEditQuery: onEditQuery,
        onEditVariables: onEditVariables,
        onEditOperationName: onEditOperationName,
        query: $query,
        response: $result,
        variables: $variables,
        operationName: $operation_name
      }),
      document.getElementById('graphiql')
    );
  </script>
</body>
</html>
"""
)


def safe_serialize(value: Any) -> str:
    """Serialize a value for embedding inside an inline script.

    ``None`` becomes ``undefined`` so GraphiQL falls back to its defaults.
    """
    if value is None:
        return "undefined"
    return (
        json.dumps(value, default=str)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def render_graphiql(data: Mapping[str, Any]) -> str:
    """Render the GraphiQL page.

    Args:
        data: ``query``, ``variables``, ``operation_name`` and the formatted
            ``result`` (any may be None).

    Returns:
        The HTML page.
    """
    variables = data.get("variables")
    result = data.get("result")
    return _PAGE.substitute(
        version=GRAPHIQL_VERSION,
        query=safe_serialize(data.get("query")),
        variables=safe_serialize(
            json.dumps(variables, indent=2) if variables is not None else None
        ),
        result=safe_serialize(
            json.dumps(result, indent=2, default=str) if result is not None else None
        ),
        operation_name=safe_serialize(data.get("operation_name")),
    )
