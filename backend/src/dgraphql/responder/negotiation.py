"""Content negotiation between JSON results and the GraphiQL page."""

from __future__ import annotations

from typing import Optional

from werkzeug.datastructures import MIMEAccept
from werkzeug.http import parse_accept_header

from dgraphql.events import InboundEvent
from dgraphql.responder.params import GraphQLParams

JSON_TYPE = "application/json"
HTML_TYPE = "text/html"

# Server order only breaks ties the client leaves open; JSON first.
_OFFERED_TYPES = (JSON_TYPE, HTML_TYPE)


def preferred_type(accept: str) -> Optional[str]:
    """Return the offered media type the client prefers, if any.

    Types are ranked by quality, then by where the client lists the
    matching entry (werkzeug keeps more specific ranges ahead of
    wildcards), then by server order.

    Args:
        accept: The raw ``Accept`` header value.

    Returns:
        ``application/json`` or ``text/html``, or None when the header is
        empty or accepts neither.
    """
    if not accept:
        return None
    accepted = parse_accept_header(accept, MIMEAccept)
    ranked = []
    for offered_index, offered in enumerate(_OFFERED_TYPES):
        quality = accepted.quality(offered)
        if quality > 0:
            ranked.append((-quality, accepted.find(offered), offered_index, offered))
    return min(ranked)[-1] if ranked else None


def can_display_graphiql(
    event: InboundEvent,
    params: GraphQLParams,
    graphiql_enabled: bool,
) -> bool:
    """Return True if GraphiQL should be served instead of JSON.

    GraphiQL is shown only when it is enabled, the request is not marked
    ``raw``, and the client prefers HTML over JSON.
    """
    if not graphiql_enabled or params.raw:
        return False
    return preferred_type(event.header("accept")) == HTML_TYPE
