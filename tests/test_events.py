"""Tests for the inbound event model."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from dgraphql.events import InboundEvent
from dgraphql.exceptions import ValidationError


class TestInboundEvent:
    """Tests for InboundEvent.from_event."""

    def test_reads_proxy_event(self, api_gateway_event) -> None:
        api_gateway_event['queryStringParameters'] = {'query': '{ hello }'}
        event = InboundEvent.from_event(api_gateway_event)
        assert event.http_method == 'GET'
        assert event.query_string_parameters == {'query': '{ hello }'}
        assert event.request_id == api_gateway_event['requestContext']['requestId']

    def test_none_values_become_empty(self) -> None:
        event = InboundEvent.from_event(
            {
                'httpMethod': None,
                'queryStringParameters': None,
                'headers': None,
                'body': None,
            }
        )
        assert event.http_method == ''
        assert event.query_string_parameters == {}
        assert event.headers == {}
        assert event.body == ''

    def test_header_names_are_lower_cased(self) -> None:
        event = InboundEvent.from_event({'headers': {'Accept': 'text/html'}})
        assert event.headers == {'accept': 'text/html'}
        assert event.header('ACCEPT') == 'text/html'

    def test_missing_header_returns_default(self) -> None:
        event = InboundEvent.from_event({})
        assert event.header('accept') == ''

    def test_is_immutable(self) -> None:
        event = InboundEvent.from_event({'httpMethod': 'GET'})
        with pytest.raises(Exception):
            event.http_method = 'POST'

    def test_returns_existing_instance(self) -> None:
        event = InboundEvent.from_event({'httpMethod': 'GET'})
        assert InboundEvent.from_event(event) is event

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            InboundEvent.from_event(['not', 'an', 'event'])
        assert exc_info.value.status_code == 400

    def test_rejects_malformed_headers(self) -> None:
        with pytest.raises(ValidationError):
            InboundEvent.from_event({'headers': ['accept']})
