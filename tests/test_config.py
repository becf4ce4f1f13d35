"""Tests for environment settings."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from dgraphql.config import Settings, parse_bool, parse_origins


class TestParseBool:
    """Tests for parse_bool function."""

    @pytest.mark.parametrize('value', ['1', 'true', 'TRUE', 'yes', ' on '])
    def test_true_values(self, value) -> None:
        assert parse_bool(value) is True

    @pytest.mark.parametrize('value', ['0', 'false', 'no', 'off', 'maybe'])
    def test_false_values(self, value) -> None:
        assert parse_bool(value, default=True) is False

    def test_default_for_unset(self) -> None:
        assert parse_bool(None, default=True) is True
        assert parse_bool('  ', default=True) is True


class TestParseOrigins:
    """Tests for parse_origins function."""

    def test_empty(self) -> None:
        assert parse_origins(None) == ()
        assert parse_origins('') == ()

    def test_splits_and_strips(self) -> None:
        assert parse_origins(' https://a.example , ,https://b.example') == (
            'https://a.example',
            'https://b.example',
        )


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, monkeypatch) -> None:
        for name in (
            'LOG_LEVEL',
            'GRAPHIQL_ENABLED',
            'PRETTY_JSON',
            'DGRAPH',
            'CORS_ALLOWED_ORIGINS',
            'APP_VERSION',
        ):
            monkeypatch.delenv(name, raising=False)
        assert Settings.from_env() == Settings()

    def test_reads_environment(self, monkeypatch) -> None:
        monkeypatch.setenv('LOG_LEVEL', 'DEBUG')
        monkeypatch.setenv('GRAPHIQL_ENABLED', 'false')
        monkeypatch.setenv('PRETTY_JSON', 'true')
        monkeypatch.setenv('DGRAPH', '10.0.0.5')
        monkeypatch.setenv('CORS_ALLOWED_ORIGINS', 'https://app.example')
        monkeypatch.setenv('APP_VERSION', '1.2.3')
        settings = Settings.from_env()
        assert settings.log_level == 'DEBUG'
        assert settings.graphiql_enabled is False
        assert settings.pretty_json is True
        assert settings.dgraph_host == '10.0.0.5'
        assert settings.cors_allowed_origins == ('https://app.example',)
        assert settings.app_version == '1.2.3'
