"""Tests for custom exception classes."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from dgraphql.exceptions import (
    AppError,
    ConfigurationError,
    ValidationError,
)


class TestAppError:
    """Tests for base AppError class."""

    def test_default_status_code(self) -> None:
        error = AppError('Something went wrong')
        assert error.status_code == 500
        assert error.message == 'Something went wrong'

    def test_custom_status_code(self) -> None:
        error = AppError('Bad request', status_code=400)
        assert error.status_code == 400

    def test_to_dict_without_detail(self) -> None:
        error = AppError('Error message')
        assert error.to_dict() == {'error': 'Error message'}

    def test_to_dict_with_detail(self) -> None:
        error = AppError('Error', detail='Additional info')
        result = error.to_dict()
        assert result['error'] == 'Error'
        assert result['detail'] == 'Additional info'


class TestValidationError:
    """Tests for ValidationError class."""

    def test_status_code_is_400(self) -> None:
        error = ValidationError('Invalid input')
        assert error.status_code == 400

    def test_includes_field_in_detail(self) -> None:
        error = ValidationError('Invalid value', field='headers')
        assert error.field == 'headers'
        assert 'headers' in error.detail


class TestConfigurationError:
    """Tests for ConfigurationError class."""

    def test_status_code_is_500(self) -> None:
        error = ConfigurationError('No schema')
        assert error.status_code == 500

    def test_is_app_error(self) -> None:
        assert isinstance(ConfigurationError('No schema'), AppError)

    def test_keeps_detail(self) -> None:
        error = ConfigurationError('No schema', detail='options function')
        assert error.to_dict() == {'error': 'No schema', 'detail': 'options function'}
