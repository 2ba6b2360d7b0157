"""Tests for error handling utilities."""

import pytest
from unittest.mock import patch
import bittensor as bt

from arc.utils.error_handling import (
    log_and_raise_api_error,
    log_and_raise_validation_error,
    log_and_raise_config_error,
    redact,
    ArcApiError,
    ErrorMessages
)


def test_log_and_raise_api_error():
    """log_and_raise_api_error raises RuntimeError with context"""
    with pytest.raises(RuntimeError) as exc_info:
        log_and_raise_api_error(
            Exception("Connection timeout"),
            endpoint="arena_creators",
            context=ErrorMessages.LOAD_CREATORS_FAILED
        )

    error = str(exc_info.value)
    assert error == "Loading arena creators failed for arena_creators: Connection timeout"


def test_log_and_raise_api_error_sanitizes_params():
    """API error handler drops sensitive parameters from the log"""
    with patch.object(bt.logging, 'error') as mock_error:
        with pytest.raises(RuntimeError):
            log_and_raise_api_error(
                Exception("Auth failed"),
                endpoint="user/tweets",
                params={'api_key': 'secret123', 'limit': 100},
                context="Auth test"
            )

    logged_params = mock_error.call_args.kwargs['extra']['params']
    assert logged_params == {'limit': 100}


def test_log_and_raise_validation_error():
    """log_and_raise_validation_error raises ValueError with the message"""
    with pytest.raises(ValueError) as exc_info:
        log_and_raise_validation_error(
            ErrorMessages.NEGATIVE_POINTS,
            data={'points': -5}
        )

    assert str(exc_info.value) == "ARC points to add must be non-negative"


def test_log_and_raise_validation_error_truncates_large_data():
    """Validation error handler truncates large data for logging"""
    with patch.object(bt.logging, 'error') as mock_error:
        with pytest.raises(ValueError):
            log_and_raise_validation_error("Data too large", data={'data': 'x' * 1000})

    logged = mock_error.call_args.kwargs['extra']['validation_data']
    assert logged.endswith("... (truncated)")
    assert len(logged) < 250


def test_log_and_raise_config_error():
    """Config error handler includes the key and redacts secret values"""
    with patch.object(bt.logging, 'error') as mock_error:
        with pytest.raises(ValueError) as exc_info:
            log_and_raise_config_error(
                ErrorMessages.CREDENTIALS_MISSING,
                config_key="RAPID_API_KEY",
                config_value="abc123"
            )

    assert "config_key: RAPID_API_KEY" in str(exc_info.value)
    assert mock_error.call_args.kwargs['extra']['config_value'] == '***REDACTED***'


def test_api_error_carries_endpoint_and_cause():
    """ArcApiError is a RuntimeError that remembers the failing endpoint"""
    cause = Exception("boom")
    with pytest.raises(ArcApiError) as exc_info:
        log_and_raise_api_error(cause, endpoint="arenas")

    assert isinstance(exc_info.value, RuntimeError)
    assert exc_info.value.endpoint == "arenas"
    assert exc_info.value.__cause__ is cause


def test_redact_drops_credentials():
    params = {'api_key': 'x', 'SUPABASE_SERVICE_ROLE_KEY': 'y', 'arena_id': 'a1', 'limit': 40}
    assert redact(params) == {'arena_id': 'a1', 'limit': 40}
    assert redact(None) == {}
