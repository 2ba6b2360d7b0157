"""
Shared log-then-raise helpers for ARC scoring.

Storage and HTTP failures surface as ArcApiError (a RuntimeError);
bad input and missing configuration surface as ValueError. Every helper
logs through bt.logging.error first, with secrets redacted.
"""

import bittensor as bt
from typing import Any, Dict, Optional

SENSITIVE_KEYS = ('api_key', 'key', 'token', 'password', 'secret', 'service_role_key')
REDACTED = '***REDACTED***'
MAX_LOGGED_DATA_CHARS = 200


class ArcApiError(RuntimeError):
    """A Supabase or Twitter call failed."""

    def __init__(self, message: str, endpoint: str):
        super().__init__(message)
        self.endpoint = endpoint


def is_sensitive(key: Optional[str]) -> bool:
    lowered = str(key).lower()
    return any(lowered == s or lowered.endswith(f"_{s}") for s in SENSITIVE_KEYS)


def redact(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Copy of params without credential-like keys."""
    return {k: v for k, v in (params or {}).items() if not is_sensitive(k)}


def truncate_for_log(data: Any) -> Any:
    text = str(data)
    if data and len(text) > MAX_LOGGED_DATA_CHARS:
        return text[:MAX_LOGGED_DATA_CHARS] + "... (truncated)"
    return data


def log_and_raise_api_error(
    error: Exception,
    endpoint: str,
    params: Optional[Dict[str, Any]] = None,
    context: str = "API call"
) -> None:
    """
    Log a failed storage or HTTP call and raise ArcApiError.

    Args:
        error: The original exception
        endpoint: Table name or URL path that failed
        params: Filters or request parameters; credential keys are dropped
        context: What was being attempted, e.g. ErrorMessages.LOAD_ARENAS_FAILED

    Raises:
        ArcApiError: "<context> failed for <endpoint>: <error>"
    """
    bt.logging.error(
        f"{context} failed: {error}",
        extra={
            'endpoint': endpoint,
            'params': redact(params),
            'error_type': type(error).__name__
        }
    )
    raise ArcApiError(f"{context} failed for {endpoint}: {error}", endpoint) from error


def log_and_raise_validation_error(message: str, data: Optional[Dict[str, Any]] = None) -> None:
    """Log rejected input (truncated) and raise ValueError(message)."""
    bt.logging.error(
        f"Validation failed: {message}",
        extra={'validation_data': truncate_for_log(data)}
    )
    raise ValueError(message)


def log_and_raise_config_error(
    message: str,
    config_key: Optional[str] = None,
    config_value: Optional[str] = None
) -> None:
    """
    Log a configuration problem and raise ValueError naming the key.

    The value is redacted when the key looks like a credential.
    """
    logged_value = REDACTED if config_value and is_sensitive(config_key) else config_value
    bt.logging.error(
        f"Configuration error: {message}",
        extra={'config_key': config_key, 'config_value': logged_value}
    )
    raise ValueError(f"{message} (config_key: {config_key})")


class ErrorMessages:
    """Standard error messages for consistency."""

    # Storage
    LOAD_ARENAS_FAILED = "Loading active arenas"
    LOAD_CREATORS_FAILED = "Loading arena creators"
    UPDATE_POINTS_FAILED = "Updating arena creator points"
    CREATOR_NOT_FOUND = "Creator not found in this program"
    INTERNAL_ERROR = "Internal server error"

    # Validation
    NEGATIVE_POINTS = "ARC points to add must be non-negative"

    # Configuration
    MISSING_CONFIG = "Required configuration is missing"
    CREDENTIALS_MISSING = "Required credentials are missing"
