"""
Client-side errors raised by FleetApiClient.

Each maps to one error_code family the server returns.
"""

from typing import Any, Dict, Optional


class ApiError(Exception):
    """Any non-2xx response from the backend."""

    def __init__(self, status_code: int, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(f"{status_code} {error_code}: {message}")


class LoginFailedError(ApiError):
    """Wrong email or password. The server does not say which."""


class NotAuthenticatedError(ApiError):
    """No credential was sent (401)."""


class SessionExpiredError(ApiError):
    """The stored token was rejected (403 ERR_AUTH_INVALID). The session has been cleared."""


class AccessDeniedError(ApiError):
    """Authenticated, but the role lacks the permission (403 ERR_FORBIDDEN)."""
