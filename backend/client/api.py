"""
HTTP client for the Fleet Manager API.

Wraps httpx.AsyncClient, attaches the session's bearer token and turns
error envelopes into typed exceptions. A rejected token clears the session
so the caller knows to log in again.
"""

import logging
from typing import Any, Dict, Optional, Union

import httpx

from backend.app.core.permissions import PermissionLike
from backend.app.models.enums import OfficerRole
from backend.client.errors import (
    ApiError,
    AccessDeniedError,
    LoginFailedError,
    NotAuthenticatedError,
    SessionExpiredError,
)
from backend.client.session import SessionContext

logger = logging.getLogger("fleet.client")


class FleetApiClient:
    """
    Usage:
        session = SessionContext(FileTokenStore("~/.fleet/session.json"))
        session.initialize()
        async with FleetApiClient("http://localhost:8000/api/v1", session) as api:
            if not session.is_authenticated:
                await api.login("a@fleet.io", "secret1")
            if api.can("create_trip"):
                await api.post("/trips", json={...})
    """

    def __init__(
        self,
        base_url: str,
        session: SessionContext,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.session = session
        self._http = httpx.AsyncClient(base_url=base_url.rstrip("/"), transport=transport, timeout=timeout)

    async def __aenter__(self) -> "FleetApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -- auth --------------------------------------------------------------

    async def signup(
        self, full_name: str, email: str, password: str, role: Union[OfficerRole, str]
    ) -> Dict[str, Any]:
        """Register an officer. Does not log in."""
        role_value = role.value if isinstance(role, OfficerRole) else role
        data = await self._send(
            "POST",
            "/auth/signup",
            json={"fullName": full_name, "email": email, "password": password, "role": role_value},
            authenticated=False,
        )
        return data["officer"]

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Authenticate and replace the session with the new identity.

        Raises:
            LoginFailedError: unknown email or wrong password
        """
        try:
            data = await self._send(
                "POST", "/auth/login", json={"email": email, "password": password}, authenticated=False
            )
        except NotAuthenticatedError as exc:
            raise LoginFailedError(exc.status_code, exc.error_code, exc.message, exc.details) from exc

        self.session.establish(data["token"], data["user"])
        logger.info("Logged in as officer %s (%s)", data["user"].get("id"), self.session.role)
        return data["user"]

    def logout(self) -> None:
        self.session.clear()

    def can(self, permission: PermissionLike) -> bool:
        """UI-side check. The server still enforces every request."""
        return self.session.has_permission(permission)

    async def me(self) -> Dict[str, Any]:
        return await self.get("/auth/me")

    async def permissions(self) -> Dict[str, Any]:
        return await self.get("/auth/me/permissions")

    # -- verbs -------------------------------------------------------------

    async def get(self, path: str, **kwargs) -> Any:
        return await self._send("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> Any:
        return await self._send("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> Any:
        return await self._send("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs) -> Any:
        return await self._send("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs) -> Any:
        return await self._send("DELETE", path, **kwargs)

    # -- plumbing ----------------------------------------------------------

    async def _send(self, method: str, path: str, authenticated: bool = True, **kwargs) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        if authenticated and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        response = await self._http.request(method, path, headers=headers, **kwargs)

        if response.is_success:
            return response.json().get("data")

        raise self._to_error(response)

    def _to_error(self, response: httpx.Response) -> ApiError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        error_code = body.get("error_code", "ERR_UNKNOWN")
        message = body.get("message") or response.reason_phrase
        details = body.get("details") or {}
        status_code = response.status_code

        if status_code == 401:
            return NotAuthenticatedError(status_code, error_code, message, details)

        if status_code == 403 and error_code == "ERR_AUTH_INVALID":
            # Token expired or forged: drop it so the caller re-authenticates
            logger.info("Session rejected by server, clearing local session")
            self.session.clear()
            return SessionExpiredError(status_code, error_code, message, details)

        if status_code == 403:
            return AccessDeniedError(status_code, error_code, message, details)

        return ApiError(status_code, error_code, message, details)
