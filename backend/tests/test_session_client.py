"""
Tests for the client-side session context and API client.
"""

import json
import time
from datetime import timedelta

import httpx
import pytest
from httpx import ASGITransport

from backend.app.main import app
from backend.app.core.jwt import create_officer_token
from backend.app.core.permissions import get_role_permissions
from backend.client.api import FleetApiClient
from backend.client.errors import AccessDeniedError, ApiError, LoginFailedError, NotAuthenticatedError, SessionExpiredError
from backend.client.session import FileTokenStore, MemoryTokenStore, SessionContext, StoredSession


@pytest.fixture
async def api():
    session = SessionContext(MemoryTokenStore())
    async with FleetApiClient("http://test/api/v1", session, transport=ASGITransport(app=app)) as client:
        yield client


# ---------------------------------------------------------------------------
# SessionContext
# ---------------------------------------------------------------------------

def test_anonymous_session_has_no_permissions():
    ctx = SessionContext()
    assert ctx.initialize() is False
    assert ctx.is_authenticated is False
    assert ctx.role is None
    assert ctx.role_label == "User"
    assert ctx.has_permission("view_dashboard") is False
    assert ctx.has_all_permissions([]) is False
    assert ctx.navigation_items() == []


def test_establish_reads_role_from_token():
    ctx = SessionContext()
    token = create_officer_token(4, "financial_analyst")

    ctx.establish(token, {"id": 4, "fullName": "Fin Ance", "role": "financial_analyst"})

    assert ctx.is_authenticated
    assert ctx.role == "financial_analyst"
    assert ctx.role_label == "Financial Analyst"
    assert ctx.role_color.startswith("bg-purple-100")
    assert ctx.user["fullName"] == "Fin Ance"
    assert ctx.has_permission("calculate_roi")
    assert not ctx.has_permission("create_trip")
    assert ctx.has_any_permission(["create_trip", "view_analytics"])
    assert not ctx.is_admin
    assert [item.label for item in ctx.navigation_items()][-1] == "Analytics"


def test_establish_rejects_expired_token_and_keeps_state():
    ctx = SessionContext()
    ctx.establish(create_officer_token(1, "dispatcher"))

    with pytest.raises(ValueError):
        ctx.establish(create_officer_token(2, "fleet_manager", expires_delta=timedelta(seconds=-1)))

    assert ctx.role == "dispatcher"


def test_clear_returns_to_anonymous():
    store = MemoryTokenStore()
    ctx = SessionContext(store)
    ctx.establish(create_officer_token(1, "fleet_manager"))
    assert ctx.is_admin

    ctx.clear()

    assert ctx.is_authenticated is False
    assert ctx.has_permission("view_dashboard") is False
    assert store.load() is None


def test_initialize_restores_from_file(tmp_path):
    path = tmp_path / "session.json"
    token = create_officer_token(7, "safety_officer")
    FileTokenStore(path).save(StoredSession(token=token, user={"id": 7}))

    ctx = SessionContext(FileTokenStore(path))

    assert ctx.initialize() is True
    assert ctx.role == "safety_officer"
    assert ctx.user == {"id": 7}
    assert ctx.has_permission("manage_safety_scores")


def test_initialize_drops_expired_stored_token(tmp_path):
    path = tmp_path / "session.json"
    token = create_officer_token(7, "safety_officer")
    FileTokenStore(path).save(StoredSession(token=token))

    later = time.time() + 9 * 60 * 60
    ctx = SessionContext(FileTokenStore(path), clock=lambda: later)

    assert ctx.initialize() is False
    assert ctx.is_authenticated is False
    assert not path.exists()


@pytest.mark.parametrize("content", ["not json", json.dumps({"user": {}}), json.dumps(["token"])])
def test_unreadable_session_file_is_ignored(tmp_path, content):
    path = tmp_path / "session.json"
    path.write_text(content, encoding="utf-8")

    assert FileTokenStore(path).load() is None
    assert SessionContext(FileTokenStore(path)).initialize() is False


def test_garbage_stored_token_is_discarded():
    store = MemoryTokenStore(StoredSession(token="garbage"))
    ctx = SessionContext(store)

    assert ctx.initialize() is False
    assert store.load() is None


# ---------------------------------------------------------------------------
# FleetApiClient
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_client_signup_login_and_gate(api):
    officer = await api.signup("Dee Spatch", "dee@fleet.io", "secret1", "dispatcher")
    assert officer["role"] == "dispatcher"
    assert api.session.is_authenticated is False

    user = await api.login("dee@fleet.io", "secret1")

    assert user["id"] == officer["id"]
    assert api.session.role == "dispatcher"
    assert api.can("create_trip")
    assert not api.can("create_vehicle")

    me = await api.me()
    assert me["email"] == "dee@fleet.io"

    server_view = await api.permissions()
    assert set(server_view["permissions"]) == {p.value for p in get_role_permissions(api.session.role)}


@pytest.mark.asyncio
async def test_client_login_failure(api):
    await api.signup("Dee Spatch", "dee@fleet.io", "secret1", "dispatcher")

    with pytest.raises(LoginFailedError) as excinfo:
        await api.login("dee@fleet.io", "wrong12")

    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Invalid email or password"
    assert api.session.is_authenticated is False


@pytest.mark.asyncio
async def test_client_forbidden_keeps_session(api):
    await api.signup("Dee Spatch", "dee@fleet.io", "secret1", "dispatcher")
    await api.login("dee@fleet.io", "secret1")

    with pytest.raises(AccessDeniedError) as excinfo:
        await api.post("/vehicles", json={"name": "Van-01", "license_plate": "V1", "max_capacity": 100})

    assert excinfo.value.error_code == "ERR_FORBIDDEN"
    assert api.session.is_authenticated is True


@pytest.mark.asyncio
async def test_client_without_session_is_not_authenticated(api):
    with pytest.raises(NotAuthenticatedError):
        await api.get("/vehicles")


@pytest.mark.asyncio
async def test_client_rejected_token_clears_session(api):
    api.session.establish(create_officer_token(1, "fleet_manager", secret="not-the-server-secret"))
    assert api.session.is_admin

    with pytest.raises(SessionExpiredError):
        await api.get("/vehicles")

    assert api.session.is_authenticated is False
    assert api.can("view_vehicles") is False


@pytest.mark.asyncio
async def test_client_logout(api):
    await api.signup("Fleet Boss", "boss@fleet.io", "secret1", "fleet_manager")
    await api.login("boss@fleet.io", "secret1")

    vehicle = (await api.post("/vehicles", json={
        "name": "Van-01", "license_plate": "V1", "max_capacity": 100
    }))["vehicle"]
    assert vehicle["license_plate"] == "V1"

    api.logout()

    assert api.session.token is None
    with pytest.raises(NotAuthenticatedError):
        await api.get(f"/vehicles/{vehicle['id']}")


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [["bad gateway"], "bad gateway", None])
async def test_client_non_object_error_body(payload):
    def handler(request):
        return httpx.Response(502, json=payload)

    session = SessionContext()
    async with FleetApiClient("http://test/api/v1", session, transport=httpx.MockTransport(handler)) as api:
        with pytest.raises(ApiError) as excinfo:
            await api.get("/vehicles")

    assert excinfo.value.status_code == 502
    assert excinfo.value.error_code == "ERR_UNKNOWN"
    assert excinfo.value.message == "Bad Gateway"
