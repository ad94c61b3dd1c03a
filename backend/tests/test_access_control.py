"""
Tests for the authentication and authorization gates on protected routes.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient, ASGITransport

from backend.app.main import app
from backend.app.core.jwt import create_officer_token, create_access_token
from backend.app.services import officers as officer_service
from conftest import API, bearer


VEHICLE = {
    "name": "Van-05",
    "model": "Transit",
    "license_plate": "ab-1234",
    "max_capacity": 500,
    "acquisition_cost": 20000,
}


@pytest.mark.asyncio
async def test_missing_header_is_401(client):
    response = await client.get(f"{API}/vehicles")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "ERR_AUTH_MISSING"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["Basic dXNlcjpwYXNz", "Bearer", "Token abc"])
async def test_non_bearer_header_is_401(client, header):
    response = await client.get(f"{API}/vehicles", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json()["error_code"] == "ERR_AUTH_MISSING"


@pytest.mark.asyncio
async def test_garbage_token_is_403(client):
    response = await client.get(f"{API}/vehicles", headers=bearer("garbage"))

    assert response.status_code == 403
    assert response.json()["error_code"] == "ERR_AUTH_INVALID"


@pytest.mark.asyncio
async def test_expired_token_is_403(client):
    token = create_officer_token(1, "fleet_manager", expires_delta=timedelta(seconds=-1))

    response = await client.get(f"{API}/vehicles", headers=bearer(token))

    assert response.status_code == 403
    assert response.json()["error_code"] == "ERR_AUTH_INVALID"


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_is_403(client):
    token = create_officer_token(1, "fleet_manager", secret="someone-elses-secret")

    response = await client.get(f"{API}/vehicles", headers=bearer(token))

    assert response.status_code == 403
    assert response.json()["error_code"] == "ERR_AUTH_INVALID"


@pytest.mark.asyncio
async def test_dispatcher_cannot_create_vehicle(client, signup_and_login):
    _, token = await signup_and_login("dispatcher")

    response = await client.post(f"{API}/vehicles", json=VEHICLE, headers=bearer(token))

    assert response.status_code == 403
    body = response.json()
    assert body["error_code"] == "ERR_FORBIDDEN"
    assert body["message"] == "Access denied: Insufficient permissions"
    assert "create_vehicle" not in response.text


@pytest.mark.asyncio
async def test_fleet_manager_can_create_vehicle(client, signup_and_login):
    _, token = await signup_and_login("fleet_manager")

    response = await client.post(f"{API}/vehicles", json=VEHICLE, headers=bearer(token))

    assert response.status_code == 201
    vehicle = response.json()["data"]["vehicle"]
    assert vehicle["license_plate"] == "AB-1234"
    assert vehicle["status"] == "Available"


@pytest.mark.asyncio
async def test_authentication_checked_before_permission(client):
    response = await client.post(f"{API}/vehicles", json=VEHICLE)
    assert response.status_code == 401

    response = await client.post(f"{API}/vehicles", json=VEHICLE, headers=bearer("garbage"))
    assert response.status_code == 403
    assert response.json()["error_code"] == "ERR_AUTH_INVALID"


@pytest.mark.asyncio
@pytest.mark.parametrize("role, path, expected", [
    ("dispatcher", "/vehicles", 200),
    ("dispatcher", "/trips", 200),
    ("dispatcher", "/fuel-logs", 403),
    ("dispatcher", "/analytics/operational", 403),
    ("safety_officer", "/maintenance-logs", 200),
    ("safety_officer", "/trips", 403),
    ("financial_analyst", "/fuel-logs", 200),
    ("financial_analyst", "/analytics/operational", 200),
    ("financial_analyst", "/drivers", 403),
    ("fleet_manager", "/analytics/dashboard", 200),
])
async def test_read_routes_follow_permission_table(client, signup_and_login, role, path, expected):
    _, token = await signup_and_login(role)

    response = await client.get(f"{API}{path}", headers=bearer(token))

    assert response.status_code == expected


@pytest.mark.asyncio
async def test_unknown_role_token_is_authenticated_but_denied(client):
    token = create_access_token({"sub": "9", "id": 9, "role": "night_shift_lead"})

    response = await client.get(f"{API}/vehicles", headers=bearer(token))
    assert response.status_code == 403
    assert response.json()["error_code"] == "ERR_FORBIDDEN"

    response = await client.get(f"{API}/auth/me/permissions", headers=bearer(token))
    assert response.status_code == 200
    assert response.json()["data"]["permissions"] == []
    assert response.json()["data"]["label"] == "Night Shift Lead"


@pytest.mark.asyncio
async def test_token_for_deleted_officer_is_404_on_me(client):
    token = create_officer_token(12345, "dispatcher")

    response = await client.get(f"{API}/auth/me", headers=bearer(token))

    assert response.status_code == 404
    assert response.json()["error_code"] == "ERR_NOT_FOUND_001"


@pytest.mark.asyncio
async def test_unexpected_error_is_generic_500(signup_and_login, monkeypatch):
    _, token = await signup_and_login("dispatcher")

    async def broken(db, officer_id):
        raise RuntimeError("connection string postgres://secret@db")

    monkeypatch.setattr(officer_service, "get_officer_by_id", broken)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get(f"{API}/auth/me", headers=bearer(token))

    assert response.status_code == 500
    body = response.json()
    assert body["error_code"] == "ERR_INTERNAL_SERVER"
    assert "secret" not in response.text
    assert "RuntimeError" not in response.text


@pytest.mark.asyncio
async def test_health_is_public(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
