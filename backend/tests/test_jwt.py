"""
Unit tests for session token issuance and verification.
"""

import time
from datetime import timedelta

import pytest
from jose import jwt as jose_jwt

from backend.app.core.config import settings
from backend.app.core.jwt import (
    TokenStatus,
    create_access_token,
    create_officer_token,
    decode_access_token,
    read_unverified_claims,
    verify_access_token,
)
from backend.app.core.permissions import get_role_permissions


@pytest.mark.parametrize("officer_id, role", [
    (1, "fleet_manager"),
    (42, "dispatcher"),
    (7, "safety_officer"),
    (99999, "financial_analyst"),
])
def test_round_trip_returns_input_claims(officer_id, role):
    token = create_officer_token(officer_id, role)
    result = verify_access_token(token)

    assert result.status == TokenStatus.VALID
    assert result.claims.id == officer_id
    assert result.claims.role == role


def test_default_lifetime_is_eight_hours():
    token = create_officer_token(1, "dispatcher")
    claims = jose_jwt.get_unverified_claims(token)
    assert claims["exp"] - claims["iat"] == 8 * 60 * 60


def test_custom_secret_round_trip():
    token = create_officer_token(3, "dispatcher", secret="another-secret")
    assert verify_access_token(token, secret="another-secret").is_valid
    assert verify_access_token(token).status == TokenStatus.INVALID


def test_zero_ttl_token_is_invalid():
    token = create_officer_token(1, "dispatcher", expires_delta=timedelta(0))
    result = verify_access_token(token)
    assert result.status == TokenStatus.INVALID
    assert result.claims is None


def test_past_expiry_token_is_invalid():
    token = create_officer_token(1, "dispatcher", expires_delta=timedelta(minutes=-5))
    assert verify_access_token(token).status == TokenStatus.INVALID
    assert decode_access_token(token) is None


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token(token):
    assert verify_access_token(token).status == TokenStatus.MISSING


@pytest.mark.parametrize("token", ["garbage", "a.b.c", "Bearer x"])
def test_garbage_token_is_invalid(token):
    assert verify_access_token(token).status == TokenStatus.INVALID


def test_wrong_signature_is_invalid():
    token = create_officer_token(1, "fleet_manager")
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])
    assert verify_access_token(tampered).status == TokenStatus.INVALID


def test_token_without_identity_claims_is_invalid():
    token = create_access_token({"sub": "1"})
    assert verify_access_token(token).status == TokenStatus.INVALID

    token = create_access_token({"sub": "1", "id": "1", "role": "dispatcher"})
    assert verify_access_token(token).status == TokenStatus.INVALID


def test_unknown_role_verifies_but_grants_nothing():
    token = create_access_token({"sub": "5", "id": 5, "role": "night_shift_lead"})
    result = verify_access_token(token)
    assert result.is_valid
    assert get_role_permissions(result.claims.role) == frozenset()


def test_foreign_algorithm_rejected():
    now = int(time.time())
    token = jose_jwt.encode(
        {"sub": "1", "id": 1, "role": "fleet_manager", "exp": now + 60},
        settings.secret_key,
        algorithm="HS512",
    )
    assert verify_access_token(token).status == TokenStatus.INVALID


def test_read_unverified_claims():
    token = create_officer_token(8, "safety_officer")
    claims = read_unverified_claims(token)
    assert claims["id"] == 8
    assert claims["role"] == "safety_officer"
    assert read_unverified_claims("garbage") is None
    assert read_unverified_claims(None) is None
