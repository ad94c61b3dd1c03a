"""
Unit tests for password hashing.
"""

import pytest
from backend.app.core.security import (
    get_password_hash,
    verify_password,
    hash_password_async,
    verify_password_async,
)


@pytest.mark.parametrize("password", ["secret1", "correct horse battery staple", "pässwörd✓", "x"])
def test_password_round_trip(password):
    hashed = get_password_hash(password)
    assert hashed != password
    assert verify_password(password, hashed) is True
    assert verify_password(password + "!", hashed) is False


def test_same_password_hashes_differently():
    first = get_password_hash("secret1")
    second = get_password_hash("secret1")
    assert first != second
    assert verify_password("secret1", first)
    assert verify_password("secret1", second)


def test_hash_embeds_configured_work_factor():
    from backend.app.core.config import settings
    hashed = get_password_hash("secret1")
    assert hashed.startswith(f"$2b${settings.bcrypt_rounds:02d}$")


@pytest.mark.parametrize("stored", ["", "not-a-bcrypt-hash", "$2b$04$short"])
def test_verify_against_garbage_hash_returns_false(stored):
    assert verify_password("secret1", stored) is False


def test_verify_empty_password_returns_false():
    assert verify_password("", get_password_hash("secret1")) is False


@pytest.mark.asyncio
async def test_async_helpers_round_trip():
    hashed = await hash_password_async("secret1")
    assert await verify_password_async("secret1", hashed) is True
    assert await verify_password_async("wrong", hashed) is False
