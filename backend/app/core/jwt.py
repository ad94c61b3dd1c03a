"""
JWT token utilities for authentication.

This module provides functions for issuing and verifying session tokens.
Tokens are stateless: validity depends only on signature and expiry.
"""

import enum
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Union
from jose import JWTError, jwt
from backend.app.core.config import settings
from backend.app.models.enums import OfficerRole


class TokenStatus(str, enum.Enum):
    """Outcome of verifying a presented token."""
    VALID = "valid"
    MISSING = "missing"  # no credential supplied
    INVALID = "invalid"  # bad signature, malformed, or expired


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""
    id: int
    role: str
    exp: Optional[int] = None


@dataclass(frozen=True)
class TokenVerification:
    status: TokenStatus
    claims: Optional[TokenClaims] = None

    @property
    def is_valid(self) -> bool:
        return self.status == TokenStatus.VALID


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    secret: Optional[str] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Data payload to encode in the token (should include: sub, id, role)
        expires_delta: Optional custom lifetime; timedelta(0) yields an already expired token
        secret: Signing key, defaults to settings.secret_key

    Returns:
        Encoded JWT token string

    Example payload:
        {
            "sub": "42",
            "id": 42,
            "role": "dispatcher",
            "iat": 1234560000,
            "exp": 1234588800
        }
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, secret or settings.secret_key, algorithm=settings.algorithm)


def create_officer_token(
    officer_id: int,
    role: Union[OfficerRole, str],
    expires_delta: Optional[timedelta] = None,
    secret: Optional[str] = None,
) -> str:
    """Issue a session token carrying {id, role}."""
    role_value = role.value if isinstance(role, OfficerRole) else role
    return create_access_token(
        data={"sub": str(officer_id), "id": officer_id, "role": role_value},
        expires_delta=expires_delta,
        secret=secret,
    )


def decode_access_token(token: str, secret: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token string to decode
        secret: Verification key, defaults to settings.secret_key

    Returns:
        Decoded token payload if valid (includes: sub, id, role, exp), None otherwise
    """
    try:
        payload = jwt.decode(token, secret or settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    # A token is dead at its exp second, not one second later
    exp = payload.get("exp")
    if not isinstance(exp, int) or exp <= int(time.time()):
        return None

    return payload


def verify_access_token(token: Optional[str], secret: Optional[str] = None) -> TokenVerification:
    """
    Verify a presented token and extract its claims.

    Never raises for bad input: "no token" and "bad token" come back as
    distinct statuses so callers can answer 401 vs 403.
    """
    if not token:
        return TokenVerification(status=TokenStatus.MISSING)

    payload = decode_access_token(token, secret=secret)
    if payload is None:
        return TokenVerification(status=TokenStatus.INVALID)

    officer_id = payload.get("id")
    role = payload.get("role")
    if isinstance(officer_id, bool) or not isinstance(officer_id, int) or not isinstance(role, str):
        return TokenVerification(status=TokenStatus.INVALID)

    return TokenVerification(
        status=TokenStatus.VALID,
        claims=TokenClaims(id=officer_id, role=role, exp=payload.get("exp")),
    )


def read_unverified_claims(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Read token claims without checking the signature.

    For clients that hold a token but not the signing secret. The server
    never trusts this.
    """
    if not token:
        return None
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return None
