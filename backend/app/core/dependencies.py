"""
Authentication dependencies for FastAPI.

This module provides dependencies for protecting routes with JWT authentication.
Verification is stateless: no database or cache lookup happens here.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from backend.app.core.exceptions import AuthMissingError, AuthInvalidError
from backend.app.core.jwt import verify_access_token, TokenStatus

logger = logging.getLogger("fleet.access")

# auto_error=False so a missing header reaches us as None (401) instead of
# being rejected by FastAPI before the invalid-token branch (403)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentOfficer:
    """Identity attached to an authenticated request. Read-only for handlers."""
    id: int
    role: str


async def get_current_officer(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentOfficer:
    """
    FastAPI dependency for JWT authentication.

    1. No "Authorization: Bearer <token>" header -> 401 AuthMissing
    2. Token fails signature/expiry check -> 403 AuthInvalid
    3. Otherwise the decoded identity is returned and stored on request.state

    Raises:
        AuthMissingError: header absent or not a Bearer credential
        AuthInvalidError: token expired, forged or malformed
    """
    if credentials is None:
        raise AuthMissingError()

    result = verify_access_token(credentials.credentials)

    if result.status == TokenStatus.MISSING:
        raise AuthMissingError()

    if not result.is_valid:
        logger.info("Rejected invalid token on %s %s", request.method, request.url.path)
        raise AuthInvalidError()

    officer = CurrentOfficer(id=result.claims.id, role=result.claims.role)
    request.state.officer = officer
    return officer
