"""
Password hashing utilities.

The only place in the system that hashes or verifies officer passwords.
"""

import logging
import bcrypt
from starlette.concurrency import run_in_threadpool
from backend.app.core.config import settings

logger = logging.getLogger("fleet.auth")

# bcrypt only looks at the first 72 bytes of the secret
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str) -> str:
    """
    Hash a plaintext password with a fresh bcrypt salt.

    Args:
        password: Plaintext password

    Returns:
        bcrypt hash string (salt and work factor embedded)

    Errors from bcrypt propagate to the caller.
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a stored bcrypt hash.

    Returns False on mismatch, and also when the stored hash is empty or
    not a bcrypt hash.
    """
    if not plain_password or not hashed_password:
        return False

    try:
        return bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


async def hash_password_async(password: str) -> str:
    """Hash in the threadpool so the event loop keeps serving requests."""
    return await run_in_threadpool(get_password_hash, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    return await run_in_threadpool(verify_password, plain_password, hashed_password)
