"""
Client session context.

Holds who the current officer is and what their role may do. Constructed
explicitly and handed to whatever needs it; there is no module-level
instance. Permission answers come from backend.app.core.permissions, the
same table the server enforces.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol

from backend.app.core.jwt import read_unverified_claims
from backend.app.core.permissions import (
    NavItem,
    PermissionLike,
    has_permission,
    has_any_permission,
    has_all_permissions,
    is_admin,
    navigation_items_for,
)
from backend.app.core.roles import format_role, get_role_color

logger = logging.getLogger("fleet.client")


@dataclass(frozen=True)
class StoredSession:
    token: str
    user: Dict[str, Any] = field(default_factory=dict)


class TokenStore(Protocol):
    """Where a client keeps its token between runs."""

    def load(self) -> Optional[StoredSession]: ...

    def save(self, session: StoredSession) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStore:
    """Process-local store, mostly for tests and short scripts."""

    def __init__(self, session: Optional[StoredSession] = None):
        self._session = session

    def load(self) -> Optional[StoredSession]:
        return self._session

    def save(self, session: StoredSession) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None


class FileTokenStore:
    """JSON file holding {"token": ..., "user": {...}}."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> Optional[StoredSession]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable session file %s", self.path)
            return None

        if not isinstance(raw, dict) or not isinstance(raw.get("token"), str):
            return None
        user = raw.get("user") if isinstance(raw.get("user"), dict) else {}
        return StoredSession(token=raw["token"], user=user)

    def save(self, session: StoredSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": session.token, "user": session.user}), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


@dataclass(frozen=True)
class SessionState:
    token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None
    role: Optional[str] = None


ANONYMOUS = SessionState()


def _role_from_token(token: str, now: float) -> Optional[str]:
    """Role embedded in a token that has not yet expired, else None."""
    claims = read_unverified_claims(token)
    if not claims:
        return None
    exp = claims.get("exp")
    if not isinstance(exp, (int, float)) or exp <= now:
        return None
    role = claims.get("role")
    return role if isinstance(role, str) and role else None


class SessionContext:
    """
    Current officer and role for one running client.

    Lifecycle:
        ctx = SessionContext(store)   # create at startup
        ctx.initialize()              # resolve a stored session, if any
        ctx.establish(token, user)    # after login; replaces all state at once
        ctx.clear()                   # on logout or when the server rejects the token
    """

    def __init__(self, store: Optional[TokenStore] = None, clock: Callable[[], float] = time.time):
        self._store = store if store is not None else MemoryTokenStore()
        self._clock = clock
        self._state = ANONYMOUS

    # -- lifecycle -------------------------------------------------------

    def initialize(self) -> bool:
        """
        Resolve the stored session.

        Returns True if a usable session was found. Expired or undecodable
        tokens are dropped from the store.
        """
        stored = self._store.load()
        if stored is None:
            self._state = ANONYMOUS
            return False

        role = _role_from_token(stored.token, self._clock())
        if role is None:
            logger.info("Discarding stored session: token expired or unreadable")
            self._store.clear()
            self._state = ANONYMOUS
            return False

        self._state = SessionState(token=stored.token, user=dict(stored.user), role=role)
        return True

    def establish(self, token: str, user: Optional[Dict[str, Any]] = None) -> None:
        """
        Replace the session with a freshly issued token.

        Raises ValueError if the token carries no readable role or is
        already expired; the previous state is kept in that case.
        """
        role = _role_from_token(token, self._clock())
        if role is None:
            raise ValueError("Token does not carry a usable role")

        new_state = SessionState(token=token, user=dict(user or {}), role=role)
        self._store.save(StoredSession(token=token, user=new_state.user))
        self._state = new_state

    def clear(self) -> None:
        self._state = ANONYMOUS
        self._store.clear()

    # -- accessors -------------------------------------------------------

    @property
    def token(self) -> Optional[str]:
        return self._state.token

    @property
    def user(self) -> Optional[Dict[str, Any]]:
        return self._state.user

    @property
    def role(self) -> Optional[str]:
        return self._state.role

    @property
    def is_authenticated(self) -> bool:
        return self._state.token is not None

    @property
    def is_admin(self) -> bool:
        return is_admin(self._state.role)

    @property
    def role_label(self) -> str:
        return format_role(self._state.role)

    @property
    def role_color(self) -> str:
        return get_role_color(self._state.role)

    def has_permission(self, permission: PermissionLike) -> bool:
        return has_permission(self._state.role, permission)

    def has_any_permission(self, permissions: Iterable[PermissionLike]) -> bool:
        return has_any_permission(self._state.role, permissions)

    def has_all_permissions(self, permissions: Iterable[PermissionLike]) -> bool:
        return has_all_permissions(self._state.role, permissions)

    def navigation_items(self) -> List[NavItem]:
        return navigation_items_for(self._state.role)
