from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.errors import AlreadyAuthenticated


@dataclass(frozen=True)
class User:
    email: str
    name: str


@dataclass(frozen=True)
class SessionState:
    """Either unauthenticated (``user is None``) or authenticated as ``user``."""

    user: Optional[User] = None

    @property
    def authenticated(self) -> bool:
        return self.user is not None


def sign_in(state: SessionState, user: User) -> SessionState:
    # only Unauthenticated -> Authenticated; switching users goes through sign_out
    if state.authenticated:
        raise AlreadyAuthenticated()
    return SessionState(user=user)


def sign_out(state: SessionState) -> SessionState:
    if not state.authenticated:
        return state
    return SessionState()
