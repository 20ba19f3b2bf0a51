import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Optional

import app.config as _cfg
from app.errors import AuthCancelled, AuthInProgress, CredentialError, TaskFlowError
from app.models.session import User

logger = logging.getLogger(__name__)


class AuthMode(StrEnum):
    LOGIN = "login"
    REGISTER = "register"


REQUIRED_FIELDS = {
    AuthMode.LOGIN: ("email", "password"),
    AuthMode.REGISTER: ("name", "email", "password"),
}


def validate_credentials(email: Optional[str], password: Optional[str], name: Optional[str], mode: AuthMode) -> None:
    """Raise CredentialError when the submission is not acceptable for ``mode``.

    Presence is checked before length so an empty form always reports the
    missing fields first.
    """
    values = {"email": email, "password": password, "name": name}
    if any(not values[field] for field in REQUIRED_FIELDS[mode]):
        raise CredentialError("Please fill in all required fields")
    # read at call-time so tests can lower or raise the limit
    if len(password) < _cfg.MIN_PASSWORD_LENGTH:
        raise CredentialError(f"Password must be at least {_cfg.MIN_PASSWORD_LENGTH} characters long")


def derive_user(email: str, name: Optional[str], mode: AuthMode) -> User:
    """Login shows the local part of the email; register keeps the given name."""
    if mode is AuthMode.LOGIN:
        return User(email=email, name=email.split("@", 1)[0])
    return User(email=email, name=name)


@dataclass(frozen=True)
class AuthResult:
    user: Optional[User] = None
    error: Optional[TaskFlowError] = None

    @property
    def ok(self) -> bool:
        return self.user is not None


class CredentialForm:
    """Stub authentication boundary.

    Nothing is stored or verified: a valid submission waits for
    ``AUTH_DELAY_SECONDS`` and then hands the derived user to
    ``on_auth_success``. Only one submission may be pending at a time, and
    ``cancel()`` drops a pending one without calling the callback.
    """

    def __init__(self, on_auth_success: Callable[[User], None]):
        self._on_auth_success = on_auth_success
        self._pending: Optional[asyncio.Task] = None

    @property
    def is_loading(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def _complete(self, user: User, delay: float) -> AuthResult:
        await asyncio.sleep(delay)
        self._on_auth_success(user)
        return AuthResult(user=user)

    async def submit(
        self,
        email: Optional[str],
        password: Optional[str],
        name: Optional[str] = None,
        mode: AuthMode = AuthMode.LOGIN,
    ) -> AuthResult:
        if self.is_loading:
            return AuthResult(error=AuthInProgress())
        try:
            validate_credentials(email, password, name, mode)
        except CredentialError as exc:
            logger.info("%s rejected for %r: %s", mode, email, exc)
            return AuthResult(error=exc)

        user = derive_user(email, name, mode)
        self._pending = asyncio.ensure_future(self._complete(user, _cfg.AUTH_DELAY_SECONDS))
        try:
            result = await self._pending
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            logger.info("%s cancelled for %r", mode, email)
            return AuthResult(error=AuthCancelled())
        finally:
            self._pending = None
        logger.info("%s succeeded for %r as %r", mode, email, user.name)
        return result

    def cancel(self) -> bool:
        """Cancel the pending submission, if any. Returns whether one was pending."""
        if not self.is_loading:
            return False
        self._pending.cancel()
        return True
