import logging
import uuid
from collections import OrderedDict
from typing import Optional

from fastapi import Request, Response

import app.config as _cfg
from app.models.session import SessionState, User, sign_in, sign_out
from app.store import TaskStore, demo_tasks
from app.utils.auth import CredentialForm

logger = logging.getLogger(__name__)


class SessionShell:
    """Switches one browser between the credential form and the dashboard.

    The dashboard's TaskStore exists only while authenticated: it is mounted
    on login and dropped on logout, so every login starts from a fresh
    collection.
    """

    def __init__(self, workspace_id: str):
        self.workspace_id = workspace_id
        self.session = SessionState()
        self.form = CredentialForm(on_auth_success=self.login)
        self.dashboard: Optional[TaskStore] = None

    @property
    def user(self) -> Optional[User]:
        return self.session.user

    @property
    def authenticated(self) -> bool:
        return self.session.authenticated

    def login(self, user: User) -> None:
        # raises AlreadyAuthenticated before the current dashboard is touched
        self.session = sign_in(self.session, user)
        self.dashboard = TaskStore(demo_tasks() if _cfg.SEED_DEMO_TASKS else ())
        logger.info("workspace %s signed in as %r", self.workspace_id, user.email)

    def logout(self) -> None:
        if self.form.cancel():
            logger.info("workspace %s dropped a pending submission on logout", self.workspace_id)
        self.session = sign_out(self.session)
        self.dashboard = None
        logger.info("workspace %s signed out", self.workspace_id)

    def teardown(self) -> None:
        self.form.cancel()
        self.dashboard = None


class WorkspaceRegistry:
    """Live shells in least-recently-used order.

    Past ``MAX_WORKSPACES`` the stalest signed-out shell is discarded first;
    only when every shell is signed in does a signed-in one go.
    """

    def __init__(self):
        self._shells: OrderedDict[str, SessionShell] = OrderedDict()

    def __len__(self) -> int:
        return len(self._shells)

    def __contains__(self, workspace_id: str) -> bool:
        return workspace_id in self._shells

    def get(self, workspace_id: Optional[str]) -> Optional[SessionShell]:
        if not workspace_id:
            return None
        shell = self._shells.get(workspace_id)
        if shell is not None:
            self._shells.move_to_end(workspace_id)
        return shell

    def create(self) -> SessionShell:
        shell = SessionShell(uuid.uuid4().hex)
        self._shells[shell.workspace_id] = shell
        logger.debug("workspace %s created", shell.workspace_id)
        while len(self._shells) > max(_cfg.MAX_WORKSPACES, 1):
            self.discard(self._eviction_candidate(keep=shell.workspace_id))
        return shell

    def _eviction_candidate(self, keep: str) -> str:
        others = [(wid, s) for wid, s in self._shells.items() if wid != keep]
        for workspace_id, shell in others:
            if not shell.authenticated and not shell.form.is_loading:
                return workspace_id
        return others[0][0]

    def discard(self, workspace_id: str) -> bool:
        shell = self._shells.pop(workspace_id, None)
        if shell is None:
            return False
        shell.teardown()
        logger.debug("workspace %s discarded", workspace_id)
        return True

    def clear(self) -> None:
        for workspace_id in list(self._shells):
            self.discard(workspace_id)


workspaces = WorkspaceRegistry()


def set_workspace_cookie(response: Response, workspace_id: str) -> None:
    response.set_cookie(_cfg.WORKSPACE_COOKIE, workspace_id, httponly=True, samesite="lax")


def find_shell(request: Request) -> Optional[SessionShell]:
    """The caller's existing shell, or None; never creates one."""
    return workspaces.get(request.cookies.get(_cfg.WORKSPACE_COOKIE))


def get_shell(request: Request, response: Response) -> SessionShell:
    shell = find_shell(request)
    if shell is None:
        shell = workspaces.create()
        set_workspace_cookie(response, shell.workspace_id)
        # app.main re-attaches the cookie to error responses
        request.state.new_workspace_id = shell.workspace_id
    return shell
