from fastapi import APIRouter, Depends, Request

from app.errors import AlreadyAuthenticated
from app.schemas.notification import Notification
from app.schemas.user import AuthOut, LoginForm, RegisterForm, SessionOut, UserOut
from app.utils.auth import AuthMode
from app.workspace import SessionShell, find_shell, get_shell

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_out(shell: SessionShell) -> dict:
    user = shell.user
    return {
        "authenticated": shell.authenticated,
        "user": UserOut(email=user.email, name=user.name) if user else None,
        "loading": shell.form.is_loading,
    }


async def _submit(shell: SessionShell, form: LoginForm, name, mode: AuthMode) -> dict:
    if shell.authenticated:
        raise AlreadyAuthenticated()
    result = await shell.form.submit(form.email, form.password, name, mode)
    if not result.ok:
        # mapped to a status code and a destructive notification in app.main
        raise result.error
    return {
        **_session_out(shell),
        "notification": Notification(
            title="Welcome!",
            description=f"Successfully logged in as {result.user.name}",
        ),
    }


@router.get("/session", response_model=SessionOut)
def read_session(shell: SessionShell = Depends(get_shell)):
    return _session_out(shell)


@router.post("/login", response_model=AuthOut)
async def login(form: LoginForm, shell: SessionShell = Depends(get_shell)):
    return await _submit(shell, form, None, AuthMode.LOGIN)


@router.post("/register", response_model=AuthOut)
async def register(form: RegisterForm, shell: SessionShell = Depends(get_shell)):
    return await _submit(shell, form, form.name, AuthMode.REGISTER)


@router.post("/logout", response_model=AuthOut)
def logout(request: Request):
    shell = find_shell(request)
    if shell is not None:
        shell.logout()
    return {
        "authenticated": False,
        "user": None,
        "loading": False,
        "notification": Notification(
            title="Logged out",
            description="You have been successfully logged out",
        ),
    }
