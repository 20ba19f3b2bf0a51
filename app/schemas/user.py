from typing import Optional

from pydantic import BaseModel

from app.schemas.notification import Notification


class LoginForm(BaseModel):
    # presence and length are checked by the credential form, not here, so an
    # empty field is reported the same way the page reports it
    email: Optional[str] = ""
    password: Optional[str] = ""


class RegisterForm(LoginForm):
    name: Optional[str] = ""


class UserOut(BaseModel):
    email: str
    name: str


class SessionOut(BaseModel):
    authenticated: bool
    user: Optional[UserOut] = None
    loading: bool = False


class AuthOut(SessionOut):
    notification: Optional[Notification] = None
