from pydantic import BaseModel, ConfigDict
from typing import Optional

from wmsconsole.session.models import SessionUser


class LoginRequest(BaseModel):
    """POST /auth/login"""
    email: str
    password: str


class RegisterRequest(BaseModel):
    """POST /auth/register"""
    email: str
    password: str
    name: str


class AuthResult(BaseModel):
    """Body returned by the WMS auth API on login / register."""

    model_config = ConfigDict(extra="ignore")

    success: bool = False
    user: Optional[SessionUser] = None
    token: Optional[str] = None
    message: Optional[str] = None
