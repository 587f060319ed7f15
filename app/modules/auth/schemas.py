from fastapi import Form
from pydantic import BaseModel


class OkResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    error: str


class AdminMeResponse(BaseModel):
    authed: bool
    role: str


class SessionUser(BaseModel):
    id: str


class UserMeResponse(BaseModel):
    user: SessionUser | None = None


# The admin login page posts a plain form with a single password field.
class AdminPasswordForm:
    def __init__(self, password: str = Form("")) -> None:
        self.password = password
