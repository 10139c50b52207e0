"""User and authentication schemas."""

from typing import Optional

from pydantic import Field

from classroom_api.schemas.common import CamelModel


class SignupRequest(CamelModel):
    """Signup body. Only parents (2) and teachers (3) register themselves."""

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role_id: int
    name: Optional[str] = None
    surname: Optional[str] = None


class LoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(CamelModel):
    token: str


class RegisterChildRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: Optional[str] = None
    surname: Optional[str] = None


class UserPublic(CamelModel):
    """User as returned by the API; the password hash is never exposed."""

    id: int
    username: str
    role_id: int
    name: Optional[str] = None
    surname: Optional[str] = None
    classroom_id: Optional[str] = None


class RegisterChildResponse(CamelModel):
    message: str
    child: UserPublic
