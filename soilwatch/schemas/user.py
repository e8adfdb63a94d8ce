"""User and authentication schemas"""

from pydantic import EmailStr, Field

from .base import CamelModel


class UserRegister(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserUpdate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr


class TokenResponse(CamelModel):
    """Returned by /register and /login"""
    token: str
    name: str
    email: str
