from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    id: int
    email: str
    name: str


class UserRecord(User):
    # stored only, never returned by the API
    passwordHash: str
    salt: str


class Session(BaseModel):
    token: str
    userId: int
    createdAt: float


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: str


class LoginRequest(BaseModel):
    email: str
    password: str


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class TokenResponse(BaseModel):
    token: str
