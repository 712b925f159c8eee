"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel

from app.schemas.user import UserPublic


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    user: UserPublic
    token: str
