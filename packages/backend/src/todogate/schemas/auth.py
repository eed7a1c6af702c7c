"""Pydantic schemas for registration and login."""

from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    name: str
    password: str
    id: Optional[int] = None  # accepted for old clients, not trusted


class TokenResponse(BaseModel):
    token: str
    id: int


class MessageResponse(BaseModel):
    message: str
