"""Authenticated user model."""

from typing import Optional
from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """Current user as resolved from the identity provider."""
    id: str = Field(..., description="Identity provider user ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")


class AuthResult(BaseModel):
    """Outcome of a sign-in or sign-up attempt."""
    success: bool
    message: str
    user: Optional[AuthUser] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
