"""Pydantic request and response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    # Presence is checked by the auth service so it can answer with a 400
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


class TokenResponse(BaseModel):
    token: str


class LinkResponse(BaseModel):
    link: str


class HealthResponse(BaseModel):
    ok: bool = True


class ErrorResponse(BaseModel):
    error: str


class UserResponse(BaseModel):
    """A user as exposed to admins. Credential material is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime


class WishResponse(BaseModel):
    """A wish as returned to clients. ``photo`` is omitted when absent."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    sender: Optional[str] = Field(default=None, alias="from")
    recipient: Optional[str] = Field(default=None, alias="to")
    message: Optional[str] = None
    photo: Optional[str] = None
    user_id: int
    created_at: datetime
