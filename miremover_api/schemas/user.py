"""Pydantic schemas for user registration, login and admin listing."""
from datetime import datetime

from pydantic import BaseModel, Field


class MessageSchema(BaseModel):
    message: str


class RegisterSchema(BaseModel):
    user_id: str = Field(min_length=1)
    username: str = Field(min_length=1)
    email: str = Field(min_length=1)
    full_name: str
    created_at: datetime | None = None

    class Config:
        # clients may send numeric ids
        coerce_numbers_to_str = True


class LoginSchema(BaseModel):
    user_id: str = Field(min_length=1)
    username: str | None = None  # sent by the client, not used for lookup
    timestamp: datetime | None = None

    class Config:
        coerce_numbers_to_str = True


class UserOutSchema(BaseModel):
    """Admin view of a user; password_hash is deliberately absent."""

    user_id: str
    username: str
    email: str
    full_name: str
    created_at: datetime | None = None
    last_login: datetime | None = None
    is_active: bool = True

    class Config:
        from_attributes = True


class UserListSchema(BaseModel):
    users: list[UserOutSchema]
