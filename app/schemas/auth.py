"""
app/schemas/auth.py

Purpose: Request and response bodies for /api/auth

- Request fields are optional here; presence is checked by the auth service
  so missing fields get the same 400 messages as empty ones
- Responses use camelCase userId and never include the password hash
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.user import User


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = None
    mobile: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    email: str
    mobile: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(user_id=user.user_id, email=user.email, mobile=user.mobile)


class AuthResponse(UserResponse):
    message: str

    @classmethod
    def from_user(cls, user: User, message: str) -> "AuthResponse":
        return cls(message=message, user_id=user.user_id, email=user.email, mobile=user.mobile)
