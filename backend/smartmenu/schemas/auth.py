"""Authentication schemas."""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from smartmenu.core.rbac import UserRole
from smartmenu.core.security import MAX_PASSWORD_BYTES, password_too_long
from smartmenu.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    """Registration request body."""

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    restaurant_name: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=30)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        if password_too_long(v):
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(CamelModel):
    """Login request body."""

    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class LoginResponse(CamelModel):
    """Bearer token plus a summary of the account it was issued for."""

    token: str
    type: str = "Bearer"
    id: int
    username: str
    email: str
    role: UserRole


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    role: UserRole
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    restaurant_name: Optional[str] = None
    phone: Optional[str] = None
