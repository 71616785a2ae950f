"""User models for the storefront"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """Public view of a user"""
    id: str
    name: str
    email: str
    role: UserRole = UserRole.USER
    created_at: datetime
    updated_at: datetime


class UserRecord(User):
    """Stored user, including the password hash"""
    password_hash: str

    def to_public(self) -> User:
        return User(**self.model_dump(exclude={"password_hash"}))


class RegisterRequest(BaseModel):
    """Request to register a new user"""
    name: str = Field(min_length=1)
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    """Request to log in"""
    email: str
    password: str


class TokenResponse(BaseModel):
    """Bearer token issued on register or login"""
    token: str
    token_type: str = "bearer"
    user: Optional[User] = None
