"""
User Schemas
Pydantic models for user-related data.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class UserBase(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=150)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class UserCreate(UserBase):
    """Signup payload. Approval state, role and timestamps are not caller-controlled."""
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SafeUser(UserBase):
    """A user record with the stored credential removed."""
    id: int
    role: str
    approved: bool
    active: bool
    password_fresh: Optional[datetime] = None
    password_expire: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    user: SafeUser


class RoleResponse(BaseModel):
    role: str


class ActiveResponse(BaseModel):
    active: bool


class UsernameSuggestion(BaseModel):
    username: str
