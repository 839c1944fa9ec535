"""
User API schemas.

Pydantic models for registration, login, account recovery and profile
request/response validation. Response schemas never expose the password
hash or any security token.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.user import AccountStatus


# Request schemas
class UserCreate(BaseModel):
    """Schema for user registration."""
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100, description="Password (8-100 characters)")
    phone: Optional[str] = Field(None, min_length=10, max_length=15)


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=100)


class ResendVerificationRequest(BaseModel):
    email: EmailStr


class UserUpdate(BaseModel):
    """Schema for updating user profile. Blank values are ignored."""
    first_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=15)


# Response schemas
class UserResponse(BaseModel):
    """Public user summary (no sensitive data)."""
    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str
    phone: Optional[str] = None
    profile_image_url: Optional[str] = None
    subscription_plan: str
    is_premium: bool
    is_email_verified: bool
    status: AccountStatus
    created_at: datetime

    class Config:
        from_attributes = True


class UserStats(BaseModel):
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_premium: bool
    is_premium_active: bool
    member_since: datetime
    email_verified: bool
    resume_count: int


class MessageResponse(BaseModel):
    message: str
