"""Pydantic schemas for request/response validation."""

from app.schemas.token import Token
from app.schemas.user import (
    ForgotPasswordRequest,
    MessageResponse,
    ResendVerificationRequest,
    ResetPasswordRequest,
    UserCreate,
    UserLogin,
    UserResponse,
    UserStats,
    UserUpdate,
)
from app.schemas.resume import (
    ResumeCount,
    ResumeCreate,
    ResumeResponse,
    ResumeTemplateUpdate,
    ResumeThemeUpdate,
    ResumeTitleUpdate,
    ResumeUpdate,
)

__all__ = [
    "Token",
    "ForgotPasswordRequest",
    "MessageResponse",
    "ResendVerificationRequest",
    "ResetPasswordRequest",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserStats",
    "UserUpdate",
    "ResumeCount",
    "ResumeCreate",
    "ResumeResponse",
    "ResumeTemplateUpdate",
    "ResumeThemeUpdate",
    "ResumeTitleUpdate",
    "ResumeUpdate",
]
