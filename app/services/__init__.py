"""Business logic services."""

from app.services.auth_service import AuthService
from app.services.email_service import EmailService
from app.services.resume_service import ResumeService
from app.services.user_service import UserService

__all__ = [
    "AuthService",
    "EmailService",
    "ResumeService",
    "UserService",
]
