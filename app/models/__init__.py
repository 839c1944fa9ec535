"""SQLModel database models."""

from app.models.user import AccountStatus, User
from app.models.resume import Resume

__all__ = [
    "AccountStatus",
    "User",
    "Resume",
]
