"""Database repositories."""

from app.db.repositories.user import UserRepository
from app.db.repositories.resume import ResumeRepository

__all__ = [
    "UserRepository",
    "ResumeRepository",
]
