"""
User service.

Profile management for authenticated users: read, update, statistics and
account deletion.
"""

import datetime
import logging
from typing import Optional

from app.core.exceptions import NotFound
from app.db.repositories.resume import ResumeRepository
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.schemas.user import UserResponse, UserStats, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Service for user-related business logic."""

    def __init__(self, repository: UserRepository, resume_repository: ResumeRepository):
        """
        Args:
            repository: User persistence
            resume_repository: Used to count and remove the user's resumes
        """
        self.repository = repository
        self.resume_repository = resume_repository

    def get_profile(self, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            NotFound: If the user does not exist
        """
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFound(f"User not found with id: {user_id}")
        return user

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.repository.get_by_email(email)

    def update_profile(self, user_id: int, data: UserUpdate) -> User:
        """Update profile fields; missing or blank values leave the field unchanged."""
        user = self.get_profile(user_id)

        if data.first_name is not None and data.first_name.strip():
            user.first_name = data.first_name.strip()
        if data.last_name is not None and data.last_name.strip():
            user.last_name = data.last_name.strip()
        if data.phone is not None and data.phone.strip():
            user.phone = data.phone.strip()

        user.touch()
        return self.repository.save(user)

    def get_stats(self, user_id: int, now: Optional[datetime.datetime] = None) -> UserStats:
        user = self.get_profile(user_id)
        return UserStats(email=user.email, first_name=user.first_name, last_name=user.last_name,
                         is_premium=user.is_premium, is_premium_active=user.is_premium_active(now),
                         member_since=user.created_at, email_verified=user.is_email_verified,
                         resume_count=self.resume_repository.count_by_owner(user_id), )

    def delete_account(self, user_id: int) -> None:
        """Delete the user together with all of their resumes."""
        user = self.get_profile(user_id)
        removed = self.resume_repository.delete_by_owner(user_id, commit=False)
        self.repository.delete(user)
        logger.info("Deleted account id=%s (%s resumes)", user_id, removed)

    @staticmethod
    def to_public(user: User) -> UserResponse:
        return UserResponse.model_validate(user)
