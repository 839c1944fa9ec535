"""
User repository.

Credential store for accounts: lookups by id, email and the one-time
security tokens used by email verification and password reset.
"""

from typing import Optional

from sqlmodel import Session, select

from app.models.user import User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: Session):
        """
        Args:
            session: SQLModel database session, one per request
        """
        self.session = session

    def save(self, user: User) -> User:
        """Insert or update ``user`` and return it with its generated id."""
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive match on the login email."""
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()

    def get_by_verification_token(self, token: str) -> Optional[User]:
        statement = select(User).where(User.verification_token == token)
        return self.session.exec(statement).first()

    def get_by_password_reset_token(self, token: str) -> Optional[User]:
        statement = select(User).where(User.password_reset_token == token)
        return self.session.exec(statement).first()

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def delete(self, user: User) -> None:
        """Remove ``user`` and commit, together with any pending deletes in the session."""
        self.session.delete(user)
        self.session.commit()
