"""
User database model.

Holds identity, credentials and the account-security state used by the
authentication flows.
"""

import datetime
import enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from app.core.clock import ensure_utc, utcnow


class AccountStatus(str, enum.Enum):
    """Explicit account state.

    ``UNVERIFIED`` until the email is confirmed, ``ACTIVE`` afterwards and
    ``LOCKED`` after too many failed logins. Only a password reset clears a
    lock.
    """

    UNVERIFIED = "unverified"
    ACTIVE = "active"
    LOCKED = "locked"


class User(SQLModel, table=True):
    """
    User model for authentication.

    Token fields come in pairs (token + expiry); use the ``issue_*`` and
    ``clear_*`` helpers so both halves always change together.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    hashed_password: str = Field(nullable=False)

    # Profile
    first_name: Optional[str] = Field(default=None, max_length=50)
    last_name: Optional[str] = Field(default=None, max_length=50)
    phone: Optional[str] = Field(default=None, max_length=15)
    profile_image_url: Optional[str] = Field(default=None, max_length=1024)

    # Subscription
    subscription_plan: str = Field(default="basic", max_length=50)
    is_premium: bool = Field(default=False)
    premium_expiry_date: Optional[datetime.datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    # Account security
    status: AccountStatus = Field(default=AccountStatus.UNVERIFIED, nullable=False)
    email_verified_at: Optional[datetime.datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    is_active: bool = Field(default=True)
    failed_login_attempts: int = Field(default=0, nullable=False)

    verification_token: Optional[str] = Field(default=None, index=True, max_length=255)
    verification_token_expiry: Optional[datetime.datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    password_reset_token: Optional[str] = Field(default=None, index=True, max_length=255)
    password_reset_token_expiry: Optional[datetime.datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def is_email_verified(self) -> bool:
        return self.email_verified_at is not None

    @property
    def is_locked(self) -> bool:
        return self.status == AccountStatus.LOCKED

    @property
    def full_name(self) -> str:
        if self.first_name is None and self.last_name is None:
            return self.email
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def is_premium_active(self, now: Optional[datetime.datetime] = None) -> bool:
        if not self.is_premium or self.premium_expiry_date is None:
            return False
        now = ensure_utc(now) if now else utcnow()
        return now < ensure_utc(self.premium_expiry_date)

    def is_verification_token_valid(self, now: Optional[datetime.datetime] = None) -> bool:
        if self.verification_token is None or self.verification_token_expiry is None:
            return False
        now = ensure_utc(now) if now else utcnow()
        return now < ensure_utc(self.verification_token_expiry)

    def is_password_reset_token_valid(self, now: Optional[datetime.datetime] = None) -> bool:
        if self.password_reset_token is None or self.password_reset_token_expiry is None:
            return False
        now = ensure_utc(now) if now else utcnow()
        return now < ensure_utc(self.password_reset_token_expiry)

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def issue_verification_token(self, token: str, expires_at: datetime.datetime) -> None:
        self.verification_token = token
        self.verification_token_expiry = ensure_utc(expires_at)

    def clear_verification_token(self) -> None:
        self.verification_token = None
        self.verification_token_expiry = None

    def issue_password_reset_token(self, token: str, expires_at: datetime.datetime) -> None:
        self.password_reset_token = token
        self.password_reset_token_expiry = ensure_utc(expires_at)

    def clear_password_reset_token(self) -> None:
        self.password_reset_token = None
        self.password_reset_token_expiry = None

    def mark_email_verified(self, now: Optional[datetime.datetime] = None) -> None:
        """Record the verification; a locked account stays locked."""
        self.email_verified_at = ensure_utc(now) if now else utcnow()
        self.clear_verification_token()
        if self.status == AccountStatus.UNVERIFIED:
            self.status = AccountStatus.ACTIVE

    def register_failed_login(self, threshold: int) -> None:
        self.failed_login_attempts += 1
        if self.failed_login_attempts >= threshold:
            self.status = AccountStatus.LOCKED

    def unlock(self) -> None:
        self.failed_login_attempts = 0
        if self.status == AccountStatus.LOCKED:
            self.status = AccountStatus.ACTIVE if self.is_email_verified else AccountStatus.UNVERIFIED

    def touch(self) -> None:
        now = utcnow()
        # Never move backwards if the clock was adjusted.
        self.updated_at = max(now, ensure_utc(self.updated_at)) if self.updated_at else now
