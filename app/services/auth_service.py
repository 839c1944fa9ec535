"""
Authentication service.

Account-security state machine: registration, login with failed-attempt
lockout, email verification, password reset and verification resend.

States are ``unverified`` -> ``active``, with ``locked`` reachable from either
after ``MAX_FAILED_LOGIN_ATTEMPTS`` wrong passwords. Only a successful
password reset lifts a lock.
"""

import datetime
import logging
import secrets
from typing import Callable, Protocol

from app.core.exceptions import (AccountDisabled, AccountLocked, AlreadyVerified, Conflict, EmailNotVerified,
                                 InvalidCredentials, NotFound, TokenExpired, TokenInvalid, )
from app.core.clock import utcnow
from app.core.security import TokenCodec, get_password_hash, verify_password
from app.db.repositories.user import UserRepository
from app.models.user import User
from app.schemas.token import Token
from app.schemas.user import UserCreate, UserLogin, UserResponse

logger = logging.getLogger(__name__)

MAX_FAILED_LOGIN_ATTEMPTS = 5

FORGOT_PASSWORD_MESSAGE = "If your email exists in our system, you will receive a password reset link."
VERIFY_EMAIL_MESSAGE = "Email verified successfully! You can now login."
RESET_PASSWORD_MESSAGE = "Password reset successfully! You can now login with your new password."
RESEND_VERIFICATION_MESSAGE = "Verification email sent! Please check your inbox."


class NotificationDispatcher(Protocol):
    def send_verification(self, to: str, name: str, token: str) -> None:
        ...

    def send_password_reset(self, to: str, name: str, token: str) -> None:
        ...

    def send_welcome(self, to: str, name: str) -> None:
        ...


def generate_security_token() -> str:
    return secrets.token_urlsafe(32)


class AuthService:
    """Service for authentication and account security."""

    def __init__(self, repository: UserRepository, token_codec: TokenCodec, notifier: NotificationDispatcher,
                 verification_ttl: datetime.timedelta = datetime.timedelta(hours=24),
                 reset_ttl: datetime.timedelta = datetime.timedelta(hours=1),
                 clock: Callable[[], datetime.datetime] = utcnow,
                 token_factory: Callable[[], str] = generate_security_token):
        """
        Args:
            repository: User persistence
            token_codec: Issues bearer tokens on successful login
            notifier: Sends verification, reset and welcome emails
            verification_ttl: Lifetime of email verification tokens
            reset_ttl: Lifetime of password reset tokens
            clock: Returns the current time as aware UTC
            token_factory: Mints verification/reset tokens
        """
        self.repository = repository
        self.token_codec = token_codec
        self.notifier = notifier
        self.verification_ttl = verification_ttl
        self.reset_ttl = reset_ttl
        self.clock = clock
        self.token_factory = token_factory

    def register(self, user_data: UserCreate) -> User:
        """
        Register a new, unverified account and send the verification email.

        Raises:
            Conflict: If the email is already registered
        """
        if self.repository.exists_by_email(user_data.email):
            raise Conflict(f"Email already registered: {user_data.email}")

        user = User(email=user_data.email, hashed_password=get_password_hash(user_data.password),
                    first_name=user_data.first_name, last_name=user_data.last_name, phone=user_data.phone, )
        verification_token = self.token_factory()
        user.issue_verification_token(verification_token, self.clock() + self.verification_ttl)
        user = self.repository.save(user)
        logger.info("Registered user id=%s", user.id)

        self.notifier.send_verification(user.email, self._display_name(user), verification_token)
        return user

    def login(self, login_data: UserLogin) -> Token:
        """
        Authenticate a user and issue a bearer token.

        Checks run in a fixed order: unknown email, lock, deactivation,
        password, then email verification.

        Raises:
            InvalidCredentials: Unknown email or wrong password
            AccountLocked: Too many failed attempts
            AccountDisabled: Account deactivated
            EmailNotVerified: Correct password but email not yet verified
        """
        user = self.repository.get_by_email(login_data.email)
        if user is None:
            raise InvalidCredentials()

        if user.is_locked:
            raise AccountLocked()

        if not user.is_active:
            raise AccountDisabled()

        if not verify_password(login_data.password, user.hashed_password):
            self._handle_failed_login(user)
            raise InvalidCredentials()

        if not user.is_email_verified:
            raise EmailNotVerified()

        if user.failed_login_attempts > 0:
            user.failed_login_attempts = 0
            user.touch()
            user = self.repository.save(user)

        access_token = self.token_codec.issue(user.email)
        return Token(access_token=access_token, token_type="bearer",
                     expires_in=self.token_codec.expires_in_seconds, user=UserResponse.model_validate(user), )

    def verify_email(self, token: str) -> str:
        """
        Confirm an email address with the token sent at registration.

        Raises:
            TokenInvalid: No account holds this token
            TokenExpired: The token is past its expiry
        """
        user = self.repository.get_by_verification_token(token)
        if user is None:
            raise TokenInvalid("Invalid verification token")

        if not user.is_verification_token_valid(self.clock()):
            raise TokenExpired("Verification token has expired. Please request a new one.")

        user.mark_email_verified(self.clock())
        user.touch()
        user = self.repository.save(user)
        logger.info("Email verified for user id=%s", user.id)

        self.notifier.send_welcome(user.email, self._display_name(user))
        return VERIFY_EMAIL_MESSAGE

    def forgot_password(self, email: str) -> str:
        """
        Start a password reset. The reply never reveals whether the email exists.

        A token is minted on both paths and delivery runs on the mailer's
        executor, so a known email costs only the extra token write. That
        residual latency difference is accepted.
        """
        user = self.repository.get_by_email(email)
        reset_token = self.token_factory()

        if user is not None:
            user.issue_password_reset_token(reset_token, self.clock() + self.reset_ttl)
            user.touch()
            user = self.repository.save(user)
            logger.info("Password reset requested for user id=%s", user.id)
            self.notifier.send_password_reset(user.email, self._display_name(user), reset_token)

        return FORGOT_PASSWORD_MESSAGE

    def reset_password(self, token: str, new_password: str) -> str:
        """
        Replace the password using a reset token. Also unlocks the account.

        Raises:
            TokenInvalid: No account holds this token
            TokenExpired: The token is past its expiry
        """
        user = self.repository.get_by_password_reset_token(token)
        if user is None:
            raise TokenInvalid("Invalid password reset token")

        if not user.is_password_reset_token_valid(self.clock()):
            raise TokenExpired("Password reset token has expired. Please request a new one.")

        user.hashed_password = get_password_hash(new_password)
        user.clear_password_reset_token()
        user.unlock()
        user.touch()
        user = self.repository.save(user)
        logger.info("Password reset completed for user id=%s", user.id)
        return RESET_PASSWORD_MESSAGE

    def resend_verification(self, email: str) -> str:
        """
        Issue a fresh verification token, replacing any previous one.

        Raises:
            NotFound: No account with this email
            AlreadyVerified: The email is already verified
        """
        user = self.repository.get_by_email(email)
        if user is None:
            raise NotFound("User not found")

        if user.is_email_verified:
            raise AlreadyVerified()

        verification_token = self.token_factory()
        user.issue_verification_token(verification_token, self.clock() + self.verification_ttl)
        user.touch()
        user = self.repository.save(user)

        self.notifier.send_verification(user.email, self._display_name(user), verification_token)
        return RESEND_VERIFICATION_MESSAGE

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _handle_failed_login(self, user: User) -> None:
        user.register_failed_login(MAX_FAILED_LOGIN_ATTEMPTS)
        user.touch()
        self.repository.save(user)
        if user.is_locked:
            logger.warning("Account locked after %s failed logins: user id=%s", user.failed_login_attempts, user.id)
        else:
            logger.info("Failed login for user id=%s (%s/%s)", user.id, user.failed_login_attempts,
                        MAX_FAILED_LOGIN_ATTEMPTS)

    @staticmethod
    def _display_name(user: User) -> str:
        return user.first_name or user.full_name
