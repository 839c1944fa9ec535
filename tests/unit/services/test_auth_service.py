"""
Unit tests for the account-security state machine.

Registration, login precedence and lockout, email verification, password
reset and verification resend, run against an in-memory database.
"""

import datetime

import pytest

from app.core.clock import ensure_utc
from app.core.exceptions import (AccountDisabled, AccountLocked, AlreadyVerified, Conflict, EmailNotVerified,
                                 InvalidCredentials, NotFound, TokenExpired, TokenInvalid, )
from app.models.user import AccountStatus
from app.schemas.user import UserCreate, UserLogin
from app.services.auth_service import (FORGOT_PASSWORD_MESSAGE, MAX_FAILED_LOGIN_ATTEMPTS, AuthService, )
from conftest import TEST_PASSWORD


@pytest.fixture
def service(user_repository, token_codec, notifier, clock) -> AuthService:
    return AuthService(user_repository, token_codec, notifier, clock=clock)


def _registration(email: str = "alice@example.com", password: str = TEST_PASSWORD) -> UserCreate:
    return UserCreate(first_name="Alice", last_name="Smith", email=email, password=password)


def _fail_logins(service: AuthService, email: str, times: int) -> None:
    for _ in range(times):
        with pytest.raises((InvalidCredentials, AccountLocked)):
            service.login(UserLogin(email=email, password="wrong-password"))


# ======================================================================
# register
# ======================================================================


class TestRegister:

    def test_new_account_is_unverified_with_token(self, service, clock):
        user = service.register(_registration())
        assert user.id is not None
        assert user.status == AccountStatus.UNVERIFIED
        assert user.is_email_verified is False
        assert user.failed_login_attempts == 0
        assert user.verification_token
        assert ensure_utc(user.verification_token_expiry) == clock.now + datetime.timedelta(hours=24)

    def test_password_is_hashed(self, service):
        user = service.register(_registration())
        assert user.hashed_password != TEST_PASSWORD

    def test_verification_email_dispatched(self, service, notifier):
        user = service.register(_registration())
        assert notifier.verifications == [("alice@example.com", "Alice", user.verification_token)]

    def test_duplicate_email_conflicts(self, service, notifier):
        service.register(_registration())
        with pytest.raises(Conflict):
            service.register(_registration())
        assert len(notifier.verifications) == 1


# ======================================================================
# login
# ======================================================================


class TestLogin:

    def test_success_returns_bearer_token(self, service, verified_user, token_codec):
        token = service.login(UserLogin(email=verified_user.email, password=TEST_PASSWORD))
        assert token.token_type == "bearer"
        assert token.expires_in == 86400
        assert token_codec.verify(token.access_token) == verified_user.email
        assert token.user.email == verified_user.email

    def test_public_summary_hides_secrets(self, service, verified_user):
        token = service.login(UserLogin(email=verified_user.email, password=TEST_PASSWORD))
        dumped = token.user.model_dump()
        assert "hashed_password" not in dumped
        assert "verification_token" not in dumped
        assert "password_reset_token" not in dumped

    def test_unknown_email(self, service):
        with pytest.raises(InvalidCredentials):
            service.login(UserLogin(email="nobody@example.com", password=TEST_PASSWORD))

    def test_wrong_password_increments_counter(self, service, verified_user, user_repository):
        _fail_logins(service, verified_user.email, 2)
        user = user_repository.get_by_email(verified_user.email)
        assert user.failed_login_attempts == 2
        assert user.status == AccountStatus.ACTIVE

    def test_success_resets_counter(self, service, verified_user, user_repository):
        _fail_logins(service, verified_user.email, 3)
        service.login(UserLogin(email=verified_user.email, password=TEST_PASSWORD))
        assert user_repository.get_by_email(verified_user.email).failed_login_attempts == 0

    def test_lockout_after_threshold(self, service, verified_user, user_repository):
        _fail_logins(service, verified_user.email, MAX_FAILED_LOGIN_ATTEMPTS)
        user = user_repository.get_by_email(verified_user.email)
        assert user.status == AccountStatus.LOCKED
        assert user.failed_login_attempts == MAX_FAILED_LOGIN_ATTEMPTS

        # Correct password no longer helps
        with pytest.raises(AccountLocked):
            service.login(UserLogin(email=verified_user.email, password=TEST_PASSWORD))

    def test_locked_account_does_not_count_further_attempts(self, service, verified_user, user_repository):
        _fail_logins(service, verified_user.email, MAX_FAILED_LOGIN_ATTEMPTS + 2)
        assert user_repository.get_by_email(verified_user.email).failed_login_attempts == MAX_FAILED_LOGIN_ATTEMPTS

    def test_disabled_account(self, service, make_user):
        user = make_user(email="off@example.com", is_active=False)
        with pytest.raises(AccountDisabled):
            service.login(UserLogin(email=user.email, password=TEST_PASSWORD))

    def test_lock_checked_before_disabled(self, service, make_user):
        user = make_user(email="both@example.com", is_active=False, status=AccountStatus.LOCKED)
        with pytest.raises(AccountLocked):
            service.login(UserLogin(email=user.email, password=TEST_PASSWORD))

    def test_unverified_with_correct_password(self, service, make_user):
        user = make_user(email="new@example.com", verified=False)
        with pytest.raises(EmailNotVerified):
            service.login(UserLogin(email=user.email, password=TEST_PASSWORD))

    def test_unverified_with_wrong_password_counts_attempt(self, service, make_user, user_repository):
        user = make_user(email="new@example.com", verified=False)
        with pytest.raises(InvalidCredentials):
            service.login(UserLogin(email=user.email, password="wrong-password"))
        assert user_repository.get_by_email(user.email).failed_login_attempts == 1


# ======================================================================
# verify_email
# ======================================================================


class TestVerifyEmail:

    def test_activates_and_clears_token(self, service, user_repository, notifier):
        user = service.register(_registration())
        token = user.verification_token

        service.verify_email(token)

        user = user_repository.get_by_email("alice@example.com")
        assert user.status == AccountStatus.ACTIVE
        assert user.is_email_verified
        assert user.verification_token is None
        assert user.verification_token_expiry is None
        assert notifier.welcomes == [("alice@example.com", "Alice")]

    def test_unknown_token(self, service):
        with pytest.raises(TokenInvalid):
            service.verify_email("no-such-token")

    def test_token_cannot_be_reused(self, service):
        token = service.register(_registration()).verification_token
        service.verify_email(token)
        with pytest.raises(TokenInvalid):
            service.verify_email(token)

    def test_expired_token(self, service, clock, user_repository):
        token = service.register(_registration()).verification_token
        clock.advance(hours=25)
        with pytest.raises(TokenExpired):
            service.verify_email(token)
        assert user_repository.get_by_email("alice@example.com").status == AccountStatus.UNVERIFIED

    def test_expiry_instant_is_expired(self, service, clock):
        token = service.register(_registration()).verification_token
        clock.advance(hours=24)
        with pytest.raises(TokenExpired):
            service.verify_email(token)

    def test_locked_account_stays_locked(self, service, user_repository):
        user = service.register(_registration())
        token = user.verification_token
        _fail_logins(service, user.email, MAX_FAILED_LOGIN_ATTEMPTS)

        service.verify_email(token)

        user = user_repository.get_by_email(user.email)
        assert user.is_email_verified
        assert user.status == AccountStatus.LOCKED


# ======================================================================
# forgot_password / reset_password
# ======================================================================


class TestPasswordReset:

    def test_forgot_password_issues_reset_token(self, service, verified_user, user_repository, notifier, clock):
        assert service.forgot_password(verified_user.email) == FORGOT_PASSWORD_MESSAGE
        user = user_repository.get_by_email(verified_user.email)
        assert user.password_reset_token
        assert ensure_utc(user.password_reset_token_expiry) == clock.now + datetime.timedelta(hours=1)
        assert notifier.resets == [(user.email, "Bob", user.password_reset_token)]

    def test_forgot_password_unknown_email(self, service, user_repository, notifier, verified_user):
        before = user_repository.get_by_email(verified_user.email).updated_at

        assert service.forgot_password("nobody@example.com") == FORGOT_PASSWORD_MESSAGE

        assert notifier.total == 0
        assert user_repository.get_by_email(verified_user.email).updated_at == before
        assert user_repository.get_by_email("nobody@example.com") is None

    def test_unknown_email_takes_the_same_token_path(self, user_repository, token_codec, notifier, clock):
        minted = []

        def token_factory():
            minted.append("token")
            return f"token-{len(minted)}"

        service = AuthService(user_repository, token_codec, notifier, clock=clock, token_factory=token_factory)
        service.forgot_password("nobody@example.com")

        assert minted == ["token"]
        assert user_repository.get_by_password_reset_token("token-1") is None
        assert notifier.total == 0

    def test_reset_replaces_password(self, service, verified_user, user_repository):
        service.forgot_password(verified_user.email)
        token = user_repository.get_by_email(verified_user.email).password_reset_token

        service.reset_password(token, "BrandNewPass1")

        user = user_repository.get_by_email(verified_user.email)
        assert user.password_reset_token is None
        assert user.password_reset_token_expiry is None
        service.login(UserLogin(email=user.email, password="BrandNewPass1"))
        with pytest.raises(InvalidCredentials):
            service.login(UserLogin(email=user.email, password=TEST_PASSWORD))

    def test_reset_clears_lock_and_counter(self, service, verified_user, user_repository):
        _fail_logins(service, verified_user.email, MAX_FAILED_LOGIN_ATTEMPTS)
        service.forgot_password(verified_user.email)
        token = user_repository.get_by_email(verified_user.email).password_reset_token

        service.reset_password(token, "BrandNewPass1")

        user = user_repository.get_by_email(verified_user.email)
        assert user.status == AccountStatus.ACTIVE
        assert user.failed_login_attempts == 0
        assert service.login(UserLogin(email=user.email, password="BrandNewPass1")).access_token

    def test_reset_unlocks_unverified_account_back_to_unverified(self, service, make_user, user_repository):
        user = make_user(email="new@example.com", verified=False)
        _fail_logins(service, user.email, MAX_FAILED_LOGIN_ATTEMPTS)
        service.forgot_password(user.email)

        service.reset_password(user_repository.get_by_email(user.email).password_reset_token, "BrandNewPass1")

        assert user_repository.get_by_email(user.email).status == AccountStatus.UNVERIFIED

    def test_reset_unknown_token(self, service):
        with pytest.raises(TokenInvalid):
            service.reset_password("no-such-token", "BrandNewPass1")

    def test_reset_expired_token(self, service, verified_user, user_repository, clock):
        service.forgot_password(verified_user.email)
        token = user_repository.get_by_email(verified_user.email).password_reset_token
        clock.advance(hours=1)
        with pytest.raises(TokenExpired):
            service.reset_password(token, "BrandNewPass1")


# ======================================================================
# resend_verification
# ======================================================================


class TestResendVerification:

    def test_replaces_token(self, service, user_repository, notifier):
        first = service.register(_registration()).verification_token

        service.resend_verification("alice@example.com")

        second = user_repository.get_by_email("alice@example.com").verification_token
        assert second and second != first
        assert notifier.verifications[-1][2] == second
        with pytest.raises(TokenInvalid):
            service.verify_email(first)

    def test_unknown_email(self, service):
        with pytest.raises(NotFound):
            service.resend_verification("nobody@example.com")

    def test_already_verified(self, service, verified_user):
        with pytest.raises(AlreadyVerified):
            service.resend_verification(verified_user.email)


# ======================================================================
# End to end
# ======================================================================


class TestRegistrationScenario:

    def test_register_verify_login(self, service, token_codec):
        """Login is refused until the email is verified, then succeeds."""
        user = service.register(_registration())

        with pytest.raises(EmailNotVerified):
            service.login(UserLogin(email="alice@example.com", password=TEST_PASSWORD))

        service.verify_email(user.verification_token)
        token = service.login(UserLogin(email="alice@example.com", password=TEST_PASSWORD))

        assert token_codec.verify(token.access_token) == "alice@example.com"


# ======================================================================
# Persisted timestamps
# ======================================================================


class TestPersistedTimestamps:

    def test_expiry_survives_reload(self, service, session, user_repository, clock):
        """Expiries read back from the database still compare against the clock."""
        token = service.register(_registration()).verification_token
        session.expire_all()

        user = user_repository.get_by_email("alice@example.com")
        assert ensure_utc(user.verification_token_expiry) == clock.now + datetime.timedelta(hours=24)
        assert user.is_verification_token_valid(clock.now)
        assert user.is_verification_token_valid(clock.now + datetime.timedelta(hours=25)) is False

        service.verify_email(token)
        assert user_repository.get_by_email("alice@example.com").status == AccountStatus.ACTIVE

    def test_reset_expiry_survives_reload(self, service, session, verified_user, user_repository, clock):
        service.forgot_password(verified_user.email)
        session.expire_all()

        user = user_repository.get_by_email(verified_user.email)
        assert user.is_password_reset_token_valid(clock.now)
        service.reset_password(user.password_reset_token, "BrandNewPass1")
        assert user_repository.get_by_email(verified_user.email).password_reset_token is None
