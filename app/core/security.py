"""
Security primitives.

Password hashing (passlib / argon2) and the bearer token codec
(python-jose, HS256). Both are stateless and safe to share across requests.
"""

import datetime
import time
from typing import Callable, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.exceptions import TokenInvalid

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against a stored hash.

    Malformed hashes count as a mismatch.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


class TokenCodec:
    """
    Issues and verifies signed, time-bound bearer tokens.

    The payload carries exactly one identity claim (``sub``) plus ``iat`` and
    ``exp``. Tokens are stateless: nothing is stored server side, so a token
    stays valid until it expires.

    Args:
        secret_key: Symmetric signing key
        algorithm: JWS algorithm (HMAC family)
        expires_delta: Token time-to-live
        clock: Returns the current UNIX time in seconds
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256",
                 expires_delta: datetime.timedelta = datetime.timedelta(hours=24),
                 clock: Callable[[], float] = time.time):
        if not secret_key:
            raise ValueError("Token signing key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_delta = expires_delta
        self._clock = clock

    @property
    def expires_in_seconds(self) -> int:
        return int(self._expires_delta.total_seconds())

    def issue(self, identity: str) -> str:
        """
        Create a signed token for ``identity``.

        Args:
            identity: Subject claim (the user's email)

        Returns:
            Compact JWS string
        """
        now = int(self._clock())
        payload = {
            "sub": identity,
            "iat": now,
            "exp": now + self.expires_in_seconds,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """
        Verify a token and return its subject.

        Raises:
            TokenInvalid: Bad signature, unparseable payload, missing claims,
                or ``exp`` at or before the current time
        """
        try:
            # Expiry is checked below against the injected clock (strict).
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm],
                                 options={"verify_exp": False, "verify_iat": False, "verify_aud": False})
        except JWTError as exc:
            raise TokenInvalid("Invalid or expired token") from exc

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(subject, str) or not subject:
            raise TokenInvalid("Invalid or expired token")
        if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
            raise TokenInvalid("Invalid or expired token")
        if expires_at <= self._clock():
            raise TokenInvalid("Invalid or expired token")
        return subject

    def matches_identity(self, token: str, expected_identity: Optional[str]) -> bool:
        """Return True if ``token`` is valid and its subject equals ``expected_identity``."""
        try:
            return self.verify(token) == expected_identity
        except TokenInvalid:
            return False
