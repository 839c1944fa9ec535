"""
Per-request authentication gate.

Turns an ``Authorization: Bearer <token>`` header into a :class:`Principal`.
The gate never raises: anything doubtful yields ``None`` and the route's own
dependency decides whether an anonymous request is acceptable.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import TokenInvalid
from app.core.security import TokenCodec
from app.db.repositories.user import UserRepository
from app.models.user import User

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

ROLE_USER = "ROLE_USER"
ROLE_PREMIUM = "ROLE_PREMIUM"


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request."""

    user_id: int
    email: str
    authorities: tuple[str, ...]
    is_premium: bool = False

    def has_authority(self, authority: str) -> bool:
        return authority in self.authorities


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of a ``Bearer`` header, or None for any other value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class AuthenticationGate:
    """Resolves bearer tokens against the user store."""

    def __init__(self, token_codec: TokenCodec):
        self.token_codec = token_codec

    def authenticate(self, authorization: Optional[str], users: UserRepository,
                     current: Optional[Principal] = None) -> Optional[Principal]:
        """
        Resolve the request's principal.

        Args:
            authorization: Raw ``Authorization`` header value
            users: Repository used to load the account
            current: Principal already attached to this request, if any

        Returns:
            The principal, or None when the request stays anonymous
        """
        token = extract_bearer_token(authorization)
        if token is None:
            return None

        try:
            subject = self.token_codec.verify(token)
        except TokenInvalid:
            logger.debug("Rejected bearer token: invalid or expired")
            return None
        if not subject:
            return None

        # Idempotent: a second pass on the same request keeps the first result.
        if current is not None:
            return current

        try:
            user = users.get_by_email(subject)
        except Exception:
            logger.exception("Could not load account while authenticating request")
            return None

        if not self._can_authenticate(user):
            logger.debug("Rejected bearer token: account missing, locked, unverified or disabled")
            return None

        # Re-check subject and expiry against the freshly loaded account.
        if not self.token_codec.matches_identity(token, user.email):
            return None

        return self.build_principal(user)

    @staticmethod
    def build_principal(user: User) -> Principal:
        # Authorities come from the stored account, never from token claims.
        authorities = [ROLE_USER]
        is_premium = user.is_premium_active()
        if is_premium:
            authorities.append(ROLE_PREMIUM)
        return Principal(user_id=user.id, email=user.email, authorities=tuple(authorities), is_premium=is_premium)

    @staticmethod
    def _can_authenticate(user: Optional[User]) -> bool:
        return (user is not None and user.id is not None and user.is_active and not user.is_locked
                and user.is_email_verified)
