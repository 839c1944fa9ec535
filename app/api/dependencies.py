"""
Shared API dependencies.

Reusable FastAPI dependencies for authentication, database access and
service construction. Process-wide collaborators live on ``app.state`` and
are assembled in ``app.main``.
"""

import datetime
from typing import Optional

from fastapi import Depends, Request
from sqlmodel import Session

from app.core.auth_gate import AuthenticationGate, Principal
from app.core.config import settings
from app.core.exceptions import Unauthenticated
from app.core.security import TokenCodec
from app.db.repositories import ResumeRepository, UserRepository
from app.db.session import get_db
from app.services.auth_service import AuthService
from app.services.email_service import EmailService
from app.services.resume_service import ResumeService
from app.services.user_service import UserService


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_auth_gate(request: Request) -> AuthenticationGate:
    return request.app.state.auth_gate


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_auth_service(db: Session = Depends(get_db), token_codec: TokenCodec = Depends(get_token_codec),
                     email_service: EmailService = Depends(get_email_service), ) -> AuthService:
    return AuthService(UserRepository(db), token_codec, email_service,
                       verification_ttl=datetime.timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS),
                       reset_ttl=datetime.timedelta(hours=settings.PASSWORD_RESET_TOKEN_EXPIRE_HOURS), )


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db), ResumeRepository(db))


def get_resume_service(db: Session = Depends(get_db)) -> ResumeService:
    return ResumeService(ResumeRepository(db))


def get_optional_principal(request: Request, db: Session = Depends(get_db),
                           gate: AuthenticationGate = Depends(get_auth_gate), ) -> Optional[Principal]:
    """Resolve the bearer token once per request; None means anonymous."""
    current = getattr(request.state, "principal", None)
    principal = gate.authenticate(request.headers.get("Authorization"), UserRepository(db), current)
    request.state.principal = principal
    return principal


def get_current_principal(principal: Optional[Principal] = Depends(get_optional_principal)) -> Principal:
    """Require an authenticated principal; the error handler adds the Bearer challenge."""
    if principal is None:
        raise Unauthenticated()
    return principal
