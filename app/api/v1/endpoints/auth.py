"""
Authentication endpoints.

Handles registration, login, email verification and password recovery.
"""

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_auth_service
from app.schemas.token import Token
from app.schemas.user import (ForgotPasswordRequest, MessageResponse, ResendVerificationRequest,
                              ResetPasswordRequest, UserCreate, UserLogin, UserResponse, )
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/register",
             summary="User registration endpoint.",
             response_model=UserResponse,
             status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, service: AuthService = Depends(get_auth_service)):
    """
    Register a new user.

    The account starts unverified; a verification link is emailed.

    Raises:
        409: If email already registered
    """
    return UserResponse.model_validate(service.register(user_data))


@router.post("/login",
             summary="User login endpoint via Json.",
             response_model=Token)
def login(login_data: UserLogin, service: AuthService = Depends(get_auth_service)):
    """
    Authenticate user via JSON body.

    Returns:
        JWT access token and the public user summary
    """
    return service.login(login_data)


@router.get("/verify-email", summary="Confirm an email address.", response_model=MessageResponse)
def verify_email(token: str = Query(..., min_length=1), service: AuthService = Depends(get_auth_service)):
    return MessageResponse(message=service.verify_email(token))


@router.post("/forgot-password", summary="Request a password reset link.", response_model=MessageResponse)
def forgot_password(data: ForgotPasswordRequest, service: AuthService = Depends(get_auth_service)):
    return MessageResponse(message=service.forgot_password(data.email))


@router.post("/reset-password", summary="Set a new password with a reset token.", response_model=MessageResponse)
def reset_password(data: ResetPasswordRequest, service: AuthService = Depends(get_auth_service)):
    return MessageResponse(message=service.reset_password(data.token, data.new_password))


@router.post("/resend-verification", summary="Send a new verification link.", response_model=MessageResponse)
def resend_verification(data: ResendVerificationRequest, service: AuthService = Depends(get_auth_service)):
    return MessageResponse(message=service.resend_verification(data.email))


@router.get("/health", summary="Authentication service health check.")
def health():
    return {"status": "UP", "service": "auth"}
