"""Token response schemas."""

from pydantic import BaseModel

from app.schemas.user import UserResponse


class Token(BaseModel):
    """Schema for a successful login."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
