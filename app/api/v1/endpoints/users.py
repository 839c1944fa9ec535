"""
User profile endpoints.

All routes act on the authenticated principal's own account.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_principal, get_user_service
from app.core.auth_gate import Principal
from app.schemas.user import MessageResponse, UserResponse, UserStats, UserUpdate
from app.services.user_service import UserService

router = APIRouter()


@router.get("/profile", summary="Get the current user's profile.", response_model=UserResponse)
def get_profile(principal: Principal = Depends(get_current_principal),
                service: UserService = Depends(get_user_service), ):
    return service.to_public(service.get_profile(principal.user_id))


@router.put("/profile", summary="Update the current user's profile.", response_model=UserResponse)
def update_profile(data: UserUpdate, principal: Principal = Depends(get_current_principal),
                   service: UserService = Depends(get_user_service), ):
    return service.to_public(service.update_profile(principal.user_id, data))


@router.get("/stats", summary="Account statistics.", response_model=UserStats)
def get_stats(principal: Principal = Depends(get_current_principal),
              service: UserService = Depends(get_user_service), ):
    return service.get_stats(principal.user_id)


@router.delete("/account", summary="Delete the current user and all their resumes.",
               response_model=MessageResponse, )
def delete_account(principal: Principal = Depends(get_current_principal),
                   service: UserService = Depends(get_user_service), ):
    service.delete_account(principal.user_id)
    return MessageResponse(message="Account deleted successfully")
