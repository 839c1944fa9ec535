"""
Resume endpoints.

CRUD for the authenticated user's resumes. Every call is scoped to the
principal; another user's resume answers 404.
"""

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_current_principal, get_resume_service
from app.core.auth_gate import Principal
from app.core.exceptions import QuotaExceeded
from app.schemas.resume import (ResumeCount, ResumeCreate, ResumeResponse, ResumeTemplateUpdate, ResumeThemeUpdate,
                                ResumeTitleUpdate, ResumeUpdate, )
from app.schemas.user import MessageResponse
from app.services.resume_service import MAX_FREE_RESUMES, ResumeService

router = APIRouter()


@router.post("", summary="Create a resume.", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED, )
def create_resume(data: ResumeCreate, principal: Principal = Depends(get_current_principal),
                  service: ResumeService = Depends(get_resume_service), ):
    if not service.can_create_more(principal.user_id, principal.is_premium):
        raise QuotaExceeded(f"Free accounts are limited to {MAX_FREE_RESUMES} resumes. Upgrade to premium for more.")
    return service.create(principal.user_id, data)


@router.get("", summary="List the current user's resumes.", response_model=list[ResumeResponse])
def list_resumes(principal: Principal = Depends(get_current_principal),
                 service: ResumeService = Depends(get_resume_service), ):
    return service.list_for_owner(principal.user_id)


# Static paths must be declared before "/{resume_id}".
@router.get("/search", summary="Search resumes by title.", response_model=list[ResumeResponse])
def search_resumes(q: str = Query(..., min_length=1, description="Case-sensitive title fragment"),
                   principal: Principal = Depends(get_current_principal),
                   service: ResumeService = Depends(get_resume_service), ):
    return service.search(principal.user_id, q)


@router.get("/count", summary="Count the current user's resumes.", response_model=ResumeCount)
def count_resumes(principal: Principal = Depends(get_current_principal),
                  service: ResumeService = Depends(get_resume_service), ):
    return ResumeCount(count=service.count(principal.user_id))


@router.get("/{resume_id}", summary="Get a resume.", response_model=ResumeResponse)
def get_resume(resume_id: int, principal: Principal = Depends(get_current_principal),
               service: ResumeService = Depends(get_resume_service), ):
    return service.get(resume_id, principal.user_id)


@router.put("/{resume_id}", summary="Replace a resume's editable fields.", response_model=ResumeResponse)
def update_resume(resume_id: int, data: ResumeUpdate, principal: Principal = Depends(get_current_principal),
                  service: ResumeService = Depends(get_resume_service), ):
    return service.update(resume_id, principal.user_id, data)


@router.patch("/{resume_id}/title", summary="Rename a resume.", response_model=ResumeResponse)
def update_title(resume_id: int, data: ResumeTitleUpdate, principal: Principal = Depends(get_current_principal),
                 service: ResumeService = Depends(get_resume_service), ):
    return service.update_title(resume_id, principal.user_id, data.title)


@router.patch("/{resume_id}/template", summary="Change a resume's template.", response_model=ResumeResponse)
def update_template(resume_id: int, data: ResumeTemplateUpdate,
                    principal: Principal = Depends(get_current_principal),
                    service: ResumeService = Depends(get_resume_service), ):
    return service.update_template(resume_id, principal.user_id, data.template)


@router.patch("/{resume_id}/theme", summary="Change a resume's colour theme.", response_model=ResumeResponse)
def update_theme(resume_id: int, data: ResumeThemeUpdate, principal: Principal = Depends(get_current_principal),
                 service: ResumeService = Depends(get_resume_service), ):
    return service.update_color_theme(resume_id, principal.user_id, data.color_theme)


@router.delete("/{resume_id}", summary="Delete a resume.", response_model=MessageResponse)
def delete_resume(resume_id: int, principal: Principal = Depends(get_current_principal),
                  service: ResumeService = Depends(get_resume_service), ):
    service.delete(resume_id, principal.user_id)
    return MessageResponse(message="Resume deleted successfully")
