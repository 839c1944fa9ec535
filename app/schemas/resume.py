"""
Resume API schemas.

Section models mirror what the frontend editor sends. Unknown fields are
ignored, which also drops any client-supplied owner id.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PersonalInfo(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    website: Optional[str] = None
    linked_in: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    profile_image: Optional[str] = None


class Education(BaseModel):
    degree: Optional[str] = None
    field_of_study: Optional[str] = None
    institution: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    grade: Optional[str] = None
    description: Optional[str] = None


class Experience(BaseModel):
    job_title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current_job: bool = False
    description: Optional[str] = None
    achievements: list[str] = Field(default_factory=list)


class Skill(BaseModel):
    name: str
    category: Optional[str] = None
    level: Optional[str] = None


class Project(BaseModel):
    name: str
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    url: Optional[str] = None
    technologies: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)


class Certification(BaseModel):
    name: str
    issuer: Optional[str] = None
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None


class Language(BaseModel):
    name: str
    proficiency: Optional[str] = None


class ResumeBase(BaseModel):
    title: str = Field("Untitled Resume", min_length=1, max_length=200)
    template: str = Field("modern", min_length=1, max_length=50)
    color_theme: str = Field("blue", min_length=1, max_length=50)
    content: Optional[str] = None
    summary: Optional[str] = None
    personal_info: Optional[PersonalInfo] = None
    education: list[Education] = Field(default_factory=list)
    experience: list[Experience] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    languages: list[Language] = Field(default_factory=list)


class ResumeCreate(ResumeBase):
    """Schema for creating a resume."""


class ResumeUpdate(ResumeBase):
    """Schema for replacing the editable fields of a resume."""


class ResumeTitleUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)


class ResumeTemplateUpdate(BaseModel):
    template: str = Field(..., min_length=1, max_length=50)


class ResumeThemeUpdate(BaseModel):
    color_theme: str = Field(..., min_length=1, max_length=50)


class ResumeResponse(ResumeBase):
    """Schema for a resume in API responses."""

    id: int
    user_id: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


class ResumeCount(BaseModel):
    count: int
