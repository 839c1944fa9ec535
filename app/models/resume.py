"""
Resume database model.

Structured sections are stored as JSON columns; their shape is validated by
the API schemas before reaching the service layer.
"""

import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field, SQLModel

from app.core.clock import ensure_utc, utcnow


class Resume(SQLModel, table=True):
    """A resume owned by a single user.

    ``user_id`` is never trusted from client input: the service stamps it
    from the authenticated principal.
    """

    __tablename__ = "resumes"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    # Metadata
    title: str = Field(default="Untitled Resume", max_length=200, index=True)
    template: str = Field(default="modern", max_length=50)
    color_theme: str = Field(default="blue", max_length=50)

    # Free-form content
    content: Optional[str] = Field(default=None)
    summary: Optional[str] = Field(default=None)

    # Structured sections
    personal_info: Optional[dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    education: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    experience: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    skills: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    projects: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    certifications: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    languages: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime.datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    def touch(self) -> None:
        now = utcnow()
        self.updated_at = max(now, ensure_utc(self.updated_at)) if self.updated_at else now
