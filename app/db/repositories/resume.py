"""
Resume repository.

Handles database operations for :class:`Resume`. Every lookup that returns a
single resume is keyed by (resume id, owner id).
"""

from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.resume import Resume


class ResumeRepository:
    """Repository for Resume database operations."""

    def __init__(self, session: Session):
        self.session = session

    def save(self, resume: Resume) -> Resume:
        self.session.add(resume)
        self.session.commit()
        self.session.refresh(resume)
        return resume

    def get_by_owner(self, user_id: int) -> list[Resume]:
        statement = (select(Resume).where(Resume.user_id == user_id)
                     .order_by(Resume.updated_at.desc(), Resume.id.desc()))
        return list(self.session.exec(statement).all())

    def get_by_id_and_owner(self, resume_id: int, user_id: int) -> Optional[Resume]:
        statement = select(Resume).where(Resume.id == resume_id, Resume.user_id == user_id)
        return self.session.exec(statement).first()

    def search_by_owner_and_title(self, user_id: int, term: str) -> list[Resume]:
        """Resumes of ``user_id`` whose title contains ``term``.

        Matching is case-sensitive and done in Python so it does not depend on
        the database collation (SQLite's LIKE ignores case).
        """
        return [resume for resume in self.get_by_owner(user_id) if term in (resume.title or "")]

    def count_by_owner(self, user_id: int) -> int:
        statement = select(func.count()).select_from(Resume).where(Resume.user_id == user_id)
        return self.session.exec(statement).first() or 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def delete(self, resume: Resume) -> None:
        self.session.delete(resume)
        self.session.commit()

    def delete_by_owner(self, user_id: int, commit: bool = True) -> int:
        """Delete every resume of ``user_id`` and return how many were removed."""
        resumes = self.get_by_owner(user_id)
        for resume in resumes:
            self.session.delete(resume)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return len(resumes)
