"""
Resume service.

Ownership-checked CRUD over resumes. Every operation takes the owner id of
the authenticated principal; a resume id on its own never grants access.
"""

from typing import Any

from app.core.exceptions import NotFoundOrForbidden
from app.db.repositories.resume import ResumeRepository
from app.models.resume import Resume
from app.schemas.resume import ResumeCreate, ResumeUpdate

MAX_FREE_RESUMES = 3

_EDITABLE_FIELDS = ("title", "template", "color_theme", "content", "summary", "personal_info", "education",
                    "experience", "skills", "projects", "certifications", "languages",)


class ResumeService:
    """Service for resume business logic."""

    def __init__(self, repository: ResumeRepository):
        self.repository = repository

    def create(self, owner_id: int, data: ResumeCreate) -> Resume:
        # Owner always comes from the principal, never from the payload.
        resume = Resume(user_id=owner_id, **self._editable_values(data))
        return self.repository.save(resume)

    def list_for_owner(self, owner_id: int) -> list[Resume]:
        return self.repository.get_by_owner(owner_id)

    def get(self, resume_id: int, owner_id: int) -> Resume:
        resume = self.repository.get_by_id_and_owner(resume_id, owner_id)
        if resume is None:
            raise NotFoundOrForbidden("Resume not found or you don't have permission to access it")
        return resume

    def search(self, owner_id: int, term: str) -> list[Resume]:
        return self.repository.search_by_owner_and_title(owner_id, term)

    def count(self, owner_id: int) -> int:
        return self.repository.count_by_owner(owner_id)

    def update(self, resume_id: int, owner_id: int, data: ResumeUpdate) -> Resume:
        resume = self.get(resume_id, owner_id)
        for field, value in self._editable_values(data).items():
            setattr(resume, field, value)
        resume.touch()
        return self.repository.save(resume)

    def update_title(self, resume_id: int, owner_id: int, title: str) -> Resume:
        return self._update_field(resume_id, owner_id, "title", title)

    def update_template(self, resume_id: int, owner_id: int, template: str) -> Resume:
        return self._update_field(resume_id, owner_id, "template", template)

    def update_color_theme(self, resume_id: int, owner_id: int, color_theme: str) -> Resume:
        return self._update_field(resume_id, owner_id, "color_theme", color_theme)

    def delete(self, resume_id: int, owner_id: int) -> None:
        resume = self.get(resume_id, owner_id)
        self.repository.delete(resume)

    def delete_all_for_owner(self, owner_id: int) -> int:
        return self.repository.delete_by_owner(owner_id)

    def owns(self, resume_id: int, owner_id: int) -> bool:
        return self.repository.get_by_id_and_owner(resume_id, owner_id) is not None

    def can_create_more(self, owner_id: int, is_premium: bool) -> bool:
        """Premium owners are unlimited; everyone else gets ``MAX_FREE_RESUMES``."""
        if is_premium:
            return True
        return self.repository.count_by_owner(owner_id) < MAX_FREE_RESUMES

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _update_field(self, resume_id: int, owner_id: int, field: str, value: Any) -> Resume:
        resume = self.get(resume_id, owner_id)
        setattr(resume, field, value)
        resume.touch()
        return self.repository.save(resume)

    @staticmethod
    def _editable_values(data: ResumeCreate | ResumeUpdate) -> dict[str, Any]:
        values = data.model_dump(mode="json")
        return {field: values[field] for field in _EDITABLE_FIELDS}
