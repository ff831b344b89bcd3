import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pydantic

from app.core.errors import NotFoundError, ValidationError
from app.crud.crud_resume import CRUDResume
from app.schemas.ResumeSchemas import Resume, ResumeCreate, ResumeUpdate
from app.services.resume_generation import ResumeGenerator, fallback_resume_fields
from app.services.resume_normalization import empty_resume_fields, normalize_resume_fields

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "modern"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ResumeService:
    """Resume lifecycle for a single owner.

    A resume is only reachable while it is active and owned by the caller;
    every other case is reported as "Resume not found" so non-owners learn
    nothing about ids that exist.
    """

    def __init__(self, resumes: CRUDResume, generator: Optional[ResumeGenerator] = None):
        self.resumes = resumes
        self.generator = generator

    async def create(self, fields: ResumeCreate, user_id: str) -> Resume:
        # only what the client actually sent is copied
        present = fields.model_dump(exclude_unset=True)
        now = _now()
        resume = await self.resumes.create(Resume(
            **present,
            userId=user_id,
            isActive=True,
            createdAt=now,
            updatedAt=now,
        ))
        logger.info(f"Created resume {resume.id} for user {user_id} (aiGenerated={resume.aiGenerated})")
        return resume

    async def generate_and_create(self, prompt: Optional[str], template: Optional[str], user_id: str) -> Resume:
        template = template or DEFAULT_TEMPLATE
        generated = await self.generator.generate(prompt, template)

        ai_fields = {"template": template, "aiGenerated": True, "aiPrompt": prompt}
        try:
            fields = ResumeCreate.model_validate({**normalize_resume_fields(generated), **ai_fields})
        except pydantic.ValidationError as e:
            # well-formed JSON in the wrong shape degrades like unparseable output
            logger.warning(f"Generated resume did not match the resume model ({e.error_count()} errors); using fallback structure")
            fields = ResumeCreate.model_validate({**fallback_resume_fields(json.dumps(generated, default=str)), **ai_fields})
        return await self.create(fields, user_id)

    async def list(self, user_id: str) -> List[Resume]:
        return await self.resumes.list_active_by_owner(user_id)

    async def get(self, resume_id: str, user_id: str) -> Resume:
        resume = await self.resumes.get(resume_id)
        if resume is None or resume.userId != user_id or not resume.isActive:
            raise NotFoundError("Resume not found")
        return resume

    async def update(self, resume_id: str, fields: ResumeUpdate, user_id: str) -> Resume:
        existing = await self.get(resume_id, user_id)

        patch = fields.model_dump(exclude_unset=True)
        merged = {**existing.model_dump(), **patch, "updatedAt": _now()}
        resume = await self.resumes.save(Resume.model_validate(merged))
        logger.info(f"Updated resume {resume_id} ({', '.join(sorted(patch)) or 'no fields'})")
        return resume

    async def delete(self, resume_id: str, user_id: str) -> None:
        existing = await self.get(resume_id, user_id)
        await self.resumes.save(existing.model_copy(update={"isActive": False, "updatedAt": _now()}))
        logger.info(f"Deactivated resume {resume_id}")

    def extract_upload(self, filename: Optional[str], content: Optional[bytes]) -> Dict[str, Any]:
        """Placeholder extraction for an uploaded resume file.

        The file is not parsed; the caller gets the empty resume structure with
        the filename noted in the summary.
        """
        if not content:
            raise ValidationError("No file uploaded")
        logger.info(f"Received resume upload {filename!r} ({len(content)} bytes)")
        return empty_resume_fields(summary=f"File uploaded: {filename}")
