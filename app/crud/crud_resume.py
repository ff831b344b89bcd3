from typing import List, Optional

from beanie import PydanticObjectId
from bson import ObjectId

from app.crud.crud_user import persistence_errors
from app.schemas.ResumeSchemas import Resume, ResumeDoc
from app.tools.serializers import serialize_document


def _to_resume(doc: ResumeDoc) -> Resume:
    return Resume.model_validate(serialize_document(doc, exclude=["revision_id"]))


class CRUDResume:
    """Resume store backed by the `resumes` collection. Ownership and the
    active flag are enforced by the resume service, not here."""

    async def create(self, resume: Resume) -> Resume:
        with persistence_errors():
            doc = ResumeDoc(**resume.model_dump(exclude={"id"}))
            await doc.insert()
        return _to_resume(doc)

    async def list_active_by_owner(self, user_id: str) -> List[Resume]:
        with persistence_errors():
            docs = await ResumeDoc.find({"userId": user_id, "isActive": True}).sort("-updatedAt").to_list()
        return [_to_resume(d) for d in docs]

    async def get(self, resume_id: str) -> Optional[Resume]:
        if not ObjectId.is_valid(resume_id):
            return None
        with persistence_errors():
            doc = await ResumeDoc.get(PydanticObjectId(resume_id))
        return _to_resume(doc) if doc else None

    async def save(self, resume: Resume) -> Resume:
        """Overwrite the stored record (last write wins)."""
        with persistence_errors():
            doc = ResumeDoc(id=PydanticObjectId(resume.id), **resume.model_dump(exclude={"id"}))
            await doc.save()
        return _to_resume(doc)
