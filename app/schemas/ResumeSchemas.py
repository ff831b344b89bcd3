import pydantic
from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict
from datetime import datetime
from beanie import Document, Indexed


class PersonalInfo(BaseModel):
    fullName: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    summary: Optional[str] = None

    # clients send extra contact fields (location, linkedin, ...)
    model_config = pydantic.ConfigDict(extra="allow", coerce_numbers_to_str=True)


class Skills(BaseModel):
    technical: List[Any] = Field(default_factory=list)
    soft: List[Any] = Field(default_factory=list)

    # e.g. "languages" from the generation prompt
    model_config = pydantic.ConfigDict(extra="allow")


class ResumeContent(BaseModel):
    """Fields a client may overwrite on update. Only keys the client actually
    sent are merged, so every field is optional."""
    personalInfo: Optional[PersonalInfo] = None
    experience: Optional[List[Dict[str, Any]]] = None
    education: Optional[List[Dict[str, Any]]] = None
    skills: Optional[Skills] = None
    projects: Optional[List[Dict[str, Any]]] = None
    certifications: Optional[List[Any]] = None
    accessibility: Optional[Dict[str, Any]] = None
    template: Optional[str] = None


class ResumeUpdate(ResumeContent):
    pass


class ResumeCreate(ResumeContent):
    aiGenerated: bool = False
    aiPrompt: Optional[str] = None


class ResumeBase(ResumeContent):
    userId: str
    aiGenerated: bool = False
    aiPrompt: Optional[str] = None
    # doubles as the soft-delete flag
    isActive: bool = True
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class ResumeDoc(Document, ResumeBase):
    userId: Indexed(str)

    class Settings:
        name = "resumes"


class Resume(ResumeBase):
    id: Optional[str] = None

    model_config = pydantic.ConfigDict(from_attributes=True)


class GenerateResumeRequest(BaseModel):
    prompt: Optional[str] = None
    template: Optional[str] = None


class ResumeListResponse(BaseModel):
    """Envelope returned by GET /api/resume: { status, data }"""
    status: str = "success"
    data: List[Resume] = Field(default_factory=list)


class ResumeSingleResponse(BaseModel):
    """Envelope for a single resume: { status, data, message? }"""
    status: str = "success"
    message: Optional[str] = None
    data: Optional[Resume] = None


class UploadedResumeResponse(BaseModel):
    status: str = "success"
    message: str = "Resume uploaded successfully"
    data: Dict[str, Any]


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
