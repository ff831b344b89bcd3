from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile, status

from app.api.deps import get_current_user_id, get_resume_service
from app.schemas.ResumeSchemas import (
    GenerateResumeRequest,
    MessageResponse,
    ResumeCreate,
    ResumeListResponse,
    ResumeSingleResponse,
    ResumeUpdate,
    UploadedResumeResponse,
)
from app.services.resume_service import ResumeService

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ResumeSingleResponse,
             response_model_exclude_none=True)
async def create_resume(
    body: ResumeCreate,
    user_id: str = Depends(get_current_user_id),
    resumes: ResumeService = Depends(get_resume_service),
):
    return ResumeSingleResponse(data=await resumes.create(body, user_id))


@router.get("", response_model=ResumeListResponse, response_model_exclude_none=True)
async def read_resumes(
    user_id: str = Depends(get_current_user_id),
    resumes: ResumeService = Depends(get_resume_service),
):
    """Active resumes of the caller, most recently updated first."""
    return ResumeListResponse(data=await resumes.list(user_id))


@router.post("/generate", status_code=status.HTTP_201_CREATED, response_model=ResumeSingleResponse,
             response_model_exclude_none=True)
async def generate_resume(
    body: GenerateResumeRequest,
    user_id: str = Depends(get_current_user_id),
    resumes: ResumeService = Depends(get_resume_service),
):
    """
    Generate resume content from a free-text prompt with Gemini and store it
    as a new resume owned by the caller.
    """
    resume = await resumes.generate_and_create(body.prompt, body.template, user_id)
    return ResumeSingleResponse(message="AI-generated resume created successfully", data=resume)


@router.post("/upload", response_model=UploadedResumeResponse)
async def upload_resume(
    resume: Optional[UploadFile] = File(None),
    resumes: ResumeService = Depends(get_resume_service),
):
    content = await resume.read() if resume is not None else None
    filename = resume.filename if resume is not None else None
    return UploadedResumeResponse(data=resumes.extract_upload(filename, content))


@router.get("/{resume_id}", response_model=ResumeSingleResponse, response_model_exclude_none=True)
async def read_resume(
    resume_id: str,
    user_id: str = Depends(get_current_user_id),
    resumes: ResumeService = Depends(get_resume_service),
):
    return ResumeSingleResponse(data=await resumes.get(resume_id, user_id))


@router.put("/{resume_id}", response_model=ResumeSingleResponse, response_model_exclude_none=True)
async def update_resume(
    resume_id: str,
    body: ResumeUpdate,
    user_id: str = Depends(get_current_user_id),
    resumes: ResumeService = Depends(get_resume_service),
):
    return ResumeSingleResponse(data=await resumes.update(resume_id, body, user_id))


@router.delete("/{resume_id}", response_model=MessageResponse)
async def delete_resume(
    resume_id: str,
    user_id: str = Depends(get_current_user_id),
    resumes: ResumeService = Depends(get_resume_service),
):
    await resumes.delete(resume_id, user_id)
    return MessageResponse(message="Resume deleted successfully")
