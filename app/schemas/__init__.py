from .UserSchemas import (
	UserRole,
	UserDoc,
	User,
	UserProfile,
	PublicUser,
	RegisterRequest,
	LoginRequest,
	AuthResult,
	AuthResponse,
	UserResponse,
)
from .ResumeSchemas import (
	PersonalInfo,
	Skills,
	ResumeContent,
	ResumeCreate,
	ResumeUpdate,
	ResumeDoc,
	Resume,
	GenerateResumeRequest,
	ResumeListResponse,
	ResumeSingleResponse,
	UploadedResumeResponse,
	MessageResponse,
)

__all__ = [
	"UserRole",
	"UserDoc",
	"User",
	"UserProfile",
	"PublicUser",
	"RegisterRequest",
	"LoginRequest",
	"AuthResult",
	"AuthResponse",
	"UserResponse",
	"PersonalInfo",
	"Skills",
	"ResumeContent",
	"ResumeCreate",
	"ResumeUpdate",
	"ResumeDoc",
	"Resume",
	"GenerateResumeRequest",
	"ResumeListResponse",
	"ResumeSingleResponse",
	"UploadedResumeResponse",
	"MessageResponse",
]
