from datetime import datetime
from enum import Enum
from typing import List, Optional

import pydantic
from beanie import Document, Indexed
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"


class UserProfileBase(BaseModel):
    """Everything stored for a user except the password hash."""
    name: str
    email: str
    disabilityType: str = "none"
    phone: Optional[str] = None
    role: UserRole = UserRole.JOB_SEEKER
    isActive: bool = True
    profileCompleted: bool = False
    avatar: Optional[str] = None
    headline: Optional[str] = None
    summary: Optional[str] = None
    location: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class UserBase(UserProfileBase):
    # bcrypt hash, never the plain password
    password: str


class UserDoc(Document, UserBase):
    email: Indexed(str, unique=True)

    class Settings:
        name = "users"


class User(UserBase):
    """Stored user record as the workflows see it."""
    id: Optional[str] = None

    def profile(self) -> "UserProfile":
        return UserProfile.model_validate(self.model_dump(exclude={"password"}))

    def public(self) -> "PublicUser":
        return PublicUser(id=self.id, name=self.name, email=self.email)


class UserProfile(UserProfileBase):
    id: str

    model_config = pydantic.ConfigDict(from_attributes=True)


class PublicUser(BaseModel):
    id: str
    name: str
    email: str


# ---- request bodies ----
# Required fields are optional here so missing values reach the workflow and
# come back as the usual {status: "error", message} envelope.
class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    disabilityType: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[UserRole] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ---- response envelopes ----
class AuthResult(BaseModel):
    token: str
    user: PublicUser


class AuthResponse(BaseModel):
    status: str = "success"
    token: str
    user: PublicUser


class UserResponse(BaseModel):
    status: str = "success"
    data: UserProfile
