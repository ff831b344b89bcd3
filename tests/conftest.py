"""
Shared fixtures: in-memory stand-ins for the MongoDB stores and a wired-up
set of services, so workflows and routes run without a database.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from app.api.deps import Services
from app.core.errors import ConflictError
from app.core.security import TokenService
from app.schemas.ResumeSchemas import Resume
from app.schemas.UserSchemas import User
from app.services.auth_service import AuthService
from app.services.resume_service import ResumeService
from app.services.taxonomy_proxy import TaxonomyProxy

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class InMemoryUserStore:
    def __init__(self):
        self.users: Dict[str, User] = {}

    async def exists(self, email: str) -> bool:
        return any(u.email == email for u in self.users.values())

    async def create(self, user: User) -> User:
        if await self.exists(user.email):
            raise ConflictError("User already exists")
        stored = user.model_copy(update={"id": str(ObjectId())})
        self.users[stored.id] = stored
        return stored

    async def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)


class InMemoryResumeStore:
    def __init__(self):
        self.resumes: Dict[str, Resume] = {}

    async def create(self, resume: Resume) -> Resume:
        stored = resume.model_copy(update={"id": str(ObjectId())})
        self.resumes[stored.id] = stored
        return stored

    async def list_active_by_owner(self, user_id: str) -> List[Resume]:
        owned = [r for r in self.resumes.values() if r.userId == user_id and r.isActive]
        return sorted(owned, key=lambda r: r.updatedAt, reverse=True)

    async def get(self, resume_id: str) -> Optional[Resume]:
        return self.resumes.get(resume_id)

    async def save(self, resume: Resume) -> Resume:
        self.resumes[resume.id] = resume
        return resume


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def resume_store():
    return InMemoryResumeStore()


@pytest.fixture
def auth_service(user_store, token_service):
    return AuthService(user_store, token_service)


@pytest.fixture
def generator():
    gen = MagicMock()
    gen.generate = AsyncMock(return_value={
        "personalInfo": {"fullName": "Jane Doe", "summary": "Backend engineer"},
        "experience": [{"company": "Acme", "position": "Engineer"}],
        "skills": ["Python", "MongoDB"],
    })
    return gen


@pytest.fixture
def resume_service(resume_store, generator):
    return ResumeService(resume_store, generator)


@pytest.fixture
def taxonomy_proxy():
    proxy = MagicMock(spec=TaxonomyProxy)
    proxy.forward = AsyncMock(return_value=[{"uuid": "s1", "name": "python"}])
    return proxy


@pytest.fixture
def services(token_service, auth_service, resume_service, taxonomy_proxy):
    return Services(
        tokens=token_service,
        auth=auth_service,
        resumes=resume_service,
        taxonomy=taxonomy_proxy,
    )


@pytest.fixture
def client(services):
    from fastapi.testclient import TestClient
    from main import app

    # no context manager: the lifespan (and its MongoDB connection) is skipped
    app.state.services = services
    yield TestClient(app, raise_server_exceptions=False)
    del app.state.services


@pytest.fixture
def stored_resume(resume_store):
    """Put a resume straight into the store, last updated `minutes_ago` minutes back."""
    async def _stored(user_id: str, minutes_ago: int = 0, **fields) -> Resume:
        stamp = datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)
        return await resume_store.create(Resume(userId=user_id, createdAt=stamp, updatedAt=stamp, **fields))
    return _stored
