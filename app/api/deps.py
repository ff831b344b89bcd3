from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import Settings
from app.core.errors import AuthenticationError
from app.core.security import TokenService
from app.crud.crud_resume import CRUDResume
from app.crud.crud_user import CRUDUser
from app.services.auth_service import AuthService
from app.services.resume_generation import ResumeGenerator
from app.services.resume_service import ResumeService
from app.services.taxonomy_proxy import TaxonomyProxy


@dataclass
class Services:
    tokens: TokenService
    auth: AuthService
    resumes: ResumeService
    taxonomy: TaxonomyProxy


def build_services(settings: Settings) -> Services:
    """Wire stores, adapters and workflows from settings. Called once by the
    application lifespan; tests build their own with in-memory stores."""
    tokens = TokenService(settings.JWT_SECRET, expires_in=timedelta(days=settings.JWT_EXPIRES_DAYS))
    generator = ResumeGenerator(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        timeout_seconds=settings.GEMINI_TIMEOUT_SECONDS,
    )
    return Services(
        tokens=tokens,
        auth=AuthService(CRUDUser(), tokens),
        resumes=ResumeService(CRUDResume(), generator),
        taxonomy=TaxonomyProxy(settings.SKILLS_API_BASE_URL, settings.SKILLS_API_TIMEOUT_MS / 1000),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_auth_service(services: Services = Depends(get_services)) -> AuthService:
    return services.auth


def get_resume_service(services: Services = Depends(get_services)) -> ResumeService:
    return services.resumes


def get_taxonomy_proxy(services: Services = Depends(get_services)) -> TaxonomyProxy:
    return services.taxonomy


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    services: Services = Depends(get_services),
) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access denied. No token provided.")
    return services.tokens.verify(credentials.credentials)
