"""
Auth Service

Registration, login and current-user lookup on top of the user store and the
token service.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from app.core.errors import (
    AccountInactiveError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from app.core.security import TokenService, hash_password, verify_password
from app.crud.crud_user import CRUDUser
from app.schemas.UserSchemas import AuthResult, User, UserProfile, UserRole

logger = logging.getLogger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class AuthService:
    def __init__(self, users: CRUDUser, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        disabilityType: Optional[str] = None,
        phone: Optional[str] = None,
        role: Optional[UserRole] = None,
    ) -> AuthResult:
        if _blank(name) or _blank(email) or _blank(password):
            raise ValidationError("Name, email, and password are required")

        email = email.strip().lower()
        if await self.users.exists(email):
            raise ConflictError("User already exists")

        now = datetime.now(timezone.utc)
        user = await self.users.create(User(
            name=name,
            email=email,
            password=hash_password(password),
            disabilityType=disabilityType or "none",
            phone=phone or None,
            role=role or UserRole.JOB_SEEKER,
            isActive=True,
            createdAt=now,
            updatedAt=now,
        ))
        logger.info(f"Registered user {user.id} (role={user.role.value})")

        return AuthResult(token=self.tokens.issue(user.id), user=user.public())

    async def login(self, email: Optional[str], password: Optional[str]) -> AuthResult:
        if _blank(email) or _blank(password):
            raise ValidationError("Email and password are required")

        user = await self.users.find_by_email(email.strip().lower())
        # same error for unknown email and wrong password
        if user is None or not verify_password(password, user.password):
            raise InvalidCredentialsError("Invalid credentials")

        if not user.isActive:
            raise AccountInactiveError("Account is inactive. Please contact support.")

        logger.info(f"User {user.id} logged in")
        return AuthResult(token=self.tokens.issue(user.id), user=user.public())

    async def get_current_user(self, user_id: str) -> UserProfile:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user.profile()
