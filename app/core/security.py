"""
Token and password primitives.

Tokens are HS256 JWTs carrying the user id. New tokens use the flat
{"id": ...} claim; tokens minted by the older nested {"user": {"id": ...}}
issuer are still accepted on verify.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import bcrypt
import jwt

from app.core.errors import (
    ConfigurationError,
    MalformedTokenError,
    TokenExpiredError,
    TokenSignatureError,
)

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    def __init__(
        self,
        secret: str,
        expires_in: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._secret = secret
        self.expires_in = expires_in
        self._clock = clock

    def _signing_key(self) -> str:
        if not self._secret:
            raise ConfigurationError("JWT_SECRET is not configured")
        return self._secret

    def issue(self, subject: str) -> str:
        now = self._clock()
        payload = {
            "id": subject,
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_in).timestamp()),
        }
        return jwt.encode(payload, self._signing_key(), algorithm=ALGORITHM)

    def decode(self, token: str) -> Dict[str, Any]:
        """Check the signature and return the raw claims.

        Library-side expiry is switched off here; `verify` compares `exp`
        against the service clock itself before reading anything else.
        """
        try:
            return jwt.decode(
                token,
                self._signing_key(),
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "require": ["exp"]},
            )
        except jwt.InvalidSignatureError as e:
            logger.warning(f"JWT signature validation failed: {e}")
            raise TokenSignatureError()
        except jwt.InvalidTokenError as e:
            logger.warning(f"Malformed JWT token: {e}")
            raise MalformedTokenError()

    def is_expired(self, claims: Dict[str, Any]) -> bool:
        exp = claims.get("exp")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise MalformedTokenError()
        return exp <= self._clock().timestamp()

    def verify(self, token: str) -> str:
        """Return the user id the token was issued for."""
        claims = self.decode(token)
        if self.is_expired(claims):
            raise TokenExpiredError()

        subject = extract_subject(claims)
        if not subject:
            raise MalformedTokenError()
        return subject


def extract_subject(claims: Dict[str, Any]) -> Optional[str]:
    """Read the user id from either {id} or {user: {id}}."""
    if claims.get("id"):
        return str(claims["id"])
    user = claims.get("user")
    if isinstance(user, dict) and user.get("id"):
        return str(user["id"])
    return None


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False
