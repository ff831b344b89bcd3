"""
Error taxonomy

Workflows raise these; the HTTP boundary in main.py is the only place that
turns them into status codes and the {status, message} envelope.
"""

from typing import Any, Optional


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, detail: Optional[Any] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        # upstream / internal detail, only surfaced outside production
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    status_code = 400
    default_message = "User already exists"


class InvalidCredentialsError(AppError):
    status_code = 400
    default_message = "Invalid credentials"


class AuthenticationError(AppError):
    status_code = 401
    default_message = "Authentication failed."


class TokenExpiredError(AuthenticationError):
    default_message = "Token expired. Please login again."


class TokenSignatureError(AuthenticationError):
    default_message = "Invalid token signature"


class MalformedTokenError(AuthenticationError):
    default_message = "Invalid token format."


class AccountInactiveError(AppError):
    status_code = 403
    default_message = "Account is inactive. Please contact support."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class PersistenceError(AppError):
    status_code = 500
    default_message = "Database error"


class UpstreamError(AppError):
    status_code = 502
    default_message = "Upstream service error"


class ConfigurationError(AppError):
    status_code = 503
    default_message = "Service is not configured"
