"""Typed business errors.

Every error a request can legitimately end in is one of these classes. The
API layer maps them to status codes and the uniform
``{"success": false, "error": ..., "details"?: [...]}`` body.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class FieldError:
    """A single per-field validation message."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class CodeCollabError(Exception):
    """Base class for all classified business errors."""

    status_code: int = 400

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(CodeCollabError):
    """Raised when input fails schema validation."""

    status_code = 400

    def __init__(self, details: list[FieldError], message: str = "Validation error") -> None:
        self.details = details
        super().__init__(message)


class AuthError(CodeCollabError):
    """Raised for bad credentials and missing, invalid or expired tokens."""

    status_code = 401


class ForbiddenError(CodeCollabError):
    """Raised when the caller is authenticated but may not touch the resource."""

    status_code = 403


class NotFoundError(CodeCollabError):
    """Raised when a resource or identity does not exist."""

    status_code = 404


class ConflictError(CodeCollabError):
    """Raised on a uniqueness violation (email or username)."""

    status_code = 409

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)
