"""Domain layer errors.

Every failure the domain reports carries a stable ``kind`` that the
interface layer turns into an error envelope and status code.
"""

from enum import Enum
from typing import ClassVar

from pydantic import ValidationError as PydanticValidationError


class ErrorKind(str, Enum):
    """Stable, client-visible failure categories."""

    NOT_FOUND = "NotFound"
    FORBIDDEN = "Forbidden"
    FORBIDDEN_SELF_VOTE = "ForbiddenSelfVote"
    INVALID_OPERATION = "InvalidOperation"
    VALIDATION_ERROR = "ValidationError"
    CONFLICT = "Conflict"
    INTERNAL_ERROR = "InternalError"


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Domain validation error (field length or enum violations)."""

    kind = ErrorKind.VALIDATION_ERROR

    @classmethod
    def from_pydantic(cls, error: PydanticValidationError) -> "ValidationError":
        """Summarize a pydantic validation failure."""
        details = []
        for item in error.errors():
            location = ".".join(str(part) for part in item["loc"])
            details.append(f"{location}: {item['msg']}" if location else item["msg"])
        return cls("; ".join(details) or "Invalid input")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the principal lacks rights for an operation."""

    kind = ErrorKind.FORBIDDEN


class NotAuthorizedError(ForbiddenError):
    """Raised when a user attempts to change content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class SelfVoteError(ForbiddenError):
    """Raised when a user votes on their own question or answer."""

    kind = ErrorKind.FORBIDDEN_SELF_VOTE

    def __init__(self, resource: str):
        super().__init__(f"You cannot vote on your own {resource}")


class InvalidOperationError(DomainError):
    """Raised when an operation violates business rules."""

    kind = ErrorKind.INVALID_OPERATION


class ConflictError(DomainError):
    """Raised when a uniqueness race could not be reconciled."""

    kind = ErrorKind.CONFLICT
