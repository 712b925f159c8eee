"""Result type shared by the service layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure kinds a service operation can report."""

    INVALID_IDENTIFIER = "invalid_identifier"
    NOT_FOUND = "not_found"
    INACTIVE_ACCOUNT = "inactive_account"
    ACCOUNT_INACTIVE = "account_inactive"
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    TOKEN_ISSUE_FAILED = "token_issue_failed"
    MISSING_PRINCIPAL = "missing_principal"
    FORBIDDEN = "forbidden"
    UNKNOWN = "unknown"


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a service operation.

    On success ``value`` holds the payload. On failure ``error`` names the
    kind and ``detail`` carries a message that is safe to show to clients.
    """

    success: bool
    value: T | None = None
    error: ErrorKind | None = None
    detail: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "ServiceResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: ErrorKind, detail: str) -> "ServiceResult[T]":
        return cls(success=False, error=error, detail=detail)
