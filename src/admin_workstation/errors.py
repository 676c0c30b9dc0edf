from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


NO_TENANT_MESSAGE = "No tenant found"


class ErrorCategory(str, Enum):
    UNAUTHORIZED = "unauthorized"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    TRANSIENT = "transient"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class WorkstationError(Exception):
    message: str
    category: ErrorCategory = ErrorCategory.UNKNOWN
    status_code: int | None = None
    inner_error: Exception | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message

    @property
    def recovery_suggestion(self) -> str | None:
        if self.category is ErrorCategory.UNAUTHORIZED:
            return "Sign in again with an account that belongs to a tenant."
        if self.category is ErrorCategory.VALIDATION:
            return "Review the highlighted fields and try again."
        if self.category is ErrorCategory.CONFLICT:
            return "An item with the same name already exists. Choose a different name."
        if self.category is ErrorCategory.NOT_FOUND:
            return "The item may have been removed. Refresh and try again."
        if self.category is ErrorCategory.TRANSIENT:
            return "The service could not be reached. Retry the operation shortly."
        if self.category is ErrorCategory.CONFIGURATION:
            return "The workstation is not configured for this view."
        return None

    @property
    def is_retriable(self) -> bool:
        return self.category is ErrorCategory.TRANSIENT


class UnauthorizedError(WorkstationError):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.UNAUTHORIZED,
            status_code=401,
        )


class ValidationError(WorkstationError):
    def __init__(self, message: str, *, fields: tuple[str, ...] = ()) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            status_code=400,
        )
        self.fields = fields


class ConflictError(WorkstationError):
    def __init__(self, message: str = "Resource already exists") -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.CONFLICT,
            status_code=409,
        )


class NotFoundError(WorkstationError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.NOT_FOUND,
            status_code=404,
        )


class TransientFailureError(WorkstationError):
    def __init__(
        self,
        message: str = "Service unavailable",
        *,
        status_code: int | None = None,
        inner_error: Exception | None = None,
    ) -> None:
        super().__init__(
            message=message,
            category=ErrorCategory.TRANSIENT,
            status_code=status_code,
            inner_error=inner_error,
        )


class ConfigurationError(WorkstationError):
    def __init__(self, message: str) -> None:
        super().__init__(message=message, category=ErrorCategory.CONFIGURATION)


__all__ = [
    "NO_TENANT_MESSAGE",
    "ErrorCategory",
    "WorkstationError",
    "UnauthorizedError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "TransientFailureError",
    "ConfigurationError",
]
