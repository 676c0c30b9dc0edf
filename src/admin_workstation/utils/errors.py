from __future__ import annotations

import asyncio
import socket
from dataclasses import dataclass
from enum import Enum

import httpx
from pydantic import ValidationError as PydanticValidationError

from admin_workstation.errors import ErrorCategory, WorkstationError


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(slots=True)
class ErrorDescriptor:
    headline: str
    detail: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    transient: bool = False
    suggestion: str | None = None


_NETWORK_ERRNOS = {
    getattr(socket, "EAI_AGAIN", None),
    getattr(socket, "EAI_FAIL", None),
    getattr(socket, "EAI_NONAME", None),
    getattr(socket, "EHOSTUNREACH", None),
    getattr(socket, "ENETDOWN", None),
    getattr(socket, "ENETUNREACH", None),
    getattr(socket, "ECONNREFUSED", None),
    getattr(socket, "ECONNRESET", None),
    getattr(socket, "ETIMEDOUT", None),
}
_NETWORK_ERRNOS.discard(None)


def describe_exception(error: Exception) -> ErrorDescriptor:
    descriptor = ErrorDescriptor(
        headline="Operation failed.",
        detail=f"{type(error).__name__}: {error}",
        severity=ErrorSeverity.ERROR,
        transient=False,
    )

    workstation_error = _locate_workstation_error(error)
    if workstation_error is not None:
        descriptor.detail = str(workstation_error)
        descriptor.suggestion = workstation_error.recovery_suggestion
        descriptor.transient = workstation_error.is_retriable
        if workstation_error.category in {
            ErrorCategory.TRANSIENT,
            ErrorCategory.VALIDATION,
            ErrorCategory.CONFLICT,
        }:
            descriptor.severity = ErrorSeverity.WARNING
        descriptor.headline = _workstation_headline(workstation_error)
        return descriptor

    root = _unwrap_error(error)

    if isinstance(root, PydanticValidationError):
        fields = ", ".join(
            ".".join(str(segment) for segment in item.get("loc", ()))
            for item in root.errors()
        )
        descriptor.headline = "Some fields are invalid."
        descriptor.detail = fields or str(root)
        descriptor.severity = ErrorSeverity.WARNING
        descriptor.suggestion = "Review the highlighted fields and try again."
        return descriptor

    if isinstance(root, httpx.TimeoutException):
        descriptor.headline = "Temporary timeout contacting the admin API."
        descriptor.detail = f"{type(root).__name__}: {root}"
        descriptor.severity = ErrorSeverity.WARNING
        descriptor.transient = True
        descriptor.suggestion = "Check your network connection and retry shortly."
        return descriptor

    if isinstance(root, asyncio.TimeoutError):
        descriptor.headline = "Operation timed out before the service responded."
        descriptor.detail = "asyncio.TimeoutError: Operation timed out"
        descriptor.severity = ErrorSeverity.WARNING
        descriptor.transient = True
        descriptor.suggestion = "Retry the request after verifying connectivity."
        return descriptor

    if isinstance(root, OSError) and getattr(root, "errno", None) in _NETWORK_ERRNOS:
        descriptor.headline = "Network connection issue encountered."
        descriptor.detail = f"OSError[{root.errno}]: {root.strerror}"
        descriptor.severity = ErrorSeverity.WARNING
        descriptor.transient = True
        descriptor.suggestion = "Retry once your connection is stable."
        return descriptor

    return descriptor


def _locate_workstation_error(error: Exception) -> WorkstationError | None:
    current: BaseException | None = error
    visited: set[int] = set()
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        if isinstance(current, WorkstationError):
            return current
        current = current.__cause__ or current.__context__
    return None


def _unwrap_error(error: Exception) -> BaseException:
    current: BaseException = error
    visited: set[int] = set()
    while True:
        visited.add(id(current))
        inner = current.__cause__ or current.__context__
        if inner is None or id(inner) in visited:
            return current
        current = inner


def _workstation_headline(error: WorkstationError) -> str:
    match error.category:
        case ErrorCategory.UNAUTHORIZED:
            return "You are not signed in to a tenant."
        case ErrorCategory.VALIDATION:
            return "The request is missing required information."
        case ErrorCategory.CONFLICT:
            return "The requested change conflicts with existing data."
        case ErrorCategory.NOT_FOUND:
            return "The requested item could not be found."
        case ErrorCategory.TRANSIENT:
            return "The service is temporarily unavailable."
        case ErrorCategory.CONFIGURATION:
            return "The workstation is not available here."
        case _:
            return "Operation failed."


__all__ = [
    "ErrorDescriptor",
    "ErrorSeverity",
    "describe_exception",
]
