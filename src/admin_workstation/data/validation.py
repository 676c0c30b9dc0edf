from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Type, TypeVar

from pydantic import ValidationError

from admin_workstation.data.models import DomainModel
from admin_workstation.utils import get_logger


logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=DomainModel)


@dataclass(slots=True)
class ValidationIssue:
    """A malformed item dropped from an admin API listing."""

    resource: str
    identifier: str | None
    fields: tuple[str, ...] = field(default_factory=tuple)


class PayloadValidator:
    """Parse admin API items, skipping and recording the malformed ones."""

    def __init__(self, resource: str) -> None:
        self._resource = resource
        self._issues: list[ValidationIssue] = []

    def parse(self, model: Type[ModelT], payload: dict[str, Any]) -> ModelT | None:
        try:
            return model.from_api(payload)
        except ValidationError as exc:
            self._record(payload, exc)
            return None

    def parse_many(
        self,
        model: Type[ModelT],
        payloads: Iterable[dict[str, Any]],
    ) -> list[ModelT]:
        parsed = (self.parse(model, payload) for payload in payloads)
        return [item for item in parsed if item is not None]

    def issues(self) -> list[ValidationIssue]:
        return list(self._issues)

    def _record(self, payload: Any, exc: ValidationError) -> None:
        raw_id = payload.get("id") if isinstance(payload, dict) else None
        issue = ValidationIssue(
            resource=self._resource,
            identifier=str(raw_id) if raw_id is not None else None,
            fields=tuple(
                ".".join(str(segment) for segment in error.get("loc", ()))
                for error in exc.errors()
            ),
        )
        self._issues.append(issue)
        logger.warning(
            "Dropped malformed API item",
            resource=self._resource,
            identifier=issue.identifier,
            fields=", ".join(issue.fields) or "unknown",
        )


__all__ = ["PayloadValidator", "ValidationIssue"]
