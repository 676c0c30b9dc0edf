from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from admin_workstation.auth import Actor, require_actor
from admin_workstation.data import TeamMember, TeamMemberDraft, TeamMemberRepository
from admin_workstation.errors import ConflictError, NotFoundError, ValidationError
from admin_workstation.utils import get_logger, utc_now


logger = get_logger(__name__)

_FIELD_MESSAGES = {
    "name": "Team member name is required",
    "title": "Job title is required",
    "department": "Department is required",
}


def _draft_error(exc: PydanticValidationError) -> ValidationError:
    fields: list[str] = []
    message: str | None = None
    for error in exc.errors():
        location = error.get("loc", ())
        field = str(location[0]) if location else "payload"
        fields.append(field)
        if message is not None:
            continue
        if field == "email":
            text = str(error.get("msg", ""))
            message = "Invalid email format" if "Invalid email" in text else "Email is required"
        elif field == "status":
            message = "Status must be one of ACTIVE, INACTIVE, ON_LEAVE"
        else:
            message = _FIELD_MESSAGES.get(field, f"Invalid value for {field}")
    return ValidationError(message or "Invalid team member", fields=tuple(fields))


def parse_team_member_draft(data: Mapping[str, Any] | TeamMemberDraft) -> TeamMemberDraft:
    if isinstance(data, TeamMemberDraft):
        return data
    try:
        return TeamMemberDraft.model_validate(dict(data))
    except PydanticValidationError as exc:
        raise _draft_error(exc) from exc


class TeamMemberService:
    """Create and maintain the tenant's team member roster."""

    def __init__(
        self,
        repository: TeamMemberRepository,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def list_members(self, actor: Actor | None) -> list[TeamMember]:
        caller = require_actor(actor)
        return self._repository.list_all(tenant_id=caller.tenant_id)

    def get_member(self, actor: Actor | None, member_id: str) -> TeamMember:
        caller = require_actor(actor)
        member = self._repository.get(member_id, tenant_id=caller.tenant_id)
        if member is None:
            raise NotFoundError("Team member not found")
        return member

    def create_member(
        self,
        actor: Actor | None,
        data: Mapping[str, Any] | TeamMemberDraft,
    ) -> TeamMember:
        caller = require_actor(actor)
        draft = parse_team_member_draft(data)
        email = draft.email.lower()
        if self._repository.find_by_email(email, tenant_id=caller.tenant_id) is not None:
            raise ConflictError("A team member with this email already exists")

        now = self._clock()
        member = TeamMember(
            **draft.model_dump(exclude={"email"}),
            email=email,
            id=uuid4().hex,
            tenant_id=caller.tenant_id,
            created_at=now,
            updated_at=now,
        )
        stored = self._repository.add(member, tenant_id=caller.tenant_id)
        logger.info("Team member created", tenant_id=caller.tenant_id, member_id=stored.id)
        return stored

    def update_member(
        self,
        actor: Actor | None,
        member_id: str,
        changes: Mapping[str, Any],
    ) -> TeamMember:
        """Merge ``changes`` into the stored member and revalidate the result."""

        current = self.get_member(actor, member_id)
        caller = require_actor(actor)
        merged = {
            **current.model_dump(
                include=set(TeamMemberDraft.model_fields),
            ),
            **dict(changes),
        }
        draft = parse_team_member_draft(merged)
        email = draft.email.lower()
        existing = self._repository.find_by_email(email, tenant_id=caller.tenant_id)
        if existing is not None and existing.id != member_id:
            raise ConflictError("A team member with this email already exists")

        updated = current.model_copy(
            update={
                **draft.model_dump(exclude={"email"}),
                "email": email,
                "updated_at": self._clock(),
            },
        )
        stored = self._repository.replace(updated, tenant_id=caller.tenant_id)
        logger.info("Team member updated", tenant_id=caller.tenant_id, member_id=member_id)
        return stored


__all__ = ["TeamMemberService", "parse_team_member_draft"]
