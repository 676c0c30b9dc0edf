from __future__ import annotations

from admin_workstation.errors import NO_TENANT_MESSAGE, UnauthorizedError
from admin_workstation.utils import get_logger

from .types import Actor, TenantActor


logger = get_logger(__name__)


def require_actor(actor: Actor | None) -> TenantActor:
    """Reject anonymous or tenant-less callers before they reach a service."""

    if actor is None or not actor.user_id:
        logger.warning("Rejected unauthenticated request")
        raise UnauthorizedError("Unauthorized")
    if not actor.tenant_id:
        logger.warning("Rejected request without tenant", user_id=actor.user_id)
        raise UnauthorizedError(NO_TENANT_MESSAGE)
    return TenantActor(
        user_id=actor.user_id,
        tenant_id=actor.tenant_id,
        display_name=actor.display_name,
    )


__all__ = ["require_actor"]
