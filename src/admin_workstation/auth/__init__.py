"""Caller identity helpers for tenant-scoped services."""

from .session import require_actor
from .types import Actor, TenantActor

__all__ = ["Actor", "TenantActor", "require_actor"]
