"""Authenticated caller definitions."""

from __future__ import annotations

from typing import NamedTuple


class Actor(NamedTuple):
    """The signed-in administrator resolved by the host application."""

    user_id: str
    """Identifier of the user performing the request."""

    tenant_id: str | None = None
    """Tenant the user belongs to; required for every tenant-scoped call."""

    display_name: str | None = None


class TenantActor(NamedTuple):
    """An actor whose tenant binding has been verified."""

    user_id: str
    tenant_id: str
    display_name: str | None = None


__all__ = ["Actor", "TenantActor"]
