from __future__ import annotations

from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class DomainModel(BaseModel):
    """Base class for workstation payload helpers."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=False,
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Self:
        """Hydrate a model from a camelCase API payload."""
        return cls.model_validate(payload)

    def to_api(self) -> dict[str, Any]:
        """Serialize to a camelCase API payload."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
        )


class TenantResource(DomainModel):
    """Identifier shared by tenant-owned resources."""

    id: str = Field(alias="id")
    tenant_id: str | None = Field(default=None, alias="tenantId")


class TimestampedResource(TenantResource):
    """Tenant resource including creation/update timestamps."""

    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
