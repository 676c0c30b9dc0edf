"""HTTP adapters for the admin REST API."""

from .client import AdminApiClient, ApiClientConfig, ApiTelemetryEvent
from .providers import (
    RemoteFilterPresetStore,
    RemoteMutationService,
    RemoteStatsProvider,
)

__all__ = [
    "AdminApiClient",
    "ApiClientConfig",
    "ApiTelemetryEvent",
    "RemoteFilterPresetStore",
    "RemoteMutationService",
    "RemoteStatsProvider",
]
