from __future__ import annotations

from dataclasses import dataclass

from admin_workstation.api import (
    AdminApiClient,
    ApiClientConfig,
    RemoteFilterPresetStore,
    RemoteMutationService,
    RemoteStatsProvider,
)
from admin_workstation.auth import Actor
from admin_workstation.config import Settings
from admin_workstation.data import (
    DatabaseConfig,
    DatabaseManager,
    DirectoryUserRepository,
    FilterPresetRepository,
    QuickStats,
    TeamMemberRepository,
)
from admin_workstation.services import (
    FilterPresetService,
    ServiceRegistry,
    TeamMemberService,
    UserDirectoryService,
    UserStatsService,
)
from admin_workstation.utils import get_logger
from admin_workstation.workstation import WorkstationController, WorkstationSession


logger = get_logger(__name__)


@dataclass(slots=True)
class ServiceBundle:
    registry: ServiceRegistry
    database: DatabaseManager | None = None
    api_client: AdminApiClient | None = None

    async def aclose(self) -> None:
        if self.api_client is not None:
            await self.api_client.close()
        if self.database is not None:
            self.database.dispose()


def build_local_registry(database: DatabaseManager) -> ServiceRegistry:
    users = DirectoryUserRepository(database)
    directory = UserDirectoryService(users)
    stats = UserStatsService(users)
    presets = FilterPresetService(FilterPresetRepository(database))
    return ServiceRegistry(
        directory=directory,
        team_members=TeamMemberService(TeamMemberRepository(database)),
        stats=stats,
        mutations=directory,
        presets=presets,
        local_stats=stats,
        local_presets=presets,
    )


def build_services(
    settings: Settings,
    *,
    database: DatabaseManager | None = None,
    api_client: AdminApiClient | None = None,
) -> ServiceBundle:
    """Wire local SQLite services, swapping in API adapters when a base URL is set.

    The admin API exposes stats, bulk mutations and presets but no directory
    listing, so in remote mode ``registry.directory`` and ``team_members``
    still read the local store. Bulk changes applied through the API only show
    up in ``load_directory()`` once the local directory is re-imported.
    """

    db = database or DatabaseManager(DatabaseConfig.from_settings(settings))
    db.ensure_schema()
    registry = build_local_registry(db)

    if not settings.uses_remote_api and api_client is None:
        logger.info("Using local workstation store", path=str(db.config.path))
        return ServiceBundle(registry=registry, database=db)

    client = api_client or AdminApiClient(ApiClientConfig.from_settings(settings))
    registry.stats = RemoteStatsProvider(client)
    registry.mutations = RemoteMutationService(client)
    registry.presets = RemoteFilterPresetStore(client)
    registry.local_stats = None
    registry.local_presets = None
    logger.info("Using remote admin API", base_url=client.base_url)
    logger.warning(
        "Directory listing reads the local store while mutations go to the admin API",
        path=str(db.config.path),
    )
    return ServiceBundle(registry=registry, database=db, api_client=client)


def build_workstation(
    registry: ServiceRegistry,
    actor: Actor | None,
    *,
    initial_stats: QuickStats | None = None,
) -> WorkstationController:
    session = WorkstationSession(
        tenant_id=actor.tenant_id if actor else None,
        stats_provider=registry.stats,
        mutations=registry.mutations,
        initial_stats=initial_stats,
    )
    return WorkstationController(session, registry, actor)


__all__ = [
    "ServiceBundle",
    "build_local_registry",
    "build_services",
    "build_workstation",
]
