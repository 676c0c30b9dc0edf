from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from admin_workstation.errors import ConfigurationError

from .session import WorkstationSession


MISSING_SCOPE_MESSAGE = "use_workstation requires a WorkstationScope bound to a session"


class WorkstationScope:
    """Explicit holder for the session a presentation tree works against."""

    def __init__(self, session: WorkstationSession | None = None) -> None:
        self._session = session

    @property
    def session(self) -> WorkstationSession | None:
        return self._session

    def bind(self, session: WorkstationSession | None) -> None:
        self._session = session

    @contextmanager
    def provide(self, session: WorkstationSession) -> Iterator[WorkstationSession]:
        """Bind ``session`` for the duration of the block, restoring the previous one."""

        previous = self._session
        self._session = session
        try:
            yield session
        finally:
            self._session = previous


def use_workstation(scope: WorkstationScope | None) -> WorkstationSession:
    if scope is None or scope.session is None:
        raise ConfigurationError(MISSING_SCOPE_MESSAGE)
    return scope.session


__all__ = ["WorkstationScope", "use_workstation"]
