from __future__ import annotations

import pytest

from admin_workstation.services import EventHook, MutationStatus, run_optimistic_mutation


def test_unsubscribe_stops_delivery() -> None:
    hook: EventHook[str] = EventHook()
    received: list[str] = []
    unsubscribe = hook.subscribe(received.append)

    hook.emit("first")
    unsubscribe()
    hook.emit("second")

    assert received == ["first"]


def test_failing_subscriber_does_not_block_others() -> None:
    hook: EventHook[int] = EventHook()
    received: list[int] = []

    def explode(_payload: int) -> None:
        raise RuntimeError("subscriber bug")

    hook.subscribe(explode)
    hook.subscribe(received.append)

    hook.emit(7)

    assert received == [7]


@pytest.mark.asyncio
async def test_optimistic_mutation_reports_each_phase() -> None:
    hook: EventHook[tuple[MutationStatus, Exception | None]] = EventHook()
    phases: list[tuple[MutationStatus, Exception | None]] = []
    hook.subscribe(phases.append)

    async def archive() -> int:
        assert phases == [(MutationStatus.PENDING, None)]
        return 2

    updated = await run_optimistic_mutation(
        emitter=hook,
        event_builder=lambda status, error: (status, error),
        operation=archive,
    )

    assert updated == 2
    assert [status for status, _ in phases] == [
        MutationStatus.PENDING,
        MutationStatus.SUCCEEDED,
    ]


@pytest.mark.asyncio
async def test_optimistic_mutation_reraises_after_failed_event() -> None:
    hook: EventHook[tuple[MutationStatus, Exception | None]] = EventHook()
    phases: list[tuple[MutationStatus, Exception | None]] = []
    hook.subscribe(phases.append)
    error = LookupError("missing user")

    async def archive() -> int:
        raise error

    with pytest.raises(LookupError):
        await run_optimistic_mutation(
            emitter=hook,
            event_builder=lambda status, exc: (status, exc),
            operation=archive,
        )

    assert phases[-1] == (MutationStatus.FAILED, error)
