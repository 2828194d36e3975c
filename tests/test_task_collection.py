# tests/test_task_collection.py

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import date, timedelta

import pytest

from cleannest.cli.bootstrap import create_initial_state
from cleannest.config import Delays
from cleannest.core.errors import RecordNotFoundError, ValidationError
from cleannest.core.models import TaskCategory, TaskPatch

from .fakes import EPOCH, FakeClock, sign_in

WEEKLY_TITLES = {"Vacuum living room", "Clean bathroom mirrors"}


@pytest.mark.asyncio
async def test_signed_out_collection_is_empty_and_idle(state) -> None:
    assert state.tasks.tasks == ()
    assert state.tasks.loading is False


@pytest.mark.asyncio
async def test_sign_in_loads_seed_tasks(state) -> None:
    await sign_in(state)

    tasks = state.tasks.tasks
    assert [t.id for t in tasks] == ["1", "2", "3", "4", "5"]
    assert all(t.user_id == "mock-user-123" for t in tasks)
    assert state.tasks.loading is False


@pytest.mark.asyncio
async def test_filter_weekly_returns_seeded_weekly_tasks(state) -> None:
    await sign_in(state)

    weekly = state.tasks.by_category("weekly")

    assert {t.title for t in weekly} == WEEKLY_TITLES
    assert len(state.tasks.by_category(TaskCategory.DAILY)) == 2
    assert len(state.tasks.by_category("monthly")) == 1
    assert len(state.tasks.by_category("all")) == 5


@pytest.mark.asyncio
async def test_add_prepends_new_task_with_defaults(state) -> None:
    await sign_in(state)
    before = state.tasks.ids()

    task = await state.tasks.add(title="  Dust shelves ", category="monthly", description="")

    assert task is not None
    assert len(state.tasks) == 6
    assert state.tasks.tasks[0] == task
    assert task.id not in before
    assert task.id.startswith("task-")
    assert task.title == "Dust shelves"
    assert task.description is None
    assert task.due_date is None
    assert task.completed is False
    assert task.user_id == "mock-user-123"
    assert task.created_at == task.updated_at


@pytest.mark.asyncio
async def test_add_ids_are_unique(state) -> None:
    await sign_in(state)

    added = [await state.tasks.add(title=f"Chore {n}", category="daily") for n in range(10)]

    assert len({t.id for t in added if t is not None}) == 10
    assert len(state.tasks) == 15


@pytest.mark.asyncio
async def test_add_parses_iso_due_date(state) -> None:
    await sign_in(state)

    task = await state.tasks.add(title="Wash windows", category="weekly", due_date="2024-07-04")

    assert task is not None
    assert task.due_date == date(2024, 7, 4)


@pytest.mark.asyncio
async def test_add_without_user_is_noop(state) -> None:
    result = await state.tasks.add(title="Mop", category="daily")

    assert result is None
    assert len(state.tasks) == 0


@pytest.mark.asyncio
async def test_add_rejects_bad_input_before_delay(state, sleeper) -> None:
    await sign_in(state)
    calls_before = len(sleeper.calls)

    with pytest.raises(ValidationError):
        await state.tasks.add(title="Mop", category="yearly")
    with pytest.raises(ValidationError):
        await state.tasks.add(title="   ", category="daily")
    with pytest.raises(ValidationError):
        await state.tasks.add(title="Mop", category="daily", due_date="next tuesday")

    assert len(state.tasks) == 5
    assert len(sleeper.calls) == calls_before


@pytest.mark.asyncio
async def test_update_merges_fields_and_bumps_updated_at(state) -> None:
    await sign_in(state)
    before = state.tasks.get("3")
    assert before is not None

    applied = await state.tasks.update("3", TaskPatch(title="Clean all mirrors", description=None))

    after = state.tasks.get("3")
    assert applied is True
    assert after is not None
    assert after.title == "Clean all mirrors"
    assert after.description is None
    assert after.category == before.category
    assert after.created_at == before.created_at
    assert after.updated_at > before.updated_at


@pytest.mark.asyncio
async def test_updated_at_strictly_increases_with_frozen_clock(settings, sleeper) -> None:
    frozen = FakeClock(step=timedelta(0))
    state = create_initial_state(settings=settings, sleep=sleeper, clock=frozen)
    try:
        await sign_in(state)
        task = await state.tasks.add(title="Polish taps", category="weekly")
        assert task is not None

        await state.tasks.update(task.id, TaskPatch(category="daily"))
        first = state.tasks.get(task.id)
        await state.tasks.update(task.id, TaskPatch(category="monthly"))
        second = state.tasks.get(task.id)

        assert first is not None and second is not None
        assert task.created_at == EPOCH
        assert task.created_at < first.updated_at < second.updated_at
        assert second.category == TaskCategory.MONTHLY
    finally:
        state.close()


@pytest.mark.asyncio
async def test_update_unknown_id_is_noop(state) -> None:
    await sign_in(state)
    before = state.tasks.tasks

    applied = await state.tasks.update("missing", TaskPatch(title="x"))

    assert applied is False
    assert state.tasks.tasks == before


@pytest.mark.asyncio
async def test_unknown_id_raises_in_strict_mode(settings, sleeper, clock) -> None:
    state = create_initial_state(settings=replace(settings, strict_ids=True), sleep=sleeper, clock=clock)
    try:
        await sign_in(state)

        with pytest.raises(RecordNotFoundError) as exc:
            await state.tasks.update("missing", TaskPatch(completed=True))
        with pytest.raises(RecordNotFoundError):
            await state.tasks.delete("missing")

        assert str(exc.value) == "task not found: missing"
        assert len(state.tasks) == 5
    finally:
        state.close()


@pytest.mark.asyncio
async def test_invalid_patch_leaves_collection_unchanged(state) -> None:
    await sign_in(state)
    before = state.tasks.tasks

    with pytest.raises(ValidationError):
        await state.tasks.update("1", TaskPatch(category="hourly"))
    with pytest.raises(ValidationError):
        await state.tasks.update("1", TaskPatch(completed="yes"))

    assert state.tasks.tasks == before


@pytest.mark.asyncio
async def test_delete_removes_exactly_one(state) -> None:
    await sign_in(state)

    assert await state.tasks.delete("2") is True
    assert len(state.tasks) == 4
    assert state.tasks.get("2") is None

    assert await state.tasks.delete("2") is False
    assert len(state.tasks) == 4


@pytest.mark.asyncio
async def test_toggle_complete_round_trip(state) -> None:
    await sign_in(state)
    original = state.tasks.get("1")
    assert original is not None and original.completed is False

    await state.tasks.toggle_complete("1", True)
    assert state.tasks.get("1").completed is True

    await state.tasks.toggle_complete("1", False)
    assert state.tasks.get("1").completed is original.completed


@pytest.mark.asyncio
async def test_sign_out_then_load_is_empty(state) -> None:
    await sign_in(state)
    assert len(state.tasks) == 5

    await state.auth.sign_out()
    await state.tasks.load()

    assert state.tasks.tasks == ()
    assert state.tasks.loading is False


@pytest.mark.asyncio
async def test_refetch_discards_local_changes(state) -> None:
    await sign_in(state)
    await state.tasks.add(title="Temporary", category="daily")
    await state.tasks.delete("1")
    await state.tasks.toggle_complete("2", False)

    await state.tasks.refetch()

    assert [t.id for t in state.tasks] == ["1", "2", "3", "4", "5"]
    assert state.tasks.get("2").completed is True
    assert state.tasks.loading is False


@pytest.mark.asyncio
async def test_concurrent_updates_all_apply(state) -> None:
    await sign_in(state)

    await asyncio.gather(
        state.tasks.update("1", TaskPatch(title="A")),
        state.tasks.update("2", TaskPatch(title="B")),
        state.tasks.toggle_complete("3", True),
    )

    assert state.tasks.get("1").title == "A"
    assert state.tasks.get("2").title == "B"
    assert state.tasks.get("3").completed is True


@pytest.mark.asyncio
async def test_fast_delete_completes_before_slower_add(settings) -> None:
    delays = replace(Delays.zero(), create=0.05)
    state = create_initial_state(settings=replace(settings, delays=delays))
    try:
        await sign_in(state)

        pending_add = asyncio.create_task(state.tasks.add(title="Slow", category="daily"))
        await state.tasks.delete("1")

        assert not pending_add.done()
        assert len(state.tasks) == 4

        added = await pending_add
        assert state.tasks.tasks[0] == added
        assert len(state.tasks) == 5
    finally:
        state.close()


@pytest.mark.asyncio
async def test_load_discarded_when_user_signs_out_meanwhile(settings) -> None:
    delays = replace(Delays.zero(), load=0.05)
    state = create_initial_state(settings=replace(settings, delays=delays))
    try:
        await state.auth.sign_in("a@b.com", "x")
        assert state.tasks.loading is True

        await state.auth.sign_out()
        await state.tasks.wait_idle()

        assert state.tasks.tasks == ()
        assert state.tasks.loading is False
    finally:
        state.close()


@pytest.mark.asyncio
async def test_add_discarded_when_user_signs_out_meanwhile(settings) -> None:
    delays = replace(Delays.zero(), create=0.05)
    state = create_initial_state(settings=replace(settings, delays=delays))
    try:
        await sign_in(state)

        pending_add = asyncio.create_task(state.tasks.add(title="Late", category="daily"))
        await state.auth.sign_out()

        assert await pending_add is None
        assert state.tasks.tasks == ()
    finally:
        state.close()
