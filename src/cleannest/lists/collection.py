# src/cleannest/lists/collection.py

from __future__ import annotations

"""
Generic in-memory collection manager.

Shared by the task list and the shopping list:
- follows the auth session (reloads on sign-in, empties on sign-out),
- simulates backend latency before every operation via an injected sleeper,
- applies each mutation against the collection as it is when the delay elapses.

Operations that resolve later are not reordered: a short delete can complete
before an update dispatched earlier with a longer delay.
"""

import asyncio
import logging
import uuid
from collections.abc import Iterator
from datetime import datetime, timedelta
from typing import Any, Generic, Protocol, TypeVar

from ..config import Delays
from ..core.errors import RecordNotFoundError
from ..core.models import User, utc_now
from ..core.ports import Clock, Sleeper, UserSource

logger = logging.getLogger(__name__)


class Record(Protocol):
    @property
    def id(self) -> str: ...

    @property
    def updated_at(self) -> datetime: ...


class Patch(Protocol):
    def changes(self) -> dict[str, Any]: ...
    def apply(self, record: Any, *, updated_at: datetime) -> Any: ...


RecordT = TypeVar("RecordT", bound=Record)
PatchT = TypeVar("PatchT", bound=Patch)


class CollectionManager(Generic[RecordT, PatchT]):
    """Base class; subclasses provide the seed, the id prefix and the add() signature."""

    kind = "record"
    id_prefix = "record"

    def __init__(
        self,
        session: UserSource,
        *,
        delays: Delays | None = None,
        sleep: Sleeper = asyncio.sleep,
        clock: Clock = utc_now,
        strict_ids: bool = False,
        seed_owner_id: str | None = None,
    ) -> None:
        self._session = session
        self._delays = delays or Delays()
        self._sleep = sleep
        self._clock = clock
        self._strict_ids = strict_ids
        self._seed_owner_id = seed_owner_id

        self._records: list[RecordT] = []
        self._loading = True
        self._pending: set[asyncio.Task[None]] = set()

        self._unsubscribe = session.subscribe(self._on_user_changed)
        self._on_user_changed(session.user)

    # ---- subclass hooks ----

    def _seed(self) -> list[RecordT]:
        raise NotImplementedError

    # ---- read side ----

    @property
    def records(self) -> tuple[RecordT, ...]:
        return tuple(self._records)

    @property
    def loading(self) -> bool:
        return self._loading

    def get(self, record_id: str) -> RecordT | None:
        idx = self._index_of(record_id)
        return None if idx is None else self._records[idx]

    def ids(self) -> set[str]:
        return {r.id for r in self._records}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(tuple(self._records))

    # ---- session tracking ----

    def _active_user(self) -> User | None:
        # Background loads may outlive the session scope; treat a closed session as signed out.
        if not self._session.is_open:
            return None
        return self._session.user

    def _on_user_changed(self, user: User | None) -> None:
        if user is None:
            self._records = []
            self._loading = False
            return
        self._loading = True
        self._schedule(self.load())

    def _schedule(self, coro: Any) -> None:
        try:
            task = asyncio.get_running_loop().create_task(coro)
        except RuntimeError:
            # No loop yet: the caller is expected to await load() itself.
            coro.close()
            logger.debug("%s load deferred: no running event loop", self.kind)
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def wait_idle(self) -> None:
        """Wait for background loads triggered by user changes."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def close(self) -> None:
        self._unsubscribe()
        for task in list(self._pending):
            if not task.done():
                task.cancel()

    # ---- helpers ----

    def _index_of(self, record_id: str) -> int | None:
        for idx, record in enumerate(self._records):
            if record.id == record_id:
                return idx
        return None

    def _new_id(self) -> str:
        taken = self.ids()
        while True:
            candidate = f"{self.id_prefix}-{uuid.uuid4().hex}"
            if candidate not in taken:
                return candidate

    def _next_timestamp(self, previous: datetime) -> datetime:
        """Current time, nudged forward so updated_at always strictly increases."""
        now = self._clock()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def _missing(self, op: str, record_id: str) -> bool:
        if self._strict_ids:
            raise RecordNotFoundError(self.kind, record_id)
        logger.warning("%s %s ignored: id=%s not found", self.kind, op, record_id)
        return False

    def _prepend(self, record: RecordT) -> None:
        self._records.insert(0, record)

    def _user_left(self, user: User, op: str) -> bool:
        """True when `user` is no longer the active one after a simulated delay."""
        if self._active_user() == user:
            return False
        logger.debug("%s %s discarded: user changed during the delay", self.kind, op)
        return True

    # ---- operations ----

    async def load(self) -> None:
        user = self._active_user()
        if user is None:
            self._records = []
            self._loading = False
            return

        await self._sleep(self._delays.load)

        if self._user_left(user, "load"):
            return
        self._records = self._seed()
        self._loading = False
        logger.info("Loaded %d %s records for user=%s", len(self._records), self.kind, user.id)

    async def refetch(self) -> None:
        """Re-seed the collection, discarding any in-memory changes."""
        self._loading = True
        await self._sleep(self._delays.load)

        self._records = self._seed() if self._active_user() is not None else []
        self._loading = False
        logger.info("Refetched %d %s records", len(self._records), self.kind)

    async def update(self, record_id: str, patch: PatchT) -> bool:
        """
        Merge `patch` into the record with `record_id` and bump updated_at.

        Returns False (or raises RecordNotFoundError in strict mode) for unknown ids.
        The patch is validated before the simulated delay.
        """
        changes = patch.changes()
        await self._sleep(self._delays.mutate)

        idx = self._index_of(record_id)
        if idx is None:
            return self._missing("update", record_id)

        current = self._records[idx]
        self._records[idx] = patch.apply(current, updated_at=self._next_timestamp(current.updated_at))
        logger.debug("%s updated id=%s fields=%s", self.kind, record_id, sorted(changes))
        return True

    async def delete(self, record_id: str) -> bool:
        await self._sleep(self._delays.mutate)

        idx = self._index_of(record_id)
        if idx is None:
            return self._missing("delete", record_id)

        del self._records[idx]
        logger.debug("%s deleted id=%s", self.kind, record_id)
        return True
