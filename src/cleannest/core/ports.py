# src/cleannest/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The managers depend on these small callables instead of asyncio.sleep / datetime.now
directly, so tests can run with zero latency and a controlled clock.
"""

from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Protocol

from .models import User

Sleeper = Callable[[float], Awaitable[None]]
# Suspends the caller for the given number of seconds (asyncio.sleep by default).

Clock = Callable[[], datetime]
# Returns the current time as an aware UTC datetime.

UserListener = Callable[[User | None], None]
# Called synchronously with the new active user (or None) after every change.


class UserSource(Protocol):
    """What a collection manager needs from the auth session."""

    @property
    def user(self) -> User | None: ...

    @property
    def is_open(self) -> bool: ...

    def subscribe(self, listener: UserListener) -> Callable[[], None]: ...
