# tests/test_auth_session.py

from __future__ import annotations

import pytest

from cleannest.auth.session import AuthSession
from cleannest.config import Delays
from cleannest.core.errors import SessionScopeError
from cleannest.core.models import User

from .fakes import RecordingSleeper


def _session(sleeper: RecordingSleeper, delays: Delays | None = None) -> AuthSession:
    return AuthSession(delays=delays or Delays.zero(), sleep=sleeper).open()


@pytest.mark.asyncio
async def test_sign_in_ignores_credentials(sleeper: RecordingSleeper) -> None:
    auth = _session(sleeper)

    first = await auth.sign_in("a@b.com", "x")
    second = await auth.sign_in("c@d.com", "y")

    assert first == second == User(id="mock-user-123", email="demo@cleannest.com")
    assert auth.user == first


@pytest.mark.asyncio
async def test_sign_up_uses_email_and_fresh_id(sleeper: RecordingSleeper) -> None:
    auth = _session(sleeper)

    u1 = await auth.sign_up("me@home.org", "pw")
    u2 = await auth.sign_up("me@home.org", "pw")

    assert u1.email == "me@home.org"
    assert u1.id.startswith("new-user-")
    assert u1.id != u2.id
    assert auth.user == u2


@pytest.mark.asyncio
async def test_sign_out_clears_user(sleeper: RecordingSleeper) -> None:
    auth = _session(sleeper)
    await auth.sign_in("a@b.com", "x")

    await auth.sign_out()

    assert auth.user is None
    assert auth.loading is False


@pytest.mark.asyncio
async def test_default_latencies_are_requested() -> None:
    sleeper = RecordingSleeper()
    auth = AuthSession(sleep=sleeper).open()

    await auth.sign_in("a@b.com", "x")
    await auth.sign_up("a@b.com", "x")
    await auth.sign_out()

    assert sleeper.calls == [1.0, 1.0, 0.5]


@pytest.mark.asyncio
async def test_use_outside_scope_raises(sleeper: RecordingSleeper) -> None:
    auth = AuthSession(delays=Delays.zero(), sleep=sleeper)

    with pytest.raises(SessionScopeError):
        _ = auth.user
    with pytest.raises(SessionScopeError):
        await auth.sign_in("a@b.com", "x")

    auth.open()
    await auth.sign_in("a@b.com", "x")
    auth.close()

    with pytest.raises(SessionScopeError):
        _ = auth.user


@pytest.mark.asyncio
async def test_async_with_scope_clears_user_on_exit(sleeper: RecordingSleeper) -> None:
    seen: list[User | None] = []

    async with AuthSession(delays=Delays.zero(), sleep=sleeper) as auth:
        auth.subscribe(seen.append)
        await auth.sign_in("a@b.com", "x")
        assert auth.is_open

    assert not auth.is_open
    assert seen == [User(id="mock-user-123", email="demo@cleannest.com"), None]


@pytest.mark.asyncio
async def test_listeners_fire_only_on_change(sleeper: RecordingSleeper) -> None:
    auth = _session(sleeper)
    seen: list[User | None] = []
    unsubscribe = auth.subscribe(seen.append)

    await auth.sign_in("a@b.com", "x")
    await auth.sign_in("c@d.com", "y")  # same demo user: no change
    await auth.sign_out()
    unsubscribe()
    await auth.sign_in("a@b.com", "x")

    assert [u.id if u else None for u in seen] == ["mock-user-123", None]


@pytest.mark.asyncio
async def test_failing_listener_does_not_break_sign_in(sleeper: RecordingSleeper) -> None:
    auth = _session(sleeper)

    def boom(_user: User | None) -> None:
        raise RuntimeError("listener failure")

    seen: list[User | None] = []
    auth.subscribe(boom)
    auth.subscribe(seen.append)

    user = await auth.sign_in("a@b.com", "x")

    assert auth.user == user
    assert seen == [user]
