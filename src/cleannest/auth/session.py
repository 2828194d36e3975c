# src/cleannest/auth/session.py

"""
Mock auth session.

There is no credential store: sign-in always resolves to the demo identity and
sign-up always succeeds with a fresh id. The session is a scoped object
(open/close or `async with`); touching it outside the scope is a programming
error and raises SessionScopeError.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable

from ..config import Delays
from ..core.errors import SessionScopeError
from ..core.models import User
from ..core.ports import Sleeper, UserListener
from ..lists.seed import demo_user

logger = logging.getLogger(__name__)


class AuthSession:
    def __init__(
        self,
        *,
        delays: Delays | None = None,
        sleep: Sleeper = asyncio.sleep,
        demo: User | None = None,
    ) -> None:
        self._delays = delays or Delays()
        self._sleep = sleep
        self._demo = demo or demo_user()
        self._user: User | None = None
        self._loading = False
        self._open = False
        self._listeners: list[UserListener] = []

    # ---- scope ----

    def open(self) -> AuthSession:
        self._open = True
        logger.debug("Auth session opened")
        return self

    def close(self) -> None:
        if not self._open:
            return
        self._set_user(None)
        self._open = False
        self._listeners.clear()
        logger.debug("Auth session closed")

    @property
    def is_open(self) -> bool:
        return self._open

    async def __aenter__(self) -> AuthSession:
        return self.open()

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    def _require_open(self) -> None:
        if not self._open:
            raise SessionScopeError("AuthSession must be used within an open session scope")

    # ---- state ----

    @property
    def user(self) -> User | None:
        self._require_open()
        return self._user

    @property
    def loading(self) -> bool:
        self._require_open()
        return self._loading

    def subscribe(self, listener: UserListener) -> Callable[[], None]:
        """Register a user-change listener. Returns an unsubscribe callable."""
        self._require_open()
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_user(self, user: User | None) -> None:
        if user == self._user:
            return
        self._user = user
        for listener in list(self._listeners):
            try:
                listener(user)
            except Exception:
                logger.exception("User listener failed")

    # ---- operations ----

    async def sign_up(self, email: str, password: str) -> User:
        self._require_open()
        await self._sleep(self._delays.auth)
        self._require_open()

        user = User(id=f"new-user-{uuid.uuid4().hex}", email=email)
        logger.debug("Mock sign-up email=%s password_len=%d", email, len(password or ""))
        self._set_user(user)
        logger.info("Signed up user id=%s", user.id)
        return user

    async def sign_in(self, email: str, password: str) -> User:
        """Credentials are ignored; the demo identity is always returned."""
        self._require_open()
        await self._sleep(self._delays.auth)
        self._require_open()

        logger.debug("Mock sign-in email=%s password_len=%d", email, len(password or ""))
        self._set_user(self._demo)
        logger.info("Signed in as %s", self._demo.email)
        return self._demo

    async def sign_out(self) -> None:
        self._require_open()
        await self._sleep(self._delays.sign_out)
        self._require_open()

        previous = self._user
        self._set_user(None)
        if previous is not None:
            logger.info("Signed out %s", previous.email)
