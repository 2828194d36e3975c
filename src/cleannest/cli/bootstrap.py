# src/cleannest/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- opens the auth session scope,
- wires the task and shopping-list managers to that session.
"""

from __future__ import annotations

import asyncio
import logging

from ..auth.session import AuthSession
from ..config import get_settings
from ..core.models import utc_now
from ..core.ports import Clock, Sleeper
from ..core.state import AppState
from ..lists.items import ItemCollection
from ..lists.seed import demo_user
from ..lists.tasks import TaskCollection

logger = logging.getLogger(__name__)


def create_initial_state(
    *,
    settings=None,
    sleep: Sleeper = asyncio.sleep,
    clock: Clock = utc_now,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    auth = AuthSession(
        delays=settings.delays,
        sleep=sleep,
        demo=demo_user(settings.demo_user_id, settings.demo_user_email),
    ).open()

    common = dict(
        delays=settings.delays,
        sleep=sleep,
        clock=clock,
        strict_ids=settings.strict_ids,
        seed_owner_id=settings.demo_user_id,
    )
    state = AppState(
        settings=settings,
        auth=auth,
        tasks=TaskCollection(auth, **common),
        items=ItemCollection(auth, **common),
    )
    logger.debug("AppState ready (strict_ids=%s delays=%s)", settings.strict_ids, settings.delays)
    return state
