# src/cleannest/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..auth.session import AuthSession
    from ..config import Settings
    from ..lists.items import ItemCollection
    from ..lists.tasks import TaskCollection


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Settings

    auth: AuthSession
    tasks: TaskCollection
    items: ItemCollection

    def close(self) -> None:
        """Tear down the collections, then the session scope."""
        self.tasks.close()
        self.items.close()
        self.auth.close()
