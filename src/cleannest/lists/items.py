# src/cleannest/lists/items.py

from __future__ import annotations

import logging

from ..core.models import (
    GroceryItem,
    ItemPatch,
    clean_optional_text,
    clean_quantity,
    clean_required_text,
)
from .collection import CollectionManager
from .seed import DEMO_USER_ID, seed_items

logger = logging.getLogger(__name__)


class ItemCollection(CollectionManager[GroceryItem, ItemPatch]):
    """The signed-in user's shopping list."""

    kind = "item"
    id_prefix = "item"

    def _seed(self) -> list[GroceryItem]:
        return seed_items(self._seed_owner_id or DEMO_USER_ID)

    @property
    def items(self) -> tuple[GroceryItem, ...]:
        return self.records

    async def add(
        self,
        *,
        name: str,
        brand: str | None = None,
        quantity: int | None = None,
    ) -> GroceryItem | None:
        user = self._session.user
        if user is None:
            logger.debug("add item ignored: no active user")
            return None

        clean_name = clean_required_text("name", name)
        clean_brand = clean_optional_text("brand", brand)
        clean_qty = 1 if quantity is None else clean_quantity(quantity)

        await self._sleep(self._delays.create)
        if self._user_left(user, "add"):
            return None

        now = self._clock()
        item = GroceryItem(
            id=self._new_id(),
            user_id=user.id,
            name=clean_name,
            brand=clean_brand,
            quantity=clean_qty,
            purchased=False,
            created_at=now,
            updated_at=now,
        )
        self._prepend(item)
        logger.debug("item added id=%s quantity=%d", item.id, item.quantity)
        return item

    async def toggle_purchased(self, item_id: str, purchased: bool) -> bool:
        return await self.update(item_id, ItemPatch(purchased=purchased))
