"""Item service — business logic for the task list.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the credential store.

Update and delete are lookup-then-act with no version check. If two
requests race, the last write wins; a delete that lands between
another request's lookup and its write leaves that write a no-op.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from todogate.db.models import Item
from todogate.db.store import CredentialStore


class ItemNotFoundError(Exception):
    """Raised when an operation addresses an item id that doesn't exist."""

    def __init__(self, item_id: int):
        super().__init__(f"Item {item_id} not found")
        self.item_id = item_id


class ItemService:
    """CRUD over items. Callers must already be authenticated."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = CredentialStore(db)

    async def list_items(self) -> list[Item]:
        return await self.store.list_items()

    async def get_item(self, item_id: int) -> Item:
        item = await self.store.find_item_by_id(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    async def create_item(self, name: Optional[str], is_complete: bool = False) -> Item:
        """Persist a new item. The store assigns a fresh id."""
        return await self.store.insert_item(Item(name=name, is_complete=is_complete))

    async def update_item(
        self, item_id: int, name: Optional[str], is_complete: bool
    ) -> Item:
        """Overwrite name and is_complete. The id never changes."""
        item = await self.get_item(item_id)
        item.name = name
        item.is_complete = is_complete
        await self.store.update_item(item)
        return item

    async def delete_item(self, item_id: int) -> None:
        item = await self.get_item(item_id)
        await self.store.delete_item(item)
