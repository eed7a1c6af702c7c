"""Credential store — the persistence boundary for users and items.

Learn: This is the only module that talks to the database. Services
call these methods and never build queries themselves, so swapping the
storage engine means rewriting this file and nothing else.

Each mutating call commits on its own. There is no enclosing
transaction across calls: a lookup followed by an update is two
round-trips, and a concurrent delete in between is not detected.
Storage errors (connection refused, timeouts) are not caught here.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from todogate.db.models import Item, User


class DuplicateUserError(Exception):
    """Raised when inserting a user whose name is already taken."""

    def __init__(self, name: str):
        super().__init__(f"User {name!r} already exists")
        self.name = name


class CredentialStore:
    """User and item persistence over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Users ──────────────────────────────────────────

    async def find_user_by_name(self, name: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.name == name))
        return result.scalars().first()

    async def insert_user(self, user: User) -> User:
        """Insert a user, relying on the UNIQUE(name) constraint.

        Raises DuplicateUserError if the name is taken, including when
        a concurrent registration won the race.
        """
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateUserError(user.name)
        await self.db.refresh(user)
        return user

    # ─── Items ──────────────────────────────────────────

    async def find_item_by_id(self, item_id: int) -> Optional[Item]:
        return await self.db.get(Item, item_id)

    async def insert_item(self, item: Item) -> Item:
        # The store assigns the id
        item.id = None
        self.db.add(item)
        await self.db.commit()
        await self.db.refresh(item)
        return item

    async def update_item(self, item: Item) -> None:
        self.db.add(item)
        await self.db.commit()

    async def delete_item(self, item: Item) -> None:
        await self.db.delete(item)
        await self.db.commit()

    async def list_items(self) -> list[Item]:
        result = await self.db.execute(select(Item).order_by(Item.id))
        return list(result.scalars().all())
