"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import ColumnElement, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import User
from forum.domain.repository import UserRepository
from forum.domain.value import UserId
from forum.domain.value.types import Handle
from forum.persistence.mappers import row_to_user, user_to_dict
from forum.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _find_one(self, condition: ColumnElement[bool]) -> Optional[User]:
        result = await self.session.execute(select(users_table).where(condition))
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        """Find a user by their (unique) handle."""
        return await self._find_one(users_table.c.handle == handle.root)

    async def save(self, user: User) -> User:
        """Insert a user, or overwrite the row with the same ID.

        ``created_at`` is kept from the original insert.
        """
        values = user_to_dict(user)
        stmt = pg_insert(users_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[users_table.c.id],
            set_={k: v for k, v in values.items() if k not in ("id", "created_at")},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user
