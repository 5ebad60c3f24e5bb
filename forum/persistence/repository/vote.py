"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

import logfire
from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import ConflictError
from forum.domain.model import Vote
from forum.domain.repository import VoteRepository
from forum.domain.value import UserId, VotableType, VoteId, VoteValue
from forum.persistence.mappers import row_to_vote, vote_to_dict
from forum.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    Writes run inside a SAVEPOINT so that a unique-constraint violation
    rolls back only the failed statement, leaving the request transaction
    usable for a retry.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_votable(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_id: UUID,
    ) -> Optional[Vote]:
        """Find a user's vote on a specific item."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_votables(
        self,
        user_id: UserId,
        votable_type: VotableType,
        votable_ids: Sequence[UUID],
    ) -> List[Vote]:
        """Find a user's votes on multiple items (batch query)."""
        if not votable_ids:
            return []

        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id.in_(votable_ids),
            )
        )
        result = await self.session.execute(stmt)
        rows = result.fetchall()
        return [row_to_vote(row._asdict()) for row in rows]

    async def save(self, vote: Vote) -> Vote:
        """Insert a vote; a duplicate (user, votable) raises ConflictError."""
        vote_dict = vote_to_dict(vote)
        stmt = insert(votes_table).values(**vote_dict)
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            if "unique_vote" not in str(e.orig):
                raise
            logfire.warn(
                "Vote insert hit unique constraint",
                user_id=str(vote.user_id),
                votable_id=str(vote.votable_id),
            )
            raise ConflictError("Vote already exists for this user and target") from e
        return vote

    async def update_value(self, vote_id: VoteId, value: VoteValue) -> Optional[Vote]:
        """Change a vote's value in place."""
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote_id)
            .values(value=int(value), updated_at=datetime.now())
            .returning(votes_table)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def sum_by_votable(self, votable_type: VotableType, votable_id: UUID) -> int:
        """Sum vote values for one item."""
        stmt = select(func.coalesce(func.sum(votes_table.c.value), 0)).where(
            and_(
                votes_table.c.votable_type == votable_type.value,
                votes_table.c.votable_id == votable_id,
            )
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def sum_by_votables(
        self, votable_type: VotableType, votable_ids: Sequence[UUID]
    ) -> dict[UUID, int]:
        """Sum vote values per item (one grouped query)."""
        if not votable_ids:
            return {}

        stmt = (
            select(
                votes_table.c.votable_id,
                func.coalesce(func.sum(votes_table.c.value), 0).label("total"),
            )
            .where(
                and_(
                    votes_table.c.votable_type == votable_type.value,
                    votes_table.c.votable_id.in_(votable_ids),
                )
            )
            .group_by(votes_table.c.votable_id)
        )
        result = await self.session.execute(stmt)
        return {row.votable_id: int(row.total) for row in result.fetchall()}
