"""PostgreSQL implementation of Answer repository."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Answer
from forum.domain.repository import AnswerRepository
from forum.domain.value import AnswerId, QuestionId
from forum.persistence.mappers import answer_to_dict, row_to_answer
from forum.persistence.tables import answers_table


class PostgresAnswerRepository(AnswerRepository):
    """PostgreSQL implementation of AnswerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, answer_id: AnswerId) -> Optional[Answer]:
        """Find an answer by ID."""
        stmt = select(answers_table).where(answers_table.c.id == answer_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_answer(row._asdict()) if row else None

    async def find_for_question(
        self, answer_id: AnswerId, question_id: QuestionId
    ) -> Optional[Answer]:
        """Find an answer only if it belongs to the given question."""
        stmt = select(answers_table).where(
            answers_table.c.id == answer_id,
            answers_table.c.question_id == question_id,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_answer(row._asdict()) if row else None

    async def exists(self, answer_id: AnswerId) -> bool:
        """Check whether an answer exists."""
        stmt = select(answers_table.c.id).where(answers_table.c.id == answer_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_by_question(self, question_id: QuestionId) -> List[Answer]:
        """Find all answers to a question, newest first."""
        stmt = (
            select(answers_table)
            .where(answers_table.c.question_id == question_id)
            .order_by(desc(answers_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_answer(row._asdict()) for row in result.fetchall()]

    async def count_by_questions(
        self, question_ids: Sequence[QuestionId]
    ) -> dict[QuestionId, int]:
        """Count answers per question (one grouped query)."""
        if not question_ids:
            return {}

        stmt = (
            select(answers_table.c.question_id, func.count().label("answer_count"))
            .where(answers_table.c.question_id.in_(question_ids))
            .group_by(answers_table.c.question_id)
        )
        result = await self.session.execute(stmt)
        return {
            QuestionId(row.question_id): row.answer_count for row in result.fetchall()
        }

    async def save(self, answer: Answer) -> Answer:
        """Save an answer (create or update)."""
        answer_dict = answer_to_dict(answer)

        if await self.exists(answer.id):
            stmt = (
                update(answers_table)
                .where(answers_table.c.id == answer.id)
                .values(**answer_dict)
            )
        else:
            stmt = insert(answers_table).values(**answer_dict)

        await self.session.execute(stmt)
        await self.session.flush()
        return answer

    async def delete(self, answer_id: AnswerId) -> None:
        """Delete an answer."""
        stmt = delete(answers_table).where(answers_table.c.id == answer_id)
        await self.session.execute(stmt)
        await self.session.flush()
