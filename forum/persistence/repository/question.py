"""PostgreSQL implementation of Question repository."""

from collections import defaultdict
from datetime import datetime
from typing import List, Optional
from uuid import UUID

import logfire
from sqlalchemy import delete, desc, exists, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Question
from forum.domain.repository.question import QuestionRepository, QuestionSortOrder
from forum.domain.value import AnswerId, QuestionId, TagName
from forum.persistence.mappers import question_to_dict, row_to_question
from forum.persistence.tables import (
    answers_table,
    question_tags_table,
    questions_table,
    tags_table,
)


class PostgresQuestionRepository(QuestionRepository):
    """PostgreSQL implementation of QuestionRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_tags_for_questions(
        self, question_ids: list[UUID]
    ) -> dict[UUID, list[str]]:
        """Fetch tags for multiple questions in a single query.

        Args:
            question_ids: List of question IDs

        Returns:
            Dict mapping question_id -> list of tag names
        """
        if not question_ids:
            return {}

        stmt = (
            select(question_tags_table.c.question_id, tags_table.c.name)
            .select_from(question_tags_table)
            .join(tags_table, question_tags_table.c.tag_id == tags_table.c.id)
            .where(question_tags_table.c.question_id.in_(question_ids))
            .order_by(tags_table.c.name)
        )
        result = await self.session.execute(stmt)

        question_tag_map: dict[UUID, list[str]] = defaultdict(list)
        for row in result.fetchall():
            question_tag_map[row.question_id].append(row.name)

        return question_tag_map

    async def _to_questions(self, rows) -> List[Question]:
        question_tag_map = await self._fetch_tags_for_questions([row.id for row in rows])
        return [
            row_to_question(row._asdict(), tag_names=question_tag_map.get(row.id, []))
            for row in rows
        ]

    @staticmethod
    def _apply_filters(stmt, search: Optional[str], tags: Optional[list[TagName]]):
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    questions_table.c.title.ilike(pattern),
                    questions_table.c.description.ilike(pattern),
                )
            )
        if tags:
            tagged = (
                select(question_tags_table.c.question_id)
                .join(tags_table, question_tags_table.c.tag_id == tags_table.c.id)
                .where(
                    question_tags_table.c.question_id == questions_table.c.id,
                    tags_table.c.name.in_([tag.root for tag in tags]),
                )
            )
            stmt = stmt.where(exists(tagged))
        return stmt

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Find a question by ID."""
        with logfire.span("question_repository.find_by_id", question_id=str(question_id)):
            stmt = select(questions_table).where(questions_table.c.id == question_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                return None

            questions = await self._to_questions([row])
            return questions[0]

    async def exists(self, question_id: QuestionId) -> bool:
        """Check whether a question exists."""
        stmt = select(questions_table.c.id).where(questions_table.c.id == question_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_all(
        self,
        sort: QuestionSortOrder = QuestionSortOrder.NEWEST,
        search: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Question]:
        """Find questions with filtering and pagination."""
        with logfire.span(
            "question_repository.find_all",
            sort=sort.value,
            search=search,
            limit=limit,
            offset=offset,
        ):
            stmt = self._apply_filters(select(questions_table), search, tags)

            if sort == QuestionSortOrder.OLDEST:
                stmt = stmt.order_by(questions_table.c.created_at)
            elif sort == QuestionSortOrder.UPDATED:
                stmt = stmt.order_by(desc(questions_table.c.updated_at))
            else:
                stmt = stmt.order_by(desc(questions_table.c.created_at))

            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            rows = result.fetchall()

            if not rows:
                logfire.info("No questions found")
                return []

            questions = await self._to_questions(rows)
            logfire.info("Found questions", count=len(questions))
            return questions

    async def count(
        self,
        search: Optional[str] = None,
        tags: Optional[list[TagName]] = None,
    ) -> int:
        """Count questions matching the given filters."""
        stmt = self._apply_filters(
            select(func.count()).select_from(questions_table), search, tags
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, question: Question) -> Question:
        """Save a question (create or update) together with its tag links."""
        with logfire.span(
            "question_repository.save",
            question_id=str(question.id),
            tags=[t.root for t in question.tag_names],
        ):
            question_dict = question_to_dict(question)

            if await self.exists(question.id):
                stmt = (
                    update(questions_table)
                    .where(questions_table.c.id == question.id)
                    .values(**question_dict)
                )
                await self.session.execute(stmt)
                await self.session.execute(
                    delete(question_tags_table).where(
                        question_tags_table.c.question_id == question.id
                    )
                )
            else:
                await self.session.execute(insert(questions_table).values(**question_dict))

            tag_lookup_stmt = select(tags_table.c.id, tags_table.c.name).where(
                tags_table.c.name.in_([tag.root for tag in question.tag_names])
            )
            tag_result = await self.session.execute(tag_lookup_stmt)
            tag_id_map = {row.name: row.id for row in tag_result.fetchall()}

            for tag_name in question.tag_names:
                tag_id = tag_id_map.get(tag_name.root)
                if tag_id:
                    await self.session.execute(
                        insert(question_tags_table).values(
                            question_id=question.id, tag_id=tag_id
                        )
                    )

            await self.session.flush()
            return question

    async def delete(self, question_id: QuestionId) -> None:
        """Delete a question; answers and tag links cascade."""
        # Clear the slot before its answer rows go
        await self.session.execute(
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(accepted_answer_id=None)
        )
        await self.session.execute(
            delete(answers_table).where(answers_table.c.question_id == question_id)
        )
        await self.session.execute(
            delete(questions_table).where(questions_table.c.id == question_id)
        )
        await self.session.flush()

    async def set_accepted_answer(
        self, question_id: QuestionId, answer_id: Optional[AnswerId]
    ) -> Optional[Question]:
        """Point update of the accepted-answer slot."""
        stmt = (
            update(questions_table)
            .where(questions_table.c.id == question_id)
            .values(accepted_answer_id=answer_id, updated_at=datetime.now())
            .returning(questions_table.c.id)
        )
        result = await self.session.execute(stmt)
        if result.fetchone() is None:
            return None
        await self.session.flush()
        return await self.find_by_id(question_id)
