"""PostgreSQL implementation of Tag repository."""

from typing import Optional

from sqlalchemy import desc, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model.tag import Tag, TagUsage
from forum.domain.repository.tag import TagRepository
from forum.domain.value import TagName
from forum.persistence.mappers import row_to_tag
from forum.persistence.tables import question_tags_table, tags_table


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def save(self, tag: Tag) -> Tag:
        """Insert a tag, keeping any existing tag with the same name."""
        stmt = (
            insert(tags_table)
            .values(id=tag.id, name=tag.name.root, created_at=tag.created_at)
            .on_conflict_do_nothing(index_elements=["name"])
        )
        await self.session.execute(stmt)
        await self.session.flush()

        stored = await self._find_by_name(tag.name)
        return stored or tag

    async def _find_by_name(self, name: TagName) -> Optional[Tag]:
        stmt = select(tags_table).where(tags_table.c.name == name.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tag(row._asdict()) if row else None

    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        """Find multiple tags by names in a single query."""
        if not names:
            return []

        stmt = select(tags_table).where(
            tags_table.c.name.in_([name.root for name in names])
        )
        result = await self.session.execute(stmt)
        rows = result.fetchall()
        return [row_to_tag(row._asdict()) for row in rows]

    async def find_usage(self, limit: int | None = None) -> list[TagUsage]:
        """List tags with question counts, most used first (ties by name)."""
        question_count = func.count(question_tags_table.c.question_id).label(
            "question_count"
        )
        stmt = (
            select(tags_table, question_count)
            .select_from(tags_table)
            .outerjoin(
                question_tags_table, question_tags_table.c.tag_id == tags_table.c.id
            )
            .group_by(tags_table.c.id)
            .order_by(desc(question_count), tags_table.c.name)
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        usage = []
        for row in result.fetchall():
            data = row._asdict()
            usage.append(
                TagUsage(tag=row_to_tag(data), question_count=data["question_count"])
            )
        return usage
