"""Tag domain service."""

from uuid import uuid4

import logfire

from forum.domain.model.tag import Tag, TagUsage
from forum.domain.repository.tag import TagRepository
from forum.domain.value import TagId, TagName

from .base import Service


class TagService(Service):
    """Domain service for tag operations."""

    def __init__(self, tag_repository: TagRepository) -> None:
        """Initialize tag service.

        Args:
            tag_repository: Tag repository
        """
        self.tag_repository = tag_repository

    async def ensure_tags(self, tag_names: list[TagName]) -> list[Tag]:
        """Make sure every named tag exists, creating missing ones.

        Args:
            tag_names: Normalized tag names

        Returns:
            The tags, one per distinct name
        """
        with logfire.span(
            "tag_service.ensure_tags", tags=[t.root for t in tag_names]
        ):
            existing = await self.tag_repository.find_by_names(tag_names)
            found = {tag.name.root: tag for tag in existing}

            tags: list[Tag] = []
            for name in tag_names:
                if name.root in found:
                    tags.append(found[name.root])
                    continue
                tag = await self.tag_repository.save(Tag(id=TagId(uuid4()), name=name))
                found[name.root] = tag
                tags.append(tag)
                logfire.info("Tag created", tag_name=name.root)

            return tags

    async def list_usage(self, limit: int | None = None) -> list[TagUsage]:
        """Get tags with their question counts, most used first.

        Args:
            limit: Maximum number of tags (None for all)

        Returns:
            Tag usage list
        """
        with logfire.span("tag_service.list_usage", limit=limit):
            usage = await self.tag_repository.find_usage(limit=limit)
            logfire.info("Tags retrieved", count=len(usage))
            return usage
