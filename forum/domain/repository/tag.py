"""Tag repository interface."""

from abc import ABC, abstractmethod

from forum.domain.model.tag import Tag, TagUsage
from forum.domain.value import TagName


class TagRepository(ABC):
    """Repository interface for Tag aggregate."""

    @abstractmethod
    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        """Find multiple tags by names in a single query.

        Args:
            names: List of tag names

        Returns:
            Found tags (may be fewer than requested if some don't exist)
        """
        pass

    @abstractmethod
    async def save(self, tag: Tag) -> Tag:
        """Insert a tag; an existing tag with the same name is kept.

        Args:
            tag: Tag to insert

        Returns:
            The stored tag with that name
        """
        pass

    @abstractmethod
    async def find_usage(self, limit: int | None = None) -> list[TagUsage]:
        """List tags with their question counts, most used first.

        Args:
            limit: Maximum number of tags to return (None for all)

        Returns:
            Tags with usage counts
        """
        pass
