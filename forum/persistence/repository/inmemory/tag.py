"""In-memory tag repository for testing."""

from forum.domain.model.tag import Tag, TagUsage
from forum.domain.repository.tag import TagRepository
from forum.domain.value import TagName

from .store import InMemoryStore


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_names(self, names: list[TagName]) -> list[Tag]:
        """Find multiple tags by names."""
        return [
            self._store.tags[name.root] for name in names if name.root in self._store.tags
        ]

    async def save(self, tag: Tag) -> Tag:
        """Insert a tag unless one with the same name exists."""
        return self._store.tags.setdefault(tag.name.root, tag)

    async def find_usage(self, limit: int | None = None) -> list[TagUsage]:
        """List tags with question counts, most used first (ties by name)."""
        counts = {name: 0 for name in self._store.tags}
        for question in self._store.questions.values():
            for tag_name in question.tag_names:
                if tag_name.root in counts:
                    counts[tag_name.root] += 1

        usage = [
            TagUsage(tag=self._store.tags[name], question_count=count)
            for name, count in counts.items()
        ]
        usage.sort(key=lambda u: (-u.question_count, u.tag.name.root))
        return usage[:limit] if limit is not None else usage
