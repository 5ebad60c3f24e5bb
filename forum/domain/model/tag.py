"""Tag entity for categorizing questions."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import TagId, TagName


class Tag(DomainModel):
    """Tag entity.

    Tags are created on demand when a question first uses them.
    """

    id: TagId
    name: TagName
    created_at: datetime = Field(default_factory=datetime.now)


class TagUsage(DomainModel):
    """A tag together with the number of questions carrying it."""

    tag: Tag
    question_count: int = Field(ge=0)
