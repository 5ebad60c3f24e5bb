"""Answer entity."""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import AnswerId, QuestionId, UserId
from forum.domain.value.types import Handle


class Answer(DomainModel):
    """Answer to a question; a votable target like the question itself."""

    id: AnswerId
    question_id: QuestionId
    author_id: UserId
    author_handle: Handle
    content: str = Field(min_length=10, max_length=30000)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
