"""Question aggregate root.

Questions are votable targets. Their vote count is never stored here;
it is projected from the vote ledger on every read.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import AnswerId, QuestionId, TagName, UserId
from forum.domain.value.types import Handle


class Question(DomainModel):
    """Question aggregate root.

    Business rules:
    - 1-5 tags
    - At most one accepted answer, chosen by the author only
    """

    id: QuestionId
    title: str = Field(min_length=10, max_length=200)
    description: str = Field(min_length=20, max_length=30000)
    author_id: UserId
    author_handle: Handle
    tag_names: list[TagName] = Field(min_length=1, max_length=5)
    accepted_answer_id: Optional[AnswerId] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
