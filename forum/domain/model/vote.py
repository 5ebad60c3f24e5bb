"""Vote entity and its read-time projection.

A Vote is one user's current stance on one question or answer.
Business rules:
- One vote per user per target (enforced by database unique constraint)
- Value is +1 or -1; there is no recorded neutral state
- Polymorphic reference to the target (question or answer)
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import UserId, VotableType, VoteId, VoteValue
from forum.domain.value.common import ValueObject


class Vote(DomainModel):
    """Vote entity."""

    id: VoteId
    user_id: UserId
    votable_type: VotableType
    votable_id: UUID  # QuestionId or AnswerId (both are UUIDs)
    value: VoteValue
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class VoteProjection(ValueObject):
    """Aggregate vote state of one target as seen by one caller.

    ``caller_vote`` is None when the caller has not voted or is anonymous.
    """

    vote_count: int = 0
    caller_vote: Optional[VoteValue] = None

    @classmethod
    def empty(cls) -> "VoteProjection":
        return cls(vote_count=0, caller_vote=None)
