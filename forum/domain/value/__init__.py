"""Domain value objects for the forum."""

from forum.domain.value.identifiers import (
    AnswerId,
    QuestionId,
    TagId,
    UserId,
    VoteId,
)
from forum.domain.value.types import (
    Handle,
    TagName,
    UserRole,
    VotableType,
    VoteOutcome,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "QuestionId",
    "AnswerId",
    "VoteId",
    "TagId",
    # Types
    "TagName",
    "Handle",
    "UserRole",
    "VoteValue",
    "VoteOutcome",
    "VotableType",
]
