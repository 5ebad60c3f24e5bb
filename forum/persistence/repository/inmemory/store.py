"""Shared backing store for the in-memory repositories."""

from dataclasses import dataclass, field
from uuid import UUID

from forum.domain.model import Answer, Question, Tag, User, Vote
from forum.domain.value import AnswerId, QuestionId, UserId


@dataclass
class InMemoryStore:
    """Process-local tables shared by every in-memory repository.

    One store backs all repositories of a container so that cross-table
    reads (tag usage, answer counts, target existence) see the same data
    across requests.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    questions: dict[QuestionId, Question] = field(default_factory=dict)
    answers: dict[AnswerId, Answer] = field(default_factory=dict)
    tags: dict[str, Tag] = field(default_factory=dict)  # keyed by name
    votes: dict[UUID, Vote] = field(default_factory=dict)  # keyed by vote ID

    def clear(self) -> None:
        self.users.clear()
        self.questions.clear()
        self.answers.clear()
        self.tags.clear()
        self.votes.clear()
