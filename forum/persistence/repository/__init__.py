"""PostgreSQL repository implementations."""

from forum.persistence.repository.answer import PostgresAnswerRepository
from forum.persistence.repository.question import PostgresQuestionRepository
from forum.persistence.repository.tag import PostgresTagRepository
from forum.persistence.repository.user import PostgresUserRepository
from forum.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresQuestionRepository",
    "PostgresAnswerRepository",
    "PostgresTagRepository",
    "PostgresVoteRepository",
]
