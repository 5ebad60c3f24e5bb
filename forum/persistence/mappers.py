"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from forum.domain.model import Answer, Question, Tag, User, Vote
from forum.domain.value import (
    AnswerId,
    QuestionId,
    TagId,
    TagName,
    UserId,
    UserRole,
    VotableType,
    VoteId,
    VoteValue,
)
from forum.domain.value.types import Handle


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        handle=Handle(row["handle"]),
        email=row.get("email"),
        avatar_url=row.get("avatar_url"),
        bio=row.get("bio"),
        role=UserRole(row["role"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "handle": user.handle.root,
        "email": user.email,
        "avatar_url": user.avatar_url,
        "bio": user.bio,
        "role": user.role.value,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_question(row: Dict[str, Any], tag_names: list[str]) -> Question:
    """Convert database row to Question domain model.

    Args:
        row: Database row as dict
        tag_names: Names of the question's tags (from question_tags)

    Returns:
        Question domain model
    """
    accepted = _optional_uuid(row.get("accepted_answer_id"))
    return Question(
        id=QuestionId(_uuid(row["id"])),
        title=row["title"],
        description=row["description"],
        author_id=UserId(_uuid(row["author_id"])),
        author_handle=Handle(row["author_handle"]),
        tag_names=[TagName(name) for name in tag_names],
        accepted_answer_id=AnswerId(accepted) if accepted else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def question_to_dict(question: Question) -> Dict[str, Any]:
    """Convert Question domain model to a questions-table dict (tags excluded).

    Args:
        question: Question domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": question.id,
        "title": question.title,
        "description": question.description,
        "author_id": question.author_id,
        "author_handle": question.author_handle.root,
        "accepted_answer_id": question.accepted_answer_id,
        "created_at": question.created_at,
        "updated_at": question.updated_at,
    }


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer domain model."""
    return Answer(
        id=AnswerId(_uuid(row["id"])),
        question_id=QuestionId(_uuid(row["question_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        author_handle=Handle(row["author_handle"]),
        content=row["content"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert Answer domain model to database dict."""
    return {
        "id": answer.id,
        "question_id": answer.question_id,
        "author_id": answer.author_id,
        "author_handle": answer.author_handle.root,
        "content": answer.content,
        "created_at": answer.created_at,
        "updated_at": answer.updated_at,
    }


def row_to_tag(row: Dict[str, Any]) -> Tag:
    """Convert database row to Tag domain model."""
    return Tag(
        id=TagId(_uuid(row["id"])),
        name=TagName(row["name"]),
        created_at=row["created_at"],
    )


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "value": int(vote.value),
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }
